"""
Artifact generators and the orchestrator driving them.
"""

from entitygen.codegen.contract import ContractGenerator
from entitygen.codegen.data import DataGenerator
from entitygen.codegen.entity import EntityGenerator
from entitygen.codegen.extension import ExtensionGenerator
from entitygen.codegen.generator import (
    CodeGenerator,
    GeneratedFile,
    GenerationResult,
    Imports,
)
from entitygen.codegen.metamodel import MetamodelGenerator
from entitygen.codegen.orchestrator import Orchestrator, generate
from entitygen.codegen.predicates import OPERATORS, OrdersPredicatesGenerator

__all__ = [
    # Base
    "CodeGenerator",
    "GeneratedFile",
    "GenerationResult",
    "Imports",
    # Generators
    "ContractGenerator",
    "DataGenerator",
    "MetamodelGenerator",
    "EntityGenerator",
    "OrdersPredicatesGenerator",
    "ExtensionGenerator",
    "OPERATORS",
    # Orchestration
    "Orchestrator",
    "generate",
]
