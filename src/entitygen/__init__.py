"""
entitygen - persistence-layer source generator.

entitygen turns declarative entity descriptions (attributes, column types,
relationships, constraints) into Python modules: contract protocols, data
holders, SQLAlchemy entities, metamodels, typed orders/predicates and query
helpers.
"""

__version__ = "0.1.0"

from entitygen.codegen.orchestrator import Orchestrator, generate
from entitygen.config import GenerationOptions, load_entity_set, load_options
from entitygen.core.builder import EntitySetBuilder
from entitygen.core.errors import (
    BuilderScopeError,
    ConfigurationError,
    DuplicateNameError,
    EntitygenError,
    InternalGenerationError,
    MissingColumnTypeError,
    MissingIdentifierError,
    UnknownEntityError,
)
from entitygen.core.model import Attribute, Entity, EntitySet

__all__ = [
    # Version
    "__version__",
    # Model
    "Attribute",
    "Entity",
    "EntitySet",
    "EntitySetBuilder",
    # Generation
    "GenerationOptions",
    "Orchestrator",
    "generate",
    "load_entity_set",
    "load_options",
    # Errors
    "EntitygenError",
    "ConfigurationError",
    "MissingColumnTypeError",
    "UnknownEntityError",
    "MissingIdentifierError",
    "DuplicateNameError",
    "BuilderScopeError",
    "InternalGenerationError",
]
