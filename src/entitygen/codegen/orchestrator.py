"""
Generation orchestrator.

Runs the artifact generators over every entity in declared order:
contract, data holder, then (unless data-only) metamodel, persisted entity,
orders/predicates and extension.
"""

import time
import uuid
from collections.abc import Iterator
from pathlib import Path

from entitygen.codegen.contract import ContractGenerator
from entitygen.codegen.data import DataGenerator
from entitygen.codegen.entity import EntityGenerator
from entitygen.codegen.extension import ExtensionGenerator
from entitygen.codegen.generator import CodeGenerator, GeneratedFile, GenerationResult
from entitygen.codegen.metamodel import MetamodelGenerator
from entitygen.codegen.predicates import OrdersPredicatesGenerator
from entitygen.config import GenerationOptions
from entitygen.core.errors import EntitygenError
from entitygen.core.model import Entity, EntitySet
from entitygen.logging import get_logger, with_log_context

logger = get_logger(__name__)


class Orchestrator:
    """
    Drives a generation run.

    Example:
        orchestrator = Orchestrator(entities, GenerationOptions())
        result = orchestrator.run("build/generated")
    """

    def __init__(self, entities: EntitySet, options: GenerationOptions | None = None) -> None:
        self.entities = entities
        self.options = options or GenerationOptions()
        self.data_generators: list[CodeGenerator] = [
            ContractGenerator(entities, self.options),
            DataGenerator(entities, self.options),
        ]
        self.model_generators: list[CodeGenerator] = [
            MetamodelGenerator(entities, self.options),
            EntityGenerator(entities, self.options),
            OrdersPredicatesGenerator(entities, self.options),
            ExtensionGenerator(entities, self.options),
        ]

    def generators(self) -> list[CodeGenerator]:
        """Generators applied to each entity, in emission order."""
        if self.options.generate_only_data:
            return list(self.data_generators)
        return self.data_generators + self.model_generators

    def render_entity(self, entity: Entity) -> list[GeneratedFile]:
        """
        Render every artifact of one entity.

        Nothing is returned unless all artifacts rendered, so a failing
        entity never yields partial output.
        """
        files = []
        for generator in self.generators():
            with with_log_context(artifact=generator.artifact):
                files.append(generator.generate_for(entity))
        return files

    def _scheduled_entities(self) -> Iterator[Entity]:
        for index, entity in enumerate(self.entities.entities):
            if index > 0 and self.options.generate_only_data and self.options.only_data_stops_run:
                logger.info(
                    "Data-only run stops after the first entity",
                    skipped=len(self.entities) - index,
                )
                return
            yield entity

    def generate(self) -> GenerationResult:
        """Render all artifacts in memory without writing them."""
        return self._run(None)

    def run(self, output_root: Path | str) -> GenerationResult:
        """
        Render and write all artifacts under ``output_root``.

        Each entity's files are written once all of them rendered. When an
        entity fails, files of the entities before it stay on disk.

        Raises:
            ConfigurationError: If the declarations are defective
        """
        return self._run(Path(output_root))

    def _run(self, output_root: Path | None) -> GenerationResult:
        result = GenerationResult()
        start = time.perf_counter()

        with with_log_context(run_id=uuid.uuid4().hex[:12]):
            logger.info(
                "Generation started",
                entities=len(self.entities),
                only_data=self.options.generate_only_data,
            )
            for entity in self._scheduled_entities():
                with with_log_context(entity=entity.name):
                    try:
                        files = self.render_entity(entity)
                    except EntitygenError as e:
                        logger.error("Generation failed", code=e.code, error=e.message)
                        raise

                    if output_root is not None:
                        GenerationResult(files=files).write_all(output_root)
                        for gf in files:
                            logger.debug("Wrote artifact", path=gf.path)
                    result.files.extend(files)

            logger.info(
                "Generation finished",
                files=len(result.files),
                duration_ms=(time.perf_counter() - start) * 1000,
            )

        return result


def generate(
    entities: EntitySet,
    output_root: Path | str,
    options: GenerationOptions | None = None,
) -> GenerationResult:
    """Generate and write all artifacts of an entity set."""
    return Orchestrator(entities, options).run(output_root)
