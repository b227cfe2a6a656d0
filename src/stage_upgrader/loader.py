"""Loading of YAML-based upgrade definitions.

This module parses upgrade definitions from YAML files and turns them into
upgraders that run each step's operations against the working config list.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from stage_upgrader.config import Config
from stage_upgrader.errors import StepError
from stage_upgrader.models import UpgradeDefinition, UpgradeStep
from stage_upgrader.operations import execute_operation
from stage_upgrader.upgrader import Step, VersionedStageUpgrader

logger = logging.getLogger(__name__)

DEFINITION_SUFFIXES = (".yaml", ".yml")


class DefinitionError(Exception):
    """Raised when an upgrade definition file cannot be loaded."""


def load_definition(path: Path) -> UpgradeDefinition:
    """Load a single upgrade definition from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        The validated definition.

    Raises:
        DefinitionError: If the file cannot be read, parsed, or validated.
    """
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise DefinitionError(f"Failed to read {path}: {e}") from e

    if not isinstance(data, dict):
        raise DefinitionError(f"{path} does not contain a mapping")

    try:
        return UpgradeDefinition.model_validate(data)
    except ValidationError as e:
        raise DefinitionError(f"Invalid definition in {path}: {e}") from e


def load_definitions(directory: Path) -> list[UpgradeDefinition]:
    """Load all upgrade definitions from a directory.

    Files that fail to load are logged and skipped, leaving their stage
    type without an upgrader. A missing directory holds no definitions.

    Args:
        directory: Directory containing definition YAML files.

    Returns:
        Definitions in file name order.
    """
    definitions: list[UpgradeDefinition] = []

    for path in sorted(directory.glob("*")):
        if path.suffix not in DEFINITION_SUFFIXES or not path.is_file():
            continue

        try:
            definitions.append(load_definition(path))
        except DefinitionError as e:
            logger.warning(f"Skipping upgrade definition: {e}")
            continue

    return definitions


def build_step(step: UpgradeStep) -> Step:
    """Turn a declarative step into a callable single-version transform."""

    def apply(configs: list[Config]) -> list[Config]:
        for i, op in enumerate(step.operations, 1):
            result = execute_operation(op, configs)
            if not result.success:
                raise StepError(
                    f"Operation {i}/{len(step.operations)} ({op.type.value}) of step "
                    f"v{step.from_version} -> v{step.to_version} failed: {result.message}"
                )
            status = "[SKIPPED]" if result.skipped else "[OK]"
            logger.debug(f"  {status} {result.message}")
        return configs

    return apply


class DeclarativeStageUpgrader(VersionedStageUpgrader):
    """Upgrader whose steps come from an UpgradeDefinition.

    Example:
        ```python
        definition = load_definition(Path("upgraders/jdbc-source.yaml"))
        upgrader = DeclarativeStageUpgrader(definition)
        upgrader.upgrade(definition.library, definition.stage, "source1", 1, 3, configs)
        ```
    """

    def __init__(self, definition: UpgradeDefinition) -> None:
        self.definition = definition
        super().__init__({step.from_version: build_step(step) for step in definition.steps})

    @classmethod
    def from_file(cls, path: Path) -> "DeclarativeStageUpgrader":
        return cls(load_definition(path))
