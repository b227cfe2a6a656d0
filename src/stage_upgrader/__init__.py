"""Versioned configuration upgrades for pipeline stages.

A stage declares how to bring its persisted configuration from any earlier
schema version to its current one, either in code or in a YAML definition.

Example usage:
    ```python
    from stage_upgrader import Config, UpgraderRegistry

    registry = UpgraderRegistry()
    registry.register_definitions(Path("upgraders"))

    configs = [Config(name="user", value="admin"), Config(name="password", value="x")]
    upgraded = registry.upgrade("jdbc-lib", "jdbc-source", "source1", 1, 3, configs)
    ```
"""

from stage_upgrader.__version__ import __version__
from stage_upgrader.config import Config, configs_from_pairs, configs_to_pairs
from stage_upgrader.errors import StageException, StepError, UpgraderError
from stage_upgrader.loader import (
    DeclarativeStageUpgrader,
    DefinitionError,
    load_definition,
    load_definitions,
)
from stage_upgrader.registry import UpgraderRegistry
from stage_upgrader.upgrader import (
    DEFAULT_UPGRADER,
    DefaultStageUpgrader,
    StageUpgrader,
    VersionedStageUpgrader,
)

__all__ = [
    "Config",
    "DEFAULT_UPGRADER",
    "DeclarativeStageUpgrader",
    "DefaultStageUpgrader",
    "DefinitionError",
    "StageException",
    "StageUpgrader",
    "StepError",
    "UpgraderError",
    "UpgraderRegistry",
    "VersionedStageUpgrader",
    "__version__",
    "configs_from_pairs",
    "configs_to_pairs",
    "load_definition",
    "load_definitions",
]
