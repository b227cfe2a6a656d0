"""Binding of stage types to their upgraders.

The registry is filled once, when stage types are registered, and only read
afterwards. Lookups never return None: unregistered stage types get the
Default upgrader, which fails with a not-implemented error.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from stage_upgrader.config import Config
from stage_upgrader.loader import DeclarativeStageUpgrader, load_definitions
from stage_upgrader.upgrader import DEFAULT_UPGRADER, StageUpgrader

logger = logging.getLogger(__name__)


class UpgraderRegistry:
    """Mapping from (library, stage name) to the stage type's upgrader.

    Example:
        ```python
        registry = UpgraderRegistry()
        registry.register("jdbc-lib", "jdbc-source", JdbcSourceUpgrader())
        registry.register_definitions(Path("upgraders"))

        configs = registry.upgrade("jdbc-lib", "jdbc-source", "source1", 1, 3, configs)
        ```
    """

    def __init__(self) -> None:
        self._upgraders: dict[tuple[str, str], StageUpgrader] = {}

    def register(self, library: str, stage_name: str, upgrader: StageUpgrader) -> None:
        """Bind an upgrader to a stage type.

        Raises:
            ValueError: If the stage type already has an upgrader.
        """
        key = (library, stage_name)
        if key in self._upgraders:
            raise ValueError(f"Upgrader already registered for stage '{library}:{stage_name}'")
        self._upgraders[key] = upgrader
        logger.debug(f"Registered {type(upgrader).__name__} for {library}:{stage_name}")

    def register_definitions(self, directory: Path) -> list[tuple[str, str]]:
        """Register a declarative upgrader for every definition in a directory.

        Definitions for a stage type that already has an upgrader, including
        one registered earlier from the same directory, are logged and skipped.

        Returns:
            Stage types that were registered.
        """
        registered = []
        for definition in load_definitions(directory):
            if definition.key in self._upgraders:
                logger.warning(
                    f"Skipping upgrade definition for {definition.library}:{definition.stage}: "
                    "stage type already has an upgrader"
                )
                continue
            upgrader = DeclarativeStageUpgrader(definition)
            self.register(definition.library, definition.stage, upgrader)
            registered.append(definition.key)
        logger.info(f"Registered {len(registered)} upgrade definition(s) from {directory}")
        return registered

    def get(self, library: str, stage_name: str) -> StageUpgrader:
        return self._upgraders.get((library, stage_name), DEFAULT_UPGRADER)

    def stage_types(self) -> list[tuple[str, str]]:
        return sorted(self._upgraders)

    def upgrade(
        self,
        library: str,
        stage_name: str,
        stage_instance: str,
        from_version: int,
        to_version: int,
        configs: Sequence[Config],
    ) -> list[Config]:
        """Bring a stage instance's configs to the stage's current version.

        Only invokes the stage type's upgrader when the recorded version is
        older than the current one.

        Args:
            library: Stage library name.
            stage_name: Stage name.
            stage_instance: Stage instance name.
            from_version: Version recorded with the configuration.
            to_version: Version the stage currently declares.
            configs: The configurations to upgrade.

        Returns:
            Configs valid for to_version.

        Raises:
            ValueError: If the recorded version is newer than the stage.
            StageException: If the upgrader fails.
        """
        if from_version > to_version:
            raise ValueError(
                f"Stage '{library}:{stage_name}' instance '{stage_instance}' has config "
                f"version {from_version}, newer than stage version {to_version}"
            )
        if from_version == to_version:
            return list(configs)

        upgrader = self.get(library, stage_name)
        return upgrader.upgrade(
            library, stage_name, stage_instance, from_version, to_version, configs
        )
