"""Stage upgrader contract and its built-in implementations.

An upgrader brings a stage's persisted configuration from the version recorded
with it to the version the stage currently declares. Real upgraders chain
single-version steps (v -> v+1); stage types without upgrade logic are bound to
the Default upgrader, which fails every call explicitly.

Example usage:
    ```python
    def rename_user(configs):
        return [c.with_name("username") if c.name == "user" else c for c in configs]

    upgrader = VersionedStageUpgrader({1: rename_user})
    upgraded = upgrader.upgrade("jdbc-lib", "jdbc-source", "source1", 1, 2, configs)
    ```
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping, Sequence

from stage_upgrader.config import Config
from stage_upgrader.errors import StageException, StepError, UpgraderError

logger = logging.getLogger(__name__)

# A single-version transform: receives the configs at version v, returns them at v+1
Step = Callable[[list[Config]], list[Config]]

# Errors a step may raise for a value it cannot transform
STEP_FAILURES = (StepError, LookupError, ValueError, TypeError, AttributeError)


class StageUpgrader(ABC):
    """Upgrades a stage's configuration from a previous version of the stage.

    Called only when the version recorded with a stage configuration is older
    than the version of the stage being loaded. Implementations must not keep
    state between calls.
    """

    @abstractmethod
    def upgrade(
        self,
        library: str,
        stage_name: str,
        stage_instance: str,
        from_version: int,
        to_version: int,
        configs: Sequence[Config],
    ) -> list[Config]:
        """Upgrade the stage configuration to the current version.

        Args:
            library: Stage library name.
            stage_name: Stage name.
            stage_instance: Stage instance name, used in diagnostics only.
            from_version: Version recorded with the configuration.
            to_version: Version of the stage, the version to upgrade to.
            configs: The configurations to upgrade.

        Returns:
            The complete upgraded configuration.

        Raises:
            StageException: If the configuration could not be upgraded.
        """


class DefaultStageUpgrader(StageUpgrader):
    """Upgrader bound to stage types with no upgrade logic. Fails all upgrades."""

    def upgrade(
        self,
        library: str,
        stage_name: str,
        stage_instance: str,
        from_version: int,
        to_version: int,
        configs: Sequence[Config],
    ) -> list[Config]:
        raise StageException(UpgraderError.UPGRADER_00, library, stage_name, stage_instance)


DEFAULT_UPGRADER = DefaultStageUpgrader()


class VersionedStageUpgrader(StageUpgrader):
    """Upgrader that chains single-version steps.

    Steps are keyed by the version they upgrade from: step ``v`` turns a
    version ``v`` configuration into a version ``v + 1`` configuration. An
    upgrade from ``f`` to ``t`` applies steps ``f .. t-1`` in order, on a deep
    copy of the input, and returns only once every step has succeeded.

    Attributes:
        versions: Sorted versions that have a step.
    """

    def __init__(self, steps: Mapping[int, Step]) -> None:
        """Initialize the upgrader.

        Args:
            steps: Mapping of from-version to single-step transform.

        Raises:
            ValueError: If a step version is negative.
        """
        negative = [v for v in steps if v < 0]
        if negative:
            raise ValueError(f"Step versions must be non-negative, got {negative}")
        self._steps: dict[int, Step] = dict(sorted(steps.items()))

    @property
    def versions(self) -> list[int]:
        return list(self._steps)

    def step(self, version: int) -> Step:
        """Return the step upgrading from ``version`` to ``version + 1``.

        Raises:
            KeyError: If no such step exists.
        """
        return self._steps[version]

    def supports(self, from_version: int, to_version: int) -> bool:
        """Check that a contiguous chain of steps covers the version range."""
        if from_version < 0 or from_version >= to_version:
            return False
        return all(v in self._steps for v in range(from_version, to_version))

    def upgrade(
        self,
        library: str,
        stage_name: str,
        stage_instance: str,
        from_version: int,
        to_version: int,
        configs: Sequence[Config],
    ) -> list[Config]:
        if not self.supports(from_version, to_version):
            missing = [v for v in range(from_version, to_version) if v not in self._steps]
            logger.warning(
                f"No upgrade path for {library}:{stage_name} instance '{stage_instance}' "
                f"from v{from_version} to v{to_version} (missing steps: {missing})"
            )
            raise StageException(
                UpgraderError.UPGRADER_01,
                library,
                stage_name,
                stage_instance,
                from_version,
                to_version,
            )

        working = [config.model_copy(deep=True) for config in configs]

        for version in range(from_version, to_version):
            logger.info(
                f"Upgrading {library}:{stage_name} instance '{stage_instance}' "
                f"from v{version} to v{version + 1}"
            )
            try:
                working = self._steps[version](working)
                if not isinstance(working, list):
                    raise TypeError(
                        f"Step v{version} returned {type(working).__name__}, expected list"
                    )
            except STEP_FAILURES as e:
                logger.warning(
                    f"Upgrade step v{version} -> v{version + 1} failed for "
                    f"{library}:{stage_name} instance '{stage_instance}': {e}"
                )
                raise StageException(
                    UpgraderError.UPGRADER_01,
                    library,
                    stage_name,
                    stage_instance,
                    from_version,
                    to_version,
                ) from e

        return working
