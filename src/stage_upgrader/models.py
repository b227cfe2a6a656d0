"""Data models for declarative upgrade definitions.

This module defines Pydantic models for stage upgrade definitions,
the single-version steps they chain, and the config operations each
step performs.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


class OperationType(str, Enum):
    """Supported config operation types."""

    RENAME_CONFIG = "rename_config"
    ADD_CONFIG = "add_config"
    REMOVE_CONFIG = "remove_config"
    SET_VALUE = "set_value"
    MAP_VALUE = "map_value"


class ConfigOperation(BaseModel):
    """A single operation on a stage's config list.

    Attributes:
        type: The operation type (rename_config, add_config, etc.).
        name: Config the operation applies to.
        new_name: Target name for rename_config.
        value: Value for add_config and set_value.
        mapping: Old value to new value lookup for map_value.
        optional: Skip instead of failing when the config is absent.
        skip_if_exists: Skip add_config instead of failing when the config exists.
    """

    type: OperationType = Field(..., description="Operation type")
    name: str = Field(..., min_length=1, description="Config name")
    # Operation-specific parameters
    new_name: str | None = Field(default=None, description="Name to rename to")
    value: Any = Field(default=None, description="Value for add/set operations")
    mapping: dict[Any, Any] | None = Field(default=None, description="Value lookup table")
    optional: bool = Field(default=False, description="Skip if config is absent")
    skip_if_exists: bool = Field(default=False, description="Skip add if config exists")

    @model_validator(mode="after")
    def _check_parameters(self) -> "ConfigOperation":
        if self.type == OperationType.RENAME_CONFIG and not self.new_name:
            raise ValueError("rename_config requires 'new_name' parameter")
        if self.type == OperationType.MAP_VALUE and self.mapping is None:
            raise ValueError("map_value requires 'mapping' parameter")
        return self


class UpgradeStep(BaseModel):
    """Upgrade of a stage configuration by exactly one version.

    Attributes:
        from_version: Version the step upgrades from.
        description: Human-readable description.
        operations: Operations to perform, in order.
    """

    from_version: int = Field(..., ge=0, description="Version the step upgrades from")
    description: str = Field(default="", description="Human-readable description")
    operations: list[ConfigOperation] = Field(
        default_factory=list, description="Operations to perform"
    )

    @property
    def to_version(self) -> int:
        return self.from_version + 1


class UpgradeDefinition(BaseModel):
    """The upgrade chain of one stage type.

    Definitions are written in YAML, one file per stage type.

    Attributes:
        library: Stage library name.
        stage: Stage name.
        steps: Single-version steps, sorted by from_version.
    """

    library: str = Field(..., min_length=1, description="Stage library name")
    stage: str = Field(..., min_length=1, description="Stage name")
    steps: list[UpgradeStep] = Field(default_factory=list, description="Upgrade steps")

    @field_validator("steps")
    @classmethod
    def _unique_sorted_steps(cls, steps: list[UpgradeStep]) -> list[UpgradeStep]:
        versions = [s.from_version for s in steps]
        duplicates = sorted({v for v in versions if versions.count(v) > 1})
        if duplicates:
            raise ValueError(f"Duplicate steps for version(s) {duplicates}")
        return sorted(steps, key=lambda s: s.from_version)

    @property
    def key(self) -> tuple[str, str]:
        return (self.library, self.stage)

    def gaps(self) -> list[int]:
        """Return versions missing between the first and last step."""
        if not self.steps:
            return []
        present = {s.from_version for s in self.steps}
        first, last = self.steps[0].from_version, self.steps[-1].from_version
        return [v for v in range(first, last + 1) if v not in present]
