"""Stage configuration values.

A stage's configuration is an ordered list of Config entries. Upgraders receive
such a list and return a new one; the helpers here look entries up by name.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from pydantic import BaseModel, Field

from stage_upgrader.errors import StepError


class Config(BaseModel):
    """A single named configuration value of a stage instance.

    Attributes:
        name: Configuration name, unique within a stage instance.
        value: Scalar, list, or nested mapping.
    """

    name: str = Field(..., min_length=1, description="Configuration name")
    value: Any = Field(default=None, description="Configuration value")

    model_config = {"frozen": True}

    def with_value(self, value: Any) -> "Config":
        """Return a copy of this entry holding a new value."""
        return Config(name=self.name, value=value)

    def with_name(self, name: str) -> "Config":
        """Return a copy of this entry under a new name."""
        return Config(name=name, value=self.value)


def configs_from_pairs(pairs: Iterable[tuple[str, Any]]) -> list[Config]:
    """Build a config list from (name, value) pairs."""
    return [Config(name=name, value=value) for name, value in pairs]


def configs_to_pairs(configs: Iterable[Config]) -> list[tuple[str, Any]]:
    """Flatten a config list to (name, value) pairs."""
    return [(c.name, c.value) for c in configs]


def find_index(configs: Sequence[Config], name: str) -> int | None:
    """Return the position of the named entry, or None if absent."""
    for i, config in enumerate(configs):
        if config.name == name:
            return i
    return None


def has_config(configs: Sequence[Config], name: str) -> bool:
    return find_index(configs, name) is not None


def get_config(configs: Sequence[Config], name: str) -> Config:
    """Return the named entry.

    Raises:
        StepError: If no entry has that name.
    """
    index = find_index(configs, name)
    if index is None:
        raise StepError(f"Config '{name}' not found")
    return configs[index]
