"""Shared pytest fixtures for stage-upgrader tests.

This module provides reusable config lists, code-defined upgraders,
and YAML definition directories.
"""

from pathlib import Path

import pytest

from stage_upgrader.config import Config, configs_from_pairs
from stage_upgrader.errors import StepError
from stage_upgrader.upgrader import VersionedStageUpgrader

JDBC_DEFINITION = """
library: jdbc-lib
stage: jdbc-source
steps:
  - from_version: 1
    description: Rename user to username
    operations:
      - type: rename_config
        name: user
        new_name: username
  - from_version: 2
    description: Add connection timeout
    operations:
      - type: add_config
        name: connectionTimeoutMs
        value: 30000
"""

KAFKA_DEFINITION = """
library: kafka-lib
stage: kafka-target
steps:
  - from_version: 3
    description: Normalize compression codec
    operations:
      - type: map_value
        name: compression
        mapping:
          NONE: none
          GZIP: gzip
          SNAPPY: snappy
"""

# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def jdbc_configs() -> list[Config]:
    """Create a version 1 jdbc-source configuration."""
    return configs_from_pairs([("user", "admin"), ("password", "x")])


# =============================================================================
# Upgrader Fixtures
# =============================================================================


def rename_user(configs: list[Config]) -> list[Config]:
    """jdbc-source v1 -> v2: rename 'user' to 'username'."""
    if not any(c.name == "user" for c in configs):
        raise StepError("Config 'user' not found")
    return [c.with_name("username") if c.name == "user" else c for c in configs]


def add_timeout(configs: list[Config]) -> list[Config]:
    """jdbc-source v2 -> v3: add 'connectionTimeoutMs'."""
    return configs + [Config(name="connectionTimeoutMs", value=30000)]


def add_pool_size(configs: list[Config]) -> list[Config]:
    """jdbc-source v3 -> v4: add 'maxPoolSize'."""
    return configs + [Config(name="maxPoolSize", value=10)]


@pytest.fixture
def jdbc_upgrader() -> VersionedStageUpgrader:
    """Create the code-defined jdbc-source upgrader (v1 -> v4)."""
    return VersionedStageUpgrader({1: rename_user, 2: add_timeout, 3: add_pool_size})


# =============================================================================
# Definition Fixtures
# =============================================================================


@pytest.fixture
def definitions_dir(tmp_path: Path) -> Path:
    """Create a directory with valid upgrade definitions."""
    directory = tmp_path / "upgraders"
    directory.mkdir()
    (directory / "jdbc-source.yaml").write_text(JDBC_DEFINITION)
    (directory / "kafka-target.yml").write_text(KAFKA_DEFINITION)
    return directory
