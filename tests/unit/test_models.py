"""Tests for upgrade definition models."""

import pytest
from pydantic import ValidationError

from stage_upgrader.models import ConfigOperation, OperationType, UpgradeDefinition, UpgradeStep


class TestConfigOperation:
    """Tests for ConfigOperation model."""

    def test_rename_config_operation(self):
        """Should create rename_config operation."""
        op = ConfigOperation(type=OperationType.RENAME_CONFIG, name="user", new_name="username")
        assert op.type == OperationType.RENAME_CONFIG
        assert op.name == "user"
        assert op.new_name == "username"
        assert op.optional is False

    def test_add_config_operation(self):
        """Should create add_config operation with value."""
        op = ConfigOperation(type="add_config", name="connectionTimeoutMs", value=30000)
        assert op.type == OperationType.ADD_CONFIG
        assert op.value == 30000
        assert op.skip_if_exists is False

    def test_map_value_operation(self):
        """Should create map_value operation with mapping."""
        op = ConfigOperation(type="map_value", name="mode", mapping={"A": "a", "B": "b"})
        assert op.mapping == {"A": "a", "B": "b"}

    def test_unknown_type_rejected(self):
        """Should reject unsupported operation types."""
        with pytest.raises(ValidationError):
            ConfigOperation(type="move_directory", name="x")

    def test_rename_without_new_name_rejected(self):
        """Should reject rename_config without new_name."""
        with pytest.raises(ValidationError, match="new_name"):
            ConfigOperation(type="rename_config", name="user")

    def test_map_value_without_mapping_rejected(self):
        """Should reject map_value without mapping."""
        with pytest.raises(ValidationError, match="mapping"):
            ConfigOperation(type="map_value", name="mode")

    def test_map_value_empty_mapping_allowed(self):
        """Should accept an empty mapping, which fails every value at upgrade time."""
        op = ConfigOperation(type="map_value", name="mode", mapping={})
        assert op.mapping == {}

    def test_name_required(self):
        """Should require a non-empty config name."""
        with pytest.raises(ValidationError):
            ConfigOperation(type="remove_config", name="")


class TestUpgradeStep:
    """Tests for UpgradeStep model."""

    def test_to_version(self):
        """Should upgrade by exactly one version."""
        step = UpgradeStep(from_version=4, description="Add timeout")
        assert step.to_version == 5
        assert step.operations == []

    def test_negative_version_rejected(self):
        """Should reject negative versions."""
        with pytest.raises(ValidationError):
            UpgradeStep(from_version=-1)


class TestUpgradeDefinition:
    """Tests for UpgradeDefinition model."""

    def test_steps_sorted(self):
        """Should sort steps by from_version."""
        definition = UpgradeDefinition(
            library="jdbc-lib",
            stage="jdbc-source",
            steps=[UpgradeStep(from_version=2), UpgradeStep(from_version=1)],
        )
        assert [s.from_version for s in definition.steps] == [1, 2]
        assert definition.key == ("jdbc-lib", "jdbc-source")

    def test_duplicate_steps_rejected(self):
        """Should reject two steps for the same version."""
        with pytest.raises(ValidationError, match="Duplicate"):
            UpgradeDefinition(
                library="jdbc-lib",
                stage="jdbc-source",
                steps=[UpgradeStep(from_version=1), UpgradeStep(from_version=1)],
            )

    def test_gaps(self):
        """Should report missing intermediate versions."""
        definition = UpgradeDefinition(
            library="lib",
            stage="stage",
            steps=[UpgradeStep(from_version=1), UpgradeStep(from_version=4)],
        )
        assert definition.gaps() == [2, 3]

    def test_no_gaps(self):
        """Should report no gaps for contiguous or empty chains."""
        contiguous = UpgradeDefinition(
            library="lib",
            stage="stage",
            steps=[UpgradeStep(from_version=1), UpgradeStep(from_version=2)],
        )
        assert contiguous.gaps() == []
        assert UpgradeDefinition(library="lib", stage="stage").gaps() == []
