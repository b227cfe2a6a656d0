"""Operation handlers for declarative upgrade steps.

Each handler validates parameters, applies its change to the working config
list in place, and returns success/failure with details. Handlers never
raise for bad input; the step that runs them decides what a failure means.
Values taken from an operation are copied so that no upgrade result shares
state with the definition.
"""

import copy
from dataclasses import dataclass

from stage_upgrader.config import Config, find_index
from stage_upgrader.models import ConfigOperation, OperationType


@dataclass
class OperationResult:
    """Result of a config operation.

    Attributes:
        success: Whether the operation succeeded.
        message: Human-readable result message.
        skipped: Whether the operation was skipped (e.g., optional config absent).
    """

    success: bool
    message: str
    skipped: bool = False


def handle_rename_config(op: ConfigOperation, configs: list[Config]) -> OperationResult:
    """Rename a config, keeping its position.

    Args:
        op: Operation with name and new_name.
        configs: Working config list, modified in place.

    Returns:
        OperationResult with success status and details.
    """
    if not op.new_name:
        return OperationResult(False, "rename_config requires 'new_name' parameter")

    index = find_index(configs, op.name)
    if index is None:
        if op.optional:
            return OperationResult(True, f"Config '{op.name}' not found, skipping", skipped=True)
        return OperationResult(False, f"Config '{op.name}' not found")

    if find_index(configs, op.new_name) is not None:
        return OperationResult(False, f"Config '{op.new_name}' already exists")

    configs[index] = configs[index].with_name(op.new_name)
    return OperationResult(True, f"Renamed config '{op.name}' -> '{op.new_name}'")


def handle_add_config(op: ConfigOperation, configs: list[Config]) -> OperationResult:
    """Append a config.

    Args:
        op: Operation with name and value.
        configs: Working config list, modified in place.

    Returns:
        OperationResult with success status and details.
    """
    if find_index(configs, op.name) is not None:
        if op.skip_if_exists:
            return OperationResult(
                True, f"Config '{op.name}' already exists, skipping", skipped=True
            )
        return OperationResult(False, f"Config '{op.name}' already exists")

    configs.append(Config(name=op.name, value=copy.deepcopy(op.value)))
    return OperationResult(True, f"Added config '{op.name}' = {op.value!r}")


def handle_remove_config(op: ConfigOperation, configs: list[Config]) -> OperationResult:
    """Remove a config.

    Args:
        op: Operation with name.
        configs: Working config list, modified in place.

    Returns:
        OperationResult with success status and details.
    """
    index = find_index(configs, op.name)
    if index is None:
        if op.optional:
            return OperationResult(True, f"Config '{op.name}' not found, skipping", skipped=True)
        return OperationResult(False, f"Config '{op.name}' not found")

    del configs[index]
    return OperationResult(True, f"Removed config '{op.name}'")


def handle_set_value(op: ConfigOperation, configs: list[Config]) -> OperationResult:
    """Replace the value of an existing config."""
    index = find_index(configs, op.name)
    if index is None:
        if op.optional:
            return OperationResult(True, f"Config '{op.name}' not found, skipping", skipped=True)
        return OperationResult(False, f"Config '{op.name}' not found")

    configs[index] = configs[index].with_value(copy.deepcopy(op.value))
    return OperationResult(True, f"Set config '{op.name}' = {op.value!r}")


def handle_map_value(op: ConfigOperation, configs: list[Config]) -> OperationResult:
    """Translate the value of a config through a lookup table.

    A current value that is not a key of the mapping is outside the range
    the step knows how to upgrade, and fails the operation.
    """
    if op.mapping is None:
        return OperationResult(False, "map_value requires 'mapping' parameter")

    index = find_index(configs, op.name)
    if index is None:
        if op.optional:
            return OperationResult(True, f"Config '{op.name}' not found, skipping", skipped=True)
        return OperationResult(False, f"Config '{op.name}' not found")

    old_value = configs[index].value
    try:
        new_value = op.mapping[old_value]
    except (KeyError, TypeError):
        return OperationResult(
            False, f"Config '{op.name}' has unexpected value {old_value!r}"
        )

    configs[index] = configs[index].with_value(copy.deepcopy(new_value))
    return OperationResult(True, f"Mapped config '{op.name}' {old_value!r} -> {new_value!r}")


# Operation handler registry
OPERATION_HANDLERS = {
    OperationType.RENAME_CONFIG: handle_rename_config,
    OperationType.ADD_CONFIG: handle_add_config,
    OperationType.REMOVE_CONFIG: handle_remove_config,
    OperationType.SET_VALUE: handle_set_value,
    OperationType.MAP_VALUE: handle_map_value,
}


def execute_operation(op: ConfigOperation, configs: list[Config]) -> OperationResult:
    """Execute a config operation.

    Args:
        op: The operation to execute.
        configs: Working config list, modified in place.

    Returns:
        OperationResult with success status and details.
    """
    handler = OPERATION_HANDLERS.get(op.type)
    if not handler:
        return OperationResult(False, f"Unknown operation type: {op.type}")

    return handler(op, configs)
