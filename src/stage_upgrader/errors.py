"""Error taxonomy for stage configuration upgrades.

Errors are structured values: a stable code plus an ordered parameter list
matching the placeholders of the code's message template. The error-reporting
layer renders them; this module only carries them.
"""

from enum import Enum
from typing import Any


class UpgraderError(Enum):
    """Error codes raised by stage upgraders.

    The member name is the stable code, the value is the message template.
    """

    UPGRADER_00 = "Upgrader not implemented for stage '{}:{}' instance '{}'"
    UPGRADER_01 = "Cannot upgrade stage '{}:{}' instance '{}' from version '{}' to version '{}'"

    @property
    def code(self) -> str:
        return self.name

    @property
    def message(self) -> str:
        return self.value

    def format(self, *params: Any) -> str:
        """Render the message template with the given parameters."""
        return self.value.format(*params)


class StageException(Exception):
    """Exception carrying an error code and its ordered parameters.

    Attributes:
        error_code: The UpgraderError that was raised.
        params: Parameters for the error code's message template, in order.

    Example:
        ```python
        try:
            upgrader.upgrade("lib", "jdbc-source", "source1", 1, 3, configs)
        except StageException as e:
            print(e.code, e.params)
        ```
    """

    def __init__(self, error_code: UpgraderError, *params: Any) -> None:
        self.error_code = error_code
        self.params = tuple(params)
        super().__init__(f"{error_code.code} - {error_code.format(*params)}")

    @property
    def code(self) -> str:
        return self.error_code.code

    def to_dict(self) -> dict[str, Any]:
        """Return the error as a plain dictionary for reporting."""
        return {
            "code": self.code,
            "params": list(self.params),
            "message": self.error_code.format(*self.params),
        }


class StepError(Exception):
    """Raised by a single upgrade step that cannot transform its input."""
