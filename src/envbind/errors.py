from typing import Any, Optional


class EnvBindError(Exception):
    """Base class for errors raised while binding environment variables."""


class ResolutionError(EnvBindError):
    """Raised when the class or module owning a caller cannot be determined."""

    def __init__(self, caller: str, reason: str) -> None:
        self.caller = caller
        super().__init__(
            f"Unable to determine the containing type of the calling function '{caller}' "
            f"({reason}). Pass the owning class or module to populate() explicitly."
        )


class ConversionError(EnvBindError, ValueError):
    """Raised when a raw value cannot be converted into a field's declared type."""

    def __init__(self, name: str, value: Optional[str], target_type: Any, reason: str = "") -> None:
        self.name = name
        self.value = value
        self.target_type = target_type
        message = f"Failed to convert value '{value}' for '{name}' to target type {_type_name(target_type)}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


def _type_name(target_type: Any) -> str:
    if isinstance(target_type, type):
        return target_type.__qualname__
    return repr(target_type)
