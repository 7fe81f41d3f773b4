"""Error hierarchy for runtotal."""

from __future__ import annotations

from typing import Any

__all__ = [
    "TotalError",
    "ConfigNotFoundError",
    "ConfigError",
    "InvalidValueError",
    "InvalidKeyError",
    "StructuralConflictError",
    "ErrorCodes",
]


class TotalError(Exception):
    """Base error for all runtotal errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ConfigNotFoundError(TotalError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(TotalError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class InvalidValueError(TotalError):
    """Raised when a value written to a total is not a finite real number, or would overflow a total."""

    def __init__(
        self,
        value: Any,
        key: str | None = None,
        reason: str = "not a finite real number",
        **kwargs: Any,
    ) -> None:
        target = f" for key '{key}'" if key is not None else ""
        super().__init__(
            code="INVALID_VALUE",
            message=f"Cannot add value {value!r}{target}: {reason}",
            details={"value": value, "key": key, "reason": reason},
            **kwargs,
        )

    @property
    def value(self) -> Any:
        """The rejected value."""
        return self.details["value"]


class InvalidKeyError(TotalError):
    """Raised when a dotted key is empty or has an empty segment."""

    def __init__(self, key: str, **kwargs: Any) -> None:
        super().__init__(
            code="INVALID_KEY",
            message=f"Invalid dotted key: {key!r}",
            details={"key": key},
            **kwargs,
        )


class StructuralConflictError(TotalError):
    """Raised when a write would mix a scalar leaf and a nested node at one path."""

    def __init__(self, key: str, path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="STRUCTURAL_CONFLICT",
            message=f"Cannot write '{key}': {reason} at '{path}'",
            details={"key": key, "path": path, "reason": reason},
            **kwargs,
        )

    @property
    def key(self) -> str:
        """The dotted key that was being written."""
        return self.details["key"]

    @property
    def path(self) -> str:
        """The existing path that conflicts with the write."""
        return self.details["path"]


class ErrorCodes:
    """All runtotal error codes as constants.

    Example:
        if error.code == ErrorCodes.STRUCTURAL_CONFLICT:
            handle_conflict()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    INVALID_VALUE = "INVALID_VALUE"
    INVALID_KEY = "INVALID_KEY"
    STRUCTURAL_CONFLICT = "STRUCTURAL_CONFLICT"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
