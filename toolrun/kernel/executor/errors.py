"""Classified errors for tool execution.

Every failure the executor reports is one of four kinds so callers can
branch on ``error.kind`` instead of parsing messages.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of error classifications."""

    INVALID = "invalid"  # Bad tool spec or bad input shape
    EXECUTION = "execution"  # Tool invocation failed at runtime
    CONFIG = "config"  # Missing or invalid configuration
    INTERNAL = "internal"  # Anything not otherwise classifiable


class ClassifiedError(Exception):
    """Base class for all classified errors.

    Attributes:
        kind: Classification of the error
        message: Human-readable error description
        details: Extra context about the failure
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize classified error.

        Args:
            message: Human-readable error description
            details: Extra context about the failure
        """
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return a plain mapping view of the error."""
        return {"kind": self.kind.value, "message": self.message, "details": dict(self.details)}


class InvalidInput(ClassifiedError):
    """Invalid tool specification or tool input.

    Attributes:
        field: Name of the offending field, if known
        value: The rejected value, if known
    """

    kind = ErrorKind.INVALID

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize invalid input error.

        Args:
            message: Human-readable error description
            details: Extra context about the failure
            field: Name of the offending field
            value: The rejected value
        """
        super().__init__(message, details)
        self.field = field
        self.value = value

    def to_dict(self) -> dict[str, Any]:
        """Return a plain mapping view including ``field`` and ``value``."""
        data = super().to_dict()
        data["field"] = self.field
        data["value"] = self.value
        return data


class ExecutionFailure(ClassifiedError):
    """Tool invocation failed after all permitted attempts."""

    kind = ErrorKind.EXECUTION


class ConfigError(ClassifiedError):
    """Required configuration is missing or invalid.

    Attributes:
        key: Name of the offending configuration key, if known
    """

    kind = ErrorKind.CONFIG

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        key: str | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Human-readable error description
            details: Extra context about the failure
            key: Name of the offending configuration key
        """
        super().__init__(message, details)
        self.key = key

    def to_dict(self) -> dict[str, Any]:
        """Return a plain mapping view including ``key``."""
        data = super().to_dict()
        data["key"] = self.key
        return data


class UnknownInternal(ClassifiedError):
    """Fallback for failures that match no other kind."""

    kind = ErrorKind.INTERNAL


def make_invalid(message: str, details: dict[str, Any] | None = None) -> InvalidInput:
    """Create an InvalidInput error.

    The ``field`` and ``value`` entries of ``details`` also populate the
    attributes of the same name.

    Args:
        message: Human-readable error description
        details: Extra context about the failure

    Returns:
        InvalidInput error (never raised)
    """
    details = dict(details or {})
    return InvalidInput(message, details, field=details.get("field"), value=details.get("value"))


def make_execution(message: str, details: dict[str, Any] | None = None) -> ExecutionFailure:
    """Create an ExecutionFailure error.

    Args:
        message: Human-readable error description
        details: Extra context, conventionally including the tool name

    Returns:
        ExecutionFailure error (never raised)
    """
    return ExecutionFailure(message, details)


def make_config(message: str, details: dict[str, Any] | None = None) -> ConfigError:
    """Create a ConfigError error.

    The ``key`` entry of ``details`` also populates ``ConfigError.key``.

    Args:
        message: Human-readable error description
        details: Extra context about the failure

    Returns:
        ConfigError error (never raised)
    """
    details = dict(details or {})
    return ConfigError(message, details, key=details.get("key"))


def classify(exc: BaseException) -> ClassifiedError:
    """Map any exception onto the taxonomy.

    Classified errors pass through unchanged; everything else becomes
    UnknownInternal with the original exception kept in ``details``.

    Args:
        exc: Exception to classify

    Returns:
        ClassifiedError for the exception
    """
    if isinstance(exc, ClassifiedError):
        return exc

    return UnknownInternal(
        str(exc) or type(exc).__name__,
        {"exception": exc, "type": type(exc).__name__},
    )
