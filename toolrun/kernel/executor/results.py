"""Result: two-armed outcome of a validation or execution step."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from toolrun.kernel.executor.errors import ClassifiedError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a success value or a classified error, never both."""

    ok: bool
    value: T | None = None
    error: ClassifiedError | None = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        """Wrap a success value.

        Args:
            value: Payload to return to the caller

        Returns:
            Result with ok=True
        """
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ClassifiedError) -> "Result[T]":
        """Wrap a classified error.

        Args:
            error: Error to return to the caller

        Returns:
            Result with ok=False
        """
        return cls(ok=False, error=error)

    def unwrap(self) -> T:
        """Return the success value.

        Raises:
            ClassifiedError: The carried error, if this is a failure
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
