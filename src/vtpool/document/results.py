"""Result values for fallible boundary operations.

Loading, importing and saving never raise at the document boundary; they
return a Result that either carries a value or an error message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a boundary operation.

    Attributes:
        success: Whether the operation succeeded.
        value: The produced value (if success).
        error: Description of the failure (if not success).
    """

    success: bool
    value: Optional[T] = None
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """Return the value, or raise ValueError carrying the error message."""
        if not self.success:
            raise ValueError(self.error)
        return self.value  # type: ignore[return-value]


def Ok(value: T = None) -> Result[T]:  # type: ignore[assignment]
    """Successful result."""
    return Result(success=True, value=value)


def Err(error: str) -> Result:
    """Failed result with a message."""
    return Result(success=False, error=error)


__all__ = ["Result", "Ok", "Err"]
