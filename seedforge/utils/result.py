"""
Result type for explicit error handling.

This module provides a Result type that represents either a successful operation
(Success) or a failed operation (Failure), for callers that prefer checking a
value over catching an exception.

Example:
    >>> result = registry.lookup("user")
    >>> if result.is_success():
    ...     factory = result.value

    >>> registry.lookup("nope").to_dict()
    {"success": False, "error": "Factory not found: nope", "error_type": "NotFoundError"}
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass
class Success(Generic[T]):
    """Represents a successful operation with a value."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the success value."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Success({self.value})"


@dataclass
class Failure(Generic[E]):
    """
    Represents a failed operation with an error.

    Attributes:
        error: The error message
        error_type: Type/category of error (e.g., "NotFoundError")
        context: Additional context about the error
        exception: The exception the failure was built from, if any
    """

    error: E
    error_type: str = "UnknownError"
    context: Optional[Dict[str, Any]] = None
    exception: Optional[BaseException] = None

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> Any:
        """
        Attempt to get the value.

        Raises:
            The wrapped exception when there is one, RuntimeError otherwise
        """
        if self.exception is not None:
            raise self.exception
        raise RuntimeError(f"Called unwrap on Failure: {self.error}")

    def unwrap_or(self, default: Any) -> Any:
        return default

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        result = {
            "success": False,
            "error": str(self.error),
            "error_type": self.error_type,
        }
        if self.context:
            result["context"] = self.context
        return result

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"Failure({self.error_type}: {self.error})"


# Type alias for Result
Result = Union[Success[T], Failure[E]]


def not_found_error(
    message: str,
    context: Optional[Dict[str, Any]] = None,
    exception: Optional[BaseException] = None,
) -> Failure:
    """Create a not found error result."""
    return Failure(
        error=message,
        error_type="NotFoundError",
        context=context,
        exception=exception,
    )
