"""Result types for railway-oriented programming.

Every remote call in the notification pipeline returns a Result instead of
raising. The dispatch trigger is the only place that inspects the final
outcome and turns it into a callback.

Usage:
    async def resolve_ip(self) -> Result[str, NetworkFailure]:
        if response.status_code != 200:
            return Failure(error=NetworkFailure(...))
        return Success(value=data["ip"])

    result = await resolver.resolve_ip()
    match result:
        case Success(value=ip):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]
