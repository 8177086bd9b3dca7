"""Result Type: explicit success/failure values passed between layers.

Invariants:
    - A Result is exactly one of Ok(value) or Err(error)
    - Repositories and services never let expected failures escape as exceptions;
      they return Err carrying a MetricsError
    - unwrap() on Err raises the carried error (routes rely on this to reach
      the global error handler)

Design Decisions:
    - Two frozen dataclasses plus a union alias instead of a wrapper class:
      isinstance() narrows the type for mypy without casts
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from metrics_api.core.errors import MetricsError

T = TypeVar("T")
E = TypeVar("E", bound=MetricsError)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying a typed error."""
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise self.error


Result = Union[Ok[T], Err[E]]
