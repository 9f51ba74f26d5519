"""Result type returned by ``try_load`` for callers that avoid exceptions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar('T')
E = TypeVar('E', bound=Exception)


@dataclass(frozen=True)
class Success(Generic[T]):
    """Loaded value, usually the bound config dataclass."""
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Error that stopped the load."""
    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self):
        """Raise the carried error."""
        raise self.error


Result = Union[Success[T], Failure[E]]
