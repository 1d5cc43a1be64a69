"""Tagged outcomes for collaborators that degrade instead of failing."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """The collaborator produced a real value."""

    value: T

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class Fallback(Generic[T]):
    """The collaborator failed and substituted its documented default."""

    value: T
    reason: str

    @property
    def is_fallback(self) -> bool:
        return True


Outcome = Ok[T] | Fallback[T]
