"""Optional values: Present(value) or Absent."""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Present(Generic[T]):
    """A value that is there."""

    value: T


@dataclass(frozen=True)
class Absent:
    """No value."""

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent()

Maybe = Union[Present[T], Absent]


def is_present(m: "Maybe[T]") -> bool:
    return isinstance(m, Present)


def from_optional(value: Optional[T]) -> "Maybe[T]":
    """Wrap a None-able value: None becomes ABSENT."""
    return ABSENT if value is None else Present(value)


def render_maybe(fn: Callable[[T], str], m: "Maybe[T]") -> str:
    """Return fn(value) for Present, "" for Absent."""
    if isinstance(m, Present):
        return fn(m.value)
    return ""
