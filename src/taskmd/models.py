"""Data models and constants for taskmd."""

import re
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import TimezoneError
from .maybe import ABSENT, Maybe, Present

DEFAULT_INPUT = "taskell.md"
DEFAULT_OUTPUT = "taskmd.md"

_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Symbols:
    """Literal line prefixes, each followed by one space in the document."""

    title: str = "##"
    task: str = "-"
    description: str = "    >"
    due: str = "    @"
    subtask: str = "    *"


DEFAULT_SYMBOLS = Symbols()


@dataclass
class Settings:
    """Everything a conversion needs besides the text itself."""

    symbols: Symbols = DEFAULT_SYMBOLS
    local_times: bool = False
    tz: Optional[str] = None  # IANA name; None means the system zone


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Return the named zone, or None for the system local zone.

    None is what datetime.astimezone() expects for "local time", so the
    result can be handed straight to it.
    """
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise TimezoneError(name) from e
    return None


def assume_zone(when: datetime, tz: Optional[tzinfo]) -> datetime:
    """Attach tz to a naive datetime; aware ones are returned unchanged."""
    if when.tzinfo is not None:
        return when
    if tz is None:
        return when.astimezone()
    return when.replace(tzinfo=tz)


@dataclass
class Due:
    """An absolute (timezone-aware) due timestamp."""

    when: datetime


@dataclass
class Subtask:
    complete: bool
    name: str


@dataclass
class Task:
    """A task with optional due date and description, plus its subtasks.

    Description lines are always separated by "\\n"; CR and CRLF are
    rewritten on construction, the same way the grammar joins them.
    """

    name: str
    due: Maybe[Due] = ABSENT
    description: Maybe[str] = ABSENT
    subtasks: List[Subtask] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.description, Present):
            self.description = Present(_BREAK_RE.sub("\n", self.description.value))


@dataclass
class TaskList:
    title: str
    tasks: List[Task] = field(default_factory=list)


@dataclass
class Lists:
    """The document root: one or more task lists."""

    items: List[TaskList] = field(default_factory=list)
