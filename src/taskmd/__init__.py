"""taskmd - parse and rewrite markdown task lists."""

__version__ = "1.0.0"

from .errors import DueDateError, ParseError, TaskmdError, TimezoneError
from .grammar import parse
from .maybe import ABSENT, Absent, Present, render_maybe
from .models import (
    DEFAULT_SYMBOLS,
    Due,
    Lists,
    Settings,
    Subtask,
    Symbols,
    Task,
    TaskList,
)
from .serializer import serialize
from .storage import convert_file, read_file, write_file

__all__ = [
    "ABSENT",
    "Absent",
    "Present",
    "render_maybe",
    "DEFAULT_SYMBOLS",
    "Due",
    "Lists",
    "Settings",
    "Subtask",
    "Symbols",
    "Task",
    "TaskList",
    "parse",
    "serialize",
    "read_file",
    "write_file",
    "convert_file",
    "TaskmdError",
    "ParseError",
    "DueDateError",
    "TimezoneError",
]
