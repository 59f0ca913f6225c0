"""Render a Lists tree back into the task-list dialect.

Each function mirrors a rule in grammar and writes the same prefixes that
rule consumes.
"""

import re
from datetime import timezone, tzinfo
from typing import Callable, List, Optional

from .maybe import render_maybe
from .models import (
    DEFAULT_SYMBOLS,
    Due,
    Lists,
    Settings,
    Subtask,
    Symbols,
    Task,
    TaskList,
    resolve_timezone,
)

_BREAK_RE = re.compile(r"\r\n|\r|\n")


def space(symbol: str, text: str) -> str:
    return f"{symbol} {text}"


def subtask_complete_s(complete: bool) -> str:
    return "[x]" if complete else "[ ]"


def time_to_output(due: Due) -> str:
    """ISO 8601 in UTC with a Z suffix."""
    iso = due.when.astimezone(timezone.utc).isoformat()
    return iso.replace("+00:00", "Z")


def time_to_output_local(due: Due, tz: Optional[tzinfo]) -> str:
    """ISO 8601 with offset, converted to tz (system local when None)."""
    return due.when.astimezone(tz).isoformat()


def time_fn(local_times: bool, tz: Optional[tzinfo] = None) -> Callable[[Due], str]:
    """Pick the due-date renderer for the display mode."""
    if local_times:
        return lambda due: time_to_output_local(due, tz)
    return time_to_output


def subtask_s(subtask: Subtask, symbols: Symbols) -> str:
    mark = subtask_complete_s(subtask.complete)
    return space(symbols.subtask, f"{mark} {subtask.name}")


def subtasks_s(subtasks: List[Subtask], symbols: Symbols) -> str:
    return "\n".join(subtask_s(s, symbols) for s in subtasks)


def description_s(description: str, symbols: Symbols) -> str:
    """One prefixed line per line of the description."""
    lines = _BREAK_RE.split(description)
    return "\n".join(space(symbols.description, ln) for ln in lines)


def due_s(
    due: Due, symbols: Symbols, fmt: Callable[[Due], str] = time_to_output
) -> str:
    return space(symbols.due, fmt(due))


def name_s(name: str, symbols: Symbols) -> str:
    return space(symbols.task, name)


def task_s(
    task: Task, symbols: Symbols, fmt: Callable[[Due], str] = time_to_output
) -> str:
    """Name, then due, description and subtasks when present."""
    lines = [
        name_s(task.name, symbols),
        render_maybe(lambda d: due_s(d, symbols, fmt), task.due),
        render_maybe(lambda d: description_s(d, symbols), task.description),
        subtasks_s(task.subtasks, symbols),
    ]
    return "\n".join(ln for ln in lines if ln)


def list_s(
    task_list: TaskList,
    symbols: Symbols,
    fmt: Callable[[Due], str] = time_to_output,
) -> str:
    """Title line, a blank line, then the task blocks."""
    tasks = "\n".join(task_s(t, symbols, fmt) for t in task_list.tasks)
    if tasks.strip():
        tasks += "\n"
    return space(symbols.title, f"{task_list.title}\n\n{tasks}")


def serialize(
    lists: Lists,
    symbols: Symbols = DEFAULT_SYMBOLS,
    local_times: bool = False,
    tz: Optional[tzinfo] = None,
) -> str:
    fmt = time_fn(local_times, tz)
    return "\n".join(list_s(item, symbols, fmt) for item in lists.items)


def serialize_with(lists: Lists, settings: Settings) -> str:
    """serialize() driven by a Settings record."""
    return serialize(
        lists,
        settings.symbols,
        local_times=settings.local_times,
        tz=resolve_timezone(settings.tz),
    )
