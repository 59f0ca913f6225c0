"""Task-list grammar built from the combinators in core.

Every rule is a function of the Symbols table and returns a parser. Each rule
starts with a distinct literal prefix, so or_/many/optional only ever need to
look at the start of a line to decide.
"""

import logging
import re
from datetime import datetime, tzinfo
from typing import Optional

from .core import (
    Fatal,
    Input,
    Parser,
    bind,
    char,
    end_of_input,
    fatal,
    fmap,
    line,
    literal,
    many,
    many1,
    optional,
    or_,
    position,
    ret,
    run,
    seq,
    skip_whitespace,
    then,
)
from .errors import DueDateError, ParseError
from .maybe import ABSENT, Absent, Present
from .models import (
    DEFAULT_SYMBOLS,
    Due,
    Lists,
    Subtask,
    Symbols,
    Task,
    TaskList,
    assume_zone,
)

logger = logging.getLogger(__name__)

# Tried in order when the text is not ISO 8601.
DATE_FORMATS = (
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%Y %I:%M:%S %p",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
)

_ISO_BASIC_RE = re.compile(
    r"(\d{4})(\d{2})(\d{2})(?:T(\d{2})(\d{2})(\d{2})?)?(?![\d:-])"
)
_FRACTION_RE = re.compile(r"[.,](\d+)")
_OFFSET_RE = re.compile(r"(?<=\d)([+-])(\d{2}):?(\d{2})$")


def normalize_iso(text: str) -> str:
    """Rewrite ISO 8601 text into the form fromisoformat accepts on 3.9+.

    Basic format (20240101T000000) gets its separators back, fractions are
    cut or padded to six digits, Z becomes +00:00 and +HHMM becomes +HH:MM.
    """
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    m = _ISO_BASIC_RE.match(text)
    if m:
        year, month, day, hour, minute, second = m.groups()
        head = f"{year}-{month}-{day}"
        if hour:
            head += f"T{hour}:{minute}"
            if second:
                head += f":{second}"
        text = head + text[m.end():]
    text = _FRACTION_RE.sub(
        lambda f: "." + f.group(1)[:6].ljust(6, "0"), text, count=1
    )
    return _OFFSET_RE.sub(r"\1\2:\3", text)


def parse_when(text: str, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Parse a due-date string into an aware datetime, or None.

    Naive values are taken to be in tz (system local time when tz is None).
    """
    text = text.strip()
    if not text:
        return None
    when = None
    try:
        when = datetime.fromisoformat(normalize_iso(text))
    except ValueError:
        for fmt in DATE_FORMATS:
            try:
                when = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if when is None:
        return None
    return assume_zone(when, tz)


def sym(prefix: str) -> Parser:
    """Match prefix followed by exactly one space; yields None."""
    return fmap(then(literal(prefix), char(" ")), lambda _: None)


def subtask_complete() -> Parser:
    """Match "[x] " or "[ ] "; yields True for x."""
    mark = or_(char("x"), char(" "))
    return fmap(seq(char("["), mark, char("]"), char(" ")), lambda v: v[1] == "x")


def subtask(symbols: Symbols) -> Parser:
    return fmap(
        then(sym(symbols.subtask), seq(subtask_complete(), line())),
        lambda v: Subtask(complete=v[0], name=v[1]),
    )


def _collapse(lines):
    text = "\n".join(lines)
    if not text.strip():
        return ABSENT
    return Present(text)


def description(symbols: Symbols) -> Parser:
    """Zero or more description lines; ABSENT if they hold only whitespace."""
    return fmap(many(then(sym(symbols.description), line())), _collapse)


def due(symbols: Symbols, tz: Optional[tzinfo] = None) -> Parser:
    """Optional due line. Text that is not a date is Fatal, not a miss."""

    def check(start: Input, text) -> Parser:
        if isinstance(text, Absent):
            return ret(ABSENT)
        when = parse_when(text.value, tz)
        if when is None:
            line_no, col = start.location()
            col += len(symbols.due) + 1
            return fatal(DueDateError(text.value, line_no, col))
        return ret(Present(Due(when)))

    dated = optional(then(sym(symbols.due), line()))
    return bind(position(), lambda start: bind(dated, lambda text: check(start, text)))


def task_name(symbols: Symbols) -> Parser:
    return then(sym(symbols.task), line())


def list_title(symbols: Symbols) -> Parser:
    return then(sym(symbols.title), line())


def task(symbols: Symbols, tz: Optional[tzinfo] = None) -> Parser:
    """Name, due, description and subtasks, in that order."""
    return fmap(
        seq(
            task_name(symbols),
            due(symbols, tz),
            description(symbols),
            many(subtask(symbols)),
        ),
        lambda v: Task(name=v[0], due=v[1], description=v[2], subtasks=v[3]),
    )


def task_list(symbols: Symbols, tz: Optional[tzinfo] = None) -> Parser:
    return fmap(
        seq(list_title(symbols), many(task(symbols, tz))),
        lambda v: TaskList(title=v[0], tasks=v[1]),
    )


def document(
    symbols: Symbols = DEFAULT_SYMBOLS, tz: Optional[tzinfo] = None
) -> Parser:
    """One or more lists, optional trailing whitespace, then end of input."""
    return bind(
        many1(task_list(symbols, tz)),
        lambda items: then(
            skip_whitespace(), then(end_of_input(), ret(Lists(items)))
        ),
    )


def _diagnose(text: str, symbols: Symbols, tz: Optional[tzinfo]) -> ParseError:
    """Find where the list sequence stopped matching."""
    result = run(then(many(task_list(symbols, tz)), skip_whitespace()), text)
    stop = result.value[1] if isinstance(result, Present) else Input(text)
    line_no, col = stop.location()
    return ParseError(line_no, col, stop.current_line())


def parse(
    text: str, symbols: Symbols = DEFAULT_SYMBOLS, tz: Optional[tzinfo] = None
) -> Lists:
    """Parse a whole document.

    Raises DueDateError for an unparseable due date and ParseError when the
    document does not match.
    """
    result = run(document(symbols, tz), text)
    if isinstance(result, Fatal):
        logger.debug("fatal error while parsing: %s", result.error)
        raise result.error
    if isinstance(result, Absent):
        raise _diagnose(text, symbols, tz)
    lists, _ = result.value
    logger.debug(
        "parsed %d list(s), %d task(s)",
        len(lists.items),
        sum(len(item.tasks) for item in lists.items),
    )
    return lists
