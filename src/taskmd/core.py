"""Parser combinators (pure functions, no I/O).

A parser takes an Input and returns one of:

  - Present((value, remaining_input)) on success
  - ABSENT on a recoverable miss; nothing is consumed
  - Fatal(error) when a rule matched but is semantically invalid

Fatal is never recovered by or_, many or optional. It travels outward through
every combinator until the caller of run() decides what to do with it.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, List, Tuple, TypeVar, Union

from .maybe import ABSENT, Absent, Present

T = TypeVar("T")

_LINE_RE = re.compile(r"([^\r\n]*)[\r\n]*")
_BREAK_RE = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class Input:
    """Immutable view of the text still to be parsed."""

    text: str
    offset: int = 0

    @property
    def rest(self) -> str:
        return self.text[self.offset:]

    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    def startswith(self, s: str) -> bool:
        return self.text.startswith(s, self.offset)

    def advance(self, n: int) -> "Input":
        return Input(self.text, self.offset + n)

    def location(self) -> Tuple[int, int]:
        """Return the 1-based (line, column) of the current offset."""
        lines = _BREAK_RE.split(self.text[: self.offset])
        return len(lines), len(lines[-1]) + 1

    def current_line(self) -> str:
        """Return the text from the offset up to the next line break."""
        m = _LINE_RE.match(self.text, self.offset)
        return m.group(1)


@dataclass(frozen=True)
class Fatal:
    """A non-recoverable parse outcome carrying the error to raise."""

    error: Exception


Result = Union[Present[Tuple[T, Input]], Absent, Fatal]
Parser = Callable[[Input], Result]


def _ok(value: Any, rest: Input) -> Present:
    return Present((value, rest))


# --- Primitives ---


def satisfy(predicate: Callable[[str], bool]) -> Parser:
    """Consume one character if predicate(char) holds."""

    def parse(inp: Input) -> Result:
        if inp.at_end():
            return ABSENT
        ch = inp.text[inp.offset]
        if predicate(ch):
            return _ok(ch, inp.advance(1))
        return ABSENT

    return parse


def char(c: str) -> Parser:
    return satisfy(lambda ch: ch == c)


def literal(s: str) -> Parser:
    """Consume s exactly, or nothing at all."""

    def parse(inp: Input) -> Result:
        if inp.startswith(s):
            return _ok(s, inp.advance(len(s)))
        return ABSENT

    return parse


def line() -> Parser:
    """Capture the rest of the current line and skip the line breaks after it.

    Always succeeds. All consecutive CR/LF characters are consumed, so blank
    lines following the captured text are skipped as well.
    """

    def parse(inp: Input) -> Result:
        m = _LINE_RE.match(inp.text, inp.offset)
        return _ok(m.group(1), Input(inp.text, m.end()))

    return parse


def end_of_input() -> Parser:
    def parse(inp: Input) -> Result:
        if inp.at_end():
            return _ok(None, inp)
        return ABSENT

    return parse


def position() -> Parser:
    """Yield the current Input without consuming anything."""

    def parse(inp: Input) -> Result:
        return _ok(inp, inp)

    return parse


def fatal(error: Exception) -> Parser:
    def parse(inp: Input) -> Result:
        return Fatal(error)

    return parse


def ret(value: Any) -> Parser:
    """Succeed with value, consuming nothing."""

    def parse(inp: Input) -> Result:
        return _ok(value, inp)

    return parse


# --- Combinators ---


def bind(p: Parser, f: Callable[[Any], Parser]) -> Parser:
    """Run p, then the parser f(value) on the remainder."""

    def parse(inp: Input) -> Result:
        result = p(inp)
        if not isinstance(result, Present):
            return result
        value, rest = result.value
        return f(value)(rest)

    return parse


def then(p: Parser, q: Parser) -> Parser:
    """Run p, discard its value, then run q."""
    return bind(p, lambda _: q)


def seq(*parsers: Parser) -> Parser:
    """Run parsers in order, yielding the list of their values."""

    def parse(inp: Input) -> Result:
        values: List[Any] = []
        current = inp
        for p in parsers:
            result = p(current)
            if not isinstance(result, Present):
                return result
            value, current = result.value
            values.append(value)
        return _ok(values, current)

    return parse


def fmap(p: Parser, f: Callable[[Any], Any]) -> Parser:
    def parse(inp: Input) -> Result:
        result = p(inp)
        if not isinstance(result, Present):
            return result
        value, rest = result.value
        return _ok(f(value), rest)

    return parse


def or_(p1: Parser, p2: Parser) -> Parser:
    """Try p1; on a miss, try p2 at the same position. Left-biased."""

    def parse(inp: Input) -> Result:
        result = p1(inp)
        if isinstance(result, Absent):
            return p2(inp)
        return result

    return parse


def many(p: Parser) -> Parser:
    """Apply p until it misses; never misses itself.

    Stops after a success that consumed nothing, so many(ret(x)) terminates.
    """

    def parse(inp: Input) -> Result:
        values: List[Any] = []
        current = inp
        while True:
            result = p(current)
            if isinstance(result, Fatal):
                return result
            if isinstance(result, Absent):
                break
            value, rest = result.value
            values.append(value)
            if rest.offset == current.offset:
                break
            current = rest
        return _ok(values, current)

    return parse


def many1(p: Parser) -> Parser:
    return bind(p, lambda first: fmap(many(p), lambda rest: [first] + rest))


def optional(p: Parser) -> Parser:
    """Yield Present(value) if p matches, else ABSENT without consuming."""

    def parse(inp: Input) -> Result:
        result = p(inp)
        if isinstance(result, Present):
            value, rest = result.value
            return _ok(Present(value), rest)
        if isinstance(result, Fatal):
            return result
        return _ok(ABSENT, inp)

    return parse


def skip_whitespace() -> Parser:
    return fmap(many(satisfy(str.isspace)), "".join)


def run(p: Parser, text: str) -> Result:
    """Apply p to the whole of text."""
    return p(Input(text))
