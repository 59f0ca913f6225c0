"""File I/O for task-list documents."""

import logging
import os

from .grammar import parse
from .models import Lists, Settings, resolve_timezone
from .serializer import serialize_with

logger = logging.getLogger(__name__)


def read_file(path: str, settings: Settings) -> Lists:
    """Load and parse a task-list file.

    Line endings are left untouched so CR/LF documents parse the same way as
    in memory. Raises ParseError or DueDateError if the text does not parse.
    """
    with open(path, "r", encoding="utf-8", newline="") as f:
        text = f.read()
    logger.debug("read %d characters from %s", len(text), path)
    return parse(text, settings.symbols, resolve_timezone(settings.tz))


def write_file(path: str, lists: Lists, settings: Settings) -> None:
    """Serialize lists and write them to path, creating parent directories."""
    text = serialize_with(lists, settings)
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)
    logger.debug("wrote %d characters to %s", len(text), path)


def convert_file(src: str, dst: str, settings: Settings) -> Lists:
    """Parse src and write it back out to dst. Nothing is written on error."""
    lists = read_file(src, settings)
    write_file(dst, lists, settings)
    logger.info("converted %s -> %s", src, dst)
    return lists
