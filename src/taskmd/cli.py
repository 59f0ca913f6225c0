"""taskmd command-line interface."""

import argparse
import logging
import sys
from typing import List, Optional

from .errors import TaskmdError
from .maybe import render_maybe
from .models import DEFAULT_INPUT, DEFAULT_OUTPUT, Lists, Settings, resolve_timezone
from .serializer import time_fn
from .storage import convert_file, read_file

logger = logging.getLogger(__name__)


def settings_from_args(args: argparse.Namespace) -> Settings:
    return Settings(local_times=args.local_times, tz=args.tz)


def print_lists(lists: Lists, show_done: bool, settings: Settings) -> None:
    """Print lists, tasks and subtasks with [ ]/[x] markers."""
    fmt = time_fn(settings.local_times, resolve_timezone(settings.tz))
    for item in lists.items:
        print(f"{settings.symbols.title} {item.title}")
        if not item.tasks:
            print("  (no tasks)")
        for i, t in enumerate(item.tasks, start=1):
            due = render_maybe(lambda d: f"  (due {fmt(d)})", t.due)
            print(f"{i:>3}. {t.name}{due}")
            for s in t.subtasks:
                if not show_done and s.complete:
                    continue
                marker = "[x]" if s.complete else "[ ]"
                print(f"       {marker} {s.name}")


def cmd_convert(args: argparse.Namespace) -> None:
    settings = settings_from_args(args)
    lists = convert_file(args.input, args.output, settings)
    print(f"Converted {len(lists.items)} list(s): {args.input} -> {args.output}")


def cmd_check(args: argparse.Namespace) -> None:
    lists = read_file(args.input, settings_from_args(args))
    tasks = [t for item in lists.items for t in item.tasks]
    subtasks = sum(len(t.subtasks) for t in tasks)
    print(
        f"OK: {len(lists.items)} list(s), {len(tasks)} task(s), "
        f"{subtasks} subtask(s)"
    )


def cmd_list(args: argparse.Namespace) -> None:
    settings = settings_from_args(args)
    lists = read_file(args.input, settings)
    print_lists(lists, show_done=args.all, settings=settings)


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    p = argparse.ArgumentParser(
        prog="taskmd", description="Parse and rewrite markdown task lists."
    )
    p.add_argument(
        "-i",
        "--input",
        default=DEFAULT_INPUT,
        help=f"Path to the input document (default: {DEFAULT_INPUT})",
    )
    p.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help=f"Path to write the output document (default: {DEFAULT_OUTPUT})",
    )
    p.add_argument(
        "--local-times",
        action="store_true",
        help="Write due dates in local time instead of UTC",
    )
    p.add_argument("--tz", default=None, help="IANA time zone name (default: system)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    p.set_defaults(func=cmd_convert)
    sub = p.add_subparsers(dest="cmd")

    s_convert = sub.add_parser("convert", help="Parse the input and write it back out")
    s_convert.set_defaults(func=cmd_convert)

    s_check = sub.add_parser("check", help="Parse the input and report counts")
    s_check.set_defaults(func=cmd_check)

    s_list = sub.add_parser(
        "list", help="Show tasks (default hides completed subtasks)"
    )
    s_list.add_argument(
        "--all", action="store_true", help="Show completed subtasks too"
    )
    s_list.set_defaults(func=cmd_list)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point. Converts the input file if no subcommand is given."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        args.func(args)
    except (TaskmdError, OSError) as e:
        logger.debug("command %s failed", args.cmd or "convert", exc_info=True)
        sys.exit(f"error: {e}")


if __name__ == "__main__":
    main()
