"""Exceptions raised at the parse boundary."""


class TaskmdError(Exception):
    """Base class for all taskmd errors."""


class ParseError(TaskmdError):
    """The document did not match the grammar."""

    def __init__(self, line: int, column: int, context: str = ""):
        self.line = line
        self.column = column
        self.context = context
        msg = f"could not parse document at line {line}, column {column}"
        if context:
            msg += f": {context!r}"
        super().__init__(msg)


class DueDateError(TaskmdError):
    """A due-date line matched but its text is not a date/time."""

    def __init__(self, text: str, line: int = 0, column: int = 0):
        self.text = text
        self.line = line
        self.column = column
        where = f" (line {line}, column {column})" if line else ""
        super().__init__(f"invalid due date format: {text!r}{where}")


class TimezoneError(TaskmdError):
    """A time zone name could not be resolved."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown time zone: {name!r}")
