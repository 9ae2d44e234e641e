"""Exceptions raised by myalang."""

from typing import Optional


class MYAError(Exception):
    """Base class for all myalang errors."""


class MYAParseError(MYAError):
    """
    Syntax error found after preprocessing.

    ``line`` is 1-based and ``column`` is the 0-based source column, both
    pointing back into the original file.
    """

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        if line is not None and column is not None:
            message = f"Parse error at line {line}:{column} - {message}"
        elif line is not None:
            message = f"Parse error at line {line} - {message}"
        super().__init__(message)
