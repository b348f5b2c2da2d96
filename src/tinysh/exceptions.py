"""Exception types raised while parsing and running a shell line."""

from __future__ import annotations


class ShellError(Exception):
    """Base class for all per-command shell errors."""


class LexError(ShellError):
    """Raised when a line cannot be split into tokens."""


class UnterminatedEscapeError(LexError):
    """Raised when a line ends right after a backslash."""

    def __init__(self) -> None:
        super().__init__("line ended in a '\\'")


class ParseError(ShellError):
    """Raised when tokens do not form a valid command."""


class EmptyLineError(ParseError):
    """Raised when a line contains no command."""

    def __init__(self) -> None:
        super().__init__("line is empty")


class ArgumentCountError(ShellError):
    """Raised when a builtin receives the wrong number of arguments."""


class RedirectionError(ShellError):
    """Raised for a malformed redirection when strict parsing is enabled."""


class ShellIOError(ShellError):
    """Raised when a redirection target or a child process cannot be used."""


class SpawnError(ShellIOError):
    """Raised when an external command cannot be started."""
