from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from .exceptions import ArgumentCountError, EmptyLineError, ParseError

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Exit:
    code: Optional[int] = None


@dataclass(frozen=True)
class Echo:
    args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Type:
    names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Pwd:
    pass


@dataclass(frozen=True)
class Cd:
    path: Optional[str] = None


@dataclass(frozen=True)
class NotFound:
    name: str
    args: Tuple[str, ...] = ()


Command = Union[Exit, Echo, Type, Pwd, Cd, NotFound]


def _build_exit(args: List[str]) -> Exit:
    if not args:
        return Exit()
    if len(args) > 1:
        raise ArgumentCountError("exit: too many arguments")
    if not _INT_RE.fullmatch(args[0]):
        raise ParseError(f"exit: {args[0]}: numeric argument required")
    return Exit(int(args[0]))


def _build_echo(args: List[str]) -> Echo:
    return Echo(tuple(args))


def _build_type(args: List[str]) -> Type:
    return Type(tuple(args))


def _build_pwd(args: List[str]) -> Pwd:
    if args:
        raise ArgumentCountError("pwd: too many arguments")
    return Pwd()


def _build_cd(args: List[str]) -> Cd:
    if len(args) > 1:
        raise ArgumentCountError("cd: too many arguments")
    return Cd(args[0] if args else None)


BUILTINS: Dict[str, Callable[[List[str]], Command]] = {
    "echo": _build_echo,
    "exit": _build_exit,
    "type": _build_type,
    "pwd": _build_pwd,
    "cd": _build_cd,
}


def is_builtin(name: str) -> bool:
    return name in BUILTINS


def build(tokens: Sequence[str]) -> Command:
    """Turn the tokens of one line into exactly one command variant."""
    if not tokens:
        raise EmptyLineError()
    name, *args = tokens
    builder = BUILTINS.get(name)
    if builder is None:
        return NotFound(name, tuple(args))
    return builder(args)
