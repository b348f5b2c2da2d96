from __future__ import annotations

import pytest

from tinysh.commands import BUILTINS, Cd, Echo, Exit, NotFound, Pwd, Type, build, is_builtin
from tinysh.exceptions import ArgumentCountError, EmptyLineError, ParseError


def test_exit_without_code() -> None:
    assert build(["exit"]) == Exit(None)


@pytest.mark.parametrize("arg, code", [("3", 3), ("0", 0), ("-1", -1), ("+7", 7)])
def test_exit_with_code(arg: str, code: int) -> None:
    assert build(["exit", arg]) == Exit(code)


@pytest.mark.parametrize("arg", ["abc", "3.5", "", "1_0", " 3"])
def test_exit_with_non_integer_is_a_parse_error(arg: str) -> None:
    with pytest.raises(ParseError):
        build(["exit", arg])


def test_exit_with_two_arguments() -> None:
    with pytest.raises(ArgumentCountError):
        build(["exit", "1", "2"])


def test_echo_keeps_arguments_in_order() -> None:
    assert build(["echo", "b", "a", "b"]) == Echo(("b", "a", "b"))
    assert build(["echo"]) == Echo(())


def test_type_names() -> None:
    assert build(["type", "echo", "ls"]) == Type(("echo", "ls"))


def test_pwd_takes_no_arguments() -> None:
    assert build(["pwd"]) == Pwd()
    with pytest.raises(ArgumentCountError):
        build(["pwd", "x"])


def test_cd_arity() -> None:
    assert build(["cd"]) == Cd(None)
    assert build(["cd", "/tmp"]) == Cd("/tmp")
    with pytest.raises(ArgumentCountError):
        build(["cd", "a", "b"])


def test_unknown_name_is_not_found() -> None:
    assert build(["ls", "-l", "x"]) == NotFound("ls", ("-l", "x"))


def test_builtin_names_are_case_sensitive() -> None:
    assert build(["Echo", "hi"]) == NotFound("Echo", ("hi",))
    assert not is_builtin("EXIT")


def test_builtin_table() -> None:
    assert sorted(BUILTINS) == ["cd", "echo", "exit", "pwd", "type"]


def test_empty_token_list() -> None:
    with pytest.raises(EmptyLineError):
        build([])
