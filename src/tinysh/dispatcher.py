from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Sequence

from .commands import Cd, Command, Echo, Exit, NotFound, Pwd, Type, is_builtin
from .environment import CompletedCommand, Environment, resolve_executable, spawn
from .router import OutputRouter

log = logging.getLogger(__name__)

DEFAULT_EXIT_CODE = 127
NOT_FOUND_STATUS = 127

Spawner = Callable[[Path, Sequence[str]], CompletedCommand]


@dataclass
class ExecutionResult:
    status: int = 0
    exit_requested: bool = False


class Dispatcher:
    """Runs a parsed command, writing its output through an open router."""

    def __init__(
        self,
        env: Environment,
        *,
        default_exit_code: int = DEFAULT_EXIT_CODE,
        spawner: Spawner = spawn,
    ) -> None:
        self.env = env
        self.default_exit_code = default_exit_code
        self.spawner = spawner
        self._handlers: Dict[type, Callable[..., ExecutionResult]] = {
            Exit: self._run_exit,
            Echo: self._run_echo,
            Type: self._run_type,
            Pwd: self._run_pwd,
            Cd: self._run_cd,
            NotFound: self._run_external,
        }

    def dispatch(self, command: Command, router: OutputRouter, line: str = "") -> ExecutionResult:
        handler = self._handlers[type(command)]
        log.debug("Dispatching %r", command)
        return handler(command, router, line)

    # ------------------------------------------------------------------
    # Builtins
    # ------------------------------------------------------------------
    def _run_exit(self, command: Exit, router: OutputRouter, line: str) -> ExecutionResult:
        code = self.default_exit_code if command.code is None else command.code
        log.info("Exiting with code %d", code)
        return ExecutionResult(status=code, exit_requested=True)

    def _run_echo(self, command: Echo, router: OutputRouter, line: str) -> ExecutionResult:
        if command.args:
            router.stdout.write(" ".join(command.args) + "\n")
        return ExecutionResult()

    def _run_type(self, command: Type, router: OutputRouter, line: str) -> ExecutionResult:
        status = 0
        for name in command.names:
            if is_builtin(name):
                router.stdout.write(f"{name} is a shell builtin\n")
                continue
            path = resolve_executable(name, self.env)
            if path is not None:
                router.stdout.write(f"{name} is {path}\n")
            else:
                router.stderr.write(f"{name}: not found\n")
                status = 1
        return ExecutionResult(status=status)

    def _run_pwd(self, command: Pwd, router: OutputRouter, line: str) -> ExecutionResult:
        router.stdout.write(self.env.getcwd() + "\n")
        return ExecutionResult()

    def _run_cd(self, command: Cd, router: OutputRouter, line: str) -> ExecutionResult:
        if command.path is None:
            return ExecutionResult()
        target = command.path
        if target == "~":
            home = self.env.get("HOME")
            if not home:
                router.stderr.write("cd: HOME not set\n")
                return ExecutionResult(status=1)
            target = home
        resolved = os.path.join(self.env.getcwd(), target)
        if not os.path.exists(resolved):
            router.stderr.write(f"cd: {command.path}: No such file or directory\n")
            return ExecutionResult(status=1)
        if not os.path.isdir(resolved):
            router.stderr.write(f"cd: {command.path}: Not a directory\n")
            return ExecutionResult(status=1)
        try:
            self.env.chdir(target)
        except OSError as exc:
            router.stderr.write(f"cd: {command.path}: {exc.strerror or exc}\n")
            return ExecutionResult(status=1)
        return ExecutionResult()

    # ------------------------------------------------------------------
    # External commands
    # ------------------------------------------------------------------
    def _run_external(self, command: NotFound, router: OutputRouter, line: str) -> ExecutionResult:
        path = resolve_executable(command.name, self.env)
        if path is None:
            shown = line.strip() or " ".join((command.name, *command.args))
            router.stderr.write(f"{shown}: command not found\n")
            return ExecutionResult(status=NOT_FOUND_STATUS)
        completed = self.spawner(path, [command.name, *command.args])
        if completed.stdout:
            router.stdout.write(completed.stdout)
        if completed.stderr:
            router.stderr.write(completed.stderr)
        return ExecutionResult(status=completed.returncode)
