"""Read-eval loop tying the lexer, router and dispatcher together."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from .commands import build
from .config import ShellConfig
from .dispatcher import Dispatcher, ExecutionResult
from .environment import Environment, OsEnvironment
from .exceptions import RedirectionError, ShellError
from .lexer import tokenize
from .redirection import Redirection, parse_redirection
from .router import OutputRouter

log = logging.getLogger(__name__)

ERROR_STATUS = 2


class Shell:
    """Interactive shell session reading commands from a line source."""

    def __init__(
        self,
        config: Optional[ShellConfig] = None,
        *,
        env: Optional[Environment] = None,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        dispatcher: Optional[Dispatcher] = None,
    ) -> None:
        self.config = config or ShellConfig()
        self.env = env or OsEnvironment()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.dispatcher = dispatcher or Dispatcher(self.env, default_exit_code=self.config.default_exit_code)

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------
    def run(self) -> int:
        """Prompt and execute lines until ``exit`` or end of input.

        Returns the code the process should exit with.
        """
        while True:
            self.stdout.write(self.config.prompt)
            self.stdout.flush()
            try:
                line = self.stdin.readline()
            except KeyboardInterrupt:
                self.stdout.write("\n")
                continue
            if not line:
                log.debug("End of input")
                return 0
            result = self.execute_line(line)
            if result.exit_requested:
                return result.status

    # ------------------------------------------------------------------
    # Single line
    # ------------------------------------------------------------------
    def execute_line(self, line: str) -> ExecutionResult:
        try:
            return self._execute(line)
        except ShellError as exc:
            log.debug("Command failed: %s", exc)
            self.stderr.write(f"tinysh: {exc}\n")
            self.stderr.flush()
            return ExecutionResult(status=ERROR_STATUS)

    def _execute(self, line: str) -> ExecutionResult:
        # The terminator belongs to the line source, not to the command
        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        lexed = tokenize(line)
        redirection = self._parse_redirection(lexed.redirection)
        command = build(lexed.tokens)
        with OutputRouter(redirection, stdout=self.stdout, stderr=self.stderr) as router:
            return self.dispatcher.dispatch(command, router, line)

    def _parse_redirection(self, raw: Optional[str]) -> Optional[Redirection]:
        if raw is None:
            return None
        redirection = parse_redirection(raw)
        if redirection is None:
            if self.config.strict_redirection:
                raise RedirectionError(f"malformed redirection: {raw.strip()}")
            log.debug("Ignoring malformed redirection %r", raw)
        return redirection
