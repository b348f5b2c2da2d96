"""Host environment access: variables, working directory, PATH and processes."""

from __future__ import annotations

import logging
import os
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from .exceptions import SpawnError

log = logging.getLogger(__name__)


class Environment(ABC):
    @abstractmethod
    def get(self, name: str) -> Optional[str]:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def getcwd(self) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    @abstractmethod
    def chdir(self, path: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class OsEnvironment(Environment):
    """Environment backed by ``os.environ`` and the process working directory."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self._environ = os.environ if environ is None else environ

    def get(self, name: str) -> Optional[str]:
        return self._environ.get(name)

    def getcwd(self) -> str:
        return os.getcwd()

    def chdir(self, path: str) -> None:
        os.chdir(path)


def search_path(env: Environment) -> List[Path]:
    raw = env.get("PATH") or ""
    return [Path(entry) for entry in raw.split(":") if entry]


def resolve_executable(name: str, env: Environment) -> Optional[Path]:
    """Return the first ``<dir>/<name>`` on PATH that is a regular file."""
    if not name:
        return None
    for directory in search_path(env):
        candidate = directory / name
        try:
            if candidate.is_file():
                return candidate
        except OSError:
            continue
    return None


@dataclass
class CompletedCommand:
    stdout: bytes
    stderr: bytes
    returncode: int


def spawn(executable: Path, argv: Sequence[str]) -> CompletedCommand:
    """Run ``argv`` with ``executable`` to completion, capturing its output."""
    log.debug("Spawning %s with argv %r", executable, list(argv))
    try:
        proc = subprocess.run(list(argv), executable=str(executable), capture_output=True)
    except OSError as exc:
        raise SpawnError(f"{argv[0] if argv else executable}: {exc.strerror or exc}") from exc
    log.debug("%s exited with %d", executable, proc.returncode)
    return CompletedCommand(stdout=proc.stdout, stderr=proc.stderr, returncode=proc.returncode)
