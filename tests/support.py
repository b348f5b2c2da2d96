from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from tinysh.environment import CompletedCommand, Environment


class FakeEnvironment(Environment):
    def __init__(self, cwd: Path, variables: Optional[Dict[str, str]] = None) -> None:
        self.cwd = str(cwd)
        self.variables: Dict[str, str] = dict(variables or {})
        self.chdir_calls: List[str] = []

    def get(self, name: str) -> Optional[str]:
        return self.variables.get(name)

    def getcwd(self) -> str:
        return self.cwd

    def chdir(self, path: str) -> None:
        self.chdir_calls.append(path)
        self.cwd = os.path.normpath(os.path.join(self.cwd, path))


class RecordingSpawner:
    def __init__(self, stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0) -> None:
        self.result = CompletedCommand(stdout=stdout, stderr=stderr, returncode=returncode)
        self.calls: List[Tuple[Path, List[str]]] = []

    def __call__(self, executable: Path, argv: Sequence[str]) -> CompletedCommand:
        self.calls.append((executable, list(argv)))
        return self.result


def make_executable(directory: Path, name: str, body: str = "#!/bin/sh\n") -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path
