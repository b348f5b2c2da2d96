from __future__ import annotations

import io
from pathlib import Path
from typing import Tuple

import pytest

from support import FakeEnvironment


@pytest.fixture()
def bin_dir(tmp_path: Path) -> Path:
    d = tmp_path / "bin"
    d.mkdir()
    return d


@pytest.fixture()
def fake_env(tmp_path: Path, bin_dir: Path) -> FakeEnvironment:
    return FakeEnvironment(tmp_path, {"PATH": str(bin_dir), "HOME": str(tmp_path / "home")})


@pytest.fixture()
def streams() -> Tuple[io.StringIO, io.StringIO]:
    return io.StringIO(), io.StringIO()
