from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

import yaml

log = logging.getLogger(__name__)


CONFIG_ENV_VAR = "TINYSH_CONFIG"
CONFIG_FILENAMES_TOML = ("tinysh.toml",)
CONFIG_FILENAMES_YAML = ("tinysh.yaml", "tinysh.yml")
DEFAULT_CONFIG_DIR_UNIX = Path.home() / ".config" / "tinysh"


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"
    dir: Optional[Path] = None


@dataclass(frozen=True)
class ShellConfig:
    prompt: str = "$ "
    default_exit_code: int = 127
    # Report malformed redirections instead of ignoring them
    strict_redirection: bool = False
    debug: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: Optional[Path] = None


def _find_config_file(explicit: Optional[Path]) -> Optional[Path]:
    if explicit is not None:
        return explicit

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.exists():
            return p

    for directory in (Path.cwd(), DEFAULT_CONFIG_DIR_UNIX):
        for name in (*CONFIG_FILENAMES_TOML, *CONFIG_FILENAMES_YAML):
            candidate = directory / name
            if candidate.exists():
                return candidate

    return None


def _read_toml(p: Path) -> Dict[str, Any]:
    with p.open("rb") as f:
        return tomllib.load(f)  # type: ignore[no-any-return]


def _read_yaml(p: Path) -> Dict[str, Any]:
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML config must be a mapping at top-level: {p}")
    return data


def read_config_file(p: Path) -> Dict[str, Any]:
    if p.suffix.lower() == ".toml":
        return _read_toml(p)
    return _read_yaml(p)


def load_config(*, config_path: Optional[Path] = None) -> ShellConfig:
    defaults = ShellConfig()

    file_path = _find_config_file(config_path)
    raw: Dict[str, Any] = {}
    if file_path is not None:
        try:
            raw = read_config_file(file_path)
            log.debug("Loaded config from %s", file_path)
        except (OSError, ValueError, yaml.YAMLError, tomllib.TOMLDecodeError) as exc:
            print(f"Failed to load config: {exc}", file=sys.stderr)
            raw = {}
            file_path = None

    default_exit_code = defaults.default_exit_code
    if "default_exit_code" in raw:
        try:
            default_exit_code = int(raw["default_exit_code"])
        except (TypeError, ValueError) as exc:
            print(f"Failed to load config: default_exit_code: {exc}", file=sys.stderr)

    raw_logging = raw.get("logging") if isinstance(raw.get("logging"), dict) else {}
    log_dir = raw_logging.get("dir")
    if log_dir is not None:
        log_dir = Path(log_dir).expanduser()
        if not log_dir.is_absolute() and file_path is not None:
            log_dir = (file_path.parent / log_dir).resolve()

    return ShellConfig(
        prompt=str(raw.get("prompt", defaults.prompt)),
        default_exit_code=default_exit_code,
        strict_redirection=bool(raw.get("strict_redirection", defaults.strict_redirection)),
        debug=bool(raw.get("debug", defaults.debug)),
        logging=LoggingConfig(
            level=str(raw_logging.get("level", defaults.logging.level)).upper(),
            dir=log_dir,
        ),
        source=file_path,
    )
