from __future__ import annotations

from pathlib import Path

import pytest

from tinysh import config
from tinysh.config import LoggingConfig, ShellConfig, load_config


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(config.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(config, "DEFAULT_CONFIG_DIR_UNIX", tmp_path / "no-home-config")


def test_defaults_without_any_file() -> None:
    cfg = load_config()
    assert cfg == ShellConfig()
    assert cfg.prompt == "$ "
    assert cfg.default_exit_code == 127
    assert cfg.strict_redirection is False
    assert cfg.logging == LoggingConfig()


def test_toml_in_working_directory(tmp_path: Path) -> None:
    (tmp_path / "tinysh.toml").write_text(
        'prompt = "> "\ndebug = true\n[logging]\nlevel = "debug"\ndir = "logs"\n'
    )
    cfg = load_config()
    assert cfg.prompt == "> "
    assert cfg.debug is True
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.dir == (tmp_path / "logs").resolve()
    assert cfg.source is not None
    assert cfg.source.resolve() == (tmp_path / "tinysh.toml").resolve()


def test_yaml_from_environment_variable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "elsewhere.yml"
    path.write_text("strict_redirection: true\ndefault_exit_code: 1\n")
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(path))
    cfg = load_config()
    assert cfg.strict_redirection is True
    assert cfg.default_exit_code == 1


def test_explicit_path_wins(tmp_path: Path) -> None:
    (tmp_path / "tinysh.toml").write_text('prompt = "cwd> "\n')
    explicit = tmp_path / "explicit.toml"
    explicit.write_text('prompt = "explicit> "\n')
    assert load_config(config_path=explicit).prompt == "explicit> "


def test_home_config_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    home_cfg = tmp_path / "home-config"
    home_cfg.mkdir()
    (home_cfg / "tinysh.yaml").write_text("prompt: 'home> '\n")
    monkeypatch.setattr(config, "DEFAULT_CONFIG_DIR_UNIX", home_cfg)
    assert load_config().prompt == "home> "


def test_non_mapping_yaml_falls_back_to_defaults(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "tinysh.yaml").write_text("- just\n- a list\n")
    cfg = load_config()
    assert cfg == ShellConfig()
    assert "Failed to load config" in capsys.readouterr().err


def test_non_numeric_exit_code_falls_back_to_default(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "tinysh.toml").write_text('default_exit_code = "abc"\nprompt = "% "\n')
    cfg = load_config()
    assert cfg.default_exit_code == 127
    assert cfg.prompt == "% "
    assert "default_exit_code" in capsys.readouterr().err
