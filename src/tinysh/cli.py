from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import typer

from . import __version__
from .config import ShellConfig, load_config
from .logging_setup import setup_logging
from .shell import Shell

app = typer.Typer(
    add_completion=False,
    help="A small interactive shell with quoting, escaping and output redirection.",
)
config_app = typer.Typer(help="Inspect the resolved configuration.")

log = logging.getLogger(__name__)


@dataclass
class State:
    config: ShellConfig


def _run_shell(config: ShellConfig) -> None:
    shell = Shell(config)
    code = shell.run()
    log.debug("Shell loop finished with code %d", code)
    raise typer.Exit(code)


@app.callback(invoke_without_command=True)
def _load_config(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a configuration file (TOML or YAML). Overrides discovery.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    cfg = load_config(config_path=config)
    if debug:
        cfg = replace(cfg, debug=True)
    setup_logging(level="DEBUG" if cfg.debug else cfg.logging.level, log_dir=cfg.logging.dir)
    ctx.obj = State(config=cfg)
    if ctx.invoked_subcommand is None:
        _run_shell(cfg)


@app.command(name="version")
def version() -> None:
    """Print version information."""
    typer.echo(__version__)


@app.command(name="run")
def run(
    ctx: typer.Context,
    prompt: Optional[str] = typer.Option(None, help="Prompt string. Overrides config."),
    strict_redirection: Optional[bool] = typer.Option(
        None,
        "--strict-redirection/--lenient-redirection",
        help="Report malformed redirections instead of ignoring them. Overrides config.",
    ),
) -> None:
    """Start the interactive shell."""
    assert isinstance(ctx.obj, State)
    cfg = ctx.obj.config
    if prompt is not None:
        cfg = replace(cfg, prompt=prompt)
    if strict_redirection is not None:
        cfg = replace(cfg, strict_redirection=strict_redirection)
    _run_shell(cfg)


@app.command(name="exec")
def exec_line(
    ctx: typer.Context,
    line: str = typer.Argument(..., help="Command line to execute."),
) -> None:
    """Execute a single command line and exit with its status."""
    assert isinstance(ctx.obj, State)
    result = Shell(ctx.obj.config).execute_line(line)
    raise typer.Exit(result.status)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the resolved configuration values."""
    assert isinstance(ctx.obj, State)
    cfg = ctx.obj.config
    lines = [
        f"source: {cfg.source or '<defaults>'}",
        f"prompt: {cfg.prompt!r}",
        f"default_exit_code: {cfg.default_exit_code}",
        f"strict_redirection: {cfg.strict_redirection}",
        f"debug: {cfg.debug}",
        "logging:",
        f"  level: {cfg.logging.level}",
        f"  dir:   {cfg.logging.dir or '<none>'}",
    ]
    for l in lines:
        typer.echo(l)


app.add_typer(config_app, name="config")
