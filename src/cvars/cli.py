"""Typer CLI for cvars."""

from __future__ import annotations

import json
import platform
from pathlib import Path

import typer

from cvars.config import load_settings
from cvars.core.registry import is_valid_name
from cvars.logging import configure_logging
from cvars.storage.cfg_file import read_config

app = typer.Typer(no_args_is_help=True)


@app.command()
def doctor() -> None:
    """Print environment diagnostics."""

    settings = load_settings()
    configure_logging(settings)
    info = {
        "python": platform.python_version(),
        "platform": platform.platform(),
        "paths": {
            "home": str(settings.paths.base_dir),
            "config": str(settings.config_path),
            "logs": str(settings.paths.logs_dir),
        },
    }
    typer.echo(json.dumps(info, indent=2))


@app.command()
def settings(key: str | None = typer.Argument(None)) -> None:
    """Display current settings or a specific section."""

    data = load_settings().model_dump()
    if key:
        data = data.get(key, {})
    typer.echo(json.dumps(data, indent=2, default=str))


@app.command()
def check(path: Path = typer.Argument(..., exists=True, dir_okay=False)) -> None:
    """Validate a saved cvar file."""

    doc = read_config(path)
    problems = [str(err) for err in doc.errors]
    entries: dict[str, str] = {}
    for entry in doc.entries:
        if not is_valid_name(entry.name):
            problems.append(f"line {entry.lineno}: invalid cvar name {entry.name!r}")
        elif entry.name in entries:
            problems.append(f"line {entry.lineno}: duplicate cvar {entry.name!r}")
        else:
            entries[entry.name] = entry.value

    typer.echo(json.dumps({"entries": entries, "problems": problems}, indent=2))
    if problems:
        raise typer.Exit(code=1)
