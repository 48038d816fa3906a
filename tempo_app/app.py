"""Application entry point: command registry and CLI router."""

from __future__ import annotations

import logging
from collections.abc import Callable
from importlib import import_module
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from tempo_app.core.config import APP_NAME, load_settings
from tempo_app.core.service import WorklogService
from tempo_app.core.tempo_client import TempoAPI

COMMANDS: dict[str, Callable] = {}
COMMANDS_DIR = Path(__file__).parent / "commands"

console = Console()
err_console = Console(stderr=True)
cli = typer.Typer(name=APP_NAME, help="Log work time to Tempo and report on it.", no_args_is_help=True)


def register_command(name: str, aliases: tuple[str, ...] = ()):
    def decorator(func):
        COMMANDS[name] = func
        cli.command(name)(func)
        for alias in aliases:
            cli.command(alias, hidden=True)(func)
        return func

    return decorator


@cli.callback()
def _root(debug: bool = typer.Option(False, "--debug", help="Verbose logging to stderr")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_service() -> WorklogService:
    settings = load_settings()
    api = TempoAPI(
        settings.tempo_token,
        settings.account_id,
        settings.tempo_server,
        page_size=settings.page_size,
        cache_ttl=settings.cache_ttl,
    )
    return WorklogService(api, settings)


def fail(exc: Exception) -> NoReturn:
    err_console.print(f"[red]{escape(str(exc))}[/red]")
    raise typer.Exit(code=1)


def load_commands() -> None:
    """Import every module in ``tempo_app/commands`` so each registers itself."""
    for py in sorted(COMMANDS_DIR.glob("[!_]*.py")):
        import_module(f"tempo_app.commands.{py.stem}")


def main():
    load_commands()
    cli()
