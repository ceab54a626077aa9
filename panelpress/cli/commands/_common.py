"""Shared helpers for CLI commands: settings loading and failure output."""

from __future__ import annotations

from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from panelpress.config import PublishSettings
from panelpress.errors import ConfigurationError
from panelpress.logging_setup import configure_logging

console = Console()


def load_settings(**overrides: Any) -> PublishSettings:
    """Read settings from the environment, applying non-None CLI overrides.

    Also configures logging at the resulting ``log_level``.  Invalid
    settings end the command with exit code 1.
    """
    explicit = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = PublishSettings.load(**explicit)
    except ConfigurationError as exc:
        report_failure("Invalid configuration.", exc)
        raise typer.Exit(code=1)
    configure_logging(settings.log_level)
    return settings


def report_failure(summary: str, error: BaseException | None) -> None:
    """Print a one-line failure summary followed by the error detail."""
    console.print(f"[bold red]{escape(summary)}[/bold red]")
    if error is not None:
        console.print(f"  [red]{type(error).__name__}:[/red] {escape(str(error))}")
