"""Main Typer application — imports and registers all CLI commands.

Entry point: ``panelpress`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import typer

from panelpress.cli.commands.deploy import deploy_cmd
from panelpress.cli.commands.fetch import fetch_cmd
from panelpress.cli.commands.nav import nav_cmd

app = typer.Typer(
    name="panelpress",
    help="Panelpress: build the comic page model and deploy the generated site.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="fetch", help="Fetch the manifest and export site data.")(fetch_cmd)
app.command(name="nav", help="Show navigation links for a page.")(nav_cmd)
app.command(name="deploy", help="Zip the build output and upload it.")(deploy_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
