"""``panelpress deploy`` — zip the build output and upload it.

Runs one deployment through the orchestrator.  The shared secret is only
ever read from ``DEPLOY_SECRET``.  Exit status is 0 on success and 1 on
any configuration, archive, or upload failure; the archive is removed
before the command returns either way.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from panelpress.cli.commands._common import console, load_settings, report_failure
from panelpress.deploy.orchestrator import DeploymentOrchestrator
from panelpress.models.deploy import DeployResult, DeployState

_STATE_STYLES: dict[DeployState, str] = {
    DeployState.IDLE: "dim",
    DeployState.BUILDING: "yellow",
    DeployState.UPLOADING: "yellow",
    DeployState.CLEANING_UP: "cyan",
    DeployState.SUCCEEDED: "bold green",
    DeployState.FAILED: "bold red",
}


def _transitions_table(result: DeployResult) -> Table:
    table = Table(title="Deployment")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Detail", style="dim")
    for record in result.transitions:
        to_style = _STATE_STYLES[record.to_state]
        table.add_row(
            record.from_state.value,
            f"[{to_style}]{record.to_state.value}[/{to_style}]",
            escape(record.detail),
        )
    return table


def deploy_cmd(
    build_dir: Path = typer.Option(
        None,
        "--build-dir",
        "-b",
        help="Build output directory to deploy (overrides BUILD_DIR).",
    ),
    archive: Path = typer.Option(
        None,
        "--archive",
        help="Temporary archive path (overrides ARCHIVE_PATH).",
    ),
    url: str = typer.Option(
        None,
        "--url",
        help="Deployer endpoint URL (overrides DEPLOY_URL).",
    ),
) -> None:
    """Package the build directory and upload it to the deployer."""
    settings = load_settings(build_dir=build_dir, archive_path=archive, deploy_url=url)
    orchestrator = DeploymentOrchestrator(settings.deploy_config())

    result = orchestrator.run()

    console.print()
    console.print(_transitions_table(result))
    console.print()

    if not result.succeeded:
        report_failure("Deployment failed.", result.error)
        raise typer.Exit(code=1)

    lines = ["[bold green]Deployment successful![/bold green]", ""]
    if result.bundle is not None:
        lines.append(
            f"[bold]Bundle:[/bold]   {result.bundle.file_count} files, "
            f"{result.bundle.compressed_mb:.2f} MB"
        )
    if result.upload is not None:
        lines.append(f"[bold]Server:[/bold]   {escape(result.upload.body)}")
    console.print(
        Panel(
            "\n".join(lines),
            title="[bold]Panelpress[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
