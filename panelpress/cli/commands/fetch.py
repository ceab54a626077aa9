"""``panelpress fetch`` — fetch the manifest and export renderer data.

Fetches the comic manifest, flattens it into the page index, prints a
summary, and optionally writes the site data JSON the renderer reads.
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.markup import escape
from rich.panel import Panel

from panelpress.cli.commands._common import console, load_settings, report_failure
from panelpress.content.fetcher import ManifestFetcher
from panelpress.content.page_index import find_duplicate_slugs
from panelpress.content.site_data import build_site_data, write_site_data
from panelpress.errors import PanelpressError

logger = logging.getLogger(__name__)


def fetch_cmd(
    slug: str = typer.Option(
        None,
        "--slug",
        "-s",
        help="Comic slug (overrides COMIC_SLUG).",
    ),
    api_url: str = typer.Option(
        None,
        "--api-url",
        help="Content API base URL (overrides CMS_API_URL).",
    ),
    output: Path = typer.Option(
        None,
        "--output",
        "-o",
        help="Write site data JSON for the renderer to this path.",
    ),
) -> None:
    """Fetch the comic manifest and build the page index."""
    settings = load_settings(comic_slug=slug, cms_api_url=api_url)

    try:
        fetch_config = settings.fetch_config()
        with ManifestFetcher(fetch_config) as fetcher:
            manifest = fetcher.fetch()

        duplicates = find_duplicate_slugs(manifest)
        if duplicates:
            logger.warning(
                "Duplicate page slugs in manifest, navigation is undefined for: %s",
                ", ".join(duplicates),
            )

        site_data = build_site_data(
            manifest, fetch_config.api_base, settings.site_metadata()
        )
        if output is not None:
            write_site_data(site_data, output)
    except PanelpressError as exc:
        report_failure("Manifest fetch failed.", exc)
        raise typer.Exit(code=1)

    navigation = site_data.navigation
    first = navigation.first_page.slug if navigation.first_page else "-"
    last = navigation.last_page.slug if navigation.last_page else "-"
    lines = [
        "[bold green]Manifest fetched.[/bold green]",
        "",
        f"[bold]Comic:[/bold]    {escape(fetch_config.comic_slug)}",
        f"[bold]Chapters:[/bold] {len(manifest.chapters)}",
        f"[bold]Pages:[/bold]    {navigation.total_pages}",
        f"[bold]First:[/bold]    {escape(first)}",
        f"[bold]Last:[/bold]     {escape(last)}",
    ]
    if duplicates:
        lines.append(f"[bold yellow]Duplicate slugs:[/bold yellow] {len(duplicates)}")
    if output is not None:
        lines.extend(["", f"[dim]Site data written to {escape(str(output))}[/dim]"])

    console.print()
    console.print(
        Panel(
            "\n".join(lines),
            title="[bold]Panelpress[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
