"""``panelpress nav PAGE`` — show navigation links for one page."""

from __future__ import annotations

import typer
from rich.markup import escape
from rich.table import Table

from panelpress.cli.commands._common import console, load_settings, report_failure
from panelpress.content.fetcher import ManifestFetcher
from panelpress.content.navigation import find_position, resolve_navigation
from panelpress.content.page_index import build_page_index
from panelpress.errors import PanelpressError
from panelpress.models.manifest import PageRecord


def _describe(page: PageRecord | None) -> tuple[str, str]:
    if page is None:
        return "[dim]-[/dim]", ""
    return escape(page.slug), escape(page.group_title or "")


def nav_cmd(
    page_slug: str = typer.Argument(
        ...,
        help="Slug of the page to resolve.",
    ),
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
) -> None:
    """Show previous/next/first/last pages for PAGE_SLUG."""
    settings = load_settings(comic_slug=slug, cms_api_url=api_url)

    try:
        with ManifestFetcher(settings.fetch_config()) as fetcher:
            manifest = fetcher.fetch()
    except PanelpressError as exc:
        report_failure("Manifest fetch failed.", exc)
        raise typer.Exit(code=1)

    pages = build_page_index(manifest)
    links = resolve_navigation(pages, page_slug)

    if find_position(pages, page_slug) is None:
        console.print(
            f"[yellow]Page '{escape(page_slug)}' is not in the index; "
            "it has no previous or next page.[/yellow]"
        )

    table = Table(title=f"Navigation for {escape(page_slug)}")
    table.add_column("Link", style="cyan")
    table.add_column("Page")
    table.add_column("Chapter", style="dim")
    for label, page in (
        ("previous", links.previous),
        ("next", links.next),
        ("first", links.first),
        ("last", links.last),
    ):
        table.add_row(label, *_describe(page))

    console.print(table)
