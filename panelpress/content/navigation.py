"""Navigation resolver — previous/next/first/last over a page index.

All functions are pure: the same (index, slug) always yields the same
links.  Unknown slugs are permitted and simply have no neighbours.
"""

from __future__ import annotations

from collections.abc import Sequence

from panelpress.models.manifest import PageRecord
from panelpress.models.navigation import NavigationLinks, SiteNavigation


def find_position(pages: Sequence[PageRecord], slug: str) -> int | None:
    """Return the index of the first record with ``slug``, or ``None``."""
    for position, page in enumerate(pages):
        if page.slug == slug:
            return position
    return None


def get_previous_page(pages: Sequence[PageRecord], slug: str) -> PageRecord | None:
    position = find_position(pages, slug)
    if position is None or position == 0:
        return None
    return pages[position - 1]


def get_next_page(pages: Sequence[PageRecord], slug: str) -> PageRecord | None:
    position = find_position(pages, slug)
    if position is None or position >= len(pages) - 1:
        return None
    return pages[position + 1]


def get_first_page(pages: Sequence[PageRecord]) -> PageRecord | None:
    return pages[0] if pages else None


def get_last_page(pages: Sequence[PageRecord]) -> PageRecord | None:
    return pages[-1] if pages else None


def resolve_navigation(pages: Sequence[PageRecord], slug: str) -> NavigationLinks:
    """Compute the full set of navigation links for ``slug``."""
    return NavigationLinks(
        previous=get_previous_page(pages, slug),
        next=get_next_page(pages, slug),
        first=get_first_page(pages),
        last=get_last_page(pages),
    )


def build_site_navigation(pages: Sequence[PageRecord]) -> SiteNavigation:
    """Site-wide first/last/total summary for the renderer."""
    return SiteNavigation(
        first_page=get_first_page(pages),
        last_page=get_last_page(pages),
        total_pages=len(pages),
    )
