"""Content model derivation: fetch the manifest, flatten it, navigate it."""

from panelpress.content.fetcher import ManifestFetcher
from panelpress.content.navigation import (
    build_site_navigation,
    find_position,
    get_first_page,
    get_last_page,
    get_next_page,
    get_previous_page,
    resolve_navigation,
)
from panelpress.content.page_index import build_page_index, find_duplicate_slugs
from panelpress.content.site_data import build_site_data, write_site_data

__all__ = [
    "ManifestFetcher",
    "build_page_index",
    "find_duplicate_slugs",
    "find_position",
    "get_previous_page",
    "get_next_page",
    "get_first_page",
    "get_last_page",
    "resolve_navigation",
    "build_site_navigation",
    "build_site_data",
    "write_site_data",
]
