"""Site data export — the object the external renderer consumes."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from panelpress.content.navigation import build_site_navigation
from panelpress.content.page_index import build_page_index
from panelpress.errors import PanelpressError
from panelpress.models.manifest import Manifest
from panelpress.models.site import SiteData, SiteMetadata

logger = logging.getLogger(__name__)


def build_site_data(
    manifest: Manifest,
    api_base: str,
    metadata: SiteMetadata | None = None,
) -> SiteData:
    """Assemble the renderer's data object from a fetched manifest."""
    all_pages = build_page_index(manifest)
    logger.info(
        "Flattened %d chapters into %d pages",
        len(manifest.chapters),
        len(all_pages),
    )
    return SiteData(
        meta=manifest.meta,
        chapters=manifest.chapters,
        all_pages=all_pages,
        navigation=build_site_navigation(all_pages),
        social_links=manifest.social_links,
        nav_links=manifest.nav_links,
        api_base=api_base,
        metadata=metadata or SiteMetadata(),
    )


def write_site_data(site_data: SiteData, path: Path) -> Path:
    """Write ``site_data`` as JSON with the renderer's field names."""
    path = Path(path)
    payload = site_data.model_dump(mode="json", by_alias=True)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as exc:
        raise PanelpressError(f"Could not write site data to {path}: {exc}") from exc
    logger.info("Wrote site data to %s", path)
    return path
