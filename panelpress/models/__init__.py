"""Panelpress data models — all Pydantic v2, all frozen (immutable)."""

from panelpress.models.config import DEFAULT_API_BASE, DeployConfig, FetchConfig
from panelpress.models.deploy import (
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    ArchiveBundle,
    DeployResult,
    DeployState,
    DeployTransition,
    UploadResult,
)
from panelpress.models.manifest import Chapter, Manifest, Page, PageRecord
from panelpress.models.navigation import NavigationLinks, SiteNavigation
from panelpress.models.site import SiteData, SiteMetadata

__all__ = [
    # config
    "DEFAULT_API_BASE",
    "FetchConfig",
    "DeployConfig",
    # manifest
    "Page",
    "Chapter",
    "Manifest",
    "PageRecord",
    # navigation
    "NavigationLinks",
    "SiteNavigation",
    # site
    "SiteMetadata",
    "SiteData",
    # deploy
    "DeployState",
    "VALID_TRANSITIONS",
    "TERMINAL_STATES",
    "DeployTransition",
    "ArchiveBundle",
    "UploadResult",
    "DeployResult",
]
