"""Template data exported to the site renderer."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from panelpress.models.manifest import Chapter, PageRecord
from panelpress.models.navigation import SiteNavigation


class SiteMetadata(BaseModel):
    """Feed and SEO metadata for the generated site."""

    model_config = ConfigDict(frozen=True)

    url: str = "https://example.com"
    language: str = "en"


class SiteData(BaseModel):
    """Everything the renderer receives for one build.

    Dump with ``model_dump(mode="json", by_alias=True)`` to get the field
    names the templates expect (``allPages``, ``socialLinks``, ...).
    """

    model_config = ConfigDict(frozen=True)

    meta: dict[str, Any] = {}
    chapters: list[Chapter] = []
    all_pages: list[PageRecord] = Field(default=[], serialization_alias="allPages")
    navigation: SiteNavigation = SiteNavigation()
    social_links: list[Any] = Field(default=[], serialization_alias="socialLinks")
    nav_links: list[Any] = Field(default=[], serialization_alias="navLinks")
    api_base: str = Field(default="", serialization_alias="apiBase")
    metadata: SiteMetadata = SiteMetadata()
