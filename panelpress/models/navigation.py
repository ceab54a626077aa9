"""Navigation views derived from a page index.  Never persisted."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from panelpress.models.manifest import PageRecord


class NavigationLinks(BaseModel):
    """Previous/next/first/last references for one page.

    Any link may be ``None``: previous/next are absent at the ends of the
    index or for an unknown slug, first/last are absent for an empty index.
    """

    model_config = ConfigDict(frozen=True)

    previous: PageRecord | None = None
    next: PageRecord | None = None
    first: PageRecord | None = None
    last: PageRecord | None = None


class SiteNavigation(BaseModel):
    """Site-wide navigation index handed to the renderer."""

    model_config = ConfigDict(frozen=True)

    first_page: PageRecord | None = Field(default=None, serialization_alias="firstPage")
    last_page: PageRecord | None = Field(default=None, serialization_alias="lastPage")
    total_pages: int = Field(default=0, serialization_alias="totalPages")
