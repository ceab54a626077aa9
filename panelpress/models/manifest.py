"""Content manifest models: chapters, pages, and flattened page records."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Page(BaseModel):
    """A single comic page as published by the content source.

    Only ``slug`` is interpreted here.  Every other field (image URLs,
    alt text, publish dates, ...) is carried through untouched for the
    renderer.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    slug: str


class Chapter(BaseModel):
    """An ordered group of pages.  Page order is significant."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str | int
    title: str | None = ""
    pages: list[Page] = []


class Manifest(BaseModel):
    """Root manifest document for one comic.

    ``meta`` is site-level metadata and is opaque to the pipelines.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    meta: dict[str, Any] = {}
    chapters: list[Chapter]
    social_links: list[Any] = Field(default=[], alias="socialLinks")
    nav_links: list[Any] = Field(default=[], alias="navLinks")

    @property
    def page_count(self) -> int:
        """Total number of pages across every chapter."""
        return sum(len(chapter.pages) for chapter in self.chapters)


class PageRecord(Page):
    """A page enriched with its owning chapter's identity.

    Serialized with the renderer's field names (``chapterId`` and
    ``chapterTitle``) when dumped ``by_alias``.
    """

    group_id: str | int = Field(serialization_alias="chapterId")
    group_title: str | None = Field(serialization_alias="chapterTitle")
