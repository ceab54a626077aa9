"""Page index builder — flattens chapters into one ordered page sequence.

The index is the single source of truth for navigation.  It is a pure,
order-preserving flatten-and-enrich: no sorting, filtering, or
deduplication.
"""

from __future__ import annotations

from collections import Counter

from panelpress.models.manifest import Manifest, PageRecord

# Renderer names of the chapter identity fields on a page record
CHAPTER_FIELD_ALIASES = ("chapterId", "chapterTitle")


def build_page_index(manifest: Manifest) -> list[PageRecord]:
    """Flatten ``manifest`` into enriched page records.

    Order is chapter order, then page order within each chapter.  A
    manifest with no chapters (or only empty chapters) yields ``[]``.
    """
    records: list[PageRecord] = []
    for chapter in manifest.chapters:
        for page in chapter.pages:
            fields = page.model_dump()
            # Chapter identity wins over a same-named page field
            for alias in CHAPTER_FIELD_ALIASES:
                fields.pop(alias, None)
            fields["group_id"] = chapter.id
            fields["group_title"] = chapter.title
            records.append(PageRecord.model_validate(fields))
    return records


def find_duplicate_slugs(manifest: Manifest) -> list[str]:
    """Return slugs that appear more than once across all chapters.

    Navigation over an index with duplicate slugs is undefined; callers
    that want a strict contract run this before flattening.  Result order
    follows first appearance.
    """
    counts = Counter(
        page.slug for chapter in manifest.chapters for page in chapter.pages
    )
    return [slug for slug, count in counts.items() if count > 1]
