"""Per-run configuration value objects.

Built once at the process boundary from ``PublishSettings`` and passed by
value into every component.  Frozen: no component may mutate them.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_BASE = "https://api.chimeracomics.org"


class FetchConfig(BaseModel):
    """Where to read the content manifest from."""

    model_config = ConfigDict(frozen=True)

    api_base: str = DEFAULT_API_BASE
    comic_slug: str = ""

    @property
    def manifest_url(self) -> str:
        """Fully qualified manifest URL for ``comic_slug``."""
        base = self.api_base.rstrip("/")
        return f"{base}/api/pub/v1/comics/{self.comic_slug}/manifest.json"


class DeployConfig(BaseModel):
    """Where to package from and where to deliver to.

    Completeness (non-empty endpoint and secret) is checked by the
    deployment orchestrator, not at construction, so that an incomplete
    config still ends a run in the ``failed`` state.
    """

    model_config = ConfigDict(frozen=True)

    endpoint_url: str = ""
    shared_secret: str = Field(default="", repr=False)
    source_directory: Path = Path("_site")
    archive_path: Path = Path("site-bundle.zip")

    def missing_fields(self) -> list[str]:
        """Return the names of required fields that are empty."""
        missing: list[str] = []
        if not self.endpoint_url:
            missing.append("endpoint_url")
        if not self.shared_secret:
            missing.append("shared_secret")
        return missing
