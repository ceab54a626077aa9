"""Shared test fixtures for Panelpress."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from panelpress.content.page_index import build_page_index
from panelpress.models.config import DeployConfig, FetchConfig
from panelpress.models.manifest import Manifest, PageRecord

API_BASE = "https://cms.test"
COMIC_SLUG = "night-owls"
MANIFEST_URL = f"{API_BASE}/api/pub/v1/comics/{COMIC_SLUG}/manifest.json"
DEPLOY_URL = "https://mycomic.test/deployer.php"


@pytest.fixture
def manifest_payload() -> dict[str, Any]:
    """A manifest body as the content API returns it: two chapters, five pages."""
    return {
        "meta": {"title": "Night Owls", "author": "R. Vale"},
        "chapters": [
            {
                "id": 1,
                "title": "Dusk",
                "pages": [
                    {"slug": "dusk-1", "image": "/img/dusk-1.png", "alt": "A rooftop"},
                    {"slug": "dusk-2", "image": "/img/dusk-2.png"},
                    {"slug": "dusk-3", "image": "/img/dusk-3.png"},
                ],
            },
            {
                "id": 2,
                "title": "Midnight",
                "pages": [
                    {"slug": "midnight-1", "image": "/img/midnight-1.png"},
                    {"slug": "midnight-2", "image": "/img/midnight-2.png"},
                ],
            },
        ],
        "socialLinks": [{"label": "Mastodon", "url": "https://social.test/@owls"}],
    }


@pytest.fixture
def manifest(manifest_payload: dict[str, Any]) -> Manifest:
    return Manifest.model_validate(manifest_payload)


@pytest.fixture
def page_index(manifest: Manifest) -> list[PageRecord]:
    return build_page_index(manifest)


@pytest.fixture
def fetch_config() -> FetchConfig:
    return FetchConfig(api_base=API_BASE, comic_slug=COMIC_SLUG)


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """A small generated site: index.html, a stylesheet, and a nested page."""
    root = tmp_path / "_site"
    (root / "css").mkdir(parents=True)
    (root / "comic" / "dusk-1").mkdir(parents=True)
    (root / "index.html").write_text("<h1>Night Owls</h1>", encoding="utf-8")
    (root / "css" / "site.css").write_text("body { margin: 0; }", encoding="utf-8")
    (root / "comic" / "dusk-1" / "index.html").write_text("<img>", encoding="utf-8")
    return root


@pytest.fixture
def make_deploy_config(tmp_path: Path, site_dir: Path) -> Callable[..., DeployConfig]:
    """Factory fixture: build a DeployConfig with sensible defaults."""

    def _factory(**overrides: Any) -> DeployConfig:
        defaults: dict[str, Any] = {
            "endpoint_url": DEPLOY_URL,
            "shared_secret": "s3cret",
            "source_directory": site_dir,
            "archive_path": tmp_path / "site-bundle.zip",
        }
        defaults.update(overrides)
        return DeployConfig(**defaults)

    return _factory


@pytest.fixture
def deploy_config(make_deploy_config: Callable[..., DeployConfig]) -> DeployConfig:
    return make_deploy_config()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    """Isolate settings from the host: no publish env vars, no stray .env."""
    for name in (
        "CMS_API_URL",
        "COMIC_SLUG",
        "DEPLOY_URL",
        "DEPLOY_SECRET",
        "BUILD_DIR",
        "ARCHIVE_PATH",
        "SITE_URL",
        "SITE_LANGUAGE",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch
