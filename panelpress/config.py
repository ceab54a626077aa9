"""Process configuration — env-driven via pydantic-settings.

Read once by the CLI and converted into the frozen ``FetchConfig`` and
``DeployConfig`` value objects.  Nothing below the CLI reads the
environment.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from panelpress.errors import ConfigurationError
from panelpress.models.config import DEFAULT_API_BASE, DeployConfig, FetchConfig
from panelpress.models.site import SiteMetadata

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class PublishSettings(BaseSettings):
    """Publish settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export COMIC_SLUG=my-comic
        export DEPLOY_URL=https://mycomic.example/deployer.php
        export DEPLOY_SECRET=...

    Or via .env file::

        COMIC_SLUG=my-comic
        BUILD_DIR=_site
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Content source
    cms_api_url: str = DEFAULT_API_BASE
    comic_slug: str = ""

    # Deployment target
    deploy_url: str = ""
    deploy_secret: str = ""
    build_dir: Path = Path("_site")
    archive_path: Path = Path("site-bundle.zip")

    # Feed / SEO metadata
    site_url: str = "https://example.com"
    site_language: str = "en"

    # Observability
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> Any:
        """Accept level names case-insensitively."""
        if isinstance(v, str):
            level = v.strip().upper()
            if level not in LOG_LEVELS:
                msg = f"Invalid log level: {v!r} (expected one of {', '.join(LOG_LEVELS)})"
                raise ValueError(msg)
            return level
        return v

    @classmethod
    def load(cls, **overrides: Any) -> PublishSettings:
        """Read settings, reporting invalid values as ``ConfigurationError``."""
        try:
            return cls(**overrides)
        except ValidationError as exc:
            problems = "; ".join(
                f"{' -> '.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in exc.errors()
            )
            raise ConfigurationError(f"Invalid settings: {problems}") from exc

    def fetch_config(self) -> FetchConfig:
        """Build the manifest fetch config.

        Raises ``ConfigurationError`` if ``COMIC_SLUG`` is not set.
        """
        if not self.comic_slug:
            raise ConfigurationError("COMIC_SLUG environment variable is required")
        return FetchConfig(api_base=self.cms_api_url, comic_slug=self.comic_slug)

    def deploy_config(self) -> DeployConfig:
        """Build the deploy config.  Completeness is checked by the orchestrator."""
        return DeployConfig(
            endpoint_url=self.deploy_url,
            shared_secret=self.deploy_secret,
            source_directory=self.build_dir,
            archive_path=self.archive_path,
        )

    def site_metadata(self) -> SiteMetadata:
        return SiteMetadata(url=self.site_url, language=self.site_language)
