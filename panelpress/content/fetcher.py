"""Manifest fetcher — reads the comic manifest from the content API.

Single attempt, no caching.  Retry policy, if any, belongs to the caller.
"""

from __future__ import annotations

import json
import logging
from types import TracebackType

import httpx
from pydantic import ValidationError

from panelpress.errors import ConfigurationError, FetchError, ParseError, TransportError
from panelpress.models.config import FetchConfig
from panelpress.models.manifest import Manifest

logger = logging.getLogger(__name__)


class ManifestFetcher:
    """Fetches and parses ``{api_base}/api/pub/v1/comics/{slug}/manifest.json``.

    Parameters
    ----------
    config:
        The fetch config (API base and comic slug).
    client:
        An ``httpx.Client`` to reuse.  When omitted the fetcher owns a
        client of its own and closes it in ``close()``.
    timeout:
        Request timeout in seconds.  ``None`` keeps httpx's default.

    Usage::

        with ManifestFetcher(config) as fetcher:
            manifest = fetcher.fetch()
    """

    def __init__(
        self,
        config: FetchConfig,
        *,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self._config = config
        self._owns_client = client is None
        if client is not None:
            self._client = client
        elif timeout is not None:
            self._client = httpx.Client(timeout=timeout)
        else:
            self._client = httpx.Client()

    def __enter__(self) -> ManifestFetcher:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            self._client.close()

    @property
    def manifest_url(self) -> str:
        return self._config.manifest_url

    def fetch(self) -> Manifest:
        """Fetch and parse the manifest.

        Raises
        ------
        ConfigurationError
            If the comic slug is empty or the API URL is malformed.  No
            request is made.
        TransportError
            On DNS, connection, or timeout failures.
        FetchError
            On any non-2xx response once redirects have been followed.
        ParseError
            If the body is not JSON or not shaped like a manifest.
        """
        if not self._config.comic_slug:
            raise ConfigurationError("COMIC_SLUG environment variable is required")

        url = self.manifest_url
        logger.info("Fetching manifest from: %s", url)

        try:
            response = self._client.get(url, follow_redirects=True)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise ConfigurationError(f"Invalid content API URL {url!r}: {exc}") from exc
        except httpx.TransportError as exc:
            raise TransportError(f"Could not reach content API at {url}: {exc}") from exc

        if not response.is_success:
            raise FetchError(response.status_code, response.reason_phrase, url=url)

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ParseError(f"Manifest at {url} is not valid JSON: {exc}") from exc

        try:
            manifest = Manifest.model_validate(payload)
        except ValidationError as exc:
            raise ParseError(f"Manifest at {url} has an unexpected shape: {exc}") from exc

        logger.debug(
            "Manifest parsed: %d chapters, %d pages",
            len(manifest.chapters),
            manifest.page_count,
        )
        return manifest
