"""Uploader — delivers the site bundle to the deployment endpoint.

One authenticated multipart POST per call: a ``secret`` field and a
``bundle`` file field.  No retry, no chunked or resumable upload.
"""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from panelpress.errors import (
    ArchiveError,
    ResponseStreamError,
    TransportError,
    UploadError,
)
from panelpress.models.config import DeployConfig
from panelpress.models.deploy import UploadResult

logger = logging.getLogger(__name__)

BUNDLE_FIELD = "bundle"
BUNDLE_FILENAME = "site-bundle.zip"
BUNDLE_CONTENT_TYPE = "application/zip"
SECRET_FIELD = "secret"

# Statuses below this are success
ERROR_STATUS_THRESHOLD = 400


class Uploader:
    """Posts an archive plus shared secret to the deployment endpoint.

    Parameters
    ----------
    endpoint_url:
        The deployer URL (e.g. ``https://mycomic.example/deployer.php``).
    shared_secret:
        Secret matching the one configured on the deployer.
    client:
        An ``httpx.Client`` to reuse.  When omitted a client is opened and
        closed around each upload.
    timeout:
        Request timeout in seconds.  ``None`` keeps httpx's default.
    """

    def __init__(
        self,
        endpoint_url: str,
        shared_secret: str,
        *,
        client: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        self._endpoint_url = endpoint_url
        self._shared_secret = shared_secret
        self._client = client
        self._timeout = timeout

    @classmethod
    def from_config(
        cls, config: DeployConfig, *, client: httpx.Client | None = None
    ) -> Uploader:
        return cls(config.endpoint_url, config.shared_secret, client=client)

    @property
    def endpoint_url(self) -> str:
        return self._endpoint_url

    def upload(self, archive_path: Path) -> UploadResult:
        """Upload ``archive_path`` and return the server's answer.

        Raises
        ------
        ArchiveError
            If the archive cannot be opened for reading.
        TransportError
            If no response is received (DNS, refused connection, timeout).
        ResponseStreamError
            If the response body breaks off after the headers arrived.
        UploadError
            If the endpoint answers with status >= 400.
        """
        archive_path = Path(archive_path)
        logger.info("Uploading to %s...", self._endpoint_url)

        if self._client is not None:
            return self._upload_with(self._client, archive_path)
        if self._timeout is not None:
            client = httpx.Client(timeout=self._timeout)
        else:
            client = httpx.Client()
        with client:
            return self._upload_with(client, archive_path)

    def _upload_with(self, client: httpx.Client, archive_path: Path) -> UploadResult:
        try:
            bundle = archive_path.open("rb")
        except OSError as exc:
            raise ArchiveError(f"Could not open archive {archive_path}: {exc}") from exc

        with bundle:
            files = {BUNDLE_FIELD: (BUNDLE_FILENAME, bundle, BUNDLE_CONTENT_TYPE)}
            data = {SECRET_FIELD: self._shared_secret}
            try:
                with client.stream(
                    "POST", self._endpoint_url, data=data, files=files
                ) as response:
                    status_code = response.status_code
                    try:
                        response.read()
                    except httpx.HTTPError as exc:
                        raise ResponseStreamError(
                            f"Response error: {exc}"
                        ) from exc
                    body = response.text
            except httpx.TransportError as exc:
                raise TransportError(f"Upload failed: {exc}") from exc

        if status_code >= ERROR_STATUS_THRESHOLD:
            raise UploadError(status_code, body)

        logger.info("Server response: %s", body)
        return UploadResult(status_code=status_code, body=body)
