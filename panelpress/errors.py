"""Error taxonomy for the publish pipelines.

Every component raises one of these and lets it propagate; the deployment
orchestrator is the single place that turns a failure into a terminal
``failed`` state, and the CLI is the single place that turns it into a
non-zero exit status.
"""

from __future__ import annotations

from pathlib import Path


class PanelpressError(RuntimeError):
    """Base class for every error raised by panelpress components."""


class ConfigurationError(PanelpressError):
    """Raised when a required setting is missing or invalid.

    Raised before any network or file activity is attempted.
    """


class TransportError(PanelpressError):
    """Raised when the network is unreachable or the request times out."""


class FetchError(PanelpressError):
    """Raised when the content source answers a manifest read with non-2xx."""

    def __init__(self, status_code: int, reason: str, url: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        self.url = url
        super().__init__(f"Failed to fetch manifest: {status_code} {reason}")


class ParseError(PanelpressError):
    """Raised when a manifest body is not valid JSON or has the wrong shape."""


class SourceNotFoundError(PanelpressError):
    """Raised when the directory to package does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Build directory not found: {self.path}")


class ArchiveError(PanelpressError):
    """Raised when reading a source file or writing the archive fails."""


class UploadError(PanelpressError):
    """Raised when the deployment endpoint rejects the bundle (status >= 400)."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Deploy failed ({status_code}): {body}")


class ResponseStreamError(PanelpressError):
    """Raised when the upload response body cannot be read after headers arrive."""
