"""Deployment orchestrator — package, upload, clean up.

Sequences one deployment run through the state machine::

    idle -> building -> uploading -> cleaning_up -> succeeded
      |         |            |             |
      +-> failed +-----------+-> cleaning_up -> failed

The archive is acquired as a scoped resource when building starts, and
released (deleted) exactly once on every path out of ``building`` or
``uploading``.  A failed delete is logged and does not change the
outcome already decided by the earlier stage.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from panelpress.deploy.archive import ArchiveBuilder
from panelpress.deploy.state_machine import DeployStateMachine, InvalidTransitionError
from panelpress.deploy.uploader import Uploader
from panelpress.errors import ConfigurationError, PanelpressError
from panelpress.models.config import DeployConfig
from panelpress.models.deploy import (
    ArchiveBundle,
    DeployResult,
    DeployState,
    UploadResult,
)

logger = logging.getLogger(__name__)


class DeploymentOrchestrator:
    """Runs a single deployment.  Construct a fresh instance for every run.

    Parameters
    ----------
    config:
        The deploy config.  Never mutated.
    builder:
        Archive builder to use.  Defaults to one rooted at
        ``config.source_directory``.
    uploader:
        Uploader to use.  Defaults to one built from ``config``.
    """

    def __init__(
        self,
        config: DeployConfig,
        *,
        builder: ArchiveBuilder | None = None,
        uploader: Uploader | None = None,
    ) -> None:
        self.config = config
        self._builder = builder or ArchiveBuilder(config.source_directory)
        self._uploader = uploader or Uploader.from_config(config)
        self._machine = DeployStateMachine()
        self._cleanup_runs = 0

    @property
    def state(self) -> DeployState:
        return self._machine.state

    @property
    def cleanup_runs(self) -> int:
        """How many times the archive was released during this run."""
        return self._cleanup_runs

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self) -> DeployResult:
        """Execute the run and return its outcome.

        Pipeline failures do not raise; they end the run in ``failed`` with
        the original exception on ``DeployResult.error``.  Calling ``run``
        a second time raises ``InvalidTransitionError``.
        """
        if self._machine.state != DeployState.IDLE:
            raise InvalidTransitionError(
                f"Deployment already ran (state {self._machine.state.value}); "
                "create a new orchestrator for each run."
            )

        logger.info("Starting deployment...")
        logger.info("  Build dir: %s", self.config.source_directory)
        logger.info("  Target: %s", self.config.endpoint_url or "<unset>")

        missing = self.config.missing_fields()
        if missing:
            error = ConfigurationError(
                "Deploy configuration incomplete, missing: " + ", ".join(missing)
            )
            self._machine.transition(DeployState.FAILED, detail=str(error))
            logger.error("Deployment failed: %s", error)
            return self._result(error=error)

        self._machine.transition(DeployState.BUILDING, detail=str(self.config.source_directory))

        bundle: ArchiveBundle | None = None
        upload: UploadResult | None = None
        error: Exception | None = None
        try:
            with self._archive_scope(self.config.archive_path):
                bundle = self._builder.build(self.config.archive_path)
                self._machine.transition(
                    DeployState.UPLOADING, detail=self._uploader.endpoint_url
                )
                upload = self._uploader.upload(bundle.path)
        except PanelpressError as exc:
            error = exc
        except Exception as exc:
            logger.exception("Unexpected error during deployment")
            error = exc

        if error is not None:
            self._machine.transition(DeployState.FAILED, detail=str(error))
            logger.error("Deployment failed: %s", error)
        else:
            self._machine.transition(DeployState.SUCCEEDED)
            logger.info("Deployment successful!")

        return self._result(bundle=bundle, upload=upload, error=error)

    # ------------------------------------------------------------------
    # Scoped archive
    # ------------------------------------------------------------------

    @contextmanager
    def _archive_scope(self, archive_path: Path) -> Iterator[Path]:
        """Yield the archive path; always clean it up on the way out."""
        try:
            yield archive_path
        finally:
            self._machine.transition(DeployState.CLEANING_UP, detail=str(archive_path))
            self._release_archive(archive_path)

    def _release_archive(self, archive_path: Path) -> None:
        self._cleanup_runs += 1
        try:
            if archive_path.exists():
                archive_path.unlink()
                logger.info("Cleaned up temporary ZIP file")
        except OSError as exc:
            logger.warning("Could not remove archive %s: %s", archive_path, exc)

    def _result(
        self,
        *,
        bundle: ArchiveBundle | None = None,
        upload: UploadResult | None = None,
        error: Exception | None = None,
    ) -> DeployResult:
        return DeployResult(
            state=self._machine.state,
            transitions=self._machine.history,
            bundle=bundle,
            upload=upload,
            error=error,
        )
