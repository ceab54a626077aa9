"""Unit tests for the DeploymentOrchestrator.

Covers the success path, every failure path, and the guarantee that the
archive is cleaned up exactly once whenever building started.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
import respx

from panelpress.deploy.archive import ArchiveBuilder
from panelpress.deploy.orchestrator import DeploymentOrchestrator
from panelpress.deploy.state_machine import InvalidTransitionError
from panelpress.errors import (
    ArchiveError,
    ConfigurationError,
    SourceNotFoundError,
    TransportError,
    UploadError,
)
from panelpress.models.config import DeployConfig
from panelpress.models.deploy import ArchiveBundle, DeployState

DEPLOY_URL = "https://mycomic.test/deployer.php"


def _states(result) -> list[DeployState]:
    return [t.to_state for t in result.transitions]


class _ExplodingBuilder(ArchiveBuilder):
    """Writes a partial archive, then fails with an unexpected error."""

    def build(self, archive_path: Path) -> ArchiveBundle:
        Path(archive_path).write_bytes(b"partial")
        raise ValueError("unexpected")


# ---------------------------------------------------------------------------
# Test: success
# ---------------------------------------------------------------------------


class TestOrchestratorSuccess:
    @respx.mock
    def test_successful_run(self, deploy_config: DeployConfig):
        seen: list[bool] = []

        def _deployer(request: httpx.Request) -> httpx.Response:
            seen.append(deploy_config.archive_path.exists())
            return httpx.Response(200, text="Deployed!")

        respx.post(DEPLOY_URL).mock(side_effect=_deployer)

        orch = DeploymentOrchestrator(deploy_config)
        result = orch.run()

        assert result.state == DeployState.SUCCEEDED
        assert result.succeeded is True
        assert result.error is None
        assert result.upload.body == "Deployed!"
        assert result.bundle.file_count == 3
        assert _states(result) == [
            DeployState.BUILDING,
            DeployState.UPLOADING,
            DeployState.CLEANING_UP,
            DeployState.SUCCEEDED,
        ]
        # Archive existed while uploading and is gone afterwards
        assert seen == [True]
        assert not deploy_config.archive_path.exists()
        assert orch.cleanup_runs == 1

    @respx.mock
    def test_run_is_single_use(self, deploy_config: DeployConfig):
        respx.post(DEPLOY_URL).mock(return_value=httpx.Response(200, text="ok"))

        orch = DeploymentOrchestrator(deploy_config)
        orch.run()
        with pytest.raises(InvalidTransitionError):
            orch.run()


# ---------------------------------------------------------------------------
# Test: failures
# ---------------------------------------------------------------------------


class TestOrchestratorFailures:
    @respx.mock(assert_all_called=False)
    def test_missing_source_directory(
        self, make_deploy_config: Callable[..., DeployConfig], tmp_path: Path
    ):
        route = respx.post(DEPLOY_URL)
        config = make_deploy_config(source_directory=tmp_path / "does-not-exist")

        orch = DeploymentOrchestrator(config)
        result = orch.run()

        assert result.state == DeployState.FAILED
        assert isinstance(result.error, SourceNotFoundError)
        assert _states(result) == [
            DeployState.BUILDING,
            DeployState.CLEANING_UP,
            DeployState.FAILED,
        ]
        assert not config.archive_path.exists()
        assert not route.called
        assert orch.cleanup_runs == 1

    @respx.mock
    def test_upload_500(self, deploy_config: DeployConfig):
        respx.post(DEPLOY_URL).mock(return_value=httpx.Response(500, text="disk full"))

        orch = DeploymentOrchestrator(deploy_config)
        result = orch.run()

        assert result.state == DeployState.FAILED
        assert isinstance(result.error, UploadError)
        assert result.error.status_code == 500
        assert result.error.body == "disk full"
        assert result.bundle is not None
        assert result.upload is None
        assert _states(result) == [
            DeployState.BUILDING,
            DeployState.UPLOADING,
            DeployState.CLEANING_UP,
            DeployState.FAILED,
        ]
        assert not deploy_config.archive_path.exists()
        assert orch.cleanup_runs == 1

    @respx.mock
    def test_transport_failure(self, deploy_config: DeployConfig):
        respx.post(DEPLOY_URL).mock(side_effect=httpx.ConnectError("refused"))

        result = DeploymentOrchestrator(deploy_config).run()

        assert result.state == DeployState.FAILED
        assert isinstance(result.error, TransportError)
        assert not deploy_config.archive_path.exists()

    @pytest.mark.parametrize(
        "overrides",
        [{"endpoint_url": ""}, {"shared_secret": ""}],
    )
    @respx.mock
    def test_incomplete_config(
        self, make_deploy_config: Callable[..., DeployConfig], overrides: dict
    ):
        config = make_deploy_config(**overrides)

        orch = DeploymentOrchestrator(config)
        result = orch.run()

        assert result.state == DeployState.FAILED
        assert isinstance(result.error, ConfigurationError)
        # Building is skipped, so there is nothing to clean up
        assert _states(result) == [DeployState.FAILED]
        assert orch.cleanup_runs == 0
        assert not config.archive_path.exists()
        assert respx.calls.call_count == 0

    def test_unwritable_archive_path(
        self, make_deploy_config: Callable[..., DeployConfig], tmp_path: Path
    ):
        config = make_deploy_config(archive_path=tmp_path / "no-such-dir" / "bundle.zip")

        orch = DeploymentOrchestrator(config)
        result = orch.run()

        assert isinstance(result.error, ArchiveError)
        assert orch.cleanup_runs == 1

    def test_unexpected_error_still_cleans_up(self, deploy_config: DeployConfig):
        orch = DeploymentOrchestrator(
            deploy_config,
            builder=_ExplodingBuilder(deploy_config.source_directory),
        )
        result = orch.run()

        assert result.state == DeployState.FAILED
        assert isinstance(result.error, ValueError)
        assert not deploy_config.archive_path.exists()
        assert orch.cleanup_runs == 1


# ---------------------------------------------------------------------------
# Test: cleanup
# ---------------------------------------------------------------------------


class TestOrchestratorCleanup:
    @respx.mock
    def test_failed_delete_does_not_change_outcome(
        self,
        deploy_config: DeployConfig,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ):
        respx.post(DEPLOY_URL).mock(return_value=httpx.Response(200, text="ok"))

        def _refuse(self, missing_ok=False):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr(Path, "unlink", _refuse)

        with caplog.at_level(logging.WARNING, logger="panelpress.deploy.orchestrator"):
            result = DeploymentOrchestrator(deploy_config).run()

        assert result.state == DeployState.SUCCEEDED
        assert "Could not remove archive" in caplog.text

    @respx.mock
    def test_cleanup_recorded_once(self, deploy_config: DeployConfig):
        respx.post(DEPLOY_URL).mock(return_value=httpx.Response(500, text="nope"))

        result = DeploymentOrchestrator(deploy_config).run()

        assert _states(result).count(DeployState.CLEANING_UP) == 1
