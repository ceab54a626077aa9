"""Deployment state machine models and run results."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class DeployState(str, Enum):
    """States of a single deployment run."""

    IDLE = "idle"
    BUILDING = "building"
    UPLOADING = "uploading"
    CLEANING_UP = "cleaning_up"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# Valid state transitions, enforced by DeployStateMachine.
# Terminal states (SUCCEEDED, FAILED) have no outgoing transitions.
VALID_TRANSITIONS: dict[DeployState, set[DeployState]] = {
    DeployState.IDLE: {DeployState.BUILDING, DeployState.FAILED},  # failed = bad config
    DeployState.BUILDING: {DeployState.UPLOADING, DeployState.CLEANING_UP},
    DeployState.UPLOADING: {DeployState.CLEANING_UP},
    DeployState.CLEANING_UP: {DeployState.SUCCEEDED, DeployState.FAILED},
    DeployState.SUCCEEDED: set(),  # terminal
    DeployState.FAILED: set(),  # terminal
}

TERMINAL_STATES: frozenset[DeployState] = frozenset(
    {DeployState.SUCCEEDED, DeployState.FAILED}
)


class DeployTransition(BaseModel):
    """Records a single state transition of a deployment run."""

    model_config = ConfigDict(frozen=True)

    from_state: DeployState
    to_state: DeployState
    detail: str = ""
    timestamp_utc: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )


class ArchiveBundle(BaseModel):
    """A compressed archive of a build directory's contents."""

    model_config = ConfigDict(frozen=True)

    path: Path
    file_count: int
    uncompressed_bytes: int
    compressed_bytes: int

    @property
    def compressed_mb(self) -> float:
        return self.compressed_bytes / 1024 / 1024


class UploadResult(BaseModel):
    """A successful (status < 400) answer from the deployment endpoint."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    body: str


class DeployResult(BaseModel):
    """Outcome of one deployment run.

    ``error`` holds the exception that ended the run in ``failed``; it is
    the original exception object, not a copy.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    state: DeployState
    transitions: list[DeployTransition] = []
    bundle: ArchiveBundle | None = None
    upload: UploadResult | None = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.state == DeployState.SUCCEEDED
