"""Package and deploy: archive the build output, upload it, clean up."""

from panelpress.deploy.archive import ArchiveBuilder
from panelpress.deploy.orchestrator import DeploymentOrchestrator
from panelpress.deploy.state_machine import DeployStateMachine, InvalidTransitionError
from panelpress.deploy.uploader import Uploader

__all__ = [
    "ArchiveBuilder",
    "Uploader",
    "DeployStateMachine",
    "InvalidTransitionError",
    "DeploymentOrchestrator",
]
