"""Panelpress: comic site content model and deployment.

Two independent pipelines:
  - Content: fetch the comic manifest, flatten chapters into an ordered
    page index, resolve previous/next/first/last navigation.
  - Deploy: zip the generated site, upload it to the deployer endpoint,
    and always remove the temporary archive.
"""

__version__ = "0.1.0"

from panelpress.content.fetcher import ManifestFetcher
from panelpress.content.navigation import resolve_navigation
from panelpress.content.page_index import build_page_index
from panelpress.deploy.orchestrator import DeploymentOrchestrator
from panelpress.cli.app import app as cli

__all__ = [
    "ManifestFetcher",
    "build_page_index",
    "resolve_navigation",
    "DeploymentOrchestrator",
    "cli",
    "__version__",
]
