"""Logging configuration for the panelpress CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["configure_logging"]


def configure_logging(level_name: str = "INFO", console: Console | None = None) -> None:
    """Install a single Rich handler on the root logger.

    Safe to call more than once: a handler installed by an earlier call
    is replaced, foreign handlers are left alone.
    """
    root_logger = logging.getLogger()
    level = getattr(logging, level_name.upper(), logging.INFO)

    for handler in list(root_logger.handlers):
        if getattr(handler, "_panelpress_managed", False):
            root_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler._panelpress_managed = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
