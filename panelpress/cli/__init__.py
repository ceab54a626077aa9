"""Panelpress CLI — Typer-based command-line interface.

Provides the ``panelpress`` command with subcommands for fetching the
comic manifest, inspecting page navigation, and deploying the built site.

All output uses Rich for formatted terminal display.
"""
