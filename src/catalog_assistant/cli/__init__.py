"""
CLI Module - Command-line interface for Catalog Assistant.
==========================================================

Provides CLI commands for:
- Asking single questions or chatting interactively
- Listing catalog courses by category
- Inspecting raw retrieval results
- Showing configuration and launching the GUI

Usage:
    catalog-assistant --help
    catalog-assistant query "Tell me about ACFI 801"
    catalog-assistant courses --category finance
    catalog-assistant --catalog courses.yaml chat

Components:
- main: Typer CLI application
"""

from catalog_assistant.cli.main import app, cli

__all__ = ["app", "cli"]
