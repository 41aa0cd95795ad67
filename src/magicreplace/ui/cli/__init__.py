"""Command line interface package."""

from magicreplace.ui.cli.cli import main

__all__ = ["main"]
