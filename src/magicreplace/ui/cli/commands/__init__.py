"""Command implementations for CLI interface."""

from magicreplace.ui.cli.commands.listing import CategoriesCommand, EntriesCommand
from magicreplace.ui.cli.commands.replace import ReplaceCommand
from magicreplace.ui.cli.commands.scan import ScanCommand

__all__ = ["CategoriesCommand", "EntriesCommand", "ReplaceCommand", "ScanCommand"]
