"""Command line argument handling package."""

from magicreplace.ui.cli.args.parser import ArgumentParser
from magicreplace.ui.cli.args.options import (
    CLIArgs,
    CategoriesArgs,
    EntriesArgs,
    ReplaceArgs,
    ScanArgs,
)

__all__ = ["ArgumentParser", "CLIArgs", "CategoriesArgs", "EntriesArgs", "ReplaceArgs", "ScanArgs"]
