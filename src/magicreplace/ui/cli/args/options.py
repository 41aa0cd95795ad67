"""Command line argument options."""

from dataclasses import dataclass
from typing import Literal, final


@final
@dataclass(slots=True)
class CategoriesArgs:
    """Command line arguments for the ``categories`` subcommand."""

    command: Literal["categories"]
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class EntriesArgs:
    """Command line arguments for the ``entries`` subcommand."""

    command: Literal["entries"]
    category: str
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ScanArgs:
    """Command line arguments for the ``scan`` subcommand."""

    command: Literal["scan"]
    category: str
    pattern: str
    entry_ids: tuple[str, ...]
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class ReplaceArgs:
    """Command line arguments for the ``replace`` subcommand."""

    command: Literal["replace"]
    category: str
    pattern: str
    replacement: str
    entry_ids: tuple[str, ...]
    smart: bool
    include: tuple[tuple[str, str], ...]
    exclude: tuple[tuple[str, str], ...]
    only_included: bool
    dry_run: bool
    assume_yes: bool
    verbose: bool
    quiet: bool


CLIArgs = CategoriesArgs | EntriesArgs | ScanArgs | ReplaceArgs

__all__ = ["CLIArgs", "CategoriesArgs", "EntriesArgs", "ReplaceArgs", "ScanArgs"]
