"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import final

from magicreplace.config.config import Config
from magicreplace.config.settings import DEFAULT_SMART_MODE
from magicreplace.platform.logging import DEFAULT_LOG_FILE, logger, setup_logger
from magicreplace.ui.cli.args.options import (
    CLIArgs,
    CategoriesArgs,
    EntriesArgs,
    ReplaceArgs,
    ScanArgs,
)


def parse_field_ref(value: str) -> tuple[str, str]:
    """Split an ``ENTRY:FIELD`` reference at the first colon."""

    entry_id, sep, field_name = value.partition(":")
    if not sep or not entry_id or not field_name:
        raise argparse.ArgumentTypeError(
            f"expected ENTRY:FIELD, got '{value}'"
        )
    return entry_id, field_name


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            description="magicreplace - guided bulk find & replace for a remote content store.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        categories_parser = subparsers.add_parser(
            "categories",
            help="List the content categories exposed by the store",
        )
        ArgumentParser._add_verbosity(categories_parser)

        entries_parser = subparsers.add_parser(
            "entries",
            help="List the entries of a category",
        )
        _ = entries_parser.add_argument("category", metavar="CATEGORY", help="Category id")
        ArgumentParser._add_verbosity(entries_parser)

        scan_parser = subparsers.add_parser(
            "scan",
            help="Find occurrences of a pattern without changing anything",
        )
        ArgumentParser._add_target_arguments(scan_parser)
        ArgumentParser._add_verbosity(scan_parser)

        replace_parser = subparsers.add_parser(
            "replace",
            help="Preview replacements, approve them and apply the selection",
        )
        ArgumentParser._add_target_arguments(replace_parser)
        _ = replace_parser.add_argument(
            "replacement",
            metavar="REPLACEMENT",
            help="Replacement text",
        )
        smart_group = replace_parser.add_mutually_exclusive_group()
        _ = smart_group.add_argument(
            "--smart",
            dest="smart",
            action="store_true",
            default=None,
            help="Request AI-assisted replacements from the store",
        )
        _ = smart_group.add_argument(
            "--no-smart",
            dest="smart",
            action="store_false",
            help="Use plain replacements even if enabled in the configuration",
        )
        _ = replace_parser.add_argument(
            "--include",
            action="append",
            type=parse_field_ref,
            default=[],
            metavar="ENTRY:FIELD",
            help="Select a change even if the policy rejected it (repeatable)",
        )
        _ = replace_parser.add_argument(
            "--exclude",
            action="append",
            type=parse_field_ref,
            default=[],
            metavar="ENTRY:FIELD",
            help="Deselect a change before applying (repeatable)",
        )
        _ = replace_parser.add_argument(
            "--only-included",
            action="store_true",
            help="Ignore policy defaults and apply only the --include changes",
        )
        _ = replace_parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Stop after the preview without applying anything",
        )
        _ = replace_parser.add_argument(
            "--yes",
            dest="assume_yes",
            action="store_true",
            help="Apply without asking for confirmation",
        )
        ArgumentParser._add_verbosity(replace_parser)

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        configuration = Config.load()
        log_file_path = configuration.log_file or DEFAULT_LOG_FILE
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        command: str = parsed_args.command

        if command == "categories":
            return CategoriesArgs(command="categories", verbose=is_verbose, quiet=is_quiet)

        if command == "entries":
            return EntriesArgs(
                command="entries",
                category=parsed_args.category,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "scan":
            return ScanArgs(
                command="scan",
                category=parsed_args.category,
                pattern=parsed_args.pattern,
                entry_ids=tuple(parsed_args.entry_ids),
                verbose=is_verbose,
                quiet=is_quiet,
            )

        if command == "replace":
            smart = DEFAULT_SMART_MODE if parsed_args.smart is None else bool(parsed_args.smart)
            return ReplaceArgs(
                command="replace",
                category=parsed_args.category,
                pattern=parsed_args.pattern,
                replacement=parsed_args.replacement,
                entry_ids=tuple(parsed_args.entry_ids),
                smart=smart,
                include=tuple(parsed_args.include),
                exclude=tuple(parsed_args.exclude),
                only_included=bool(parsed_args.only_included),
                dry_run=bool(parsed_args.dry_run),
                assume_yes=bool(parsed_args.assume_yes),
                verbose=is_verbose,
                quiet=is_quiet,
            )

        logger.error("Unsupported command: %s", command)
        sys.exit(2)

    @staticmethod
    def _add_target_arguments(parser: argparse.ArgumentParser) -> None:
        """Arguments shared by the stages that search entries."""

        _ = parser.add_argument("category", metavar="CATEGORY", help="Category id")
        _ = parser.add_argument("pattern", metavar="PATTERN", help="Text to search for")
        _ = parser.add_argument(
            "--entry",
            dest="entry_ids",
            action="append",
            default=[],
            metavar="ENTRY",
            help="Restrict the run to this entry id (repeatable; default: all entries)",
        )

    @staticmethod
    def _add_verbosity(parser: argparse.ArgumentParser) -> None:
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show detailed request information",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )
