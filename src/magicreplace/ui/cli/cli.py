"""Command line interface for magicreplace."""

import sys
from typing import final

from magicreplace.platform.logging import logger
from magicreplace.ui.cli.args import ArgumentParser
from magicreplace.ui.cli.args.options import (
    CLIArgs,
    CategoriesArgs,
    EntriesArgs,
    ReplaceArgs,
    ScanArgs,
)
from magicreplace.ui.cli.commands import (
    CategoriesCommand,
    EntriesCommand,
    ReplaceCommand,
    ScanCommand,
)
from magicreplace.ui.cli.commands.executor import CommandExecutor


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)
            command = CommandProcessor.build_command(args)
            try:
                succeeded = command.execute()
            finally:
                command.close()
            if not succeeded:
                sys.exit(1)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)

    @staticmethod
    def build_command(args: CLIArgs) -> CommandExecutor:
        if isinstance(args, CategoriesArgs):
            return CategoriesCommand(args)
        if isinstance(args, EntriesArgs):
            return EntriesCommand(args)
        if isinstance(args, ScanArgs):
            return ScanCommand(args)
        assert isinstance(args, ReplaceArgs)
        return ReplaceCommand(args)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures leave through
        ``sys.exit(...)`` inside command processing.
    """
    CommandProcessor.process_command()
    return 0
