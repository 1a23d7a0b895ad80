"""Command line interface for simtrack."""

import sys
from typing import final

from simtrack.config.config import ConfigError
from simtrack.platform.logging import logger
from simtrack.ui.cli.args import ArgumentParser
from simtrack.ui.cli.args.options import CLIArgs, HashArgs, LookupArgs, SimilarArgs
from simtrack.ui.cli.commands import HashCommand, LookupCommand, MatchCommand, SimilarCommand

EXIT_USAGE: int = 2
EXIT_INTERRUPTED: int = 130


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
            try:
                args: CLIArgs = ArgumentParser.process_args(args_list)
            except (ConfigError, OSError) as e:
                logger.error("%s", e)
                sys.exit(EXIT_USAGE)

            exit_code = CommandProcessor._dispatch(args)
            if exit_code:
                sys.exit(exit_code)
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(EXIT_INTERRUPTED)

    @staticmethod
    def _dispatch(args: CLIArgs) -> int:
        """Run the command matching ``args`` and return its exit code."""

        if isinstance(args, HashArgs):
            return HashCommand(args).execute()
        if isinstance(args, SimilarArgs):
            return SimilarCommand(args).execute()

        assert isinstance(args, LookupArgs)
        if args.command == "match":
            return MatchCommand(args).execute()
        return LookupCommand(args).execute()


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Command processing calls
        ``sys.exit(...)`` on failures, so this return is only reached when
        processing completes successfully.
    """
    CommandProcessor.process_command()
    return 0
