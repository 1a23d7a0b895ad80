"""Where: src/simtrack/ui/cli/commands/similarity.py
What: Command executors for hash lookups, similar-track listings and file hashing.
Why: Keep console output and exit codes out of the client facade.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import final

from rich.console import Console

from simtrack.features.similarity import SimilarityClient, calculate_file_hash
from simtrack.platform.graphql.errors import SimilarityServiceError
from simtrack.platform.logging import logger
from simtrack.ui.cli.args.options import HashArgs, LookupArgs, SimilarArgs

EXIT_OK: int = 0
EXIT_FAILURE: int = 1


class ServiceCommand(ABC):
    """Base class for commands that call the similarity service."""

    client: SimilarityClient
    console: Console

    def __init__(self, args: LookupArgs | SimilarArgs, console: Console | None = None) -> None:
        """Initialize the command.

        Args:
            args: Parsed command line arguments.
            console: Console for result output. Defaults to standard output.
        """
        self.client = SimilarityClient(args.settings)
        self.console = console or Console()

    @abstractmethod
    def execute(self) -> int:
        """Execute the command.

        Returns:
            int: Process exit code.
        """


def _resolve_hash(args: LookupArgs) -> str:
    if args.file is not None:
        digest = calculate_file_hash(args.file)
        logger.debug("Hashed %s -> %s", args.file, digest)
        return digest
    assert args.sha256 is not None
    return args.sha256


@final
class LookupCommand(ServiceCommand):
    """Print the library track id for a content hash."""

    def __init__(self, args: LookupArgs, console: Console | None = None) -> None:
        super().__init__(args, console)
        self.args: LookupArgs = args

    def execute(self) -> int:
        try:
            track_id = self.client.find_by_hash256(_resolve_hash(self.args))
        except (SimilarityServiceError, OSError) as e:
            logger.error("%s", e)
            return EXIT_FAILURE

        self.console.print(track_id, highlight=False)
        return EXIT_OK


@final
class SimilarCommand(ServiceCommand):
    """Print ids of tracks similar to a library track, one per line."""

    def __init__(self, args: SimilarArgs, console: Console | None = None) -> None:
        super().__init__(args, console)
        self.args: SimilarArgs = args

    def execute(self) -> int:
        try:
            similar_ids = self.client.find_similar(self.args.track_id)
        except SimilarityServiceError as e:
            logger.error("%s", e)
            return EXIT_FAILURE

        for similar_id in similar_ids:
            self.console.print(similar_id, highlight=False)
        if not similar_ids and not self.args.quiet:
            logger.info("No similar tracks for %s", self.args.track_id)
        return EXIT_OK


@final
class MatchCommand(ServiceCommand):
    """Look up a track by hash, then list its similar tracks.

    Stops after a failed hash lookup. A failed similar-track lookup is
    reported and the (empty) list is still printed.
    """

    def __init__(self, args: LookupArgs, console: Console | None = None) -> None:
        super().__init__(args, console)
        self.args: LookupArgs = args

    def execute(self) -> int:
        try:
            track_id = self.client.find_by_hash256(_resolve_hash(self.args))
        except (SimilarityServiceError, OSError) as e:
            logger.error("%s", e)
            return EXIT_FAILURE

        self.console.print(track_id, highlight=False)

        exit_code = EXIT_OK
        similar_ids: list[str] = []
        try:
            similar_ids = self.client.find_similar(track_id)
        except SimilarityServiceError as e:
            logger.error("%s", e)
            exit_code = EXIT_FAILURE

        self.console.print(similar_ids, highlight=False)
        return exit_code


@final
class HashCommand:
    """Print the SHA-256 content hash of a local file."""

    args: HashArgs
    console: Console

    def __init__(self, args: HashArgs, console: Console | None = None) -> None:
        self.args = args
        self.console = console or Console()

    def execute(self) -> int:
        try:
            digest = calculate_file_hash(self.args.file)
        except OSError as e:
            logger.error("Cannot hash %s: %s", self.args.file, e)
            return EXIT_FAILURE

        self.console.print(digest, highlight=False)
        return EXIT_OK


__all__ = [
    "EXIT_FAILURE",
    "EXIT_OK",
    "HashCommand",
    "LookupCommand",
    "MatchCommand",
    "ServiceCommand",
    "SimilarCommand",
]
