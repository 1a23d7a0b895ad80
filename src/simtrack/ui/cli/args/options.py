"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from simtrack.platform.graphql.http_client import ClientSettings


@final
@dataclass(slots=True)
class LookupArgs:
    """Command line arguments for the ``lookup`` and ``match`` subcommands."""

    command: Literal["lookup", "match"]
    sha256: str | None
    file: Path | None
    settings: ClientSettings
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class SimilarArgs:
    """Command line arguments for the ``similar`` subcommand."""

    command: Literal["similar"]
    track_id: str
    settings: ClientSettings
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class HashArgs:
    """Command line arguments for the ``hash`` subcommand."""

    command: Literal["hash"]
    file: Path
    verbose: bool
    quiet: bool


CLIArgs = LookupArgs | SimilarArgs | HashArgs

__all__ = ["CLIArgs", "HashArgs", "LookupArgs", "SimilarArgs"]
