"""Command line argument parser."""

import argparse
import dataclasses
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any, final

from simtrack.config.config import Config
from simtrack.platform.graphql.http_client import ClientSettings
from simtrack.platform.logging import setup_logger
from simtrack.ui.cli.args.options import CLIArgs, HashArgs, LookupArgs, SimilarArgs


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
            prog="simtrack",
            description="simtrack - look up library tracks by content hash and find similar tracks.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        match_parser = subparsers.add_parser(
            "match",
            help="Look up a track by hash, then list tracks similar to it",
        )
        ArgumentParser._configure_hash_source(match_parser)
        ArgumentParser._configure_service_options(match_parser)

        lookup_parser = subparsers.add_parser(
            "lookup",
            help="Print the library track id for a SHA-256 content hash",
        )
        ArgumentParser._configure_hash_source(lookup_parser)
        ArgumentParser._configure_service_options(lookup_parser)

        similar_parser = subparsers.add_parser(
            "similar",
            help="Print ids of tracks similar to a library track",
        )
        _ = similar_parser.add_argument(
            "track_id",
            type=str,
            help="Library track id returned by 'lookup'",
            metavar="TRACK_ID",
        )
        ArgumentParser._configure_service_options(similar_parser)

        hash_parser = subparsers.add_parser(
            "hash",
            help="Print the SHA-256 content hash of a local file",
        )
        _ = hash_parser.add_argument(
            "file",
            type=Path,
            help="Audio file to hash",
            metavar="FILE",
        )
        ArgumentParser._configure_verbosity(hash_parser)

        return parser

    @staticmethod
    def _configure_hash_source(parser: argparse.ArgumentParser) -> None:
        """Accept either a literal hash or a file to hash."""

        source = parser.add_mutually_exclusive_group(required=True)
        _ = source.add_argument(
            "sha256",
            nargs="?",
            type=str,
            help="SHA-256 content hash of the track",
            metavar="SHA256",
        )
        _ = source.add_argument(
            "--file",
            type=Path,
            help="Hash this file instead of passing SHA256",
            metavar="FILE",
        )

    @staticmethod
    def _configure_service_options(parser: argparse.ArgumentParser) -> None:
        """Apply shared options for subcommands that reach the service."""

        _ = parser.add_argument(
            "--config",
            type=Path,
            help="Config file to read (defaults to config/config.toml)",
            metavar="CONFIG_PATH",
        )
        _ = parser.add_argument(
            "--api-url",
            type=str,
            help="GraphQL endpoint overriding the configured one",
            metavar="URL",
        )
        _ = parser.add_argument(
            "--token",
            type=str,
            help="Bearer token overriding the configured one",
            metavar="TOKEN",
        )
        _ = parser.add_argument(
            "--timeout",
            type=float,
            help="Request timeout in seconds",
            metavar="SECONDS",
        )
        _ = parser.add_argument(
            "--log-file",
            type=Path,
            help="Also write debug logs to this file",
            metavar="LOG_FILE",
        )
        ArgumentParser._configure_verbosity(parser)

    @staticmethod
    def _configure_verbosity(parser: argparse.ArgumentParser) -> None:
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show request details",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If argument parsing fails.
            ConfigError: If the configuration cannot be loaded or has no token.
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

        command: str = parsed_args.command

        if command == "hash":
            _ = setup_logger(console_level=log_level)
            return HashArgs(
                command="hash",
                file=parsed_args.file,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        configuration = Config.load(parsed_args.config)
        log_file_path = parsed_args.log_file or configuration.log_file
        _ = setup_logger(log_file=log_file_path, console_level=log_level)

        settings = ArgumentParser._resolve_settings(configuration, parsed_args)

        if command == "similar":
            return SimilarArgs(
                command="similar",
                track_id=parsed_args.track_id,
                settings=settings,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        return LookupArgs(
            command="match" if command == "match" else "lookup",
            sha256=parsed_args.sha256,
            file=parsed_args.file,
            settings=settings,
            verbose=is_verbose,
            quiet=is_quiet,
        )

    @staticmethod
    def _resolve_settings(configuration: Config, parsed_args: argparse.Namespace) -> ClientSettings:
        """Layer command line overrides on top of the loaded configuration."""

        overrides: dict[str, Any] = {}
        if parsed_args.api_url:
            overrides["api_url"] = parsed_args.api_url
        if parsed_args.token:
            overrides["api_token"] = parsed_args.token
        if parsed_args.timeout is not None:
            overrides["timeout_seconds"] = parsed_args.timeout

        return dataclasses.replace(configuration, **overrides).client_settings()
