"""Command executors for the CLI."""

from .similarity import HashCommand, LookupCommand, MatchCommand, SimilarCommand

__all__ = ["HashCommand", "LookupCommand", "MatchCommand", "SimilarCommand"]
