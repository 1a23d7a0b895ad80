"""Command line argument parsing exports."""

from .parser import ArgumentParser

__all__ = ["ArgumentParser"]
