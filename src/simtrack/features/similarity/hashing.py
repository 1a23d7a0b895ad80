"""
Summary: SHA-256 helper for identifying local audio files by content.
Why: Hash lookups need the same digest the service stores for library tracks.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

from simtrack.config.settings import FILE_HASH_CHUNK_SIZE


def calculate_file_hash(file_path: Path) -> str:
    """Calculate SHA-256 hash of a file."""

    sha256_hash = hashlib.sha256()
    with open(file_path, "rb") as handle:
        for byte_block in iter(lambda: handle.read(FILE_HASH_CHUNK_SIZE), b""):
            sha256_hash.update(byte_block)
    return sha256_hash.hexdigest()


__all__ = ["calculate_file_hash"]
