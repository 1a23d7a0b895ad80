"""Tests for local file hashing."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from simtrack.config.settings import FILE_HASH_CHUNK_SIZE
from simtrack.features.similarity import calculate_file_hash


def test_calculate_file_hash_matches_hashlib(tmp_path: Path) -> None:
    payload = b"RIFF" + bytes(range(256)) * (FILE_HASH_CHUNK_SIZE // 128)
    audio = tmp_path / "track.wav"
    _ = audio.write_bytes(payload)

    assert calculate_file_hash(audio) == hashlib.sha256(payload).hexdigest()


def test_calculate_file_hash_of_empty_file(tmp_path: Path) -> None:
    empty = tmp_path / "empty.flac"
    empty.touch()

    assert calculate_file_hash(empty) == hashlib.sha256(b"").hexdigest()


def test_calculate_file_hash_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        _ = calculate_file_hash(tmp_path / "missing.mp3")
