"""Shared pytest fixtures isolating configuration and environment."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

_ENV_VARS: tuple[str, ...] = (
    "SIMTRACK_API_URL",
    "SIMTRACK_API_TOKEN",
    "SIMTRACK_TIMEOUT",
    "SIMTRACK_CONFIG_PATH",
)


@pytest.fixture
def portable_repo_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a temporary repository root for portable path detection."""

    _ = (tmp_path / "pyproject.toml").write_text("[project]\nname='tmp'\n")

    import simtrack.config.paths as paths

    def _fake_detect_repo_root(_start: Path | None = None) -> Path:
        return tmp_path

    monkeypatch.setattr(paths, "_detect_repo_root", _fake_detect_repo_root, raising=True)
    return tmp_path


@pytest.fixture(autouse=True)
def isolated_runtime(
    portable_repo_root: Path, monkeypatch: pytest.MonkeyPatch
) -> Iterator[None]:
    """Clear SIMTRACK_* variables and reset the cached configuration."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    from simtrack.config.config import Config

    original_instance = Config._instance  # pyright: ignore[reportPrivateUsage]
    original_loaded_from = Config._loaded_from  # pyright: ignore[reportPrivateUsage]
    Config._instance = None  # pyright: ignore[reportPrivateUsage]
    Config._loaded_from = None  # pyright: ignore[reportPrivateUsage]
    try:
        yield None
    finally:
        Config._instance = original_instance  # pyright: ignore[reportPrivateUsage]
        Config._loaded_from = original_loaded_from  # pyright: ignore[reportPrivateUsage]
