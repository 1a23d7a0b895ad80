"""Where: src/simtrack/config/settings.py
What: Static defaults shared by configuration, transport and hashing layers.
Why: Keep tunables in one place without triggering file I/O on import.
"""

from __future__ import annotations

from typing import Final

APP_NAME: Final[str] = "simtrack"
APP_VERSION: Final[str] = "0.1.0"

# Similarity service endpoint ---------------------------------------------------

DEFAULT_API_URL: Final[str] = "https://api.cyanite.ai/graphql"

# Upper bound for a single request round trip, in seconds.
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

# Environment overrides take precedence over values from config.toml.
ENV_API_URL: Final[str] = "SIMTRACK_API_URL"
ENV_API_TOKEN: Final[str] = "SIMTRACK_API_TOKEN"
ENV_TIMEOUT: Final[str] = "SIMTRACK_TIMEOUT"

# Local hashing -----------------------------------------------------------------

FILE_HASH_CHUNK_SIZE: Final[int] = 64 * 1024


def format_user_agent(app_name: str = APP_NAME, app_version: str = APP_VERSION) -> str:
    """Return ``App/Version`` for outbound requests."""

    return f"{app_name}/{app_version}"


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT_SECONDS",
    "ENV_API_TOKEN",
    "ENV_API_URL",
    "ENV_TIMEOUT",
    "FILE_HASH_CHUNK_SIZE",
    "format_user_agent",
]
