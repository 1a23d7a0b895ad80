"""Configuration management for simtrack."""

from __future__ import annotations

import dataclasses
import math
import os
import tomllib
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from simtrack.config.file_ops import write_text_file
from simtrack.config.paths import default_config_path
from simtrack.config.settings import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_API_TOKEN,
    ENV_API_URL,
    ENV_TIMEOUT,
)
from simtrack.platform.graphql.http_client import ClientSettings
from simtrack.platform.logging import logger


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the TOML document cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when configuration values are semantically invalid."""


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


def _coerce_timeout(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConfigValidationError(f"timeout_seconds must be a number, got {value!r}")
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ConfigValidationError(f"timeout_seconds must be a number, got {value!r}") from exc
    if not math.isfinite(timeout) or timeout <= 0:
        raise ConfigValidationError("timeout_seconds must be positive and finite")
    return timeout


@dataclass
class Config:
    """Application configuration."""

    # GraphQL endpoint of the similarity service
    api_url: str = DEFAULT_API_URL

    # Bearer token; prefer the SIMTRACK_API_TOKEN environment variable
    api_token: str | None = None

    # Per-request timeout in seconds
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    # Log file path
    log_file: Path | None = _path_field()

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths and validate scalar fields."""

        for f in dataclasses.fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value.strip() else None)
                value = getattr(self, f.name)
            if value is not None and not isinstance(value, Path):
                raise ConfigValidationError(f"{f.name} must be a path string")

        if not isinstance(self.api_url, str) or not self.api_url.strip():
            raise ConfigValidationError("api_url must be a non-empty string")
        self.api_url = self.api_url.strip()

        if self.api_token is not None:
            if not isinstance(self.api_token, str):
                raise ConfigValidationError("api_token must be a string")
            self.api_token = self.api_token.strip() or None

        self.timeout_seconds = _coerce_timeout(self.timeout_seconds)

    def __repr__(self) -> str:
        token = "***" if self.api_token else None
        return (
            f"Config(api_url={self.api_url!r}, api_token={token!r}, "
            f"timeout_seconds={self.timeout_seconds!r}, log_file={self.log_file!r})"
        )

    def client_settings(self) -> ClientSettings:
        """Build immutable transport settings from this configuration.

        Raises:
            ConfigError: If no bearer token is configured.
        """
        if not self.api_token:
            raise ConfigError(
                f"No API token configured; set {ENV_API_TOKEN} or api_token in the config file"
            )
        return ClientSettings(url=self.api_url, token=self.api_token, timeout=self.timeout_seconds)

    def with_env_overrides(self, env: Mapping[str, str] | None = None) -> "Config":
        """Return a copy with ``SIMTRACK_*`` environment values applied."""

        mapping = env if env is not None else os.environ
        overrides: dict[str, Any] = {}

        url = (mapping.get(ENV_API_URL) or "").strip()
        if url:
            overrides["api_url"] = url
        token = (mapping.get(ENV_API_TOKEN) or "").strip()
        if token:
            overrides["api_token"] = token
        timeout = (mapping.get(ENV_TIMEOUT) or "").strip()
        if timeout:
            overrides["timeout_seconds"] = _coerce_timeout(timeout)

        if not overrides:
            return self
        return dataclasses.replace(self, **overrides)

    def save(self, path: Path | None = None) -> Path:
        """Save configuration to file.

        Returns:
            Path: File the configuration was written to.
        """
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        target = path or default_config_path()
        try:
            write_text_file(target, self._render_toml(config_dict))
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise
        logger.info("Configuration saved to %s", target)
        return target

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# simtrack configuration file")
        lines.append("")

        lines.append("# GraphQL endpoint of the similarity service")
        lines.append(f"api_url = {self._format_toml_value(config['api_url'])}")
        lines.append("")

        lines.append("# Bearer token (optional here)")
        lines.append(f"# The {ENV_API_TOKEN} environment variable overrides this value")
        if config.get("api_token"):
            lines.append(f"api_token = {self._format_toml_value(config['api_token'])}")
        lines.append("")

        lines.append("# Request timeout in seconds")
        lines.append(f"timeout_seconds = {self._format_toml_value(config['timeout_seconds'])}")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/simtrack.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization.

        Args:
            value: Value to format

        Returns:
            str: Formatted value
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def _load_file(cls, config_file: Path) -> "Config":
        """Read ``config_file``, creating a default one when it is missing."""

        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        if config_file.exists():
            try:
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigParseError(f"Invalid TOML in {config_file}: {e}") from e

            known = {f.name for f in dataclasses.fields(cls)}
            unknown = sorted(set(config_dict) - known)
            if unknown:
                raise ConfigValidationError(
                    f"Unknown configuration keys in {config_file}: {', '.join(unknown)}"
                )

            instance = cls(**config_dict)
            logger.debug("Configuration loaded from %s", config_file)
        else:
            instance = cls()
            _ = instance.save(config_file)
            logger.info("Created default configuration at %s", config_file)

        cls._instance = instance
        cls._loaded_from = config_file
        return instance

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> "Config":
        """Load configuration from file and apply environment overrides.

        Args:
            path: Config file to read. Defaults to ``default_config_path()``.
            env: Environment mapping. Defaults to ``os.environ``.

        Returns:
            Config: Loaded configuration object.

        Raises:
            ConfigParseError: If the file is not valid TOML.
            ConfigValidationError: If a value is invalid.
        """
        config_file = Path(path).expanduser().resolve() if path else default_config_path(env)
        return cls._load_file(config_file).with_env_overrides(env)


__all__ = [
    "Config",
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
]
