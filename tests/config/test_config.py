"""Test configuration management."""

from pathlib import Path

import pytest

from simtrack.config.config import (
    Config,
    ConfigError,
    ConfigParseError,
    ConfigValidationError,
)
from simtrack.config.paths import default_config_path
from simtrack.config.settings import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS


def _write_config(root: Path, content: str) -> Path:
    path = root / "config" / "config.toml"
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")
    return path


def test_default_config() -> None:
    """Defaults point at the public endpoint with no token."""
    config = Config()
    assert config.api_url == DEFAULT_API_URL
    assert config.api_token is None
    assert config.timeout_seconds == DEFAULT_TIMEOUT_SECONDS
    assert config.log_file is None


def test_load_creates_default_file_when_missing() -> None:
    config = Config.load(env={})

    assert default_config_path().exists()
    assert config.api_token is None
    assert "api_token =" not in default_config_path().read_text(encoding="utf-8")


def test_save_load_round_trip() -> None:
    original = Config(
        api_url="https://graphql.example.test/",
        api_token="file-token",
        timeout_seconds=12.5,
        log_file=Path("/tmp/simtrack/simtrack.log"),
    )
    target = original.save()
    assert target == default_config_path()

    Config._instance = None  # pyright: ignore[reportPrivateUsage] - reset cache for test
    loaded = Config.load(env={})

    assert loaded.api_url == "https://graphql.example.test/"
    assert loaded.api_token == "file-token"
    assert loaded.timeout_seconds == 12.5
    assert loaded.log_file == Path("/tmp/simtrack/simtrack.log")


def test_env_overrides_file_values(portable_repo_root: Path) -> None:
    _ = _write_config(
        portable_repo_root,
        'api_url = "https://file.example.test"\napi_token = "file-token"\ntimeout_seconds = 10\n',
    )

    config = Config.load(
        env={
            "SIMTRACK_API_URL": "https://env.example.test",
            "SIMTRACK_API_TOKEN": "env-token",
            "SIMTRACK_TIMEOUT": "3",
        }
    )

    assert config.api_url == "https://env.example.test"
    assert config.api_token == "env-token"
    assert config.timeout_seconds == 3.0


def test_env_overrides_do_not_leak_into_cached_file_config(portable_repo_root: Path) -> None:
    _ = _write_config(portable_repo_root, 'api_token = "file-token"\n')

    assert Config.load(env={"SIMTRACK_API_TOKEN": "env-token"}).api_token == "env-token"
    assert Config.load(env={}).api_token == "file-token"


def test_config_path_env_var(tmp_path: Path) -> None:
    custom = tmp_path / "elsewhere" / "simtrack.toml"
    custom.parent.mkdir()
    _ = custom.write_text('api_token = "custom"\n', encoding="utf-8")

    config = Config.load(env={"SIMTRACK_CONFIG_PATH": str(custom)})

    assert config.api_token == "custom"


def test_invalid_toml_raises_parse_error(portable_repo_root: Path) -> None:
    _ = _write_config(portable_repo_root, "api_url = \n")

    with pytest.raises(ConfigParseError):
        _ = Config.load(env={})


@pytest.mark.parametrize(
    "content",
    [
        "unknown_key = 1\n",
        "api_url = 42\n",
        'api_url = ""\n',
        "timeout_seconds = -1\n",
        "timeout_seconds = true\n",
        "timeout_seconds = nan\n",
        "timeout_seconds = inf\n",
        "log_file = 123\n",
        "log_file = true\n",
    ],
)
def test_invalid_values_raise_validation_error(portable_repo_root: Path, content: str) -> None:
    _ = _write_config(portable_repo_root, content)

    with pytest.raises(ConfigValidationError):
        _ = Config.load(env={})


@pytest.mark.parametrize("raw", ["soon", "nan", "inf", "-inf"])
def test_invalid_env_timeout_raises_validation_error(raw: str) -> None:
    with pytest.raises(ConfigValidationError):
        _ = Config.load(env={"SIMTRACK_TIMEOUT": raw})


def test_non_string_log_file_is_rejected() -> None:
    with pytest.raises(ConfigValidationError, match="log_file"):
        _ = Config(log_file=123)  # type: ignore[arg-type]


def test_client_settings_requires_token() -> None:
    with pytest.raises(ConfigError, match="SIMTRACK_API_TOKEN"):
        _ = Config().client_settings()


def test_client_settings_carries_configuration() -> None:
    settings = Config(api_token="tok", timeout_seconds=7).client_settings()

    assert settings.url == DEFAULT_API_URL
    assert settings.token == "tok"
    assert settings.timeout == 7.0


def test_repr_masks_token() -> None:
    assert "tok-secret" not in repr(Config(api_token="tok-secret"))
