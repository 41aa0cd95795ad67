"""Test configuration management."""

import tomllib
from pathlib import Path

import pytest

from magicreplace.config.config import DEFAULT_API_BASE_URL, Config


def _write_config(root: Path, content: str) -> Path:
    target = root / "config" / "config.toml"
    target.parent.mkdir(parents=True, exist_ok=True)
    _ = target.write_text(content, encoding="utf-8")
    return target


def test_missing_file_yields_defaults(config_runtime_env: Path) -> None:
    """Loading without a config file returns defaults and writes nothing."""

    config = Config.load()

    assert config.api_base_url == DEFAULT_API_BASE_URL
    assert config.request_timeout is None
    assert config.smart_mode is False
    assert config.log_file is None
    assert not (config_runtime_env / "config" / "config.toml").exists()


def test_load_reads_toml_values(config_runtime_env: Path) -> None:
    _ = _write_config(
        config_runtime_env,
        'api_base_url = "https://store.example.com/"\n'
        "request_timeout = 12.5\n"
        "smart_mode = true\n"
        'log_file = "/tmp/mr/magicreplace.log"\n',
    )

    config = Config.load()

    assert config.api_base_url == "https://store.example.com/"
    assert config.request_timeout == 12.5
    assert config.smart_mode is True
    assert config.log_file == Path("/tmp/mr/magicreplace.log")


def test_load_is_cached(config_runtime_env: Path) -> None:
    _ = config_runtime_env
    first = Config.load()
    assert Config.load() is first


def test_unknown_keys_are_ignored(config_runtime_env: Path) -> None:
    _ = _write_config(config_runtime_env, 'smart_mode = true\nlegacy_option = "x"\n')

    config = Config.load()

    assert config.smart_mode is True
    assert not hasattr(config, "legacy_option")


def test_empty_log_file_becomes_none() -> None:
    assert Config(log_file="   ").log_file is None  # pyright: ignore[reportArgumentType]


def test_malformed_file_raises(config_runtime_env: Path) -> None:
    _ = _write_config(config_runtime_env, "api_base_url = [unterminated\n")

    with pytest.raises(tomllib.TOMLDecodeError):
        _ = Config.load()
