"""Tests for configuration path resolution helpers."""

from pathlib import Path

import pytest

from magicreplace.config.paths import (
    default_config_path,
    default_data_dir,
    default_log_dir,
    default_log_file,
    resolve_overridable_path,
)


def test_default_paths_live_under_repo_root(portable_repo_root: Path) -> None:
    """Config and logs default to locations inside the detected repository."""

    assert default_config_path() == portable_repo_root / "config" / "config.toml"
    assert default_data_dir() == portable_repo_root / ".data"
    assert default_log_dir() == portable_repo_root / ".data" / "logs"
    assert default_log_file() == portable_repo_root / ".data" / "logs" / "magicreplace.log"


def test_environment_overrides_config_path(
    portable_repo_root: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _ = portable_repo_root
    custom = tmp_path / "elsewhere" / "mr.toml"
    monkeypatch.setenv("MAGICREPLACE_CONFIG", str(custom))

    assert default_config_path() == custom.resolve()


def test_explicit_path_wins_over_environment(tmp_path: Path) -> None:
    explicit = tmp_path / "explicit"
    resolved = resolve_overridable_path(
        explicit_path=explicit,
        env={"SOME_VAR": str(tmp_path / "from-env")},
        env_var="SOME_VAR",
        default_factory=lambda: tmp_path / "default",
    )
    assert resolved == explicit.resolve()


def test_blank_environment_value_falls_back_to_default(tmp_path: Path) -> None:
    resolved = resolve_overridable_path(
        explicit_path=None,
        env={"SOME_VAR": "   "},
        env_var="SOME_VAR",
        default_factory=lambda: tmp_path / "default",
    )
    assert resolved == (tmp_path / "default").resolve()
