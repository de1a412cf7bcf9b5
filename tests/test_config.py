"""Tests for DriverConfig helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from cqlstartup import config as config_module
from cqlstartup.config import DriverConfig, StartupProfileConfig, load_config


def test_default_config_has_default_profile() -> None:
    config = DriverConfig()

    profile = config.resolve_profile()

    assert profile.name == "default"
    assert profile.compression is None
    assert profile.options == {}


def test_resolve_profile_prefers_explicit_then_active() -> None:
    config = DriverConfig(
        profiles=[
            StartupProfileConfig(name="default"),
            StartupProfileConfig(name="fast", compression="lz4"),
            StartupProfileConfig(name="slow", compression="snappy"),
        ],
        active_profile="fast",
    )

    assert config.resolve_profile().name == "fast"
    assert config.resolve_profile("slow").name == "slow"


def test_resolve_profile_falls_back_to_default_then_first() -> None:
    with_default = DriverConfig(
        profiles=[StartupProfileConfig(name="other"), StartupProfileConfig(name="default")]
    )
    without_default = DriverConfig(profiles=[StartupProfileConfig(name="only")])

    assert with_default.resolve_profile().name == "default"
    assert without_default.resolve_profile().name == "only"


def test_resolve_profile_rejects_unknown_name() -> None:
    with pytest.raises(ValueError):
        DriverConfig().resolve_profile("missing")


def test_with_active_profile_updates_field() -> None:
    config = DriverConfig(profiles=[StartupProfileConfig(name="fast")])

    updated = config.with_active_profile("fast")

    assert updated.active_profile == "fast"
    assert config.active_profile is None


def test_load_config_returns_defaults_when_missing(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.toml")

    result = load_config()

    assert result == DriverConfig()


def test_load_config_reads_values(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        """
active_profile = "analytics"

[[profiles]]
name = "default"

[[profiles]]
name = "analytics"
compression = "lz4"
application_name = "reporting"
application_version = "2.0.0"
client_id = "8d3e0a56-4c7b-4a0b-9d6e-2f7d1f3a9b11"

[profiles.options]
TRACE_TAG = "nightly"

[[profiles]]
compression = "snappy"
"""
    )

    result = load_config(config_path)

    assert result.active_profile == "analytics"
    assert [profile.name for profile in result.profiles] == ["default", "analytics"]
    analytics = result.resolve_profile()
    assert analytics.compression == "lz4"
    assert analytics.application_name == "reporting"
    assert analytics.application_version == "2.0.0"
    assert analytics.client_id == "8d3e0a56-4c7b-4a0b-9d6e-2f7d1f3a9b11"
    assert analytics.options == {"TRACE_TAG": "nightly"}


def test_load_config_handles_toml_errors(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("active_profile = [unterminated")

    result = load_config(config_path)

    assert result == DriverConfig()
