"""Driver configuration loading and profile resolution."""

from __future__ import annotations

import logging
from pathlib import Path

import tomllib

from pydantic import BaseModel, Field, ValidationError

LOG = logging.getLogger(__name__)

CONFIG_FILE = Path.home() / ".config" / "cqlstartup" / "config.toml"

DEFAULT_PROFILE = "default"


class StartupProfileConfig(BaseModel):
    """Per-profile settings that feed the STARTUP handshake."""

    name: str
    compression: str | None = None
    application_name: str | None = None
    application_version: str | None = None
    client_id: str | None = None
    options: dict[str, str] = Field(default_factory=dict)


class DriverConfig(BaseModel):
    """Shape of the driver configuration file."""

    profiles: list[StartupProfileConfig] = Field(
        default_factory=lambda: [StartupProfileConfig(name=DEFAULT_PROFILE)]
    )
    active_profile: str | None = None

    def resolve_profile(self, name: str | None = None) -> StartupProfileConfig:
        """Pick the profile for a connection.

        An explicit name must exist. Otherwise the active profile is used,
        then the one called "default", then the first one declared.
        """

        if name is not None:
            return self._profile_by_name(name)
        if self.active_profile is not None:
            return self._profile_by_name(self.active_profile)
        for profile in self.profiles:
            if profile.name == DEFAULT_PROFILE:
                return profile
        if self.profiles:
            return self.profiles[0]
        return StartupProfileConfig(name=DEFAULT_PROFILE)

    def with_active_profile(self, name: str) -> DriverConfig:
        """Return a copy with the active profile updated."""

        return self.model_copy(update={"active_profile": name})

    def _profile_by_name(self, name: str) -> StartupProfileConfig:
        for profile in self.profiles:
            if profile.name == name:
                return profile
        raise ValueError(f"Profile '{name}' not found.")


def load_config(path: Path | None = None) -> DriverConfig:
    """Load configuration from disk; fall back to defaults if missing."""

    target = path or CONFIG_FILE
    try:
        data = _read_config_file(target)
    except FileNotFoundError:
        return DriverConfig()
    except (tomllib.TOMLDecodeError, OSError) as exc:
        LOG.warning("Ignoring unreadable driver config", extra={"path": str(target), "error": str(exc)})
        return DriverConfig()

    try:
        return DriverConfig(**data)
    except ValidationError as exc:
        LOG.warning("Ignoring invalid driver config", extra={"path": str(target), "error": str(exc)})
        return DriverConfig()


def _read_config_file(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        raw = tomllib.load(handle)
    data: dict[str, object] = {}
    active_profile = raw.get("active_profile")
    if isinstance(active_profile, str):
        data["active_profile"] = active_profile
    profiles = raw.get("profiles")
    if isinstance(profiles, list):
        parsed_profiles: list[dict[str, object]] = []
        for profile in profiles:
            if not isinstance(profile, dict):
                continue
            parsed: dict[str, object] = {}
            for key in ("name", "compression", "application_name", "application_version", "client_id"):
                value = profile.get(key)
                if isinstance(value, str):
                    parsed[key] = value
            options = profile.get("options")
            if isinstance(options, dict):
                parsed["options"] = {str(key): str(value) for key, value in options.items()}
            if parsed.get("name"):
                parsed_profiles.append(parsed)
        if parsed_profiles:
            data["profiles"] = parsed_profiles
    return data


__all__ = ["CONFIG_FILE", "DEFAULT_PROFILE", "DriverConfig", "StartupProfileConfig", "load_config"]
