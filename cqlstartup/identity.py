"""Driver identity reported in the STARTUP handshake."""

from __future__ import annotations

import logging
import re
import threading
import tomllib
from dataclasses import dataclass
from importlib import resources
from typing import Callable, Protocol, runtime_checkable

from pydantic import BaseModel, Field, ValidationError, field_validator

LOG = logging.getLogger(__name__)

IDENTITY_RESOURCE = "driver.toml"

_SEMVER = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?"
    r"(?:\+[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*)?$"
)


class DriverIdentityError(RuntimeError):
    """Raised when the packaged driver identity cannot be resolved."""


@dataclass(frozen=True, slots=True)
class DriverIdentity:
    """Display name and semantic version of the driver."""

    name: str
    version: str


@runtime_checkable
class IdentityProvider(Protocol):
    """Source of the DRIVER_NAME / DRIVER_VERSION startup values."""

    def name(self) -> str:
        """Driver display name."""

    def version(self) -> str:
        """Driver version string."""


class PackagedIdentity:
    """Identity read from the metadata bundled with this package."""

    def name(self) -> str:
        return packaged_identity().name

    def version(self) -> str:
        return packaged_identity().version


@dataclass(frozen=True, slots=True)
class StaticIdentity:
    """Fixed identity, for clients embedding or rebranding the driver."""

    driver_name: str
    driver_version: str

    def name(self) -> str:
        return self.driver_name

    def version(self) -> str:
        return self.driver_version


class _DriverSection(BaseModel):
    name: str = Field(min_length=1)
    version: str

    @field_validator("version")
    @classmethod
    def _check_semver(cls, value: str) -> str:
        if not _SEMVER.match(value):
            raise ValueError(f"'{value}' is not a semantic version")
        return value


class _IdentityFile(BaseModel):
    driver: _DriverSection


def parse_identity(text: str) -> DriverIdentity:
    """Parse the contents of a driver identity TOML document."""

    try:
        document = _IdentityFile.model_validate(tomllib.loads(text))
    except tomllib.TOMLDecodeError as exc:
        raise DriverIdentityError(f"Driver identity is not valid TOML: {exc}") from exc
    except ValidationError as exc:
        raise DriverIdentityError(f"Driver identity is malformed: {exc}") from exc
    return DriverIdentity(name=document.driver.name, version=document.driver.version)


def _read_resource() -> str:
    try:
        return resources.files(__package__).joinpath(IDENTITY_RESOURCE).read_text(encoding="utf-8")
    except OSError as exc:
        raise DriverIdentityError(
            f"Could not read driver identity resource '{IDENTITY_RESOURCE}': {exc}"
        ) from exc


class _IdentityCache:
    """One-time holder for the process-wide identity.

    The loader runs at most once. A failure is remembered and raised again on
    every later access instead of being retried.
    """

    def __init__(self, loader: Callable[[], DriverIdentity]) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._value: DriverIdentity | None = None
        self._error: DriverIdentityError | None = None

    def get(self) -> DriverIdentity:
        value = self._value
        if value is not None:
            return value
        with self._lock:
            if self._value is None and self._error is None:
                try:
                    self._value = self._loader()
                except DriverIdentityError as exc:
                    LOG.error("Driver identity resolution failed", extra={"resource": IDENTITY_RESOURCE})
                    self._error = exc
                else:
                    LOG.debug(
                        "Resolved driver identity",
                        extra={"driver_name": self._value.name, "driver_version": self._value.version},
                    )
            if self._error is not None:
                raise self._error
            assert self._value is not None
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = None
            self._error = None


_CACHE = _IdentityCache(lambda: parse_identity(_read_resource()))


def packaged_identity() -> DriverIdentity:
    """Return the packaged driver identity, resolving it on first use."""

    return _CACHE.get()


def reset_packaged_identity() -> None:
    """Forget the cached identity (testing helper)."""

    _CACHE.reset()


__all__ = [
    "DriverIdentity",
    "DriverIdentityError",
    "IDENTITY_RESOURCE",
    "IdentityProvider",
    "PackagedIdentity",
    "StaticIdentity",
    "packaged_identity",
    "parse_identity",
    "reset_packaged_identity",
]
