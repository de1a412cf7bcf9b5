"""Builder for the options carried by a STARTUP message."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Protocol

from .compression import Compressor
from .identity import IdentityProvider, PackagedIdentity
from .protocol import COMPRESSION_KEY, CQL_VERSION_KEY

LOG = logging.getLogger(__name__)

DRIVER_NAME_KEY = "DRIVER_NAME"
DRIVER_VERSION_KEY = "DRIVER_VERSION"

RESERVED_KEYS = frozenset({DRIVER_NAME_KEY, DRIVER_VERSION_KEY, COMPRESSION_KEY, CQL_VERSION_KEY})

StartupOptions = Mapping[str, str | None]


class CompressorSource(Protocol):
    """Anything exposing the compressor negotiated for the connection."""

    @property
    def compressor(self) -> Compressor: ...


class StartupOptionsBuilder:
    """Assembles the option map handed to the STARTUP envelope.

    Callers cannot set DRIVER_NAME, DRIVER_VERSION, COMPRESSION or
    CQL_VERSION. Attempts to do so through :meth:`with_additional_options`
    are dropped without an error and the derived values win. CQL_VERSION
    itself is added later by :class:`~cqlstartup.protocol.Startup`.
    """

    def __init__(self, context: CompressorSource, *, identity: IdentityProvider | None = None) -> None:
        self._context = context
        self._identity = identity or PackagedIdentity()
        self._additional_options: dict[str, str | None] = {}

    def with_additional_options(self, options: StartupOptions | None) -> StartupOptionsBuilder:
        """Merge extra startup options, skipping the reserved keys."""

        if options is None:
            return self
        for key, value in options.items():
            if key in RESERVED_KEYS:
                LOG.debug("Ignoring reserved startup option", extra={"option": key})
                continue
            self._additional_options[key] = value
        return self

    def build(self) -> StartupOptions:
        """Return a read-only snapshot of the STARTUP options."""

        options: dict[str, str | None] = {}
        algorithm = self._context.compressor.algorithm()
        if algorithm is not None and algorithm.strip():
            options[COMPRESSION_KEY] = algorithm.strip()
        options.update(self._additional_options)
        # identity is written after the merge so it always wins
        options[DRIVER_NAME_KEY] = self.driver_name()
        options[DRIVER_VERSION_KEY] = self.driver_version()
        return MappingProxyType(options)

    def driver_name(self) -> str:
        """Name reported as DRIVER_NAME; not settable through additional options."""

        return self._identity.name()

    def driver_version(self) -> str:
        """Version reported as DRIVER_VERSION; not settable through additional options."""

        return self._identity.version()


__all__ = [
    "COMPRESSION_KEY",
    "CQL_VERSION_KEY",
    "CompressorSource",
    "DRIVER_NAME_KEY",
    "DRIVER_VERSION_KEY",
    "RESERVED_KEYS",
    "StartupOptions",
    "StartupOptionsBuilder",
]
