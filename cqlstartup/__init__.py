"""Startup handshake options for CQL native protocol clients."""

from __future__ import annotations

__version__ = "0.1.0"

from .compression import Compressor, NamedCompressor, NoopCompressor, compressor_for
from .config import DriverConfig, StartupProfileConfig, load_config
from .context import DriverContext
from .identity import (
    DriverIdentity,
    DriverIdentityError,
    IdentityProvider,
    PackagedIdentity,
    StaticIdentity,
    packaged_identity,
)
from .options import (
    COMPRESSION_KEY,
    CQL_VERSION_KEY,
    DRIVER_NAME_KEY,
    DRIVER_VERSION_KEY,
    RESERVED_KEYS,
    StartupOptionsBuilder,
)
from .protocol import CQL_VERSION, ProtocolError, Startup, decode_string_map

__all__ = [
    "COMPRESSION_KEY",
    "CQL_VERSION",
    "CQL_VERSION_KEY",
    "Compressor",
    "DRIVER_NAME_KEY",
    "DRIVER_VERSION_KEY",
    "DriverConfig",
    "DriverContext",
    "DriverIdentity",
    "DriverIdentityError",
    "IdentityProvider",
    "NamedCompressor",
    "NoopCompressor",
    "PackagedIdentity",
    "ProtocolError",
    "RESERVED_KEYS",
    "Startup",
    "StartupOptionsBuilder",
    "StartupProfileConfig",
    "StaticIdentity",
    "compressor_for",
    "decode_string_map",
    "load_config",
    "packaged_identity",
    "__version__",
]
