"""STARTUP message envelope and its [string map] body codec."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

STARTUP_OPCODE = 0x01

CQL_VERSION_KEY = "CQL_VERSION"
COMPRESSION_KEY = "COMPRESSION"
CQL_VERSION = "3.0.0"

_SHORT = struct.Struct(">H")
_MAX_SHORT = 0xFFFF


class ProtocolError(ValueError):
    """Raised when a STARTUP body cannot be encoded or decoded."""


@dataclass(frozen=True, slots=True)
class Startup:
    """Client STARTUP request.

    The mandatory CQL_VERSION option is always set here and replaces any value
    present in the supplied options.
    """

    options: Mapping[str, str | None] = field(default_factory=dict)
    opcode: int = field(default=STARTUP_OPCODE, init=False)

    def __post_init__(self) -> None:
        merged = dict(self.options or {})
        merged[CQL_VERSION_KEY] = CQL_VERSION
        object.__setattr__(self, "options", MappingProxyType(merged))

    @property
    def compression(self) -> str | None:
        return self.options.get(COMPRESSION_KEY)

    def encode_body(self) -> bytes:
        """Serialize the options as a CQL [string map]."""

        return encode_string_map(self.options)


def encode_string_map(options: Mapping[str, str | None]) -> bytes:
    if len(options) > _MAX_SHORT:
        raise ProtocolError(f"Too many entries for a [string map]: {len(options)}")
    chunks = [_SHORT.pack(len(options))]
    for key in sorted(options):
        value = options[key]
        if value is None:
            raise ProtocolError(f"Option '{key}' has no value and cannot be encoded")
        chunks.append(_encode_string(key))
        chunks.append(_encode_string(value))
    return b"".join(chunks)


def decode_string_map(data: bytes) -> dict[str, str]:
    """Decode a CQL [string map]; trailing bytes are rejected."""

    count, offset = _read_short(data, 0)
    result: dict[str, str] = {}
    for _ in range(count):
        key, offset = _read_string(data, offset)
        value, offset = _read_string(data, offset)
        result[key] = value
    if offset != len(data):
        raise ProtocolError(f"Unexpected {len(data) - offset} trailing bytes after [string map]")
    return result


def _encode_string(value: str) -> bytes:
    raw = value.encode("utf-8")
    if len(raw) > _MAX_SHORT:
        raise ProtocolError(f"String of {len(raw)} bytes does not fit a [string]")
    return _SHORT.pack(len(raw)) + raw


def _read_short(data: bytes, offset: int) -> tuple[int, int]:
    end = offset + _SHORT.size
    if end > len(data):
        raise ProtocolError("Truncated [string map]: missing length prefix")
    (value,) = _SHORT.unpack_from(data, offset)
    return value, end


def _read_string(data: bytes, offset: int) -> tuple[str, int]:
    length, start = _read_short(data, offset)
    end = start + length
    if end > len(data):
        raise ProtocolError("Truncated [string map]: string runs past end of body")
    try:
        return data[start:end].decode("utf-8"), end
    except UnicodeDecodeError as exc:
        raise ProtocolError(f"Invalid UTF-8 in [string]: {exc}") from exc


__all__ = [
    "COMPRESSION_KEY",
    "CQL_VERSION",
    "CQL_VERSION_KEY",
    "ProtocolError",
    "STARTUP_OPCODE",
    "Startup",
    "decode_string_map",
    "encode_string_map",
]
