"""Compressor handles reporting the negotiated transport algorithm."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

NO_COMPRESSION = "none"


@runtime_checkable
class Compressor(Protocol):
    """Protocol implemented by transport compressors."""

    def algorithm(self) -> str | None:
        """Identifier sent as the STARTUP compression option, or None."""


class NoopCompressor:
    """Compressor used when no algorithm is configured."""

    def algorithm(self) -> str | None:
        return None

    def __repr__(self) -> str:
        return "NoopCompressor()"


@dataclass(frozen=True, slots=True)
class NamedCompressor:
    """Compressor that reports a configured algorithm name as-is."""

    name: str

    def algorithm(self) -> str | None:
        return self.name


def compressor_for(name: str | None) -> Compressor:
    """Map a configured algorithm name onto a compressor."""

    if name is None or not name.strip() or name.strip().lower() == NO_COMPRESSION:
        return NoopCompressor()
    return NamedCompressor(name)


__all__ = ["Compressor", "NO_COMPRESSION", "NamedCompressor", "NoopCompressor", "compressor_for"]
