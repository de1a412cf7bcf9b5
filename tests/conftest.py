"""Shared fixtures for the cqlstartup test suite."""

from __future__ import annotations

from typing import Iterator

import pytest

from cqlstartup.identity import reset_packaged_identity


@pytest.fixture(autouse=True)
def _fresh_identity_cache() -> Iterator[None]:
    reset_packaged_identity()
    yield
    reset_packaged_identity()
