"""Shared fixtures for astra_site tests."""

from __future__ import annotations

import typing as typ

import pytest

from astra_site.sites import variant_payload


@pytest.fixture
def expanded_payload() -> dict[str, typ.Any]:
    """Return a mutable copy of the expanded site literal."""
    return variant_payload("expanded")


@pytest.fixture
def minimal_payload() -> dict[str, typ.Any]:
    """Return a mutable copy of the minimal site literal."""
    return variant_payload("minimal")
