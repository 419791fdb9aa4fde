"""Shared fixtures for enumkit unit tests."""

from __future__ import annotations

import pytest

from enumkit import Enum, EnumRegistry


@pytest.fixture
def registry() -> EnumRegistry:
    """Return a registry isolated from the process-wide default."""
    return EnumRegistry()


@pytest.fixture
def local_enum(registry: EnumRegistry) -> type[Enum]:
    """Return a fresh enum class bound to the isolated registry."""

    class Local(Enum, registry=registry):
        A = (1, "a")
        B = (2, "b")

    return Local
