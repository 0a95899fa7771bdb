"""Shared fixtures: a fresh registry with a small zoo of families."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from tagmatch import Family, FamilyRegistry, Handle, LineageCache, looks_like


@pytest.fixture
def registry() -> FamilyRegistry:
    return FamilyRegistry(LineageCache())


@pytest.fixture
def bar(registry: FamilyRegistry) -> Family:
    return registry.family("Bar", ["ONE", "TWO"])


@pytest.fixture
def user(registry: FamilyRegistry) -> Family:
    return registry.family("User", ["NOT_ACTIVE", "ACTIVE", "PENDING"])


@pytest.fixture
def post(registry: FamilyRegistry) -> Family:
    return registry.family("Post", {"STANDARD": "StandardPost", "PRODUCT": "ProductPost"})


@pytest.fixture
def vary(registry: FamilyRegistry) -> Family:
    return registry.family("Vary", {"SIMPLE": None, "ARGS": None, "SUB": "Sub"})


def _same_payload(a: Handle, b: Handle) -> bool:
    decided = looks_like(a, b)
    if decided is not None:
        return decided
    left, right = a.args[0], b.args[0]  # type: ignore[index]
    return vars(left) == vars(right)


@pytest.fixture
def either(registry: FamilyRegistry) -> Family:
    return registry.family("Either", {"LEFT": "Left", "RIGHT": "Right"}, equivalence=_same_payload)


@pytest.fixture
def payload():
    return SimpleNamespace
