"""Shared pytest fixtures for cachewire tests."""

from __future__ import annotations

from typing import Any

import pytest

from cachewire.container import Container
from cachewire.container_interface import Transform
from cachewire.integrations.pytest_plugin import CacheDecoratorSpy


class RecordingContainer(Container):
    """Container that records every ``extend`` call."""

    def __init__(self) -> None:
        super().__init__()
        self.extended: list[tuple[str, Transform]] = []

    def extend(self, key: str, transform: Transform) -> None:
        self.extended.append((key, transform))
        super().extend(key, transform)

    @property
    def extended_keys(self) -> list[str]:
        return [key for key, _ in self.extended]


@pytest.fixture()
def container() -> RecordingContainer:
    """Empty container recording extension registrations."""
    return RecordingContainer()


@pytest.fixture()
def decorator_spy() -> CacheDecoratorSpy:
    """Fresh decorator spy for wiring tests."""
    return CacheDecoratorSpy()


@pytest.fixture()
def cache_client() -> Any:
    return object()
