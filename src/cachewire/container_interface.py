from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol, runtime_checkable

Transform = Callable[[Any], Any]
"""Lazy transformation applied to a dependency's resolved value."""


@runtime_checkable
class ExtendableContainer(Protocol):
    """Container capability consumed by ``wire_caching``.

    ``extend`` must call ``transform`` at most once per registration, at or
    before the value is first handed to a caller, and the return value of
    ``transform`` becomes the dependency's value from then on.
    """

    def has(self, key: str) -> bool: ...

    def extend(self, key: str, transform: Transform) -> None: ...


class CacheDecorator(Protocol):
    """Caching decorator capability: wrap ``target`` according to ``options``."""

    def __call__(self, target: Callable[..., Any], options: Mapping[str, Any]) -> Any: ...
