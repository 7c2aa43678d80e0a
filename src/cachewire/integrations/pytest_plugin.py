from __future__ import annotations

import functools
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest


@dataclass(frozen=True)
class DecoratorCall:
    """One recorded ``decorator(target, options)`` call."""

    target: Callable[..., Any]
    options: Mapping[str, Any]
    wrapper: Callable[..., Any]


@dataclass(frozen=True)
class TargetCall:
    """One recorded invocation of a decorated target."""

    segment: Any
    args: tuple[Any, ...]
    kwargs: Mapping[str, Any]
    result: Any


@dataclass
class CacheDecoratorSpy:
    """Stand-in caching decorator that records how it was wired.

    Pass the spy as ``decorator=`` to ``wire_caching``. Each decoration is
    recorded in ``calls``; the returned wrapper forwards to the target without
    caching and records each invocation in ``invocations``.
    """

    calls: list[DecoratorCall] = field(default_factory=list)
    invocations: list[TargetCall] = field(default_factory=list)

    def __call__(
        self,
        target: Callable[..., Any],
        options: Mapping[str, Any],
    ) -> Callable[..., Any]:
        segment = options.get("segment")

        @functools.wraps(target)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = target(*args, **kwargs)
            self.invocations.append(
                TargetCall(segment=segment, args=args, kwargs=kwargs, result=result),
            )
            return result

        self.calls.append(DecoratorCall(target=target, options=dict(options), wrapper=wrapper))
        return wrapper

    @property
    def segments(self) -> list[Any]:
        """Return the ``segment`` option of every recorded decoration, in order."""
        return [call.options.get("segment") for call in self.calls]

    def call_for(self, segment: str) -> DecoratorCall:
        """Return the recorded decoration for ``segment``.

        Raises:
            LookupError: If no decoration used ``segment``.

        """
        for call in self.calls:
            if call.options.get("segment") == segment:
                return call
        msg = f"No decoration recorded for segment {segment!r}; recorded: {self.segments!r}."
        raise LookupError(msg)


@pytest.fixture()
def cache_decorator_spy() -> CacheDecoratorSpy:
    """Provide a fresh ``CacheDecoratorSpy`` for each test."""
    return CacheDecoratorSpy()


__all__ = [
    "CacheDecoratorSpy",
    "DecoratorCall",
    "TargetCall",
    "cache_decorator_spy",
]
