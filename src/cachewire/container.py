from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext
from dataclasses import dataclass, field
from typing import Any

from cachewire.container_interface import Transform
from cachewire.exceptions import (
    CacheWireDependencyNotRegisteredError,
    CacheWireInvalidRegistrationError,
)
from cachewire.lock_mode import LockMode

logger = logging.getLogger(__name__)
_UNRESOLVED = object()


@dataclass
class _Registration:
    key: str
    factory: Callable[[], Any]
    lock: threading.Lock | None
    extensions: list[Transform] = field(default_factory=list)
    value: Any = _UNRESOLVED
    error: Exception | None = None

    @property
    def is_resolved(self) -> bool:
        return self.value is not _UNRESOLVED


class Container:
    """Keep string-keyed dependencies that are built and extended lazily.

    Each key is backed by a zero-argument factory (``add_instance`` wraps the
    value in one). The first ``resolve`` calls the factory, passes the result
    through the key's extension chain in registration order, and caches the
    final value. Later resolutions return the cached value, so every extension
    runs at most once.

    This is the container ``wire_caching`` is tested against; any object with
    compatible ``has`` and ``extend`` methods can be used instead.
    """

    def __init__(self, *, lock_mode: LockMode = LockMode.THREAD) -> None:
        """Initialize an empty container.

        Args:
            lock_mode: ``LockMode.THREAD`` serializes first resolution per key.
                ``LockMode.NONE`` skips locking for single-threaded use.

        """
        self._lock_mode = lock_mode
        self._registrations: dict[str, _Registration] = {}

    def add_instance(self, instance: Any, *, provides: str) -> None:
        """Register an already-built value under ``provides``.

        Extensions still run lazily, on the first ``resolve`` of the key.
        """
        self.add_factory(lambda: instance, provides=provides)

    def add_factory(self, factory: Callable[[], Any], *, provides: str) -> None:
        """Register a zero-argument factory called once, on first resolution.

        Re-registering a key replaces its factory and drops any cached value;
        extensions registered for the key are kept.

        Raises:
            CacheWireInvalidRegistrationError: If ``provides`` is empty or
                ``factory`` is not callable.

        """
        self._validate_key(provides, method_name="add_factory")
        if not callable(factory):
            msg = f"add_factory() factory for {provides!r} must be callable."
            raise CacheWireInvalidRegistrationError(msg)

        existing = self._registrations.get(provides)
        self._registrations[provides] = _Registration(
            key=provides,
            factory=factory,
            lock=threading.Lock() if self._lock_mode is LockMode.THREAD else None,
            extensions=[] if existing is None else existing.extensions,
        )

    def has(self, key: str) -> bool:
        """Return whether ``key`` is registered."""
        return key in self._registrations

    def __contains__(self, key: object) -> bool:
        return key in self._registrations

    def keys(self) -> list[str]:
        """Return registered keys in registration order."""
        return list(self._registrations)

    def extend(self, key: str, transform: Transform) -> None:
        """Append ``transform`` to the extension chain of ``key``.

        The transformation receives the value built so far and returns the value
        to use instead. If ``key`` was already resolved, ``transform`` is
        applied to the cached value right away.

        Raises:
            CacheWireDependencyNotRegisteredError: If ``key`` is not registered.
            CacheWireInvalidRegistrationError: If ``transform`` is not callable.

        """
        if not callable(transform):
            msg = f"extend() transform for {key!r} must be callable."
            raise CacheWireInvalidRegistrationError(msg)
        registration = self._get_registration(key)

        with _maybe_locked(registration.lock):
            if registration.is_resolved:
                logger.debug("Applying extension to already resolved dependency %r", key)
                registration.value = transform(registration.value)
            registration.extensions.append(transform)

    def resolve(self, key: str) -> Any:
        """Return the value of ``key``, building and extending it on first use.

        A factory failure leaves the key unresolved so the next call retries
        it. Once the extension chain has started, a failing extension is final:
        later calls re-raise the same error until the key is re-registered.

        Raises:
            CacheWireDependencyNotRegisteredError: If ``key`` is not registered.

        """
        registration = self._get_registration(key)
        if registration.is_resolved:
            return registration.value

        with _maybe_locked(registration.lock):
            if registration.is_resolved:
                return registration.value
            if registration.error is not None:
                raise registration.error
            value = registration.factory()
            try:
                for transform in registration.extensions:
                    value = transform(value)
            except Exception as error:
                # Earlier extensions may have mutated the value in place.
                registration.error = error
                raise
            registration.value = value
            logger.debug(
                "Resolved dependency %r with %d extensions",
                key,
                len(registration.extensions),
            )
            return value

    def _get_registration(self, key: str) -> _Registration:
        registration = self._registrations.get(key)
        if registration is None:
            raise CacheWireDependencyNotRegisteredError(key)
        return registration

    def _validate_key(self, key: object, *, method_name: str) -> None:
        if not isinstance(key, str) or not key:
            msg = f"{method_name}() parameter 'provides' must be a non-empty string."
            raise CacheWireInvalidRegistrationError(msg)


def _maybe_locked(lock: threading.Lock | None) -> AbstractContextManager[Any]:
    if lock is None:
        return nullcontext()
    return lock
