from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from typing_extensions import TypeAlias

from cachewire.config import CachingConfig, EntryOptions, coerce_config, merge_options
from cachewire.container_interface import CacheDecorator, ExtendableContainer, Transform
from cachewire.exceptions import (
    CacheWireMemberNotReplaceableError,
    CacheWireMissingMethodError,
    CacheWireUnresolvableEntryError,
)

logger = logging.getLogger(__name__)

CACHE_CLIENT_OPTION = "cache_client"
SEGMENT_OPTION = "segment"


@dataclass(frozen=True)
class ResolvedEntry:
    """An entry identifier resolved against a container.

    ``method_name`` is ``None`` when the whole dependency is decorated.
    """

    entry_id: str
    dependency_id: str
    method_name: str | None
    options: EntryOptions = field(hash=False)

    @property
    def default_segment(self) -> str:
        if self.method_name is None:
            return self.dependency_id
        return f"{self.dependency_id}.{self.method_name}"


@dataclass(frozen=True)
class WholeReplacement:
    """The dependency was replaced by its decorated form."""

    value: Any


@dataclass(frozen=True)
class MemberReplacement:
    """One member of the dependency was swapped; ``value`` is the same object."""

    value: Any
    method_name: str


DecorationOutcome: TypeAlias = Union[WholeReplacement, MemberReplacement]


def wire_caching(
    container: ExtendableContainer,
    cache_client: Any,
    config: CachingConfig | Mapping[str, Any] | Any,
    *,
    decorator: CacheDecorator,
) -> None:
    """Register lazy cache decoration for every configured container entry.

    Every enabled entry is resolved before the container is touched, so a bad
    identifier fails here, at startup, and leaves the container unchanged.
    Decoration itself runs inside the container the first time each
    dependency is resolved.

    Example:
        .. code-block:: python

            container.add_factory(ArticleRepository, provides="article_repository")
            container.add_instance(get_something_expensive, provides="get_something_expensive")

            wire_caching(
                container,
                cache_client,
                {
                    "options": {"ttl": 14400},
                    "entries": {
                        "article_repository.get_article": {"ttl": 3600},
                        "get_something_expensive": {"ttl": 65000},
                    },
                },
                decorator=make_cacheable,
            )

    Args:
        container: Container exposing ``has`` and ``extend``.
        cache_client: Opaque cache client handed to the decorator as the
            ``cache_client`` option.
        config: ``CachingConfig``, plain mapping data, or a Pydantic model with
            ``options`` and ``entries``.
        decorator: Callable invoked as ``decorator(target, options)``.

    Raises:
        CacheWireInvalidConfigError: If ``config`` is malformed.
        CacheWireUnresolvableEntryError: If an entry matches no registered
            dependency.

    """
    caching_config = coerce_config(config)
    resolved_entries = [
        resolve_entry(container, entry_id, options)
        for entry_id, options in caching_config.enabled_entries()
    ]

    defaults = merge_options(caching_config.options, {CACHE_CLIENT_OPTION: cache_client})
    for resolved in resolved_entries:
        container.extend(
            resolved.dependency_id,
            build_transform(resolved, defaults=defaults, decorator=decorator),
        )

    logger.info("Wired caching for %d container entries", len(resolved_entries))


def resolve_entry(
    container: ExtendableContainer,
    entry_id: str,
    options: EntryOptions | None = None,
) -> ResolvedEntry:
    """Resolve a configured identifier to a dependency id and optional method.

    An exact registration wins even if the identifier contains dots. Otherwise
    the identifier is split on its last dot into a dependency id and a method
    name, and the dependency id must be registered.

    Raises:
        CacheWireUnresolvableEntryError: If neither interpretation matches.

    """
    entry_options = {} if options is None else options

    if container.has(entry_id):
        logger.debug("Entry %r resolved to dependency %r", entry_id, entry_id)
        return ResolvedEntry(
            entry_id=entry_id,
            dependency_id=entry_id,
            method_name=None,
            options=entry_options,
        )

    dependency_id, separator, method_name = entry_id.rpartition(".")
    if not separator:
        raise CacheWireUnresolvableEntryError(entry_id)
    if not container.has(dependency_id):
        raise CacheWireUnresolvableEntryError(entry_id, dependency_id)

    logger.debug(
        "Entry %r resolved to method %r of dependency %r",
        entry_id,
        method_name,
        dependency_id,
    )
    return ResolvedEntry(
        entry_id=entry_id,
        dependency_id=dependency_id,
        method_name=method_name,
        options=entry_options,
    )


def build_transform(
    resolved: ResolvedEntry,
    *,
    defaults: Mapping[str, Any],
    decorator: CacheDecorator,
) -> Transform:
    """Build the container extension that decorates ``resolved`` on first use."""

    def transform(dependency: Any) -> Any:
        return decorate_dependency(
            resolved,
            dependency,
            defaults=defaults,
            decorator=decorator,
        ).value

    return transform


def decorate_dependency(
    resolved: ResolvedEntry,
    dependency: Any,
    *,
    defaults: Mapping[str, Any],
    decorator: CacheDecorator,
) -> DecorationOutcome:
    """Apply ``decorator`` to a live dependency value.

    Whole-dependency entries return a ``WholeReplacement`` holding the
    decorator's result. Method entries replace the member on ``dependency`` in
    place and return a ``MemberReplacement`` holding ``dependency`` itself.

    Raises:
        CacheWireMissingMethodError: If a method entry names a member that is
            missing or not callable.
        CacheWireMemberNotReplaceableError: If the member cannot be assigned,
            for example on ``__slots__`` classes or frozen dataclasses.

    """
    options = merge_options(defaults, resolved.options)
    if options.get(SEGMENT_OPTION) is None:
        options[SEGMENT_OPTION] = resolved.default_segment

    if resolved.method_name is None:
        logger.debug(
            "Decorating dependency %r as segment %r",
            resolved.dependency_id,
            options[SEGMENT_OPTION],
        )
        return WholeReplacement(value=decorator(dependency, options))

    method = _bound_member(dependency, resolved.dependency_id, resolved.method_name)
    decorated = decorator(method, options)
    try:
        setattr(dependency, resolved.method_name, decorated)
    except (AttributeError, TypeError) as error:
        raise CacheWireMemberNotReplaceableError(
            resolved.dependency_id,
            resolved.method_name,
        ) from error
    logger.debug(
        "Decorated method %r of dependency %r as segment %r",
        resolved.method_name,
        resolved.dependency_id,
        options[SEGMENT_OPTION],
    )
    return MemberReplacement(value=dependency, method_name=resolved.method_name)


def _bound_member(dependency: Any, dependency_id: str, method_name: str) -> Callable[..., Any]:
    # Attribute access on an instance yields methods already bound to it.
    member = getattr(dependency, method_name, None)
    if member is None or not callable(member):
        raise CacheWireMissingMethodError(dependency_id, method_name)
    return member
