from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Union

from typing_extensions import Self, TypeAlias

from cachewire.exceptions import CacheWireInvalidConfigError
from cachewire.integrations.pydantic_settings import dump_pydantic_model, is_pydantic_model

EntryOptions: TypeAlias = dict[str, Any]
"""Per-entry cache options after normalisation."""

EntryValue: TypeAlias = Union[Mapping[str, Any], bool, None]
"""Configured value of an entry: options, ``True`` for defaults only, or a falsy skip."""


def merge_options(*mappings: Mapping[str, Any] | None) -> dict[str, Any]:
    """Shallow-merge option mappings into a new dict, later mappings winning.

    ``None`` arguments are ignored. The inputs are never mutated.
    """
    merged: dict[str, Any] = {}
    for mapping in mappings:
        if mapping:
            merged.update(mapping)
    return merged


def entry_options(value: EntryValue | object) -> EntryOptions:
    """Normalise a truthy entry value into its own options dict.

    Mappings are copied. ``True`` and any other non-mapping value contribute no
    overrides.
    """
    if isinstance(value, Mapping):
        return dict(value)
    return {}


@dataclass(frozen=True)
class CachingConfig:
    """Declarative description of which container entries to cache.

    ``options`` are defaults applied to every entry. ``entries`` maps an entry
    identifier, either a dependency id or ``"<dependency id>.<method>"``, to its
    own options. Falsy non-mapping values are skipped; ``True`` or an empty mapping means
    defaults only.
    Entries are wired in insertion order.

    Example:
        .. code-block:: python

            config = CachingConfig(
                options={"ttl": 14400},
                entries={
                    "article_repository.get_article": {"ttl": 3600},
                    "get_something_expensive": True,
                },
            )

    """

    entries: Mapping[str, EntryValue] = field(default_factory=dict)
    options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _validate_section("entries", self.entries)
        _validate_section("options", self.options)
        for entry_id in self.entries:
            if not isinstance(entry_id, str) or not entry_id:
                msg = f"Entry identifiers must be non-empty strings, got {entry_id!r}."
                raise CacheWireInvalidConfigError(msg)
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Self:
        """Build a config from plain data such as a parsed JSON or YAML document.

        Args:
            data: Mapping with a required ``entries`` key and an optional
                ``options`` key.

        Returns:
            The validated configuration.

        Raises:
            CacheWireInvalidConfigError: If ``data`` is not a mapping, lacks
                ``entries``, or contains a malformed section.

        """
        if not isinstance(data, Mapping):
            msg = f"Caching configuration must be a mapping, got {type(data).__name__}."
            raise CacheWireInvalidConfigError(msg)
        if "entries" not in data:
            msg = "Caching configuration requires an 'entries' mapping."
            raise CacheWireInvalidConfigError(msg)
        options = data.get("options")
        return cls(
            entries=data["entries"],
            options={} if options is None else options,
        )

    @classmethod
    def from_model(cls, model: Any) -> Self:
        """Build a config from a Pydantic model or settings instance."""
        return cls.from_mapping(dump_pydantic_model(model))

    def enabled_entries(self) -> Iterator[tuple[str, EntryOptions]]:
        """Yield ``(entry_id, options)`` for every enabled entry, in order.

        An empty options mapping enables the entry with default options only.
        """
        for entry_id, value in self.entries.items():
            if not isinstance(value, Mapping) and not value:
                continue
            yield entry_id, entry_options(value)


def coerce_config(config: CachingConfig | Mapping[str, Any] | Any) -> CachingConfig:
    """Return ``config`` as a ``CachingConfig``.

    Accepts an existing ``CachingConfig``, plain mapping data, or a Pydantic
    model instance exposing ``options`` and ``entries`` fields.
    """
    if isinstance(config, CachingConfig):
        return config
    if isinstance(config, Mapping):
        return CachingConfig.from_mapping(config)
    if is_pydantic_model(config):
        return CachingConfig.from_model(config)
    msg = (
        "Caching configuration must be a CachingConfig, a mapping, or a Pydantic model, "
        f"got {type(config).__name__}."
    )
    raise CacheWireInvalidConfigError(msg)


def _validate_section(name: str, value: object) -> None:
    if not isinstance(value, Mapping):
        msg = f"Caching configuration '{name}' must be a mapping, got {type(value).__name__}."
        raise CacheWireInvalidConfigError(msg)
