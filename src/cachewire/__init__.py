from cachewire.config import CachingConfig, coerce_config, merge_options
from cachewire.container import Container
from cachewire.container_interface import CacheDecorator, ExtendableContainer
from cachewire.exceptions import (
    CacheWireConfigurationError,
    CacheWireDependencyNotRegisteredError,
    CacheWireError,
    CacheWireInvalidConfigError,
    CacheWireInvalidRegistrationError,
    CacheWireMemberNotReplaceableError,
    CacheWireMissingMethodError,
    CacheWireUnresolvableEntryError,
)
from cachewire.lock_mode import LockMode
from cachewire.wiring import (
    MemberReplacement,
    ResolvedEntry,
    WholeReplacement,
    resolve_entry,
    wire_caching,
)

__all__ = [
    "CacheDecorator",
    "CacheWireConfigurationError",
    "CacheWireDependencyNotRegisteredError",
    "CacheWireError",
    "CacheWireInvalidConfigError",
    "CacheWireInvalidRegistrationError",
    "CacheWireMemberNotReplaceableError",
    "CacheWireMissingMethodError",
    "CacheWireUnresolvableEntryError",
    "CachingConfig",
    "Container",
    "ExtendableContainer",
    "LockMode",
    "MemberReplacement",
    "ResolvedEntry",
    "WholeReplacement",
    "coerce_config",
    "merge_options",
    "resolve_entry",
    "wire_caching",
]
