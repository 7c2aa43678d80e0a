from __future__ import annotations


class CacheWireError(Exception):
    """Represent a base class for all cachewire-specific failures.

    Catch this type when you want to handle any cachewire error path without
    matching each concrete exception class individually.
    """


class CacheWireConfigurationError(CacheWireError):
    """Signal a caching configuration that cannot be applied to a container.

    Every wiring failure derives from this class, whether it is detected
    eagerly by ``wire_caching`` or lazily when a decorated dependency is first
    resolved.
    """


class CacheWireInvalidConfigError(CacheWireConfigurationError):
    """Signal malformed caching configuration data.

    Raised by ``CachingConfig.from_mapping`` and ``coerce_config`` when the
    ``entries`` section is missing, when a section is not a mapping, or when an
    entry identifier is not a non-empty string.
    """


class CacheWireUnresolvableEntryError(CacheWireConfigurationError):
    """Signal an entry identifier that matches no registered dependency.

    Raised eagerly by ``wire_caching`` before any container mutation when the
    identifier is neither registered itself nor splittable into a registered
    dependency id and a method name.

    Typical fixes include registering the dependency before wiring or fixing a
    typo in the configured identifier.
    """

    def __init__(self, entry_id: str, dependency_id: str | None = None) -> None:
        self.entry_id = entry_id
        self.dependency_id = dependency_id
        if dependency_id is None:
            msg = f"Could not find a dependency {entry_id!r} to cache."
        else:
            msg = f"Could not find a dependency {entry_id!r} nor {dependency_id!r} to cache."
        super().__init__(msg)


class CacheWireMissingMethodError(CacheWireConfigurationError):
    """Signal a method entry whose dependency has no such callable member.

    Raised lazily, from the container's resolution path, the first time the
    dependency is resolved. cachewire does not catch it.
    """

    def __init__(self, dependency_id: str, method_name: str) -> None:
        self.dependency_id = dependency_id
        self.method_name = method_name
        super().__init__(f"Dependency {dependency_id!r} has no callable member {method_name!r}.")


class CacheWireMemberNotReplaceableError(CacheWireMissingMethodError):
    """Signal a method entry whose member cannot be replaced on the dependency.

    Raised lazily, like ``CacheWireMissingMethodError``, when assigning the
    decorated callable fails, for example because the dependency uses
    ``__slots__`` or is a frozen dataclass. The dependency is left unchanged.

    Typical fixes include decorating the whole dependency instead, or
    registering a mutable wrapper object.
    """

    def __init__(self, dependency_id: str, method_name: str) -> None:
        self.dependency_id = dependency_id
        self.method_name = method_name
        CacheWireConfigurationError.__init__(
            self,
            f"Member {method_name!r} of dependency {dependency_id!r} cannot be replaced.",
        )


class CacheWireDependencyNotRegisteredError(CacheWireError):
    """Signal that a dependency key has no registration.

    Raised by ``Container.resolve`` and ``Container.extend`` for unknown keys.
    """

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Dependency {key!r} is not registered.")


class CacheWireInvalidRegistrationError(CacheWireError):
    """Signal invalid registration arguments on the reference container.

    Raised by ``Container.add_instance``, ``Container.add_factory`` and
    ``Container.extend`` when the key is empty or a callable argument is not
    callable.
    """
