"""Errors: unresolvable entries fail at wiring time, missing methods on first use."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from cachewire import (
    CacheWireMissingMethodError,
    CacheWireUnresolvableEntryError,
    Container,
    wire_caching,
)


def passthrough(target: Callable[..., Any], options: Mapping[str, Any]) -> Callable[..., Any]:
    return target


class Users:
    def find(self, user_id: int) -> str:
        return f"user-{user_id}"


def main() -> None:
    container = Container()
    container.add_factory(Users, provides="users")

    try:
        wire_caching(container, None, {"entries": {"accounts.find": True}}, decorator=passthrough)
    except CacheWireUnresolvableEntryError as error:
        print(error)  # => Could not find a dependency 'accounts.find' nor 'accounts' to cache.

    wire_caching(container, None, {"entries": {"users.lookup": True}}, decorator=passthrough)
    print("wired")  # => wired

    try:
        container.resolve("users")
    except CacheWireMissingMethodError as error:
        print(error)  # => Dependency 'users' has no callable member 'lookup'.


if __name__ == "__main__":
    main()
