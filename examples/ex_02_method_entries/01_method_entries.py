"""Method entries: exact matches win over ``dependency.method`` splitting.

1. ``"reports.monthly"`` is registered itself, so the whole dependency is decorated.
2. ``"reports.build"`` is not registered, so it names the ``build`` method of ``reports``.
3. A configured ``segment`` replaces the default segment name.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from cachewire import Container, wire_caching


def labeling_decorator(
    target: Callable[..., Any],
    options: Mapping[str, Any],
) -> Callable[..., Any]:
    def labeled(*args: Any) -> str:
        return f"[{options['segment']} ttl={options['ttl']}] {target(*args)}"

    return labeled


class Reports:
    def __init__(self, owner: str) -> None:
        self.owner = owner

    def build(self, name: str) -> str:
        return f"{name} by {self.owner}"

    def archive(self, name: str) -> str:
        return f"archived {name}"


def monthly_report() -> str:
    return "monthly"


def main() -> None:
    container = Container()
    container.add_instance(Reports(owner="finance"), provides="reports")
    container.add_instance(monthly_report, provides="reports.monthly")

    wire_caching(
        container,
        None,
        {
            "options": {"ttl": 60},
            "entries": {
                "reports.monthly": True,
                "reports.build": {"ttl": 5},
                "reports.archive": {"segment": "archive"},
            },
        },
        decorator=labeling_decorator,
    )

    reports = container.resolve("reports")
    print(reports.build("q1"))  # => [reports.build ttl=5] q1 by finance
    print(reports.archive("q1"))  # => [archive ttl=60] archived q1
    print(container.resolve("reports.monthly")())  # => [reports.monthly ttl=60] monthly


if __name__ == "__main__":
    main()
