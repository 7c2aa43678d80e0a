"""Quickstart: cache a function dependency and one method of a service.

``wire_caching`` only wires decoration. The caching itself is done by the
decorator you pass in; this example uses a tiny in-memory one keyed by
segment and call arguments.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from cachewire import Container, wire_caching


class InMemoryCacheClient:
    def __init__(self) -> None:
        self.store: dict[tuple[Any, ...], Any] = {}


def make_cacheable(target: Callable[..., Any], options: Mapping[str, Any]) -> Callable[..., Any]:
    client: InMemoryCacheClient = options["cache_client"]
    segment = options["segment"]

    def cached(*args: Any) -> Any:
        key = (segment, *args)
        if key not in client.store:
            client.store[key] = target(*args)
        return client.store[key]

    return cached


class ArticleRepository:
    def __init__(self) -> None:
        self.queries = 0

    def get_article(self, article_id: int) -> str:
        self.queries += 1
        return f"article-{article_id}"


def get_exchange_rate(currency: str) -> float:
    return {"EUR": 1.1, "GBP": 1.3}[currency]


def main() -> None:
    container = Container()
    container.add_factory(ArticleRepository, provides="article_repository")
    container.add_instance(get_exchange_rate, provides="get_exchange_rate")

    cache_client = InMemoryCacheClient()
    config = {
        "options": {"ttl": 14400},
        "entries": {
            "article_repository.get_article": {"ttl": 3600},
            "get_exchange_rate": True,
        },
    }
    wire_caching(container, cache_client, config, decorator=make_cacheable)

    repository = container.resolve("article_repository")
    print(repository.get_article(1))  # => article-1
    print(repository.get_article(1))  # => article-1
    print(f"queries={repository.queries}")  # => queries=1

    rate = container.resolve("get_exchange_rate")
    print(rate("EUR"))  # => 1.1
    print(
        sorted(key[0] for key in cache_client.store),
    )  # => ['article_repository.get_article', 'get_exchange_rate']


if __name__ == "__main__":
    main()
