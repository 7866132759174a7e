"""Errors: what autowiring reports when a constructor cannot be satisfied."""

from __future__ import annotations

from ctxwire import Container, NotResolvedDependencyError


class Cache:
    def __init__(self, ttl) -> None:  # type: ignore[no-untyped-def]
        self.ttl = ttl


class Service:
    def __init__(self, cache: Cache) -> None:
        self.cache = cache


def main() -> None:
    container = Container()

    try:
        container.get(Service)
    except NotResolvedDependencyError as error:
        print(f"error={type(error).__name__}")  # => error=NotResolvedDependencyError
        print(f"cause={type(error.__cause__).__name__}")  # => cause=ParameterNotInstantiableError

    container.bind_singleton(Cache, lambda c: Cache(ttl=60))
    print(f"ttl={container.get(Service).cache.ttl}")  # => ttl=60


if __name__ == "__main__":
    main()
