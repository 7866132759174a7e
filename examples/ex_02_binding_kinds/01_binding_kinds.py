"""Binding kinds: singleton, factory and instance.

Singletons produce once, factories produce on every ``get`` and instances are
returned as-is. Producers receive the container and the call parameters.
"""

from __future__ import annotations

from ctxwire import Container


class Connection:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn


class Request:
    def __init__(self, path: str) -> None:
        self.path = path


def main() -> None:
    container = Container()

    container.bind_singleton(Connection, lambda c: Connection("postgresql://prod/app"))
    first = container.get(Connection)
    print(f"singleton_same={first is container.get(Connection)}")  # => singleton_same=True

    container.bind_factory(Request, lambda c, params: Request(params[0]))
    home = container.get(Request, ["/"])
    about = container.get(Request, ["/about"])
    print(f"factory_paths={home.path},{about.path}")  # => factory_paths=/,/about

    settings = {"debug": True}
    container.bind_instance("settings", settings)
    print(f"instance_same={container.get('settings') is settings}")  # => instance_same=True

    container.bind_singleton("answer", 42)
    print(f"constant={container.get('answer')}")  # => constant=42

    print(f"loaded_factory={container.loaded(Request)}")  # => loaded_factory=False


if __name__ == "__main__":
    main()
