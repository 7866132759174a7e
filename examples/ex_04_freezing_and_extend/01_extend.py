"""Extending bindings and freezing on first use.

``extend`` wraps a binding before it is used. The first ``get`` freezes the
``(key, context)`` pair, after which it can no longer be changed.
"""

from __future__ import annotations

from ctxwire import Container, FrozenBindingError


class Middleware:
    def __init__(self) -> None:
        self.layers: list[str] = ["router"]


def add_auth(container: Container, middleware: Middleware) -> Middleware:
    middleware.layers.insert(0, "auth")
    return middleware


def main() -> None:
    container = Container()
    container.bind_singleton(Middleware, lambda c: Middleware())
    container.extend(Middleware, add_auth)

    print(f"layers={'>'.join(container.get(Middleware).layers)}")  # => layers=auth>router
    print(f"frozen={container.frozen(Middleware)}")  # => frozen=True

    try:
        container.bind_singleton(Middleware, lambda c: Middleware())
    except FrozenBindingError as error:
        print(f"rebind_error={type(error).__name__}")  # => rebind_error=FrozenBindingError


if __name__ == "__main__":
    main()
