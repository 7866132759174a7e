from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING, Any

try:
    from fastapi import Depends, FastAPI, Request
except ModuleNotFoundError as exc:  # pragma: no cover - exercised in optional import scenarios
    message = "FastAPI integration requires fastapi. Install with 'ctxwire[fastapi]'."
    raise ModuleNotFoundError(message) from exc

if TYPE_CHECKING:
    from ctxwire.container import Container

_STATE_ATTR = "ctxwire_container"


def setup_ctxwire(app: FastAPI, container: Container) -> None:
    """Attach a container to the application for ``Provide`` dependencies."""
    setattr(app.state, _STATE_ATTR, container)


def get_container(request: Request) -> Container:
    """Return the container attached by ``setup_ctxwire``.

    Raises:
        RuntimeError: No container is attached to the application.

    """
    container = getattr(request.app.state, _STATE_ATTR, None)
    if container is None:
        msg = "No ctxwire container is attached to the application. Call setup_ctxwire(app, container)."
        raise RuntimeError(msg)
    return container


def Provide(  # noqa: N802
    key: Hashable,
    *,
    context: Hashable | None = None,
    params: Any = None,
    container: Container | None = None,
) -> Any:
    """Build a FastAPI dependency that resolves ``key`` through a container.

    Usage:
        @app.get("/users")
        def list_users(repository: Annotated[UserRepository, Provide(UserRepository)]) -> ...:
            ...

    Args:
        key: Binding key, class or dotted import path.
        context: Optional context scoping the lookup.
        params: Second argument passed to producers.
        container: Container to use. Defaults to the one attached with
            ``setup_ctxwire``.

    Returns:
        A ``fastapi.Depends`` marker.

    """

    def _resolve(request: Request) -> Any:
        source = container if container is not None else get_container(request)
        return source.get(key, params, context)

    return Depends(_resolve)


__all__ = ["Provide", "get_container", "setup_ctxwire"]
