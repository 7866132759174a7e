from __future__ import annotations

import pytest

from ctxwire.container import Container
from ctxwire.providers import ContainerProvider


@pytest.fixture()
def ctxwire_providers() -> list[ContainerProvider]:
    """Providers registered on ``ctxwire_container``.

    Override this fixture in a test module or conftest to wire the container
    the tests need. Defaults to no providers.
    """
    return []


@pytest.fixture()
def ctxwire_container(ctxwire_providers: list[ContainerProvider]) -> Container:
    """Create a per-test container with ``ctxwire_providers`` registered and booted.

    The fixture is function-scoped, so bindings and frozen pairs never leak
    between tests.

    Returns:
        A new booted ``Container`` instance.

    """
    container = Container()
    for provider in ctxwire_providers:
        container.register(provider)
    container.boot()
    return container
