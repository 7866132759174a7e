"""Shared pytest fixtures for ctxwire tests."""

import pytest

from ctxwire.container import Container
from ctxwire.introspection import SignatureIntrospector
from ctxwire.lock_mode import LockMode


@pytest.fixture()
def container() -> Container:
    """Default single-threaded container."""
    return Container()


@pytest.fixture()
def locked_container() -> Container:
    """Container guarded by a re-entrant thread lock."""
    return Container(lock_mode=LockMode.THREAD)


@pytest.fixture()
def introspector() -> SignatureIntrospector:
    """SignatureIntrospector instance."""
    return SignatureIntrospector()
