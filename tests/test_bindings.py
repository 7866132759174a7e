"""Tests for binding variants, BindingKey and BindingRegistry."""

from __future__ import annotations

import functools
from typing import Any

import pytest

from ctxwire.bindings import (
    BindingKey,
    BindingKind,
    BindingRegistry,
    FactoryBinding,
    InstanceBinding,
    SingletonBinding,
    call_producer,
)
from ctxwire.container import Container
from ctxwire.exceptions import FrozenBindingError


class _Service:
    pass


class _Consumer:
    def __init__(self, service: _Service) -> None:
        self.service = service


class TestBindingKey:
    def test_context_defaults_to_key(self) -> None:
        assert BindingKey.of("key") == BindingKey("key", "key")
        assert BindingKey.of("key", None) == BindingKey("key", "key")
        assert BindingKey.of("key", "") == BindingKey("key", "key")

    def test_explicit_context(self) -> None:
        assert BindingKey.of("key", _Service) == BindingKey("key", _Service)

    def test_no_context_and_self_context_are_the_same_pair(self) -> None:
        assert BindingKey.of(_Service) == BindingKey.of(_Service, _Service)

    def test_str(self) -> None:
        assert str(BindingKey.of("key")) == "key"
        assert str(BindingKey.of("key", "ctx")) == "key (context ctx)"


class TestVariants:
    def test_kinds_and_cacheability(self) -> None:
        assert SingletonBinding("k", "k", 1).kind is BindingKind.SINGLETON
        assert FactoryBinding("k", "k", _Service).kind is BindingKind.FACTORY
        assert InstanceBinding("k", "k", _Service()).kind is BindingKind.INSTANCE
        assert SingletonBinding.cacheable
        assert InstanceBinding.cacheable
        assert not FactoryBinding.cacheable

    def test_binding_key(self) -> None:
        assert SingletonBinding("k", "ctx", 1).binding_key == BindingKey("k", "ctx")

    def test_bindings_are_immutable(self) -> None:
        binding = SingletonBinding("k", "k", 1)

        with pytest.raises(AttributeError):
            binding.value = 2  # type: ignore[misc]

    def test_singleton_constant_and_producer(self, container: Container) -> None:
        assert SingletonBinding("k", "k", 5).produce(container) == 5
        assert SingletonBinding("k", "k", lambda c: c).produce(container) is container

    def test_instance_is_returned_as_is(self, container: Container) -> None:
        service = _Service()

        assert InstanceBinding("k", "k", service).produce(container, ["ignored"]) is service


class TestCallProducer:
    def test_zero_argument_producer(self, container: Container) -> None:
        assert call_producer(lambda: "none", container, ()) == "none"

    def test_container_argument_producer(self, container: Container) -> None:
        assert call_producer(lambda c: c, container, ()) is container

    def test_container_and_params_producer(self, container: Container) -> None:
        assert call_producer(lambda c, p: (c, p), container, [1]) == (container, [1])

    def test_var_positional_producer_receives_both(self, container: Container) -> None:
        assert call_producer(lambda *args: args, container, [1]) == (container, [1])

    def test_extra_defaulted_parameters_are_left_alone(self, container: Container) -> None:
        def produce(c: Container, params: Any, extra: str = "default") -> str:
            return extra

        assert call_producer(produce, container, ()) == "default"

    def test_keyword_only_parameters_are_not_filled(self, container: Container) -> None:
        def produce(*, flag: bool = True) -> bool:
            return flag

        assert call_producer(produce, container, ()) is True

    def test_partial(self, container: Container) -> None:
        def produce(prefix: str, c: Container) -> tuple[str, Container]:
            return prefix, c

        assert call_producer(functools.partial(produce, "x"), container, ()) == ("x", container)

    def test_uninspectable_callable_is_called_without_arguments(self, container: Container) -> None:
        class _Opaque:
            @property
            def __signature__(self) -> Any:
                msg = "no signature"
                raise ValueError(msg)

            def __call__(self, *args: object) -> tuple[object, ...]:
                return args

        assert call_producer(_Opaque(), container, [1]) == ()

    def test_class_is_built_by_the_container(self, container: Container) -> None:
        built = call_producer(_Consumer, container, ["ignored"])

        assert isinstance(built, _Consumer)
        assert isinstance(built.service, _Service)


class TestBindingRegistry:
    def test_bind_lookup_and_has(self) -> None:
        registry = BindingRegistry()
        binding = SingletonBinding("k", "k", 1)

        registry.bind(binding)

        assert registry.has(BindingKey.of("k"))
        assert registry.lookup(BindingKey.of("k")) is binding
        assert registry.lookup(BindingKey.of("k", "other")) is None
        assert len(registry) == 1

    def test_store_and_cached(self) -> None:
        registry = BindingRegistry()
        key = BindingKey.of("k")
        marker = object()

        assert registry.cached(key, marker) is marker
        registry.store(key, None)

        assert registry.loaded(key)
        assert registry.cached(key, marker) is None

    def test_frozen_pairs_reject_mutation(self) -> None:
        registry = BindingRegistry()
        key = BindingKey.of("k")
        registry.bind(SingletonBinding("k", "k", 1))
        registry.freeze(key)

        with pytest.raises(FrozenBindingError):
            registry.bind(SingletonBinding("k", "k", 2))
        with pytest.raises(FrozenBindingError):
            registry.replace(SingletonBinding("k", "k", 2))
        with pytest.raises(FrozenBindingError):
            registry.unbind(key)

        assert registry.frozen(key)
        assert not registry.frozen(BindingKey.of("k", "ctx"))

    def test_unbind_drops_stale_cache(self) -> None:
        registry = BindingRegistry()
        key = BindingKey.of("k")
        registry.bind(SingletonBinding("k", "k", 1))
        registry.store(key, 1)

        registry.unbind(key)

        assert not registry.has(key)
        assert not registry.loaded(key)
