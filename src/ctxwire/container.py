from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from typing import Any, TypeVar, overload

from ctxwire.bindings import (
    Binding,
    BindingKey,
    BindingRegistry,
    FactoryBinding,
    InstanceBinding,
    SingletonBinding,
)
from ctxwire.exceptions import ComponentNotRegisteredError, InvalidArgumentError, describe_key
from ctxwire.introspection import InitParameter, SignatureIntrospector, TypeIntrospector
from ctxwire.lock_mode import LockMode
from ctxwire.providers import ContainerProvider, ProviderRegistry
from ctxwire.resolver import Resolver
from ctxwire.type_checks import is_primitive_value

T = TypeVar("T")

logger = logging.getLogger(__name__)
_NOT_LOADED = object()


class Container:
    """Bind keys to values and build unbound classes on demand.

    Keys are classes, strings (identifiers or dotted import paths) or any
    other hashable token. Every operation accepts an optional ``context`` that
    scopes the binding; when omitted the context is the key itself, so
    ``get(key)`` never sees a binding made under another context.

    Three binding kinds control caching: singletons produce once, factories
    produce on every ``get``, instances are returned as-is. Keys without a
    binding are autowired from their constructor annotations. The first
    successful ``get`` of a ``(key, context)`` pair freezes it: it can no
    longer be rebound, extended or unbound.

    Providers group bindings and are set up in two phases, ``register`` then
    ``boot``.
    """

    def __init__(
        self,
        *,
        lock_mode: LockMode = LockMode.NONE,
        introspector: TypeIntrospector | None = None,
    ) -> None:
        """Initialize an empty container.

        Args:
            lock_mode: ``LockMode.THREAD`` serializes all operations through one
                re-entrant lock, for containers shared between threads.
            introspector: Reads constructor parameters for autowiring. Defaults
                to ``SignatureIntrospector``.

        """
        self._registry = BindingRegistry()
        self._providers = ProviderRegistry()
        self._introspector: TypeIntrospector = introspector or SignatureIntrospector()
        self._resolver = Resolver(self, self._introspector)
        self._lock_mode = lock_mode
        self._lock = lock_mode.create_lock()

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    # Providers

    def register(self, provider: ContainerProvider) -> None:
        """Attach a provider once and let it bind its keys.

        Args:
            provider: Provider whose ``register`` hook is called immediately.

        Raises:
            ProviderAlreadyRegisteredError: A provider of the same class was
                already registered.

        """
        with self._lock:
            self._providers.add(provider)
            provider.register(self)

    def boot(self) -> None:
        """Call every registered provider's ``boot`` hook in registration order."""
        with self._lock:
            for provider in self._providers:
                logger.info("Booting container provider %s", describe_key(type(provider)))
                provider.boot(self)

    # Bindings

    def bind_singleton(self, key: Hashable, value: Any, context: Hashable | None = None) -> None:
        """Bind a value produced once and shared afterwards.

        Args:
            key: Binding key.
            value: Producer called with ``(container, params)`` on first
                ``get``, or a constant returned as-is.
            context: Optional context scoping the binding.

        Raises:
            FrozenBindingError: The pair was already used.

        """
        binding_key = BindingKey.of(key, context)
        self._bind(SingletonBinding(binding_key.key, binding_key.context, value))

    def bind_factory(
        self,
        key: Hashable,
        value: Callable[..., Any],
        context: Hashable | None = None,
    ) -> None:
        """Bind a producer called on every ``get``.

        Raises:
            InvalidArgumentError: ``value`` is not callable.
            FrozenBindingError: The pair was already used.

        """
        if not callable(value):
            msg = f"binding {describe_key(key)} expected to be of type callable, {type(value).__name__} given"
            raise InvalidArgumentError(msg)
        binding_key = BindingKey.of(key, context)
        self._bind(FactoryBinding(binding_key.key, binding_key.context, value))

    def bind_instance(self, key: Hashable, value: Any, context: Hashable | None = None) -> None:
        """Bind a pre-built object returned as-is on every ``get``.

        Raises:
            InvalidArgumentError: ``value`` is a primitive such as ``None``, a
                number, a string or bytes.
            FrozenBindingError: The pair was already used.

        """
        if is_primitive_value(value):
            msg = f"binding {describe_key(key)} expected to be of type instance, {type(value).__name__} given"
            raise InvalidArgumentError(msg)
        binding_key = BindingKey.of(key, context)
        self._bind(InstanceBinding(binding_key.key, binding_key.context, value))

    def unbind(self, key: Hashable, context: Hashable | None = None) -> None:
        """Remove a binding; does nothing when the pair is not bound.

        Raises:
            FrozenBindingError: The pair was already used.

        """
        with self._lock:
            self._registry.unbind(BindingKey.of(key, context))

    def extend(
        self,
        key: Hashable,
        transform: Callable[[Container, Any], Any],
        context: Hashable | None = None,
    ) -> None:
        """Wrap an existing binding with a transform applied on the next ``get``.

        The current binding is produced once right away to capture the old
        value; ``transform(container, old_value)`` runs lazily. Singletons and
        factories keep their kind. Instance bindings become singletons.

        Args:
            key: Binding key.
            transform: Callable receiving the container and the old value.
            context: Optional context scoping the binding.

        Raises:
            FrozenBindingError: The pair was already used.
            ComponentNotRegisteredError: The pair was never bound.
            InvalidArgumentError: ``transform`` is not callable.

        """
        binding_key = BindingKey.of(key, context)
        with self._lock:
            self._registry.ensure_not_frozen(binding_key)
            binding = self._registry.lookup(binding_key)
            if binding is None:
                msg = f"you cannot extend {describe_key(key)} as it was never registered"
                raise ComponentNotRegisteredError(msg)
            if not callable(transform):
                msg = (
                    f"extension of {describe_key(key)} expected to be of type callable, "
                    f"{type(transform).__name__} given"
                )
                raise InvalidArgumentError(msg)

            old_value = binding.produce(self)

            def extended(container: Container) -> Any:
                return transform(container, old_value)

            if isinstance(binding, FactoryBinding):
                replacement: Binding = FactoryBinding(binding.key, binding.context, extended)
            else:
                replacement = SingletonBinding(binding.key, binding.context, extended)
            self._registry.replace(replacement)
            logger.debug("Extended %s", binding_key)

    # Resolution

    @overload
    def get(self, key: type[T], params: Any = None, context: Hashable | None = None) -> T: ...

    @overload
    def get(self, key: Hashable, params: Any = None, context: Hashable | None = None) -> Any: ...

    def get(self, key: Hashable, params: Any = None, context: Hashable | None = None) -> Any:
        """Return the value for ``key`` and freeze the ``(key, context)`` pair.

        Cached values are returned first. Bound pairs are evaluated by kind,
        passing ``params`` to producers that accept it. Unbound keys are
        autowired and the result cached.

        Args:
            key: Binding key, class or dotted import path.
            params: Second argument passed to producers. Defaults to ``()``.
            context: Optional context scoping the lookup.

        Raises:
            NotResolvedDependencyError: ``key`` is unbound and autowiring failed.

        """
        binding_key = BindingKey.of(key, context)
        with self._lock:
            value = self._registry.cached(binding_key, _NOT_LOADED)
            if value is not _NOT_LOADED:
                return value

            binding = self._registry.lookup(binding_key)
            if binding is None:
                value = self._resolver.resolve(key, binding_key.context)
                self._registry.store(binding_key, value)
            else:
                value = binding.produce(self, () if params is None else params)
                if binding.cacheable:
                    self._registry.store(binding_key, value)

            self._registry.freeze(binding_key)
            return value

    def build(self, cls: type[T]) -> T:
        """Construct a new ``cls`` with its constructor dependencies autowired.

        Bindings of ``cls`` itself are bypassed and nothing is cached or
        frozen. Classes bound as producers are built through this method.

        Raises:
            NotResolvedDependencyError: A dependency could not be built.

        """
        with self._lock:
            return self._resolver.construct(cls)  # type: ignore[no-any-return]

    def has(self, key: Hashable, context: Hashable | None = None) -> bool:
        """Return whether a binding exists for the exact ``(key, context)`` pair."""
        with self._lock:
            return self._registry.has(BindingKey.of(key, context))

    def loaded(self, key: Hashable, context: Hashable | None = None) -> bool:
        """Return whether a realized value is cached; always false for factories."""
        with self._lock:
            return self._registry.loaded(BindingKey.of(key, context))

    def frozen(self, key: Hashable, context: Hashable | None = None) -> bool:
        """Return whether the pair was used and can no longer be changed."""
        with self._lock:
            return self._registry.frozen(BindingKey.of(key, context))

    def method_dependencies(self, cls: type[Any], method_name: str = "__init__") -> list[InitParameter]:
        """Return the declared parameters autowiring would resolve for a method.

        Args:
            cls: Class to inspect.
            method_name: Method to inspect.

        """
        return self._introspector.parameters_of(cls, method_name)

    def _bind(self, binding: Binding) -> None:
        with self._lock:
            self._registry.bind(binding)


__all__ = ["Container"]
