from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, NamedTuple, TypeAlias

from ctxwire.exceptions import FrozenBindingError, describe_key
from ctxwire.type_checks import is_runtime_class

if TYPE_CHECKING:
    from ctxwire.container import Container

logger = logging.getLogger(__name__)

Producer: TypeAlias = Callable[..., Any]
"""Callable stored in singleton and factory bindings.

Called with as many of ``(container, params)`` as it accepts positionally.
Classes are autowired instead.
"""

_PRODUCER_ARGUMENTS_LIMIT = 2


class BindingKind(str, Enum):
    """Defines how a binding value is turned into the result of ``get``."""

    SINGLETON = "singleton"
    """The producer runs once; the result is cached and shared."""

    FACTORY = "factory"
    """The producer runs on every ``get``; results are never cached."""

    INSTANCE = "instance"
    """A pre-built object is returned as-is."""


class BindingKey(NamedTuple):
    """Composite registry key with the effective context already applied."""

    key: Hashable
    context: Hashable

    @classmethod
    def of(cls, key: Hashable, context: Hashable | None = None) -> BindingKey:
        """Build a binding key, defaulting the context to the key itself.

        Args:
            key: Binding key.
            context: Optional context. ``None`` and ``""`` mean "no context".

        """
        return cls(key, context if context else key)

    def __str__(self) -> str:
        if self.context == self.key:
            return describe_key(self.key)
        return f"{describe_key(self.key)} (context {describe_key(self.context)})"


def call_producer(producer: Producer, container: Container, params: Any) -> Any:
    """Invoke a producer with the leading ``(container, params)`` arguments it accepts.

    Classes are not called with those arguments: the container builds them
    with their constructor dependencies autowired.

    Args:
        producer: Callable stored in a binding.
        container: Container passed as the first argument.
        params: Call parameters passed as the second argument.

    """
    if is_runtime_class(producer):
        return container.build(producer)

    arguments = (container, params)
    try:
        signature = inspect.signature(producer)
    except (TypeError, ValueError):
        return producer()

    accepted = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            accepted = _PRODUCER_ARGUMENTS_LIMIT
            break
        if parameter.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            accepted += 1
        if accepted == _PRODUCER_ARGUMENTS_LIMIT:
            break
    return producer(*arguments[:accepted])


@dataclass(frozen=True, slots=True)
class SingletonBinding:
    """Shared value produced at most once per ``(key, context)`` pair.

    ``value`` is either a producer or a pre-computed constant. Callables are
    always treated as producers, so binding a class builds one instance of it
    with its constructor dependencies autowired.
    """

    key: Hashable
    context: Hashable
    value: Any

    kind: ClassVar[BindingKind] = BindingKind.SINGLETON
    cacheable: ClassVar[bool] = True

    @property
    def binding_key(self) -> BindingKey:
        return BindingKey(self.key, self.context)

    def produce(self, container: Container, params: Any = ()) -> Any:
        if callable(self.value):
            return call_producer(self.value, container, params)
        return self.value


@dataclass(frozen=True, slots=True)
class FactoryBinding:
    """Producer invoked on every ``get``."""

    key: Hashable
    context: Hashable
    producer: Producer

    kind: ClassVar[BindingKind] = BindingKind.FACTORY
    cacheable: ClassVar[bool] = False

    @property
    def binding_key(self) -> BindingKey:
        return BindingKey(self.key, self.context)

    def produce(self, container: Container, params: Any = ()) -> Any:
        return call_producer(self.producer, container, params)


@dataclass(frozen=True, slots=True)
class InstanceBinding:
    """Pre-built object returned as-is."""

    key: Hashable
    context: Hashable
    instance: Any

    kind: ClassVar[BindingKind] = BindingKind.INSTANCE
    cacheable: ClassVar[bool] = True

    @property
    def binding_key(self) -> BindingKey:
        return BindingKey(self.key, self.context)

    def produce(self, container: Container, params: Any = ()) -> Any:  # noqa: ARG002
        return self.instance


Binding: TypeAlias = SingletonBinding | FactoryBinding | InstanceBinding


class BindingRegistry:
    """Bindings, realized values and frozen markers keyed by ``BindingKey``.

    A pair enters ``frozen`` the first time ``Container.get`` resolves it and
    never leaves it. Frozen pairs reject ``bind``, ``replace`` and ``unbind``.
    """

    def __init__(self) -> None:
        self._bindings: dict[BindingKey, Binding] = {}
        self._loaded: dict[BindingKey, Any] = {}
        self._frozen: set[BindingKey] = set()

    def bind(self, binding: Binding) -> None:
        """Insert or overwrite a binding.

        Args:
            binding: Binding to store under its own ``binding_key``.

        Raises:
            FrozenBindingError: The pair was already used.

        """
        binding_key = binding.binding_key
        self.ensure_not_frozen(binding_key)
        self._bindings[binding_key] = binding
        logger.debug("Bound %s as %s", binding_key, binding.kind.value)

    def replace(self, binding: Binding) -> None:
        """Swap the binding of an existing pair, used by ``Container.extend``."""
        self.bind(binding)

    def lookup(self, binding_key: BindingKey) -> Binding | None:
        return self._bindings.get(binding_key)

    def has(self, binding_key: BindingKey) -> bool:
        return binding_key in self._bindings

    def loaded(self, binding_key: BindingKey) -> bool:
        return binding_key in self._loaded

    def frozen(self, binding_key: BindingKey) -> bool:
        return binding_key in self._frozen

    def cached(self, binding_key: BindingKey, default: Any = None) -> Any:
        return self._loaded.get(binding_key, default)

    def store(self, binding_key: BindingKey, value: Any) -> None:
        self._loaded[binding_key] = value
        logger.debug("Cached value for %s", binding_key)

    def freeze(self, binding_key: BindingKey) -> None:
        self._frozen.add(binding_key)

    def unbind(self, binding_key: BindingKey) -> None:
        """Remove a binding and its cached value; no-op when nothing is bound.

        Raises:
            FrozenBindingError: The pair was already used.

        """
        self.ensure_not_frozen(binding_key)
        self._loaded.pop(binding_key, None)
        if self._bindings.pop(binding_key, None) is not None:
            logger.debug("Unbound %s", binding_key)

    def ensure_not_frozen(self, binding_key: BindingKey) -> None:
        if binding_key in self._frozen:
            msg = f"cannot redefine/extend {describe_key(binding_key.key)} as it has been already used"
            raise FrozenBindingError(msg)

    def __len__(self) -> int:
        return len(self._bindings)


__all__ = [
    "Binding",
    "BindingKey",
    "BindingKind",
    "BindingRegistry",
    "FactoryBinding",
    "InstanceBinding",
    "Producer",
    "SingletonBinding",
    "call_producer",
]
