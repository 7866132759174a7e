from __future__ import annotations

import importlib
import logging
from collections.abc import Hashable
from typing import TYPE_CHECKING, Any

from ctxwire.exceptions import (
    NotResolvedDependencyError,
    ParameterNotInstantiableError,
    TypeNotFoundError,
    describe_key,
)
from ctxwire.type_checks import is_runtime_class

if TYPE_CHECKING:
    from ctxwire.container import Container
    from ctxwire.introspection import TypeIntrospector

logger = logging.getLogger(__name__)


class Resolver:
    """Build unbound types by recursively resolving their constructor parameters.

    Explicit bindings always win: before inspecting a type the resolver asks
    the container whether the type is bound under the consumer's context or
    under its own default context. Otherwise the type's ``__init__`` is read
    through the introspector and every parameter is resolved depth-first,
    left to right, with the consuming class as the nested context.

    There is no memoization beyond the container's own cache and no cycle
    detection. A circular constructor graph ends in ``RecursionError``, which
    is reported like any other failure.
    """

    def __init__(self, container: Container, introspector: TypeIntrospector) -> None:
        self._container = container
        self._introspector = introspector

    def resolve(self, target: Hashable, context: Hashable | None = None) -> Any:
        """Return an instance for ``target``.

        Args:
            target: Class or dotted import path to build.
            context: Context of the consumer requesting ``target``.

        Raises:
            NotResolvedDependencyError: Anything failed during the walk. The
                original error is chained as ``__cause__``.

        """
        try:
            return self._build(target, context)
        except Exception as error:  # noqa: BLE001
            raise NotResolvedDependencyError(target, error) from error

    def construct(self, cls: type[Any]) -> Any:
        """Instantiate ``cls`` from its constructor annotations.

        Unlike ``resolve``, bindings of ``cls`` itself are not consulted, so a
        class bound as its own producer does not recurse into its binding.
        Its dependencies are still looked up under ``cls`` as context first.

        Raises:
            NotResolvedDependencyError: A dependency could not be built.

        """
        try:
            return self._construct(cls)
        except Exception as error:  # noqa: BLE001
            raise NotResolvedDependencyError(cls, error) from error

    def locate(self, target: Hashable) -> type[Any]:
        """Return the class a target key designates.

        Args:
            target: Class, or ``"package.module.Class"`` string.

        Raises:
            TypeNotFoundError: The key is neither a class nor an importable path.

        """
        if is_runtime_class(target):
            return target
        if isinstance(target, str):
            module_name, _, attribute = target.rpartition(".")
            if module_name and attribute:
                try:
                    located = getattr(importlib.import_module(module_name), attribute, None)
                except ImportError:
                    located = None
                if is_runtime_class(located):
                    return located
        msg = f"type {describe_key(target)} does not exist"
        raise TypeNotFoundError(msg)

    def _build(self, target: Hashable, context: Hashable | None) -> Any:
        if context is not None and self._container.has(target, context):
            return self._container.get(target, context=context)
        if self._container.has(target):
            return self._container.get(target)

        return self._construct(self.locate(target))

    def _construct(self, cls: type[Any]) -> Any:
        parameters = self._introspector.parameters_of(cls, "__init__")
        if not parameters:
            logger.debug("Autowiring %s without arguments", describe_key(cls))
            return cls()

        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        positional_open = True
        for parameter in parameters:
            if parameter.annotation is None:
                if not parameter.has_default:
                    raise ParameterNotInstantiableError(cls, parameter.name)
                if parameter.positional_only:
                    positional_open = False
                continue
            if parameter.positional_only and not positional_open:
                continue

            value = self._build(parameter.annotation, cls)
            if parameter.positional_only:
                args.append(value)
            else:
                kwargs[parameter.name] = value

        logger.debug(
            "Autowiring %s with %s",
            describe_key(cls),
            [parameter.name for parameter in parameters],
        )
        return cls(*args, **kwargs)


__all__ = ["Resolver"]
