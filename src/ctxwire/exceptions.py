from __future__ import annotations

from typing import Any


class CtxWireError(Exception):
    """Represent a base class for all ctxwire-specific failures.

    Catch this type when you want to handle any ctxwire error path without
    matching each concrete exception class individually.
    """


class InvalidArgumentError(CtxWireError, ValueError):
    """Signal a binding value with the wrong shape.

    Raised by ``Container.bind_factory`` when the value is not callable, by
    ``Container.bind_instance`` when the value is a primitive (``None``,
    numbers, strings, bytes), and by ``Container.extend`` when the transform is
    not callable.
    """


class FrozenBindingError(CtxWireError):
    """Signal a mutation of a ``(key, context)`` pair that was already used.

    Every successful ``Container.get`` freezes the pair it resolved. Afterwards
    ``bind_*``, ``unbind`` and ``extend`` for the same pair raise this error.
    Other contexts of the same key are not affected.
    """


class ComponentNotRegisteredError(CtxWireError, LookupError):
    """Signal ``Container.extend`` on a pair that has no binding.

    Extension wraps an existing producer and never autowires, so the key must
    be bound first under the same context.
    """


class TypeNotFoundError(CtxWireError, LookupError):
    """Signal an autowiring target that is not a class.

    Raised while autowiring string keys that cannot be imported as a dotted
    ``"package.module.Class"`` path, and for keys that are neither classes nor
    strings. Surfaces wrapped in ``NotResolvedDependencyError``.
    """


class ParameterNotInstantiableError(CtxWireError):
    """Signal a constructor parameter that cannot be autowired.

    Raised when a required ``__init__`` parameter has no annotation, or is
    annotated with a primitive or a non-class typing construct. Typical fixes
    are annotating the parameter with a class, giving it a default value, or
    binding the consuming class explicitly.
    """

    def __init__(self, target: Any, parameter: str) -> None:
        self.target = target
        self.parameter = parameter
        msg = (
            f"class {describe_key(target)} has a non instantiable dependency {parameter!r}. "
            "All parameters need to be annotated with a class"
        )
        super().__init__(msg)


class NotResolvedDependencyError(CtxWireError):
    """Signal a failure anywhere in the autowiring walk of a type.

    This is the only error that wraps another one: the inner error is kept as
    ``__cause__`` and its message is embedded verbatim.
    """

    def __init__(self, target: Any, error: BaseException) -> None:
        self.target = target
        self.error = error
        super().__init__(
            f"could not resolve dependency for {describe_key(target)} with error: {error}",
        )


class ProviderAlreadyRegisteredError(CtxWireError):
    """Signal a second registration of a provider type.

    Providers are keyed by their class, so two instances of the same provider
    class cannot both be registered on one container.
    """


def describe_key(key: Any) -> str:
    """Render a binding key the way error messages and logs show it.

    Args:
        key: Binding key or autowiring target.

    Returns:
        ``module.QualName`` for classes, ``str(key)`` otherwise.

    """
    if isinstance(key, type):
        if key.__module__ == "builtins":
            return key.__qualname__
        return f"{key.__module__}.{key.__qualname__}"
    return str(key)


__all__ = [
    "ComponentNotRegisteredError",
    "CtxWireError",
    "FrozenBindingError",
    "InvalidArgumentError",
    "NotResolvedDependencyError",
    "ParameterNotInstantiableError",
    "ProviderAlreadyRegisteredError",
    "TypeNotFoundError",
    "describe_key",
]
