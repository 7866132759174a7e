from __future__ import annotations

import builtins
import functools
import importlib
import inspect
from dataclasses import dataclass
from typing import Annotated, Any, Protocol, get_args, get_origin, get_type_hints

from ctxwire.type_checks import is_primitive_type, is_runtime_class

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_UNRESOLVED = object()

# Modules exposing a ``BaseSettings`` whose subclasses read their fields from
# the environment. Imported on first use so pydantic stays optional.
SETTINGS_MODULES = ("pydantic_settings",)


@dataclass(frozen=True, slots=True)
class InitParameter:
    """A declared parameter of an introspected method.

    Attributes:
        name: Parameter name in the signature.
        annotation: Class the parameter is annotated with, or ``None`` when the
            parameter is unannotated, primitive, or not a runtime class.
        has_default: Whether the signature declares a default value.
        positional_only: Whether the parameter must be passed positionally.

    """

    name: str
    annotation: type[Any] | None
    has_default: bool = False
    positional_only: bool = False


class TypeIntrospector(Protocol):
    """Capability used by autowiring to read constructor dependencies."""

    def parameters_of(self, target: type[Any], method_name: str = "__init__") -> list[InitParameter]:
        """Return the ordered declared parameters of ``target.method_name``.

        Args:
            target: Class to inspect.
            method_name: Method to inspect, ``__init__`` for constructors.

        Returns:
            Parameters in declaration order, or an empty list when the method
            does not exist.

        """
        ...


@functools.cache
def settings_bases() -> tuple[type[Any], ...]:
    """Return the importable ``BaseSettings`` classes, or ``()`` without pydantic-settings."""
    bases: list[type[Any]] = []
    for module_name in SETTINGS_MODULES:
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            continue
        base = getattr(module, "BaseSettings", None)
        if isinstance(base, type) and base not in bases:
            bases.append(base)
    return tuple(bases)


class SignatureIntrospector:
    """Read parameters from ``inspect.signature`` and ``typing.get_type_hints``.

    ``self``/``cls``, ``*args`` and ``**kwargs`` are not reported. Methods that
    are missing, inherited from ``object``, or not introspectable (C-level
    callables) report no parameters. Pydantic settings models report no
    constructor parameters: they are built with a bare call and load their
    fields from the environment.

    When a string annotation cannot be evaluated, the remaining annotations
    are looked up by name in the method's module. Parameters with a default
    and an unknown annotation are reported as unresolvable; a required one
    re-raises the ``NameError`` so autowiring can report the missing name.
    """

    def parameters_of(self, target: type[Any], method_name: str = "__init__") -> list[InitParameter]:
        method = getattr(target, method_name, None)
        if method is None or method is getattr(object, method_name, None):
            return []
        if method_name == "__init__" and self.loads_from_environment(target):
            return []

        try:
            signature = inspect.signature(method)
        except (TypeError, ValueError):
            return []

        parameters = list(signature.parameters.values())
        if self._is_unbound_instance_method(target, method_name) and parameters:
            parameters = parameters[1:]
        parameters = [parameter for parameter in parameters if parameter.kind not in _SKIPPED_KINDS]

        try:
            hints = get_type_hints(method, include_extras=True)
        except TypeError:
            hints = {}
        except NameError:
            by_name = self._hints_by_name(method, parameters)
            if by_name is None:
                raise
            hints = by_name

        return [
            InitParameter(
                name=parameter.name,
                annotation=self._as_dependency_type(hints.get(parameter.name)),
                has_default=parameter.default is not inspect.Parameter.empty,
                positional_only=parameter.kind is inspect.Parameter.POSITIONAL_ONLY,
            )
            for parameter in parameters
        ]

    def loads_from_environment(self, target: type[Any]) -> bool:
        """Return whether ``target`` is a pydantic-settings model."""
        if not is_runtime_class(target):
            return False
        try:
            return any(issubclass(target, base) for base in settings_bases())
        except TypeError:
            return False

    def _hints_by_name(
        self,
        method: Any,
        parameters: list[inspect.Parameter],
    ) -> dict[str, Any] | None:
        namespace = getattr(inspect.unwrap(method), "__globals__", {})
        hints: dict[str, Any] = {}
        for parameter in parameters:
            annotation = parameter.annotation
            if annotation is inspect.Parameter.empty:
                continue
            if isinstance(annotation, str):
                annotation = self._lookup(annotation, namespace)
            if annotation is _UNRESOLVED:
                if parameter.default is inspect.Parameter.empty:
                    return None
                continue
            hints[parameter.name] = annotation
        return hints

    def _lookup(self, expression: str, namespace: dict[str, Any]) -> Any:
        # Only plain and dotted names; anything else is not a class to build.
        names = expression.strip().split(".")
        if not all(name.isidentifier() for name in names):
            return None
        value = namespace.get(names[0], getattr(builtins, names[0], _UNRESOLVED))
        for name in names[1:]:
            if value is _UNRESOLVED:
                break
            value = getattr(value, name, _UNRESOLVED)
        return value

    def _is_unbound_instance_method(self, target: type[Any], method_name: str) -> bool:
        for klass in target.__mro__:
            if method_name in klass.__dict__:
                attribute = klass.__dict__[method_name]
                return not isinstance(attribute, staticmethod | classmethod)
        return False

    def _as_dependency_type(self, hint: Any) -> type[Any] | None:
        if get_origin(hint) is Annotated:
            hint = get_args(hint)[0]
        if not is_runtime_class(hint) or is_primitive_type(hint):
            return None
        return hint


__all__ = [
    "SETTINGS_MODULES",
    "InitParameter",
    "SignatureIntrospector",
    "TypeIntrospector",
    "settings_bases",
]
