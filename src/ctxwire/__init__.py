from ctxwire.bindings import BindingKey, BindingKind
from ctxwire.container import Container
from ctxwire.exceptions import (
    ComponentNotRegisteredError,
    CtxWireError,
    FrozenBindingError,
    InvalidArgumentError,
    NotResolvedDependencyError,
    ParameterNotInstantiableError,
    ProviderAlreadyRegisteredError,
    TypeNotFoundError,
)
from ctxwire.introspection import InitParameter, SignatureIntrospector, TypeIntrospector
from ctxwire.lock_mode import LockMode
from ctxwire.providers import ContainerProvider

__all__ = [
    "BindingKey",
    "BindingKind",
    "ComponentNotRegisteredError",
    "Container",
    "ContainerProvider",
    "CtxWireError",
    "FrozenBindingError",
    "InitParameter",
    "InvalidArgumentError",
    "LockMode",
    "NotResolvedDependencyError",
    "ParameterNotInstantiableError",
    "ProviderAlreadyRegisteredError",
    "SignatureIntrospector",
    "TypeIntrospector",
    "TypeNotFoundError",
]
