from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Optional

import pytest

from ctxwire.introspection import InitParameter, SignatureIntrospector


class ServiceA:
    pass


class ServiceB:
    def __init__(self, service_a: ServiceA) -> None:
        self.service_a = service_a


@dataclass
class DataService:
    service_a: ServiceA
    name: str = "data"
    tags: list[str] = field(default_factory=list)


class Mixed:
    def __init__(
        self,
        service_a: ServiceA,
        /,
        raw,  # type: ignore[no-untyped-def]
        count: int,
        maybe: Optional[ServiceA],  # noqa: UP045
        annotated: Annotated[ServiceB, "meta"],
        *args: object,
        flag: bool = False,
        **kwargs: object,
    ) -> None:
        pass


class WithFactories:
    def __init__(self) -> None:
        pass

    @classmethod
    def create(cls, service_a: ServiceA) -> WithFactories:
        return cls()

    @staticmethod
    def build(service_b: ServiceB) -> WithFactories:
        return WithFactories()

    def configure(self, service_a: ServiceA) -> None:
        pass


class Broken:
    def __init__(self, dependency: Missing) -> None:  # type: ignore[name-defined] # noqa: F821
        pass


class PartlyBroken:
    def __init__(self, service_a: ServiceA, count: int, extra: Missing = None) -> None:  # type: ignore[name-defined] # noqa: F821
        pass


class Inherited(ServiceB):
    pass


def test_regular_class(introspector: SignatureIntrospector) -> None:
    assert introspector.parameters_of(ServiceB) == [InitParameter("service_a", ServiceA)]


def test_class_without_init(introspector: SignatureIntrospector) -> None:
    assert introspector.parameters_of(ServiceA) == []


def test_inherited_init(introspector: SignatureIntrospector) -> None:
    assert introspector.parameters_of(Inherited) == [InitParameter("service_a", ServiceA)]


def test_dataclass_fields(introspector: SignatureIntrospector) -> None:
    assert introspector.parameters_of(DataService) == [
        InitParameter("service_a", ServiceA),
        InitParameter("name", None, has_default=True),
        InitParameter("tags", None, has_default=True),
    ]


def test_parameter_shapes(introspector: SignatureIntrospector) -> None:
    assert introspector.parameters_of(Mixed) == [
        InitParameter("service_a", ServiceA, positional_only=True),
        InitParameter("raw", None),
        InitParameter("count", None),
        InitParameter("maybe", None),
        InitParameter("annotated", ServiceB),
        InitParameter("flag", None, has_default=True),
    ]


def test_other_methods(introspector: SignatureIntrospector) -> None:
    assert introspector.parameters_of(WithFactories) == []
    assert introspector.parameters_of(WithFactories, "create") == [InitParameter("service_a", ServiceA)]
    assert introspector.parameters_of(WithFactories, "build") == [InitParameter("service_b", ServiceB)]
    assert introspector.parameters_of(WithFactories, "configure") == [InitParameter("service_a", ServiceA)]


def test_missing_method(introspector: SignatureIntrospector) -> None:
    assert introspector.parameters_of(ServiceB, "missing") == []


def test_builtin_class(introspector: SignatureIntrospector) -> None:
    assert introspector.parameters_of(dict) == []


def test_unresolvable_annotation_raises_name_error(introspector: SignatureIntrospector) -> None:
    with pytest.raises(NameError, match="Missing"):
        introspector.parameters_of(Broken)


def test_unresolvable_annotation_with_default_is_reported_as_unresolvable(
    introspector: SignatureIntrospector,
) -> None:
    assert introspector.parameters_of(PartlyBroken) == [
        InitParameter("service_a", ServiceA),
        InitParameter("count", None),
        InitParameter("extra", None, has_default=True),
    ]
