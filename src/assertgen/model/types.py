# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type identities and declared type shapes for the AssertGen description model."""

from __future__ import annotations

import functools
from collections.abc import Iterator
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

PRIMITIVE_NAMES: frozenset[str] = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"}
)


@functools.total_ordering
class TypeIdentity(BaseModel):
    """Immutable identifier of a type, compared and ordered by qualified name."""

    model_config = ConfigDict(frozen=True)

    qualified_name: str
    is_primitive: bool = False
    array_of: TypeIdentity | None = None

    @classmethod
    def named(cls, qualified_name: str) -> TypeIdentity:
        """Create the identity of a non-array type, detecting primitive keywords."""
        return cls(qualified_name=qualified_name, is_primitive=qualified_name in PRIMITIVE_NAMES)

    @classmethod
    def array(cls, component: TypeIdentity) -> TypeIdentity:
        """Create the identity of an array whose elements are *component*."""
        return cls(qualified_name=f"{component.qualified_name}[]", array_of=component)

    @property
    def is_array(self) -> bool:
        return self.array_of is not None

    @property
    def simple_name(self) -> str:
        """The qualified name without its namespace, e.g. ``Person`` or ``Person[]``."""
        if self.array_of is not None:
            return f"{self.array_of.simple_name}[]"
        return self.qualified_name.rpartition(".")[2]

    @property
    def namespace(self) -> str | None:
        """The namespace (package) of the type, or None for primitives, arrays and unqualified names."""
        if self.is_primitive or self.is_array:
            return None
        namespace, _, _ = self.qualified_name.rpartition(".")
        return namespace or None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeIdentity):
            return NotImplemented
        return self.qualified_name == other.qualified_name

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TypeIdentity):
            return NotImplemented
        return self.qualified_name < other.qualified_name

    def __hash__(self) -> int:
        return hash(self.qualified_name)

    def __str__(self) -> str:
        return self.qualified_name


class ScalarShape(BaseModel):
    """A plain, non-parameterized type such as ``int`` or ``com.acme.Person``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["scalar"] = "scalar"
    type: TypeIdentity


class ArrayShape(BaseModel):
    """An array of elements described by another shape."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    element: TypeShape


class GenericShape(BaseModel):
    """A parameterized type, e.g. ``List<Person>`` or ``Map<String, Integer>``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["generic"] = "generic"
    base: TypeIdentity
    arguments: tuple[TypeShape, ...] = ()


class WildcardShape(BaseModel):
    """A wildcard type argument (``?``, ``? extends X`` or ``? super X``)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["wildcard"] = "wildcard"
    upper_bound: TypeShape | None = None
    lower_bound: TypeShape | None = None


class VariableShape(BaseModel):
    """A type variable such as ``T``; it never reduces to a concrete type."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["variable"] = "variable"
    name: str


# A declared type shape, tagged by `kind` so serialized shapes round-trip unambiguously.
TypeShape = Annotated[
    ScalarShape | ArrayShape | GenericShape | WildcardShape | VariableShape,
    _Field(discriminator="kind"),
]


def shape_identity(shape: Any) -> TypeIdentity | None:
    """Reduce a shape to the identity of its raw type.

    Wildcards reduce to their upper bound. Type variables, unbounded and
    lower-bounded wildcards, and arrays of these have no identity.

    Returns:
        The reduced identity, or None if the shape names no concrete type.
    """
    if isinstance(shape, ScalarShape):
        return shape.type
    if isinstance(shape, GenericShape):
        return shape.base
    if isinstance(shape, ArrayShape):
        component = shape_identity(shape.element)
        return TypeIdentity.array(component) if component is not None else None
    if isinstance(shape, WildcardShape):
        # `? super X` is bounded above by nothing more specific than the fallback type.
        return shape_identity(shape.upper_bound) if shape.upper_bound is not None else None
    return None


def unwrap_wildcard(shape: Any) -> Any:
    """Return the upper bound of a `? extends X` wildcard, or the shape itself otherwise."""
    while isinstance(shape, WildcardShape) and shape.upper_bound is not None:
        shape = shape.upper_bound
    return shape


def walk_identities(shape: Any) -> Iterator[TypeIdentity]:
    """Yield every concrete type written out by *shape*, at all nesting levels.

    Arrays contribute their innermost component rather than the array type.
    Type variables and unbounded wildcards contribute nothing.
    """
    if isinstance(shape, ScalarShape):
        yield shape.type
    elif isinstance(shape, ArrayShape):
        yield from walk_identities(shape.element)
    elif isinstance(shape, GenericShape):
        yield shape.base
        for argument in shape.arguments:
            yield from walk_identities(argument)
    elif isinstance(shape, WildcardShape):
        for bound in (shape.upper_bound, shape.lower_bound):
            if bound is not None:
                yield from walk_identities(bound)


# Resolve forward references for models that use TypeShape.
TypeIdentity.model_rebuild()
ArrayShape.model_rebuild()
GenericShape.model_rebuild()
WildcardShape.model_rebuild()
