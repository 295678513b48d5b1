# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Accessor inputs and class description outputs of the AssertGen model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from assertgen.model.types import TypeIdentity, TypeShape

# ###############
# Public Interface
# ###############


class AccessorDescriptor(BaseModel):
    """A read-only accessor of a subject type, as reported by a getter scanner.

    Attributes:
        accessor_name: Name of the accessor, e.g. ``getTeamMates``.
        return_type: Declared shape of the value the accessor returns.
        failure_types: Declared failure (exception) types, in declaration order.
        property_name: Explicit property name; derived from *accessor_name*
            by the builder's naming function when omitted.
    """

    model_config = ConfigDict(frozen=True)

    accessor_name: str
    return_type: TypeShape
    failure_types: tuple[TypeIdentity, ...] = ()
    property_name: str | None = None


class PropertyTypeDescription(BaseModel):
    """Classification of a property type for assertion generation.

    ``element_type`` is set exactly when the property is an array or an
    iterable-like container. Both flags are set for an iterable whose
    elements are arrays; ``element_type`` then names the array component.
    ``is_opaque`` marks a description that had to fall back to the policy's
    fallback type because some part of the declared type was not reducible.
    """

    model_config = ConfigDict(frozen=True)

    base_type: TypeIdentity
    is_array: bool = False
    is_iterable: bool = False
    element_type: TypeIdentity | None = None
    is_opaque: bool = False

    @model_validator(mode="after")
    def _check_element_type(self) -> PropertyTypeDescription:
        is_container = self.is_array or self.is_iterable
        if is_container and self.element_type is None:
            raise ValueError(f"array or iterable type '{self.base_type}' requires an element type")
        if not is_container and self.element_type is not None:
            raise ValueError(f"scalar type '{self.base_type}' cannot have an element type")
        return self

    @property
    def is_primitive(self) -> bool:
        return self.base_type.is_primitive

    @property
    def is_boolean(self) -> bool:
        return self.base_type.qualified_name in ("boolean", "java.lang.Boolean")

    @property
    def element_type_name(self) -> str | None:
        return self.element_type.simple_name if self.element_type is not None else None


class PropertyDescription(BaseModel):
    """A described property: its name, resolved type and declared failure types."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: PropertyTypeDescription
    failure_types: tuple[TypeIdentity, ...] = ()

    @property
    def type_name(self) -> str:
        return self.type.base_type.simple_name

    @property
    def element_type_name(self) -> str | None:
        return self.type.element_type_name

    @property
    def is_array_property(self) -> bool:
        return self.type.is_array

    @property
    def is_iterable_property(self) -> bool:
        return self.type.is_iterable

    @property
    def throws_failures(self) -> bool:
        return len(self.failure_types) > 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, PropertyDescription):
            return NotImplemented
        return self.name < other.name


class ClassDescription(BaseModel):
    """The description of one subject type handed to the code emission layer.

    Properties are kept sorted by name with unique names, and required
    imports sorted by qualified name without duplicates, so that equal inputs
    always produce equal descriptions.
    """

    model_config = ConfigDict(frozen=True)

    subject_type: TypeIdentity
    properties: tuple[PropertyDescription, ...] = ()
    required_imports: tuple[TypeIdentity, ...] = ()

    @field_validator("properties")
    @classmethod
    def _sort_properties(cls, properties: tuple[PropertyDescription, ...]) -> tuple[PropertyDescription, ...]:
        names = [p.name for p in properties]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate property names: {', '.join(duplicates)}")
        return tuple(sorted(properties))

    @field_validator("required_imports")
    @classmethod
    def _sort_imports(cls, imports: tuple[TypeIdentity, ...]) -> tuple[TypeIdentity, ...]:
        return tuple(sorted(set(imports)))

    @property
    def class_name(self) -> str:
        return self.subject_type.simple_name

    @property
    def namespace(self) -> str | None:
        return self.subject_type.namespace

    def get_property(self, name: str) -> PropertyDescription:
        """Return the property called *name*.

        Raises:
            KeyError: If the description has no such property.
        """
        for prop in self.properties:
            if prop.name == name:
                return prop
        raise KeyError(name)
