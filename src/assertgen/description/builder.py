# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assembly of ClassDescriptions from the accessors of a subject type.

Two independent passes run over the same accessor list:

* **Properties** resolve each accessor's declared type with
  :func:`~assertgen.description.resolver.resolve_type` and keep the declared
  failure types verbatim.
* **Imports** collect every type that generated code writes out literally.
  Arrays and iterable-like containers contribute their element type only,
  since the container type itself never appears in generated assertions.
  Any other generic type contributes its base and all of its type arguments
  at every nesting level. Declared failure types are always included.
  Primitive and ambient types are dropped.

Failures are isolated per property: a malformed shape excludes that property
and is reported as a :class:`DescriptionError`; it never aborts the build.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from assertgen.description.naming import property_name_of
from assertgen.description.resolver import MalformedShapeError, first_type_argument, resolve_type
from assertgen.model.descriptions import AccessorDescriptor, ClassDescription, PropertyDescription
from assertgen.model.types import ArrayShape, GenericShape, TypeIdentity, walk_identities
from assertgen.policy.config import DEFAULT_POLICY, TypePolicy

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class DescriptionWarning:
    """A non-fatal issue: the property is described, possibly less precisely.

    Attributes:
        property_name: Name of the affected property.
        message: Human-readable description of the warning.
    """

    property_name: str
    message: str


@dataclass(frozen=True)
class DescriptionError:
    """A per-property failure: the property is left out of the description.

    Attributes:
        property_name: Name of the affected property.
        message: Human-readable description of the error.
    """

    property_name: str
    message: str


Diagnostic = DescriptionWarning | DescriptionError


@dataclass
class DescriptionResult:
    """Result of building the description of one subject type.

    Attributes:
        description: The class description, built from every property that resolved.
        warnings: Properties described with reduced precision or ignored as duplicates.
        errors: Properties excluded from the description.
    """

    description: ClassDescription
    warnings: list[DescriptionWarning] = field(default_factory=list)
    errors: list[DescriptionError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any property was excluded from the description."""
        return len(self.errors) > 0


class DescriptionBuilder:
    """Builds class descriptions under a given type policy.

    Args:
        policy: Classifies iterable-like and ambient types.
        property_namer: Derives a property name from an accessor name when
            the accessor carries no explicit property name.
    """

    def __init__(
        self,
        policy: TypePolicy = DEFAULT_POLICY,
        property_namer: Callable[[str], str] = property_name_of,
    ) -> None:
        self._policy = policy
        self._property_namer = property_namer

    def build(self, subject_type: TypeIdentity, accessors: Sequence[AccessorDescriptor]) -> DescriptionResult:
        """Build the ClassDescription of *subject_type* from its accessors.

        Raises:
            TypeError: If *accessors* is not a list or tuple of AccessorDescriptor.
        """
        properties, property_diagnostics = self.build_properties(accessors)
        # The import pass rejects exactly the accessors the property pass rejects.
        imports, _ = self.collect_imports(accessors)
        diagnostics = property_diagnostics

        description = ClassDescription(subject_type=subject_type, properties=properties, required_imports=imports)
        logger.debug(
            "Described %s: %d properties, %d imports, %d diagnostics",
            subject_type.qualified_name,
            len(description.properties),
            len(description.required_imports),
            len(diagnostics),
        )
        return DescriptionResult(
            description=description,
            warnings=[d for d in diagnostics if isinstance(d, DescriptionWarning)],
            errors=[d for d in diagnostics if isinstance(d, DescriptionError)],
        )

    def build_properties(
        self, accessors: Sequence[AccessorDescriptor]
    ) -> tuple[list[PropertyDescription], list[Diagnostic]]:
        """Describe every accessor as a property, sorted by property name.

        When two accessors yield the same property name the first one wins
        and the later one is reported as a warning.

        Returns:
            The property descriptions and the diagnostics collected on the way.
        """
        _check_accessors(accessors)
        diagnostics: list[Diagnostic] = []
        properties: dict[str, PropertyDescription] = {}

        for accessor in accessors:
            name = self._property_name(accessor)
            try:
                type_description = resolve_type(accessor.return_type, self._policy)
            except MalformedShapeError as exc:
                logger.warning("Skipping property '%s': %s", name, exc)
                diagnostics.append(DescriptionError(name, str(exc)))
                continue

            if name in properties:
                logger.warning("Ignoring accessor '%s': duplicate property '%s'", accessor.accessor_name, name)
                diagnostics.append(
                    DescriptionWarning(name, f"accessor '{accessor.accessor_name}' duplicates property '{name}'")
                )
                continue

            if type_description.is_opaque:
                fallback = self._policy.fallback_type.qualified_name
                logger.info("Property '%s' is opaque; described with '%s'", name, fallback)
                diagnostics.append(
                    DescriptionWarning(name, f"type of property '{name}' is not fully resolvable; using '{fallback}'")
                )

            properties[name] = PropertyDescription(
                name=name,
                type=type_description,
                failure_types=accessor.failure_types,
            )

        return sorted(properties.values()), diagnostics

    def collect_imports(self, accessors: Sequence[AccessorDescriptor]) -> tuple[list[TypeIdentity], list[Diagnostic]]:
        """Collect the types generated code must import, sorted by qualified name.

        Returns:
            The required imports and the diagnostics collected on the way.
        """
        _check_accessors(accessors)
        diagnostics: list[Diagnostic] = []
        candidates: set[TypeIdentity] = set()

        for accessor in accessors:
            try:
                candidates.update(self._type_imports(accessor.return_type))
            except MalformedShapeError as exc:
                diagnostics.append(DescriptionError(self._property_name(accessor), str(exc)))
                continue
            candidates.update(accessor.failure_types)

        return sorted(identity for identity in candidates if self._needs_import(identity)), diagnostics

    def _property_name(self, accessor: AccessorDescriptor) -> str:
        if accessor.property_name is not None:
            return accessor.property_name
        return self._property_namer(accessor.accessor_name)

    def _type_imports(self, shape: Any) -> list[TypeIdentity]:
        if isinstance(shape, ArrayShape):
            return list(walk_identities(shape.element))
        if isinstance(shape, GenericShape) and self._policy.is_iterable_like(shape.base):
            argument = first_type_argument(shape)
            if isinstance(argument, ArrayShape):
                argument = argument.element
            return list(walk_identities(argument))
        return list(walk_identities(shape))

    def _needs_import(self, identity: TypeIdentity) -> bool:
        return not (identity.is_primitive or identity.is_array or self._policy.is_ambient(identity))


def build_class_description(
    subject_type: TypeIdentity,
    accessors: Sequence[AccessorDescriptor],
    policy: TypePolicy | None = None,
) -> DescriptionResult:
    """Build the description of *subject_type* with a default-configured builder.

    Args:
        subject_type: The type whose accessors are described.
        accessors: The accessors reported by the getter scanner, in scan order.
        policy: Type policy to use; :data:`~assertgen.policy.DEFAULT_POLICY` when omitted.

    Returns:
        A :class:`DescriptionResult` holding the description and any diagnostics.
    """
    return DescriptionBuilder(policy or DEFAULT_POLICY).build(subject_type, accessors)


# ################
# Implementation
# ################


def _check_accessors(accessors: object) -> None:
    """Reject accessor lists that violate the scanner contract."""
    if not isinstance(accessors, (list, tuple)):
        raise TypeError(f"accessors must be a list or tuple, got {type(accessors).__name__}")
    for index, accessor in enumerate(accessors):
        if not isinstance(accessor, AccessorDescriptor):
            raise TypeError(f"accessors[{index}] must be an AccessorDescriptor, got {type(accessor).__name__}")
