# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of a declared property type into a PropertyTypeDescription.

Arrays describe their component type. Iterable-like generics describe their
first type argument only, looking through one array level so that a
collection of ``T[]`` is described by ``T``. Every other shape is a scalar.
"""

from __future__ import annotations

import logging
from typing import Any

from assertgen.model.descriptions import PropertyTypeDescription
from assertgen.model.types import ArrayShape, GenericShape, TypeIdentity, shape_identity, unwrap_wildcard
from assertgen.policy.config import DEFAULT_POLICY, TypePolicy

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class MalformedShapeError(Exception):
    """Raised when an iterable-like generic shape declares no type arguments.

    Attributes:
        shape: The offending generic shape.
    """

    def __init__(self, shape: GenericShape) -> None:
        super().__init__(f"iterable-like type '{shape.base.qualified_name}' declares no type arguments")
        self.shape = shape


class UnresolvableTypeError(Exception):
    """Raised when a shape cannot be reduced to a concrete type identity.

    Attributes:
        shape: The shape that names no concrete type.
    """

    def __init__(self, shape: Any) -> None:
        super().__init__(f"cannot reduce {shape.kind} type to a concrete type")
        self.shape = shape


def reduce_type(shape: Any) -> TypeIdentity:
    """Reduce *shape* to the identity of its raw type.

    Raises:
        UnresolvableTypeError: If the shape is a type variable, an unbounded
            wildcard, or an array of either.
    """
    identity = shape_identity(shape)
    if identity is None:
        raise UnresolvableTypeError(shape)
    return identity


def first_type_argument(shape: GenericShape) -> Any:
    """Return the first type argument of an iterable-like shape, unwrapping wildcard bounds.

    Raises:
        MalformedShapeError: If the shape has no type arguments.
    """
    if not shape.arguments:
        raise MalformedShapeError(shape)
    return unwrap_wildcard(shape.arguments[0])


def resolve_type(shape: Any, policy: TypePolicy = DEFAULT_POLICY) -> PropertyTypeDescription:
    """Describe a declared property type.

    Args:
        shape: The declared return type of the accessor.
        policy: Classifies iterable-like types and supplies the fallback type.

    Returns:
        The PropertyTypeDescription of *shape*. Parts that cannot be reduced
        are replaced by ``policy.fallback_type`` and the result is marked
        ``is_opaque``.

    Raises:
        MalformedShapeError: If *shape* is an iterable-like generic without
            type arguments.
    """
    return _TypeResolver(policy).resolve(shape)


# ################
# Implementation
# ################


class _TypeResolver:
    """Resolves one declared type, remembering whether the fallback type was used."""

    def __init__(self, policy: TypePolicy) -> None:
        self._policy = policy
        self._opaque = False

    def resolve(self, shape: Any) -> PropertyTypeDescription:
        if isinstance(shape, ArrayShape):
            base_type = self._identity(shape)
            return self._describe(base_type, is_array=True, element_type=self._identity(shape.element))

        if isinstance(shape, GenericShape) and self._policy.is_iterable_like(shape.base):
            argument = first_type_argument(shape)
            if isinstance(argument, ArrayShape):
                # A collection of T[] is described by T, the innermost element.
                element_type = self._identity(argument.element)
                return self._describe(shape.base, is_array=True, is_iterable=True, element_type=element_type)
            return self._describe(shape.base, is_iterable=True, element_type=self._identity(argument))

        return self._describe(self._identity(shape))

    def _describe(
        self,
        base_type: TypeIdentity,
        *,
        is_array: bool = False,
        is_iterable: bool = False,
        element_type: TypeIdentity | None = None,
    ) -> PropertyTypeDescription:
        return PropertyTypeDescription(
            base_type=base_type,
            is_array=is_array,
            is_iterable=is_iterable,
            element_type=element_type,
            is_opaque=self._opaque,
        )

    def _identity(self, shape: Any) -> TypeIdentity:
        try:
            return reduce_type(shape)
        except UnresolvableTypeError as exc:
            fallback = self._policy.fallback_type
            logger.debug("%s; falling back to '%s'", exc, fallback.qualified_name)
            self._opaque = True
            if isinstance(shape, ArrayShape):
                return TypeIdentity.array(self._identity(shape.element))
            return fallback
