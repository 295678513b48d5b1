# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Description model for AssertGen (type identities, shapes, class descriptions)."""

from assertgen.model.descriptions import (
    AccessorDescriptor,
    ClassDescription,
    PropertyDescription,
    PropertyTypeDescription,
)
from assertgen.model.types import (
    PRIMITIVE_NAMES,
    ArrayShape,
    GenericShape,
    ScalarShape,
    TypeIdentity,
    TypeShape,
    VariableShape,
    WildcardShape,
    shape_identity,
    unwrap_wildcard,
    walk_identities,
)

__all__ = [
    # Types and shapes
    "PRIMITIVE_NAMES",
    "TypeIdentity",
    "ScalarShape",
    "ArrayShape",
    "GenericShape",
    "WildcardShape",
    "VariableShape",
    "TypeShape",
    "shape_identity",
    "unwrap_wildcard",
    "walk_identities",
    # Descriptions
    "AccessorDescriptor",
    "PropertyTypeDescription",
    "PropertyDescription",
    "ClassDescription",
]
