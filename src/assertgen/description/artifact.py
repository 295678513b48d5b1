# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of ClassDescription artifacts.

Descriptions are handed to the emission layer as compact JSON. Properties and
imports are already sorted, so equal descriptions serialize to identical
bytes. The format is versioned so future schema changes can be detected.
"""

from __future__ import annotations

import json
from typing import Any

from assertgen.model.descriptions import ClassDescription, PropertyDescription, PropertyTypeDescription
from assertgen.model.types import TypeIdentity

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"


def serialize(description: ClassDescription) -> str:
    """Serialize a ClassDescription to a compact JSON string."""
    return json.dumps(_description_to_dict(description), separators=(",", ":"))


def deserialize(data: str) -> ClassDescription:
    """Deserialize a ClassDescription from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`ClassDescription`.

    Raises:
        ValueError: If the artifact format version is not recognised.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return _description_from_dict(obj)


# ################
# Implementation
# ################


def _description_to_dict(description: ClassDescription) -> dict[str, Any]:
    return {
        "v": ARTIFACT_FORMAT_VERSION,
        "subject": _identity_to_dict(description.subject_type),
        "properties": [_property_to_dict(p) for p in description.properties],
        "imports": [_identity_to_dict(i) for i in description.required_imports],
    }


def _description_from_dict(obj: dict[str, Any]) -> ClassDescription:
    return ClassDescription(
        subject_type=_identity_from_dict(obj["subject"]),
        properties=tuple(_property_from_dict(p) for p in obj.get("properties", [])),
        required_imports=tuple(_identity_from_dict(i) for i in obj.get("imports", [])),
    )


def _identity_to_dict(identity: TypeIdentity) -> dict[str, Any]:
    d: dict[str, Any] = {"name": identity.qualified_name}
    if identity.is_primitive:
        d["primitive"] = True
    if identity.array_of is not None:
        d["array_of"] = _identity_to_dict(identity.array_of)
    return d


def _identity_from_dict(obj: dict[str, Any]) -> TypeIdentity:
    array_of = obj.get("array_of")
    return TypeIdentity(
        qualified_name=obj["name"],
        is_primitive=obj.get("primitive", False),
        array_of=_identity_from_dict(array_of) if array_of is not None else None,
    )


def _property_to_dict(prop: PropertyDescription) -> dict[str, Any]:
    d: dict[str, Any] = {"name": prop.name, "type": _type_to_dict(prop.type)}
    if prop.failure_types:
        d["failures"] = [_identity_to_dict(f) for f in prop.failure_types]
    return d


def _property_from_dict(obj: dict[str, Any]) -> PropertyDescription:
    return PropertyDescription(
        name=obj["name"],
        type=_type_from_dict(obj["type"]),
        failure_types=tuple(_identity_from_dict(f) for f in obj.get("failures", [])),
    )


def _type_to_dict(type_description: PropertyTypeDescription) -> dict[str, Any]:
    d: dict[str, Any] = {"base": _identity_to_dict(type_description.base_type)}
    if type_description.is_array:
        d["array"] = True
    if type_description.is_iterable:
        d["iterable"] = True
    if type_description.element_type is not None:
        d["element"] = _identity_to_dict(type_description.element_type)
    if type_description.is_opaque:
        d["opaque"] = True
    return d


def _type_from_dict(obj: dict[str, Any]) -> PropertyTypeDescription:
    element = obj.get("element")
    return PropertyTypeDescription(
        base_type=_identity_from_dict(obj["base"]),
        is_array=obj.get("array", False),
        is_iterable=obj.get("iterable", False),
        element_type=_identity_from_dict(element) if element is not None else None,
        is_opaque=obj.get("opaque", False),
    )
