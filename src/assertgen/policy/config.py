# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type classification policy and its YAML configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path

import yaml

from assertgen.model.types import TypeIdentity

# ###############
# Public Interface
# ###############


class TypePolicyError(Exception):
    """Raised when a type policy file is invalid or cannot be loaded."""


@dataclass(frozen=True)
class TypePolicy:
    """Policy data that classifies types for description building.

    Attributes:
        iterable_types: Qualified names of homogeneous single-element containers.
        ambient_namespaces: Namespaces whose types never need an import. The
            empty string names the default namespace of unqualified types.
        fallback_type: Identity used when a declared type cannot be reduced.
    """

    iterable_types: frozenset[str] = field(default_factory=frozenset)
    ambient_namespaces: frozenset[str] = field(default_factory=frozenset)
    fallback_type: TypeIdentity = field(default_factory=lambda: TypeIdentity.named("java.lang.Object"))

    def is_iterable_like(self, identity: TypeIdentity) -> bool:
        """Return True if *identity* is a homogeneous single-element container."""
        return identity.qualified_name in self.iterable_types

    def is_ambient(self, identity: TypeIdentity) -> bool:
        """Return True if *identity* is always in scope for generated code."""
        if identity.is_primitive or identity.is_array:
            return False
        return (identity.namespace or "") in self.ambient_namespaces


DEFAULT_POLICY = TypePolicy(
    iterable_types=frozenset(
        {
            "java.lang.Iterable",
            "java.util.Collection",
            "java.util.List",
            "java.util.Set",
            "java.util.SortedSet",
            "java.util.NavigableSet",
            "java.util.Queue",
            "java.util.Deque",
            "java.util.ArrayList",
            "java.util.LinkedList",
            "java.util.HashSet",
            "java.util.LinkedHashSet",
            "java.util.TreeSet",
            "java.util.ArrayDeque",
            "java.util.PriorityQueue",
        }
    ),
    # Types in the default namespace cannot be imported.
    ambient_namespaces=frozenset({"java.lang", ""}),
)


def load_type_policy(path: Path) -> TypePolicy:
    """Load a type policy from a YAML file.

    Args:
        path: Path to the policy file.

    Returns:
        The TypePolicy described by the file.

    Raises:
        TypePolicyError: If the file cannot be read or the policy is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise TypePolicyError(f"Type policy file not found: {path}") from None
    except OSError as exc:
        raise TypePolicyError(f"Cannot read type policy file: {exc}") from exc

    return parse_type_policy(text, source_label=str(path))


def parse_type_policy(text: str, source_label: str = "<string>") -> TypePolicy:
    """Parse type policy YAML text.

    Recognized keys are ``iterable-types`` and ``ambient-namespaces`` (lists of
    strings), ``fallback-type`` (a qualified name) and ``extends-default``
    (bool, default true). When ``extends-default`` is true the listed names are
    added to those of :data:`DEFAULT_POLICY` instead of replacing them.

    Raises:
        TypePolicyError: If the YAML is invalid or a key has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TypePolicyError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return DEFAULT_POLICY
    if not isinstance(data, dict):
        raise TypePolicyError(f"{source_label}: type policy must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise TypePolicyError(f"{source_label}: unknown key(s): {', '.join(unknown)}")

    extends_default = data.get("extends-default", True)
    if not isinstance(extends_default, bool):
        raise TypePolicyError(f"{source_label}: 'extends-default' must be a boolean")

    base = DEFAULT_POLICY if extends_default else TypePolicy()
    iterable_types = _string_set(data, "iterable-types", source_label)
    ambient_namespaces = _string_set(data, "ambient-namespaces", source_label)

    policy = replace(
        base,
        iterable_types=base.iterable_types | iterable_types,
        ambient_namespaces=base.ambient_namespaces | ambient_namespaces,
    )
    if "fallback-type" in data:
        fallback = data["fallback-type"]
        if not isinstance(fallback, str) or not fallback:
            raise TypePolicyError(f"{source_label}: 'fallback-type' must be a non-empty string")
        policy = replace(policy, fallback_type=TypeIdentity.named(fallback))
    return policy


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"iterable-types", "ambient-namespaces", "fallback-type", "extends-default"})


def _string_set(mapping: dict[str, object], key: str, source_label: str) -> frozenset[str]:
    """Extract an optional list of strings from a mapping as a frozenset."""
    if key not in mapping:
        return frozenset()
    value = mapping[key]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TypePolicyError(f"{source_label}: '{key}' must be a list of strings")
    return frozenset(value)
