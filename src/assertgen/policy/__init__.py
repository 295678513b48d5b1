# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type classification policy (iterable-like containers, ambient namespaces)."""

from assertgen.policy.config import (
    DEFAULT_POLICY,
    TypePolicy,
    TypePolicyError,
    load_type_policy,
    parse_type_policy,
)

__all__ = [
    "DEFAULT_POLICY",
    "TypePolicy",
    "TypePolicyError",
    "load_type_policy",
    "parse_type_policy",
]
