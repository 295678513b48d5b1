# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for Java-like type notation."""

from assertgen.notation.parser import NotationError, parse_type_shape

__all__ = [
    "parse_type_shape",
    "NotationError",
]
