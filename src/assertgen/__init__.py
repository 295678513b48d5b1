# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""AssertGen: class descriptions for assertion code generators."""

from assertgen.description import DescriptionBuilder, DescriptionResult, build_class_description
from assertgen.model import AccessorDescriptor, ClassDescription, TypeIdentity
from assertgen.policy import DEFAULT_POLICY, TypePolicy

__all__ = [
    "AccessorDescriptor",
    "ClassDescription",
    "TypeIdentity",
    "TypePolicy",
    "DEFAULT_POLICY",
    "DescriptionBuilder",
    "DescriptionResult",
    "build_class_description",
]
