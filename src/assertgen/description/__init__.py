# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Description pipeline: type resolution, import collection, and artifacts."""

from assertgen.description.artifact import ARTIFACT_FORMAT_VERSION, deserialize, serialize
from assertgen.description.builder import (
    DescriptionBuilder,
    DescriptionError,
    DescriptionResult,
    DescriptionWarning,
    Diagnostic,
    build_class_description,
)
from assertgen.description.naming import property_name_of
from assertgen.description.resolver import (
    MalformedShapeError,
    UnresolvableTypeError,
    reduce_type,
    resolve_type,
)

__all__ = [
    "resolve_type",
    "reduce_type",
    "MalformedShapeError",
    "UnresolvableTypeError",
    "DescriptionBuilder",
    "DescriptionResult",
    "DescriptionWarning",
    "DescriptionError",
    "Diagnostic",
    "build_class_description",
    "property_name_of",
    "serialize",
    "deserialize",
    "ARTIFACT_FORMAT_VERSION",
]
