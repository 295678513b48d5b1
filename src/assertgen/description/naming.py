# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Accessor-to-property naming convention."""

# ###############
# Public Interface
# ###############


def property_name_of(accessor_name: str) -> str:
    """Derive a property name from a getter name.

    ``getTeamMates`` becomes ``teamMates`` and ``isRookie`` becomes ``rookie``.
    A remainder starting with two upper-case letters is kept as-is
    (``getURL`` becomes ``URL``). Names without a getter prefix pass through.
    """
    for prefix in _GETTER_PREFIXES:
        rest = accessor_name[len(prefix) :]
        if accessor_name.startswith(prefix) and rest[:1].isupper():
            return _decapitalize(rest)
    return accessor_name


# ################
# Implementation
# ################

_GETTER_PREFIXES = ("get", "is")


def _decapitalize(name: str) -> str:
    if len(name) > 1 and name[0].isupper() and name[1].isupper():
        return name
    return name[0].lower() + name[1:]
