# Copyright 2026 AssertGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for building class descriptions and their import sets."""

import logging

import pytest

from assertgen.description import (
    DescriptionBuilder,
    DescriptionError,
    DescriptionResult,
    DescriptionWarning,
    build_class_description,
)
from assertgen.model import AccessorDescriptor, GenericShape, PropertyTypeDescription, TypeIdentity
from assertgen.notation import parse_type_shape
from assertgen.policy import DEFAULT_POLICY, TypePolicy

# ###############
# Test Helpers
# ###############

PLAYER = TypeIdentity.named("com.acme.Player")


def _accessor(accessor_name: str, notation: str, *failures: str) -> AccessorDescriptor:
    """Create an accessor whose return type is given in type notation."""
    return AccessorDescriptor(
        accessor_name=accessor_name,
        return_type=parse_type_shape(notation, type_variables={"T"}),
        failure_types=tuple(TypeIdentity.named(f) for f in failures),
    )


def _build(*accessors: AccessorDescriptor, policy: TypePolicy | None = None) -> DescriptionResult:
    return build_class_description(PLAYER, list(accessors), policy)


def _imports(*accessors: AccessorDescriptor, policy: TypePolicy | None = None) -> list[str]:
    """Return the qualified names of the imports required by the accessors."""
    return [t.qualified_name for t in _build(*accessors, policy=policy).description.required_imports]


def _named(name: str) -> TypeIdentity:
    return TypeIdentity.named(name)


# ###############
# Scenarios
# ###############


class TestScenarios:
    def test_ambient_scalar_property(self) -> None:
        result = _build(_accessor("getName", "java.lang.String"))
        prop = result.description.get_property("name")
        assert prop.type == PropertyTypeDescription(base_type=_named("java.lang.String"))
        assert result.description.required_imports == ()

    @pytest.mark.parametrize("policy", [DEFAULT_POLICY, TypePolicy(ambient_namespaces=frozenset({""}))])
    def test_unqualified_scalar_property(self, policy: TypePolicy) -> None:
        """Types in the default namespace are never imported."""
        accessor = AccessorDescriptor(accessor_name="getName", return_type=parse_type_shape("String"))
        result = build_class_description(_named("Player"), [accessor], policy)
        assert result.description.get_property("name").type.base_type == _named("String")
        assert result.description.required_imports == ()

    def test_primitive_array_property(self) -> None:
        result = _build(_accessor("getScores", "int[]"))
        prop = result.description.get_property("scores")
        assert prop.type.base_type.qualified_name == "int[]"
        assert prop.type.is_array
        assert prop.type.element_type == _named("int")
        assert result.description.required_imports == ()

    def test_iterable_property_imports_element_only(self) -> None:
        result = _build(_accessor("getTeammates", "java.util.List<com.acme.Person>"))
        prop = result.description.get_property("teammates")
        assert prop.type.is_iterable
        assert prop.type.element_type == _named("com.acme.Person")
        assert [t.qualified_name for t in result.description.required_imports] == ["com.acme.Person"]

    def test_iterable_of_arrays_property(self) -> None:
        result = _build(_accessor("getGroups", "java.util.List<com.acme.Person[]>"))
        prop = result.description.get_property("groups")
        assert prop.type.is_iterable
        assert prop.type.is_array
        assert prop.type.element_type == _named("com.acme.Person")
        assert [t.qualified_name for t in result.description.required_imports] == ["com.acme.Person"]

    def test_non_iterable_generic_imports_base_and_arguments(self) -> None:
        result = _build(_accessor("getPair", "java.util.Map<java.lang.String, java.lang.Integer>"))
        prop = result.description.get_property("pair")
        assert prop.type == PropertyTypeDescription(base_type=_named("java.util.Map"))
        # String and Integer are ambient under the default policy.
        assert [t.qualified_name for t in result.description.required_imports] == ["java.util.Map"]

    def test_non_iterable_generic_without_ambient_namespaces(self) -> None:
        policy = TypePolicy(iterable_types=DEFAULT_POLICY.iterable_types)
        names = _imports(_accessor("getPair", "java.util.Map<java.lang.String, java.lang.Integer>"), policy=policy)
        assert names == ["java.lang.Integer", "java.lang.String", "java.util.Map"]

    def test_failure_types_are_imported(self) -> None:
        result = _build(_accessor("getRisky", "java.lang.String", "java.io.IOException", "java.sql.SQLException"))
        prop = result.description.get_property("risky")
        assert [f.qualified_name for f in prop.failure_types] == ["java.io.IOException", "java.sql.SQLException"]
        assert [t.qualified_name for t in result.description.required_imports] == [
            "java.io.IOException",
            "java.sql.SQLException",
        ]


# ###############
# Import rules
# ###############


class TestImports:
    def test_array_of_reference_type_imports_component(self) -> None:
        assert _imports(_accessor("getTeam", "com.acme.Person[]")) == ["com.acme.Person"]

    def test_multidimensional_array_imports_innermost_component(self) -> None:
        assert _imports(_accessor("getGrid", "com.acme.Cell[][]")) == ["com.acme.Cell"]

    def test_nested_generics_are_flattened_at_all_depths(self) -> None:
        accessor = _accessor("getIndex", "java.util.Map<com.acme.Key, java.util.Map<com.acme.Team, com.acme.Person[]>>")
        assert _imports(accessor) == ["com.acme.Key", "com.acme.Person", "com.acme.Team", "java.util.Map"]

    def test_generic_element_of_iterable_is_flattened(self) -> None:
        accessor = _accessor("getRoster", "java.util.List<com.acme.Pair<com.acme.Person, java.time.Instant>>")
        assert _imports(accessor) == ["com.acme.Pair", "com.acme.Person", "java.time.Instant"]

    def test_extra_iterable_arguments_are_not_imported(self) -> None:
        policy = TypePolicy(iterable_types=frozenset({"com.acme.Tagged"}), ambient_namespaces=frozenset({"java.lang"}))
        accessor = _accessor("getTagged", "com.acme.Tagged<com.acme.Person, com.acme.Tag>")
        assert _imports(accessor, policy=policy) == ["com.acme.Person"]

    def test_unresolvable_arguments_are_omitted(self) -> None:
        accessor = _accessor("getBox", "com.acme.Box<T, ?, ? extends com.acme.Person>")
        assert _imports(accessor) == ["com.acme.Box", "com.acme.Person"]

    def test_lower_bound_is_imported(self) -> None:
        assert _imports(_accessor("getSinks", "java.util.List<? super com.acme.Person>")) == ["com.acme.Person"]

    def test_primitive_scalar_is_not_imported(self) -> None:
        assert _imports(_accessor("getAge", "int"), _accessor("isRookie", "boolean")) == []

    def test_sub_namespace_of_ambient_is_imported(self) -> None:
        assert _imports(_accessor("getMethod", "java.lang.reflect.Method")) == ["java.lang.reflect.Method"]

    def test_custom_ambient_namespace(self) -> None:
        policy = TypePolicy(ambient_namespaces=frozenset({"java.lang", "com.acme"}))
        accessors = (_accessor("getTeam", "com.acme.Team"), _accessor("getWhen", "java.time.Instant"))
        assert _imports(*accessors, policy=policy) == ["java.time.Instant"]

    def test_imports_are_deduplicated_and_sorted(self) -> None:
        accessors = (
            _accessor("getTeam", "com.acme.Team", "com.acme.TeamException"),
            _accessor("getCoach", "com.acme.Person", "com.acme.TeamException"),
            _accessor("getPlayers", "java.util.Set<com.acme.Person>"),
            _accessor("getFormer", "com.acme.Team[]"),
        )
        assert _imports(*accessors) == ["com.acme.Person", "com.acme.Team", "com.acme.TeamException"]

    def test_collect_imports_directly(self) -> None:
        builder = DescriptionBuilder()
        imports, diagnostics = builder.collect_imports([_accessor("getTeammates", "java.util.List<com.acme.Person>")])
        assert imports == [_named("com.acme.Person")]
        assert diagnostics == []


# ###############
# Properties
# ###############


class TestProperties:
    def test_properties_are_sorted_by_name(self) -> None:
        result = _build(
            _accessor("getTeam", "com.acme.Team"),
            _accessor("getAge", "int"),
            _accessor("isRookie", "boolean"),
            _accessor("getName", "java.lang.String"),
        )
        assert [p.name for p in result.description.properties] == ["age", "name", "rookie", "team"]

    def test_explicit_property_name_wins(self) -> None:
        accessor = AccessorDescriptor(
            accessor_name="fetchName",
            property_name="displayName",
            return_type=parse_type_shape("java.lang.String"),
        )
        assert [p.name for p in _build(accessor).description.properties] == ["displayName"]

    def test_injected_property_namer(self) -> None:
        builder = DescriptionBuilder(property_namer=str.upper)
        properties, _ = builder.build_properties([_accessor("getName", "java.lang.String")])
        assert [p.name for p in properties] == ["GETNAME"]

    def test_duplicate_property_keeps_first(self) -> None:
        result = _build(
            _accessor("getActive", "java.lang.Boolean"),
            _accessor("isActive", "boolean"),
        )
        prop = result.description.get_property("active")
        assert prop.type.base_type == _named("java.lang.Boolean")
        assert result.warnings == [DescriptionWarning("active", "accessor 'isActive' duplicates property 'active'")]
        assert not result.has_errors

    def test_opaque_property_is_kept_with_warning(self) -> None:
        result = _build(_accessor("getItems", "java.util.List<?>"))
        prop = result.description.get_property("items")
        assert prop.type.is_opaque
        assert prop.type.element_type == _named("java.lang.Object")
        assert len(result.warnings) == 1
        assert result.warnings[0].property_name == "items"
        assert "java.lang.Object" in result.warnings[0].message
        assert result.description.required_imports == ()


# ###############
# Failure isolation
# ###############


class TestFailureIsolation:
    def test_malformed_property_is_excluded_and_reported_once(self) -> None:
        broken = AccessorDescriptor(
            accessor_name="getBroken",
            return_type=GenericShape(base=_named("java.util.List")),
            failure_types=(_named("com.acme.BrokenException"),),
        )
        result = _build(_accessor("getTeam", "com.acme.Team"), broken)

        assert [p.name for p in result.description.properties] == ["team"]
        assert [t.qualified_name for t in result.description.required_imports] == ["com.acme.Team"]
        assert result.has_errors
        assert result.errors == [
            DescriptionError("broken", "iterable-like type 'java.util.List' declares no type arguments")
        ]

    def test_build_properties_reports_malformed_property(self) -> None:
        broken = AccessorDescriptor(accessor_name="getBroken", return_type=GenericShape(base=_named("java.util.Set")))
        properties, diagnostics = DescriptionBuilder().build_properties([broken])
        assert properties == []
        assert diagnostics == [
            DescriptionError("broken", "iterable-like type 'java.util.Set' declares no type arguments")
        ]

    def test_malformed_accessors_sharing_a_name_are_reported_separately(self) -> None:
        first = AccessorDescriptor(accessor_name="getItems", return_type=GenericShape(base=_named("java.util.List")))
        second = AccessorDescriptor(
            accessor_name="fetchItems",
            property_name="items",
            return_type=GenericShape(base=_named("java.util.List")),
        )
        result = _build(first, second)

        assert result.description.properties == ()
        assert result.errors == [
            DescriptionError("items", "iterable-like type 'java.util.List' declares no type arguments"),
            DescriptionError("items", "iterable-like type 'java.util.List' declares no type arguments"),
        ]

    def test_malformed_property_is_logged_once(self, caplog: pytest.LogCaptureFixture) -> None:
        broken = AccessorDescriptor(accessor_name="getBroken", return_type=GenericShape(base=_named("java.util.List")))
        with caplog.at_level(logging.WARNING, logger="assertgen.description.builder"):
            _build(broken)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "broken" in warnings[0].getMessage()

    def test_non_list_accessors_are_rejected(self) -> None:
        with pytest.raises(TypeError, match="list or tuple"):
            DescriptionBuilder().build(PLAYER, "getName")  # type: ignore[arg-type]

    def test_non_accessor_entries_are_rejected(self) -> None:
        with pytest.raises(TypeError, match=r"accessors\[1\] must be an AccessorDescriptor"):
            DescriptionBuilder().collect_imports([_accessor("getName", "java.lang.String"), "getAge"])  # type: ignore[list-item]


# ###############
# Determinism
# ###############


def test_build_is_independent_of_accessor_order() -> None:
    accessors = [
        _accessor("getTeammates", "java.util.List<com.acme.Person>"),
        _accessor("getScores", "int[]"),
        _accessor("getIndex", "java.util.Map<com.acme.Key, com.acme.Team>", "java.io.IOException"),
        _accessor("getName", "java.lang.String"),
    ]
    forward = build_class_description(PLAYER, accessors)
    backward = build_class_description(PLAYER, list(reversed(accessors)))
    assert forward.description == backward.description
    assert forward.description.model_dump_json() == backward.description.model_dump_json()


def test_empty_accessor_list() -> None:
    result = _build()
    assert result.description.properties == ()
    assert result.description.required_imports == ()
    assert result.warnings == []
    assert not result.has_errors
