"""Tests for List, NonNull and Thunk composers."""

import pytest
from graphql import GraphQLList, GraphQLNonNull, GraphQLString

from gql_compose.core.errors import MalformedDefinitionError, NotFoundError, WrongKindError
from gql_compose.core.schema_composer import SchemaComposer
from gql_compose.core.type_helpers import replace_tc, unwrap_tc
from gql_compose.core.wrappers import ListComposer, NonNullComposer, ThunkComposer


@pytest.fixture
def sc():
    return SchemaComposer()


@pytest.fixture
def string_tc(sc):
    return sc.type_mapper.get_built_in_type("String")


class TestListAndNonNull:
    """Tests for structural wrappers."""

    def test_type_names(self, string_tc):
        assert ListComposer(string_tc).get_type_name() == "[String]"
        assert NonNullComposer(ListComposer(NonNullComposer(string_tc))).get_type_name() == "[String!]!"

    def test_get_type(self, string_tc):
        gq_type = NonNullComposer(ListComposer(string_tc)).get_type()
        assert isinstance(gq_type, GraphQLNonNull)
        assert isinstance(gq_type.of_type, GraphQLList)
        assert gq_type.of_type.of_type is GraphQLString

    def test_nested_non_null_is_rejected(self, string_tc):
        with pytest.raises(WrongKindError):
            NonNullComposer(NonNullComposer(string_tc))

    def test_non_null_of_non_null_is_itself(self, string_tc):
        non_null = string_tc.NonNull
        assert non_null.NonNull is non_null

    def test_shortcuts(self, string_tc):
        assert string_tc.List.NonNull.get_type_name() == "[String]!"

    def test_unwrap(self, string_tc):
        wrapped = NonNullComposer(ListComposer(string_tc))
        assert wrapped.get_unwrapped_tc() is string_tc
        assert unwrap_tc(wrapped) is string_tc

    def test_replace_tc_keeps_wrappers(self, sc, string_tc):
        int_tc = sc.type_mapper.get_built_in_type("Int")
        replaced = replace_tc(NonNullComposer(ListComposer(string_tc)), int_tc)
        assert replaced.get_type_name() == "[Int]!"

    def test_replace_tc_with_function(self, sc, string_tc):
        int_tc = sc.type_mapper.get_built_in_type("Int")
        replaced = replace_tc(ListComposer(string_tc), lambda tc: int_tc if tc is string_tc else tc)
        assert replaced.get_type_name() == "[Int]"


class TestThunkComposer:
    """Tests for deferred type references."""

    def test_thunk_runs_once(self, string_tc):
        calls = []

        def thunk():
            calls.append(1)
            return string_tc

        ref = ThunkComposer(thunk)
        assert not ref.is_resolved()
        assert ref.of_type is string_tc
        assert ref.get_type() is GraphQLString
        assert ref.of_type is string_tc
        assert len(calls) == 1
        assert ref.is_resolved()

    def test_memoized_result_ignores_later_registry_changes(self, sc):
        first = sc.create_object_tc("First")
        ref = ThunkComposer(lambda: sc.get("Target"), "Target")
        sc.set("Target", first)
        assert ref.of_type is first
        sc.set("Target", sc.create_object_tc("Second"))
        assert ref.of_type is first

    def test_name_hint_does_not_force(self):
        ref = ThunkComposer(lambda: 1 / 0, "Later")
        assert ref.get_type_name() == "Later"
        assert not ref.is_resolved()

    def test_failing_thunk(self):
        ref = ThunkComposer(lambda: 1 / 0, "Broken")
        with pytest.raises(MalformedDefinitionError, match="Broken"):
            ref.get_type()

    def test_empty_result(self):
        with pytest.raises(NotFoundError):
            ThunkComposer(lambda: None, "Empty").get_type()

    def test_non_composer_result(self):
        with pytest.raises(WrongKindError):
            ThunkComposer(lambda: "String", "Str").get_type()

    def test_compose_errors_pass_through(self, sc):
        ref = ThunkComposer(lambda: sc.get("Missing"), "Missing")
        with pytest.raises(NotFoundError, match="'Missing' does not exist"):
            ref.get_type()
