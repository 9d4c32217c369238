"""Tests for TypeMapper: definition conversion and SDL parsing."""

import pytest
from graphql import GraphQLInt, GraphQLList, GraphQLNonNull, GraphQLString

from gql_compose.core.errors import MalformedDefinitionError, NotFoundError, OwnershipError, WrongKindError
from gql_compose.core.object_type import ObjectTypeComposer
from gql_compose.core.schema_composer import SchemaComposer
from gql_compose.core.type_mapper import TypeMapper
from gql_compose.core.wrappers import ListComposer, NonNullComposer, ThunkComposer


@pytest.fixture
def sc():
    return SchemaComposer()


@pytest.fixture
def tm(sc):
    return sc.type_mapper


class TestConvertTypeDefinitions:
    """Tests for output and input type conversion."""

    def test_requires_schema_composer(self):
        with pytest.raises(OwnershipError):
            TypeMapper(object())

    def test_wrapped_type_name(self, tm):
        tc = tm.convert_output_type_definition("[Int!]!")
        assert isinstance(tc, NonNullComposer)
        assert tc.get_type_name() == "[Int!]!"
        gq_type = tc.get_type()
        assert isinstance(gq_type, GraphQLNonNull)
        assert isinstance(gq_type.of_type, GraphQLList)
        assert str(gq_type) == "[Int!]!"

    def test_graphql_type(self, tm):
        tc = tm.convert_output_type_definition(GraphQLString)
        assert tc.get_type() is GraphQLString
        assert tm.convert_output_type_definition(GraphQLString) is tc

    def test_single_element_list(self, tm):
        tc = tm.convert_output_type_definition(["String"])
        assert isinstance(tc, ListComposer)
        assert tc.get_type_name() == "[String]"

    def test_list_with_many_elements(self, tm):
        with pytest.raises(MalformedDefinitionError):
            tm.convert_output_type_definition(["String", "Int"])

    def test_callable_becomes_thunk(self, tm):
        tc = tm.convert_output_type_definition(lambda: "Int")
        assert isinstance(tc, ThunkComposer)
        assert tc.get_type() is GraphQLInt

    def test_input_sdl_as_output(self, tm):
        with pytest.raises(WrongKindError):
            tm.convert_output_type_definition("input Filter { a: Int }")

    def test_output_sdl_as_input(self, tm):
        with pytest.raises(WrongKindError):
            tm.convert_input_type_definition("type User { a: Int }")

    def test_object_composer_as_input(self, sc, tm):
        with pytest.raises(WrongKindError):
            tm.convert_input_type_definition(sc.create_object_tc("User"))

    def test_unknown_value(self, tm):
        assert tm.convert_output_type_definition(42) is None

    def test_unknown_name_is_deferred(self, sc, tm):
        tc = tm.convert_output_type_definition("Later")
        assert isinstance(tc, ThunkComposer)
        assert tc.get_type_name() == "Later"
        with pytest.raises(NotFoundError):
            tc.get_type()

    def test_resolver_as_type(self, sc, tm):
        resolver = sc.create_resolver({"name": "findMany", "type": "[String]"})
        assert tm.convert_output_type_definition(resolver).get_type_name() == "String"


class TestConvertFieldConfigs:
    """Tests for field, argument and enum value configs."""

    def test_field_from_type_name(self, tm):
        assert tm.convert_output_field_config("Int")["type"].get_type_name() == "Int"

    def test_field_from_dict(self, tm):
        config = tm.convert_output_field_config(
            {"type": "String", "args": {"limit": {"type": "Int", "default_value": 10}}, "description": "Name"}
        )
        assert config["description"] == "Name"
        assert config["args"]["limit"]["default_value"] == 10
        assert config["args"]["limit"]["type"].get_type_name() == "Int"

    def test_field_without_type(self, tm):
        with pytest.raises(MalformedDefinitionError, match="should contain 'type' property"):
            tm.convert_output_field_config({"description": "no type"}, "name", "User")

    def test_empty_field(self, tm):
        with pytest.raises(MalformedDefinitionError) as exc_info:
            tm.convert_output_field_config(None, "name", "User")
        assert exc_info.value.path == "User.name"

    def test_field_from_resolver(self, sc, tm):
        resolver = sc.create_resolver({"name": "count", "type": "Int", "args": {"min": "Int"}, "description": "Count"})
        config = tm.convert_output_field_config(resolver)
        assert config["type"].get_type_name() == "Int"
        assert list(config["args"]) == ["min"]
        assert config["description"] == "Count"
        assert callable(config["resolve"])

    def test_deprecation_reason_adds_directive(self, tm):
        config = tm.convert_output_field_config({"type": "Int", "deprecation_reason": "old"})
        assert config["directives"] == [{"name": "deprecated", "args": {"reason": "old"}}]

    def test_deprecated_directive_sets_reason(self, tm):
        config = tm.convert_output_field_config(
            {"type": "Int", "directives": [{"name": "deprecated", "args": {"reason": "gone"}}]}
        )
        assert config["deprecation_reason"] == "gone"

    def test_enum_value_defaults_to_name(self, tm):
        assert tm.convert_enum_value_config(None, "RED")["value"] == "RED"
        assert tm.convert_enum_value_config({"value": 1}, "RED")["value"] == 1
        with pytest.raises(MalformedDefinitionError):
            tm.convert_enum_value_config("RED", "RED")


class TestParseSDL:
    """Tests for SDL document parsing."""

    def test_parse_types_from_string(self, sc, tm):
        types = tm.parse_types_from_string("type A { b: B } type B { a: A } enum C { X }")
        assert list(types.keys()) == ["A", "B", "C"]
        assert sc.get("A") is types.get("A")
        assert sc.get_otc("A").get_field_tc("b") is sc.get_otc("B")

    def test_syntax_error(self, tm):
        with pytest.raises(MalformedDefinitionError, match="correct SDL syntax"):
            tm.parse_types_from_string("type {")

    def test_arguments_and_defaults(self, sc, tm):
        tm.parse_types_from_string('type Query { users(limit: Int = 10, order: String = "asc"): [String] }')
        args = sc.get_otc("Query").get_field_args("users")
        assert args["limit"]["default_value"] == 10
        assert args["order"]["default_value"] == "asc"

    def test_descriptions(self, sc, tm):
        tm.parse_types_from_string('"A user" type User { "The id" id: ID }')
        user = sc.get_otc("User")
        assert user.get_description() == "A user"
        assert user.get_field("id")["description"] == "The id"

    def test_schema_definition_with_valid_names(self, tm):
        types = tm.parse_types_from_string("schema { query: Query } type Query { a: Int }")
        assert list(types.keys()) == ["Query"]

    def test_schema_definition_with_custom_root_name(self, tm):
        with pytest.raises(MalformedDefinitionError, match="Incorrect type name"):
            tm.parse_types_from_string("schema { query: RootQuery } type RootQuery { a: Int }")

    def test_directive_definition(self, sc, tm):
        tm.parse_types_from_string(
            'directive @auth(role: String = "admin") on FIELD_DEFINITION\n'
            "type Secret { value: String @auth }"
        )
        assert sc.has_directive("auth")
        assert sc.get_otc("Secret").get_field_directives("value") == [{"name": "auth", "args": {"role": "admin"}}]

    def test_unknown_directive_keeps_literal_args(self, sc, tm):
        tm.parse_types_from_string('type Item @key(fields: "id") { id: ID }')
        assert sc.get_otc("Item").get_directives() == [{"name": "key", "args": {"fields": "id"}}]

    def test_extension_adds_fields(self, sc, tm):
        tm.parse_types_from_string("type User { id: ID }")
        tm.parse_types_from_string("extend type User { name: String }")
        assert sc.get_otc("User").get_field_names() == ["id", "name"]

    def test_extension_before_definition(self, sc, tm):
        tm.parse_types_from_string(
            """
            extend type User { age: Int }
            type User { id: ID! }
            extend enum Role { ADMIN }
            enum Role { USER }
            """
        )
        user = sc.get_otc("User")
        assert isinstance(user, ObjectTypeComposer)
        assert user.get_field_names() == ["id", "age"]
        assert sc.get_etc("Role").get_field_names() == ["USER", "ADMIN"]

    def test_extend_union_and_input(self, sc, tm):
        tm.parse_types_from_string(
            """
            type A { a: Int }
            type B { b: Int }
            union AB = A
            extend union AB = B
            input Filter { a: Int }
            extend input Filter { b: Int }
            """
        )
        assert sc.get_utc("AB").get_type_names() == ["A", "B"]
        assert sc.get_itc("Filter").get_field_names() == ["a", "b"]

    def test_input_field_referencing_later_enum(self, sc, tm):
        tm.parse_types_from_string("input Filter { role: Role = ADMIN } enum Role { ADMIN USER }")
        assert sc.get_itc("Filter").get_type().fields["role"].default_value == "ADMIN"

    def test_output_type_in_input_position(self, sc, tm):
        tm.parse_types_from_string("type User { id: ID }")
        with pytest.raises(WrongKindError):
            tm.parse_types_from_string("input Filter { user: User }")
