"""Tests for SchemaComposer."""

import logging

import pytest
from graphql import (
    DirectiveLocation,
    GraphQLDirective,
    GraphQLField,
    GraphQLInt,
    GraphQLNonNull,
    GraphQLObjectType,
    build_schema,
    graphql_sync,
)

from gql_compose.core.enum_type import EnumTypeComposer
from gql_compose.core.errors import MalformedDefinitionError, NotFoundError, WrongKindError
from gql_compose.core.object_type import ObjectTypeComposer
from gql_compose.core.schema_composer import SchemaComposer


@pytest.fixture
def sc():
    return SchemaComposer()


class TestConstruction:
    """Tests for creating a SchemaComposer from existing schemas."""

    def test_from_sdl(self):
        sc = SchemaComposer("type Query { me: User } type User { id: ID }")
        assert sc.query.get_field_type_name("me") == "User"
        assert sc.get_otc("User").get_field_names() == ["id"]

    def test_from_bad_sdl(self):
        with pytest.raises(MalformedDefinitionError):
            SchemaComposer("type Query {")

    def test_from_schema_with_custom_root(self):
        schema = build_schema("schema { query: Root } type Root { ping: String }")
        sc = SchemaComposer(schema)
        assert sc.query.get_type_name() == "Root"
        assert sc.query.get_field_names() == ["ping"]

    def test_root_properties(self, sc):
        assert sc.query.get_type_name() == "Query"
        assert sc.query is sc.get_otc("Query")
        assert sc.mutation.get_type_name() == "Mutation"
        assert sc.subscription.get_type_name() == "Subscription"


class TestBuildSchema:
    """Tests for build_schema()."""

    def test_requires_query(self, sc):
        with pytest.raises(NotFoundError, match="NoRootType"):
            sc.build_schema()

    def test_executes(self, sc):
        sc.query.add_fields({"hello": {"type": "String", "resolve": lambda source, info: "world"}})
        result = graphql_sync(sc.build_schema(), "{ hello }")
        assert result.data == {"hello": "world"}

    def test_empty_mutation_omitted(self, sc):
        sc.query.add_fields({"a": "Int"})
        assert sc.mutation.get_field_names() == []
        schema = sc.build_schema()
        assert schema.mutation_type is None

    def test_mutation_included(self, sc):
        sc.query.add_fields({"a": "Int"})
        sc.mutation.add_fields({"ping": "Boolean"})
        assert sc.build_schema().mutation_type.name == "Mutation"

    def test_removes_empty_types_with_cycles(self, sc, caplog):
        caplog.set_level(logging.INFO, logger="gql_compose.core.schema_composer")
        sc.add_type_defs(
            """
            type A { b: B }
            type B { a: A name: String }
            """
        )
        sc.create_object_tc("Empty")
        sc.query.add_fields({"a": "A", "empty": "Empty"})
        schema = sc.build_schema()
        assert sc.query.get_field_names() == ["a"]
        assert "Empty" not in schema.type_map
        assert set(schema.type_map["B"].fields) == {"a", "name"}
        assert "Deleting field Query.empty" in caplog.text

    def test_removes_self_referencing_type(self, sc):
        sc.add_type_defs("type A { a: A }")
        sc.query.add_fields({"a": "A", "ok": "String"})
        schema = sc.build_schema()
        assert sc.query.get_field_names() == ["ok"]
        assert "A" not in schema.type_map

    def test_removes_cycle_without_own_fields(self, sc):
        sc.add_type_defs("type A { b: B } type B { a: A }")
        sc.query.add_fields({"a": "A", "ok": "String"})
        sc.build_schema()
        assert sc.query.get_field_names() == ["ok"]

    def test_keeps_type_filled_through_cycle(self, sc):
        sc.add_type_defs("type A { b: B n: Int } type B { a: A }")
        sc.query.add_fields({"a": "A"})
        schema = sc.build_schema()
        assert sc.query.get_field_names() == ["a"]
        assert set(schema.type_map["B"].fields) == {"a"}

    def test_unused_types(self, sc):
        sc.query.add_fields({"a": "Int"})
        sc.create_object_tc("type Orphan { id: ID }")
        assert "Orphan" not in sc.build_schema().type_map
        assert "Orphan" in sc.build_schema({"keep_unused_types": True}).type_map

    def test_must_have_types(self, sc):
        sc.query.add_fields({"a": "Int"})
        sc.create_object_tc("type Orphan { id: ID }")
        sc.add_schema_must_have_type("Orphan")
        assert "Orphan" in sc.build_schema().type_map

    def test_extra_types_option(self, sc):
        sc.query.add_fields({"a": "Int"})
        extra = sc.create_enum_tc("enum Extra { A }")
        schema = sc.build_schema({"types": [extra], "description": "Test schema"})
        assert "Extra" in schema.type_map
        assert schema.description == "Test schema"

    def test_invalid_options(self, sc):
        sc.query.add_fields({"a": "Int"})
        with pytest.raises(MalformedDefinitionError):
            sc.build_schema({"unknown_option": True})


class TestRegistry:
    """Tests for factories, lookups and kind checks."""

    def test_create_tc_from_graphql_type(self, sc):
        point = GraphQLObjectType("Point", {"x": GraphQLField(GraphQLInt)})
        tc = sc.create_tc(point)
        assert isinstance(tc, ObjectTypeComposer)
        assert sc.get("Point") is tc
        assert sc.get(point) is tc
        assert tc.get_field_type_name("x") == "Int"
        assert sc.create_tc(point) is tc

    def test_create_tc_from_sdl(self, sc):
        tc = sc.create_tc("enum Role { ADMIN USER }")
        assert isinstance(tc, EnumTypeComposer)
        assert sc.get("Role") is tc

    def test_add_returns_name(self, sc):
        assert sc.add("type User { id: ID }") == "User"
        assert sc.has("User")

    def test_create_temp_tc(self, sc):
        tc = sc.create_temp_tc(GraphQLObjectType("Temp", {"x": GraphQLField(GraphQLInt)}))
        assert isinstance(tc, ObjectTypeComposer)
        assert not sc.has("Temp")
        with pytest.raises(MalformedDefinitionError):
            sc.create_temp_tc(42)

    def test_get_or_create(self, sc):
        sc.create_enum_tc("enum Role { A }")
        assert sc.get_or_create_etc("Role") is sc.get("Role")
        with pytest.raises(WrongKindError):
            sc.get_or_create_otc("Role")
        created = sc.get_or_create_otc("Point", lambda tc: tc.add_fields({"x": "Int"}))
        assert created.get_field_names() == ["x"]
        assert sc.get_or_create_otc("Point", lambda tc: tc.add_fields({"y": "Int"})) is created
        assert created.get_field_names() == ["x"]

    def test_get_of_kind(self, sc):
        sc.create_enum_tc("enum Role { A }")
        with pytest.raises(NotFoundError):
            sc.get_otc("Missing")
        with pytest.raises(NotFoundError):
            sc.get_otc("Role")
        assert sc.get_etc("Role").get_type_name() == "Role"

    def test_get_any_tc(self, sc):
        user = sc.create_object_tc("type User { id: ID }")
        assert sc.get_any_tc("User") is user
        assert sc.get_any_tc(GraphQLNonNull(user.get_type())) is user
        assert sc.get_any_tc(user.get_type_plural()) is user
        with pytest.raises(NotFoundError):
            sc.get_any_tc(42)

    def test_kind_checks(self, sc):
        sc.create_enum_tc("enum Role { A }")
        sc.create_object_tc("type User { id: ID }")
        assert sc.is_object_type("type Point { x: Int }")
        assert sc.is_object_type("User")
        assert sc.is_enum_type("Role")
        assert not sc.is_object_type("Role")
        assert not sc.is_object_type("Missing")
        assert not sc.is_object_type(sc.get_etc("Role"))
        assert sc.is_input_object_type("input Filter { a: Int }")
        assert sc.is_scalar_type("scalar Money")
        assert sc.is_interface_type("interface Node { id: ID }")
        assert sc.is_union_type("union U = User")

    def test_clear(self, sc):
        sc.create_object_tc("type User { id: ID }")
        sc.clear()
        assert not sc.has("User")


class TestTypeDefs:
    """Tests for add_type_defs() and resolve method maps."""

    def test_add_type_defs_returns_types(self, sc):
        types = sc.add_type_defs("type User { id: ID } enum Role { A }")
        assert list(types.keys()) == ["User", "Role"]

    def test_add_type_defs_keeps_existing_roots(self, sc):
        sc.query.add_fields({"a": "Int"})
        root = sc.query
        sc.add_type_defs("type Query { b: Int } type Mutation { ping: Boolean }")
        assert sc.query is root
        assert root.get_field_names() == ["a", "b"]
        assert sc.mutation.get_field_names() == ["ping"]

    def test_resolve_methods_end_to_end(self, sc):
        def hello(source, info, name="world"):
            return f"Hello, {name}!"

        sc.add_type_defs("type Query { hello(name: String): String }")
        sc.add_resolve_methods({"Query": {"hello": hello}})
        result = graphql_sync(sc.build_schema(), '{ hello(name: "Ann") }')
        assert result.errors is None
        assert result.data == {"hello": "Hello, Ann!"}
        assert sc.get_resolve_methods() == {"Query": {"hello": hello}}
        assert sc.get_resolve_methods(exclude=["Query"]) == {}

    def test_resolve_methods_for_unknown_kind(self, sc):
        sc.add_type_defs("input Filter { a: Int }")
        with pytest.raises(WrongKindError):
            sc.add_resolve_methods({"Filter": {"a": lambda source, info: 1}})


class TestComposeSchemas:
    """Tests for clone() and merge()."""

    def test_clone_is_independent(self, sc):
        sc.add_type_defs("type User { id: ID } type Query { me: User }")
        cloned = sc.clone()
        cloned.get_otc("User").add_fields({"name": "String"})
        assert not sc.get_otc("User").has_field("name")
        assert cloned.get_otc("User") is not sc.get_otc("User")
        assert cloned.query.get_field_tc("me") is cloned.get_otc("User")

    def test_merge_composers(self):
        sc1 = SchemaComposer("type User { id: ID } type Query { users: [User] }")
        sc2 = SchemaComposer("type User { name: String } type Query { me: User }")
        sc1.merge(sc2)
        assert set(sc1.query.get_field_names()) == {"users", "me"}
        assert sc1.get_otc("User").get_field_names() == ["id", "name"]
        assert sc1.query.get_field_tc("me") is sc1.get_otc("User")
        assert sc1.query.get_field_tc("users") is sc1.get_otc("User")
        assert sc2.get_otc("User").get_field_names() == ["name"]

    def test_merge_graphql_schema(self, sc):
        sc.query.add_fields({"a": "Int"})
        sc.merge(build_schema("type Query { ping: String }"))
        assert sc.query.get_field_names() == ["a", "ping"]

    def test_merge_wrong_value(self, sc):
        with pytest.raises(WrongKindError):
            sc.merge("type Query { a: Int }")


class TestDirectives:
    """Tests for directive management."""

    def test_directive_crud(self, sc):
        cache = GraphQLDirective("cache", locations=[DirectiveLocation.FIELD_DEFINITION])
        sc.add_directive(cache).add_directive(cache)
        assert sc.has_directive("@cache")
        assert sc.has_directive(cache)
        assert sc.get_directive("cache") is cache
        assert [d.name for d in sc.get_directives()].count("cache") == 1
        sc.remove_directive("cache")
        assert not sc.has_directive("cache")
        with pytest.raises(NotFoundError):
            sc.get_directive("cache")

    def test_specified_directives_present(self, sc):
        assert sc.has_directive("deprecated")
        assert sc.has_directive("skip")
        assert not sc.has_directive(None)

    def test_add_wrong_value(self, sc):
        with pytest.raises(WrongKindError):
            sc.add_directive("cache")


class TestSDL:
    """Tests for SDL printing."""

    @pytest.fixture
    def populated(self, sc):
        sc.add_type_defs(
            """
            directive @cache on FIELD_DEFINITION
            input UserInput { id: ID }
            type User { id: ID role: Role }
            enum Role { ADMIN }
            scalar Money
            type Query { me: User }
            """
        )
        return sc

    def test_order(self, populated):
        sdl = populated.to_sdl()
        positions = [
            sdl.index(part)
            for part in (
                "directive @cache on FIELD_DEFINITION",
                "type Query {",
                "scalar Money",
                "enum Role {",
                "type User {",
                "input UserInput {",
            )
        ]
        assert positions == sorted(positions)
        assert "scalar ID" not in sdl

    def test_exclude(self, populated):
        sdl = populated.to_sdl(exclude=["User"])
        assert "type User {" not in sdl
        assert "type Query {" in sdl

    def test_include(self, populated):
        sdl = populated.to_sdl(include=["User"])
        assert "type User {" in sdl
        assert "enum Role {" in sdl
        assert "type Query {" not in sdl
        assert "input UserInput {" not in sdl

    def test_get_type_sdl(self, populated):
        assert populated.get_type_sdl("Role") == "enum Role {\n  ADMIN\n}"
