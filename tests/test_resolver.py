"""Tests for Resolver."""

import asyncio
import logging

import pytest
from graphql import GraphQLInt, GraphQLList, GraphQLString, graphql_sync

from gql_compose.core.errors import (
    DuplicateOrInvalidNameError,
    MalformedDefinitionError,
    NotFoundError,
    OwnershipError,
    WrongKindError,
)
from gql_compose.core.resolver import Resolver, ResolveParams
from gql_compose.core.schema_composer import SchemaComposer


@pytest.fixture
def sc():
    return SchemaComposer()


@pytest.fixture
def find_many(sc):
    sc.create_object_tc("type User { id: ID name: String }")
    return sc.create_resolver(
        {
            "name": "findMany",
            "type": "[User]",
            "args": {"limit": "Int", "skip": "Int"},
            "resolve": lambda rp: rp.raw_query,
        }
    )


class TestCreate:
    """Tests for resolver construction."""

    def test_requires_schema_composer(self):
        with pytest.raises(OwnershipError):
            Resolver({"name": "x"}, object())

    def test_requires_name(self, sc):
        with pytest.raises(MalformedDefinitionError):
            Resolver({}, sc)

    def test_type(self, find_many, sc):
        assert find_many.get_type_name() == "[User]"
        assert isinstance(find_many.get_type(), GraphQLList)
        assert find_many.get_otc() is sc.get_otc("User")

    def test_default_type_is_json(self, sc):
        resolver = sc.create_resolver({"name": "anything"})
        assert resolver.get_type_name() == "JSON"

    def test_get_otc_for_scalar(self, sc):
        resolver = sc.create_resolver({"name": "count", "type": "Int"})
        with pytest.raises(WrongKindError):
            resolver.get_otc()

    def test_kind(self, sc):
        assert sc.create_resolver({"name": "x", "kind": "mutation"}).get_kind() == "mutation"
        with pytest.raises(WrongKindError):
            sc.create_resolver({"name": "x", "kind": "delete"})


class TestArgs:
    """Tests for argument management."""

    def test_arg_lookup(self, find_many):
        assert find_many.get_arg_names() == ["limit", "skip"]
        assert find_many.get_arg_type("limit") is GraphQLInt
        with pytest.raises(NotFoundError):
            find_many.get_arg("missing")

    def test_add_remove_and_reorder(self, find_many):
        find_many.add_args({"sort": "String"})
        find_many.reorder_args(["sort", "skip"])
        assert find_many.get_arg_names() == ["sort", "skip", "limit"]
        find_many.remove_arg("sort")
        find_many.remove_other_args("limit")
        assert find_many.get_arg_names() == ["limit"]

    def test_extend_arg(self, find_many):
        find_many.extend_arg("limit", {"default_value": 20})
        assert find_many.get_arg_config("limit").default_value == 20
        with pytest.raises(NotFoundError):
            find_many.extend_arg("missing", {"default_value": 1})

    def test_lazy_arg(self, find_many):
        find_many.set_arg("after", lambda: "String")
        assert find_many.get_arg_type_name("after") == "String"

    def test_non_null_and_plural(self, find_many):
        find_many.make_arg_non_null("limit")
        assert find_many.is_arg_non_null("limit")
        assert find_many.get_arg_type_name("limit") == "Int!"
        find_many.make_arg_nullable("limit")
        assert not find_many.is_arg_non_null("limit")

        find_many.make_arg_plural("skip")
        assert find_many.is_arg_plural("skip")
        find_many.make_arg_non_plural("skip")
        assert find_many.get_arg_type_name("skip") == "Int"

    def test_get_arg_itc(self, sc, find_many):
        sc.create_input_tc("input UserFilter { name: String }")
        find_many.set_arg("filter", "UserFilter")
        assert find_many.get_arg_itc("filter").get_type_name() == "UserFilter"
        with pytest.raises(WrongKindError):
            find_many.get_arg_itc("limit")

    def test_clone_arg(self, sc, find_many):
        sc.create_input_tc("input UserFilter { name: String }")
        find_many.set_arg("filter", "[UserFilter!]")
        cloned = find_many.wrap_clone_arg("filter", "AdminFilter")
        assert cloned.get_arg_type_name("filter") == "[AdminFilter!]"
        assert find_many.get_arg_type_name("filter") == "[UserFilter!]"
        assert cloned.get_nested_name() == "cloneFilterArg(findMany)"

    def test_clone_arg_errors(self, sc, find_many):
        sc.create_input_tc("input UserFilter { name: String }")
        find_many.set_arg("filter", "UserFilter")
        with pytest.raises(NotFoundError):
            find_many.clone_arg("missing", "Other")
        with pytest.raises(WrongKindError):
            find_many.clone_arg("limit", "Other")
        with pytest.raises(DuplicateOrInvalidNameError):
            find_many.clone_arg("filter", "UserFilter")


class TestFilterArg:
    """Tests for add_filter_arg()."""

    def test_creates_filter_type(self, sc, find_many):
        resolver = find_many.add_filter_arg(
            {"name": "age", "type": "Int", "default_value": 18, "filter_type_name_fallback": "FilterInput"}
        )
        assert resolver is not find_many
        assert not find_many.has_arg("filter")
        assert sc.get_itc("FilterInput").get_field_type_name("age") == "Int"
        assert resolver.get_arg("filter")["default_value"] == {"age": 18}
        assert resolver.get_nested_name() == "addFilterArg(findMany)"

    def test_chained_defaults_merge(self, find_many):
        first = find_many.add_filter_arg(
            {"name": "age", "type": "Int", "default_value": 18, "filter_type_name_fallback": "FilterInput"}
        )
        second = first.add_filter_arg({"name": "active", "type": "Boolean", "default_value": True})
        assert second.get_arg("filter")["default_value"] == {"age": 18, "active": True}
        assert first.get_arg("filter")["default_value"] == {"age": 18}
        assert second.get_arg_itc("filter").get_field_names() == ["age", "active"]
        assert second.get_nested_name() == "addFilterArg(addFilterArg(findMany))"

    def test_requires_fallback_name(self, find_many):
        with pytest.raises(DuplicateOrInvalidNameError):
            find_many.add_filter_arg({"name": "age", "type": "Int"})

    def test_existing_filter_must_be_input_type(self, sc):
        resolver = sc.create_resolver({"name": "findMany", "type": "String", "args": {"filter": "String"}})
        with pytest.raises(WrongKindError, match="InputObjectType"):
            resolver.add_filter_arg({"name": "age", "type": "Int", "filter_type_name_fallback": "FilterInput"})
        assert not sc.has("FilterInput")

    def test_reuses_existing_filter_type(self, sc):
        existing = sc.create_input_tc("input UserFilter { name: String }")
        resolver = sc.create_resolver({"name": "findMany", "type": "String", "args": {"filter": "UserFilter"}})
        wrapped = resolver.add_filter_arg({"name": "age", "type": "Int", "filter_type_name_fallback": "FilterInput"})
        assert wrapped.get_arg_itc("filter") is existing
        assert existing.get_field_names() == ["name", "age"]
        assert not sc.has("FilterInput")

    def test_requires_type(self, find_many):
        with pytest.raises(MalformedDefinitionError):
            find_many.add_filter_arg({"name": "age", "filter_type_name_fallback": "FilterInput"})

    def test_query_builds_raw_query(self, find_many):
        def query(raw_query, value, rp):
            raw_query["age"] = {"$gt": value}

        resolver = find_many.add_filter_arg(
            {"name": "age", "type": "Int", "query": query, "filter_type_name_fallback": "FilterInput"}
        )
        resolve = resolver.get_resolve()
        assert resolve(ResolveParams(args={"filter": {"age": 18}})) == {"age": {"$gt": 18}}
        assert resolve(ResolveParams(args={})) is None

    def test_async_query(self, find_many):
        async def query(raw_query, value, rp):
            raw_query["name"] = value

        resolver = find_many.add_filter_arg(
            {"name": "name", "type": "String", "query": query, "filter_type_name_fallback": "FilterInput"}
        )
        result = asyncio.run(resolver.get_resolve()(ResolveParams(args={"filter": {"name": "Ann"}})))
        assert result == {"name": "Ann"}


class TestSortArg:
    """Tests for add_sort_arg()."""

    def test_static_value(self, sc, find_many):
        resolver = find_many.add_sort_arg({"name": "ID_ASC", "value": {"_id": 1}, "sort_type_name_fallback": "SortEnum"})
        assert sc.get_etc("SortEnum").get_type().values["ID_ASC"].value == {"_id": 1}
        assert resolver.get_nested_name() == "addSortArg(findMany)"

    def test_computed_value(self, sc):
        def newest(rp):
            return {"created_at": -1}

        base = sc.create_resolver({"name": "findMany", "type": "JSON", "resolve": lambda rp: rp.args.get("sort")})
        resolver = base.add_sort_arg({"name": "NEWEST", "value": newest, "sort_type_name_fallback": "SortEnum"})
        assert sc.get_etc("SortEnum").get_type().values["NEWEST"].value == "NEWEST"
        assert resolver.get_resolve()(ResolveParams(args={"sort": "NEWEST"})) == {"created_at": -1}

    def test_computed_value_through_schema(self, sc):
        def newest(rp):
            return "created_at desc"

        base = sc.create_resolver({"name": "sorted", "type": "String", "resolve": lambda rp: rp.args.get("sort")})
        sc.query.add_fields(
            {"sorted": base.add_sort_arg({"name": "NEWEST", "value": newest, "sort_type_name_fallback": "SortEnum"})}
        )
        result = graphql_sync(sc.build_schema(), "{ sorted(sort: NEWEST) }")
        assert result.errors is None
        assert result.data == {"sorted": "created_at desc"}

    def test_requires_fallback_name(self, find_many):
        with pytest.raises(DuplicateOrInvalidNameError):
            find_many.add_sort_arg({"name": "ID_ASC", "value": 1})

    def test_sort_arg_must_be_enum(self, find_many):
        with pytest.raises(WrongKindError):
            find_many.add_args({"sort": "String"}).add_sort_arg({"name": "ID_ASC", "value": 1})


class TestComposition:
    """Tests for wrap helpers and middlewares."""

    def test_middleware_order(self, sc):
        calls = []

        def mw1(resolve, source, args, context, info):
            calls.append("mw1")
            return resolve(source, {**args, "limit": 5}, context, info)

        def mw2(resolve, source, args, context, info):
            calls.append("mw2")
            return resolve(source, args, context, info)

        base = sc.create_resolver({"name": "findMany", "resolve": lambda rp: rp.args["limit"]})
        resolver = base.with_middlewares([mw1, mw2])
        assert resolver.get_resolve()(ResolveParams(args={"limit": 1})) == 5
        assert calls == ["mw1", "mw2"]
        assert resolver.get_nested_name() == "mw1(mw2(findMany))"

    def test_middlewares_must_be_list(self, find_many):
        with pytest.raises(MalformedDefinitionError):
            find_many.with_middlewares(lambda *a: None)

    def test_wrap_callback(self, find_many):
        def add_description(new_resolver, prev_resolver):
            new_resolver.set_description(f"Wrapped {prev_resolver.name}")

        resolver = find_many.wrap(add_description)
        assert resolver.get_description() == "Wrapped findMany"
        assert resolver.parent is find_many
        assert find_many.get_description() is None

    def test_wrap_resolve(self, find_many):
        def double_limit(next_resolve):
            def resolve(rp):
                return rp.args["limit"] * 2

            return resolve

        resolver = find_many.wrap_resolve(double_limit)
        assert resolver.get_resolve()(ResolveParams(args={"limit": 3})) == 6
        assert resolver.get_nested_name() == "wrapResolve(findMany)"

    def test_wrap_args(self, find_many):
        resolver = find_many.wrap_args(lambda args: {**args, "after": "String"})
        assert resolver.get_arg_names() == ["limit", "skip", "after"]
        assert find_many.get_arg_names() == ["limit", "skip"]

    def test_wrap_type(self, find_many):
        resolver = find_many.wrap_type(lambda prev: "User!")
        assert resolver.get_type_name() == "User!"
        assert find_many.get_type_name() == "[User]"

    def test_clone(self, find_many):
        cloned = find_many.clone(name="findAll")
        cloned.remove_arg("skip")
        assert cloned.name == "findAll"
        assert find_many.has_arg("skip")

    def test_clone_to(self, find_many):
        other = SchemaComposer()
        cloned = find_many.clone_to(other)
        assert cloned.schema_composer is other
        assert cloned.get_otc() is other.get_otc("User")
        assert cloned.get_otc() is not find_many.get_otc()


class TestFieldConfig:
    """Tests for graphql-core field configs."""

    def test_get_field_config(self, sc):
        resolver = sc.create_resolver(
            {
                "name": "greet",
                "type": "String",
                "args": {"name": {"type": "String", "default_value": "world"}},
                "description": "Says hello",
                "resolve": lambda rp: f"Hello, {rp.args['name']}!",
            }
        )
        config = resolver.get_field_config()
        assert config["type"] is GraphQLString
        assert config["args"]["name"].default_value == "world"
        assert config["description"] == "Says hello"
        assert config["resolve"](None, None, name="Ann") == "Hello, Ann!"

    def test_field_resolver_params(self, sc):
        captured = {}

        def resolve(rp):
            captured["rp"] = rp
            return rp.source["value"]

        resolver = sc.create_resolver({"name": "value", "type": "Int", "resolve": resolve})
        field_resolve = resolver.get_field_resolver({"extra": {}})
        assert field_resolve({"value": 7}, None, limit=1) == 7
        rp = captured["rp"]
        assert rp.args == {"limit": 1}
        assert rp.context is None
        assert rp.projection == {"extra": {}}


class TestDebug:
    """Tests for the debug helpers."""

    def test_debug_payload(self, sc, caplog):
        caplog.set_level(logging.INFO, logger="gql_compose.core.resolver")
        resolver = sc.create_resolver({"name": "findMany", "resolve": lambda rp: [1, 2]}).debug_payload()
        assert resolver.get_resolve()(ResolveParams()) == [1, 2]
        assert "Resolved payload for findMany: [1, 2]" in caplog.text

    def test_debug_payload_hides_long_lists(self, sc, caplog):
        caplog.set_level(logging.INFO, logger="gql_compose.core.resolver")
        resolver = sc.create_resolver({"name": "findMany", "resolve": lambda rp: [1, 2, 3, 4]}).debug_payload()
        resolver.get_resolve()(ResolveParams())
        assert "Other 3 records was [[hidden]]" in caplog.text

    def test_debug_payload_logs_rejection(self, sc, caplog):
        def fail(rp):
            raise RuntimeError("boom")

        caplog.set_level(logging.INFO, logger="gql_compose.core.resolver")
        resolver = sc.create_resolver({"name": "findMany", "resolve": fail}).debug_payload()
        with pytest.raises(RuntimeError):
            resolver.get_resolve()(ResolveParams())
        assert "Rejected payload for findMany" in caplog.text

    def test_debug_params_hides_context(self, sc, caplog):
        caplog.set_level(logging.DEBUG, logger="gql_compose.core.resolver")
        resolver = sc.create_resolver({"name": "findMany", "resolve": lambda rp: None}).debug_params()
        resolver.get_resolve()(ResolveParams(args={"limit": 2}, context={"secret": "x"}))
        assert "ResolveParams for findMany" in caplog.text
        assert "'limit': 2" in caplog.text
        assert "secret" not in caplog.text

    def test_debug_exec_time(self, sc, caplog):
        caplog.set_level(logging.INFO, logger="gql_compose.core.resolver")
        resolver = sc.create_resolver({"name": "findMany", "resolve": lambda rp: 1}).debug_exec_time()
        assert resolver.get_resolve()(ResolveParams()) == 1
        assert "Execution time for findMany" in caplog.text

    def test_debug_chain(self, sc):
        resolver = sc.create_resolver({"name": "findMany"}).debug()
        assert resolver.get_nested_name() == "debugPayload(debugParams(debugExecTime(findMany)))"

    def test_debug_structure(self, find_many):
        structure = find_many.add_filter_arg(
            {"name": "age", "type": "Int", "filter_type_name_fallback": "FilterInput"}
        ).to_debug_structure()
        assert structure["name"] == "addFilterArg"
        assert structure["resolve"][1]["Parent resolver"]["name"] == "findMany"
