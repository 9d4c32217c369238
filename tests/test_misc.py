"""Tests for the shared helpers and the error taxonomy."""

import pytest

from gql_compose.core.errors import (
    ComposeError,
    MalformedDefinitionError,
    NotFoundError,
    WrongKindError,
    error_context,
)
from gql_compose.core.misc import (
    call_if_thunk,
    clear_name,
    deepmerge,
    filter_by_dot_paths,
    get_callable_name,
    is_function,
    upper_first,
)


class TestNames:
    """Tests for name helpers."""

    def test_clear_name(self):
        assert clear_name("User-Input 2!") == "UserInput2"

    def test_upper_first(self):
        assert upper_first("address") == "Address"
        assert upper_first("") == ""

    def test_get_callable_name(self):
        def find_user():
            pass

        assert get_callable_name(find_user, "fallback") == "find_user"
        assert get_callable_name(lambda: None, "fallback") == "fallback"

    def test_is_function_excludes_classes(self):
        assert is_function(lambda: 1)
        assert not is_function(dict)
        assert not is_function("String")

    def test_call_if_thunk(self):
        assert call_if_thunk(lambda: 5) == 5
        assert call_if_thunk(5) == 5


class TestDeepmerge:
    """Tests for deepmerge()."""

    def test_merges_nested_dicts(self):
        target = {"a": {"x": 1}, "b": 2}
        src = {"a": {"y": 2}, "c": 3}
        assert deepmerge(target, src) == {"a": {"x": 1, "y": 2}, "b": 2, "c": 3}

    def test_does_not_mutate_arguments(self):
        target = {"a": {"x": 1}}
        src = {"a": {"y": 2}}
        deepmerge(target, src)
        assert target == {"a": {"x": 1}}
        assert src == {"a": {"y": 2}}

    def test_concatenates_lists_without_duplicates(self):
        assert deepmerge([1, 2], [2, 3]) == [1, 2, 3]

    def test_scalar_src_wins(self):
        assert deepmerge({"a": 1}, 5) == 5
        assert deepmerge({"a": True}, {"a": {"b": True}}) == {"a": {"b": True}}


class TestFilterByDotPaths:
    """Tests for filter_by_dot_paths()."""

    def test_pick_paths(self):
        obj = {"args": {"id": 1, "limit": 10}, "source": {"name": "x"}}
        assert filter_by_dot_paths(obj, "args.id") == {"args": {"id": 1}}

    def test_missing_paths_are_ignored(self):
        assert filter_by_dot_paths({"a": 1}, ["b.c"]) == {}

    def test_hide_paths(self):
        obj = {"args": {"id": 1}, "info": object(), "context": {}}
        assert filter_by_dot_paths(obj, None, ["info", "context"]) == {"args": {"id": 1}}

    def test_hide_does_not_touch_input(self):
        obj = {"args": {"id": 1, "limit": 10}}
        filter_by_dot_paths(obj, None, "args.limit")
        assert obj == {"args": {"id": 1, "limit": 10}}


class TestErrors:
    """Tests for the error taxonomy."""

    def test_builtin_bases(self):
        assert issubclass(NotFoundError, LookupError)
        assert issubclass(WrongKindError, TypeError)
        assert issubclass(MalformedDefinitionError, ValueError)

    def test_error_context_adds_path(self):
        with pytest.raises(NotFoundError) as exc_info:
            with error_context("User.friends"):
                raise NotFoundError("Type with name 'Friend' does not exist")
        assert exc_info.value.path == "User.friends"
        assert str(exc_info.value) == "TypeError[User.friends]: Type with name 'Friend' does not exist"

    def test_innermost_path_wins(self):
        with pytest.raises(ComposeError) as exc_info:
            with error_context("Query.user"):
                with error_context("Query.user.id"):
                    raise WrongKindError("not an input type")
        assert exc_info.value.path == "Query.user.id"

    def test_other_exceptions_pass_through(self):
        with pytest.raises(KeyError):
            with error_context("Query.user"):
                raise KeyError("x")
