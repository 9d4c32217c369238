"""Structural type references: list-of, non-null and deferred (thunk).

Wrappers form a tree around a named type composer. They expose the same
``get_type`` / ``get_type_name`` contract as named composers so a field's
``type`` slot can hold either one.
"""

from typing import Any, Callable

from graphql import GraphQLList, GraphQLNonNull

from .errors import ComposeError, MalformedDefinitionError, NotFoundError, WrongKindError
from .misc import get_callable_name


class WrapperComposer:
    """Shared behaviour of ListComposer, NonNullComposer and ThunkComposer."""

    of_type: Any

    def get_type_plural(self) -> "ListComposer":
        return ListComposer(self)

    def get_type_non_null(self) -> "NonNullComposer":
        return NonNullComposer(self)

    @property
    def List(self) -> "ListComposer":
        return self.get_type_plural()

    @property
    def NonNull(self) -> "NonNullComposer":
        return self.get_type_non_null()

    def get_unwrapped_tc(self):
        """Return the innermost named type composer."""
        tc = self
        while isinstance(tc, WrapperComposer):
            tc = tc.of_type
        return tc

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.get_type_name()}>"


class ListComposer(WrapperComposer):
    """``[of_type]``"""

    def __init__(self, of_type):
        self.of_type = of_type

    def get_type(self) -> GraphQLList:
        return GraphQLList(self.of_type.get_type())

    def get_type_name(self) -> str:
        return f"[{self.of_type.get_type_name()}]"

    def clone_to(self, an_sc, clone_map: dict | None = None) -> "ListComposer":
        return ListComposer(self.of_type.clone_to(an_sc, clone_map))


class NonNullComposer(WrapperComposer):
    """``of_type!``. Never wraps another NonNullComposer."""

    def __init__(self, of_type):
        if isinstance(of_type, NonNullComposer):
            raise WrongKindError("You provide NonNull value to NonNullComposer constructor. Nesting NonNull is not allowed.")
        self.of_type = of_type

    def get_type(self) -> GraphQLNonNull:
        return GraphQLNonNull(self.of_type.get_type())

    def get_type_name(self) -> str:
        return f"{self.of_type.get_type_name()}!"

    def get_type_non_null(self) -> "NonNullComposer":
        return self

    def clone_to(self, an_sc, clone_map: dict | None = None) -> "NonNullComposer":
        return NonNullComposer(self.of_type.clone_to(an_sc, clone_map))


class ThunkComposer(WrapperComposer):
    """A memoized, lazily evaluated type reference.

    The thunk runs on first access of ``of_type`` (directly, or through
    ``get_type``). Its result is cached and never recomputed, even if the
    registry changes afterwards.

    Args:
        thunk: Zero-arg callable returning a named composer or a wrapper
        type_name: Optional name hint returned by get_type_name() before
            the thunk has been evaluated
    """

    def __init__(self, thunk: Callable[[], Any], type_name: str | None = None):
        self._thunk = thunk
        self._type_name = type_name
        self._type_from_thunk = None

    @property
    def of_type(self):
        if self._type_from_thunk is None:
            self._type_from_thunk = self._evaluate()
        return self._type_from_thunk

    def is_resolved(self) -> bool:
        return self._type_from_thunk is not None

    def _evaluate(self):
        from .type_helpers import is_type_composer

        label = self._type_name or get_callable_name(self._thunk, "thunk")
        try:
            result = self._thunk()
        except ComposeError:
            raise
        except Exception as e:
            raise MalformedDefinitionError(f"Cannot resolve deferred type {label!r}: {e}") from e

        if not result:
            raise NotFoundError(f"Deferred type {label!r} resolved to an empty value")
        if not is_type_composer(result):
            raise WrongKindError(f"Deferred type {label!r} must resolve to a type composer, got {result!r}")
        return result

    def get_type(self):
        return self.of_type.get_type()

    def get_type_name(self) -> str:
        if self._type_from_thunk is not None:
            return self._type_from_thunk.get_type_name()
        if self._type_name:
            return self._type_name
        return self.of_type.get_type_name()

    def clone_to(self, an_sc, clone_map: dict | None = None) -> "ThunkComposer":
        return ThunkComposer(lambda: self.of_type.clone_to(an_sc, clone_map), self._type_name)

    def __repr__(self) -> str:
        if self._type_from_thunk is None:
            return f"<ThunkComposer {self._type_name or '?'} (unresolved)>"
        return super().__repr__()
