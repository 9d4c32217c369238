"""Predicates and unwrapping helpers for type composers and SDL strings."""

import re
from typing import Any, Callable

from graphql import GraphQLNamedType, parse

from .errors import WrongKindError
from .wrappers import ListComposer, NonNullComposer, ThunkComposer, WrapperComposer

_FLAGS = re.MULTILINE | re.IGNORECASE

OUTPUT_TYPE_RE = re.compile(r"\btype\s[^{]+\{[^}]+\}", _FLAGS)
INPUT_TYPE_RE = re.compile(r"\binput\s[^{]+\{[^}]+\}", _FLAGS)
ENUM_TYPE_RE = re.compile(r"\benum\s[^{]+\{[^}]+\}", _FLAGS)
SCALAR_TYPE_RE = re.compile(r"\bscalar\s", _FLAGS)
INTERFACE_TYPE_RE = re.compile(r"\binterface\s", _FLAGS)
UNION_TYPE_RE = re.compile(r"\bunion\s", _FLAGS)
TYPE_NAME_RE = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


def is_type_name_string(value: str) -> bool:
    return bool(TYPE_NAME_RE.match(value))


def is_output_type_definition_string(value: str) -> bool:
    return bool(OUTPUT_TYPE_RE.search(value))


def is_input_type_definition_string(value: str) -> bool:
    return bool(INPUT_TYPE_RE.search(value))


def is_enum_type_definition_string(value: str) -> bool:
    return bool(ENUM_TYPE_RE.search(value))


def is_scalar_type_definition_string(value: str) -> bool:
    return bool(SCALAR_TYPE_RE.search(value))


def is_interface_type_definition_string(value: str) -> bool:
    return bool(INTERFACE_TYPE_RE.search(value))


def is_union_type_definition_string(value: str) -> bool:
    return bool(UNION_TYPE_RE.search(value))


def is_some_output_type_definition_string(value: str) -> bool:
    return (
        is_output_type_definition_string(value)
        or is_enum_type_definition_string(value)
        or is_scalar_type_definition_string(value)
        or is_interface_type_definition_string(value)
        or is_union_type_definition_string(value)
    )


def is_some_input_type_definition_string(value: str) -> bool:
    return (
        is_input_type_definition_string(value)
        or is_enum_type_definition_string(value)
        or is_scalar_type_definition_string(value)
    )


def is_type_definition_string(value: str) -> bool:
    return is_some_output_type_definition_string(value) or is_input_type_definition_string(value)


def is_named_type_composer(value: Any) -> bool:
    from .base import NamedTypeComposer

    return isinstance(value, NamedTypeComposer)


def is_wrapper_composer(value: Any) -> bool:
    return isinstance(value, WrapperComposer)


def is_type_composer(value: Any) -> bool:
    """True for any named composer or structural wrapper."""
    return is_wrapper_composer(value) or is_named_type_composer(value)


def peek_named_tc(value: Any):
    """Unwrap without forcing; None for a deferred reference not resolved yet."""
    tc = value
    while isinstance(tc, WrapperComposer):
        if isinstance(tc, ThunkComposer) and not tc.is_resolved():
            return None
        tc = tc.of_type
    return tc


def is_some_output_type_composer(value: Any) -> bool:
    if not is_type_composer(value):
        return False
    tc = peek_named_tc(value)
    return tc is None or tc.is_output_kind


def is_some_input_type_composer(value: Any) -> bool:
    if not is_type_composer(value):
        return False
    tc = peek_named_tc(value)
    return tc is None or tc.is_input_kind


def unwrap_tc(any_tc):
    """Strip List/NonNull/Thunk wrappers and return the named composer."""
    tc = any_tc
    while isinstance(tc, WrapperComposer):
        tc = tc.of_type
    return tc


def unwrap_output_tc(any_tc):
    tc = unwrap_tc(any_tc)
    if not tc.is_output_kind:
        raise WrongKindError(f"Cannot unwrap output type composer from {any_tc!r}")
    return tc


def unwrap_input_tc(any_tc):
    tc = unwrap_tc(any_tc)
    if not tc.is_input_kind:
        raise WrongKindError(f"Cannot unwrap input type composer from {any_tc!r}")
    return tc


def replace_tc(any_tc, replace_by: Any | Callable[[Any], Any]):
    """Swap the named composer inside a wrapper chain, keeping the wrappers.

    ``replace_by`` is either the new composer or a function receiving the
    current unwrapped composer and returning the new one. Thunks on the way
    down are forced.
    """
    wrappers = []
    tc = any_tc
    while isinstance(tc, WrapperComposer):
        if isinstance(tc, (ListComposer, NonNullComposer)):
            wrappers.append(type(tc))
        tc = tc.of_type

    new_tc = replace_by(tc) if callable(replace_by) and not is_type_composer(replace_by) else replace_by
    if new_tc is None:
        return any_tc

    for wrapper_cls in reversed(wrappers):
        new_tc = wrapper_cls(new_tc)
    return new_tc


def unwrap_type_name_string(value: str) -> str:
    """``[Int!]!`` -> ``Int``"""
    return value.replace("[", "").replace("]", "").replace("!", "").strip()


def get_compose_type_name(type_def: Any, sc=None) -> str | None:
    """Best effort name of a type definition in any accepted shape."""
    if isinstance(type_def, str):
        if is_type_name_string(type_def):
            return type_def
        if is_type_definition_string(type_def):
            document = parse(type_def)
            definition = document.definitions[0]
            return definition.name.value
        return unwrap_type_name_string(type_def)
    if is_type_composer(type_def):
        return type_def.get_type_name()
    if isinstance(type_def, GraphQLNamedType):
        return type_def.name
    if callable(type_def):
        return get_compose_type_name(type_def(), sc)
    if isinstance(type_def, dict):
        return type_def.get("name")
    return None


def clone_type_to(type_def: Any, an_sc, clone_map: dict | None = None):
    """Clone a composer or wrapper into another schema composer.

    Graphql-core types and unknown values are returned as is.
    """
    if is_type_composer(type_def):
        return type_def.clone_to(an_sc, clone_map if clone_map is not None else {})
    return type_def
