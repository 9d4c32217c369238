"""ScalarTypeComposer and the extra scalars known by name (JSON, JSONObject, Date).

The extra scalars follow the same conventions as the DateTime/JSON scalar
handlers: dates travel as ISO 8601 strings, JSON values pass through as is.
"""

from datetime import date, datetime, timezone
from typing import Any, Callable

from graphql import (
    GraphQLError,
    GraphQLScalarType,
    IntValueNode,
    StringValueNode,
    ValueNode,
    value_from_ast_untyped,
)

from .base import NamedTypeComposer
from .errors import MalformedDefinitionError, OwnershipError, WrongKindError
from .type_helpers import is_type_name_string


def _identity(value: Any) -> Any:
    return value


def _parse_json_literal(value_node: ValueNode, variables: dict[str, Any] | None = None) -> Any:
    return value_from_ast_untyped(value_node, variables)


def _ensure_object(value: Any) -> dict:
    if not isinstance(value, dict):
        raise GraphQLError(f"JSONObject cannot represent non-object value: {value!r}")
    return value


def _parse_json_object_literal(value_node: ValueNode, variables: dict[str, Any] | None = None) -> dict:
    return _ensure_object(value_from_ast_untyped(value_node, variables))


GraphQLJSON = GraphQLScalarType(
    "JSON",
    serialize=_identity,
    parse_value=_identity,
    parse_literal=_parse_json_literal,
    description="The `JSON` scalar type represents JSON values as specified by ECMA-404",
    specified_by_url="http://www.ecma-international.org/publications/files/ECMA-ST/ECMA-404.pdf",
)

GraphQLJSONObject = GraphQLScalarType(
    "JSONObject",
    serialize=_ensure_object,
    parse_value=_ensure_object,
    parse_literal=_parse_json_object_literal,
    description="The `JSONObject` scalar type represents JSON objects as specified by ECMA-404",
    specified_by_url="http://www.ecma-international.org/publications/files/ECMA-ST/ECMA-404.pdf",
)


def _serialize_date(value: Any) -> str:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc).isoformat()
    raise GraphQLError(f"Date cannot represent value: {value!r}")


def _parse_date(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, int):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        # Handle Z suffix for UTC
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(value)
        except ValueError as e:
            raise GraphQLError(f"Date cannot represent an invalid date-string {value!r}") from e
    raise GraphQLError(f"Date cannot represent value: {value!r}")


def _parse_date_literal(value_node: ValueNode, variables: dict[str, Any] | None = None) -> datetime:
    if isinstance(value_node, IntValueNode):
        return _parse_date(int(value_node.value))
    if isinstance(value_node, StringValueNode):
        return _parse_date(value_node.value)
    raise GraphQLError(f"Date cannot represent literal of kind {value_node.kind}")


GraphQLDate = GraphQLScalarType(
    "Date",
    serialize=_serialize_date,
    parse_value=_parse_date,
    parse_literal=_parse_date_literal,
    description="An ISO 8601 date-time string, or a timestamp in milliseconds",
)


class ScalarTypeComposer(NamedTypeComposer):
    """Mutable builder around a GraphQLScalarType."""

    is_output_kind = True
    is_input_kind = True

    @classmethod
    def create_temp(cls, type_def: Any, schema_composer=None) -> "ScalarTypeComposer":
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to ScalarTypeComposer.create_temp()")

        if isinstance(type_def, cls):
            return type_def
        if isinstance(type_def, str):
            if is_type_name_string(type_def):
                return cls(GraphQLScalarType(type_def), schema_composer)
            tc = schema_composer.type_mapper.create_type(type_def)
            if not isinstance(tc, cls):
                raise WrongKindError(
                    "You should provide correct GraphQLScalarType type definition. E.g. `scalar UInt`"
                )
            return tc
        if isinstance(type_def, GraphQLScalarType):
            return cls(type_def, schema_composer)
        if isinstance(type_def, dict):
            if not type_def.get("name"):
                raise MalformedDefinitionError("Scalar type config must have a `name`")
            tc = cls(
                GraphQLScalarType(
                    type_def["name"],
                    serialize=type_def.get("serialize"),
                    parse_value=type_def.get("parse_value"),
                    parse_literal=type_def.get("parse_literal"),
                    description=type_def.get("description"),
                    specified_by_url=type_def.get("specified_by_url"),
                ),
                schema_composer,
            )
            tc.set_extensions(type_def.get("extensions"))
            tc.set_directives(type_def.get("directives") or [])
            return tc

        raise MalformedDefinitionError(
            "You should provide GraphQLScalarTypeConfig or string with scalar name or SDL. "
            f"Provided: {type_def!r}"
        )

    @classmethod
    def create(cls, type_def: Any, schema_composer=None) -> "ScalarTypeComposer":
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to ScalarTypeComposer.create()")
        if isinstance(type_def, str) and schema_composer.has_instance(type_def, cls):
            return schema_composer.get(type_def)
        tc = cls.create_temp(type_def, schema_composer)
        schema_composer.add(tc)
        return tc

    def get_serialize(self) -> Callable:
        return self._gq_type.serialize

    def set_serialize(self, fn: Callable):
        self._gq_type.serialize = fn
        return self

    def get_parse_value(self) -> Callable:
        return self._gq_type.parse_value

    def set_parse_value(self, fn: Callable):
        self._gq_type.parse_value = fn
        return self

    def get_parse_literal(self) -> Callable:
        return self._gq_type.parse_literal

    def set_parse_literal(self, fn: Callable):
        self._gq_type.parse_literal = fn
        return self

    def get_specified_by_url(self) -> str | None:
        return self._gq_type.specified_by_url

    def set_specified_by_url(self, url: str | None):
        self._gq_type.specified_by_url = url
        return self

    def clone(self, new_type_name: str) -> "ScalarTypeComposer":
        self._check_clone_name(new_type_name)
        cloned = ScalarTypeComposer.create_temp(new_type_name, self.schema_composer)
        self._copy_to(cloned)
        return cloned

    def clone_to(self, an_sc, clone_map: dict | None = None) -> "ScalarTypeComposer":
        from .type_mapper import BUILT_IN_SCALARS

        if clone_map is None:
            clone_map = {}
        if self in clone_map:
            return clone_map[self]
        if BUILT_IN_SCALARS.get(self.get_type_name()) is self._gq_type:
            cloned = an_sc.type_mapper.get_built_in_type(self.get_type_name())
        else:
            cloned = self._create_clone_in(an_sc)
            self._copy_to(cloned)
        clone_map[self] = cloned
        return cloned

    def _copy_to(self, other: "ScalarTypeComposer") -> None:
        other.set_serialize(self.get_serialize())
        other.set_parse_value(self.get_parse_value())
        other.set_parse_literal(self.get_parse_literal())
        other.set_specified_by_url(self.get_specified_by_url())
        other.set_description(self.get_description())
        other._extensions = dict(self._extensions)
        other._directives = [dict(d) for d in self._directives]

    def merge(self, type_def):
        if isinstance(type_def, (GraphQLScalarType, str)):
            type_def = self.type_mapper.convert_output_type_definition(type_def)
        if not isinstance(type_def, ScalarTypeComposer):
            raise WrongKindError(
                f"Cannot merge {type_def!r} with ScalarType({self.get_type_name()}). "
                "Provided type should be GraphQLScalarType or ScalarTypeComposer."
            )
        type_def._copy_to(self)
        return self
