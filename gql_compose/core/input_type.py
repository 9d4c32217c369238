"""InputTypeComposer: builder around one GraphQLInputObjectType."""

from typing import Any

from graphql import GraphQLInputField, GraphQLInputObjectType, Undefined, value_from_ast

from .base import FieldMapMixin, NamedTypeComposer, copy_field_config, field_extensions
from .errors import MalformedDefinitionError, OwnershipError, WrongKindError, error_context
from .misc import is_function
from .type_helpers import clone_type_to, is_type_name_string


class InputTypeComposer(FieldMapMixin, NamedTypeComposer):
    """Mutable builder around a GraphQLInputObjectType."""

    is_output_kind = False
    is_input_kind = True

    def __init__(self, gq_type: GraphQLInputObjectType, schema_composer):
        super().__init__(gq_type, schema_composer)
        self._fields: dict[str, Any] = {}

        existing_fields = gq_type.fields
        if existing_fields:
            tm = self.type_mapper
            self.set_fields({name: tm.graphql_input_field_to_config(f) for name, f in existing_fields.items()})

        gq_type._fields = self._build_field_map
        self._drop_type_cache()

    @classmethod
    def create_temp(cls, type_def: Any, schema_composer=None) -> "InputTypeComposer":
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to InputTypeComposer.create_temp()")

        if isinstance(type_def, cls):
            return type_def
        if isinstance(type_def, str):
            if is_type_name_string(type_def):
                return cls(GraphQLInputObjectType(type_def, fields={}), schema_composer)
            tc = schema_composer.type_mapper.create_type(type_def)
            if not isinstance(tc, cls):
                raise WrongKindError(
                    "You should provide correct GraphQLInputObjectType type definition. "
                    "E.g. `input MyInputType { name: String! }`"
                )
            return tc
        if isinstance(type_def, GraphQLInputObjectType):
            return cls(type_def, schema_composer)
        if isinstance(type_def, dict):
            if not type_def.get("name"):
                raise MalformedDefinitionError("Input type config must have a `name`")
            tc = cls(
                GraphQLInputObjectType(type_def["name"], fields={}, description=type_def.get("description")),
                schema_composer,
            )
            fields = type_def.get("fields") or {}
            tc.set_fields(fields() if is_function(fields) else fields)
            tc.set_extensions(type_def.get("extensions"))
            tc.set_directives(type_def.get("directives") or [])
            return tc

        raise MalformedDefinitionError(
            "You should provide InputObjectConfig or string with type name to "
            f"InputTypeComposer.create(opts). Provided: {type_def!r}"
        )

    @classmethod
    def create(cls, type_def: Any, schema_composer=None) -> "InputTypeComposer":
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to InputTypeComposer.create()")
        if isinstance(type_def, str) and schema_composer.has_instance(type_def, cls):
            return schema_composer.get(type_def)
        tc = cls.create_temp(type_def, schema_composer)
        schema_composer.add(tc)
        return tc

    def _convert_field(self, name: str, config: Any) -> Any:
        if is_function(config):
            return config
        return self.type_mapper.convert_input_field_config(config, name, self.get_type_name())

    def _build_field_map(self) -> dict[str, GraphQLInputField]:
        result = {}
        for name in list(self._fields):
            config = self.get_field(name)
            with error_context(self._field_path(name)):
                field_type = config["type"].get_type()
            default_value = config.get("default_value", Undefined)
            if default_value is Undefined and config.get("default_value_ast") is not None:
                # SDL defaults are coerced once the field type is known
                default_value = value_from_ast(config["default_value_ast"], field_type)
            result[name] = GraphQLInputField(
                field_type,
                default_value=default_value,
                description=config.get("description"),
                deprecation_reason=config.get("deprecation_reason"),
                extensions=field_extensions(config),
            )
        return result

    def _iter_type_refs(self):
        for name in list(self._fields):
            yield self.get_field(name)["type"]

    def get_field_itc(self, name: str) -> "InputTypeComposer":
        tc = self.get_field_tc(name)
        if not isinstance(tc, InputTypeComposer):
            raise WrongKindError(
                f"{self.get_type_name()}.get_field_itc({name!r}) must be InputTypeComposer, "
                f"but received {type(tc).__name__}"
            )
        return tc

    def is_required(self, name: str) -> bool:
        return self.is_field_non_null(name)

    def make_required(self, names: str | list[str]):
        return self.make_field_non_null(names)

    def make_optional(self, names: str | list[str]):
        return self.make_field_nullable(names)

    def clone(self, new_type_name: str) -> "InputTypeComposer":
        self._check_clone_name(new_type_name)
        cloned = InputTypeComposer.create_temp(new_type_name, self.schema_composer)
        cloned._fields = {name: copy_field_config(config) for name, config in self._fields.items()}
        cloned._extensions = dict(self._extensions)
        cloned._directives = [dict(d) for d in self._directives]
        cloned.set_description(self.get_description())
        cloned._drop_type_cache()
        return cloned

    def clone_to(self, an_sc, clone_map: dict | None = None) -> "InputTypeComposer":
        if clone_map is None:
            clone_map = {}
        if self in clone_map:
            return clone_map[self]
        cloned = self._create_clone_in(an_sc)
        clone_map[self] = cloned
        fields = {}
        for name in self.get_field_names():
            config = copy_field_config(self.get_field(name))
            config["type"] = clone_type_to(config["type"], an_sc, clone_map)
            fields[name] = config
        cloned.set_fields(fields)
        cloned._extensions = dict(self._extensions)
        cloned._directives = [dict(d) for d in self._directives]
        cloned.set_description(self.get_description())
        return cloned

    def merge(self, type_def):
        if isinstance(type_def, (GraphQLInputObjectType, str)):
            type_def = self.type_mapper.convert_input_type_definition(type_def)
        if not isinstance(type_def, InputTypeComposer):
            raise WrongKindError(
                f"Cannot merge {type_def!r} with InputObjectType({self.get_type_name()}). "
                "Provided type should be GraphQLInputObjectType or InputTypeComposer."
            )
        self.add_fields({name: copy_field_config(type_def.get_field(name)) for name in type_def.get_field_names()})
        return self
