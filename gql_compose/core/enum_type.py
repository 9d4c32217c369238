"""EnumTypeComposer: builder around one GraphQLEnumType.

Enum values are managed through the same ``*field*`` methods as object
fields; each value config is ``{"value", "description",
"deprecation_reason", "extensions", "directives"}``.
"""

from typing import Any

from graphql import GraphQLEnumType, GraphQLEnumValue

from .base import FieldMapMixin, NamedTypeComposer, copy_field_config, field_extensions
from .errors import MalformedDefinitionError, OwnershipError, WrongKindError
from .type_helpers import is_type_name_string


class EnumTypeComposer(FieldMapMixin, NamedTypeComposer):
    is_output_kind = True
    is_input_kind = True
    _field_kind = "value"

    def __init__(self, gq_type: GraphQLEnumType, schema_composer):
        super().__init__(gq_type, schema_composer)
        self._fields: dict[str, Any] = {}
        existing_values = dict(gq_type.values)
        if existing_values:
            tm = self.type_mapper
            self.set_fields({name: tm.graphql_enum_value_to_config(name, v) for name, v in existing_values.items()})
        self._drop_type_cache()

    @classmethod
    def create_temp(cls, type_def: Any, schema_composer=None) -> "EnumTypeComposer":
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to EnumTypeComposer.create_temp()")

        if isinstance(type_def, cls):
            return type_def
        if isinstance(type_def, str):
            if is_type_name_string(type_def):
                return cls(GraphQLEnumType(type_def, values={}), schema_composer)
            tc = schema_composer.type_mapper.create_type(type_def)
            if not isinstance(tc, cls):
                raise WrongKindError(
                    "You should provide correct GraphQLEnumType type definition. "
                    "E.g. `enum MyEnum { KEY1 KEY2 KEY3 }`"
                )
            return tc
        if isinstance(type_def, GraphQLEnumType):
            return cls(type_def, schema_composer)
        if isinstance(type_def, dict):
            if not type_def.get("name"):
                raise MalformedDefinitionError("Enum type config must have a `name`")
            tc = cls(
                GraphQLEnumType(type_def["name"], values={}, description=type_def.get("description")),
                schema_composer,
            )
            values = type_def.get("values") or {}
            if isinstance(values, (list, tuple)):
                values = {name: {} for name in values}
            tc.set_fields(values)
            tc.set_extensions(type_def.get("extensions"))
            tc.set_directives(type_def.get("directives") or [])
            return tc

        raise MalformedDefinitionError(
            "You should provide GraphQLEnumTypeConfig or string with enum name or SDL. "
            f"Provided: {type_def!r}"
        )

    @classmethod
    def create(cls, type_def: Any, schema_composer=None) -> "EnumTypeComposer":
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to EnumTypeComposer.create()")
        if isinstance(type_def, str) and schema_composer.has_instance(type_def, cls):
            return schema_composer.get(type_def)
        tc = cls.create_temp(type_def, schema_composer)
        schema_composer.add(tc)
        return tc

    def _convert_field(self, name: str, config: Any) -> dict:
        return self.type_mapper.convert_enum_value_config(config, name, self.get_type_name())

    def _drop_type_cache(self) -> None:
        super()._drop_type_cache()
        self._gq_type.values = {
            name: GraphQLEnumValue(
                config.get("value", name),
                description=config.get("description"),
                deprecation_reason=config.get("deprecation_reason"),
                extensions=field_extensions(config),
            )
            for name, config in self._fields.items()
        }

    def clone(self, new_type_name: str) -> "EnumTypeComposer":
        self._check_clone_name(new_type_name)
        cloned = EnumTypeComposer.create_temp(new_type_name, self.schema_composer)
        cloned.set_fields({name: copy_field_config(config) for name, config in self._fields.items()})
        cloned._extensions = dict(self._extensions)
        cloned._directives = [dict(d) for d in self._directives]
        cloned.set_description(self.get_description())
        return cloned

    def clone_to(self, an_sc, clone_map: dict | None = None) -> "EnumTypeComposer":
        if clone_map is None:
            clone_map = {}
        if self in clone_map:
            return clone_map[self]
        cloned = self._create_clone_in(an_sc)
        clone_map[self] = cloned
        cloned.set_fields({name: copy_field_config(config) for name, config in self._fields.items()})
        cloned._extensions = dict(self._extensions)
        cloned._directives = [dict(d) for d in self._directives]
        cloned.set_description(self.get_description())
        return cloned

    def merge(self, type_def):
        if isinstance(type_def, (GraphQLEnumType, str)):
            type_def = self.type_mapper.convert_output_type_definition(type_def)
        if not isinstance(type_def, EnumTypeComposer):
            raise WrongKindError(
                f"Cannot merge {type_def!r} with EnumType({self.get_type_name()}). "
                "Provided type should be GraphQLEnumType or EnumTypeComposer."
            )
        self.add_fields({name: copy_field_config(type_def.get_field(name)) for name in type_def.get_field_names()})
        return self
