"""InterfaceTypeComposer: builder around one GraphQLInterfaceType."""

from typing import Any

from graphql import GraphQLInterfaceType

from .base import (
    FieldMapMixin,
    InputTypeDerivationMixin,
    InterfacesMixin,
    NamedTypeComposer,
    OutputFieldsMixin,
    RecordIdMixin,
    ResolversMixin,
    TypeResolversMixin,
    copy_field_config,
)
from .errors import MalformedDefinitionError, OwnershipError, WrongKindError
from .misc import is_function
from .type_helpers import clone_type_to, is_type_name_string


class InterfaceTypeComposer(
    FieldMapMixin,
    InterfacesMixin,
    OutputFieldsMixin,
    ResolversMixin,
    TypeResolversMixin,
    InputTypeDerivationMixin,
    RecordIdMixin,
    NamedTypeComposer,
):
    """Mutable builder around a GraphQLInterfaceType."""

    is_output_kind = True
    is_input_kind = False

    def __init__(self, gq_type: GraphQLInterfaceType, schema_composer):
        super().__init__(gq_type, schema_composer)
        self._fields: dict[str, Any] = {}
        self._interfaces: list = []
        self._resolvers = {}
        self._type_resolvers = {}
        self._itc = None
        self._record_id_fn = None

        existing_fields = gq_type.fields
        existing_interfaces = gq_type.interfaces
        if existing_fields:
            tm = self.type_mapper
            self.set_fields({name: tm.graphql_field_to_config(f) for name, f in existing_fields.items()})
        if existing_interfaces:
            self.set_interfaces(list(existing_interfaces))

        gq_type._fields = self._build_field_map
        gq_type._interfaces = self._build_interfaces
        self._drop_type_cache()

    @classmethod
    def create_temp(cls, type_def: Any, schema_composer=None) -> "InterfaceTypeComposer":
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to InterfaceTypeComposer.create_temp()")

        if isinstance(type_def, cls):
            return type_def
        if isinstance(type_def, str):
            if is_type_name_string(type_def):
                return cls(GraphQLInterfaceType(type_def, fields={}), schema_composer)
            tc = schema_composer.type_mapper.create_type(type_def)
            if not isinstance(tc, cls):
                raise WrongKindError(
                    "You should provide correct GraphQLInterfaceType type definition. "
                    "E.g. `interface MyType { id: ID!, name: String! }`"
                )
            return tc
        if isinstance(type_def, GraphQLInterfaceType):
            return cls(type_def, schema_composer)
        if isinstance(type_def, dict):
            if not type_def.get("name"):
                raise MalformedDefinitionError("Interface type config must have a `name`")
            tc = cls(
                GraphQLInterfaceType(
                    type_def["name"],
                    fields={},
                    resolve_type=type_def.get("resolve_type"),
                    description=type_def.get("description"),
                ),
                schema_composer,
            )
            fields = type_def.get("fields") or {}
            tc.set_fields(fields() if is_function(fields) else fields)
            tc.set_interfaces(type_def.get("interfaces") or [])
            tc.set_extensions(type_def.get("extensions"))
            tc.set_directives(type_def.get("directives") or [])
            return tc

        raise MalformedDefinitionError(
            "You should provide GraphQLInterfaceTypeConfig or string with interface name or SDL. "
            f"Provided: {type_def!r}"
        )

    @classmethod
    def create(cls, type_def: Any, schema_composer=None) -> "InterfaceTypeComposer":
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to InterfaceTypeComposer.create()")
        if isinstance(type_def, str) and schema_composer.has_instance(type_def, cls):
            return schema_composer.get(type_def)
        tc = cls.create_temp(type_def, schema_composer)
        schema_composer.add(tc)
        return tc

    def _convert_field(self, name: str, config: Any) -> Any:
        if is_function(config):
            return config
        return self.type_mapper.convert_output_field_config(config, name, self.get_type_name())

    def clone(self, new_type_name: str) -> "InterfaceTypeComposer":
        self._check_clone_name(new_type_name)
        cloned = InterfaceTypeComposer.create_temp(new_type_name, self.schema_composer)
        cloned._fields = {name: copy_field_config(config) for name, config in self._fields.items()}
        cloned._interfaces = list(self._interfaces)
        cloned._type_resolvers = dict(self._type_resolvers)
        cloned._type_resolver_fallback = self._type_resolver_fallback
        cloned._extensions = dict(self._extensions)
        cloned._directives = [dict(d) for d in self._directives]
        cloned._record_id_fn = self._record_id_fn
        cloned.set_description(self.get_description())
        cloned.set_resolve_type(self.get_resolve_type())
        for name, resolver in self._resolvers.items():
            cloned.set_resolver(name, resolver.clone())
        cloned._drop_type_cache()
        return cloned

    def clone_to(self, an_sc, clone_map: dict | None = None) -> "InterfaceTypeComposer":
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
            config["args"] = {
                arg_name: {**arg, "type": clone_type_to(arg["type"], an_sc, clone_map)}
                for arg_name, arg in (config.get("args") or {}).items()
            }
            fields[name] = config
        cloned.set_fields(fields)
        cloned.set_interfaces([clone_type_to(i, an_sc, clone_map) for i in self._interfaces])
        for tc, check_fn in self._type_resolvers.items():
            cloned.add_type_resolver(clone_type_to(tc, an_sc, clone_map), check_fn)
        cloned._extensions = dict(self._extensions)
        cloned._directives = [dict(d) for d in self._directives]
        cloned.set_description(self.get_description())
        if not self._type_resolvers:
            cloned.set_resolve_type(self.get_resolve_type())
        return cloned

    def merge(self, type_def):
        from .object_type import ObjectTypeComposer

        if isinstance(type_def, (GraphQLInterfaceType, str)):
            type_def = self.type_mapper.convert_output_type_definition(type_def)
        if not isinstance(type_def, (ObjectTypeComposer, InterfaceTypeComposer)):
            raise WrongKindError(
                f"Cannot merge {type_def!r} with InterfaceType({self.get_type_name()}). "
                "Provided type should be GraphQLInterfaceType, GraphQLObjectType, "
                "InterfaceTypeComposer or ObjectTypeComposer."
            )
        self.add_fields({name: copy_field_config(type_def.get_field(name)) for name in type_def.get_field_names()})
        self.add_interfaces(type_def.get_interfaces())
        return self
