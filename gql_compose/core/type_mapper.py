"""TypeMapper: turns every accepted type definition shape into composers.

A definition may be an existing composer or wrapper, a graphql-core type,
a one-element list (a list type), a Resolver, a callable producing any of
these, a type name string (``"[Int!]!"``) or an SDL type definition string.
SDL documents are walked node by node and turned into composers registered
on the owning SchemaComposer.
"""

import logging
from typing import Any

from graphql import (
    DEFAULT_DEPRECATION_REASON,
    DirectiveDefinitionNode,
    DirectiveLocation,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    GraphQLArgument,
    GraphQLBoolean,
    GraphQLDeprecatedDirective,
    GraphQLDirective,
    GraphQLEnumType,
    GraphQLError,
    GraphQLFloat,
    GraphQLID,
    GraphQLInputObjectType,
    GraphQLInt,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLString,
    GraphQLUnionType,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
    ScalarTypeExtensionNode,
    SchemaDefinitionNode,
    TypeNode,
    Undefined,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    parse,
    parse_type,
    value_from_ast,
    value_from_ast_untyped,
)
from graphql.execution.values import get_argument_values

from .enum_type import EnumTypeComposer
from .errors import MalformedDefinitionError, OwnershipError, WrongKindError, error_context
from .input_type import InputTypeComposer
from .interface_type import InterfaceTypeComposer
from .misc import is_function
from .object_type import ObjectTypeComposer
from .resolver import Resolver
from .scalar_type import GraphQLDate, GraphQLJSON, GraphQLJSONObject, ScalarTypeComposer
from .type_helpers import (
    is_input_type_definition_string,
    is_interface_type_definition_string,
    is_output_type_definition_string,
    is_some_input_type_composer,
    is_some_output_type_composer,
    is_type_composer,
    is_type_definition_string,
    peek_named_tc,
)
from .type_storage import TypeStorage
from .union_type import UnionTypeComposer
from .wrappers import ListComposer, NonNullComposer, ThunkComposer

logger = logging.getLogger(__name__)

BUILT_IN_SCALARS: dict[str, GraphQLScalarType] = {
    "String": GraphQLString,
    "Float": GraphQLFloat,
    "Int": GraphQLInt,
    "Boolean": GraphQLBoolean,
    "ID": GraphQLID,
    "JSON": GraphQLJSON,
    "JSONObject": GraphQLJSONObject,
    "Date": GraphQLDate,
}
BUILT_IN_SCALAR_NAMES = frozenset(BUILT_IN_SCALARS)

ROOT_TYPE_NAMES = {"query": "Query", "mutation": "Mutation", "subscription": "Subscription"}

_COMPOSER_CLASSES = (
    (GraphQLObjectType, ObjectTypeComposer),
    (GraphQLInputObjectType, InputTypeComposer),
    (GraphQLScalarType, ScalarTypeComposer),
    (GraphQLEnumType, EnumTypeComposer),
    (GraphQLInterfaceType, InterfaceTypeComposer),
    (GraphQLUnionType, UnionTypeComposer),
)


def get_description(node) -> str | None:
    return node.description.value if node.description else None


def sync_deprecation(config: dict) -> dict:
    """Keep ``deprecation_reason`` and the ``@deprecated`` directive consistent.

    A literal reason wins and is written into the directive; otherwise the
    directive's reason is copied onto the config.
    """
    directives = [dict(d) for d in config.get("directives") or []]
    index = next((i for i, d in enumerate(directives) if d.get("name") == "deprecated"), -1)
    reason = config.get("deprecation_reason")
    if reason:
        if index >= 0:
            directives[index]["args"] = {"reason": reason}
        else:
            directives.append({"name": "deprecated", "args": {"reason": reason}})
    elif index >= 0:
        config["deprecation_reason"] = (directives[index].get("args") or {}).get(
            "reason", DEFAULT_DEPRECATION_REASON
        )
    if directives or "directives" in config:
        config["directives"] = directives
    return config


def _split_extensions(extensions: dict | None) -> tuple[dict, list, Any]:
    """Pull the directives and projection that composers store in extensions."""
    extensions = dict(extensions or {})
    directives = extensions.pop("directives", None) or []
    projection = extensions.pop("projection", None)
    return extensions, [dict(d) for d in directives], projection


class TypeMapper:
    """Converts type definitions into composers for one SchemaComposer."""

    def __init__(self, schema_composer):
        from .schema_composer import SchemaComposer

        if not isinstance(schema_composer, SchemaComposer):
            raise OwnershipError("TypeMapper must have SchemaComposer instance.")
        self.schema_composer = schema_composer
        # names created by an extension before their base definition was seen
        self._extended_before_definition: set[str] = set()

    # -----------------------------------------------------------------
    # Named lookups
    # -----------------------------------------------------------------

    def get_built_in_type(self, name: str) -> ScalarTypeComposer | None:
        gq_type = BUILT_IN_SCALARS.get(name)
        if gq_type is None:
            return None
        sc = self.schema_composer
        if sc.has(gq_type):
            return sc.get(gq_type)
        return ScalarTypeComposer.create(gq_type, sc)

    def _named_type_ref(self, name: str):
        sc = self.schema_composer
        if sc.has(name):
            return sc.get(name)
        built_in = self.get_built_in_type(name)
        if built_in is not None:
            return built_in
        return ThunkComposer(lambda: sc.get(name), name)

    def convert_graphql_type_to_composer(self, gq_type):
        if isinstance(gq_type, GraphQLNonNull):
            return NonNullComposer(self.convert_graphql_type_to_composer(gq_type.of_type))
        if isinstance(gq_type, GraphQLList):
            return ListComposer(self.convert_graphql_type_to_composer(gq_type.of_type))

        sc = self.schema_composer
        if isinstance(gq_type, GraphQLNamedType) and sc.has(gq_type):
            return sc.get(gq_type)
        for gq_cls, tc_cls in _COMPOSER_CLASSES:
            if isinstance(gq_type, gq_cls):
                return tc_cls.create(gq_type, sc)
        raise WrongKindError(f"Cannot convert to Composer the following value: {gq_type!r}")

    def convert_sdl_wrapped_type_name(self, type_name: str):
        try:
            type_node = parse_type(type_name)
        except GraphQLError as e:
            raise MalformedDefinitionError(f"Cannot parse type name {type_name!r}: {e.message}") from e
        return self.type_from_ast(type_node)

    def convert_sdl_type_definition(self, sdl: str):
        """Parse one SDL type definition, caching it under its name and its text."""
        sc = self.schema_composer
        if sc.has(sdl):
            return sc.get(sdl)

        types = self.parse_types(self._parse_document(sdl))
        if not types:
            return None
        tc = types[0]
        sc.set(tc.get_type_name(), tc)
        sc.set(sdl, tc)
        return tc

    def create_type(self, sdl: str):
        tc = self.convert_sdl_type_definition(sdl)
        if tc is None:
            raise MalformedDefinitionError(f"Cannot create type from the following SDL: {sdl!r}")
        return tc

    def _parse_document(self, sdl: str) -> DocumentNode:
        try:
            document = parse(sdl)
        except GraphQLError as e:
            raise MalformedDefinitionError(f"You should provide correct SDL syntax: {e.message}") from e
        logger.debug("Parsed SDL document with %d definition(s)", len(document.definitions))
        return document

    # -----------------------------------------------------------------
    # Type definitions
    # -----------------------------------------------------------------

    def _convert_type_string(self, type_def: str, kind_check, kind: str):
        sc = self.schema_composer
        if sc.has(type_def):
            tc = sc.get(type_def)
        elif is_type_definition_string(type_def):
            tc = self.convert_sdl_type_definition(type_def)
        else:
            tc = self.convert_sdl_wrapped_type_name(type_def)
        if tc is None:
            raise MalformedDefinitionError(f"Cannot convert to {kind} the following string: {type_def!r}")
        if not kind_check(tc):
            raise WrongKindError(f"Provided incorrect {kind}: {type_def!r}")
        return tc

    def convert_output_type_definition(self, type_def: Any, field_name: str = "", type_name: str = ""):
        """Return an output composer or wrapper, or None if ``type_def`` is no type at all."""
        if isinstance(type_def, str):
            if is_input_type_definition_string(type_def):
                raise WrongKindError(f"Should be OutputType, but got input type definition: {type_def!r}")
            return self._convert_type_string(type_def, is_some_output_type_composer, "OutputType")
        if is_type_composer(type_def):
            if not is_some_output_type_composer(type_def):
                raise WrongKindError(f"Should be OutputType, but provided {type_def!r}")
            return type_def
        if isinstance(type_def, (list, tuple)):
            if len(type_def) != 1:
                raise MalformedDefinitionError(
                    f"Array must have exact one output type definition, but has {len(type_def)}: {type_def!r}"
                )
            tc = self.convert_output_type_definition(type_def[0], field_name, type_name)
            if tc is None:
                raise MalformedDefinitionError(f"Cannot construct TypeComposer from {type_def!r}")
            return ListComposer(tc)
        if isinstance(type_def, Resolver):
            return type_def.get_type_composer()
        if isinstance(type_def, (GraphQLNamedType, GraphQLList, GraphQLNonNull)):
            tc = self.convert_graphql_type_to_composer(type_def)
            if not is_some_output_type_composer(tc):
                raise WrongKindError(f"Provided incorrect OutputType: {type_def!r}")
            return tc
        if is_function(type_def):

            def thunk():
                definition = type_def()
                tc = self.convert_output_field_config(definition, field_name, type_name)["type"]
                if not is_some_output_type_composer(tc):
                    raise WrongKindError(f"Provided incorrect OutputType: Function[{definition!r}]")
                return tc

            return ThunkComposer(thunk)
        return None

    def convert_input_type_definition(self, type_def: Any, field_name: str = "", type_name: str = ""):
        """Return an input composer or wrapper, or None if ``type_def`` is no type at all."""
        if isinstance(type_def, str):
            if is_output_type_definition_string(type_def):
                raise WrongKindError(f"Should be InputType, but got output type definition: {type_def!r}")
            return self._convert_type_string(type_def, is_some_input_type_composer, "InputType")
        if is_type_composer(type_def):
            if not is_some_input_type_composer(type_def):
                raise WrongKindError(f"Should be InputType, but provided {type_def!r}")
            return type_def
        if isinstance(type_def, (list, tuple)):
            if len(type_def) != 1:
                raise MalformedDefinitionError(
                    f"Array must have exact one input type definition, but has {len(type_def)}: {type_def!r}"
                )
            tc = self.convert_input_type_definition(type_def[0], field_name, type_name)
            if tc is None:
                raise MalformedDefinitionError(f"Cannot construct TypeComposer from {type_def!r}")
            return ListComposer(tc)
        if isinstance(type_def, (GraphQLNamedType, GraphQLList, GraphQLNonNull)):
            tc = self.convert_graphql_type_to_composer(type_def)
            if not is_some_input_type_composer(tc):
                raise WrongKindError(f"Provided incorrect InputType: {type_def!r}")
            return tc
        if is_function(type_def):

            def thunk():
                definition = type_def()
                tc = self.convert_input_field_config(definition, field_name, type_name)["type"]
                if not is_some_input_type_composer(tc):
                    raise WrongKindError(f"Provided incorrect InputType: Function[{definition!r}]")
                return tc

            return ThunkComposer(thunk)
        return None

    def convert_interface_type_definition(self, type_def: Any):
        sc = self.schema_composer
        if isinstance(type_def, (str, GraphQLNamedType)) and sc.has_instance(type_def, InterfaceTypeComposer):
            return sc.get(type_def)
        if isinstance(type_def, str):
            if is_interface_type_definition_string(type_def):
                tc = self.convert_sdl_type_definition(type_def)
            else:
                tc = self.convert_sdl_wrapped_type_name(type_def)
            if not isinstance(tc, (InterfaceTypeComposer, ThunkComposer)):
                raise WrongKindError(f"Cannot convert to InterfaceType the following definition: {type_def!r}")
            return tc
        if isinstance(type_def, GraphQLInterfaceType):
            return self.convert_graphql_type_to_composer(type_def)
        if isinstance(type_def, (InterfaceTypeComposer, ThunkComposer)):
            return type_def
        if is_function(type_def):
            return ThunkComposer(lambda: self.convert_interface_type_definition(type_def()))
        raise WrongKindError(f"Cannot convert to InterfaceType the following definition: {type_def!r}")

    # -----------------------------------------------------------------
    # Field, argument and enum value configs
    # -----------------------------------------------------------------

    def convert_output_field_config(self, config: Any, field_name: str = "", type_name: str = "") -> dict:
        with error_context(f"{type_name}.{field_name}"):
            if not config:
                raise MalformedDefinitionError(f"You provide empty output field definition: {config!r}")

            if isinstance(config, Resolver):
                return {
                    "type": config.get_type_ref(),
                    "args": config.get_args(),
                    "resolve": config.get_field_resolver(),
                    "description": config.get_description(),
                    "deprecation_reason": config.get_deprecation_reason(),
                    "extensions": dict(config.extensions),
                    "directives": [dict(d) for d in config.directives],
                    "projection": config.projection,
                }

            tc = self.convert_output_type_definition(config, field_name, type_name)
            if tc is not None:
                return {"type": tc}

            if isinstance(config, dict):
                if not config.get("type"):
                    raise MalformedDefinitionError(f"Definition object should contain 'type' property: {config!r}")
                tc = self.convert_output_type_definition(config["type"], field_name, type_name)
                if tc is not None:
                    field = dict(config)
                    field["type"] = tc
                    field["args"] = self.convert_arg_config_map(config.get("args") or {}, field_name, type_name)
                    return sync_deprecation(field)

            raise MalformedDefinitionError(f"Cannot convert to OutputType the following value: {config!r}")

    def convert_output_field_config_map(self, fields: dict[str, Any], type_name: str = "") -> dict[str, dict]:
        return {name: self.convert_output_field_config(config, name, type_name) for name, config in fields.items()}

    def convert_arg_config(self, config: Any, arg_name: str = "", field_name: str = "", type_name: str = "") -> dict:
        with error_context(f"{type_name}.{field_name}.{arg_name}"):
            if not config:
                raise MalformedDefinitionError(f"You provide empty argument config {config!r}")

            tc = self.convert_input_type_definition(config)
            if tc is not None:
                return {"type": tc}

            if isinstance(config, dict):
                if not config.get("type"):
                    raise MalformedDefinitionError(f"Definition object should contain 'type' property: {config!r}")
                tc = self.convert_input_type_definition(config["type"])
                if tc is not None:
                    return sync_deprecation({**config, "type": tc})

            raise MalformedDefinitionError(f"Cannot convert to InputType the following value: {config!r}")

    def convert_arg_config_map(
        self, args: dict[str, Any] | None, field_name: str = "", type_name: str = ""
    ) -> dict[str, dict]:
        return {
            arg_name: self.convert_arg_config(config, arg_name, field_name, type_name)
            for arg_name, config in (args or {}).items()
        }

    def convert_input_field_config(self, config: Any, field_name: str = "", type_name: str = "") -> dict:
        with error_context(f"{type_name}.{field_name}"):
            if not config:
                raise MalformedDefinitionError(f"You provide empty input field definition: {config!r}")

            tc = self.convert_input_type_definition(config, field_name, type_name)
            if tc is not None:
                return {"type": tc}

            if isinstance(config, dict):
                if not config.get("type"):
                    raise MalformedDefinitionError(f"Definition object should contain 'type' property: {config!r}")
                tc = self.convert_input_type_definition(config["type"], field_name, type_name)
                if tc is not None:
                    return sync_deprecation({**config, "type": tc})

            raise MalformedDefinitionError(f"Cannot convert to InputType the following value: {config!r}")

    def convert_input_field_config_map(self, fields: dict[str, Any], type_name: str = "") -> dict[str, dict]:
        return {name: self.convert_input_field_config(config, name, type_name) for name, config in fields.items()}

    def convert_enum_value_config(self, config: Any, name: str = "", type_name: str = "") -> dict:
        with error_context(f"{type_name}.{name}"):
            if config is None:
                config = {}
            if not isinstance(config, dict):
                raise MalformedDefinitionError(f"Enum value config should be a dict, got {config!r}")
            value = dict(config)
            value.setdefault("value", name)
            return sync_deprecation(value)

    # graphql-core objects back to configs

    def graphql_field_to_config(self, field) -> dict:
        extensions, directives, projection = _split_extensions(field.extensions)
        return {
            "type": self.convert_graphql_type_to_composer(field.type),
            "args": {name: self.graphql_input_field_to_config(arg) for name, arg in field.args.items()},
            "resolve": field.resolve,
            "subscribe": field.subscribe,
            "description": field.description,
            "deprecation_reason": field.deprecation_reason,
            "extensions": extensions,
            "directives": directives,
            "projection": projection,
        }

    def graphql_input_field_to_config(self, field) -> dict:
        """Config of a GraphQLArgument or GraphQLInputField."""
        extensions, directives, _ = _split_extensions(field.extensions)
        config = {
            "type": self.convert_graphql_type_to_composer(field.type),
            "description": field.description,
            "deprecation_reason": field.deprecation_reason,
            "extensions": extensions,
            "directives": directives,
        }
        if field.default_value is not Undefined:
            config["default_value"] = field.default_value
        return config

    def graphql_enum_value_to_config(self, name: str, enum_value) -> dict:
        extensions, directives, _ = _split_extensions(enum_value.extensions)
        return {
            "value": name if enum_value.value is None else enum_value.value,
            "description": enum_value.description,
            "deprecation_reason": enum_value.deprecation_reason,
            "extensions": extensions,
            "directives": directives,
        }

    # -----------------------------------------------------------------
    # SDL documents
    # -----------------------------------------------------------------

    def parse_types_from_string(self, sdl: str) -> TypeStorage:
        storage = TypeStorage()
        for tc in self.parse_types(self._parse_document(sdl)):
            storage.set(tc.get_type_name(), tc)
        return storage

    def parse_types(self, document: DocumentNode) -> list:
        types = []
        for definition in document.definitions:
            tc = self.make_schema_def(definition)
            if tc is not None:
                types.append(tc)
        return types

    def make_schema_def(self, definition):
        makers = {
            ObjectTypeDefinitionNode: self.make_type_def,
            InterfaceTypeDefinitionNode: self.make_interface_def,
            EnumTypeDefinitionNode: self.make_enum_def,
            UnionTypeDefinitionNode: self.make_union_def,
            ScalarTypeDefinitionNode: self.make_scalar_def,
            InputObjectTypeDefinitionNode: self.make_input_object_def,
            SchemaDefinitionNode: self.check_schema_def,
            DirectiveDefinitionNode: self._register_directive_def,
            ObjectTypeExtensionNode: self.make_extend_type_def,
            InputObjectTypeExtensionNode: self.make_extend_input_object_def,
            InterfaceTypeExtensionNode: self.make_extend_interface_def,
            UnionTypeExtensionNode: self.make_extend_union_def,
            EnumTypeExtensionNode: self.make_extend_enum_def,
            ScalarTypeExtensionNode: self.make_extend_scalar_def,
        }
        maker = makers.get(type(definition))
        if maker is None:
            raise MalformedDefinitionError(f'Type kind "{definition.kind}" not supported.')
        return maker(definition)

    def type_from_ast(self, type_node: TypeNode):
        if isinstance(type_node, ListTypeNode):
            return ListComposer(self.type_from_ast(type_node.type))
        if isinstance(type_node, NonNullTypeNode):
            return NonNullComposer(self.type_from_ast(type_node.type))
        return self._named_type_ref(type_node.name.value)

    def type_from_ast_input(self, type_node: TypeNode):
        tc = self.type_from_ast(type_node)
        if not is_some_input_type_composer(tc):
            raise WrongKindError(f"TypeAST should be for Input types. But received {tc!r}")
        return tc

    def type_from_ast_output(self, type_node: TypeNode):
        tc = self.type_from_ast(type_node)
        if not is_some_output_type_composer(tc):
            raise WrongKindError(f"TypeAST should be for Output types. But received {tc!r}")
        return tc

    def _default_from_ast(self, value_node, arg_type):
        if peek_named_tc(arg_type) is None:
            return value_from_ast_untyped(value_node)
        value = value_from_ast(value_node, arg_type.get_type())
        return value_from_ast_untyped(value_node) if value is Undefined else value

    def make_arguments(self, values) -> dict[str, dict]:
        result = {}
        for value in values or []:
            arg_type = self.type_from_ast_input(value.type)
            config = {
                "type": arg_type,
                "description": get_description(value),
                "deprecation_reason": self.get_deprecation_reason(value.directives),
                "directives": self.parse_directives(value.directives),
            }
            if value.default_value:
                config["default_value"] = self._default_from_ast(value.default_value, arg_type)
            result[value.name.value] = config
        return result

    def make_field_def_map(self, definition) -> dict[str, dict]:
        return {
            field.name.value: {
                "type": self.type_from_ast_output(field.type),
                "description": get_description(field),
                "args": self.make_arguments(field.arguments),
                "deprecation_reason": self.get_deprecation_reason(field.directives),
                "directives": self.parse_directives(field.directives),
            }
            for field in definition.fields or []
        }

    def make_input_field_def(self, definition) -> dict[str, dict]:
        result = {}
        for field in definition.fields or []:
            config = {
                "type": self.type_from_ast_input(field.type),
                "description": get_description(field),
                "deprecation_reason": self.get_deprecation_reason(field.directives),
                "directives": self.parse_directives(field.directives),
            }
            if field.default_value:
                config["default_value_ast"] = field.default_value
            result[field.name.value] = config
        return result

    def make_enum_values_def(self, definition) -> dict[str, dict]:
        return {
            value.name.value: {
                "description": get_description(value),
                "deprecation_reason": self.get_deprecation_reason(value.directives),
                "directives": self.parse_directives(value.directives),
            }
            for value in definition.values or []
        }

    def make_implemented_interfaces(self, definition) -> list:
        sc = self.schema_composer
        interfaces = []
        for iface in definition.interfaces or []:
            name = iface.name.value
            if sc.has_instance(name, InterfaceTypeComposer):
                interfaces.append(sc.get(name))
            else:
                interfaces.append(ThunkComposer(lambda name=name: sc.get_iftc(name), name))
        return interfaces

    def _completed_by_definition(self, name: str, tc_cls):
        """The composer an earlier extension created for ``name``, if any."""
        sc = self.schema_composer
        if name in self._extended_before_definition and sc.has_instance(name, tc_cls):
            self._extended_before_definition.discard(name)
            return sc.get(name)
        return None

    def _complete_fields(self, tc, definition, fields: dict) -> None:
        # base fields go first, fields added by the extension keep their config
        tc.set_fields({**fields, **tc.get_fields()})
        if get_description(definition):
            tc.set_description(get_description(definition))
        tc.set_directives(self.parse_directives(definition.directives) + tc.get_directives())

    def make_type_def(self, definition: ObjectTypeDefinitionNode) -> ObjectTypeComposer:
        name = definition.name.value
        fields = self.make_field_def_map(definition)
        interfaces = self.make_implemented_interfaces(definition)
        tc = self._completed_by_definition(name, ObjectTypeComposer)
        if tc is not None:
            self._complete_fields(tc, definition, fields)
            tc.add_interfaces(interfaces)
            return tc
        return self.schema_composer.create_object_tc(
            {
                "name": name,
                "description": get_description(definition),
                "fields": fields,
                "interfaces": interfaces,
                "directives": self.parse_directives(definition.directives),
            }
        )

    def make_interface_def(self, definition: InterfaceTypeDefinitionNode) -> InterfaceTypeComposer:
        name = definition.name.value
        fields = self.make_field_def_map(definition)
        interfaces = self.make_implemented_interfaces(definition)
        tc = self._completed_by_definition(name, InterfaceTypeComposer)
        if tc is not None:
            self._complete_fields(tc, definition, fields)
            tc.add_interfaces(interfaces)
            return tc
        return self.schema_composer.create_interface_tc(
            {
                "name": name,
                "description": get_description(definition),
                "fields": fields,
                "interfaces": interfaces,
                "directives": self.parse_directives(definition.directives),
            }
        )

    def make_input_object_def(self, definition: InputObjectTypeDefinitionNode) -> InputTypeComposer:
        name = definition.name.value
        fields = self.make_input_field_def(definition)
        tc = self._completed_by_definition(name, InputTypeComposer)
        if tc is not None:
            self._complete_fields(tc, definition, fields)
            return tc
        return self.schema_composer.create_input_tc(
            {
                "name": name,
                "description": get_description(definition),
                "fields": fields,
                "directives": self.parse_directives(definition.directives),
            }
        )

    def make_enum_def(self, definition: EnumTypeDefinitionNode) -> EnumTypeComposer:
        name = definition.name.value
        values = self.make_enum_values_def(definition)
        tc = self._completed_by_definition(name, EnumTypeComposer)
        if tc is not None:
            self._complete_fields(tc, definition, values)
            return tc
        return self.schema_composer.create_enum_tc(
            {
                "name": name,
                "description": get_description(definition),
                "values": values,
                "directives": self.parse_directives(definition.directives),
            }
        )

    def make_union_def(self, definition: UnionTypeDefinitionNode) -> UnionTypeComposer:
        name = definition.name.value
        member_names = [ref.name.value for ref in definition.types or []]
        tc = self._completed_by_definition(name, UnionTypeComposer)
        if tc is None:
            tc = self.schema_composer.create_union_tc(
                {"name": name, "description": get_description(definition), "types": member_names}
            )
            tc.set_directives(self.parse_directives(definition.directives))
            return tc
        tc.set_types(member_names + [t for t in tc.get_types()])
        if get_description(definition):
            tc.set_description(get_description(definition))
        tc.set_directives(self.parse_directives(definition.directives) + tc.get_directives())
        return tc

    def make_scalar_def(self, definition: ScalarTypeDefinitionNode) -> ScalarTypeComposer:
        name = definition.name.value
        tc = self.get_built_in_type(name) or self._completed_by_definition(name, ScalarTypeComposer)
        if tc is None:
            tc = self.schema_composer.create_scalar_tc({"name": name, "description": get_description(definition)})
        if definition.directives:
            tc.set_directives(self.parse_directives(definition.directives) + tc.get_directives())
        return tc

    def check_schema_def(self, definition: SchemaDefinitionNode) -> None:
        for operation_type in definition.operation_types:
            operation = operation_type.operation.value
            valid_name = ROOT_TYPE_NAMES[operation]
            actual_name = operation_type.type.name.value
            if actual_name != valid_name:
                raise MalformedDefinitionError(
                    f"Incorrect type name {actual_name!r} for {operation!r}. "
                    f'The valid definition is "schema {{ {operation}: {valid_name} }}"'
                )
        return None

    def make_directive_def(self, definition: DirectiveDefinitionNode) -> GraphQLDirective:
        args = {}
        for value in definition.arguments or []:
            arg_type = self.type_from_ast(value.type)
            if not is_some_input_type_composer(arg_type):
                raise WrongKindError("Non-input type as an argument.")
            gq_type = arg_type.get_type()
            args[value.name.value] = GraphQLArgument(
                gq_type,
                default_value=value_from_ast(value.default_value, gq_type) if value.default_value else Undefined,
                description=get_description(value),
            )
        return GraphQLDirective(
            name=definition.name.value,
            locations=[DirectiveLocation[location.value] for location in definition.locations],
            args=args,
            is_repeatable=definition.repeatable,
            description=get_description(definition),
            ast_node=definition,
        )

    def _register_directive_def(self, definition: DirectiveDefinitionNode) -> None:
        self.schema_composer.add_directive(self.make_directive_def(definition))
        return None

    # Extensions

    def _get_or_create_extended(self, name: str, get_or_create):
        if not self.schema_composer.has(name):
            self._extended_before_definition.add(name)
        return get_or_create(name)

    def _append_directives(self, tc, definition) -> None:
        if definition.directives:
            tc.set_directives(tc.get_directives() + self.parse_directives(definition.directives))

    def make_extend_type_def(self, definition: ObjectTypeExtensionNode) -> ObjectTypeComposer:
        tc = self._get_or_create_extended(definition.name.value, self.schema_composer.get_or_create_otc)
        tc.add_interfaces(self.make_implemented_interfaces(definition))
        tc.add_fields(self.make_field_def_map(definition))
        self._append_directives(tc, definition)
        return tc

    def make_extend_input_object_def(self, definition: InputObjectTypeExtensionNode) -> InputTypeComposer:
        tc = self._get_or_create_extended(definition.name.value, self.schema_composer.get_or_create_itc)
        tc.add_fields(self.make_input_field_def(definition))
        self._append_directives(tc, definition)
        return tc

    def make_extend_interface_def(self, definition: InterfaceTypeExtensionNode) -> InterfaceTypeComposer:
        tc = self._get_or_create_extended(definition.name.value, self.schema_composer.get_or_create_iftc)
        tc.add_interfaces(self.make_implemented_interfaces(definition))
        tc.add_fields(self.make_field_def_map(definition))
        self._append_directives(tc, definition)
        return tc

    def make_extend_union_def(self, definition: UnionTypeExtensionNode) -> UnionTypeComposer:
        tc = self._get_or_create_extended(definition.name.value, self.schema_composer.get_or_create_utc)
        tc.add_types([ref.name.value for ref in definition.types or []])
        self._append_directives(tc, definition)
        return tc

    def make_extend_enum_def(self, definition: EnumTypeExtensionNode) -> EnumTypeComposer:
        tc = self._get_or_create_extended(definition.name.value, self.schema_composer.get_or_create_etc)
        tc.add_fields(self.make_enum_values_def(definition))
        self._append_directives(tc, definition)
        return tc

    def make_extend_scalar_def(self, definition: ScalarTypeExtensionNode) -> ScalarTypeComposer:
        tc = self._get_or_create_extended(definition.name.value, self.schema_composer.get_or_create_stc)
        self._append_directives(tc, definition)
        return tc

    # Directives

    def get_deprecation_reason(self, directives) -> str | None:
        for directive in directives or []:
            if directive.name.value == GraphQLDeprecatedDirective.name:
                return get_argument_values(GraphQLDeprecatedDirective, directive).get("reason")
        return None

    def parse_directives(self, directives) -> list[dict]:
        """Directive usages as ``{"name", "args"}`` dicts.

        Arguments of a directive known to the schema composer are coerced
        against its definition; unknown directives keep the literal values.
        """
        sc = self.schema_composer
        result = []
        for directive in directives or []:
            name = directive.name.value
            if sc.has_directive(name):
                try:
                    args = get_argument_values(sc.get_directive(name), directive)
                except GraphQLError as e:
                    raise MalformedDefinitionError(f"Invalid arguments for directive @{name}: {e.message}") from e
            else:
                args = {arg.name.value: value_from_ast_untyped(arg.value) for arg in directive.arguments or []}
            result.append({"name": name, "args": args})
        return result
