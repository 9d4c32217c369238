"""SchemaComposer: the registry that owns every composer and builds the schema."""

import logging
from typing import Any, Callable

from graphql import (
    GraphQLDirective,
    GraphQLEnumType,
    GraphQLError,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
    build_schema,
    get_named_type,
    is_specified_directive,
    is_specified_scalar_type,
    print_type,
    specified_directives,
)
from graphql.utilities.print_schema import print_directive

from .base import NamedTypeComposer
from .enum_type import EnumTypeComposer
from .errors import MalformedDefinitionError, NotFoundError, WrongKindError
from .input_type import InputTypeComposer
from .interface_type import InterfaceTypeComposer
from .object_type import ObjectTypeComposer
from .options import BuildSchemaOpts, parse_options
from .resolver import Resolver
from .scalar_type import ScalarTypeComposer
from .type_helpers import (
    clone_type_to,
    is_enum_type_definition_string,
    is_input_type_definition_string,
    is_interface_type_definition_string,
    is_output_type_definition_string,
    is_scalar_type_definition_string,
    is_type_composer,
    is_union_type_definition_string,
    unwrap_tc,
)
from .type_mapper import ROOT_TYPE_NAMES, TypeMapper
from .type_storage import TypeStorage
from .union_type import UnionTypeComposer

logger = logging.getLogger(__name__)

_TEMP_CLASSES = (
    (GraphQLObjectType, ObjectTypeComposer),
    (GraphQLInputObjectType, InputTypeComposer),
    (GraphQLScalarType, ScalarTypeComposer),
    (GraphQLEnumType, EnumTypeComposer),
    (GraphQLInterfaceType, InterfaceTypeComposer),
    (GraphQLUnionType, UnionTypeComposer),
)

# Printing order of to_sdl() after the root types
_SDL_KIND_ORDER = (
    ScalarTypeComposer,
    EnumTypeComposer,
    InterfaceTypeComposer,
    ObjectTypeComposer,
    UnionTypeComposer,
    InputTypeComposer,
)

ROOT_TYPE_NAMES_BY_NAME = {name: operation for operation, name in ROOT_TYPE_NAMES.items()}


class SchemaComposer(TypeStorage):
    """Type registry, factory for composers and resolvers, and schema builder.

    Args:
        schema_or_sdl: Optional GraphQLSchema or SDL text whose types are
            loaded into the new composer

    Example:
        sc = SchemaComposer()
        sc.add_type_defs("type User { id: ID! name: String }")
        sc.query.add_fields({"me": {"type": "User", "resolve": lambda source, info: current_user}})
        schema = sc.build_schema()
    """

    def __init__(self, schema_or_sdl: GraphQLSchema | str | None = None):
        super().__init__()
        self.type_mapper = TypeMapper(self)
        self._schema_must_have_types: list = []
        self._directives: list[GraphQLDirective] = list(specified_directives)
        self._description: str | None = None

        schema = schema_or_sdl
        if isinstance(schema_or_sdl, str):
            try:
                schema = build_schema(schema_or_sdl)
            except GraphQLError as e:
                raise MalformedDefinitionError(f"Cannot build schema from SDL: {e.message}") from e

        if isinstance(schema, GraphQLSchema):
            self._load_schema(schema)

    def _load_schema(self, schema: GraphQLSchema) -> None:
        for directive in schema.directives:
            self.add_directive(directive)
        for name, gq_type in schema.type_map.items():
            if name.startswith("__"):
                continue
            self.type_mapper.convert_graphql_type_to_composer(gq_type)
        for root_name, root_type in (
            ("Query", schema.query_type),
            ("Mutation", schema.mutation_type),
            ("Subscription", schema.subscription_type),
        ):
            if root_type is not None:
                self.set(root_name, self.get(root_type))
        if schema.description:
            self.set_description(schema.description)

    def __repr__(self) -> str:
        return "SchemaComposer"

    # -----------------------------------------------------------------
    # Root types
    # -----------------------------------------------------------------

    @property
    def query(self) -> ObjectTypeComposer:
        return self.get_or_create_otc("Query")

    @property
    def mutation(self) -> ObjectTypeComposer:
        return self.get_or_create_otc("Mutation")

    @property
    def subscription(self) -> ObjectTypeComposer:
        return self.get_or_create_otc("Subscription")

    def get_description(self) -> str | None:
        return self._description

    def set_description(self, description: str | None):
        self._description = description
        return self

    # -----------------------------------------------------------------
    # Schema building
    # -----------------------------------------------------------------

    def build_schema(self, opts: BuildSchemaOpts | dict | None = None) -> GraphQLSchema:
        """Materialize the registry into a GraphQLSchema.

        Object typed fields whose type ends up without fields are removed
        first, recursively from every root. Empty Mutation and Subscription
        roots are left out of the schema.
        """
        opts = parse_options(BuildSchemaOpts, opts)
        if not self.has_instance("Query", ObjectTypeComposer):
            raise NotFoundError("NoRootType: you should add at least one field to the Query type")

        roots: dict[str, GraphQLObjectType] = {}
        for operation, root_name in ROOT_TYPE_NAMES.items():
            if not self.has_instance(root_name, ObjectTypeComposer):
                continue
            tc = self.get(root_name)
            self.remove_empty_types(tc)
            if operation == "query" or tc.get_field_names():
                roots[operation] = tc.get_type()

        types: dict[str, GraphQLNamedType] = {}
        if opts.keep_unused_types:
            for tc in self._unique_composers():
                name = tc.get_type_name()
                if name in ROOT_TYPE_NAMES.values() and ROOT_TYPE_NAMES_BY_NAME[name] not in roots:
                    continue
                types.setdefault(name, tc.get_type())
        for type_def in [*self._schema_must_have_types, *opts.types]:
            gq_type = self._named_graphql_type(type_def)
            types.setdefault(gq_type.name, gq_type)

        directives: dict[str, GraphQLDirective] = {}
        for directive in [*self._directives, *opts.directives]:
            directives.setdefault(directive.name, directive)

        return GraphQLSchema(
            query=roots.get("query"),
            mutation=roots.get("mutation"),
            subscription=roots.get("subscription"),
            types=list(types.values()) or None,
            directives=list(directives.values()),
            description=self.get_description() or opts.description,
        )

    def _named_graphql_type(self, type_def: Any) -> GraphQLNamedType:
        if isinstance(type_def, str):
            return self.get_any_tc(type_def).get_type()
        if is_type_composer(type_def):
            return unwrap_tc(type_def).get_type()
        if isinstance(type_def, (GraphQLNamedType, GraphQLList, GraphQLNonNull)):
            return get_named_type(type_def)
        raise WrongKindError(f"Cannot add {type_def!r} to the schema types")

    def add_schema_must_have_type(self, type_def: Any):
        """Include a type in the built schema even if no root field reaches it.

        Object types only reachable through an interface ``resolve_type``
        need this.
        """
        self._schema_must_have_types.append(type_def)
        return self

    def remove_empty_types(self, tc: ObjectTypeComposer) -> None:
        """Remove fields whose object type ends up without any fields.

        A type counts as filled when it has a non-object field or a field
        leading to another filled type. Everything else reachable from ``tc``
        is empty, including cycles such as ``type A { a: A }``.
        """
        reachable: dict[str, ObjectTypeComposer] = {}
        pending = [tc]
        while pending:
            current = pending.pop()
            if current.get_type_name() in reachable:
                continue
            reachable[current.get_type_name()] = current
            for field_name in current.get_field_names():
                field_tc = current.get_field_tc(field_name)
                if isinstance(field_tc, ObjectTypeComposer):
                    pending.append(field_tc)

        filled: set[str] = set()
        changed = True
        while changed:
            changed = False
            for type_name, current in reachable.items():
                if type_name in filled:
                    continue
                for field_name in current.get_field_names():
                    field_tc = current.get_field_tc(field_name)
                    if not isinstance(field_tc, ObjectTypeComposer) or field_tc.get_type_name() in filled:
                        filled.add(type_name)
                        changed = True
                        break

        for current in reachable.values():
            for field_name in current.get_field_names():
                field_tc = current.get_field_tc(field_name)
                if isinstance(field_tc, ObjectTypeComposer) and field_tc.get_type_name() not in filled:
                    logger.info(
                        "Deleting field %s.%s with type %s: the type does not have fields",
                        current.get_type_name(),
                        field_name,
                        field_tc.get_type_name(),
                    )
                    current.remove_field(field_name)

    # -----------------------------------------------------------------
    # Composing several schemas
    # -----------------------------------------------------------------

    def clone(self) -> "SchemaComposer":
        """Deep copy of every registered type; built-in scalars are shared."""
        sc = SchemaComposer()
        clone_map: dict = {}
        for key, tc in self.items():
            sc.set(key, clone_type_to(tc, sc, clone_map))
        sc._schema_must_have_types = [clone_type_to(t, sc, clone_map) for t in self._schema_must_have_types]
        sc._directives = list(self._directives)
        sc._description = self._description
        return sc

    def merge(self, schema: "GraphQLSchema | SchemaComposer"):
        """Load the types of another schema, merging the ones with the same name."""
        if isinstance(schema, SchemaComposer):
            other = schema
        elif isinstance(schema, GraphQLSchema):
            other = SchemaComposer(schema)
        else:
            raise WrongKindError("SchemaComposer.merge() accepts only GraphQLSchema or SchemaComposer instances.")

        incoming_tcs = other._unique_composers()
        # composers of `other` that merge into an existing composer of this one
        targets: dict = {}
        for tc in incoming_tcs:
            name = tc.get_type_name()
            if name in ROOT_TYPE_NAMES_BY_NAME and other.has(name) and other.get(name) is tc:
                targets[tc] = self.get_or_create_otc(name)
            elif self.has(name):
                targets[tc] = self.get_any_tc(name)

        clone_map = dict(targets)
        for tc in incoming_tcs:
            if tc not in targets:
                self.set(tc.get_type_name(), tc.clone_to(self, clone_map))

        for tc, target in targets.items():
            incoming = tc.clone_to(self, {k: v for k, v in clone_map.items() if k is not tc})
            if incoming is target:
                continue
            target.merge(incoming)
            self.delete(incoming.get_type())

        for directive in other.get_directives():
            self.add_directive(directive)
        return self

    def _unique_composers(self) -> list[NamedTypeComposer]:
        seen: dict[int, NamedTypeComposer] = {}
        for tc in self.values():
            if isinstance(tc, NamedTypeComposer):
                seen.setdefault(id(tc), tc)
        return list(seen.values())

    # -----------------------------------------------------------------
    # SDL type definitions and resolve maps
    # -----------------------------------------------------------------

    def add_type_defs(self, type_defs: str) -> TypeStorage:
        """Register every type of an SDL document.

        Root types in the document add their fields to the existing roots.
        Returns the parsed types keyed by name.
        """
        existing_roots = {
            name: self.get(name) for name in ROOT_TYPE_NAMES.values() if self.has_instance(name, ObjectTypeComposer)
        }
        types = self.type_mapper.parse_types_from_string(type_defs)

        for root_name in ROOT_TYPE_NAMES.values():
            if not types.has(root_name):
                continue
            parsed = types.get(root_name)
            if not isinstance(parsed, ObjectTypeComposer):
                raise WrongKindError(f"Type {root_name} in typedefs isn't an Object Type.")
            root = existing_roots.get(root_name)
            if root is None or root is parsed:
                continue
            self.set(root_name, root)
            root.add_fields(parsed.get_fields())
            root.add_interfaces(parsed.get_interfaces())
        return types

    def add_resolve_methods(self, types_fields_resolve: dict[str, dict[str, Any] | Any]) -> None:
        """Attach resolve functions (and enum values, scalars) from a graphql-tools style map.

        ``{"Query": {"me": resolve_me}, "Color": {"RED": "#f00"}, "Date": GraphQLScalarType(...)}``
        """
        for type_name, definition in types_fields_resolve.items():
            tc = self.get(type_name)
            if isinstance(tc, ScalarTypeComposer):
                if isinstance(definition, dict):
                    definition = GraphQLScalarType(**definition)
                if not isinstance(definition, GraphQLScalarType):
                    raise WrongKindError(f"Scalar {type_name} accepts GraphQLScalarType or its config dict")
                tc.merge(definition)
                if definition.name != type_name:
                    self.set(type_name, tc)
            elif isinstance(tc, ObjectTypeComposer):
                for field_name, resolve in definition.items():
                    tc.extend_field(field_name, {"resolve": resolve})
            elif isinstance(tc, EnumTypeComposer):
                for value_name, value in definition.items():
                    tc.extend_field(value_name, {"value": value})
            else:
                raise WrongKindError(f"Cannot add resolver to the following type: {tc!r}")

    def get_resolve_methods(self, exclude: list[str] | None = None) -> dict[str, dict[str, Any]]:
        """The inverse of add_resolve_methods(): field resolvers and non-trivial enum values."""
        exclude = exclude or []
        resolve_methods: dict[str, dict[str, Any]] = {}
        for tc in self._unique_composers():
            type_name = tc.get_type_name()
            if type_name in exclude:
                continue
            if isinstance(tc, ObjectTypeComposer):
                for field_name in tc.get_field_names():
                    resolve = tc.get_field(field_name).get("resolve")
                    if resolve is not None:
                        resolve_methods.setdefault(type_name, {})[field_name] = resolve
            elif isinstance(tc, EnumTypeComposer):
                values = {name: tc.get_field(name).get("value", name) for name in tc.get_field_names()}
                if any(value != name for name, value in values.items()):
                    resolve_methods[type_name] = values
        return resolve_methods

    # -----------------------------------------------------------------
    # Factories
    # -----------------------------------------------------------------

    def create_object_tc(self, type_def: Any) -> ObjectTypeComposer:
        return ObjectTypeComposer.create(type_def, self)

    def create_input_tc(self, type_def: Any) -> InputTypeComposer:
        return InputTypeComposer.create(type_def, self)

    def create_enum_tc(self, type_def: Any) -> EnumTypeComposer:
        return EnumTypeComposer.create(type_def, self)

    def create_interface_tc(self, type_def: Any) -> InterfaceTypeComposer:
        return InterfaceTypeComposer.create(type_def, self)

    def create_union_tc(self, type_def: Any) -> UnionTypeComposer:
        return UnionTypeComposer.create(type_def, self)

    def create_scalar_tc(self, type_def: Any) -> ScalarTypeComposer:
        return ScalarTypeComposer.create(type_def, self)

    def create_resolver(self, opts: dict[str, Any]) -> Resolver:
        return Resolver(opts, self)

    def create_tc(self, type_or_sdl: Any) -> NamedTypeComposer:
        """Create and register a composer of whatever kind ``type_or_sdl`` describes."""
        keyable = isinstance(type_or_sdl, (str, GraphQLNamedType))
        if keyable and self.has(type_or_sdl):
            return self.get(type_or_sdl)
        tc = type_or_sdl if isinstance(type_or_sdl, NamedTypeComposer) else self.create_temp_tc(type_or_sdl)
        type_name = tc.get_type_name()
        self.set(type_name, tc)
        if keyable and type_or_sdl != type_name:
            self.set(type_or_sdl, tc)
        return tc

    def create_temp_tc(self, type_or_sdl: Any) -> NamedTypeComposer:
        """Like create_tc(), without registering the composer under its name."""
        type_def = type_or_sdl
        if isinstance(type_or_sdl, str):
            type_def = self.type_mapper.convert_sdl_type_definition(type_or_sdl)

        if is_type_composer(type_def):
            return unwrap_tc(type_def)
        for gq_cls, tc_cls in _TEMP_CLASSES:
            if isinstance(type_def, gq_cls):
                return tc_cls.create_temp(type_def, self)
        raise MalformedDefinitionError(f"Cannot create as TypeComposer the following value: {type_or_sdl!r}")

    def _get_or_create(self, type_name: str, tc_cls, on_create: Callable | None):
        if self.has(type_name):
            tc = self.get(type_name)
            if not isinstance(tc, tc_cls):
                raise WrongKindError(f"Type {type_name} is {type(tc).__name__}, not {tc_cls.__name__}")
            return tc
        tc = tc_cls.create(type_name, self)
        if on_create is not None:
            on_create(tc)
        return tc

    def get_or_create_otc(self, type_name: str, on_create: Callable | None = None) -> ObjectTypeComposer:
        return self._get_or_create(type_name, ObjectTypeComposer, on_create)

    def get_or_create_itc(self, type_name: str, on_create: Callable | None = None) -> InputTypeComposer:
        return self._get_or_create(type_name, InputTypeComposer, on_create)

    def get_or_create_etc(self, type_name: str, on_create: Callable | None = None) -> EnumTypeComposer:
        return self._get_or_create(type_name, EnumTypeComposer, on_create)

    def get_or_create_iftc(self, type_name: str, on_create: Callable | None = None) -> InterfaceTypeComposer:
        return self._get_or_create(type_name, InterfaceTypeComposer, on_create)

    def get_or_create_utc(self, type_name: str, on_create: Callable | None = None) -> UnionTypeComposer:
        return self._get_or_create(type_name, UnionTypeComposer, on_create)

    def get_or_create_stc(self, type_name: str, on_create: Callable | None = None) -> ScalarTypeComposer:
        return self._get_or_create(type_name, ScalarTypeComposer, on_create)

    def _get_of_kind(self, type_name: Any, tc_cls):
        if self.has(type_name):
            tc = self.get(type_name)
            if isinstance(tc, tc_cls):
                return tc
        raise NotFoundError(f"Cannot find {tc_cls.__name__} with name {type_name!r}")

    def get_otc(self, type_name: Any) -> ObjectTypeComposer:
        return self._get_of_kind(type_name, ObjectTypeComposer)

    def get_itc(self, type_name: Any) -> InputTypeComposer:
        return self._get_of_kind(type_name, InputTypeComposer)

    def get_etc(self, type_name: Any) -> EnumTypeComposer:
        return self._get_of_kind(type_name, EnumTypeComposer)

    def get_iftc(self, type_name: Any) -> InterfaceTypeComposer:
        return self._get_of_kind(type_name, InterfaceTypeComposer)

    def get_utc(self, type_name: Any) -> UnionTypeComposer:
        return self._get_of_kind(type_name, UnionTypeComposer)

    def get_stc(self, type_name: Any) -> ScalarTypeComposer:
        return self._get_of_kind(type_name, ScalarTypeComposer)

    def get_any_tc(self, type_or_name: Any) -> NamedTypeComposer:
        """The named composer for a name, a composer or wrapper, or a graphql-core type."""
        type_def = self.get(type_or_name) if isinstance(type_or_name, str) else type_or_name
        if is_type_composer(type_def):
            return unwrap_tc(type_def)
        if isinstance(type_def, (GraphQLList, GraphQLNonNull)):
            type_def = get_named_type(type_def)
        if isinstance(type_def, GraphQLNamedType):
            if self.has(type_def):
                return self.get(type_def)
            for gq_cls, tc_cls in _TEMP_CLASSES:
                if isinstance(type_def, gq_cls):
                    return tc_cls.create(type_def, self)
        raise NotFoundError(f"Type with name {type_or_name!r} cannot be obtained as any Composer helper.")

    def _is_kind(self, type_def: Any, sdl_check: Callable[[str], bool], tc_cls) -> bool:
        if isinstance(type_def, str) and sdl_check(type_def):
            return True
        if not isinstance(type_def, (str, GraphQLNamedType)) and not is_type_composer(type_def):
            return False
        if isinstance(type_def, (str, GraphQLNamedType)) and not self.has(type_def):
            return False
        return isinstance(self.get_any_tc(type_def), tc_cls)

    def is_object_type(self, type_def: Any) -> bool:
        return self._is_kind(type_def, is_output_type_definition_string, ObjectTypeComposer)

    def is_input_object_type(self, type_def: Any) -> bool:
        return self._is_kind(type_def, is_input_type_definition_string, InputTypeComposer)

    def is_scalar_type(self, type_def: Any) -> bool:
        return self._is_kind(type_def, is_scalar_type_definition_string, ScalarTypeComposer)

    def is_enum_type(self, type_def: Any) -> bool:
        return self._is_kind(type_def, is_enum_type_definition_string, EnumTypeComposer)

    def is_interface_type(self, type_def: Any) -> bool:
        return self._is_kind(type_def, is_interface_type_definition_string, InterfaceTypeComposer)

    def is_union_type(self, type_def: Any) -> bool:
        return self._is_kind(type_def, is_union_type_definition_string, UnionTypeComposer)

    # -----------------------------------------------------------------
    # Storage overrides
    # -----------------------------------------------------------------

    def clear(self) -> None:
        super().clear()
        self.type_mapper = TypeMapper(self)
        self._schema_must_have_types = []
        self._directives = list(specified_directives)

    def add(self, type_or_sdl: Any) -> str:
        """Register a composer (or anything create_tc() accepts); returns its type name."""
        return self.create_tc(type_or_sdl).get_type_name()

    # -----------------------------------------------------------------
    # Directives
    # -----------------------------------------------------------------

    def add_directive(self, directive: GraphQLDirective):
        if not isinstance(directive, GraphQLDirective):
            raise WrongKindError(
                f"You should provide GraphQLDirective to SchemaComposer.add_directive(), but received: {directive!r}"
            )
        if not self.has_directive(directive):
            self._directives.append(directive)
        return self

    def remove_directive(self, directive: GraphQLDirective | str):
        if isinstance(directive, str):
            name = directive.removeprefix("@")
            self._directives = [d for d in self._directives if d.name != name]
        else:
            self._directives = [d for d in self._directives if d is not directive]
        return self

    def get_directives(self) -> list[GraphQLDirective]:
        return self._directives

    def get_directive(self, name: str) -> GraphQLDirective:
        name = name.removeprefix("@")
        for directive in self._directives:
            if directive.name == name:
                return directive
        raise NotFoundError(f"Directive instance with name {name} does not exists.")

    def has_directive(self, directive: GraphQLDirective | str | None) -> bool:
        if not directive:
            return False
        if isinstance(directive, str):
            name = directive.removeprefix("@")
            return any(d.name == name for d in self._directives)
        return any(d is directive for d in self._directives)

    # -----------------------------------------------------------------
    # SDL output
    # -----------------------------------------------------------------

    def get_type_sdl(self, type_name: str, deep: bool = False, exclude: list[str] | None = None) -> str:
        return self.get_any_tc(type_name).to_sdl(deep=deep, exclude=exclude)

    def to_sdl(self, exclude: list[str] | None = None, include: list[str] | None = None) -> str:
        """Print custom directives and types, roots first, then grouped by kind.

        ``include`` limits the output to the named types and everything they
        reference; ``exclude`` drops the named types.
        """
        exclude = set(exclude or [])
        if include:
            composers: dict[str, NamedTypeComposer] = {}
            for name in include:
                tc = self.get_any_tc(name)
                composers[tc.get_type_name()] = tc
                tc.get_nested_tcs(list(exclude), composers)
        else:
            composers = {tc.get_type_name(): tc for tc in self._unique_composers()}

        root_names = list(ROOT_TYPE_NAMES.values())

        def sort_key(tc: NamedTypeComposer):
            name = tc.get_type_name()
            if name in root_names:
                return (0, root_names.index(name), name)
            kind = next(i for i, cls in enumerate(_SDL_KIND_ORDER) if isinstance(tc, cls))
            return (1, kind, name)

        printable = [
            tc
            for name, tc in composers.items()
            if name not in exclude and not is_specified_scalar_type(tc.get_type())
        ]
        parts = [print_directive(d) for d in self._directives if not is_specified_directive(d)]
        parts.extend(print_type(tc.get_type()) for tc in sorted(printable, key=sort_key))
        return "\n\n".join(parts)
