"""ObjectTypeComposer: builder around one GraphQLObjectType."""

import inspect
import logging
from typing import Any, Callable

from graphql import GraphQLInterfaceType, GraphQLObjectType

from .base import (
    FieldMapMixin,
    InputTypeDerivationMixin,
    InterfacesMixin,
    NamedTypeComposer,
    OutputFieldsMixin,
    RecordIdMixin,
    ResolversMixin,
    copy_field_config,
)
from .errors import MalformedDefinitionError, OwnershipError, WrongKindError
from .misc import is_function, upper_first
from .options import RelationOpts, parse_options
from .resolver import Resolver
from .type_helpers import clone_type_to, is_type_name_string, replace_tc

logger = logging.getLogger(__name__)


class ObjectTypeComposer(
    FieldMapMixin,
    OutputFieldsMixin,
    InterfacesMixin,
    ResolversMixin,
    InputTypeDerivationMixin,
    RecordIdMixin,
    NamedTypeComposer,
):
    """Mutable builder around a GraphQLObjectType.

    Holds the field map as config dicts, a name-keyed registry of resolvers,
    and the relations added with add_relation().

    Example:
        sc = SchemaComposer()
        user_tc = sc.create_object_tc("type User { id: ID! name: String }")
        user_tc.add_fields({"age": "Int"})
        user_tc.add_resolver({"name": "findById", "type": user_tc, "args": {"id": "ID!"}})
    """

    is_output_kind = True
    is_input_kind = False

    def __init__(self, gq_type: GraphQLObjectType, schema_composer):
        super().__init__(gq_type, schema_composer)
        self._fields: dict[str, Any] = {}
        self._interfaces: list = []
        self._resolvers: dict[str, Resolver] = {}
        self._relations: dict[str, Any] = {}
        self._itc = None
        self._record_id_fn = None

        # Adopt whatever the wrapped type already declares
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
    def create_temp(cls, type_def: Any, schema_composer=None) -> "ObjectTypeComposer":
        """Create a composer without registering it under its name."""
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to ObjectTypeComposer.create_temp()")

        if isinstance(type_def, cls):
            return type_def
        if isinstance(type_def, str):
            if is_type_name_string(type_def):
                return cls(GraphQLObjectType(type_def, fields={}), schema_composer)
            tc = schema_composer.type_mapper.create_type(type_def)
            if not isinstance(tc, cls):
                raise WrongKindError(
                    "You should provide correct GraphQLObjectType type definition. "
                    "E.g. `type MyType { name: String }`"
                )
            return tc
        if isinstance(type_def, GraphQLObjectType):
            return cls(type_def, schema_composer)
        if isinstance(type_def, dict):
            if not type_def.get("name"):
                raise MalformedDefinitionError("Object type config must have a `name`")
            tc = cls(
                GraphQLObjectType(type_def["name"], fields={}, description=type_def.get("description")),
                schema_composer,
            )
            fields = type_def.get("fields") or {}
            tc.set_fields(fields() if is_function(fields) else fields)
            interfaces = type_def.get("interfaces") or []
            tc.set_interfaces(interfaces() if is_function(interfaces) else interfaces)
            if type_def.get("is_type_of"):
                tc.set_is_type_of(type_def["is_type_of"])
            tc.set_extensions(type_def.get("extensions"))
            tc.set_directives(type_def.get("directives") or [])
            return tc

        raise MalformedDefinitionError(
            "You should provide GraphQLObjectTypeConfig or string with type name to "
            f"ObjectTypeComposer.create(opts). Provided: {type_def!r}"
        )

    @classmethod
    def create(cls, type_def: Any, schema_composer=None) -> "ObjectTypeComposer":
        """Create a composer and register it under its type name."""
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to ObjectTypeComposer.create()")
        if isinstance(type_def, str) and schema_composer.has_instance(type_def, cls):
            return schema_composer.get(type_def)
        tc = cls.create_temp(type_def, schema_composer)
        schema_composer.add(tc)
        return tc

    # -----------------------------------------------------------------
    # Field methods
    # -----------------------------------------------------------------

    def _convert_field(self, name: str, config: Any) -> Any:
        if is_function(config):
            return config
        return self.type_mapper.convert_output_field_config(config, name, self.get_type_name())

    def add_nested_fields(self, fields: dict[str, Any]):
        """Add fields by dotted path, creating intermediate object types.

        ``{"meta.created": "Date"}`` adds a ``meta`` field of type
        ``<TypeName>Meta`` holding a ``created`` field.
        """
        for path, config in fields.items():
            if "." not in path:
                self.set_field(path, config)
                continue
            head, rest = path.split(".", 1)
            if not self.has_field(head):
                child = ObjectTypeComposer.create_temp(
                    f"{self.get_type_name()}{upper_first(head)}", self.schema_composer
                )
                self.set_field(head, {"type": child, "resolve": lambda source, info, **args: {}})
            child = self.get_field_tc(head)
            if not isinstance(child, ObjectTypeComposer):
                raise WrongKindError(
                    f"Cannot add nested field {path!r}: {self.get_type_name()}.{head} is not an object type"
                )
            child.add_nested_fields({rest: config})
        return self

    def get_field_otc(self, name: str) -> "ObjectTypeComposer":
        tc = self.get_field_tc(name)
        if not isinstance(tc, ObjectTypeComposer):
            raise WrongKindError(
                f"{self.get_type_name()}.get_field_otc({name!r}) must be ObjectTypeComposer, "
                f"but received {type(tc).__name__}"
            )
        return tc

    # -----------------------------------------------------------------
    # Type methods
    # -----------------------------------------------------------------

    def get_is_type_of(self) -> Callable | None:
        return self._gq_type.is_type_of

    def set_is_type_of(self, fn: Callable | None):
        self._gq_type.is_type_of = fn
        return self

    def clone(self, new_type_name: str) -> "ObjectTypeComposer":
        """Copy this type under a new name.

        Field configs are copied shallowly; resolvers are cloned and those
        returning this type are retargeted to the clone.
        """
        self._check_clone_name(new_type_name)
        cloned = ObjectTypeComposer.create_temp(new_type_name, self.schema_composer)
        cloned._fields = {name: copy_field_config(config) for name, config in self._fields.items()}
        cloned._interfaces = list(self._interfaces)
        cloned._relations = dict(self._relations)
        cloned._extensions = dict(self._extensions)
        cloned._directives = [dict(d) for d in self._directives]
        cloned._record_id_fn = self._record_id_fn
        cloned.set_description(self.get_description())
        cloned.set_is_type_of(self.get_is_type_of())
        cloned._drop_type_cache()

        for name, resolver in self._resolvers.items():
            new_type = replace_tc(resolver.type, lambda tc: cloned if tc is self else tc) if resolver.type else None
            cloned.set_resolver(name, resolver.clone(type=new_type))
        return cloned

    def clone_to(self, an_sc, clone_map: dict | None = None) -> "ObjectTypeComposer":
        """Copy this type (and everything it references) into another SchemaComposer."""
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
        cloned._extensions = dict(self._extensions)
        cloned._directives = [dict(d) for d in self._directives]
        cloned._record_id_fn = self._record_id_fn
        cloned.set_description(self.get_description())
        cloned.set_is_type_of(self.get_is_type_of())
        for name, resolver in self._resolvers.items():
            cloned.set_resolver(name, resolver.clone_to(an_sc, clone_map))
        return cloned

    def merge(self, type_def):
        """Merge fields and interfaces of another object/interface type into this one."""
        from .interface_type import InterfaceTypeComposer

        if isinstance(type_def, (GraphQLObjectType, GraphQLInterfaceType, str)):
            type_def = self.type_mapper.convert_output_type_definition(type_def)
        if not isinstance(type_def, (ObjectTypeComposer, InterfaceTypeComposer)):
            raise WrongKindError(
                f"Cannot merge {type_def!r} with ObjectType({self.get_type_name()}). "
                "Provided type should be GraphQLInterfaceType, GraphQLObjectType, "
                "InterfaceTypeComposer or ObjectTypeComposer."
            )
        fields = {name: copy_field_config(type_def.get_field(name)) for name in type_def.get_field_names()}
        self.add_fields(fields)
        self.add_interfaces(type_def.get_interfaces())
        return self

    # -----------------------------------------------------------------
    # Relations
    # -----------------------------------------------------------------

    def add_relation(self, field_name: str, opts: RelationOpts | dict):
        """Add a field produced by an existing resolver (or a plain field config).

        With a resolver, ``prepare_args`` maps resolver argument names to a
        literal value, a ``fn(source, args, context, info)`` computed per
        call, or None to drop the argument. Unless ``catch_errors`` is
        False, an error raised by the relation is logged and the field
        resolves to None.
        """
        if isinstance(opts, dict) and "resolver" in opts:
            for key in ("type", "resolve"):
                if key in opts:
                    raise MalformedDefinitionError(
                        f"You can not use `resolver` and `{key}` properties simultaneously for relation "
                        f"{self.get_type_name()}.{field_name}"
                    )

        if isinstance(opts, RelationOpts) or (isinstance(opts, dict) and "resolver" in opts):
            relation = parse_options(RelationOpts, opts)
            self._relations[field_name] = relation
            if is_function(relation.resolver):
                self._store_fields(
                    {**self._fields, field_name: lambda: self._relation_with_resolver_to_fc(relation, field_name)}
                )
            else:
                self.set_field(field_name, self._relation_with_resolver_to_fc(relation, field_name))
        elif isinstance(opts, dict) and "type" in opts:
            self._relations[field_name] = opts
            self.set_field(field_name, opts)
        else:
            raise MalformedDefinitionError(
                f"Relation {self.get_type_name()}.{field_name} must provide `resolver` or `type`"
            )
        return self

    def get_relations(self) -> dict[str, Any]:
        return self._relations

    def _relation_with_resolver_to_fc(self, opts: RelationOpts, field_name: str) -> dict:
        resolver = opts.resolver() if is_function(opts.resolver) else opts.resolver
        if not isinstance(resolver, Resolver):
            raise WrongKindError(
                f"You should provide correct Resolver object for relation {self.get_type_name()}.{field_name}"
            )

        args_config = dict(resolver.get_args())
        args_proto: dict[str, Any] = {}
        args_runtime: list[tuple[str, Callable]] = []
        for arg_name, value in opts.prepare_args.items():
            args_config.pop(arg_name, None)
            if is_function(value):
                args_runtime.append((arg_name, value))
            elif value is not None:
                args_proto[arg_name] = value

        field_resolve = resolver.get_field_resolver()
        relation_name = f"{self.get_type_name()}.{field_name}"
        catch_errors = opts.catch_errors

        def resolve(source, info, **args):
            new_args = {**args, **args_proto}
            for arg_name, fn in args_runtime:
                new_args[arg_name] = fn(source, args, info.context, info)

            if not catch_errors:
                return field_resolve(source, info, **new_args)
            try:
                payload = field_resolve(source, info, **new_args)
            except Exception:
                logger.exception("Relation %s raised an error", relation_name)
                return None
            if inspect.isawaitable(payload):
                return _catch_relation_errors(payload, relation_name)
            return payload

        return {
            "type": resolver.get_type_ref(),
            "description": opts.description or resolver.description,
            "deprecation_reason": opts.deprecation_reason,
            "args": args_config,
            "resolve": resolve,
            "projection": opts.projection,
            "extensions": {**resolver.extensions, **opts.extensions},
        }


async def _catch_relation_errors(payload, relation_name: str):
    try:
        return await payload
    except Exception:
        logger.exception("Relation %s raised an error", relation_name)
        return None
