"""UnionTypeComposer: builder around one GraphQLUnionType."""

from typing import Any

from graphql import GraphQLObjectType, GraphQLUnionType

from .base import NamedTypeComposer, TypeResolversMixin
from .errors import MalformedDefinitionError, OwnershipError, WrongKindError, error_context
from .misc import is_function
from .type_helpers import clone_type_to, is_type_composer, is_type_name_string, unwrap_tc


class UnionTypeComposer(TypeResolversMixin, NamedTypeComposer):
    """Mutable builder around a GraphQLUnionType.

    Member types are stored as object type composers (or deferred references
    to them) and materialized when graphql-core reads ``types``.
    """

    is_output_kind = True
    is_input_kind = False

    def __init__(self, gq_type: GraphQLUnionType, schema_composer):
        super().__init__(gq_type, schema_composer)
        self._types: list = []
        self._type_resolvers = {}

        existing_types = gq_type.types
        if existing_types:
            self.set_types(list(existing_types))

        gq_type._types = self._build_types
        self._drop_type_cache()

    @classmethod
    def create_temp(cls, type_def: Any, schema_composer=None) -> "UnionTypeComposer":
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to UnionTypeComposer.create_temp()")

        if isinstance(type_def, cls):
            return type_def
        if isinstance(type_def, str):
            if is_type_name_string(type_def):
                return cls(GraphQLUnionType(type_def, types=[]), schema_composer)
            tc = schema_composer.type_mapper.create_type(type_def)
            if not isinstance(tc, cls):
                raise WrongKindError(
                    "You should provide correct GraphQLUnionType type definition. E.g. `union MyType = Photo | Person`"
                )
            return tc
        if isinstance(type_def, GraphQLUnionType):
            return cls(type_def, schema_composer)
        if isinstance(type_def, dict):
            if not type_def.get("name"):
                raise MalformedDefinitionError("Union type config must have a `name`")
            tc = cls(
                GraphQLUnionType(
                    type_def["name"],
                    types=[],
                    resolve_type=type_def.get("resolve_type"),
                    description=type_def.get("description"),
                ),
                schema_composer,
            )
            types = type_def.get("types") or []
            tc.set_types(types() if is_function(types) else types)
            tc.set_extensions(type_def.get("extensions"))
            tc.set_directives(type_def.get("directives") or [])
            return tc

        raise MalformedDefinitionError(
            "You should provide GraphQLUnionTypeConfig or string with union name or SDL. "
            f"Provided: {type_def!r}"
        )

    @classmethod
    def create(cls, type_def: Any, schema_composer=None) -> "UnionTypeComposer":
        if schema_composer is None:
            raise OwnershipError("You must provide SchemaComposer instance to UnionTypeComposer.create()")
        if isinstance(type_def, str) and schema_composer.has_instance(type_def, cls):
            return schema_composer.get(type_def)
        tc = cls.create_temp(type_def, schema_composer)
        schema_composer.add(tc)
        return tc

    # -----------------------------------------------------------------
    # Member types
    # -----------------------------------------------------------------

    def _convert_member(self, type_def):
        tc = self.type_mapper.convert_output_type_definition(type_def, "", self.get_type_name())
        if not is_type_composer(tc):
            raise WrongKindError(f"Union {self.get_type_name()} accepts only object types, got {type_def!r}")
        return tc

    def _build_types(self) -> list[GraphQLObjectType]:
        with error_context(f"{self.get_type_name()}.types"):
            return [unwrap_tc(tc).get_type() for tc in self._types]

    def get_types(self) -> list:
        return list(self._types)

    def get_type_names(self) -> list[str]:
        return [tc.get_type_name() for tc in self._types]

    def get_type_composers(self) -> list:
        return [unwrap_tc(tc) for tc in self._types]

    def has_type(self, type_def) -> bool:
        if isinstance(type_def, str):
            name = type_def
        elif is_type_composer(type_def):
            name = type_def.get_type_name()
        else:
            name = getattr(type_def, "name", None)
        return name in self.get_type_names()

    def set_types(self, types: list):
        self._types = [self._convert_member(t) for t in types]
        self._drop_type_cache()
        return self

    def add_type(self, type_def):
        tc = self._convert_member(type_def)
        if not self.has_type(tc):
            self._types.append(tc)
            self._drop_type_cache()
        return self

    def add_types(self, types: list):
        for type_def in types:
            self.add_type(type_def)
        return self

    def remove_type(self, names: str | list[str]):
        names = [names] if isinstance(names, str) else list(names)
        self._types = [tc for tc in self._types if tc.get_type_name() not in names]
        self._drop_type_cache()
        return self

    def remove_other_types(self, names: str | list[str]):
        names = [names] if isinstance(names, str) else list(names)
        self._types = [tc for tc in self._types if tc.get_type_name() in names]
        self._drop_type_cache()
        return self

    def clear_types(self):
        self._types = []
        self._drop_type_cache()
        return self

    def _iter_type_refs(self):
        return iter(list(self._types))

    # -----------------------------------------------------------------
    # Misc
    # -----------------------------------------------------------------

    def clone(self, new_type_name: str) -> "UnionTypeComposer":
        self._check_clone_name(new_type_name)
        cloned = UnionTypeComposer.create_temp(new_type_name, self.schema_composer)
        cloned._types = list(self._types)
        cloned._type_resolvers = dict(self._type_resolvers)
        cloned._type_resolver_fallback = self._type_resolver_fallback
        cloned._extensions = dict(self._extensions)
        cloned._directives = [dict(d) for d in self._directives]
        cloned.set_description(self.get_description())
        cloned.set_resolve_type(self.get_resolve_type())
        cloned._drop_type_cache()
        return cloned

    def clone_to(self, an_sc, clone_map: dict | None = None) -> "UnionTypeComposer":
        if clone_map is None:
            clone_map = {}
        if self in clone_map:
            return clone_map[self]
        cloned = self._create_clone_in(an_sc)
        clone_map[self] = cloned
        cloned.set_types([clone_type_to(tc, an_sc, clone_map) for tc in self._types])
        for tc, check_fn in self._type_resolvers.items():
            cloned.add_type_resolver(clone_type_to(tc, an_sc, clone_map), check_fn)
        cloned._extensions = dict(self._extensions)
        cloned._directives = [dict(d) for d in self._directives]
        cloned.set_description(self.get_description())
        if not self._type_resolvers:
            cloned.set_resolve_type(self.get_resolve_type())
        return cloned

    def merge(self, type_def):
        if isinstance(type_def, (GraphQLUnionType, str)):
            type_def = self.type_mapper.convert_output_type_definition(type_def)
        if not isinstance(type_def, UnionTypeComposer):
            raise WrongKindError(
                f"Cannot merge {type_def!r} with UnionType({self.get_type_name()}). "
                "Provided type should be GraphQLUnionType or UnionTypeComposer."
            )
        self.add_types(type_def.get_types())
        return self
