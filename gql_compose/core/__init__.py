"""Core modules for composing GraphQL schemas."""

from .base import NamedTypeComposer
from .enum_type import EnumTypeComposer
from .errors import (
    ComposeError,
    DuplicateOrInvalidNameError,
    MalformedDefinitionError,
    NotFoundError,
    OwnershipError,
    WrongKindError,
)
from .input_type import InputTypeComposer
from .interface_type import InterfaceTypeComposer
from .loader import collect_schema_files, load_schema_composer
from .object_type import ObjectTypeComposer
from .options import (
    BuildSchemaOpts,
    FilterArgOpts,
    RelationOpts,
    SortArgOpts,
    ToInputTypeOpts,
)
from .projection import get_flat_projection_from_ast, get_projection_from_ast
from .resolver import ResolveParams, Resolver
from .scalar_type import GraphQLDate, GraphQLJSON, GraphQLJSONObject, ScalarTypeComposer
from .schema_composer import SchemaComposer
from .to_input_type import to_input_type
from .type_mapper import TypeMapper
from .type_storage import TypeStorage
from .union_type import UnionTypeComposer
from .wrappers import ListComposer, NonNullComposer, ThunkComposer

__all__ = [
    # Registry
    "SchemaComposer",
    "TypeStorage",
    "TypeMapper",
    # Composers
    "NamedTypeComposer",
    "ObjectTypeComposer",
    "InputTypeComposer",
    "EnumTypeComposer",
    "ScalarTypeComposer",
    "InterfaceTypeComposer",
    "UnionTypeComposer",
    # Wrappers
    "ListComposer",
    "NonNullComposer",
    "ThunkComposer",
    # Resolvers
    "Resolver",
    "ResolveParams",
    "get_projection_from_ast",
    "get_flat_projection_from_ast",
    "to_input_type",
    # Scalars
    "GraphQLJSON",
    "GraphQLJSONObject",
    "GraphQLDate",
    # Options
    "BuildSchemaOpts",
    "FilterArgOpts",
    "RelationOpts",
    "SortArgOpts",
    "ToInputTypeOpts",
    # Loading
    "collect_schema_files",
    "load_schema_composer",
    # Errors
    "ComposeError",
    "DuplicateOrInvalidNameError",
    "MalformedDefinitionError",
    "NotFoundError",
    "OwnershipError",
    "WrongKindError",
]
