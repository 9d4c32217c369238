"""Option models accepted by the composer APIs.

Every API that takes options accepts either one of these models or a plain
dict, which is validated with the matching model.
"""

from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import MalformedDefinitionError


class ComposeOptions(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")


class ToInputTypeOpts(ComposeOptions):
    """Naming of input types derived from object types."""

    prefix: str = ""
    postfix: str = "Input"


class FilterArgOpts(ComposeOptions):
    """Options of Resolver.add_filter_arg().

    Attributes:
        name: Field name inside the filter input type
        type: Type definition of that field
        description: Field description
        query: ``query(raw_query, value, resolve_params)`` called before the
            previous resolve when the field has a value
        filter_type_name_fallback: Name of the filter input type created if
            the resolver has no ``filter`` argument yet
        default_value: Merged into the ``filter`` argument default
    """

    name: str
    type: Any
    description: str | None = None
    query: Callable[..., Any] | None = None
    filter_type_name_fallback: str | None = None
    default_value: Any = None


class SortArgOpts(ComposeOptions):
    """Options of Resolver.add_sort_arg().

    ``value`` is either the runtime value of the enum entry or a function
    ``value(resolve_params)`` computing the sort argument at resolve time.
    """

    name: str
    value: Any
    description: str | None = None
    deprecation_reason: str | None = None
    sort_type_name_fallback: str | None = None


class RelationOpts(ComposeOptions):
    """Options of ObjectTypeComposer.add_relation() for resolver relations."""

    resolver: Any
    prepare_args: dict[str, Any] = Field(default_factory=dict)
    projection: dict[str, Any] | None = None
    description: str | None = None
    deprecation_reason: str | None = None
    catch_errors: bool = True
    extensions: dict[str, Any] = Field(default_factory=dict)


class BuildSchemaOpts(ComposeOptions):
    """Extra configuration for SchemaComposer.build_schema()."""

    keep_unused_types: bool = False
    types: list[Any] = Field(default_factory=list)
    directives: list[Any] = Field(default_factory=list)
    description: str | None = None


OptionsT = TypeVar("OptionsT", bound=ComposeOptions)


def parse_options(model: type[OptionsT], value: OptionsT | dict | None) -> OptionsT:
    """Validate a dict into ``model``; models pass through unchanged."""
    if isinstance(value, model):
        return value
    try:
        return model.model_validate(value or {})
    except ValidationError as e:
        raise MalformedDefinitionError(f"Invalid {model.__name__}: {e}") from e
