"""Shared machinery of the named type composers.

A named composer owns exactly one graphql-core type instance for its whole
life. Field maps are kept as plain config dicts on the composer; the
graphql-core instance reads them through a thunk, and every mutation drops
the instance's cached field map so the next read reflects the latest write.
"""

import inspect
from typing import Any, Callable

from graphql import GraphQLArgument, GraphQLField, GraphQLNamedType, Undefined, print_type

from .errors import (
    DuplicateOrInvalidNameError,
    MalformedDefinitionError,
    NotFoundError,
    OwnershipError,
    WrongKindError,
    error_context,
)
from .options import ToInputTypeOpts
from .resolver import Resolver
from .type_helpers import is_type_composer, replace_tc, unwrap_tc
from .wrappers import ListComposer, NonNullComposer

DEFAULT_DEPRECATION_REASON = "deprecated"

# graphql-core caches these on first access via cached_property
_CACHED_TYPE_ATTRS = ("fields", "interfaces", "types", "_value_lookup")


class NamedTypeComposer:
    """Base class for Object, Input, Enum, Scalar, Interface and Union composers."""

    is_output_kind = True
    is_input_kind = False

    def __init__(self, gq_type: GraphQLNamedType, schema_composer):
        from .schema_composer import SchemaComposer

        if not isinstance(schema_composer, SchemaComposer):
            raise OwnershipError(
                f"You must provide SchemaComposer instance as a second argument for {type(self).__name__}"
            )
        self.schema_composer = schema_composer
        self._gq_type = gq_type
        self._extensions: dict[str, Any] = {}
        self._directives: list[dict] = []
        schema_composer.set(gq_type, self)

    @property
    def type_mapper(self):
        return self.schema_composer.type_mapper

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.get_type_name()}>"

    # -----------------------------------------------------------------
    # Type methods
    # -----------------------------------------------------------------

    def get_type(self) -> GraphQLNamedType:
        """Return the graphql-core type, synced with the composer state."""
        extensions = dict(self._extensions)
        if self._directives:
            extensions["directives"] = [dict(d) for d in self._directives]
        self._gq_type.extensions = extensions
        return self._gq_type

    def get_type_plural(self) -> ListComposer:
        return ListComposer(self)

    def get_type_non_null(self) -> NonNullComposer:
        return NonNullComposer(self)

    @property
    def List(self) -> ListComposer:
        return self.get_type_plural()

    @property
    def NonNull(self) -> NonNullComposer:
        return self.get_type_non_null()

    def get_type_name(self) -> str:
        return self._gq_type.name

    def set_type_name(self, name: str):
        self._gq_type.name = name
        self.schema_composer.add(self)
        return self

    def get_description(self) -> str | None:
        return self._gq_type.description

    def set_description(self, description: str | None):
        self._gq_type.description = description
        return self

    def _drop_type_cache(self) -> None:
        for attr in _CACHED_TYPE_ATTRS:
            self._gq_type.__dict__.pop(attr, None)

    def _create_clone_in(self, an_sc):
        """Empty composer of the same kind and name owned by ``an_sc``.

        The copy is registered under its name unless ``an_sc`` already has
        a type with that name.
        """
        cloned = type(self).create_temp(self.get_type_name(), an_sc)
        if not an_sc.has(self.get_type_name()):
            an_sc.set(self.get_type_name(), cloned)
        return cloned

    def _check_clone_name(self, new_type_name: str) -> None:
        if not new_type_name:
            raise DuplicateOrInvalidNameError("You should provide newTypeName:string for clone()")
        if new_type_name == self.get_type_name():
            raise DuplicateOrInvalidNameError("You should provide new type name. It is equal to current name.")

    def get_nested_tcs(self, exclude: list[str] | None = None, result: dict | None = None) -> dict:
        """Collect every named composer reachable from this one, keyed by name.

        Built-in scalars and names listed in ``exclude`` are skipped.
        """
        from .type_mapper import BUILT_IN_SCALAR_NAMES

        if result is None:
            result = {}
        exclude = exclude or []
        for ref in self._iter_type_refs():
            tc = unwrap_tc(ref)
            name = tc.get_type_name()
            if name in result or name in exclude or name in BUILT_IN_SCALAR_NAMES:
                continue
            result[name] = tc
            tc.get_nested_tcs(exclude, result)
        return result

    def _iter_type_refs(self):
        """Yield the type references this composer points at."""
        return iter(())

    def to_sdl(self, deep: bool = False, exclude: list[str] | None = None) -> str:
        if not deep:
            return print_type(self.get_type())
        exclude = list(exclude or [])
        parts = [] if self.get_type_name() in exclude else [print_type(self.get_type())]
        exclude.append(self.get_type_name())
        nested = self.get_nested_tcs(exclude)
        parts.extend(print_type(tc.get_type()) for tc in sorted(nested.values(), key=lambda t: t.get_type_name()))
        return "\n\n".join(parts)

    # -----------------------------------------------------------------
    # Extensions
    # -----------------------------------------------------------------

    def get_extensions(self) -> dict[str, Any]:
        return dict(self._extensions)

    def set_extensions(self, extensions: dict[str, Any] | None):
        self._extensions = dict(extensions or {})
        return self

    def extend_extensions(self, extensions: dict[str, Any]):
        self._extensions = {**self._extensions, **extensions}
        return self

    def clear_extensions(self):
        self._extensions = {}
        return self

    def get_extension(self, name: str) -> Any:
        return self._extensions.get(name)

    def has_extension(self, name: str) -> bool:
        return name in self._extensions

    def set_extension(self, name: str, value: Any):
        self._extensions[name] = value
        return self

    def remove_extension(self, name: str):
        self._extensions.pop(name, None)
        return self

    # -----------------------------------------------------------------
    # Type level directives
    # -----------------------------------------------------------------

    def get_directives(self) -> list[dict]:
        return list(self._directives)

    def set_directives(self, directives: list[dict]):
        self._directives = [dict(d) for d in directives]
        return self

    def get_directive_names(self) -> list[str]:
        return [d["name"] for d in self._directives]

    def get_directive_by_name(self, directive_name: str) -> dict | None:
        """Return the args of the first directive with this name."""
        for directive in self._directives:
            if directive["name"] == directive_name:
                return directive.get("args", {})
        return None

    def get_directive_by_id(self, index: int) -> dict | None:
        if 0 <= index < len(self._directives):
            return self._directives[index].get("args", {})
        return None


class FieldMapMixin:
    """Field (or enum value) CRUD on top of ``self._fields``.

    Subclasses provide ``_convert_field(name, config)``. Stored values are
    converted config dicts, or zero-arg callables that produce a config on
    first read.
    """

    _fields: dict[str, Any]
    _field_kind = "field"

    def _convert_field(self, name: str, config: Any) -> Any:
        raise NotImplementedError

    def _field_path(self, name: str) -> str:
        return f"{self.get_type_name()}.{name}"

    def get_fields(self) -> dict[str, Any]:
        return self._fields

    def get_field_names(self) -> list[str]:
        return list(self._fields)

    def has_field(self, name: str) -> bool:
        return name in self._fields

    def get_field(self, name: str) -> dict:
        if name not in self._fields:
            raise NotFoundError(
                f"Cannot get {self._field_kind} {name!r} from type {self.get_type_name()!r}. "
                f"{self._field_kind.capitalize()} does not exist."
            )
        config = self._fields[name]
        if callable(config):
            with error_context(self._field_path(name)):
                config = self._convert_field(name, config())
            self._fields[name] = config
        return config

    def set_fields(self, fields: dict[str, Any]):
        """Replace the whole field map."""
        return self._store_fields({name: self._convert_field(name, config) for name, config in fields.items()})

    def _store_fields(self, converted: dict[str, Any]):
        # every field map mutation goes through here
        self._fields = converted
        self._drop_type_cache()
        return self

    def set_field(self, name: str, config: Any):
        return self._store_fields({**self._fields, name: self._convert_field(name, config)})

    def add_fields(self, fields: dict[str, Any]):
        for name, config in fields.items():
            self.set_field(name, config)
        return self

    def remove_field(self, names: str | list[str]):
        """Remove fields; dotted names descend into nested field types."""
        if isinstance(names, str):
            names = [names]
        dropped = []
        for name in names:
            if "." in name:
                head, rest = name.split(".", 1)
                if self.has_field(head):
                    self.get_field_tc(head).remove_field(rest)
                continue
            dropped.append(name)
        return self._store_fields({k: v for k, v in self._fields.items() if k not in dropped})

    def remove_other_fields(self, keep: str | list[str]):
        if isinstance(keep, str):
            keep = [keep]
        return self._store_fields({k: v for k, v in self._fields.items() if k in keep})

    def reorder_fields(self, names: list[str]):
        ordered = {name: self._fields[name] for name in names if name in self._fields}
        for name, config in self._fields.items():
            ordered.setdefault(name, config)
        return self._store_fields(ordered)

    def extend_field(self, name: str, partial: dict[str, Any]):
        """Merge ``partial`` onto an existing field; extensions merge key-wise."""
        if not self.has_field(name):
            raise NotFoundError(
                f"Cannot extend field {name!r} from type {self.get_type_name()!r}. Field does not exist."
            )
        current = self.get_field(name)
        merged = {**current, **partial}
        merged["extensions"] = {**(current.get("extensions") or {}), **(partial.get("extensions") or {})}
        if "deprecation_reason" in partial and "directives" not in partial:
            merged["directives"] = [d for d in current.get("directives") or [] if d["name"] != "deprecated"]
        return self.set_field(name, merged)

    def deprecate_fields(self, fields: str | list[str] | dict[str, str]):
        """Mark fields deprecated. Nothing changes if any name is unknown."""
        if isinstance(fields, str):
            fields = {fields: DEFAULT_DEPRECATION_REASON}
        elif isinstance(fields, (list, tuple)):
            fields = {name: DEFAULT_DEPRECATION_REASON for name in fields}

        missing = [name for name in fields if not self.has_field(name)]
        if missing:
            raise NotFoundError(
                f"Cannot deprecate unexisting field(s) {missing!r} from type {self.get_type_name()!r}"
            )
        for name, reason in fields.items():
            self.extend_field(name, {"deprecation_reason": reason})
        return self

    def get_field_type_ref(self, name: str):
        """The composer or wrapper stored in the field's ``type`` slot."""
        return self.get_field(name)["type"]

    def get_field_type(self, name: str):
        """The graphql-core type of a field (forces deferred references)."""
        with error_context(self._field_path(name)):
            return self.get_field_type_ref(name).get_type()

    def get_field_type_name(self, name: str) -> str:
        return self.get_field_type_ref(name).get_type_name()

    def get_field_tc(self, name: str):
        """The unwrapped named composer of a field's type."""
        with error_context(self._field_path(name)):
            return unwrap_tc(self.get_field_type_ref(name))

    def is_field_non_null(self, name: str) -> bool:
        return isinstance(self.get_field_type_ref(name), NonNullComposer)

    def make_field_non_null(self, names: str | list[str]):
        for name in _as_list(names):
            if self.has_field(name):
                ref = self.get_field_type_ref(name)
                if not isinstance(ref, NonNullComposer):
                    self.extend_field(name, {"type": NonNullComposer(ref)})
        return self

    def make_field_nullable(self, names: str | list[str]):
        for name in _as_list(names):
            if self.has_field(name):
                ref = self.get_field_type_ref(name)
                if isinstance(ref, NonNullComposer):
                    self.extend_field(name, {"type": ref.of_type})
        return self

    def is_field_plural(self, name: str) -> bool:
        ref = self.get_field_type_ref(name)
        if isinstance(ref, NonNullComposer):
            ref = ref.of_type
        return isinstance(ref, ListComposer)

    def make_field_plural(self, names: str | list[str]):
        for name in _as_list(names):
            if self.has_field(name):
                ref = self.get_field_type_ref(name)
                if not isinstance(ref, ListComposer):
                    self.extend_field(name, {"type": ListComposer(ref)})
        return self

    def make_field_non_plural(self, names: str | list[str]):
        for name in _as_list(names):
            if self.has_field(name):
                ref = self.get_field_type_ref(name)
                if isinstance(ref, NonNullComposer) and isinstance(ref.of_type, ListComposer):
                    self.extend_field(name, {"type": NonNullComposer(ref.of_type.of_type)})
                elif isinstance(ref, ListComposer):
                    self.extend_field(name, {"type": ref.of_type})
        return self

    def _replace_field_type(self, name: str, new_tc) -> None:
        """Swap the named type of a field, keeping list/non-null wrappers."""
        self.extend_field(name, {"type": replace_tc(self.get_field_type_ref(name), new_tc)})

    # Field extensions

    def get_field_extensions(self, name: str) -> dict[str, Any]:
        return dict(self.get_field(name).get("extensions") or {})

    def set_field_extensions(self, name: str, extensions: dict[str, Any]):
        config = self.get_field(name)
        self.set_field(name, {**config, "extensions": dict(extensions)})
        return self

    def extend_field_extensions(self, name: str, extensions: dict[str, Any]):
        return self.set_field_extensions(name, {**self.get_field_extensions(name), **extensions})

    def clear_field_extensions(self, name: str):
        return self.set_field_extensions(name, {})

    def get_field_extension(self, name: str, extension_name: str) -> Any:
        return self.get_field_extensions(name).get(extension_name)

    def has_field_extension(self, name: str, extension_name: str) -> bool:
        return extension_name in self.get_field_extensions(name)

    def set_field_extension(self, name: str, extension_name: str, value: Any):
        return self.extend_field_extensions(name, {extension_name: value})

    def remove_field_extension(self, name: str, extension_name: str):
        extensions = self.get_field_extensions(name)
        extensions.pop(extension_name, None)
        return self.set_field_extensions(name, extensions)

    # Field directives

    def get_field_directives(self, name: str) -> list[dict]:
        return list(self.get_field(name).get("directives") or [])

    def set_field_directives(self, name: str, directives: list[dict]):
        config = {**self.get_field(name), "directives": [dict(d) for d in directives]}
        config.pop("deprecation_reason", None)
        return self.set_field(name, config)

    def get_field_directive_names(self, name: str) -> list[str]:
        return [d["name"] for d in self.get_field_directives(name)]

    def get_field_directive_by_name(self, name: str, directive_name: str) -> dict | None:
        for directive in self.get_field_directives(name):
            if directive["name"] == directive_name:
                return directive.get("args", {})
        return None

    def get_field_directive_by_id(self, name: str, index: int) -> dict | None:
        directives = self.get_field_directives(name)
        if 0 <= index < len(directives):
            return directives[index].get("args", {})
        return None


class OutputFieldsMixin:
    """Arguments and materialization of object and interface fields."""

    def get_field_config(self, name: str) -> GraphQLField:
        """The materialized graphql-core field."""
        return self._build_field(name)

    def _build_field(self, name: str) -> GraphQLField:
        config = self.get_field(name)
        path = self._field_path(name)
        with error_context(path):
            field_type = config["type"].get_type()
        return GraphQLField(
            field_type,
            args=build_graphql_args(config.get("args"), path),
            resolve=config.get("resolve"),
            subscribe=config.get("subscribe"),
            description=config.get("description"),
            deprecation_reason=config.get("deprecation_reason"),
            extensions=field_extensions(config),
        )

    def _build_field_map(self) -> dict[str, GraphQLField]:
        return {name: self._build_field(name) for name in list(self._fields)}

    def _iter_type_refs(self):
        for name in list(self._fields):
            config = self.get_field(name)
            yield config["type"]
            for arg in (config.get("args") or {}).values():
                yield arg["type"]
        yield from self._interfaces

    def get_field_args(self, field_name: str) -> dict[str, dict]:
        return self.get_field(field_name).get("args") or {}

    def get_field_arg_names(self, field_name: str) -> list[str]:
        return list(self.get_field_args(field_name))

    def has_field_arg(self, field_name: str, arg_name: str) -> bool:
        if not self.has_field(field_name):
            return False
        return arg_name in self.get_field_args(field_name)

    def get_field_arg(self, field_name: str, arg_name: str) -> dict:
        args = self.get_field_args(field_name)
        if arg_name not in args:
            raise NotFoundError(
                f"Cannot get arg {arg_name!r} for {self.get_type_name()}.{field_name}. Argument does not exist."
            )
        return args[arg_name]

    def get_field_arg_type_ref(self, field_name: str, arg_name: str):
        return self.get_field_arg(field_name, arg_name)["type"]

    def get_field_arg_type(self, field_name: str, arg_name: str):
        with error_context(f"{self.get_type_name()}.{field_name}.{arg_name}"):
            return self.get_field_arg_type_ref(field_name, arg_name).get_type()

    def get_field_arg_type_name(self, field_name: str, arg_name: str) -> str:
        return self.get_field_arg_type_ref(field_name, arg_name).get_type_name()

    def get_field_arg_tc(self, field_name: str, arg_name: str):
        with error_context(f"{self.get_type_name()}.{field_name}.{arg_name}"):
            return unwrap_tc(self.get_field_arg_type_ref(field_name, arg_name))

    def get_field_arg_itc(self, field_name: str, arg_name: str):
        from .input_type import InputTypeComposer

        tc = self.get_field_arg_tc(field_name, arg_name)
        if not isinstance(tc, InputTypeComposer):
            raise WrongKindError(
                f"{self.get_type_name()}.{field_name}({arg_name}) is not an InputTypeComposer"
            )
        return tc

    def set_field_args(self, field_name: str, args: dict[str, Any]):
        config = {**self.get_field(field_name), "args": args}
        return self.set_field(field_name, config)

    def add_field_args(self, field_name: str, args: dict[str, Any]):
        return self.set_field_args(field_name, {**self.get_field_args(field_name), **args})

    def set_field_arg(self, field_name: str, arg_name: str, arg_config: Any):
        return self.add_field_args(field_name, {arg_name: arg_config})

    def remove_field_arg(self, field_name: str, arg_names: str | list[str]):
        args = {k: v for k, v in self.get_field_args(field_name).items() if k not in _as_list(arg_names)}
        return self.set_field_args(field_name, args)

    def remove_field_other_args(self, field_name: str, keep: str | list[str]):
        args = {k: v for k, v in self.get_field_args(field_name).items() if k in _as_list(keep)}
        return self.set_field_args(field_name, args)

    def _set_field_arg_type(self, field_name: str, arg_name: str, new_type) -> None:
        arg = {**self.get_field_arg(field_name, arg_name), "type": new_type}
        self.set_field_arg(field_name, arg_name, arg)

    def is_field_arg_plural(self, field_name: str, arg_name: str) -> bool:
        ref = self.get_field_arg_type_ref(field_name, arg_name)
        if isinstance(ref, NonNullComposer):
            ref = ref.of_type
        return isinstance(ref, ListComposer)

    def make_field_arg_plural(self, field_name: str, arg_names: str | list[str]):
        for arg_name in _as_list(arg_names):
            if self.has_field_arg(field_name, arg_name):
                ref = self.get_field_arg_type_ref(field_name, arg_name)
                if not isinstance(ref, ListComposer):
                    self._set_field_arg_type(field_name, arg_name, ListComposer(ref))
        return self

    def make_field_arg_non_plural(self, field_name: str, arg_names: str | list[str]):
        for arg_name in _as_list(arg_names):
            if self.has_field_arg(field_name, arg_name):
                ref = self.get_field_arg_type_ref(field_name, arg_name)
                if isinstance(ref, NonNullComposer) and isinstance(ref.of_type, ListComposer):
                    self._set_field_arg_type(field_name, arg_name, NonNullComposer(ref.of_type.of_type))
                elif isinstance(ref, ListComposer):
                    self._set_field_arg_type(field_name, arg_name, ref.of_type)
        return self

    def is_field_arg_non_null(self, field_name: str, arg_name: str) -> bool:
        return isinstance(self.get_field_arg_type_ref(field_name, arg_name), NonNullComposer)

    def make_field_arg_non_null(self, field_name: str, arg_names: str | list[str]):
        for arg_name in _as_list(arg_names):
            if self.has_field_arg(field_name, arg_name):
                ref = self.get_field_arg_type_ref(field_name, arg_name)
                if not isinstance(ref, NonNullComposer):
                    self._set_field_arg_type(field_name, arg_name, NonNullComposer(ref))
        return self

    def make_field_arg_nullable(self, field_name: str, arg_names: str | list[str]):
        for arg_name in _as_list(arg_names):
            if self.has_field_arg(field_name, arg_name):
                ref = self.get_field_arg_type_ref(field_name, arg_name)
                if isinstance(ref, NonNullComposer):
                    self._set_field_arg_type(field_name, arg_name, ref.of_type)
        return self

    # Argument extensions and directives

    def get_field_arg_extensions(self, field_name: str, arg_name: str) -> dict[str, Any]:
        return dict(self.get_field_arg(field_name, arg_name).get("extensions") or {})

    def set_field_arg_extensions(self, field_name: str, arg_name: str, extensions: dict[str, Any]):
        arg = {**self.get_field_arg(field_name, arg_name), "extensions": dict(extensions)}
        return self.set_field_arg(field_name, arg_name, arg)

    def extend_field_arg_extensions(self, field_name: str, arg_name: str, extensions: dict[str, Any]):
        current = self.get_field_arg_extensions(field_name, arg_name)
        return self.set_field_arg_extensions(field_name, arg_name, {**current, **extensions})

    def get_field_arg_directives(self, field_name: str, arg_name: str) -> list[dict]:
        return list(self.get_field_arg(field_name, arg_name).get("directives") or [])

    def set_field_arg_directives(self, field_name: str, arg_name: str, directives: list[dict]):
        arg = {**self.get_field_arg(field_name, arg_name), "directives": [dict(d) for d in directives]}
        arg.pop("deprecation_reason", None)
        return self.set_field_arg(field_name, arg_name, arg)

    def get_field_arg_directive_names(self, field_name: str, arg_name: str) -> list[str]:
        return [d["name"] for d in self.get_field_arg_directives(field_name, arg_name)]

    def get_field_arg_directive_by_name(self, field_name: str, arg_name: str, directive_name: str) -> dict | None:
        for directive in self.get_field_arg_directives(field_name, arg_name):
            if directive["name"] == directive_name:
                return directive.get("args", {})
        return None


class InterfacesMixin:
    """Interface list management for object and interface composers."""

    _interfaces: list

    def get_interfaces(self) -> list:
        return list(self._interfaces)

    def get_interfaces_types(self) -> list:
        return [unwrap_tc(iface).get_type() for iface in self._interfaces]

    def set_interfaces(self, interfaces: list):
        self._interfaces = [self.type_mapper.convert_interface_type_definition(i) for i in interfaces]
        self._drop_type_cache()
        return self

    def has_interface(self, iface) -> bool:
        name = _interface_name(iface)
        return any(_interface_name(i) == name for i in self._interfaces)

    def add_interface(self, iface):
        if not self.has_interface(iface):
            self._interfaces.append(self.type_mapper.convert_interface_type_definition(iface))
            self._drop_type_cache()
        return self

    def add_interfaces(self, interfaces: list):
        for iface in interfaces:
            self.add_interface(iface)
        return self

    def remove_interface(self, iface):
        name = _interface_name(iface)
        self._interfaces = [i for i in self._interfaces if _interface_name(i) != name]
        self._drop_type_cache()
        return self

    def _build_interfaces(self) -> list:
        with error_context(f"{self.get_type_name()}.interfaces"):
            return [unwrap_tc(iface).get_type() for iface in self._interfaces]


class RecordIdMixin:
    """Record id helpers for object and interface composers."""

    _record_id_fn: Callable | None = None

    def set_record_id_fn(self, fn: Callable):
        self._record_id_fn = fn
        return self

    def has_record_id_fn(self) -> bool:
        return self._record_id_fn is not None

    def get_record_id_fn(self) -> Callable:
        if self._record_id_fn is None:
            raise NotFoundError(f"Type {self.get_type_name()} does not have RecordIdFn")
        return self._record_id_fn

    def get_record_id(self, source: Any, args: dict | None = None, context: Any = None) -> Any:
        return self.get_record_id_fn()(source, args, context)


def _as_list(value: str | list[str]) -> list[str]:
    return [value] if isinstance(value, str) else list(value)


def _interface_name(iface) -> str | None:
    if isinstance(iface, str):
        return iface
    if is_type_composer(iface):
        return iface.get_type_name()
    return getattr(iface, "name", None)


def field_extensions(config: dict) -> dict[str, Any]:
    """Extensions handed to graphql-core, carrying projection and directives."""
    extensions = dict(config.get("extensions") or {})
    if config.get("projection"):
        extensions["projection"] = config["projection"]
    if config.get("directives"):
        extensions["directives"] = [dict(d) for d in config["directives"]]
    return extensions


def build_graphql_args(args: dict[str, dict] | None, path: str) -> dict[str, GraphQLArgument]:
    result = {}
    for arg_name, arg in (args or {}).items():
        with error_context(f"{path}.{arg_name}"):
            arg_type = arg["type"].get_type()
        result[arg_name] = GraphQLArgument(
            arg_type,
            default_value=arg.get("default_value", Undefined),
            description=arg.get("description"),
            deprecation_reason=arg.get("deprecation_reason"),
            extensions=field_extensions(arg),
        )
    return result


def copy_field_config(config: Any) -> Any:
    """Shallow copy of a field config; args and extensions get their own dicts."""
    if not isinstance(config, dict):
        return config
    copied = dict(config)
    if "args" in copied:
        copied["args"] = {name: dict(arg) for name, arg in (copied["args"] or {}).items()}
    if "extensions" in copied:
        copied["extensions"] = dict(copied["extensions"] or {})
    if "directives" in copied:
        copied["directives"] = [dict(d) for d in copied["directives"] or []]
    return copied


class ResolversMixin:
    """Name-keyed registry of Resolver instances scoped to one type."""

    _resolvers: dict

    def get_resolvers(self) -> dict[str, Resolver]:
        return self._resolvers

    def has_resolver(self, name: str) -> bool:
        return name in self._resolvers

    def get_resolver(self, name: str, middlewares: list[Callable] | None = None) -> Resolver:
        if name not in self._resolvers:
            raise NotFoundError(f"Type {self.get_type_name()} does not have resolver with name {name!r}")
        resolver = self._resolvers[name]
        if middlewares:
            return resolver.with_middlewares(middlewares)
        return resolver

    def set_resolver(self, name: str, resolver: Resolver):
        if not isinstance(resolver, Resolver):
            raise WrongKindError("set_resolver() accepts only Resolver instance")
        self._resolvers[name] = resolver
        resolver.set_display_name(f"{self.get_type_name()}.{resolver.name}")
        return self

    def add_resolver(self, opts: Resolver | dict):
        """Attach a resolver; a dict is turned into one first."""
        if isinstance(opts, Resolver):
            resolver = opts
        elif isinstance(opts, dict):
            if not opts.get("name"):
                raise MalformedDefinitionError("resolver should have non-empty `name` property")
            opts = dict(opts)
            opts.setdefault("resolve", lambda rp: {})
            resolver = self.schema_composer.create_resolver(opts)
        else:
            raise WrongKindError(f"add_resolver() expects a Resolver or a dict, got {opts!r}")
        return self.set_resolver(resolver.name, resolver)

    def remove_resolver(self, name: str):
        self._resolvers.pop(name, None)
        return self

    def wrap_resolver(self, name: str, cb: Callable):
        return self.set_resolver(name, self.get_resolver(name).wrap(cb))

    def wrap_resolver_as(self, name: str, from_name: str, cb: Callable):
        return self.set_resolver(name, self.get_resolver(from_name).wrap(cb))

    def wrap_resolver_resolve(self, name: str, cb: Callable):
        return self.set_resolver(name, self.get_resolver(name).wrap_resolve(cb))


class InputTypeDerivationMixin:
    """Access to the input type derived from an object or interface type."""

    _itc = None

    def get_input_type_composer(self, opts: ToInputTypeOpts | dict | None = None):
        """Derive (once) an input type with the same data fields."""
        from .to_input_type import to_input_type

        if self._itc is None:
            self._itc = to_input_type(self, opts)
        return self._itc

    get_itc = get_input_type_composer

    def has_input_type_composer(self) -> bool:
        return self._itc is not None

    def set_input_type_composer(self, itc):
        self._itc = itc
        return self

    def remove_input_type_composer(self):
        self._itc = None
        return self


class TypeResolversMixin:
    """Resolve the concrete type of an interface or union value with check functions.

    Each registered object type has a ``check(value, info, abstract_type)``
    function; the first one returning a truthy value (or an awaitable
    resolving to one) wins. The fallback type is used when none matches.
    """

    _type_resolvers: dict
    _type_resolver_fallback = None

    def get_resolve_type(self) -> Callable | None:
        return self._gq_type.resolve_type

    def set_resolve_type(self, fn: Callable | None):
        self._gq_type.resolve_type = fn
        return self

    def get_type_resolvers(self) -> dict:
        return dict(self._type_resolvers)

    def has_type_resolver(self, tc) -> bool:
        return tc in self._type_resolvers

    def add_type_resolver(self, tc, check_fn: Callable):
        self._type_resolvers[tc] = check_fn
        self.set_resolve_type(self._resolve_type_by_checks)
        return self

    def remove_type_resolver(self, tc):
        self._type_resolvers.pop(tc, None)
        return self

    def set_type_resolver_fallback(self, tc):
        self._type_resolver_fallback = tc
        self.set_resolve_type(self._resolve_type_by_checks)
        return self

    def _fallback_type_name(self) -> str | None:
        if self._type_resolver_fallback is None:
            return None
        return self._type_resolver_fallback.get_type_name()

    def _resolve_type_by_checks(self, value, info, abstract_type):
        checks = list(self._type_resolvers.items())
        for index, (tc, check_fn) in enumerate(checks):
            result = check_fn(value, info, abstract_type)
            if inspect.isawaitable(result):
                return self._resolve_type_async(result, tc, checks[index + 1:], value, info, abstract_type)
            if result:
                return tc.get_type_name()
        return self._fallback_type_name()

    async def _resolve_type_async(self, pending, tc, rest, value, info, abstract_type):
        if await pending:
            return tc.get_type_name()
        for other_tc, check_fn in rest:
            result = check_fn(value, info, abstract_type)
            if inspect.isawaitable(result):
                result = await result
            if result:
                return other_tc.get_type_name()
        return self._fallback_type_name()
