"""Resolver: a named, typed, argument-bearing resolve function.

Resolvers are never changed in place by the composition helpers: ``wrap``,
``add_filter_arg``, ``with_middlewares`` and friends return a clone whose
``parent`` is the resolver it was derived from, so one base resolver can
feed several differently configured fields.

A resolver's own ``resolve`` takes a single ResolveParams object.
``get_field_resolver()`` adapts it to graphql-core's
``resolve(source, info, **args)`` signature.
"""

import dataclasses
import inspect
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable

from graphql import GraphQLArgument, GraphQLResolveInfo, Undefined

from .errors import (
    DuplicateOrInvalidNameError,
    MalformedDefinitionError,
    NotFoundError,
    OwnershipError,
    WrongKindError,
)
from .misc import clear_name, deepmerge, filter_by_dot_paths, get_callable_name, is_function
from .options import FilterArgOpts, SortArgOpts, parse_options
from .projection import get_projection_from_ast
from .type_helpers import (
    clone_type_to,
    replace_tc,
    unwrap_input_tc,
    unwrap_output_tc,
)
from .wrappers import ListComposer, NonNullComposer

logger = logging.getLogger(__name__)

RESOLVER_KINDS = ("query", "mutation", "subscription")


@dataclass
class ResolveParams:
    """Everything a resolver's ``resolve`` receives."""

    source: Any = None
    args: dict[str, Any] = field(default_factory=dict)
    context: Any = None
    info: GraphQLResolveInfo | None = None
    projection: dict[str, Any] = field(default_factory=dict)
    raw_query: Any = None


def _noop_resolve(rp: ResolveParams) -> None:
    return None


def _on_result(result: Any, callback: Callable[[Any], Any]) -> Any:
    """Apply ``callback`` to a payload, awaiting it first if needed."""
    if inspect.isawaitable(result):

        async def await_then_callback():
            return callback(await result)

        return await_then_callback()
    return callback(result)


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


class Resolver:
    """A reusable resolve unit attached to object types or used as a field.

    Args:
        opts: Dict with ``name`` (required), ``type``, ``args``, ``resolve``,
            ``kind``, ``description``, ``deprecation_reason``,
            ``projection``, ``extensions``, ``directives``,
            ``display_name`` and ``parent``
        schema_composer: The owning SchemaComposer

    Example:
        find_by_id = sc.create_resolver({
            "name": "findById",
            "type": "User",
            "args": {"id": "ID!"},
            "resolve": lambda rp: users[rp.args["id"]],
        })
    """

    def __init__(self, opts: dict[str, Any], schema_composer):
        from .schema_composer import SchemaComposer

        if not isinstance(schema_composer, SchemaComposer):
            raise OwnershipError(
                "You must provide SchemaComposer instance as a second argument for `Resolver(opts, schema_composer)`"
            )
        self.schema_composer = schema_composer

        if not opts.get("name"):
            raise MalformedDefinitionError("For Resolver constructor the `opts['name']` is required option.")
        self.name: str = opts["name"]
        self.display_name: str | None = opts.get("display_name")
        self.parent: Resolver | None = opts.get("parent")
        self.kind: str | None = None
        if opts.get("kind"):
            self.set_kind(opts["kind"])
        self.description: str | None = opts.get("description")
        self.deprecation_reason: str | None = opts.get("deprecation_reason")
        self.projection: dict[str, Any] = dict(opts.get("projection") or {})
        self.extensions: dict[str, Any] = dict(opts.get("extensions") or {})
        self.directives: list[dict] = [dict(d) for d in opts.get("directives") or []]

        self.type = None
        if opts.get("type"):
            self.set_type(opts["type"])

        self.args: dict[str, dict] = {}
        self.set_args(opts.get("args") or {})

        self.resolve: Callable = opts.get("resolve") or _noop_resolve

    def __repr__(self) -> str:
        return f"<Resolver {self.get_nested_name()}>"

    # -----------------------------------------------------------------
    # Output type
    # -----------------------------------------------------------------

    def get_type_ref(self):
        """The stored type reference, or the JSON scalar composer without one."""
        if self.type is None:
            return self.schema_composer.type_mapper.get_built_in_type("JSON")
        return self.type

    def get_type(self):
        return self.get_type_ref().get_type()

    def get_type_name(self) -> str:
        return self.get_type_ref().get_type_name()

    def get_type_composer(self):
        """The named output composer, with List/NonNull/Thunk wrappers stripped."""
        return unwrap_output_tc(self.get_type_ref())

    def get_otc(self):
        from .object_type import ObjectTypeComposer

        tc = self.get_type_composer()
        if not isinstance(tc, ObjectTypeComposer):
            raise WrongKindError(
                f"Resolver {self.name} cannot return its output type as ObjectTypeComposer instance. "
                f"Cause {self.type!r} is {type(tc).__name__}."
            )
        return tc

    def set_type(self, type_def):
        tc = self.schema_composer.type_mapper.convert_output_type_definition(type_def, "set_type", "Resolver")
        if tc is None:
            raise MalformedDefinitionError(f"Cannot convert to ObjectType following value: {type_def!r}")
        self.type = tc
        return self

    # -----------------------------------------------------------------
    # Args
    # -----------------------------------------------------------------

    def has_arg(self, arg_name: str) -> bool:
        return arg_name in self.args

    def get_arg(self, arg_name: str) -> dict:
        if not self.has_arg(arg_name):
            raise NotFoundError(
                f"Cannot get arg {arg_name!r} for resolver {self.name!r}. Argument does not exist."
            )
        arg = self.args[arg_name]
        if is_function(arg):
            arg = self.schema_composer.type_mapper.convert_arg_config(arg(), arg_name, self.name, "Resolver")
            self.args[arg_name] = arg
        return arg

    def get_arg_config(self, arg_name: str) -> GraphQLArgument:
        arg = self.get_arg(arg_name)
        return GraphQLArgument(
            arg["type"].get_type(),
            default_value=arg.get("default_value", Undefined),
            description=arg.get("description"),
            deprecation_reason=arg.get("deprecation_reason"),
        )

    def get_arg_type(self, arg_name: str):
        return self.get_arg(arg_name)["type"].get_type()

    def get_arg_type_name(self, arg_name: str) -> str:
        return self.get_arg(arg_name)["type"].get_type_name()

    def get_args(self) -> dict[str, dict]:
        return self.args

    def get_arg_names(self) -> list[str]:
        return list(self.args)

    def set_args(self, args: dict[str, Any]):
        self.args = self.schema_composer.type_mapper.convert_arg_config_map(args, self.name, "Resolver")
        return self

    def set_arg(self, arg_name: str, arg_config: Any):
        self.args[arg_name] = self.schema_composer.type_mapper.convert_arg_config(
            arg_config, arg_name, self.name, "Resolver"
        )
        return self

    def set_arg_type(self, arg_name: str, type_def: Any):
        arg = self.get_arg(arg_name)
        tc = self.schema_composer.type_mapper.convert_input_type_definition(type_def, arg_name, "Resolver.args")
        if tc is None:
            raise MalformedDefinitionError(f"Cannot create InputType from {type_def!r}")
        self.args[arg_name] = {**arg, "type": tc}
        return self

    def extend_arg(self, arg_name: str, partial: dict[str, Any]):
        if not self.has_arg(arg_name):
            raise NotFoundError(
                f"Cannot extend arg {arg_name!r} in Resolver {self.name!r}. Argument does not exist."
            )
        return self.set_arg(arg_name, {**self.get_arg(arg_name), **partial})

    def add_args(self, new_args: dict[str, Any]):
        return self.set_args({**self.get_args(), **new_args})

    def remove_arg(self, arg_names: str | list[str]):
        for arg_name in [arg_names] if isinstance(arg_names, str) else arg_names:
            self.args.pop(arg_name, None)
        return self

    def remove_other_args(self, keep: str | list[str]):
        keep = [keep] if isinstance(keep, str) else list(keep)
        self.args = {name: arg for name, arg in self.args.items() if name in keep}
        return self

    def reorder_args(self, names: list[str]):
        ordered = {name: self.args[name] for name in names if name in self.args}
        for name, arg in self.args.items():
            ordered.setdefault(name, arg)
        self.args = ordered
        return self

    def get_arg_tc(self, arg_name: str):
        return unwrap_input_tc(self.get_arg(arg_name)["type"])

    def get_arg_itc(self, arg_name: str):
        from .input_type import InputTypeComposer

        tc = self.get_arg_tc(arg_name)
        if not isinstance(tc, InputTypeComposer):
            raise WrongKindError(
                f"Resolver({self.name}).get_arg_itc({arg_name!r}) must be InputTypeComposer, "
                f"but received {type(tc).__name__}. Maybe you need to use get_arg_tc() instead."
            )
        return tc

    def is_arg_non_null(self, arg_name: str) -> bool:
        return isinstance(self.get_arg(arg_name)["type"], NonNullComposer)

    def make_arg_non_null(self, arg_names: str | list[str]):
        for arg_name in [arg_names] if isinstance(arg_names, str) else arg_names:
            if self.has_arg(arg_name) and not self.is_arg_non_null(arg_name):
                self.set_arg_type(arg_name, NonNullComposer(self.get_arg(arg_name)["type"]))
        return self

    make_required = make_arg_non_null

    def make_arg_nullable(self, arg_names: str | list[str]):
        for arg_name in [arg_names] if isinstance(arg_names, str) else arg_names:
            if self.has_arg(arg_name) and self.is_arg_non_null(arg_name):
                self.set_arg_type(arg_name, self.get_arg(arg_name)["type"].of_type)
        return self

    make_optional = make_arg_nullable

    def is_arg_plural(self, arg_name: str) -> bool:
        ref = self.get_arg(arg_name)["type"]
        if isinstance(ref, NonNullComposer):
            ref = ref.of_type
        return isinstance(ref, ListComposer)

    def make_arg_plural(self, arg_names: str | list[str]):
        for arg_name in [arg_names] if isinstance(arg_names, str) else arg_names:
            if self.has_arg(arg_name):
                ref = self.get_arg(arg_name)["type"]
                if not isinstance(ref, ListComposer):
                    self.set_arg_type(arg_name, ListComposer(ref))
        return self

    def make_arg_non_plural(self, arg_names: str | list[str]):
        for arg_name in [arg_names] if isinstance(arg_names, str) else arg_names:
            if self.has_arg(arg_name):
                ref = self.get_arg(arg_name)["type"]
                if isinstance(ref, NonNullComposer) and isinstance(ref.of_type, ListComposer):
                    self.set_arg_type(arg_name, NonNullComposer(ref.of_type.of_type))
                elif isinstance(ref, ListComposer):
                    self.set_arg_type(arg_name, ref.of_type)
        return self

    def clone_arg(self, arg_name: str, new_type_name: str):
        """Point an input object argument at a renamed copy of its type."""
        from .input_type import InputTypeComposer

        if not self.has_arg(arg_name):
            raise NotFoundError(
                f"Can not clone arg {arg_name!r} for resolver {self.name}. Argument does not exist."
            )

        def clone_input_type(tc):
            if not isinstance(tc, InputTypeComposer):
                raise WrongKindError(
                    f"Cannot clone arg {arg_name!r} for resolver {self.name!r}. "
                    f"Argument should be InputObjectType, but received: {tc!r}."
                )
            if not new_type_name or new_type_name != clear_name(new_type_name):
                raise DuplicateOrInvalidNameError("You should provide new type name as second argument")
            if new_type_name == tc.get_type_name():
                raise DuplicateOrInvalidNameError(
                    f"You should provide new type name. It is equal to current name: {new_type_name!r}."
                )
            return tc.clone(new_type_name)

        self.set_arg_type(arg_name, replace_tc(self.get_arg(arg_name)["type"], clone_input_type))
        return self

    def add_filter_arg(self, opts: FilterArgOpts | dict) -> "Resolver":
        """Return a wrapped resolver with one more field in its ``filter`` argument.

        The ``filter`` input type is created from ``filter_type_name_fallback``
        when the resolver has none yet. With a ``query`` callback, a
        non-null filter value runs ``query(rp.raw_query, value, rp)`` before
        the previous resolve.
        """
        from .input_type import InputTypeComposer

        opts = parse_options(FilterArgOpts, opts)
        if opts.type is None:
            raise MalformedDefinitionError("For Resolver.add_filter_arg the arg type `opts.type` is required.")

        resolver = self.wrap(None, name="addFilterArg")

        if resolver.has_arg("filter"):
            filter_itc = resolver.get_arg_tc("filter")
            if not isinstance(filter_itc, InputTypeComposer):
                raise WrongKindError(
                    f"Resolver should have 'filter' arg with InputObjectType, but got: {filter_itc!r}"
                )
        else:
            if not opts.filter_type_name_fallback:
                raise DuplicateOrInvalidNameError(
                    "For Resolver.add_filter_arg needs to provide `filter_type_name_fallback: str`. "
                    "This string will be used as unique name for `filter` type of input argument. "
                    "Eg. FilterXXXXXInput"
                )
            filter_itc = InputTypeComposer.create(opts.filter_type_name_fallback, self.schema_composer)
            resolver.set_arg("filter", {"type": filter_itc})

        name = opts.name
        filter_itc.set_field(name, {"type": opts.type, "description": opts.description})

        if opts.default_value is not None:
            filter_arg = resolver.get_arg("filter")
            default_value = {**(filter_arg.get("default_value") or {}), name: opts.default_value}
            resolver.args["filter"] = {**filter_arg, "default_value": default_value}

        query = opts.query
        if is_function(query):
            resolve_next = resolver.get_resolve()

            def resolve(rp: ResolveParams):
                value = (rp.args.get("filter") or {}).get(name)
                if value is None:
                    return resolve_next(rp)
                if rp.raw_query is None:
                    rp.raw_query = {}
                pending = query(rp.raw_query, value, rp)
                if inspect.isawaitable(pending):
                    return _then_resolve(pending, resolve_next, rp)
                return resolve_next(rp)

            resolver.set_resolve(resolve)

        return resolver

    def add_sort_arg(self, opts: SortArgOpts | dict) -> "Resolver":
        """Return a wrapped resolver with one more value in its ``sort`` enum.

        A callable ``value`` is computed per request: the enum stores the
        value's own name, and an incoming ``sort`` equal to that name is
        replaced by ``value(rp)`` before the previous resolve runs.
        """
        from .enum_type import EnumTypeComposer

        opts = parse_options(SortArgOpts, opts)
        if not opts.value:
            raise MalformedDefinitionError("For Resolver.add_sort_arg the `opts.value` is required.")

        resolver = self.wrap(None, name="addSortArg")

        if resolver.has_arg("sort"):
            sort_etc = resolver.get_arg_tc("sort")
        else:
            if not opts.sort_type_name_fallback:
                raise DuplicateOrInvalidNameError(
                    "For Resolver.add_sort_arg needs to provide `sort_type_name_fallback: str`. "
                    "This string will be used as unique name for `sort` type of input argument. "
                    "Eg. SortXXXXXEnum"
                )
            sort_etc = EnumTypeComposer.create(opts.sort_type_name_fallback, self.schema_composer)
            resolver.set_arg("sort", {"type": sort_etc})

        if not isinstance(sort_etc, EnumTypeComposer):
            raise WrongKindError(f"Resolver must have 'sort' arg with EnumType, but got: {sort_etc!r}")

        name = opts.name
        value = opts.value
        sort_etc.set_field(
            name,
            {
                "description": opts.description,
                "deprecation_reason": opts.deprecation_reason,
                "value": name if is_function(value) else value,
            },
        )

        if is_function(value):
            resolve_next = resolver.get_resolve()

            def resolve(rp: ResolveParams):
                if rp.args.get("sort") == name:
                    rp.args = {**rp.args, "sort": value(rp)}
                return resolve_next(rp)

            resolver.set_resolve(resolve)

        return resolver

    # -----------------------------------------------------------------
    # Resolve and composition
    # -----------------------------------------------------------------

    def get_resolve(self) -> Callable:
        return self.resolve

    def set_resolve(self, resolve: Callable):
        self.resolve = resolve
        return self

    def with_middlewares(self, middlewares: list[Callable]) -> "Resolver":
        """Wrap the resolve with ``mw(resolve, source, args, context, info)`` callables.

        The first middleware is the outermost one.
        """
        if not isinstance(middlewares, (list, tuple)):
            raise MalformedDefinitionError(
                "You should provide list of middlewares `(resolve, source, args, context, info) -> Any`, "
                f"but provided {middlewares!r}."
            )

        resolver = self
        for mw in reversed(middlewares):
            name = get_callable_name(mw, type(mw).__name__ if not inspect.isfunction(mw) else "middleware")
            new_resolver = self.clone(name=name, parent=resolver)
            new_resolver.set_resolve(_middleware_resolve(mw, resolver.get_resolve()))
            resolver = new_resolver
        return resolver

    def wrap(self, cb: Callable | None = None, **overrides) -> "Resolver":
        """Clone this resolver as the parent of a new one and let ``cb`` adjust it.

        ``cb(new_resolver, prev_resolver)`` may return a replacement resolver.
        """
        new_resolver = self.clone(**{"name": "wrap", "parent": self, **overrides})
        if is_function(cb):
            result = cb(new_resolver, self)
            if result is not None:
                return result
        return new_resolver

    def wrap_resolve(self, cb: Callable[[Callable], Callable], wrapper_name: str = "wrapResolve") -> "Resolver":
        def wrapper(new_resolver, prev_resolver):
            new_resolver.set_resolve(cb(prev_resolver.get_resolve()))
            return new_resolver

        return self.wrap(wrapper, name=wrapper_name)

    def wrap_args(self, cb: Callable[[dict], dict | None], wrapper_name: str = "wrapArgs") -> "Resolver":
        def wrapper(new_resolver, prev_resolver):
            prev_args = dict(prev_resolver.get_args())
            new_args = cb(prev_args)
            new_resolver.set_args(new_args if new_args is not None else prev_args)
            return new_resolver

        return self.wrap(wrapper, name=wrapper_name)

    def wrap_clone_arg(self, arg_name: str, new_type_name: str) -> "Resolver":
        return self.wrap(lambda new_resolver, _: new_resolver.clone_arg(arg_name, new_type_name), name="cloneFilterArg")

    def wrap_type(self, cb: Callable, wrapper_name: str = "wrapType") -> "Resolver":
        def wrapper(new_resolver, prev_resolver):
            new_type = cb(prev_resolver.type)
            new_resolver.set_type(new_type if new_type is not None else prev_resolver.type)
            return new_resolver

        return self.wrap(wrapper, name=wrapper_name)

    # -----------------------------------------------------------------
    # Field config
    # -----------------------------------------------------------------

    def get_field_config(self, projection: dict | None = None) -> dict[str, Any]:
        """The resolver as a graphql-core style field config dict."""
        from .base import build_graphql_args

        config = {
            "type": self.get_type(),
            "args": build_graphql_args(self.get_args(), f"Resolver.{self.name}"),
            "resolve": self.get_field_resolver(projection),
        }
        if self.description:
            config["description"] = self.description
        if self.deprecation_reason:
            config["deprecation_reason"] = self.deprecation_reason
        return config

    def get_field_resolver(self, projection: dict | None = None) -> Callable:
        """Adapt ``resolve(rp)`` to graphql-core's ``resolve(source, info, **args)``."""
        resolve = self.get_resolve()
        own_projection = self.projection

        def field_resolve(source, info, **args):
            request_projection = get_projection_from_ast(info)
            if own_projection:
                request_projection = deepmerge(request_projection, own_projection)
            if projection:
                request_projection = deepmerge(request_projection, projection)
            context = info.context if info is not None else None
            return resolve(
                ResolveParams(source=source, args=args, context=context, info=info, projection=request_projection)
            )

        return field_resolve

    # -----------------------------------------------------------------
    # Metadata
    # -----------------------------------------------------------------

    def get_kind(self) -> str | None:
        return self.kind

    def set_kind(self, kind: str):
        if kind not in RESOLVER_KINDS:
            raise WrongKindError(
                f"You provide incorrect value {kind!r} for Resolver.set_kind method. "
                "Valid values are: query | mutation | subscription"
            )
        self.kind = kind
        return self

    def get_description(self) -> str | None:
        return self.description

    def set_description(self, description: str | None):
        self.description = description
        return self

    def get_deprecation_reason(self) -> str | None:
        return self.deprecation_reason

    def set_deprecation_reason(self, reason: str | None):
        self.deprecation_reason = reason
        return self

    def clone(self, **overrides) -> "Resolver":
        """Copy this resolver; ``args`` and ``projection`` get their own dicts."""
        opts = {
            "name": self.name,
            "parent": self.parent,
            "kind": self.kind,
            "type": self.type,
            "args": {name: dict(arg) if isinstance(arg, dict) else arg for name, arg in self.args.items()},
            "resolve": self.resolve,
            "description": self.description,
            "deprecation_reason": self.deprecation_reason,
            "projection": dict(self.projection),
            "extensions": dict(self.extensions),
            "directives": [dict(d) for d in self.directives],
        }
        opts.update(overrides)
        return Resolver(opts, self.schema_composer)

    def clone_to(self, an_sc, clone_map: dict | None = None) -> "Resolver":
        """Copy this resolver, its parents and every type it references into ``an_sc``."""
        if an_sc is None:
            raise OwnershipError("You should provide SchemaComposer for Resolver.clone_to()")
        if clone_map is None:
            clone_map = {}
        if self in clone_map:
            return clone_map[self]

        cloned = Resolver(
            {
                "name": self.name,
                "display_name": self.display_name,
                "kind": self.kind,
                "description": self.description,
                "deprecation_reason": self.deprecation_reason,
                "projection": dict(self.projection),
                "extensions": dict(self.extensions),
                "directives": [dict(d) for d in self.directives],
                "resolve": self.resolve,
            },
            an_sc,
        )
        clone_map[self] = cloned
        if self.type is not None:
            cloned.type = self.type.clone_to(an_sc, clone_map)
        if self.parent is not None:
            cloned.parent = self.parent.clone_to(an_sc, clone_map)
        cloned.args = {
            name: {
                **arg,
                "type": clone_type_to(arg["type"], an_sc, clone_map),
                "extensions": dict(arg.get("extensions") or {}),
            }
            for name, arg in ((n, self.get_arg(n)) for n in self.get_arg_names())
        }
        return cloned

    # Extensions

    def get_extensions(self) -> dict[str, Any]:
        return dict(self.extensions)

    def set_extensions(self, extensions: dict[str, Any] | None):
        self.extensions = dict(extensions or {})
        return self

    def extend_extensions(self, extensions: dict[str, Any]):
        self.extensions = {**self.extensions, **extensions}
        return self

    def clear_extensions(self):
        self.extensions = {}
        return self

    def get_extension(self, name: str) -> Any:
        return self.extensions.get(name)

    def has_extension(self, name: str) -> bool:
        return name in self.extensions

    def set_extension(self, name: str, value: Any):
        self.extensions[name] = value
        return self

    def remove_extension(self, name: str):
        self.extensions.pop(name, None)
        return self

    # -----------------------------------------------------------------
    # Debug
    # -----------------------------------------------------------------

    def set_display_name(self, name: str):
        self.display_name = name
        return self

    def get_nested_name(self) -> str:
        """``name(parentName(grandParentName))`` down the wrap chain."""
        name = self.display_name or self.name
        if self.parent is not None:
            return f"{name}({self.parent.get_nested_name()})"
        return name

    def to_debug_structure(self) -> dict[str, Any]:
        info: dict[str, Any] = {
            "name": self.name,
            "display_name": self.display_name,
            "type": repr(self.type),
            "args": self.args,
            "resolve": get_callable_name(self.resolve, repr(self.resolve)),
        }
        if self.parent is not None:
            info["resolve"] = [info["resolve"], {"Parent resolver": self.parent.to_debug_structure()}]
        return info

    def debug_exec_time(self) -> "Resolver":
        nested_name = self.get_nested_name()

        def wrap_next(next_resolve):
            def resolve(rp):
                started = time.perf_counter()

                def log_time(payload):
                    logger.info("Execution time for %s: %.3fms", nested_name, (time.perf_counter() - started) * 1000)
                    return payload

                return _on_result(next_resolve(rp), log_time)

            return resolve

        return self.wrap_resolve(wrap_next, "debugExecTime")

    def debug_params(self, filter_paths: str | list[str] | None = None) -> "Resolver":
        """Log the resolve params; ``info`` and ``context`` stay hidden unless asked for."""
        nested_name = self.get_nested_name()
        if isinstance(filter_paths, str):
            filter_paths = filter_paths.split()
        requested_roots = {path.split(".")[0] for path in filter_paths or []}
        hidden = [key for key in ("info", "context") if key not in requested_roots]

        def wrap_next(next_resolve):
            def resolve(rp):
                data = filter_by_dot_paths(_params_dict(rp), filter_paths, hidden)
                logger.debug("ResolveParams for %s: %r", nested_name, data)
                return next_resolve(rp)

            return resolve

        return self.wrap_resolve(wrap_next, "debugParams")

    def debug_payload(self, filter_paths: str | list[str] | None = None) -> "Resolver":
        nested_name = self.get_nested_name()
        if isinstance(filter_paths, str):
            filter_paths = filter_paths.split()

        def log_payload(payload):
            shown = payload
            if filter_paths and isinstance(payload, dict):
                shown = filter_by_dot_paths(payload, filter_paths)
            elif isinstance(payload, list) and len(payload) > 3 and not filter_paths:
                shown = [payload[0], f"[debug note]: Other {len(payload) - 1} records was [[hidden]]"]
            logger.info("Resolved payload for %s: %r", nested_name, shown)
            return payload

        def wrap_next(next_resolve):
            def resolve(rp):
                try:
                    result = next_resolve(rp)
                except Exception:
                    logger.info("Rejected payload for %s", nested_name, exc_info=True)
                    raise
                if inspect.isawaitable(result):
                    return _await_payload(result, nested_name, log_payload)
                return log_payload(result)

            return resolve

        return self.wrap_resolve(wrap_next, "debugPayload")

    def debug(self, filter_dot_paths: dict[str, Any] | None = None) -> "Resolver":
        filter_dot_paths = filter_dot_paths or {}
        return (
            self.debug_exec_time()
            .debug_params(filter_dot_paths.get("params"))
            .debug_payload(filter_dot_paths.get("payload"))
        )


def _middleware_resolve(mw: Callable, next_resolve: Callable) -> Callable:
    def resolve(rp: ResolveParams):
        def call_next(source, args, context, info):
            return next_resolve(dataclasses.replace(rp, source=source, args=args, context=context, info=info))

        return mw(call_next, rp.source, rp.args, rp.context, rp.info)

    return resolve


async def _then_resolve(pending, resolve_next: Callable, rp: ResolveParams):
    await pending
    return await _maybe_await(resolve_next(rp))


async def _await_payload(result, nested_name: str, log_payload: Callable):
    try:
        payload = await result
    except Exception:
        logger.info("Rejected payload for %s", nested_name, exc_info=True)
        raise
    return log_payload(payload)


def _params_dict(rp: ResolveParams) -> dict[str, Any]:
    return {f.name: getattr(rp, f.name) for f in dataclasses.fields(rp)}
