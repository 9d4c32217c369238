"""Small helpers shared by the composers."""

import inspect
import re
from typing import Any, Callable

_NAME_CLEAN_RE = re.compile(r"[^_a-zA-Z0-9]")


def clear_name(name: str) -> str:
    """Strip every character that is not allowed in a GraphQL name."""
    return _NAME_CLEAN_RE.sub("", name)


def upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


def is_function(value: Any) -> bool:
    """True for plain callables, but not for classes."""
    return callable(value) and not inspect.isclass(value)


def is_object(value: Any) -> bool:
    return isinstance(value, dict)


def deepmerge(target: Any, src: Any) -> Any:
    """Recursively merge ``src`` into a copy of ``target``.

    Lists are concatenated without duplicates, dicts are merged key by key
    with ``src`` winning, and any other value from ``src`` replaces the one
    in ``target``. Neither argument is mutated.
    """
    if isinstance(src, list):
        result = list(target) if isinstance(target, list) else []
        for item in src:
            if item not in result:
                result.append(item)
        return result

    if isinstance(src, dict):
        result = dict(target) if isinstance(target, dict) else {}
        for key, value in src.items():
            if isinstance(value, (dict, list)) and key in result:
                result[key] = deepmerge(result[key], value)
            else:
                result[key] = value
        return result

    return src


def filter_by_dot_paths(obj: dict, paths: list[str] | str | None, hide: list[str] | str | None = None) -> dict:
    """Pick (or hide) keys of a nested dict addressed by dotted paths."""
    if isinstance(paths, str):
        paths = [paths]
    if isinstance(hide, str):
        hide = [hide]

    if paths:
        result: dict = {}
        for path in paths:
            value = _get_path(obj, path)
            if value is not _MISSING:
                _set_path(result, path, value)
    else:
        result = _copy_nested(obj)

    for path in hide or []:
        _delete_path(result, path)
    return result


_MISSING = object()


def _get_path(obj: dict, path: str) -> Any:
    current: Any = obj
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            return _MISSING
        current = current[part]
    return current


def _set_path(obj: dict, path: str, value: Any) -> None:
    parts = path.split(".")
    for part in parts[:-1]:
        obj = obj.setdefault(part, {})
    obj[parts[-1]] = value


def _delete_path(obj: dict, path: str) -> None:
    parts = path.split(".")
    for part in parts[:-1]:
        obj = obj.get(part)
        if not isinstance(obj, dict):
            return
    obj.pop(parts[-1], None)


def _copy_nested(obj: dict) -> dict:
    return {k: _copy_nested(v) if isinstance(v, dict) else v for k, v in obj.items()}


def call_if_thunk(value: Any) -> Any:
    """Call zero-arg callables, return anything else as is."""
    if is_function(value):
        return value()
    return value


def get_callable_name(fn: Callable, fallback: str) -> str:
    name = getattr(fn, "__name__", None)
    if not name or name == "<lambda>":
        return fallback
    return name
