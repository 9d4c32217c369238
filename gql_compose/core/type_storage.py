"""Ordered key/value store of named type composers."""

from typing import Any, Callable, Hashable, Iterator

from .errors import NotFoundError
from .misc import is_function


class TypeStorage:
    """A registry of composers keyed by type name (or any hashable).

    Keys keep their insertion order. SchemaComposer extends this class, so
    every registry operation is also available on the schema composer.
    """

    def __init__(self):
        self.types: dict[Hashable, Any] = {}

    def __len__(self) -> int:
        return len(self.types)

    def __contains__(self, key: Hashable) -> bool:
        return self.has(key)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.types)

    def clear(self) -> None:
        self.types.clear()

    def delete(self, key: Hashable) -> bool:
        return self.types.pop(key, _MISSING) is not _MISSING

    def items(self):
        return self.types.items()

    def keys(self):
        return self.types.keys()

    def values(self):
        return self.types.values()

    def get(self, key: Hashable) -> Any:
        value = self.types.get(key, _MISSING)
        if value is _MISSING:
            raise NotFoundError(f"Type with name {key!r} does not exist")
        return value

    def has(self, key: Hashable) -> bool:
        return key in self.types

    def set(self, key: Hashable, value: Any) -> "TypeStorage":
        self.types[key] = value
        return self

    def add(self, value: Any) -> str | None:
        """Store a value under its own type name.

        Returns the inferred name, or None if the value has no name.
        """
        if not value:
            return None
        if hasattr(value, "get_type_name"):
            type_name = value.get_type_name()
        else:
            type_name = getattr(value, "name", None)
        if not type_name:
            return None
        self.set(type_name, value)
        return type_name

    def has_instance(self, key: Hashable, cls: type) -> bool:
        if not self.has(key):
            return False
        return isinstance(self.types[key], cls)

    def get_or_set(self, key: Hashable, value_or_thunk: Any | Callable[[], Any]) -> Any:
        """Return the stored value, computing it on a miss.

        A callable is invoked only on a miss. Falsy results are returned but
        not stored, so a later call may try again.
        """
        existing = self.types.get(key, _MISSING)
        if existing is not _MISSING:
            return existing

        value = value_or_thunk() if is_function(value_or_thunk) else value_or_thunk
        if value:
            self.set(key, value)
        return value


_MISSING = object()
