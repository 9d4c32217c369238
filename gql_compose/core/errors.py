"""Error taxonomy for schema composition.

Every error raised by the composers derives from ComposeError. Each kind also
derives from the closest builtin exception so callers can catch it in the
usual way (``except LookupError`` for a missing field, and so on).
"""

from contextlib import contextmanager


class ComposeError(Exception):
    """Base class for all composition errors.

    Attributes:
        message: Human readable description of the failure
        path: Dotted ``Type.field.arg`` location the error was raised for,
            or None if it has not been attached yet
    """

    def __init__(self, message: str, path: str | None = None):
        self.message = message
        self.path = path
        super().__init__(message)

    def with_context(self, path: str) -> "ComposeError":
        """Return a copy of this error prefixed with a field/argument path."""
        return type(self)(f"TypeError[{path}]: {self.message}", path=path)


class OwnershipError(ComposeError):
    """A composer or resolver was created without its SchemaComposer."""


class NotFoundError(ComposeError, LookupError):
    """A registry entry, field, argument, resolver or root type is missing."""


class DuplicateOrInvalidNameError(ComposeError, ValueError):
    """A type name is empty, invalid, or collides with an existing one."""


class WrongKindError(ComposeError, TypeError):
    """A type of the wrong kind was supplied (input vs output, enum, ...)."""


class MalformedDefinitionError(ComposeError, ValueError):
    """SDL that fails to parse, or options missing a required key."""


@contextmanager
def error_context(path: str):
    """Attach ``path`` to composition errors raised inside the block.

    The innermost path wins: an error that already carries one is re-raised
    untouched.
    """
    try:
        yield
    except ComposeError as e:
        if e.path is not None:
            raise
        raise e.with_context(path) from e
