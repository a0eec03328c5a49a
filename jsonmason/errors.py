"""
jsonmason.errors — Failure taxonomy for operation execution.

Every failure the engine can produce is a JsonMasonError.  The message
of each error IS its human-readable reason, and names the failing path
as dot-joined key segments:

    NotAppendableError(("items",))
        → "Target at path items is not an array or string"

The batch runner captures only JsonMasonError; anything else is a bug
and propagates untouched.
"""

from typing import Any, Sequence, Union

Key = Union[str, int]


def format_path(path: Sequence[Key]) -> str:
    """Dot-join a path for messages: ("users", 0, "name") → "users.0.name"."""
    return ".".join(str(key) for key in path)


class JsonMasonError(Exception):
    """Base class for all operation execution failures."""

    def __init__(self, reason: str, path: Sequence[Key] = ()):
        super().__init__(reason)
        self.path = tuple(path)

    @property
    def reason(self) -> str:
        return str(self)


# ═══════════════════════════════════════════════════════════════════
#  SHAPE ERRORS  (target has the wrong type)
# ═══════════════════════════════════════════════════════════════════

class NotArrayError(JsonMasonError, TypeError):
    def __init__(self, path: Sequence[Key]):
        super().__init__(f"Target at path {format_path(path)} is not an array", path)


class NotStringError(JsonMasonError, TypeError):
    def __init__(self, path: Sequence[Key]):
        super().__init__(f"Target at path {format_path(path)} is not a string", path)


class NotAppendableError(JsonMasonError, TypeError):
    """Append/prepend target is neither a list nor text."""

    def __init__(self, path: Sequence[Key]):
        super().__init__(
            f"Target at path {format_path(path)} is not an array or string", path
        )


class NotContainerError(JsonMasonError, TypeError):
    """
    A dict or list was needed at `path` but something else was found.

    `verb` distinguishes the read side of a remove ("delete from") from
    the write side of a nested write ("write into").
    """

    def __init__(self, path: Sequence[Key], verb: str = "delete from"):
        super().__init__(f"Cannot {verb} non-object at {format_path(path)}", path)


class TypeMismatchError(JsonMasonError, TypeError):
    def __init__(self, path: Sequence[Key] = ()):
        super().__init__("Can only append/prepend strings to strings", path)


# ═══════════════════════════════════════════════════════════════════
#  STRUCTURAL ERRORS  (path cannot be resolved or edited)
# ═══════════════════════════════════════════════════════════════════

class RootDeletionError(JsonMasonError):
    def __init__(self):
        super().__init__("Cannot delete root object", ())


class MissingParentError(JsonMasonError, LookupError):
    def __init__(self, parent_path: Sequence[Key]):
        super().__init__(
            f"Parent path {format_path(parent_path)} does not exist", parent_path
        )


class InvalidIndexError(JsonMasonError, IndexError):
    def __init__(self, key: Any, path: Sequence[Key] = ()):
        super().__init__(f"Invalid array index: {key}", path)
        self.key = key


class InvalidPathError(JsonMasonError, TypeError):
    """The path itself is not a sequence of keys."""

    def __init__(self, path: Any):
        super().__init__(f"Invalid path: {path!r}", ())
        self.given = path


class UnknownOperationError(JsonMasonError, ValueError):
    def __init__(self, action: Any, path: Sequence[Key] = ()):
        super().__init__(f"Unknown operation: {action}", path)
        self.action = action
