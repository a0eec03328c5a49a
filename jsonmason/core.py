"""
jsonmason.core — Documents, paths, operations, and navigation
=============================================================

§1  DOCUMENTS
─────────────

A document is any JSON-like value built from:

    dict          → map of string keys to documents
    list          → dense, zero-based sequence of documents
    str / int / float / bool / None
                  → scalars
    anything else → opaque pass-through (bytes, datetime, Decimal, set, ...)

Documents are IMMUTABLE from the caller's perspective.  Nothing in this
package mutates a value it was handed; every edit works on a private
clone and returns it.

None doubles as the absence marker: a field holding None and a missing
field navigate identically.


§2  PATHS
─────────

A path is an ordered sequence of keys:

    str  → selects a map field
    int  → selects a sequence index   (bool is NEVER an index)

    ()                      → the root
    ("users", 0, "name")    → doc["users"][0]["name"]

Paths are not validated up front.  A key that does not fit its container
is only noticed during navigation:  reads return None, writes raise.


§3  OPERATIONS
──────────────

    write(path, value)     replace (or create) the value at path
    append(path, value)    add to the end of a list, or concatenate text
    prepend(path, value)   add to the start of a list, or prefix text
    remove(path)           delete a map field or list element

Interpretation lives in jsonmason.engine; this module only defines the
instruction type and the navigation primitives the engine is built on.
"""

import copy
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Union

from .errors import (
    InvalidIndexError,
    InvalidPathError,
    NotAppendableError,
    NotArrayError,
    NotContainerError,
    NotStringError,
    UnknownOperationError,
    format_path,
)

Key = Union[str, int]
Path = tuple[Key, ...]


# ═══════════════════════════════════════════════════════════════════
#  OPERATIONS
# ═══════════════════════════════════════════════════════════════════

class Action(Enum):
    """The four edit instructions."""
    WRITE = "write"
    APPEND = "append"
    PREPEND = "prepend"
    REMOVE = "remove"

    @classmethod
    def parse(cls, name: Any, path: Iterable[Key] = ()) -> "Action":
        """
        Resolve an action name.

        Accepts an Action, its value ("write"), or one of the legacy
        spellings "set" / "delete".  Anything else is an
        UnknownOperationError.
        """
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            if name in _ACTION_ALIASES:
                return _ACTION_ALIASES[name]
            try:
                return cls(name)
            except ValueError:
                pass
        raise UnknownOperationError(name, tuple(path))


_ACTION_ALIASES = {
    "set": Action.WRITE,
    "delete": Action.REMOVE,
}


@dataclass(frozen=True)
class Operation:
    """
    A single edit instruction.

    `value` is ignored for REMOVE.

    Examples:
        Operation(("users", 0, "name"), Action.WRITE, "John")
        Operation.append(["tags"], "admin")
        Operation.from_dict({"path": ["a"], "action": "remove"})
    """
    path: Path
    action: Action
    value: Any = None

    def __post_init__(self):
        # Coerce in place so callers may pass lists and plain strings
        object.__setattr__(self, "path", _coerce_path(self.path))
        object.__setattr__(self, "action", Action.parse(self.action, self.path))

    @classmethod
    def from_dict(cls, data: Mapping) -> "Operation":
        """Build from {"path": [...], "action": "...", "value": ...}."""
        path = data.get("path")
        return cls(() if path is None else path, data.get("action"), data.get("value"))

    @classmethod
    def write(cls, path: Iterable[Key], value: Any) -> "Operation":
        return cls(path, Action.WRITE, value)

    @classmethod
    def append(cls, path: Iterable[Key], value: Any) -> "Operation":
        return cls(path, Action.APPEND, value)

    @classmethod
    def prepend(cls, path: Iterable[Key], value: Any) -> "Operation":
        return cls(path, Action.PREPEND, value)

    @classmethod
    def remove(cls, path: Iterable[Key]) -> "Operation":
        return cls(path, Action.REMOVE)

    def __repr__(self) -> str:
        path_str = format_path(self.path) or "(root)"
        if self.action is Action.REMOVE:
            return f"Operation(remove at {path_str})"
        return f"Operation({self.action.value} at {path_str}: {self.value!r})"


def _coerce_path(path: Any) -> Path:
    # A bare string is a single key, not a sequence of one-char keys
    if isinstance(path, (str, bytes)):
        raise InvalidPathError(path)
    try:
        return tuple(path)
    except TypeError:
        raise InvalidPathError(path) from None


def as_operation(item: Any) -> Operation:
    """Accept an Operation or a plain mapping; reject everything else."""
    if isinstance(item, Operation):
        return item
    if isinstance(item, Mapping):
        return Operation.from_dict(item)
    raise UnknownOperationError(item)


# ═══════════════════════════════════════════════════════════════════
#  DEEP COPY
# ═══════════════════════════════════════════════════════════════════

# Exact types only: subclasses (e.g. str-valued enums) may carry state
_IMMUTABLE_SCALARS = (str, int, float, bool, type(None))


def clone(value: Any) -> Any:
    """
    Fully independent structural copy of a document.

    Plain dicts and lists are rebuilt level by level, so no container
    reachable from the result is shared with the input.  Immutable
    scalars are returned as-is.  Everything else (dates, buffers,
    Decimals, sets, dict subclasses, user objects) follows its own
    deep-copy contract via copy.deepcopy.

    Cyclic documents are not supported.
    """
    kind = type(value)
    if kind is dict:
        return {k: clone(v) for k, v in value.items()}
    if kind is list:
        return [clone(item) for item in value]
    if kind in _IMMUTABLE_SCALARS:
        return value
    return copy.deepcopy(value)


# ═══════════════════════════════════════════════════════════════════
#  NAVIGATION
# ═══════════════════════════════════════════════════════════════════

def _is_index(key: Any) -> bool:
    # bool subclasses int; True must not select element 1
    return isinstance(key, int) and not isinstance(key, bool)


def _is_container(value: Any) -> bool:
    return isinstance(value, (dict, list))


def map_key(key: Any) -> Any:
    """
    Key under which `key` is stored in a map.

    Map keys are text, so an index used on a map names the field "0",
    "1", ... rather than introducing an int key.
    """
    return str(key) if _is_index(key) else key


def _child(container: Any, key: Key) -> Any:
    """One navigation step.  Never raises; a misfit key reads as None."""
    if isinstance(container, dict):
        return container.get(map_key(key))
    if isinstance(container, list):
        if _is_index(key) and 0 <= key < len(container):
            return container[key]
    return None


def _empty_for(next_key: Key) -> Union[list, dict]:
    """Container to materialize when the next key must be resolved in it."""
    return [] if _is_index(next_key) else {}


def _assign(container: Union[list, dict], key: Key, value: Any, path: Path) -> None:
    if isinstance(container, list):
        if not _is_index(key) or key < 0:
            raise InvalidIndexError(key, path)
        if key < len(container):
            container[key] = value
        else:
            # Sequences stay dense: pad the gap with None
            container.extend([None] * (key - len(container)))
            container.append(value)
        return
    container[map_key(key)] = value


def get(doc: Any, path: Iterable[Key]) -> Optional[Any]:
    """
    Read the value at `path`, or None if any link is missing.

    Absence short-circuits: once the walk hits None the remaining keys
    are not inspected, even if they would not fit.  The empty path
    returns `doc` itself.

        get({"user": {"name": "John"}}, ["user", "name"])  → "John"
        get({"user": None}, ["user", "x", 3])              → None
    """
    current = doc
    for key in path:
        if current is None:
            return None
        current = _child(current, key)
    return current


def set_at(doc: Any, path: Iterable[Key], value: Any) -> Any:
    """
    Return a copy of `doc` with `value` placed at `path`.

    The empty path returns `value` itself (whole-document replacement).
    Otherwise the document is cloned ONCE and the clone is edited in
    place; `doc` is never touched.

    Missing (or None) intermediate nodes are materialized on the way
    down: a list when the next key is an int, a dict otherwise.

        set_at({}, ["users", 0, "name"], "John")
            → {"users": [{"name": "John"}]}

    Raises:
        NotContainerError  if an existing scalar sits where the path
                           must descend further
        InvalidIndexError  if a list is addressed with a negative or
                           non-integer key
    """
    path = tuple(path)
    if not path:
        return value

    result = clone(doc)
    if result is None:
        result = _empty_for(path[0])
    elif not _is_container(result):
        raise NotContainerError((), verb="write into")

    current = result
    for i, key in enumerate(path[:-1]):
        child = _child(current, key)
        if child is None:
            child = _empty_for(path[i + 1])
            _assign(current, key, child, path[:i + 1])
        elif not _is_container(child):
            raise NotContainerError(path[:i + 1], verb="write into")
        current = child

    _assign(current, path[-1], value, path)
    return result


# ═══════════════════════════════════════════════════════════════════
#  SHAPE VALIDATORS
# ═══════════════════════════════════════════════════════════════════

def validate_array(value: Any, path: Iterable[Key]) -> None:
    """Raise NotArrayError unless `value` is a list."""
    if not isinstance(value, list):
        raise NotArrayError(tuple(path))


def validate_string(value: Any, path: Iterable[Key]) -> None:
    """Raise NotStringError unless `value` is text."""
    if not isinstance(value, str):
        raise NotStringError(tuple(path))


def validate_appendable(value: Any, path: Iterable[Key]) -> None:
    """Raise NotAppendableError unless `value` is a list or text."""
    if not isinstance(value, (list, str)):
        raise NotAppendableError(tuple(path))
