"""
jsonmason.engine — Interpret one operation against a document.

Each operation is independent: the only thing threaded between two
calls is the document itself.  Dispatch is an explicit test on the
Action and, where the target's shape matters, on list / dict / str,
with a named error for "none of the above".
"""

import logging
from typing import Any

from .core import (
    Action,
    Operation,
    as_operation,
    clone,
    get,
    map_key,
    set_at,
    validate_appendable,
)
from .errors import (
    InvalidIndexError,
    MissingParentError,
    NotContainerError,
    RootDeletionError,
    TypeMismatchError,
    UnknownOperationError,
    format_path,
)

logger = logging.getLogger(__name__)


def execute_operation(doc: Any, operation: Any) -> Any:
    """
    Apply a single operation and return the new document.

    `operation` may be an Operation or a plain mapping
    ({"path": [...], "action": "...", "value": ...}).  `doc` is never
    mutated.  Failures raise a JsonMasonError subclass.
    """
    op = as_operation(operation)
    logger.debug("Executing %s at path %r", op.action.value, format_path(op.path))

    if op.action is Action.WRITE:
        return set_at(doc, op.path, clone(op.value))

    if op.action is Action.REMOVE:
        return _remove(doc, op)

    if op.action is Action.APPEND or op.action is Action.PREPEND:
        return _extend(doc, op)

    raise UnknownOperationError(op.action, op.path)


def _remove(doc: Any, op: Operation) -> Any:
    if not op.path:
        raise RootDeletionError()

    result = clone(doc)
    parent_path = op.path[:-1]
    key = op.path[-1]
    parent = get(result, parent_path)

    if parent is None:
        raise MissingParentError(parent_path)

    if isinstance(parent, list):
        # bool subclasses int but is never an index
        if not isinstance(key, int) or isinstance(key, bool):
            raise InvalidIndexError(key, op.path)
        # Negatives count from the end, clamped at the first element;
        # past the end is a no-op
        if key < 0:
            key = max(len(parent) + key, 0)
        if key < len(parent):
            del parent[key]
    elif isinstance(parent, dict):
        parent.pop(map_key(key), None)
    else:
        raise NotContainerError(parent_path)

    return result


def _extend(doc: Any, op: Operation) -> Any:
    current = get(doc, op.path)
    validate_appendable(current, op.path)
    at_end = op.action is Action.APPEND

    if isinstance(current, str):
        if not isinstance(op.value, str):
            raise TypeMismatchError(op.path)
        new_value = current + op.value if at_end else op.value + current
    else:
        new_value = clone(current)
        if at_end:
            new_value.append(clone(op.value))
        else:
            new_value.insert(0, clone(op.value))

    return set_at(doc, op.path, new_value)
