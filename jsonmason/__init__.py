"""
JSON Mason
==========

Structured, non-mutating edits on JSON-like documents.

    mason = JsonMason()
    mason.apply(
        {"user": {"name": "John", "tags": ["user"]}},
        [
            {"path": ["user", "name"], "action": "write", "value": "Jane"},
            {"path": ["user", "tags"], "action": "append", "value": "admin"},
        ],
    )
    → {"user": {"name": "Jane", "tags": ["user", "admin"]}}

Four operations:
  • write    replace or create the value at a path (the root included)
  • append   add to the end of a list, or concatenate text
  • prepend  add to the start of a list, or prefix text
  • remove   delete a map field or list element

A batch is all-or-nothing: strict mode raises on the first failure,
non-strict mode records it and hands back the untouched source.
"""

from jsonmason.core import (
    Action,
    Operation,
    as_operation,
    clone,
    get,
    map_key,
    set_at,
    validate_appendable,
    validate_array,
    validate_string,
)
from jsonmason.engine import execute_operation
from jsonmason.errors import (
    InvalidIndexError,
    InvalidPathError,
    JsonMasonError,
    MissingParentError,
    NotAppendableError,
    NotArrayError,
    NotContainerError,
    NotStringError,
    RootDeletionError,
    TypeMismatchError,
    UnknownOperationError,
    format_path,
)
from jsonmason.runner import BatchResult, Config, JsonMason, OperationError, apply

__version__ = "0.1.0"
__all__ = [
    "Action", "Operation", "as_operation",
    "clone", "get", "set_at", "map_key", "format_path",
    "validate_array", "validate_string", "validate_appendable",
    "execute_operation",
    "JsonMason", "Config", "OperationError", "BatchResult", "apply",
    "JsonMasonError", "RootDeletionError", "MissingParentError",
    "InvalidIndexError", "InvalidPathError", "NotContainerError", "NotAppendableError",
    "TypeMismatchError", "NotArrayError", "NotStringError",
    "UnknownOperationError",
]
