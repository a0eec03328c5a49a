"""
jsonmason.runner — Replay a batch of operations as one logical unit.

A batch either fully succeeds or fails at its first bad operation.
What happens on failure depends on the policy:

    strict (default)  the failure is raised; no result is returned
    non-strict        the failure is recorded as an OperationError and
                      the ORIGINAL source object is returned untouched

There is no skip-and-continue: processing always halts at the failing
index, so a non-strict run records exactly one error.

Two entry points:

    JsonMason.apply(source, ops, config)  → document
    JsonMason.last_errors()               → failures of the last call

and the side-channel-free alternative:

    JsonMason.run(source, ops)            → BatchResult(document, errors)
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .core import clone
from .engine import execute_operation
from .errors import JsonMasonError

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  CONFIGURATION
# ═══════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Config:
    """Batch policy.  strict=True raises on the first failure."""
    strict: bool = True

    @classmethod
    def coerce(cls, config: Any) -> "Config":
        """
        Normalize None, a Config, or a mapping like {"strict": False}.

        An absent or None `strict` flag means strict.  Unknown mapping
        keys are ignored.
        """
        if config is None:
            return cls()
        if isinstance(config, cls):
            return cls() if config.strict is None else config
        if isinstance(config, Mapping):
            strict = config.get("strict")
            return cls(strict=True if strict is None else bool(strict))
        raise TypeError(f"config must be a Config or a mapping, not {type(config).__name__}")


# ═══════════════════════════════════════════════════════════════════
#  RESULTS
# ═══════════════════════════════════════════════════════════════════

@dataclass
class OperationError:
    """A failed batch step."""
    index: int
    operation: Any  # exactly as submitted: Operation or mapping
    reason: str
    error: Optional[JsonMasonError] = field(default=None, compare=False, repr=False)

    def __repr__(self) -> str:
        return f"OperationError(#{self.index}: {self.reason})"


@dataclass
class BatchResult:
    """
    Outcome of JsonMason.run.

    On success `document` is the transformed copy and `errors` is empty.
    On failure `document` is the original source object and `errors`
    holds the single failure that stopped the batch.
    """
    document: Any
    errors: list[OperationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> Any:
        """Return the document, or raise the recorded failure."""
        if self.errors:
            failure = self.errors[0]
            if failure.error is None:
                raise JsonMasonError(failure.reason)
            raise failure.error
        return self.document

    def __repr__(self) -> str:
        if self.errors:
            return f"BatchResult(FAILED at #{self.errors[0].index}: {self.errors[0].reason})"
        return "BatchResult(ok)"


# ═══════════════════════════════════════════════════════════════════
#  BATCH RUNNER
# ═══════════════════════════════════════════════════════════════════

class JsonMason:
    """
    Applies batches of operations to JSON-like documents.

        mason = JsonMason()
        result = mason.apply(data, [
            {"path": ["name"], "action": "write", "value": "John"},
            {"path": ["tags"], "action": "append", "value": "new"},
        ])

    The error record is per instance and last-call-wins; share an
    instance across threads only if calls are serialized.
    """

    def __init__(self):
        self._errors: list[OperationError] = []

    def last_errors(self) -> list[OperationError]:
        """Failures recorded by the most recent apply/run call."""
        return list(self._errors)

    get_errors = last_errors

    def run(self, source: Any, operations: Iterable[Any]) -> BatchResult:
        """Apply a batch and report the outcome as data; never raises on a failed step."""
        outcome = _replay(source, operations)
        self._errors = list(outcome.errors)
        return outcome

    def apply(self, source: Any, operations: Iterable[Any], config: Any = None) -> Any:
        """
        Apply a batch and return the transformed copy of `source`.

        In strict mode the first failure is raised and nothing is
        recorded.  In non-strict mode it is recorded (see last_errors)
        and `source` itself is returned.
        """
        strict = Config.coerce(config).strict
        self._errors = []

        outcome = _replay(source, operations)
        if outcome.ok:
            return outcome.document

        failure = outcome.errors[0]
        if strict:
            raise failure.error

        logger.info("Discarding batch: operation %d failed: %s", failure.index, failure.reason)
        self._errors = list(outcome.errors)
        return outcome.document


def _replay(source: Any, operations: Iterable[Any]) -> BatchResult:
    operations = list(operations)
    logger.debug("Applying batch of %d operation(s)", len(operations))

    result = clone(source)
    for index, operation in enumerate(operations):
        try:
            result = execute_operation(result, operation)
        except JsonMasonError as exc:
            logger.debug("Operation %d failed: %s", index, exc.reason)
            return BatchResult(
                document=source,
                errors=[OperationError(index, operation, exc.reason, exc)],
            )

    logger.debug("Batch applied cleanly")
    return BatchResult(document=result)


def apply(source: Any, operations: Iterable[Any], config: Any = None) -> Any:
    """One-shot JsonMason().apply; there is no error record to inspect afterwards."""
    return JsonMason().apply(source, operations, config)
