# topmark:header:start
#
#   project      : BuildProblems
#   file         : operations.py
#   file_relpath : src/buildproblems/operations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Operation identifiers and the scoped "current operation" reference.

Reporters correlate every delivered problem with the unit of work currently
executing. That correlation handle is an `OperationIdentifier`; the reporter reads
it from a `CurrentOperationRef` that it receives explicitly at construction time.

Scoping:
    Every `CurrentOperationRef` keeps its identifier under its own key in one
    module-level `contextvars.ContextVar` holding an immutable mapping, so refs
    can be created freely without piling up context variables. The value is
    scoped per thread and per asyncio task: a new thread starts with no
    operation in flight, and ``running()`` restores the previous value when the
    block exits, so nested operations behave like a stack.

Typical usage:

    ref = CurrentOperationRef()
    with ref.running(OperationIdentifier("op-1")):
        reporter.report(spec)  # delivered, correlated with "op-1"
    reporter.report(spec)  # dropped: no operation in flight
"""

from __future__ import annotations

import itertools
import threading
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from buildproblems.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from buildproblems.config.logging import ProblemsLogger

logger: ProblemsLogger = get_logger(__name__)

_CURRENT_OPERATIONS: ContextVar[Mapping[int, OperationIdentifier | None]] = ContextVar(
    "buildproblems_current_operations", default=MappingProxyType({})
)
_REF_KEYS = itertools.count(1)


@dataclass(frozen=True)
class OperationIdentifier:
    """Opaque correlation handle naming a unit of work."""

    value: int | str

    def __str__(self) -> str:
        return str(self.value)


class CurrentOperationRef:
    """Explicit, scoped holder of the operation currently executing.

    Reads are idempotent and side-effect free; the reporting core never writes
    to the ref, only the surrounding execution engine (or a test) does, through
    `running`.
    """

    def __init__(self) -> None:
        self._key: int = next(_REF_KEYS)
        self._counter = itertools.count(1)
        self._counter_lock = threading.Lock()

    def get_id(self) -> OperationIdentifier | None:
        """Return the identifier of the operation in flight, or ``None``."""
        return _CURRENT_OPERATIONS.get().get(self._key)

    @contextmanager
    def running(
        self,
        operation_id: OperationIdentifier | None,
    ) -> Iterator[OperationIdentifier | None]:
        """Mark ``operation_id`` as the current operation for the duration of the block.

        Args:
            operation_id (OperationIdentifier | None): The operation to make current.
                ``None`` explicitly clears the current operation inside the block.

        Yields:
            OperationIdentifier | None: The identifier that is current inside the block.
        """
        current = dict(_CURRENT_OPERATIONS.get())
        current[self._key] = operation_id
        token = _CURRENT_OPERATIONS.set(MappingProxyType(current))
        logger.trace("Entering operation %s", operation_id)
        try:
            yield operation_id
        finally:
            _CURRENT_OPERATIONS.reset(token)
            logger.trace("Leaving operation %s", operation_id)

    def new_operation_id(self) -> OperationIdentifier:
        """Return a fresh, sequential operation identifier (thread-safe)."""
        with self._counter_lock:
            return OperationIdentifier(next(self._counter))
