# topmark:header:start
#
#   project      : BuildProblems
#   file         : collecting.py
#   file_relpath : src/buildproblems/emitters/collecting.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""In-memory emitter collecting delivered problems.

Useful for aggregating problems for a later summary and as the emitter of choice
in tests. The record list is guarded by a lock because a shared emitter is called
from many threads at once.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from buildproblems.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from buildproblems.config.logging import ProblemsLogger
    from buildproblems.model import Problem
    from buildproblems.operations import OperationIdentifier

logger: ProblemsLogger = get_logger(__name__)


@dataclass(frozen=True)
class EmittedProblem:
    """A delivered problem with the operation it was correlated with."""

    problem: Problem
    operation_id: OperationIdentifier


class CollectingEmitter:
    """Thread-safe emitter keeping every delivered problem in memory."""

    def __init__(self) -> None:
        self._records: list[EmittedProblem] = []
        self._lock = threading.Lock()

    def emit(self, problem: Problem, operation_id: OperationIdentifier) -> None:
        with self._lock:
            self._records.append(EmittedProblem(problem, operation_id))
        logger.trace("Collected %s for operation %s", problem.category, operation_id)

    @property
    def records(self) -> tuple[EmittedProblem, ...]:
        """Return a snapshot of all records in delivery order."""
        with self._lock:
            return tuple(self._records)

    @property
    def problems(self) -> tuple[Problem, ...]:
        """Return a snapshot of the delivered problems in delivery order."""
        return tuple(r.problem for r in self.records)

    def clear(self) -> None:
        """Forget every collected record."""
        with self._lock:
            self._records.clear()

    def __iter__(self) -> Iterator[EmittedProblem]:
        return iter(self.records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
