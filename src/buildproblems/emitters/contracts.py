# topmark:header:start
#
#   project      : BuildProblems
#   file         : contracts.py
#   file_relpath : src/buildproblems/emitters/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contract for problem emitters.

An emitter performs the final delivery of a transformed problem. One emitter is
usually shared by every reporter of a process, so implementations are called
concurrently from many threads and must guard their own state. Reporters treat
``emit`` as fire-and-forget: they neither retry nor inspect a result, and any
exception raised propagates to the reporting caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from buildproblems.model import Problem
    from buildproblems.operations import OperationIdentifier


class ProblemEmitter(Protocol):
    """Terminal consumer of transformed problems."""

    def emit(self, problem: Problem, operation_id: OperationIdentifier) -> None:
        """Deliver ``problem`` correlated with ``operation_id``.

        Args:
            problem (Problem): The transformed problem.
            operation_id (OperationIdentifier): The operation in flight when it was reported.
        """
        ...
