# topmark:header:start
#
#   project      : BuildProblems
#   file         : contracts.py
#   file_relpath : src/buildproblems/transformers/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contract for problem transformers.

A transformer is any callable taking a built `Problem` and returning a
(possibly modified) `Problem`. Plain functions qualify as well as instances of
classes implementing ``__call__``. Transformers only ever see built, immutable
problems: the reporter runs them after ``build()`` and before emission.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from buildproblems.model import Problem


class ProblemTransformer(Protocol):
    """Protocol for a single transformation step applied before delivery."""

    def __call__(self, problem: Problem) -> Problem:
        """Return the transformed problem.

        Implementations return a new problem (see `Problem.with_changes`) or the
        input unchanged. Failures propagate to the reporting caller.

        Args:
            problem (Problem): The problem produced by the previous step.

        Returns:
            Problem: The problem handed to the next step.
        """
        ...
