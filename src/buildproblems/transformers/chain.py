# topmark:header:start
#
#   project      : BuildProblems
#   file         : chain.py
#   file_relpath : src/buildproblems/transformers/chain.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ordered, immutable transformer chain.

The chain is fixed when it is constructed and applied strictly in registration
order, each transformer receiving the output of the previous one. Because the
chain never changes after construction it can be shared between reporters and
threads without synchronization.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from buildproblems.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from buildproblems.config.logging import ProblemsLogger
    from buildproblems.model import Problem
    from buildproblems.transformers.contracts import ProblemTransformer

logger: ProblemsLogger = get_logger(__name__)


def _transformer_name(transformer: ProblemTransformer) -> str:
    return getattr(transformer, "__name__", type(transformer).__name__)


class TransformerChain:
    """Immutable sequence of `ProblemTransformer` steps.

    Args:
        transformers (Iterable[ProblemTransformer]): Steps in application order.
    """

    __slots__ = ("_transformers",)

    def __init__(self, transformers: Iterable[ProblemTransformer] = ()) -> None:
        self._transformers: tuple[ProblemTransformer, ...] = tuple(transformers)

    @property
    def transformers(self) -> tuple[ProblemTransformer, ...]:
        """Return the steps in application order."""
        return self._transformers

    def apply(self, problem: Problem) -> Problem:
        """Run ``problem`` through every transformer in registration order.

        Args:
            problem (Problem): The built problem.

        Returns:
            Problem: The output of the last transformer (``problem`` itself for an
            empty chain).
        """
        for transformer in self._transformers:
            logger.trace(
                "Applying transformer %s to %s", _transformer_name(transformer), problem.category
            )
            problem = transformer(problem)
        return problem

    def __call__(self, problem: Problem) -> Problem:
        return self.apply(problem)

    def __iter__(self) -> Iterator[ProblemTransformer]:
        return iter(self._transformers)

    def __len__(self) -> int:
        return len(self._transformers)

    def __repr__(self) -> str:
        names = ", ".join(_transformer_name(t) for t in self._transformers)
        return f"TransformerChain([{names}])"
