# topmark:header:start
#
#   project      : BuildProblems
#   file         : contracts.py
#   file_relpath : src/buildproblems/builder/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contracts for problem builders (reporter-facing).

This module defines the fluent surface handed to reporting callbacks
(`ProblemSpec`) and the builder surface the reporter drives (`ProblemBuilder`).

Self-return contract
--------------------
Every mutator must return the *same* builder instance it was called on, so that
chains like ``spec.category("build/compile").label("unused import")`` keep
mutating one accumulator no matter how many wrapper layers exist. The return type
is declared as ``Self`` so type checkers hold implementations to it;
`buildproblems.builder.delegating.DelegatingProblemBuilder` re-checks it at
runtime when wrapping a builder the core does not control.

``build()`` is the only method exempt from the contract: it ends the chain and
returns the immutable `Problem`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Final, Protocol

if TYPE_CHECKING:
    from typing_extensions import Self

    from buildproblems.model import DocLink, Problem, Severity


# Names of all mutators subject to the self-return contract.
MUTATOR_NAMES: Final[tuple[str, ...]] = (
    "label",
    "documented_at",
    "file_location",
    "line_in_file_location",
    "offset_in_file_location",
    "plugin_location",
    "stack_location",
    "task_path_location",
    "category",
    "details",
    "solution",
    "additional_data",
    "with_exception",
    "severity",
)


class ProblemSpec(Protocol):
    """Fluent, mutable description of a problem under construction.

    Location setters replace any location set before: a problem has at most one.
    """

    def label(self, label: str) -> Self:
        """Set the short, human-readable summary."""
        ...

    def documented_at(self, doc: DocLink | str) -> Self:
        """Link documentation, given as a `DocLink` or a literal URL."""
        ...

    def file_location(self, path: str) -> Self:
        """Locate the problem in a file."""
        ...

    def line_in_file_location(
        self,
        path: str,
        line: int,
        column: int | None = None,
        length: int | None = None,
    ) -> Self:
        """Locate the problem at a line (and optionally column and length) in a file."""
        ...

    def offset_in_file_location(self, path: str, offset: int, length: int) -> Self:
        """Locate the problem at a byte range in a file."""
        ...

    def plugin_location(self, plugin_id: str) -> Self:
        """Locate the problem at the plugin that applied the failing logic."""
        ...

    def stack_location(self) -> Self:
        """Take the location from the call stack of the reporting code."""
        ...

    def task_path_location(self, build_tree_path: str) -> Self:
        """Locate the problem at the task it originated from."""
        ...

    def category(self, category: str, *details: str) -> Self:
        """Set the hierarchical category and optional detail segments."""
        ...

    def details(self, details: str) -> Self:
        """Set a longer, free-text description."""
        ...

    def solution(self, solution: str | None) -> Self:
        """Set the suggested fix (``None`` clears it)."""
        ...

    def additional_data(self, key: str, value: Any) -> Self:
        """Attach an arbitrary value under a string key."""
        ...

    def with_exception(self, exception: BaseException) -> Self:
        """Attach the exception associated with the problem."""
        ...

    def severity(self, severity: Severity) -> Self:
        """Set the problem severity."""
        ...


class ProblemBuilder(ProblemSpec, Protocol):
    """A `ProblemSpec` that can be turned into an immutable `Problem`."""

    def build(self) -> Problem:
        """Return the immutable problem described so far.

        Raises:
            ProblemBuildError: If the required fields are missing.
        """
        ...


# Configuration callback handed to reporters: mutates the spec, returns nothing.
ProblemSpecAction = Callable[[ProblemSpec], None]
