# topmark:header:start
#
#   project      : BuildProblems
#   file         : delegating.py
#   file_relpath : src/buildproblems/builder/delegating.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Contract-enforcing builder wrapper.

`DelegatingProblemBuilder` forwards every call to another builder and checks that
each mutator returned that very builder. It sits at trust boundaries, i.e. wherever
the core hands out or receives a builder implementation it does not control.
Wrappers nest: every layer validates its own delegate and returns itself, so a
chain started on the outermost wrapper stays on it.

A violation raises `BuilderContractError`. It signals a bug in a builder
implementation, not a bad build, and must not be caught by reporting code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from buildproblems.errors import BuilderContractError

if TYPE_CHECKING:
    from typing_extensions import Self

    from buildproblems.builder.contracts import ProblemBuilder
    from buildproblems.model import DocLink, Problem, Severity


class DelegatingProblemBuilder:
    """Wrap a `ProblemBuilder` and verify its self-return contract on every call.

    Args:
        delegate (ProblemBuilder): The builder receiving all calls.
    """

    def __init__(self, delegate: ProblemBuilder) -> None:
        self._delegate: ProblemBuilder = delegate

    @property
    def delegate(self) -> ProblemBuilder:
        """Return the wrapped builder."""
        return self._delegate

    def build(self) -> Problem:
        return self._delegate.build()

    def label(self, label: str) -> Self:
        return self._validate(self._delegate.label(label))

    def documented_at(self, doc: DocLink | str) -> Self:
        return self._validate(self._delegate.documented_at(doc))

    def file_location(self, path: str) -> Self:
        return self._validate(self._delegate.file_location(path))

    def line_in_file_location(
        self,
        path: str,
        line: int,
        column: int | None = None,
        length: int | None = None,
    ) -> Self:
        return self._validate(self._delegate.line_in_file_location(path, line, column, length))

    def offset_in_file_location(self, path: str, offset: int, length: int) -> Self:
        return self._validate(self._delegate.offset_in_file_location(path, offset, length))

    def plugin_location(self, plugin_id: str) -> Self:
        return self._validate(self._delegate.plugin_location(plugin_id))

    def stack_location(self) -> Self:
        return self._validate(self._delegate.stack_location())

    def task_path_location(self, build_tree_path: str) -> Self:
        return self._validate(self._delegate.task_path_location(build_tree_path))

    def category(self, category: str, *details: str) -> Self:
        return self._validate(self._delegate.category(category, *details))

    def details(self, details: str) -> Self:
        return self._validate(self._delegate.details(details))

    def solution(self, solution: str | None) -> Self:
        return self._validate(self._delegate.solution(solution))

    def additional_data(self, key: str, value: Any) -> Self:
        return self._validate(self._delegate.additional_data(key, value))

    def with_exception(self, exception: BaseException) -> Self:
        return self._validate(self._delegate.with_exception(exception))

    def severity(self, severity: Severity) -> Self:
        return self._validate(self._delegate.severity(severity))

    def _validate(self, returned: object) -> Self:
        if returned is not self._delegate:
            raise BuilderContractError()
        return self
