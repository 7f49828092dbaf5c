# topmark:header:start
#
#   project      : BuildProblems
#   file         : default.py
#   file_relpath : src/buildproblems/builder/default.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default, field-accumulating problem builder.

`DefaultProblemBuilder` is the mutable accumulator a reporter creates for each
reporting call. It is owned by exactly one call on one thread and discarded once
``build()`` returned; nothing here is synchronized.
"""

from __future__ import annotations

import traceback
from typing import TYPE_CHECKING, Any

from buildproblems.config.logging import get_logger
from buildproblems.errors import ProblemBuildError
from buildproblems.model import (
    FileLocation,
    LineInFileLocation,
    OffsetInFileLocation,
    OnlineDocLink,
    PluginIdLocation,
    Problem,
    ProblemCategory,
    Severity,
    StackLocation,
    TaskPathLocation,
)

if TYPE_CHECKING:
    from typing_extensions import Self

    from buildproblems.config.logging import ProblemsLogger
    from buildproblems.model import DocLink, ProblemLocation

logger: ProblemsLogger = get_logger(__name__)


class DefaultProblemBuilder:
    """Accumulate problem fields for one namespace and build an immutable `Problem`.

    Args:
        namespace (str): Identifies the reporting subsystem; becomes the
            namespace of the built problem's category.
    """

    def __init__(self, namespace: str) -> None:
        self._namespace: str = namespace
        self._label: str | None = None
        self._category: str | None = None
        self._category_details: tuple[str, ...] = ()
        self._severity: Severity = Severity.WARNING
        self._location: ProblemLocation | None = None
        self._doc: DocLink | None = None
        self._details: str | None = None
        self._solution: str | None = None
        self._exception: BaseException | None = None
        self._additional_data: dict[str, Any] = {}

    @property
    def namespace(self) -> str:
        """Return the namespace problems built here are attributed to."""
        return self._namespace

    def label(self, label: str) -> Self:
        self._label = label
        return self

    def documented_at(self, doc: DocLink | str) -> Self:
        self._doc = OnlineDocLink(doc) if isinstance(doc, str) else doc
        return self

    def file_location(self, path: str) -> Self:
        return self._set_location(FileLocation(path))

    def line_in_file_location(
        self,
        path: str,
        line: int,
        column: int | None = None,
        length: int | None = None,
    ) -> Self:
        return self._set_location(LineInFileLocation(path, line, column, length))

    def offset_in_file_location(self, path: str, offset: int, length: int) -> Self:
        return self._set_location(OffsetInFileLocation(path, offset, length))

    def plugin_location(self, plugin_id: str) -> Self:
        return self._set_location(PluginIdLocation(plugin_id))

    def stack_location(self) -> Self:
        # Drop this frame; wrapper frames are filtered when the marker is resolved.
        frames = tuple(traceback.extract_stack()[:-1])
        return self._set_location(StackLocation(frames))

    def task_path_location(self, build_tree_path: str) -> Self:
        return self._set_location(TaskPathLocation(build_tree_path))

    def category(self, category: str, *details: str) -> Self:
        self._category = category
        self._category_details = tuple(details)
        return self

    def details(self, details: str) -> Self:
        self._details = details
        return self

    def solution(self, solution: str | None) -> Self:
        self._solution = solution
        return self

    def additional_data(self, key: str, value: Any) -> Self:
        if not isinstance(key, str) or not key:
            raise ProblemBuildError(f"Additional data key must be a non-empty string, got {key!r}")
        self._additional_data[key] = value
        return self

    def with_exception(self, exception: BaseException) -> Self:
        self._exception = exception
        return self

    def severity(self, severity: Severity) -> Self:
        self._severity = severity
        return self

    def build(self) -> Problem:
        """Return the immutable problem described so far.

        Returns:
            Problem: A new problem; the builder may be discarded afterwards.

        Raises:
            ProblemBuildError: If no category (or a blank one) was specified.
        """
        if self._category is None or not self._category.strip():
            raise ProblemBuildError("Category must be specified")
        problem = Problem(
            category=ProblemCategory(self._namespace, self._category, self._category_details),
            label=self._label,
            severity=self._severity,
            location=self._location,
            documentation_link=self._doc,
            details=self._details,
            solution=self._solution,
            exception=self._exception,
            additional_data=dict(self._additional_data),
        )
        logger.trace("Built problem %s (%s)", problem.category, problem.severity)
        return problem

    def _set_location(self, location: ProblemLocation) -> Self:
        if self._location is not None:
            logger.debug("Replacing location %s with %s", self._location, location)
        self._location = location
        return self
