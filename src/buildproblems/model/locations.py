# topmark:header:start
#
#   project      : BuildProblems
#   file         : locations.py
#   file_relpath : src/buildproblems/model/locations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Locations a problem can point at.

A problem carries at most one location. The variants are small frozen dataclasses
sharing the `ProblemLocation` base so callers can dispatch with ``isinstance`` and
machine output can use the ``kind`` discriminator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from traceback import FrameSummary


@dataclass(frozen=True)
class ProblemLocation:
    """Base class for all problem locations."""

    kind: ClassVar[str] = "location"


@dataclass(frozen=True)
class FileLocation(ProblemLocation):
    """A whole file."""

    kind: ClassVar[str] = "file"

    path: str

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class LineInFileLocation(FileLocation):
    """A line in a file, optionally narrowed to a column and a length."""

    kind: ClassVar[str] = "line_in_file"

    line: int  # 1-indexed
    column: int | None = None  # 1-indexed
    length: int | None = None

    def __str__(self) -> str:
        text = f"{self.path}:{self.line}"
        if self.column is not None:
            text += f":{self.column}"
        return text


@dataclass(frozen=True)
class OffsetInFileLocation(FileLocation):
    """A byte range in a file."""

    kind: ClassVar[str] = "offset_in_file"

    offset: int
    length: int

    def __str__(self) -> str:
        return f"{self.path}@{self.offset}+{self.length}"


@dataclass(frozen=True)
class PluginIdLocation(ProblemLocation):
    """The plugin that applied the failing logic."""

    kind: ClassVar[str] = "plugin"

    plugin_id: str

    def __str__(self) -> str:
        return f"plugin '{self.plugin_id}'"


@dataclass(frozen=True)
class TaskPathLocation(ProblemLocation):
    """The task (by build tree path) the problem originated from."""

    kind: ClassVar[str] = "task_path"

    build_tree_path: str

    def __str__(self) -> str:
        return f"task '{self.build_tree_path}'"


@dataclass(frozen=True)
class StackLocation(ProblemLocation):
    """Marker asking for the location to be taken from the call stack.

    ``frames`` holds the stack captured where the builder's ``stack_location()`` was
    called, outermost first. `StackLocationTransformer` resolves the marker into a
    `LineInFileLocation`.
    """

    kind: ClassVar[str] = "stack"

    frames: tuple[FrameSummary, ...] = field(default=(), compare=False, repr=False)

    def __str__(self) -> str:
        return "<call stack>"
