# topmark:header:start
#
#   project      : BuildProblems
#   file         : stack_location.py
#   file_relpath : src/buildproblems/transformers/stack_location.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Transformer resolving the "from the call stack" location marker.

``spec.stack_location()`` records a `StackLocation` carrying the stack captured at
the call site. This transformer replaces it with a concrete `LineInFileLocation`:

1. If the problem carries an exception with a traceback, the innermost frame of
   that traceback wins.
2. Otherwise the innermost captured frame that lies outside the
   ``buildproblems`` package is used, so builder and reporter frames never show
   up as the location.

When neither yields a frame the marker is removed and the problem has no location.
"""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import TYPE_CHECKING

from buildproblems.config.logging import get_logger
from buildproblems.model import LineInFileLocation, StackLocation

if TYPE_CHECKING:
    from collections.abc import Sequence
    from traceback import FrameSummary

    from buildproblems.config.logging import ProblemsLogger
    from buildproblems.model import Problem

logger: ProblemsLogger = get_logger(__name__)

PACKAGE_DIR: Path = Path(__file__).resolve().parent.parent


def _is_internal(frame: FrameSummary, package_dir: Path) -> bool:
    try:
        return Path(frame.filename).resolve().is_relative_to(package_dir)
    except (OSError, ValueError):
        return False


def _location_from(frame: FrameSummary) -> LineInFileLocation:
    colno: int | None = getattr(frame, "colno", None)  # Python 3.11+
    return LineInFileLocation(
        frame.filename,
        frame.lineno or 0,
        colno + 1 if colno is not None else None,
    )


class StackLocationTransformer:
    """Replace `StackLocation` markers with the file and line they point at.

    Args:
        package_dir (Path): Frames under this directory are skipped when resolving
            from the captured stack. Defaults to the installed package directory.
    """

    def __init__(self, package_dir: Path = PACKAGE_DIR) -> None:
        self.package_dir: Path = package_dir

    def __call__(self, problem: Problem) -> Problem:
        if not isinstance(problem.location, StackLocation):
            return problem

        frame = self._frame_from_exception(problem.exception)
        if frame is None:
            frame = self._frame_from_stack(problem.location.frames)

        if frame is None:
            logger.debug("No user frame found for %s; dropping stack marker", problem.category)
            return problem.with_changes(location=None)

        location = _location_from(frame)
        logger.trace("Resolved stack location of %s to %s", problem.category, location)
        return problem.with_changes(location=location)

    def _frame_from_exception(self, exception: BaseException | None) -> FrameSummary | None:
        if exception is None or exception.__traceback__ is None:
            return None
        frames = traceback.extract_tb(exception.__traceback__)
        return frames[-1] if frames else None

    def _frame_from_stack(self, frames: Sequence[FrameSummary]) -> FrameSummary | None:
        for frame in reversed(frames):
            if not _is_internal(frame, self.package_dir):
                return frame
        return None
