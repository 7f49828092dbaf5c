# topmark:header:start
#
#   project      : BuildProblems
#   file         : test_stack_location.py
#   file_relpath : tests/transformers/test_stack_location.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `StackLocationTransformer`."""

from __future__ import annotations

import inspect
from pathlib import Path

from buildproblems.builder import DefaultProblemBuilder
from buildproblems.model import FileLocation, LineInFileLocation, StackLocation
from buildproblems.transformers import StackLocationTransformer
from tests.conftest import TEST_NAMESPACE, make_problem


def _raise_here() -> None:
    raise RuntimeError("boom")


def test_non_stack_locations_pass_through() -> None:
    """Problems without the marker are returned as-is."""
    problem = make_problem(location=FileLocation("a.py"))
    assert StackLocationTransformer()(problem) is problem


def test_marker_resolves_to_reporting_call_site() -> None:
    """The innermost frame outside the package becomes the location."""
    line = inspect.currentframe().f_lineno + 1  # type: ignore[union-attr]
    problem = DefaultProblemBuilder(TEST_NAMESPACE).category("c").stack_location().build()

    out = StackLocationTransformer()(problem)

    assert isinstance(out.location, LineInFileLocation)
    assert Path(out.location.path).resolve() == Path(__file__).resolve()
    assert out.location.line == line


def test_exception_traceback_takes_precedence() -> None:
    """When an exception with a traceback is attached, its innermost frame wins."""
    try:
        _raise_here()
    except RuntimeError as exc:
        caught = exc
    frame_line = caught.__traceback__.tb_next.tb_lineno  # type: ignore[union-attr]

    problem = (
        DefaultProblemBuilder(TEST_NAMESPACE)
        .category("c")
        .stack_location()
        .with_exception(caught)
        .build()
    )
    out = StackLocationTransformer()(problem)

    assert isinstance(out.location, LineInFileLocation)
    assert out.location.line == frame_line


def test_exception_without_traceback_falls_back_to_stack() -> None:
    """An exception that was never raised has no traceback to use."""
    line = inspect.currentframe().f_lineno + 1  # type: ignore[union-attr]
    builder = DefaultProblemBuilder(TEST_NAMESPACE).category("c").stack_location()
    problem = builder.with_exception(ValueError("not raised")).build()

    out = StackLocationTransformer()(problem)

    assert isinstance(out.location, LineInFileLocation)
    assert out.location.line == line


def test_marker_without_frames_is_dropped() -> None:
    """No usable frame: the marker is removed instead of left unresolved."""
    problem = make_problem(location=StackLocation(()))
    assert StackLocationTransformer()(problem).location is None


def test_frames_inside_package_dir_are_skipped() -> None:
    """Frames below ``package_dir`` never become the location."""
    problem = DefaultProblemBuilder(TEST_NAMESPACE).category("c").stack_location().build()
    out = StackLocationTransformer(package_dir=Path(__file__).resolve().parent)(problem)

    assert isinstance(out.location, LineInFileLocation)
    assert Path(out.location.path).resolve() != Path(__file__).resolve()
