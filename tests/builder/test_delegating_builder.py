# topmark:header:start
#
#   project      : BuildProblems
#   file         : test_delegating_builder.py
#   file_relpath : tests/builder/test_delegating_builder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the contract-checking `DelegatingProblemBuilder`.

A well-behaved delegate returns itself from every mutator. The wrapper forwards
each call, verifies that identity, and returns itself so that chains started on the
wrapper stay on it. A delegate that returns anything else is a programming defect
and must fail fast with `BuilderContractError`.
"""

from __future__ import annotations

from typing import Any

import pytest

from buildproblems.builder import MUTATOR_NAMES, DefaultProblemBuilder, DelegatingProblemBuilder
from buildproblems.errors import BuilderContractError
from buildproblems.model import Severity
from tests.conftest import TEST_NAMESPACE, parametrize

# Arguments accepted by each mutator; kept next to MUTATOR_NAMES for coverage.
MUTATOR_ARGS: dict[str, tuple[Any, ...]] = {
    "label": ("unused import",),
    "documented_at": ("https://example.org/doc",),
    "file_location": ("a.py",),
    "line_in_file_location": ("a.py", 1, 2, 3),
    "offset_in_file_location": ("a.py", 10, 4),
    "plugin_location": ("org.example.lint",),
    "stack_location": (),
    "task_path_location": (":app:compile",),
    "category": ("build/compile", "detail"),
    "details": ("details",),
    "solution": ("solution",),
    "additional_data": ("key", "value"),
    "with_exception": (RuntimeError("boom"),),
    "severity": (Severity.ERROR,),
}


class _ForgetfulBuilder(DefaultProblemBuilder):
    """Delegate that returns a fresh builder from one chosen mutator."""

    def __init__(self, broken: str) -> None:
        super().__init__(TEST_NAMESPACE)
        self._broken = broken

    def __getattribute__(self, name: str) -> Any:
        attr = super().__getattribute__(name)
        if name != object.__getattribute__(self, "_broken"):
            return attr

        def _wrong(*args: Any) -> Any:
            attr(*args)
            return DefaultProblemBuilder(TEST_NAMESPACE)

        return _wrong


def test_mutator_args_cover_every_mutator() -> None:
    """The table above exercises the full builder surface."""
    assert set(MUTATOR_ARGS) == set(MUTATOR_NAMES)


@parametrize("name", MUTATOR_NAMES)
def test_wrapper_returns_itself(name: str) -> None:
    """Every mutator of a well-formed wrapper returns the wrapper itself."""
    wrapper = DelegatingProblemBuilder(DefaultProblemBuilder(TEST_NAMESPACE))
    assert getattr(wrapper, name)(*MUTATOR_ARGS[name]) is wrapper


@parametrize("name", MUTATOR_NAMES)
def test_contract_violation_fails_fast(name: str) -> None:
    """A delegate that does not return itself is rejected on the offending call."""
    wrapper = DelegatingProblemBuilder(_ForgetfulBuilder(name))
    with pytest.raises(BuilderContractError, match="Builder pattern expected to return 'self'"):
        getattr(wrapper, name)(*MUTATOR_ARGS[name])


def test_contract_violation_is_not_a_build_error() -> None:
    """Contract violations are runtime defects, distinct from invalid problem data."""
    assert issubclass(BuilderContractError, RuntimeError)
    assert not issubclass(BuilderContractError, ValueError)


def test_build_is_forwarded_without_check() -> None:
    """``build()`` returns the delegate's problem; it is not a mutator."""
    delegate = DefaultProblemBuilder(TEST_NAMESPACE)
    wrapper = DelegatingProblemBuilder(delegate)
    problem = wrapper.category("build/compile").label("unused import").build()

    assert wrapper.delegate is delegate
    assert problem.category.category == "build/compile"
    assert problem.label == "unused import"


def test_nested_wrappers_validate_each_layer() -> None:
    """Wrappers nest: each layer checks its own delegate and returns itself."""
    inner = DelegatingProblemBuilder(DefaultProblemBuilder(TEST_NAMESPACE))
    outer = DelegatingProblemBuilder(inner)

    assert outer.label("x") is outer
    assert inner.label("y") is inner
    assert outer.category("c").build().label == "y"


def test_nested_wrapper_detects_inner_violation() -> None:
    """A violation deep in the stack surfaces through every layer."""
    outer = DelegatingProblemBuilder(DelegatingProblemBuilder(_ForgetfulBuilder("label")))
    with pytest.raises(BuilderContractError):
        outer.label("x")
