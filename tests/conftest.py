# topmark:header:start
#
#   project      : BuildProblems
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the BuildProblems test suite.

This file sets up global fixtures and customizes the logging configuration for test
runs, and provides the reporting fixtures most tests share.

Notes:
    Reporters only deliver while an operation is in flight. Tests that expect an
    emitter call must wrap the reporting call in ``operation_ref.running(...)``;
    tests that exercise the silent drop simply call the reporter outside of it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from buildproblems.config import logging
from buildproblems.config.model import Config, MutableConfig
from buildproblems.emitters import CollectingEmitter
from buildproblems.operations import CurrentOperationRef, OperationIdentifier
from buildproblems.reporter import ProblemReporter

if TYPE_CHECKING:
    from buildproblems.model import Problem

F = TypeVar("F", bound=Callable[..., object])

# A decorator taking a Callable (F) and returning the same Callable (F).
DecoratorType = Callable[[F], F]

TEST_NAMESPACE = "org.example.compiler"


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)
mark_hypothesis_slow: DecoratorType[Any] = as_typed_mark(pytest.mark.hypothesis_slow)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_buildproblems_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("BUILDPROBLEMS_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so every pipeline decision is exercised.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@fixture()
def emitter() -> CollectingEmitter:
    """Return a fresh in-memory emitter."""
    return CollectingEmitter()


@fixture()
def operation_ref() -> CurrentOperationRef:
    """Return a fresh operation ref with no operation in flight."""
    return CurrentOperationRef()


@fixture()
def reporter(emitter: CollectingEmitter, operation_ref: CurrentOperationRef) -> ProblemReporter:
    """Return a reporter without transformers, bound to `TEST_NAMESPACE`."""
    return ProblemReporter(emitter, (), TEST_NAMESPACE, operation_ref)


def op(value: int | str = "op-1") -> OperationIdentifier:
    """Shorthand for an `OperationIdentifier`."""
    return OperationIdentifier(value)


def minimal_spec(builder: Any) -> None:
    """Spec action setting only the mandatory category."""
    builder.category("build/compile")


def make_problem(**changes: Any) -> Problem:
    """Build a problem in `TEST_NAMESPACE` through the default builder.

    Args:
        **changes (Any): Field overrides applied with `Problem.with_changes`.

    Returns:
        Problem: The built problem.
    """
    from buildproblems.builder import DefaultProblemBuilder

    problem = DefaultProblemBuilder(TEST_NAMESPACE).category("build/compile").build()
    return problem.with_changes(**changes) if changes else problem


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides.

    Args:
        **overrides (Any): Attributes set on the mutable builder before freezing.

    Returns:
        Config: An immutable configuration snapshot.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()
