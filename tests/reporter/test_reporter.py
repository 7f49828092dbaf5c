# topmark:header:start
#
#   project      : BuildProblems
#   file         : test_reporter.py
#   file_relpath : tests/reporter/test_reporter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `ProblemReporter`: the build, transform and emit pipeline.

Covers:
    - delivery only while an operation is in flight (silent drop otherwise);
    - exactly one emitter call per delivered problem, after the chain ran in order;
    - ``throw_on_report`` / ``rethrow_with_report`` raising semantics;
    - propagation of emitter, transformer and builder failures.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

import pytest

from buildproblems.builder import DelegatingProblemBuilder
from buildproblems.emitters import CollectingEmitter
from buildproblems.errors import MissingExceptionError, ProblemBuildError
from buildproblems.model import Problem, Severity
from buildproblems.operations import CurrentOperationRef
from buildproblems.reporter import ProblemReporter
from buildproblems.transformers import RedactSecretsTransformer
from tests.conftest import TEST_NAMESPACE, make_problem, minimal_spec, op

if TYPE_CHECKING:
    from buildproblems.builder import ProblemSpec
    from buildproblems.operations import OperationIdentifier


class _BoomError(Exception):
    pass


def _tagging(tag: str, log: list[str]) -> Any:
    """Return a transformer appending ``tag`` to the label and recording its call."""

    def _transform(problem: Problem) -> Problem:
        log.append(tag)
        return problem.with_changes(label=(problem.label or "") + tag)

    return _transform


def _with_exception(exc: BaseException) -> Any:
    def _spec(builder: ProblemSpec) -> None:
        builder.category("build/compile").with_exception(exc)

    return _spec


# --- report -----------------------------------------------------------------


def test_report_in_operation_emits_once(
    reporter: ProblemReporter,
    emitter: CollectingEmitter,
    operation_ref: CurrentOperationRef,
) -> None:
    """Reporting inside an operation calls the emitter exactly once."""
    with operation_ref.running(op()):
        reporter.report(lambda b: b.category("build/compile").label("unused import"))

    assert len(emitter) == 1
    record = emitter.records[0]
    assert record.operation_id == op()
    assert record.problem.label == "unused import"
    assert record.problem.namespace == TEST_NAMESPACE


def test_report_without_operation_is_dropped(
    reporter: ProblemReporter, emitter: CollectingEmitter
) -> None:
    """Outside an operation the problem is silently dropped."""
    reporter.report(minimal_spec)
    assert len(emitter) == 0


def test_report_with_operation_explicitly_cleared(
    reporter: ProblemReporter,
    emitter: CollectingEmitter,
    operation_ref: CurrentOperationRef,
) -> None:
    """A nested ``running(None)`` block drops problems reported inside it."""
    with operation_ref.running(op()):
        with operation_ref.running(None):
            reporter.report(minimal_spec)
        reporter.report(minimal_spec)

    assert [r.operation_id for r in emitter] == [op()]


def test_nested_operations_correlate_innermost(
    reporter: ProblemReporter,
    emitter: CollectingEmitter,
    operation_ref: CurrentOperationRef,
) -> None:
    """Problems are correlated with the innermost running operation."""
    with operation_ref.running(op("outer")):
        with operation_ref.running(op("inner")):
            reporter.report(minimal_spec)
        reporter.report(minimal_spec)

    assert [str(r.operation_id) for r in emitter] == ["inner", "outer"]


def test_transformers_run_in_registration_order(
    emitter: CollectingEmitter, operation_ref: CurrentOperationRef
) -> None:
    """The emitter receives the output of the last transformer."""
    calls: list[str] = []
    reporter = ProblemReporter(
        emitter,
        [_tagging("-a", calls), _tagging("-b", calls), _tagging("-c", calls)],
        TEST_NAMESPACE,
        operation_ref,
    )
    with operation_ref.running(op()):
        reporter.report(lambda b: b.category("c").label("x"))

    assert calls == ["-a", "-b", "-c"]
    assert emitter.problems[0].label == "x-a-b-c"


def test_transformers_not_run_when_dropped(
    emitter: CollectingEmitter, operation_ref: CurrentOperationRef
) -> None:
    """Dropped problems never reach the transformer chain."""
    calls: list[str] = []
    reporter = ProblemReporter(emitter, [_tagging("-a", calls)], TEST_NAMESPACE, operation_ref)
    reporter.report(minimal_spec)

    assert calls == []
    assert len(emitter) == 0


def test_spec_receives_contract_checking_wrapper(
    reporter: ProblemReporter, operation_ref: CurrentOperationRef
) -> None:
    """The spec action is handed a `DelegatingProblemBuilder`."""
    seen: list[object] = []

    def _spec(builder: ProblemSpec) -> None:
        seen.append(builder)
        builder.category("c")

    with operation_ref.running(op()):
        reporter.report(_spec)

    assert len(seen) == 1
    assert isinstance(seen[0], DelegatingProblemBuilder)


def test_report_propagates_build_errors(
    reporter: ProblemReporter,
    emitter: CollectingEmitter,
    operation_ref: CurrentOperationRef,
) -> None:
    """A spec that does not set a category fails before anything is emitted."""
    with operation_ref.running(op()), pytest.raises(ProblemBuildError):
        reporter.report(lambda b: b.label("no category"))
    assert len(emitter) == 0


def test_report_propagates_spec_exceptions(
    reporter: ProblemReporter, operation_ref: CurrentOperationRef
) -> None:
    """Exceptions raised by the spec action itself are not swallowed."""

    def _spec(builder: ProblemSpec) -> None:
        raise _BoomError("in spec")

    with operation_ref.running(op()), pytest.raises(_BoomError, match="in spec"):
        reporter.report(_spec)


def test_emitter_failure_propagates(operation_ref: CurrentOperationRef) -> None:
    """An emitter error reaches the reporting caller unchanged."""

    class _FailingEmitter:
        def emit(self, problem: Problem, operation_id: OperationIdentifier) -> None:
            raise _BoomError("emitter")

    reporter = ProblemReporter(_FailingEmitter(), (), TEST_NAMESPACE, operation_ref)
    with operation_ref.running(op()), pytest.raises(_BoomError, match="emitter"):
        reporter.report(minimal_spec)


def test_transformer_failure_propagates_without_emitting(
    emitter: CollectingEmitter, operation_ref: CurrentOperationRef
) -> None:
    """A transformer error aborts delivery; the emitter is not called."""

    def _failing(problem: Problem) -> Problem:
        raise _BoomError("transformer")

    reporter = ProblemReporter(emitter, [_failing], TEST_NAMESPACE, operation_ref)
    with operation_ref.running(op()), pytest.raises(_BoomError, match="transformer"):
        reporter.report(minimal_spec)
    assert len(emitter) == 0


# --- create / report_problem ------------------------------------------------


def test_create_never_emits(
    reporter: ProblemReporter,
    emitter: CollectingEmitter,
    operation_ref: CurrentOperationRef,
) -> None:
    """``create`` only builds, even inside an operation."""
    with operation_ref.running(op()):
        problem = reporter.create(lambda b: b.category("c").label("built"))

    assert problem.label == "built"
    assert problem.namespace == TEST_NAMESPACE
    assert len(emitter) == 0


def test_create_problem_builder_uses_namespace(reporter: ProblemReporter) -> None:
    """Builders handed out by the reporter stamp its namespace."""
    problem = reporter.create_problem_builder().category("c").build()
    assert problem.category.namespace == TEST_NAMESPACE


def test_report_problem_delivers_prebuilt_problem(
    reporter: ProblemReporter,
    emitter: CollectingEmitter,
    operation_ref: CurrentOperationRef,
) -> None:
    """Already built problems follow the same delivery rules."""
    problem = make_problem(label="prebuilt")
    reporter.report_problem(problem)
    with operation_ref.running(op()):
        reporter.report_problem(problem)

    assert emitter.problems == (problem,)


def test_report_problem_to_uses_explicit_operation(
    reporter: ProblemReporter, emitter: CollectingEmitter
) -> None:
    """An explicit operation id bypasses the ref; ``None`` drops."""
    problem = make_problem()
    reporter.report_problem_to(problem, op("explicit"))
    reporter.report_problem_to(problem, None)

    assert [str(r.operation_id) for r in emitter] == ["explicit"]


# --- throw_on_report --------------------------------------------------------


def test_throw_on_report_without_exception(
    reporter: ProblemReporter,
    emitter: CollectingEmitter,
    operation_ref: CurrentOperationRef,
) -> None:
    """Missing exception: `MissingExceptionError` and zero emitter calls."""
    with operation_ref.running(op()), pytest.raises(MissingExceptionError):
        reporter.throw_on_report(minimal_spec)
    assert len(emitter) == 0


def test_throw_on_report_emits_then_raises_attached_exception(
    reporter: ProblemReporter,
    emitter: CollectingEmitter,
    operation_ref: CurrentOperationRef,
) -> None:
    """The emitter sees the problem before the attached exception is raised."""
    exc = _BoomError("attached")
    with operation_ref.running(op()), pytest.raises(_BoomError) as info:
        reporter.throw_on_report(_with_exception(exc))

    assert info.value is exc
    assert len(emitter) == 1
    assert emitter.problems[0].exception is exc


def test_throw_on_report_outside_operation_still_raises(
    reporter: ProblemReporter, emitter: CollectingEmitter
) -> None:
    """The problem is dropped, but the exception is still raised."""
    exc = _BoomError("attached")
    with pytest.raises(_BoomError) as info:
        reporter.throw_on_report(_with_exception(exc))

    assert info.value is exc
    assert len(emitter) == 0


# --- rethrow_with_report ----------------------------------------------------


def test_rethrow_with_report_attaches_and_reraises(
    reporter: ProblemReporter,
    emitter: CollectingEmitter,
    operation_ref: CurrentOperationRef,
) -> None:
    """The delivered problem carries ``exc`` and ``exc`` itself is re-raised."""
    exc = _BoomError("original")
    with operation_ref.running(op()), pytest.raises(_BoomError) as info:
        reporter.rethrow_with_report(exc, lambda b: b.category("c").severity(Severity.ERROR))

    assert info.value is exc
    assert len(emitter) == 1
    assert emitter.problems[0].exception is exc
    assert emitter.problems[0].severity is Severity.ERROR


def test_rethrow_with_report_overrides_spec_exception(
    reporter: ProblemReporter,
    emitter: CollectingEmitter,
    operation_ref: CurrentOperationRef,
) -> None:
    """``exc`` wins over an exception the spec attached."""
    exc = _BoomError("argument")
    with operation_ref.running(op()), pytest.raises(_BoomError):
        reporter.rethrow_with_report(exc, _with_exception(ValueError("from spec")))
    assert emitter.problems[0].exception is exc


def test_rethrow_with_report_outside_operation_still_raises(
    reporter: ProblemReporter, emitter: CollectingEmitter
) -> None:
    """Re-raising does not depend on an operation being in flight."""
    exc = _BoomError("dropped")
    with pytest.raises(_BoomError) as info:
        reporter.rethrow_with_report(exc, minimal_spec)

    assert info.value is exc
    assert len(emitter) == 0


def test_rethrow_with_report_requires_exception(reporter: ProblemReporter) -> None:
    """Passing ``None`` is a usage error."""
    with pytest.raises(MissingExceptionError):
        reporter.rethrow_with_report(None, minimal_spec)  # type: ignore[arg-type]


# --- End-to-end scenario ----------------------------------------------------


def _unused_import_with_secret(builder: ProblemSpec) -> None:
    (
        builder.category("build/compile")
        .label("unused import")
        .details("Connect with password=hunter2 to fetch the index.")
        .additional_data("api_token", "abc123")
        .additional_data("rule", "F401")
    )


def test_redacting_pipeline_scenario(emitter: CollectingEmitter) -> None:
    """A redacting chain masks secrets before the emitter sees the problem."""
    ref = CurrentOperationRef()
    reporter = ProblemReporter(emitter, [RedactSecretsTransformer()], TEST_NAMESPACE, ref)

    with ref.running(op("op-1")):
        reporter.report(_unused_import_with_secret)

    assert len(emitter) == 1
    record = emitter.records[0]
    assert str(record.operation_id) == "op-1"
    assert record.problem.category.category == "build/compile"
    assert record.problem.label == "unused import"
    assert "hunter2" not in (record.problem.details or "")
    assert record.problem.details == "Connect with password=**** to fetch the index."
    assert record.problem.additional_data["api_token"] == "****"
    assert record.problem.additional_data["rule"] == "F401"


def test_redacting_pipeline_scenario_without_operation(emitter: CollectingEmitter) -> None:
    """The same report outside an operation reaches no emitter and raises nothing."""
    reporter = ProblemReporter(
        emitter, [RedactSecretsTransformer()], TEST_NAMESPACE, CurrentOperationRef()
    )
    reporter.report(_unused_import_with_secret)
    assert len(emitter) == 0


# --- Concurrency ------------------------------------------------------------


def test_operations_are_scoped_per_thread(
    reporter: ProblemReporter,
    emitter: CollectingEmitter,
    operation_ref: CurrentOperationRef,
) -> None:
    """Each thread sees only its own operation; threads without one drop."""

    def _worker(index: int) -> None:
        if index % 2:
            reporter.report(minimal_spec)
            return
        with operation_ref.running(op(f"op-{index}")):
            reporter.report(minimal_spec)

    with operation_ref.running(op("main")):
        threads = [threading.Thread(target=_worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

    ids = sorted(str(r.operation_id) for r in emitter)
    assert ids == ["op-0", "op-2", "op-4", "op-6"]
