# topmark:header:start
#
#   project      : BuildProblems
#   file         : reporter.py
#   file_relpath : src/buildproblems/reporter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Problem reporting: build, transform, emit.

`ProblemReporter` is the entry point used by build subsystems. Each reporting call
runs the same fixed pipeline:

1. create a fresh builder for the reporter's namespace and wrap it in a
   `DelegatingProblemBuilder` before handing it to the caller's spec action;
2. ``build()`` the problem;
3. read the current operation from the injected `CurrentOperationRef`;
4. if an operation is in flight, run the `TransformerChain` and call the emitter
   exactly once; otherwise drop the problem without touching the emitter.

Builder, transformer and emitter errors are never caught here. The drop decision
lives in `ProblemReporter._deliver` so the policy stays in one place.

`ProblemsService` owns the resources shared by all reporters of a process (one
emitter, one chain, one operation ref) and hands out one reporter per namespace.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, NoReturn

from buildproblems.builder.default import DefaultProblemBuilder
from buildproblems.builder.delegating import DelegatingProblemBuilder
from buildproblems.config.logging import get_logger
from buildproblems.errors import MissingExceptionError
from buildproblems.operations import CurrentOperationRef
from buildproblems.transformers.chain import TransformerChain
from buildproblems.transformers.registry import build_transformers

if TYPE_CHECKING:
    from collections.abc import Iterable

    from buildproblems.builder.contracts import ProblemBuilder, ProblemSpecAction
    from buildproblems.config.logging import ProblemsLogger
    from buildproblems.config.model import Config
    from buildproblems.emitters.contracts import ProblemEmitter
    from buildproblems.model import Problem
    from buildproblems.operations import OperationIdentifier
    from buildproblems.transformers.contracts import ProblemTransformer

logger: ProblemsLogger = get_logger(__name__)


class ProblemReporter:
    """Report problems for one namespace.

    Args:
        emitter (ProblemEmitter): Terminal consumer of transformed problems.
        transformers (TransformerChain | Iterable[ProblemTransformer]): Transformers
            applied, in order, to every delivered problem.
        namespace (str): Subsystem identifier stamped on every problem category.
        operation_ref (CurrentOperationRef): Source of the operation in flight.
    """

    def __init__(
        self,
        emitter: ProblemEmitter,
        transformers: TransformerChain | Iterable[ProblemTransformer],
        namespace: str,
        operation_ref: CurrentOperationRef,
    ) -> None:
        self.emitter: ProblemEmitter = emitter
        self.transformers: TransformerChain = (
            transformers
            if isinstance(transformers, TransformerChain)
            else TransformerChain(transformers)
        )
        self.namespace: str = namespace
        self.operation_ref: CurrentOperationRef = operation_ref

    def __repr__(self) -> str:
        return f"ProblemReporter(namespace={self.namespace!r}, transformers={self.transformers!r})"

    def create_problem_builder(self) -> ProblemBuilder:
        """Return a fresh, unwrapped builder for this reporter's namespace."""
        return DefaultProblemBuilder(self.namespace)

    def create(self, spec: ProblemSpecAction) -> Problem:
        """Build a problem without delivering it.

        Args:
            spec (ProblemSpecAction): Callback configuring the builder.

        Returns:
            Problem: The built problem.
        """
        return self._build(spec)

    def report(self, spec: ProblemSpecAction) -> None:
        """Build a problem and deliver it if an operation is in flight.

        Args:
            spec (ProblemSpecAction): Callback configuring the builder.
        """
        self._deliver(self._build(spec))

    def report_problem(self, problem: Problem) -> None:
        """Deliver an already built problem under the current operation."""
        self._deliver(problem)

    def report_problem_to(self, problem: Problem, operation_id: OperationIdentifier | None) -> None:
        """Deliver an already built problem under an explicit operation.

        ``None`` for ``operation_id`` drops the problem, like reporting outside an
        operation does.
        """
        self._emit(problem, operation_id)

    def throw_on_report(self, spec: ProblemSpecAction) -> NoReturn:
        """Build and deliver a problem, then raise the exception it carries.

        Args:
            spec (ProblemSpecAction): Callback configuring the builder; it must
                attach an exception with ``with_exception``.

        Raises:
            MissingExceptionError: If the built problem carries no exception. The
                emitter is not called in that case.
        """
        problem = self._build(spec)
        exc = problem.exception
        if exc is None:
            logger.debug("throw_on_report without exception for %s", problem.category)
            raise MissingExceptionError()
        self._deliver(problem)
        logger.trace("Raising %s attached to %s", type(exc).__name__, problem.category)
        raise exc

    def rethrow_with_report(self, exc: BaseException, spec: ProblemSpecAction) -> NoReturn:
        """Report a problem for ``exc`` and re-raise it.

        ``exc`` replaces any exception the callback attached. It is re-raised even
        when no operation is in flight and the problem is dropped.

        Args:
            exc (BaseException): The exception being reported.
            spec (ProblemSpecAction): Callback configuring the builder.

        Raises:
            MissingExceptionError: If ``exc`` is ``None``.
        """
        if exc is None:
            raise MissingExceptionError()
        problem = self._build(spec).with_changes(exception=exc)
        self._deliver(problem)
        logger.trace("Re-raising %s after report of %s", type(exc).__name__, problem.category)
        raise exc

    def _build(self, spec: ProblemSpecAction) -> Problem:
        builder = DelegatingProblemBuilder(self.create_problem_builder())
        spec(builder)
        return builder.build()

    def _deliver(self, problem: Problem) -> None:
        self._emit(problem, self.operation_ref.get_id())

    def _emit(self, problem: Problem, operation_id: OperationIdentifier | None) -> None:
        if operation_id is None:
            logger.debug("No operation in flight; dropping %s", problem.category)
            return
        transformed = self.transformers.apply(problem)
        self.emitter.emit(transformed, operation_id)
        logger.debug("Delivered %s for operation %s", transformed.category, operation_id)


class ProblemsService:
    """Shared reporting resources and a per-namespace reporter cache.

    Args:
        emitter (ProblemEmitter): Emitter shared by all reporters.
        transformers (TransformerChain | Iterable[ProblemTransformer]): Chain shared
            by all reporters.
        operation_ref (CurrentOperationRef | None): Operation ref shared by all
            reporters; a new one is created if omitted.
    """

    def __init__(
        self,
        emitter: ProblemEmitter,
        transformers: TransformerChain | Iterable[ProblemTransformer] = (),
        operation_ref: CurrentOperationRef | None = None,
    ) -> None:
        self.emitter: ProblemEmitter = emitter
        self.transformers: TransformerChain = (
            transformers
            if isinstance(transformers, TransformerChain)
            else TransformerChain(transformers)
        )
        self.operation_ref: CurrentOperationRef = operation_ref or CurrentOperationRef()
        self._reporters: dict[str, ProblemReporter] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: Config,
        emitter: ProblemEmitter,
        operation_ref: CurrentOperationRef | None = None,
    ) -> ProblemsService:
        """Create a service whose chain is built from ``config``.

        Raises:
            ConfigError: If ``config`` names an unknown transformer.
        """
        return cls(emitter, build_transformers(config), operation_ref)

    def reporter(self, namespace: str) -> ProblemReporter:
        """Return the reporter for ``namespace``, creating it on first use."""
        with self._lock:
            reporter = self._reporters.get(namespace)
            if reporter is None:
                reporter = ProblemReporter(
                    self.emitter, self.transformers, namespace, self.operation_ref
                )
                self._reporters[namespace] = reporter
                logger.debug("Created %r", reporter)
            return reporter

    @property
    def namespaces(self) -> tuple[str, ...]:
        """Return the namespaces that have a reporter, sorted."""
        with self._lock:
            return tuple(sorted(self._reporters))
