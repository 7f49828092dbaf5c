# topmark:header:start
#
#   project      : BuildProblems
#   file         : __init__.py
#   file_relpath : src/buildproblems/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""BuildProblems package.

BuildProblems is a structured diagnostics pipeline for build tools. Subsystems
describe *problems* (errors, warnings, deprecations) through a fluent builder;
a reporter correlates each problem with the operation currently executing,
runs it through an ordered chain of transformers and hands it to an emitter.

Typical usage:

    service = ProblemsService(emitter=CollectingEmitter())
    reporter = service.reporter("org.example.compiler")
    with service.operation_ref.running(OperationIdentifier("op-1")):
        reporter.report(lambda spec: spec.category("build/compile").label("unused import"))
"""

from __future__ import annotations

from buildproblems.builder import (
    DefaultProblemBuilder,
    DelegatingProblemBuilder,
    ProblemBuilder,
    ProblemSpec,
)
from buildproblems.emitters import (
    CollectingEmitter,
    ConsoleEmitter,
    EmittedProblem,
    NdjsonEmitter,
    ProblemEmitter,
)
from buildproblems.errors import (
    BuilderContractError,
    ConfigError,
    MissingExceptionError,
    ProblemBuildError,
    ProblemsError,
)
from buildproblems.model import (
    DocLink,
    FileLocation,
    LineInFileLocation,
    OffsetInFileLocation,
    OnlineDocLink,
    PluginIdLocation,
    Problem,
    ProblemCategory,
    ProblemLocation,
    Severity,
    StackLocation,
    TaskPathLocation,
    UserManualDocLink,
)
from buildproblems.operations import CurrentOperationRef, OperationIdentifier
from buildproblems.reporter import ProblemReporter, ProblemsService
from buildproblems.transformers import (
    ProblemTransformer,
    RedactSecretsTransformer,
    StackLocationTransformer,
    TransformerChain,
)

__all__ = [
    "BuilderContractError",
    "CollectingEmitter",
    "ConfigError",
    "ConsoleEmitter",
    "CurrentOperationRef",
    "DefaultProblemBuilder",
    "DelegatingProblemBuilder",
    "DocLink",
    "EmittedProblem",
    "FileLocation",
    "LineInFileLocation",
    "MissingExceptionError",
    "NdjsonEmitter",
    "OffsetInFileLocation",
    "OnlineDocLink",
    "OperationIdentifier",
    "PluginIdLocation",
    "Problem",
    "ProblemBuildError",
    "ProblemBuilder",
    "ProblemCategory",
    "ProblemEmitter",
    "ProblemLocation",
    "ProblemReporter",
    "ProblemSpec",
    "ProblemTransformer",
    "ProblemsError",
    "ProblemsService",
    "RedactSecretsTransformer",
    "Severity",
    "StackLocation",
    "StackLocationTransformer",
    "TaskPathLocation",
    "TransformerChain",
    "UserManualDocLink",
]
