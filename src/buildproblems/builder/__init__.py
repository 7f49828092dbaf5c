# topmark:header:start
#
#   project      : BuildProblems
#   file         : __init__.py
#   file_relpath : src/buildproblems/builder/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fluent problem builders and their self-return contract."""

from __future__ import annotations

from buildproblems.builder.contracts import (
    MUTATOR_NAMES,
    ProblemBuilder,
    ProblemSpec,
    ProblemSpecAction,
)
from buildproblems.builder.default import DefaultProblemBuilder
from buildproblems.builder.delegating import DelegatingProblemBuilder

__all__ = [
    "MUTATOR_NAMES",
    "DefaultProblemBuilder",
    "DelegatingProblemBuilder",
    "ProblemBuilder",
    "ProblemSpec",
    "ProblemSpecAction",
]
