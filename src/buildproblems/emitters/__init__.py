# topmark:header:start
#
#   project      : BuildProblems
#   file         : __init__.py
#   file_relpath : src/buildproblems/emitters/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Problem emitters: the terminal consumers of transformed problems."""

from __future__ import annotations

from buildproblems.emitters.collecting import CollectingEmitter, EmittedProblem
from buildproblems.emitters.console import ConsoleEmitter
from buildproblems.emitters.contracts import ProblemEmitter
from buildproblems.emitters.ndjson import NdjsonEmitter

__all__ = [
    "CollectingEmitter",
    "ConsoleEmitter",
    "EmittedProblem",
    "NdjsonEmitter",
    "ProblemEmitter",
]
