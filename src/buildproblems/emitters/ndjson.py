# topmark:header:start
#
#   project      : BuildProblems
#   file         : ndjson.py
#   file_relpath : src/buildproblems/emitters/ndjson.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Emitter writing one JSON record per problem (NDJSON).

Records use the payload shape of `buildproblems.machine.payloads.problem_payload`
and are written and flushed under a lock so lines never interleave.
"""

from __future__ import annotations

import sys
import threading
from typing import TYPE_CHECKING, TextIO

from buildproblems.machine.payloads import problem_payload
from buildproblems.machine.serializers import serialize_ndjson

if TYPE_CHECKING:
    from buildproblems.model import Problem
    from buildproblems.operations import OperationIdentifier


class NdjsonEmitter:
    """Write delivered problems as newline-delimited JSON.

    Args:
        stream (TextIO | None): Destination stream; defaults to ``sys.stdout``.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream: TextIO = stream or sys.stdout
        self._lock = threading.Lock()

    def emit(self, problem: Problem, operation_id: OperationIdentifier) -> None:
        line = serialize_ndjson([problem_payload(problem, operation_id)])
        with self._lock:
            self.stream.write(line)
            self.stream.flush()
