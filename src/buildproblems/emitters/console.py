# topmark:header:start
#
#   project      : BuildProblems
#   file         : console.py
#   file_relpath : src/buildproblems/emitters/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Emitter printing human-readable problems to a console.

Errors go to the console's error stream, everything else to its output stream.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from buildproblems.model import Severity
from buildproblems.rendering.console_api import StdConsole
from buildproblems.rendering.text import render_problem_text

if TYPE_CHECKING:
    from buildproblems.model import Problem
    from buildproblems.operations import OperationIdentifier
    from buildproblems.rendering.console_api import ConsoleLike


class ConsoleEmitter:
    """Render each delivered problem as text on a `ConsoleLike`.

    Args:
        console (ConsoleLike | None): Target console; defaults to a `StdConsole`.
        show_operation (bool): Include the operation identifier in the output.
    """

    def __init__(self, console: ConsoleLike | None = None, *, show_operation: bool = False) -> None:
        self.console: ConsoleLike = console or StdConsole()
        self.show_operation = show_operation
        self._lock = threading.Lock()

    def emit(self, problem: Problem, operation_id: OperationIdentifier) -> None:
        text = render_problem_text(
            problem,
            operation_id if self.show_operation else None,
            color=self.console.enable_color,
        )
        # Keep multi-line problems from interleaving across threads.
        with self._lock:
            if problem.severity is Severity.ERROR:
                self.console.error(text)
            else:
                self.console.print(text)
