# topmark:header:start
#
#   project      : BuildProblems
#   file         : text.py
#   file_relpath : src/buildproblems/rendering/text.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-readable rendering of problems.

Example output (colors omitted):

    warning: unused import [org.example.compiler:build/compile]
      --> src/app.py:3:5
      The import 'os' is never used.
      solution: Remove the import.
      docs: https://example.org/unused-imports
      data: rule=F401
      operation: op-1
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from buildproblems.constants import VALUE_NOT_SET

if TYPE_CHECKING:
    from buildproblems.model import Problem
    from buildproblems.operations import OperationIdentifier

INDENT: str = "  "


def render_problem_text(
    problem: Problem,
    operation_id: OperationIdentifier | None = None,
    *,
    color: bool = False,
) -> str:
    """Render a problem as multi-line text (no trailing newline).

    Args:
        problem (Problem): The problem to render.
        operation_id (OperationIdentifier | None): The operation it was delivered for.
        color (bool): Color the severity with the `yachalk` color of its level.

    Returns:
        str: The rendered text.
    """
    severity: str = problem.severity.value
    if color:
        severity = problem.severity.color(severity)

    label = problem.label if problem.label is not None else VALUE_NOT_SET
    lines: list[str] = [f"{severity}: {label} [{problem.category}]"]
    if problem.location is not None:
        lines.append(f"{INDENT}--> {problem.location}")
    if problem.details:
        lines.extend(f"{INDENT}{line}" for line in problem.details.splitlines())
    if problem.solution:
        lines.append(f"{INDENT}solution: {problem.solution}")
    if problem.documentation_link is not None:
        lines.append(f"{INDENT}docs: {problem.documentation_link.url}")
    if problem.exception is not None:
        cause = type(problem.exception).__name__
        lines.append(f"{INDENT}caused by: {cause}: {problem.exception_text}")
    for key, value in problem.additional_data.items():
        lines.append(f"{INDENT}data: {key}={value}")
    if operation_id is not None:
        lines.append(f"{INDENT}operation: {operation_id}")
    return "\n".join(lines)
