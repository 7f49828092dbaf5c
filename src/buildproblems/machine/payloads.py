# topmark:header:start
#
#   project      : BuildProblems
#   file         : payloads.py
#   file_relpath : src/buildproblems/machine/payloads.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Machine payload builders for problems.

This module turns a `Problem` into a JSON-friendly mapping. It does not serialize
(see `buildproblems.machine.serializers`) and never prints.

Shape:

    {
      "kind": "problem",
      "namespace": "org.example.compiler",
      "category": "build/compile",
      "details": ["unused"],
      "label": "unused import",
      "severity": "warning",
      "location": {"kind": "line_in_file", "path": "a.py", "line": 3, ...} | null,
      "documentation": "https://..." | null,
      "problem_details": "..." | null,
      "solution": "..." | null,
      "exception": {"type": "ValueError", "message": "..."} | null,
      "additional_data": {...},
      "operation_id": "op-1" | null
    }
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from buildproblems.model import StackLocation

if TYPE_CHECKING:
    from buildproblems.model import Problem, ProblemLocation
    from buildproblems.operations import OperationIdentifier


def normalize_value(value: object) -> object:
    """Return ``value`` converted to strict JSON-compatible types.

    Mappings and sequences are converted recursively; enums use their value, paths
    their string form. Non-finite floats (``nan``, ``inf``) and containers that
    contain themselves become their ``repr()``, as does anything else.
    """
    return _normalize(value, frozenset())


def _normalize(value: object, active: frozenset[int]) -> object:
    if isinstance(value, float) and not math.isfinite(value):
        return repr(value)
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Enum):
        return _normalize(value.value, active)
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        if id(value) in active:
            return repr(value)
        inner = active | {id(value)}
        if isinstance(value, Mapping):
            return {str(k): _normalize(v, inner) for k, v in value.items()}
        return [_normalize(v, inner) for v in value]
    return repr(value)


def location_payload(location: ProblemLocation | None) -> dict[str, object] | None:
    """Return the payload for ``location`` (``None`` when absent)."""
    if location is None:
        return None
    payload: dict[str, object] = {"kind": location.kind}
    if isinstance(location, StackLocation):
        payload["frames"] = len(location.frames)
        return payload
    for f in dataclasses.fields(location):
        payload[f.name] = normalize_value(getattr(location, f.name))
    return payload


def exception_payload(
    exception: BaseException | None, message: str | None = None
) -> dict[str, str] | None:
    """Return the payload for ``exception`` (``None`` when absent).

    ``message`` replaces the exception's own message when given.
    """
    if exception is None:
        return None
    return {
        "type": type(exception).__name__,
        "message": message if message is not None else str(exception),
    }


def problem_payload(
    problem: Problem,
    operation_id: OperationIdentifier | None = None,
) -> dict[str, Any]:
    """Build the machine payload for a problem.

    Args:
        problem (Problem): The problem to describe.
        operation_id (OperationIdentifier | None): The operation the problem was
            delivered for, if any.

    Returns:
        dict[str, Any]: A JSON-compatible mapping.
    """
    return {
        "kind": "problem",
        "namespace": problem.namespace,
        "category": problem.category.category,
        "details": list(problem.category.details),
        "label": problem.label,
        "severity": problem.severity.value,
        "location": location_payload(problem.location),
        "documentation": (
            problem.documentation_link.url if problem.documentation_link is not None else None
        ),
        "problem_details": problem.details,
        "solution": problem.solution,
        "exception": exception_payload(problem.exception, problem.exception_message),
        "additional_data": normalize_value(problem.additional_data),
        "operation_id": str(operation_id) if operation_id is not None else None,
    }
