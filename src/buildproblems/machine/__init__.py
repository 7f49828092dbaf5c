# topmark:header:start
#
#   project      : BuildProblems
#   file         : __init__.py
#   file_relpath : src/buildproblems/machine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Machine-readable (JSON/NDJSON) representations of problems.

Separation of concerns:
- `buildproblems.machine.payloads` builds JSON-friendly mappings.
- `buildproblems.machine.serializers` turns them into strings.
"""

from __future__ import annotations

from buildproblems.machine.payloads import (
    exception_payload,
    location_payload,
    normalize_value,
    problem_payload,
)
from buildproblems.machine.serializers import (
    iter_ndjson_strings,
    serialize_json_object,
    serialize_ndjson,
)

__all__ = [
    "exception_payload",
    "iter_ndjson_strings",
    "location_payload",
    "normalize_value",
    "problem_payload",
    "serialize_json_object",
    "serialize_ndjson",
]
