# topmark:header:start
#
#   project      : BuildProblems
#   file         : serializers.py
#   file_relpath : src/buildproblems/machine/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Pure JSON/NDJSON serialization utilities for machine output.

This module converts *already-shaped* payloads (see
`buildproblems.machine.payloads`) into strings.

It is intentionally:
- Console-free and Click-free
- side-effect-free (serialization only)

Conventions:
- `json.dumps()` does not append a trailing newline.
- `serialize_ndjson()` returns a string that *does* end with a final `\\n`,
  which is convenient for CLI printing and piping.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from buildproblems.machine.payloads import normalize_value

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping


def serialize_json_object(obj: object) -> str:
    """Serialize an object to pretty-printed JSON (no trailing newline).

    Args:
        obj: The object to serialize.

    Returns:
        A pretty-printed JSON string (no trailing newline).
    """
    return json.dumps(normalize_value(obj), indent=2, allow_nan=False)


def iter_ndjson_strings(records: Iterable[Mapping[str, object]]) -> Iterator[str]:
    """Serialize payload records into per-line JSON strings.

    Args:
        records: Iterable of payload mappings.

    Yields:
        One compact JSON string per record (no trailing newline).
    """
    for record in records:
        yield json.dumps(normalize_value(record), allow_nan=False)


def serialize_ndjson(records: Iterable[Mapping[str, object]]) -> str:
    """Serialize payload records into a newline-delimited string.

    Args:
        records: Iterable of payload mappings.

    Returns:
        A string containing one JSON object per line, ending with a trailing newline.
    """
    return "".join(f"{line}\n" for line in iter_ndjson_strings(records))
