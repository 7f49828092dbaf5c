# topmark:header:start
#
#   project      : BuildProblems
#   file         : formats.py
#   file_relpath : src/buildproblems/rendering/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output formats for delivered problems."""

from enum import Enum


class OutputFormat(Enum):
    """BuildProblems output formats."""

    TEXT = "text"
    JSON = "json"
    NDJSON = "ndjson"
