# topmark:header:start
#
#   project      : BuildProblems
#   file         : keys.py
#   file_relpath : src/buildproblems/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for BuildProblems configuration.

These strings are the external configuration API as it appears in
``buildproblems.toml`` and in ``[tool.buildproblems]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by BuildProblems configuration."""

    # pyproject.toml nesting
    SECTION_TOOL: Final[str] = "tool"
    SECTION_TOOL_BUILDPROBLEMS: Final[str] = "buildproblems"

    # [reporter]
    SECTION_REPORTER: Final[str] = "reporter"

    KEY_NAMESPACE: Final[str] = "namespace"
    KEY_TRANSFORMERS: Final[str] = "transformers"

    # [redact]
    SECTION_REDACT: Final[str] = "redact"

    KEY_KEYS: Final[str] = "keys"
    KEY_PATTERNS: Final[str] = "patterns"
    KEY_REPLACEMENT: Final[str] = "replacement"

    # [output]
    SECTION_OUTPUT: Final[str] = "output"

    KEY_FORMAT: Final[str] = "format"
    KEY_COLOR: Final[str] = "color"
