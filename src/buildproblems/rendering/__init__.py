# topmark:header:start
#
#   project      : BuildProblems
#   file         : __init__.py
#   file_relpath : src/buildproblems/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-facing output: formats, console abstraction and text rendering."""

from __future__ import annotations

from buildproblems.rendering.console_api import ConsoleLike, StdConsole
from buildproblems.rendering.formats import OutputFormat
from buildproblems.rendering.text import render_problem_text

__all__ = [
    "ConsoleLike",
    "OutputFormat",
    "StdConsole",
    "render_problem_text",
]
