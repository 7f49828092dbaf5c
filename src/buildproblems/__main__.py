# topmark:header:start
#
#   project      : BuildProblems
#   file         : __main__.py
#   file_relpath : src/buildproblems/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running BuildProblems via ``python -m buildproblems``.

Delegates directly to `buildproblems.cli.main.cli`, so the module interface and
the ``buildproblems`` console script share a single entry point.

Examples:
    Report a problem from the command line::

        python -m buildproblems report --category build/compile --label "unused import"
"""

from __future__ import annotations

from buildproblems.cli.main import cli

if __name__ == "__main__":
    cli()
