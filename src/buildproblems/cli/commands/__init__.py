# topmark:header:start
#
#   project      : BuildProblems
#   file         : __init__.py
#   file_relpath : src/buildproblems/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""BuildProblems CLI commands."""
