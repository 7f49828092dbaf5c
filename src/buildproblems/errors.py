# topmark:header:start
#
#   project      : BuildProblems
#   file         : errors.py
#   file_relpath : src/buildproblems/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the BuildProblems core.

Taxonomy:
    - `BuilderContractError`: a builder implementation broke the fluent
      self-return contract. This is a programming defect and must not be
      caught and suppressed by reporting code.
    - `MissingExceptionError`: ``throw_on_report`` was used without attaching an
      exception to the problem.
    - `ProblemBuildError`: ``build()`` was called on a builder whose required
      fields are missing or invalid.
    - `ConfigError`: invalid configuration (unknown transformer, unreadable file).

Transformer and emitter failures are never wrapped; they propagate as raised.
"""

from __future__ import annotations


class ProblemsError(Exception):
    """Base class for all BuildProblems errors."""


class BuilderContractError(ProblemsError, RuntimeError):
    """A builder mutator returned something other than the builder it was called on."""

    def __init__(self, message: str = "Builder pattern expected to return 'self'") -> None:
        super().__init__(message)


class MissingExceptionError(ProblemsError, RuntimeError):
    """A problem reported via ``throw_on_report`` carries no exception."""

    def __init__(self, message: str = "Exception must be non-null") -> None:
        super().__init__(message)


class ProblemBuildError(ProblemsError, ValueError):
    """A problem could not be built because its invariants are unmet."""


class ConfigError(ProblemsError, ValueError):
    """Configuration is invalid or cannot be loaded."""
