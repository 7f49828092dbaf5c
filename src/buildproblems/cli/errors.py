# topmark:header:start
#
#   project      : BuildProblems
#   file         : errors.py
#   file_relpath : src/buildproblems/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the BuildProblems CLI.

Raise these in commands to signal errors with standardized messages and exit
codes. Library errors from `buildproblems.errors` are translated into them at the
command boundary.

Styling:
    Errors are printed through the project console when one is stored in the
    Click context (see `show()`), otherwise with Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from buildproblems.cli.exit_codes import ExitCode


class ProblemsCliError(click.ClickException):
    """Base class for all BuildProblems CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colors are applied in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class ProblemsUsageError(ProblemsCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class ProblemsDataError(ProblemsCliError):
    """Error for problem data rejected by the builder."""

    exit_code = ExitCode.DATA_ERROR


class ProblemsConfigError(ProblemsCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class ProblemsUnexpectedError(ProblemsCliError):
    """Error for unhandled/unknown errors (last resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR
