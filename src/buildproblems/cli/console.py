# topmark:header:start
#
#   project      : BuildProblems
#   file         : console.py
#   file_relpath : src/buildproblems/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-backed console for user-facing program output.

Separates CLI output from internal logging: use the console for messages meant
for end users and `logging` for diagnostics.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO, TypedDict

import click

from buildproblems.rendering.console_api import ConsoleLike


# Documentation and caller-side type checking only.
class StyleKwargs(TypedDict, total=False):
    """Keyword arguments accepted by click.style()."""

    fg: str
    bg: str
    bold: bool
    dim: bool
    underline: bool
    reverse: bool


class ClickConsole(ConsoleLike):
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): If True, emit ANSI color codes; plain text otherwise.
        out (TextIO | None): Stream for standard output. Defaults to `sys.stdout`.
        err (TextIO | None): Stream for error output. Defaults to `sys.stderr`.
    """

    enable_color: bool
    out: TextIO
    err: TextIO

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a message to stdout."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning message to stderr."""
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="yellow")

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr."""
        click.echo(text, nl=nl, file=self.err, color=self.enable_color)

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return a styled string using click.style (plain text if color is disabled).

        Args:
            text (str): Text to style.
            **style_kwargs (Any): Keyword arguments from `StyleKwargs`.

        Returns:
            str: The styled text.
        """
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
