# topmark:header:start
#
#   project      : BuildProblems
#   file         : options.py
#   file_relpath : src/buildproblems/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

Centralizes reusable options (verbosity, color, config files) and their
resolution logic so the group and its commands stay thin.
"""

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from buildproblems.cli.errors import ProblemsUsageError
from buildproblems.config.logging import get_logger

P = ParamSpec("P")
R = TypeVar("R")

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}

logger = get_logger(__name__)


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v`` and ``-q`` counts.

    Args:
        verbose_count: Number of times ``-v`` is passed.
        quiet_count: Number of times ``-q`` is passed.

    Returns:
        ``verbose_count`` when verbose, ``-quiet_count`` when quiet, ``0`` otherwise.

    Raises:
        ProblemsUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise ProblemsUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count > 0:
        return verbose_count
    return -quiet_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase output detail (e.g. show operation ids).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Reduce output (e.g. suppress notices about dropped problems).",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    config_color: bool | None = None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Args:
        cli_mode: Explicit color mode from CLI options.
        config_color: ``[output] color`` from configuration, if set.
        stdout_isatty: Whether stdout is a TTY; if None, auto-detected.

    Returns:
        True if color output should be enabled, False otherwise.

    Behavior:
        ``--color=always|never`` wins, then ``[output] color``, then the
        ``FORCE_COLOR`` / ``NO_COLOR`` environment variables, then TTY detection.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    if config_color is not None:
        return config_color
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        stdout_isatty = sys.stdout.isatty()
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` (auto, always, never) and ``--no-color`` options to a command."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config`` (repeatable) and ``--no-config`` options to a command."""
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        type=click.Path(dir_okay=False, path_type=str),
        help="Additional TOML config file to merge (repeatable, last wins).",
    )(f)
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Do not discover pyproject.toml / buildproblems.toml in the working directory.",
    )(f)
    return f
