# topmark:header:start
#
#   project      : BuildProblems
#   file         : main.py
#   file_relpath : src/buildproblems/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""BuildProblems command line entry point.

Group-level options (verbosity, color) are resolved once and stored in
``ctx.obj`` together with the program-output console; subcommands read them
from there. Internal logging is configured from ``BUILDPROBLEMS_LOG_LEVEL``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from buildproblems.cli.commands.config import config_command
from buildproblems.cli.commands.report import report_command
from buildproblems.cli.commands.version import version_command
from buildproblems.cli.console import ClickConsole
from buildproblems.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from buildproblems.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from buildproblems.rendering.console_api import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging, color, console) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color``.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    ctx.obj["color_mode"] = effective_color_mode
    enable_color = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Report, transform and emit build problems.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the BuildProblems CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=ColorMode(color_mode) if color_mode else None,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'buildproblems report --category CATEGORY' to report a problem.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(config_command)

cli.add_command(report_command)

if __name__ == "__main__":
    cli()
