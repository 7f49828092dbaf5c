# topmark:header:start
#
#   project      : BuildProblems
#   file         : cmd_common.py
#   file_relpath : src/buildproblems/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by BuildProblems CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from buildproblems.cli.errors import ProblemsConfigError
from buildproblems.cli.options import resolve_color_mode
from buildproblems.config.logging import get_logger
from buildproblems.config.model import MutableConfig
from buildproblems.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    import click

    from buildproblems.config.logging import ProblemsLogger
    from buildproblems.config.model import Config
    from buildproblems.rendering.console_api import ConsoleLike

logger: ProblemsLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the Click context by the group."""
    console: ConsoleLike = ctx.obj["console"]
    return console


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (negative when quiet, 0 by default)."""
    return int(ctx.obj.get("verbosity_level", 0))


def build_config(
    *,
    config_paths: Iterable[str],
    no_config: bool,
    overrides: Mapping[str, Any] | None = None,
) -> Config:
    """Merge configuration layers and CLI overrides into a frozen `Config`.

    Raises:
        ProblemsConfigError: If an explicit config file is missing or the merged
            configuration is invalid.
    """
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            extra_config_files=[Path(p) for p in config_paths],
            no_config=no_config,
        )
        draft.apply_args(overrides or {})
        config = draft.freeze()
    except ConfigError as exc:
        raise ProblemsConfigError(str(exc)) from exc
    logger.debug("Effective config: %s", config)
    return config


def apply_config_color(ctx: click.Context, config: Config) -> None:
    """Re-resolve console colors now that ``[output] color`` is known."""
    console = get_console(ctx)
    console.enable_color = resolve_color_mode(
        cli_mode=ctx.obj.get("color_mode"),
        config_color=config.color,
    )
    ctx.color = console.enable_color
