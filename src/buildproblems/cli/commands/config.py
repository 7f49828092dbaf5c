# topmark:header:start
#
#   project      : BuildProblems
#   file         : config.py
#   file_relpath : src/buildproblems/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""BuildProblems `config` command group.

  * ``buildproblems config dump``: show the effective merged configuration.
  * ``buildproblems config defaults``: show the built-in defaults.

In the text format, TOML output is wrapped between `TOML_BLOCK_START` and
`TOML_BLOCK_END` markers so tests and tooling can extract it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from buildproblems.cli.cli_types import EnumChoiceParam
from buildproblems.cli.cmd_common import build_config, get_console, get_effective_verbosity
from buildproblems.cli.options import CONTEXT_SETTINGS, common_config_options
from buildproblems.config.logging import get_logger
from buildproblems.config.model import Config
from buildproblems.constants import TOML_BLOCK_END, TOML_BLOCK_START
from buildproblems.machine.serializers import serialize_json_object, serialize_ndjson
from buildproblems.rendering.formats import OutputFormat

if TYPE_CHECKING:
    from buildproblems.config.logging import ProblemsLogger
    from buildproblems.rendering.console_api import ConsoleLike

logger: ProblemsLogger = get_logger(__name__)

_FORMAT_OPTION = click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)


def emit_config(
    console: ConsoleLike,
    config: Config,
    *,
    title: str,
    output_format: OutputFormat,
    verbosity_level: int,
) -> None:
    """Print ``config`` in the requested format."""
    if output_format == OutputFormat.JSON:
        console.print(serialize_json_object(config.to_toml_dict()))
        return
    if output_format == OutputFormat.NDJSON:
        console.print(serialize_ndjson([config.to_toml_dict()]), nl=False)
        return

    if verbosity_level > 0:
        console.print(console.styled(title, bold=True, underline=True))
        if config.config_files:
            for path in config.config_files:
                console.print(f"  from {path}")
        console.print()
    console.print(TOML_BLOCK_START)
    console.print(config.to_toml().rstrip("\n"))
    console.print(TOML_BLOCK_END)


@click.group(
    name="config",
    help="Inspect BuildProblems configuration.",
    context_settings=CONTEXT_SETTINGS,
)
def config_command() -> None:
    """Group for configuration-related subcommands."""
    # Behavior is provided by subcommands only.


@config_command.command(
    name="dump",
    help="Dump the effective configuration (defaults, discovered and explicit files) as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@common_config_options
@_FORMAT_OPTION
def config_dump_command(
    *,
    config_paths: tuple[str, ...],
    no_config: bool,
    output_format: OutputFormat | None,
) -> None:
    """Dump the final merged configuration.

    Args:
        config_paths (tuple[str, ...]): Extra config files merged after discovery.
        no_config (bool): Skip discovery in the working directory.
        output_format (OutputFormat | None): Output format (text by default).
    """
    ctx = click.get_current_context()
    config = build_config(config_paths=config_paths, no_config=no_config)
    emit_config(
        get_console(ctx),
        config,
        title="Effective BuildProblems configuration:",
        output_format=output_format or OutputFormat.TEXT,
        verbosity_level=get_effective_verbosity(ctx),
    )


@config_command.command(
    name="defaults",
    help="Show the built-in default configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@_FORMAT_OPTION
def config_defaults_command(*, output_format: OutputFormat | None) -> None:
    """Show the built-in defaults.

    Args:
        output_format (OutputFormat | None): Output format (text by default).
    """
    ctx = click.get_current_context()
    emit_config(
        get_console(ctx),
        Config.from_defaults(),
        title="Default BuildProblems configuration:",
        output_format=output_format or OutputFormat.TEXT,
        verbosity_level=get_effective_verbosity(ctx),
    )
