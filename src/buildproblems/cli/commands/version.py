# topmark:header:start
#
#   project      : BuildProblems
#   file         : version.py
#   file_relpath : src/buildproblems/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""BuildProblems `version` command.

Prints the BuildProblems version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from buildproblems.cli.cli_types import EnumChoiceParam
from buildproblems.cli.cmd_common import get_console, get_effective_verbosity
from buildproblems.constants import BUILDPROBLEMS_VERSION
from buildproblems.machine.serializers import serialize_json_object, serialize_ndjson
from buildproblems.rendering.formats import OutputFormat


@click.command(
    name="version",
    help="Show the current version of BuildProblems.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of BuildProblems.

    Args:
        output_format (OutputFormat | None): Optional output format (text by default).
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console = get_console(ctx)

    fmt: OutputFormat = output_format or OutputFormat.TEXT
    payload = {"version": BUILDPROBLEMS_VERSION}
    if fmt == OutputFormat.JSON:
        console.print(serialize_json_object(payload))
    elif fmt == OutputFormat.NDJSON:
        console.print(serialize_ndjson([payload]), nl=False)
    elif get_effective_verbosity(ctx) > 0:
        console.print(console.styled("BuildProblems version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(BUILDPROBLEMS_VERSION, bold=True)}")
    else:
        console.print(console.styled(BUILDPROBLEMS_VERSION, bold=True))
