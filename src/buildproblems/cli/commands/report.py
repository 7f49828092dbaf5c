# topmark:header:start
#
#   project      : BuildProblems
#   file         : report.py
#   file_relpath : src/buildproblems/cli/commands/report.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""BuildProblems `report` command.

Builds one problem from command line options and pushes it through the configured
reporting pipeline (build, transform, emit). The problem is reported inside an
operation named by ``--operation`` unless ``--no-operation`` is given, in which case
it is dropped without reaching the emitter.

Output depends on ``--format`` (or ``[output] format``):

  * ``text``: human-readable rendering on the console (errors on stderr);
  * ``ndjson``: one JSON record per line on stdout, as it is emitted;
  * ``json``: a JSON array of all delivered problems once reporting is done.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from buildproblems.cli.cli_types import EnumChoiceParam, KeyValueParam
from buildproblems.cli.cmd_common import (
    apply_config_color,
    build_config,
    get_console,
    get_effective_verbosity,
)
from buildproblems.cli.errors import ProblemsConfigError, ProblemsDataError, ProblemsUsageError
from buildproblems.cli.options import CONTEXT_SETTINGS, common_config_options
from buildproblems.config.logging import get_logger
from buildproblems.emitters import CollectingEmitter, ConsoleEmitter, NdjsonEmitter
from buildproblems.errors import ConfigError, ProblemBuildError
from buildproblems.machine.payloads import problem_payload
from buildproblems.machine.serializers import serialize_json_object
from buildproblems.model import Severity
from buildproblems.operations import OperationIdentifier
from buildproblems.reporter import ProblemsService
from buildproblems.rendering.formats import OutputFormat

if TYPE_CHECKING:
    from collections.abc import Callable

    from buildproblems.builder.contracts import ProblemSpec, ProblemSpecAction
    from buildproblems.config.logging import ProblemsLogger
    from buildproblems.config.model import Config
    from buildproblems.emitters import ProblemEmitter
    from buildproblems.rendering.console_api import ConsoleLike

logger: ProblemsLogger = get_logger(__name__)


def _check_location_options(
    *,
    file: str | None,
    line: int | None,
    column: int | None,
    length: int | None,
    offset: int | None,
    plugin: str | None,
    task_path: str | None,
) -> None:
    """Reject option combinations that do not describe exactly one location."""
    given = (("--file", file), ("--plugin", plugin), ("--task-path", task_path))
    kinds = [name for name, value in given if value is not None]
    if len(kinds) > 1:
        raise ProblemsUsageError(f"Options {' and '.join(kinds)} are mutually exclusive.")
    if file is None and any(v is not None for v in (line, column, length, offset)):
        raise ProblemsUsageError("--line, --column, --length and --offset require --file.")
    if line is not None and offset is not None:
        raise ProblemsUsageError("--line and --offset are mutually exclusive.")
    if offset is not None and length is None:
        raise ProblemsUsageError("--offset requires --length.")
    if offset is not None and column is not None:
        raise ProblemsUsageError("--column and --offset are mutually exclusive.")
    if line is None and offset is None and column is not None:
        raise ProblemsUsageError("--column requires --line.")
    if line is None and offset is None and length is not None:
        raise ProblemsUsageError("--length requires --line or --offset.")


def _select_emitter(
    output_format: OutputFormat, console: ConsoleLike, verbosity: int
) -> ProblemEmitter:
    if output_format == OutputFormat.NDJSON:
        return NdjsonEmitter()
    if output_format == OutputFormat.JSON:
        return CollectingEmitter()
    return ConsoleEmitter(console, show_operation=verbosity > 0)


@click.command(
    name="report",
    help="Report one problem built from the given options.",
    context_settings=CONTEXT_SETTINGS,
)
@click.option("--category", required=True, help="Hierarchical category, e.g. 'build/compile'.")
@click.option("--detail", "category_details", multiple=True, help="Category detail (repeatable).")
@click.option("--label", default=None, help="Short summary of the problem.")
@click.option(
    "--severity",
    type=EnumChoiceParam(Severity),
    default=None,
    help=f"Severity ({', '.join(s.value for s in Severity)}); default: warning.",
)
@click.option("--details", default=None, help="Longer description of the problem.")
@click.option("--solution", default=None, help="Suggested fix.")
@click.option("--doc", "doc_url", default=None, help="Documentation URL.")
@click.option("--file", "file", default=None, help="File the problem is located in.")
@click.option("--line", type=click.IntRange(min=1), default=None, help="1-based line in --file.")
@click.option("--column", type=click.IntRange(min=1), default=None, help="1-based column.")
@click.option("--length", type=click.IntRange(min=0), default=None, help="Length of the span.")
@click.option("--offset", type=click.IntRange(min=0), default=None, help="0-based offset.")
@click.option("--plugin", default=None, help="Id of the plugin the problem originates from.")
@click.option("--task-path", default=None, help="Path of the task the problem originates from.")
@click.option(
    "--data",
    "data",
    type=KeyValueParam(),
    multiple=True,
    help="Additional data as KEY=VALUE (repeatable).",
)
@click.option(
    "--namespace", default=None, help="Reporter namespace (overrides [reporter] namespace)."
)
@click.option("--operation", default="cli", show_default=True, help="Operation to report under.")
@click.option(
    "--no-operation",
    is_flag=True,
    help="Report outside any operation; the problem is dropped.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
@common_config_options
def report_command(
    *,
    category: str,
    category_details: tuple[str, ...],
    label: str | None,
    severity: Severity | None,
    details: str | None,
    solution: str | None,
    doc_url: str | None,
    file: str | None,
    line: int | None,
    column: int | None,
    length: int | None,
    offset: int | None,
    plugin: str | None,
    task_path: str | None,
    data: tuple[tuple[str, str], ...],
    namespace: str | None,
    operation: str,
    no_operation: bool,
    output_format: OutputFormat | None,
    config_paths: tuple[str, ...],
    no_config: bool,
) -> None:
    """Report one problem built from command line options.

    Raises:
        ProblemsUsageError: If the location options are inconsistent.
        ProblemsDataError: If the builder rejects the problem data.
        ProblemsConfigError: If the configuration is invalid.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    verbosity = get_effective_verbosity(ctx)

    _check_location_options(
        file=file,
        line=line,
        column=column,
        length=length,
        offset=offset,
        plugin=plugin,
        task_path=task_path,
    )

    config: Config = build_config(
        config_paths=config_paths,
        no_config=no_config,
        overrides={"namespace": namespace, "output_format": output_format},
    )
    apply_config_color(ctx, config)

    emitter = _select_emitter(config.output_format, console, verbosity)
    try:
        service = ProblemsService.from_config(config, emitter)
    except ConfigError as exc:
        raise ProblemsConfigError(str(exc)) from exc
    reporter = service.reporter(config.namespace)

    def spec(builder: ProblemSpec) -> None:
        builder.category(category, *category_details)
        if label is not None:
            builder.label(label)
        if severity is not None:
            builder.severity(severity)
        if details is not None:
            builder.details(details)
        if solution is not None:
            builder.solution(solution)
        if doc_url is not None:
            builder.documented_at(doc_url)
        if file is not None:
            if line is not None:
                builder.line_in_file_location(file, line, column, length)
            elif offset is not None and length is not None:
                builder.offset_in_file_location(file, offset, length)
            else:
                builder.file_location(file)
        elif plugin is not None:
            builder.plugin_location(plugin)
        elif task_path is not None:
            builder.task_path_location(task_path)
        for key, value in data:
            builder.additional_data(key, value)

    _run_report(reporter.report, spec, service, operation=None if no_operation else operation)

    if isinstance(emitter, CollectingEmitter):
        console.print(
            serialize_json_object([problem_payload(r.problem, r.operation_id) for r in emitter])
        )
    if no_operation and config.output_format == OutputFormat.TEXT and verbosity >= 0:
        console.warn("No operation in flight; the problem was not emitted.")


def _run_report(
    report: Callable[[ProblemSpecAction], None],
    spec: ProblemSpecAction,
    service: ProblemsService,
    *,
    operation: str | None,
) -> None:
    try:
        if operation is None:
            report(spec)
            return
        with service.operation_ref.running(OperationIdentifier(operation)):
            report(spec)
    except ProblemBuildError as exc:
        raise ProblemsDataError(str(exc)) from exc
