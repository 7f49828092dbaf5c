# topmark:header:start
#
#   project      : BuildProblems
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running BuildProblems in a controlled working directory.

`run_cli_in()` changes the process working directory to the given `tmp_path`
before invoking the Click CLI, so configuration discovery (``pyproject.toml`` and
``buildproblems.toml`` in the working directory) only sees files the test wrote.
`run_cli()` runs in the current directory and is meant for commands that do not
read configuration.
"""

from __future__ import annotations

import logging
import os
from typing import IO, TYPE_CHECKING, Any

from click.testing import CliRunner, Result

from buildproblems.cli.exit_codes import ExitCode
from buildproblems.cli.main import cli
from buildproblems.constants import TOML_BLOCK_END, TOML_BLOCK_START
from tests.conftest import fixture

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path


@fixture(autouse=True)
def restore_root_logging() -> Iterator[None]:
    """Restore root logger handlers and level replaced by the CLI group.

    The group calls `setup_logging`, which swaps the root handler for one bound to
    the runner's temporary stderr. Later tests must not log into that stream.
    """
    root = logging.getLogger()
    before = [h for h in root.handlers if type(h) is logging.StreamHandler]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler and handler not in before:
            root.removeHandler(handler)
    for handler in before:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def run_cli_in(
    tmp_path: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with `tmp_path` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD for the
            command invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g.
            ``["report", "--category", "build/compile"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv, input=input_text)
    finally:
        os.chdir(cwd)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does **not** depend on configuration discovery
    (e.g. ``version`` or ``config defaults``).

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["version"]``.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` produced by `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv, input=input_text)


def extract_toml_block(output: str) -> str:
    """Return the text between the TOML block markers of ``config`` output."""
    start = output.index(TOML_BLOCK_START) + len(TOML_BLOCK_START)
    end = output.index(TOML_BLOCK_END, start)
    return output[start:end].strip("\n")


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_DATA_ERROR(result: Result) -> None:
    """Assert that the command exited with DATA_ERROR (code 65).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.DATA_ERROR, result.output


def assert_CONFIG_ERROR(result: Result) -> None:
    """Assert that the command exited with CONFIG_ERROR (code 78).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.CONFIG_ERROR, result.output
