# topmark:header:start
#
#   project      : BuildProblems
#   file         : cli_types.py
#   file_relpath : src/buildproblems/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom Click parameter types for the BuildProblems CLI."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, Iterable, NoReturn, Protocol, TypeVar, cast

import click

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem as ClickCompletionItem

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    # At runtime, subclass the real Click type
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

E = TypeVar("E", bound=Enum)


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        """Raise a BadParameter with a NoReturn signature (clear to type checkers)."""
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: str | E | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a string (case-insensitive enum value) to a member of the Enum."""
        if value is None:
            return None
        if isinstance(value, self.enum_cls):
            return value

        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in cast("Iterable[E]", self.enum_cls)
        }

        key = str(value).lower()
        if key in lookup:
            return lookup[key]

        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,  # pylint: disable=unused-argument
        param: click.Parameter,  # pylint: disable=unused-argument
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Tab completion for Click.

        Bash: `eval "$(_BUILDPROBLEMS_COMPLETE=bash_source buildproblems)"`
        """
        # Runtime import to avoid import-time dependency for non-completion paths
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix = (incomplete or "").lower()
        return [
            RuntimeCompletionItem(choice)
            for choice in self.choices
            if choice.lower().startswith(prefix)
        ]


class KeyValueParam(ParamTypeBase):
    """A Click parameter type parsing ``KEY=VALUE`` into a ``(key, value)`` tuple.

    The value is kept as a string; only the first ``=`` separates key and value.
    """

    name = "key=value"

    def convert(
        self,
        value: str | tuple[str, str],
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> tuple[str, str]:
        """Split ``value`` on the first ``=``; the key must not be empty."""
        if isinstance(value, tuple):
            return value
        key, sep, data = value.partition("=")
        key = key.strip()
        if not sep or not key:
            raise click.BadParameter(
                f"Expected KEY=VALUE, got {value!r}",
                param=param,
                ctx=ctx,
            )
        return key, data
