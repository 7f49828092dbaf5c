# topmark:header:start
#
#   project      : BuildProblems
#   file         : problem.py
#   file_relpath : src/buildproblems/model/problem.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core problem record and its value types.

Sections:
    * ProblemCategory: namespace + hierarchical category + detail strings.
    * DocLink: documentation link protocol with online and user-manual variants.
    * Problem: immutable result of a completed builder.

A `Problem` is never mutated. Transformers derive modified copies through
`Problem.with_changes`, which keeps the read-only view over ``additional_data``.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol

from buildproblems.constants import DOCS_BASE_URL
from buildproblems.model.severity import Severity

if TYPE_CHECKING:
    from collections.abc import Mapping

    from buildproblems.model.locations import ProblemLocation


CATEGORY_SEPARATOR: str = "/"


@dataclass(frozen=True)
class ProblemCategory:
    """Hierarchical classification of a problem within its reporting namespace.

    Attributes:
        namespace (str): Identifies the subsystem that reported the problem.
        category (str): Hierarchical category, segments separated by ``/``
            (e.g. ``"build/compile"``).
        details (tuple[str, ...]): Additional, more specific category segments.
    """

    namespace: str
    category: str
    details: tuple[str, ...] = ()

    @property
    def segments(self) -> tuple[str, ...]:
        """Return the category path split into segments, followed by the details."""
        parts = tuple(p for p in self.category.split(CATEGORY_SEPARATOR) if p)
        return parts + self.details

    def __str__(self) -> str:
        return ":".join((self.namespace, self.category, *self.details))


class DocLink(Protocol):
    """A link to documentation describing a problem."""

    @property
    def url(self) -> str:
        """Return the absolute URL of the documentation page."""
        ...


@dataclass(frozen=True)
class OnlineDocLink:
    """Documentation link given as a literal URL."""

    address: str

    @property
    def url(self) -> str:
        """Return the literal URL."""
        return self.address


@dataclass(frozen=True)
class UserManualDocLink:
    """Documentation link into the BuildProblems user manual."""

    page: str
    section: str | None = None

    @property
    def url(self) -> str:
        """Return the manual URL, with the section as fragment when given."""
        base = f"{DOCS_BASE_URL}/{self.page}.html"
        return f"{base}#{self.section}" if self.section else base


def _empty_data() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Problem:
    """Immutable structured description of an error, warning or deprecation.

    Attributes:
        category (ProblemCategory): Classification; always present on a built problem.
        label (str | None): Short, human-readable summary.
        severity (Severity): Problem severity.
        location (ProblemLocation | None): Where the problem occurred, if known.
        documentation_link (DocLink | None): Link to documentation about the problem.
        details (str | None): Longer free-text description.
        solution (str | None): Suggested fix.
        exception (BaseException | None): Exception associated with the problem.
        exception_message (str | None): Text shown for ``exception`` instead of its own
            message, e.g. after secrets were masked. Reset whenever ``exception`` changes.
        additional_data (Mapping[str, Any]): Read-only, string-keyed extra data.
    """

    category: ProblemCategory
    label: str | None = None
    severity: Severity = Severity.WARNING
    location: ProblemLocation | None = None
    documentation_link: DocLink | None = None
    details: str | None = None
    solution: str | None = None
    exception: BaseException | None = field(default=None, hash=False)
    exception_message: str | None = None
    additional_data: Mapping[str, Any] = field(default_factory=_empty_data, hash=False)

    def __post_init__(self) -> None:
        if not isinstance(self.additional_data, MappingProxyType):
            data = MappingProxyType(dict(self.additional_data))
            object.__setattr__(self, "additional_data", data)

    @property
    def exception_text(self) -> str | None:
        """Return the message to show for the attached exception, if any."""
        if self.exception is None:
            return None
        if self.exception_message is not None:
            return self.exception_message
        return str(self.exception)

    @property
    def namespace(self) -> str:
        """Return the namespace of the subsystem that reported this problem."""
        return self.category.namespace

    def with_changes(self, **changes: Any) -> Problem:
        """Return a copy of this problem with the given fields replaced.

        Args:
            **changes (Any): Field values to replace (see `dataclasses.replace`).

        Returns:
            Problem: The modified copy; ``self`` is left untouched.
        """
        if "exception" in changes:
            changes.setdefault("exception_message", None)
        return dataclasses.replace(self, **changes)
