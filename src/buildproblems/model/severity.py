# topmark:header:start
#
#   project      : BuildProblems
#   file         : severity.py
#   file_relpath : src/buildproblems/model/severity.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Problem severity levels."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable


class Severity(Enum):
    """Severity of a reported problem.

    Levels map to terminal colors and are ordered by importance: ERROR > WARNING > ADVICE.
    """

    ADVICE = "advice"
    WARNING = "warning"
    ERROR = "error"

    @property
    def rank(self) -> int:
        """Return the ordering rank of this severity (higher is more important)."""
        return _RANKS[self]

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only; machine formats should not use colors.

        Returns:
            Callable[[str], str]: The `yachalk` color function associated with this severity level.
        """
        return cast(
            "Callable[[str], str]",
            {
                Severity.ADVICE: chalk.blue,
                Severity.WARNING: chalk.yellow,
                Severity.ERROR: chalk.red_bright,
            }[self],
        )

    def __str__(self) -> str:
        return self.value


_RANKS: dict[Severity, int] = {
    Severity.ADVICE: 0,
    Severity.WARNING: 1,
    Severity.ERROR: 2,
}
