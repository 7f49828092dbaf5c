# topmark:header:start
#
#   project      : BuildProblems
#   file         : redact.py
#   file_relpath : src/buildproblems/transformers/redact.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Transformer masking secrets before problems leave the process.

Two mechanisms are applied:

- **Key-based**: values in ``additional_data`` whose key contains one of the
  configured secret names (case-insensitive) are replaced wholesale, at any
  nesting depth.
- **Pattern-based**: regular expressions are applied to the free-text fields
  (``label``, ``details``, ``solution``), to the attached exception's message
  (stored as ``exception_message``) and to every string nested in
  ``additional_data``. When a pattern defines a ``secret`` named group only that
  group is masked; otherwise the whole match is.

The default pattern masks ``name=value`` and ``name: value`` pairs for the
default secret names, keeping the name visible.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final

from buildproblems.config.logging import get_logger
from buildproblems.constants import REDACTED_PLACEHOLDER

if TYPE_CHECKING:
    from collections.abc import Iterable

    from buildproblems.config.logging import ProblemsLogger
    from buildproblems.model import Problem

logger: ProblemsLogger = get_logger(__name__)

DEFAULT_SECRET_KEYS: Final[tuple[str, ...]] = (
    "password",
    "passwd",
    "secret",
    "token",
    "api_key",
    "apikey",
    "credential",
)

SECRET_GROUP: Final[str] = "secret"


def default_secret_pattern(keys: Iterable[str] = DEFAULT_SECRET_KEYS) -> str:
    """Return the pattern matching ``key=value`` / ``key: value`` pairs for ``keys``."""
    names = "|".join(re.escape(k) for k in keys)
    return rf"(?i)\b[\w.-]*(?:{names})[\w.-]*\s*[=:]\s*(?P<{SECRET_GROUP}>[^\s,;&]+)"


class RedactSecretsTransformer:
    """Mask secret values in a problem's text fields and additional data.

    Args:
        keys (Iterable[str]): Secret names matched against ``additional_data`` keys.
        patterns (Iterable[str] | None): Regular expressions applied to text; ``None``
            uses `default_secret_pattern` for ``keys``.
        replacement (str): Text substituted for every secret.
    """

    def __init__(
        self,
        keys: Iterable[str] = DEFAULT_SECRET_KEYS,
        patterns: Iterable[str] | None = None,
        replacement: str = REDACTED_PLACEHOLDER,
    ) -> None:
        self.keys: tuple[str, ...] = tuple(k.lower() for k in keys)
        pattern_texts = (
            tuple(patterns) if patterns is not None else (default_secret_pattern(self.keys),)
        )
        self.patterns: tuple[re.Pattern[str], ...] = tuple(re.compile(p) for p in pattern_texts)
        self.replacement: str = replacement

    def __call__(self, problem: Problem) -> Problem:
        changes: dict[str, Any] = {}
        for field_name in ("label", "details", "solution"):
            text: str | None = getattr(problem, field_name)
            if text is None:
                continue
            masked = self.mask_text(text)
            if masked != text:
                changes[field_name] = masked

        exception_text = problem.exception_text
        if exception_text is not None:
            masked = self.mask_text(exception_text)
            if masked != exception_text:
                changes["exception_message"] = masked

        data = self.mask_value(problem.additional_data)
        if data is not problem.additional_data:
            changes["additional_data"] = data

        if not changes:
            return problem
        logger.debug("Redacted %s in %s", ", ".join(sorted(changes)), problem.category)
        return problem.with_changes(**changes)

    def is_secret_key(self, key: str) -> bool:
        """Return True if ``key`` names a secret."""
        lowered = key.lower()
        return any(k in lowered for k in self.keys)

    def mask_text(self, text: str) -> str:
        """Return ``text`` with every pattern match masked."""
        for pattern in self.patterns:
            text = pattern.sub(self._replace, text)
        return text

    def mask_value(self, value: Any) -> Any:
        """Return ``value`` with secrets masked at any nesting depth.

        Mappings have the values of secret-looking keys replaced and are walked
        recursively, as are lists, tuples and sets; strings are pattern-masked.
        Other values, and containers already being walked (cycles), are returned
        as is. An unchanged value is returned as the very same object.
        """
        return self._mask(value, frozenset())

    def _mask(self, value: Any, active: frozenset[int]) -> Any:
        if isinstance(value, str):
            masked = self.mask_text(value)
            return value if masked == value else masked
        if id(value) in active:
            return value
        if isinstance(value, Mapping):
            inner = active | {id(value)}
            items: dict[Any, Any] = {}
            changed = False
            for key, item in value.items():
                if isinstance(key, str) and self.is_secret_key(key):
                    new_item: Any = self.replacement
                else:
                    new_item = self._mask(item, inner)
                changed = changed or new_item is not item
                items[key] = new_item
            return items if changed else value
        if isinstance(value, (list, tuple, set, frozenset)):
            inner = active | {id(value)}
            masked_items = [self._mask(item, inner) for item in value]
            if all(new is old for new, old in zip(masked_items, value)):
                return value
            return type(value)(masked_items)
        return value

    def _replace(self, match: re.Match[str]) -> str:
        if SECRET_GROUP not in match.re.groupindex or match.group(SECRET_GROUP) is None:
            return self.replacement
        start, end = match.span(SECRET_GROUP)
        offset = match.start()
        whole = match.group(0)
        return whole[: start - offset] + self.replacement + whole[end - offset :]
