# topmark:header:start
#
#   project      : BuildProblems
#   file         : registry.py
#   file_relpath : src/buildproblems/transformers/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build transformer chains from configuration.

Configured transformer names map to factories taking the frozen `Config`. The
order of names in ``[reporter].transformers`` is the order of the chain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from buildproblems.config.logging import get_logger
from buildproblems.errors import ConfigError
from buildproblems.transformers.chain import TransformerChain
from buildproblems.transformers.redact import RedactSecretsTransformer
from buildproblems.transformers.stack_location import StackLocationTransformer

if TYPE_CHECKING:
    from collections.abc import Callable

    from buildproblems.config.logging import ProblemsLogger
    from buildproblems.config.model import Config
    from buildproblems.transformers.contracts import ProblemTransformer

logger: ProblemsLogger = get_logger(__name__)


def _make_redact(config: Config) -> ProblemTransformer:
    return RedactSecretsTransformer(
        keys=config.redact_keys,
        patterns=config.redact_patterns or None,
        replacement=config.redact_replacement,
    )


def _make_stack_location(config: Config) -> ProblemTransformer:
    return StackLocationTransformer()


TRANSFORMER_FACTORIES: Final[dict[str, Callable[[Config], ProblemTransformer]]] = {
    "stack-location": _make_stack_location,
    "redact-secrets": _make_redact,
}


def build_transformers(config: Config) -> TransformerChain:
    """Return the transformer chain configured in ``config``.

    Args:
        config (Config): The frozen configuration.

    Returns:
        TransformerChain: Transformers in configured order.

    Raises:
        ConfigError: If a configured name is unknown.
    """
    transformers: list[ProblemTransformer] = []
    for name in config.transformers:
        factory = TRANSFORMER_FACTORIES.get(name)
        if factory is None:
            allowed = ", ".join(sorted(TRANSFORMER_FACTORIES))
            raise ConfigError(f"Unknown transformer {name!r} (allowed: {allowed})")
        transformers.append(factory(config))
    chain = TransformerChain(transformers)
    logger.debug("Configured %r", chain)
    return chain
