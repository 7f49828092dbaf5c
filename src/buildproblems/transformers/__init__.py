# topmark:header:start
#
#   project      : BuildProblems
#   file         : __init__.py
#   file_relpath : src/buildproblems/transformers/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Problem transformers and the ordered chain that applies them."""

from __future__ import annotations

from buildproblems.transformers.chain import TransformerChain
from buildproblems.transformers.contracts import ProblemTransformer
from buildproblems.transformers.redact import (
    DEFAULT_SECRET_KEYS,
    RedactSecretsTransformer,
    default_secret_pattern,
)
from buildproblems.transformers.registry import TRANSFORMER_FACTORIES, build_transformers
from buildproblems.transformers.stack_location import StackLocationTransformer

__all__ = [
    "DEFAULT_SECRET_KEYS",
    "TRANSFORMER_FACTORIES",
    "ProblemTransformer",
    "RedactSecretsTransformer",
    "StackLocationTransformer",
    "TransformerChain",
    "build_transformers",
    "default_secret_pattern",
]
