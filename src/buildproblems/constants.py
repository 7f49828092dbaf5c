# topmark:header:start
#
#   project      : BuildProblems
#   file         : constants.py
#   file_relpath : src/buildproblems/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""BuildProblems Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

BUILDPROBLEMS_VERSION: str = get_version("buildproblems")

PACKAGE_NAME: str = "buildproblems"

# Environment variable consulted by `setup_logging()` when no level is given.
LOG_LEVEL_ENV_VAR: str = "BUILDPROBLEMS_LOG_LEVEL"

# Config discovery
PYPROJECT_TOML_NAME: str = "pyproject.toml"
CONFIG_TOML_NAME: str = "buildproblems.toml"

DEFAULT_NAMESPACE: str = "buildproblems.cli"

DOCS_BASE_URL: str = "https://buildproblems.readthedocs.io/en/latest"

REDACTED_PLACEHOLDER: str = "****"

VALUE_NOT_SET: str = "<not set>"

# Markers surrounding TOML output of `buildproblems config dump`
TOML_BLOCK_START: str = "# === BEGIN[TOML] ==="
TOML_BLOCK_END: str = "# === END[TOML] ==="
