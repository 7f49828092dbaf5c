# topmark:header:start
#
#   project      : BuildProblems
#   file         : __init__.py
#   file_relpath : src/buildproblems/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration and logging for BuildProblems.

Submodules:
    - `buildproblems.config.logging`: TRACE level, colored formatter, logger factory.
    - `buildproblems.config.keys`: canonical TOML section and key names.
    - `buildproblems.config.io`: TOML loading, checked getters and rendering.
    - `buildproblems.config.model`: `Config` / `MutableConfig` and discovery.

Nothing is re-exported here: `buildproblems.config.logging` is imported by almost
every module of the package and must not pull in the config model.
"""
