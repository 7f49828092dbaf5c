# topmark:header:start
#
#   project      : BuildProblems
#   file         : __init__.py
#   file_relpath : src/buildproblems/model/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Problem data model.

Design:
    - A reported problem is an immutable `Problem` built once per reporting call.
    - Severity, category, location and documentation links are small value types
      so problems compare by value and can be shared across threads freely.
"""

from __future__ import annotations

from buildproblems.model.locations import (
    FileLocation,
    LineInFileLocation,
    OffsetInFileLocation,
    PluginIdLocation,
    ProblemLocation,
    StackLocation,
    TaskPathLocation,
)
from buildproblems.model.problem import (
    DocLink,
    OnlineDocLink,
    Problem,
    ProblemCategory,
    UserManualDocLink,
)
from buildproblems.model.severity import Severity

__all__ = [
    "DocLink",
    "FileLocation",
    "LineInFileLocation",
    "OffsetInFileLocation",
    "OnlineDocLink",
    "PluginIdLocation",
    "Problem",
    "ProblemCategory",
    "ProblemLocation",
    "Severity",
    "StackLocation",
    "TaskPathLocation",
    "UserManualDocLink",
]
