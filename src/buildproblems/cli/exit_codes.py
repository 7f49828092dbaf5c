# topmark:header:start
#
#   project      : BuildProblems
#   file         : exit_codes.py
#   file_relpath : src/buildproblems/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the BuildProblems CLI.

Values follow the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the BuildProblems CLI.

    Attributes:
        SUCCESS: Successful execution.
        FAILURE: Generic failure. Prefer a more specific code if available.
        USAGE_ERROR: Invalid flags or arguments. Mirrors BSD ``EX_USAGE (64)``.
        DATA_ERROR: Problem data violates the model (e.g. no category).
            Mirrors BSD ``EX_DATAERR (65)``.
        SOFTWARE_ERROR: Internal contract violation, such as a builder that does
            not return itself. Mirrors BSD ``EX_SOFTWARE (70)``.
        CONFIG_ERROR: Missing, invalid or malformed configuration. Mirrors BSD
            ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    SOFTWARE_ERROR = 70  # EX_SOFTWARE
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
