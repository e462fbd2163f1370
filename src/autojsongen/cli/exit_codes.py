# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : exit_codes.py
#   file_relpath : src/autojsongen/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the AutoJsonGen CLI.

Build hosts treat any non-zero exit as a failed build step, so the generator
keeps to two codes: recursion skips and "no changes" are successes, and every
fatal error (including usage errors) is a plain failure.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the AutoJsonGen CLI.

    Attributes:
        SUCCESS: Artifact written, already up to date, or run skipped because a
            generation run is already in progress.
        FAILURE: Any fatal error: usage, toolchain resolution, missing marker,
            config or snapshot parse failure, I/O failure, or an unexpected
            exception.
    """

    SUCCESS = 0
    FAILURE = 1
