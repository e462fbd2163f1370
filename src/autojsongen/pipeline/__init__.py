# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : __init__.py
#   file_relpath : src/autojsongen/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generation pipeline: recursion guard, type eligibility, rendering and writing."""

from __future__ import annotations

from autojsongen.pipeline.runner import (
    Outcome,
    RunContext,
    RunRequest,
    RunResult,
    normalize_output_dir,
    run_generator,
)

__all__ = [
    "Outcome",
    "RunContext",
    "RunRequest",
    "RunResult",
    "normalize_output_dir",
    "run_generator",
]
