# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : __init__.py
#   file_relpath : src/autojsongen/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line interface for AutoJsonGen.

Typical usage:
    The console script entry point is defined in ``pyproject.toml`` as::

        [project.scripts]
        autojsongen = "autojsongen.cli.main:cli"
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main at module import time
