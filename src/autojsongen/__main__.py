# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : __main__.py
#   file_relpath : src/autojsongen/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running AutoJsonGen via ``python -m autojsongen``.

It delegates directly to :func:`autojsongen.cli.main.cli`, so build hosts get
the same behavior whether they call the console script or the module.

Examples:
    Generate the context for a project::

        python -m autojsongen App/App.csproj App App/Generated
"""

from __future__ import annotations

from autojsongen.cli.main import cli

if __name__ == "__main__":
    cli()
