# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : console.py
#   file_relpath : src/autojsongen/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console abstraction for user-facing program output.

Build hosts capture the generator's stdout/stderr into their build log, so
every user-facing line goes through `ClickConsole` (prefixed with
``[AutoJson]``), while `logging` stays reserved for diagnostics.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

import click

from autojsongen.cli.console_api import ConsoleLike
from autojsongen.constants import LOG_PREFIX


class ClickConsole(ConsoleLike):
    """Program-output console, independent from the logger.

    Args:
        enable_color (bool): If True, enables ANSI color codes in the output.
        out (TextIO | None): Stream for standard output (defaults to `sys.stdout`).
        err (TextIO | None): Stream for error output (defaults to `sys.stderr`).
        prefix (str): Tag prepended to every line so the build log shows the
            origin of the message.
    """

    enable_color: bool
    out: TextIO | None
    err: TextIO | None

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
        prefix: str = LOG_PREFIX,
    ) -> None:
        self.enable_color = enable_color
        self.out = out
        self.err = err
        self.prefix = prefix

    def _tag(self, text: str) -> str:
        return f"{self.prefix} {text}" if self.prefix and text else text

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a message to stdout."""
        click.echo(self._tag(text), nl=nl, file=self.out or sys.stdout, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning message to stderr."""
        click.secho(
            self._tag(text),
            nl=nl,
            file=self.err or sys.stderr,
            color=self.enable_color,
            fg="yellow",
        )

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr."""
        click.secho(
            self._tag(text),
            nl=nl,
            file=self.err or sys.stderr,
            color=self.enable_color,
            fg="bright_red",
        )

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return a styled string using click.style (plain text if color is disabled)."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
