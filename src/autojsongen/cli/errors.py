# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : errors.py
#   file_relpath : src/autojsongen/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the AutoJsonGen CLI.

Usage:
    Raise these exceptions in the command to signal fatal errors with a
    standardized message and exit code. Engine errors (`autojsongen.errors`)
    are converted with `cli_error_for`.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no
    console is present in the Click context, they fall back to Click's
    default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from autojsongen.cli.exit_codes import ExitCode
from autojsongen.errors import (
    ArtifactWriteError,
    AutoJsonError,
    ConfigParseError,
    MarkerNotFoundError,
    SymbolSnapshotError,
    ToolchainResolutionError,
)


class AutoJsonCliError(click.ClickException):
    """Base class for all AutoJsonGen CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class AutoJsonUsageError(click.UsageError):
    """Command-line invocation error; exits with FAILURE rather than Click's 2."""

    exit_code = ExitCode.FAILURE


class AutoJsonConfigError(AutoJsonCliError):
    """Malformed config file."""


class AutoJsonToolchainError(AutoJsonCliError):
    """Symbol table could not be located or loaded."""


class AutoJsonMarkerNotFoundError(AutoJsonCliError):
    """Marker attribute missing from the symbol table."""


class AutoJsonIOError(AutoJsonCliError):
    """Output directory, lock file or artifact could not be written."""


class AutoJsonUnexpectedError(AutoJsonCliError):
    """Unhandled/unknown error (last-resort)."""


_ERROR_MAP: tuple[tuple[type[AutoJsonError], type[AutoJsonCliError]], ...] = (
    (ConfigParseError, AutoJsonConfigError),
    (ToolchainResolutionError, AutoJsonToolchainError),
    (SymbolSnapshotError, AutoJsonToolchainError),
    (MarkerNotFoundError, AutoJsonMarkerNotFoundError),
    (ArtifactWriteError, AutoJsonIOError),
)


def cli_error_for(exc: AutoJsonError) -> AutoJsonCliError:
    """Return the CLI exception reporting engine error ``exc``."""
    for domain_cls, cli_cls in _ERROR_MAP:
        if isinstance(exc, domain_cls):
            return cli_cls(str(exc))
    return AutoJsonCliError(str(exc))
