# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : options.py
#   file_relpath : src/autojsongen/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color) and their
resolution logic, so the command itself stays thin.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from autojsongen.cli.errors import AutoJsonUsageError

P = ParamSpec("P")
R = TypeVar("R")

#: Program-output verbosity levels (not logging levels).
QUIET: int = -1
NORMAL: int = 0
VERBOSE: int = 1
VERY_VERBOSE: int = 2

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


class ColorMode(Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity level.

    Args:
        verbose_count: Number of times ``-v`` is passed.
        quiet_count: Number of times ``-q`` is passed.

    Returns:
        `QUIET`, `NORMAL`, `VERBOSE` or `VERY_VERBOSE`.

    Raises:
        AutoJsonUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise AutoJsonUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count >= 2:
        return VERY_VERBOSE
    if verbose_count == 1:
        return VERBOSE
    if quiet_count >= 1:
        return QUIET
    return NORMAL


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Decision precedence:
      1. **CLI override**: ``ALWAYS`` → True; ``NEVER`` → False.
      2. **Environment**: ``FORCE_COLOR`` (set, not ``"0"``) → True;
         ``NO_COLOR`` (set) → False.
      3. **Auto**: whether stdout is a TTY. Build logs usually are not.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False

    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False

    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase program output. Once lists registered types; twice adds config details.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only report errors.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --color and --no-color options to a command."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f
