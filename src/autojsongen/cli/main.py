# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : main.py
#   file_relpath : src/autojsongen/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""AutoJsonGen command.

Invoked by the host build as a pre-compile step::

    autojsongen PROJECT ROOT_NAMESPACE OUTPUT_DIR

Exit status is 0 when the artifact was written, was already up to date, or
the run was skipped because a generation run is already in progress; it is 1
for every fatal error.

Key ideas:
- Verbosity and color are initialized once and placed into ``ctx.obj``.
- Tests may inject the run environment via ``obj={"environ": {...}}`` so the
  in-process recursion flag does not leak into ``os.environ``.
"""

from __future__ import annotations

import os
import traceback
from pathlib import Path
from typing import TYPE_CHECKING

import click

from autojsongen.cli.console import ClickConsole
from autojsongen.cli.errors import (
    AutoJsonUnexpectedError,
    AutoJsonUsageError,
    cli_error_for,
)
from autojsongen.cli.options import (
    CONTEXT_SETTINGS,
    NORMAL,
    VERBOSE,
    VERY_VERBOSE,
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from autojsongen.config.logging import get_logger, resolve_env_log_level, setup_logging
from autojsongen.constants import AUTOJSON_VERSION
from autojsongen.errors import AutoJsonError
from autojsongen.pipeline.guard import GuardState
from autojsongen.pipeline.runner import (
    Outcome,
    RunContext,
    RunRequest,
    normalize_output_dir,
    run_generator,
)

if TYPE_CHECKING:
    from autojsongen.cli.console_api import ConsoleLike
    from autojsongen.pipeline.runner import RunResult

logger = get_logger(__name__)

USAGE_HINT: str = "Expected 3 arguments: PROJECT ROOT_NAMESPACE OUTPUT_DIR"


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging and color) on the Click context."""
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is configured from the environment only.
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    mode = ColorMode.NEVER if no_color else ColorMode(color_mode or ColorMode.AUTO.value)
    enable_color = resolve_color_mode(cli_mode=mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


def report_result(console: ConsoleLike, result: RunResult, vlevel: int) -> None:
    """Print the outcome of a run."""
    if result.outcome is Outcome.SKIPPED_RECURSION:
        if vlevel < NORMAL:
            return
        if result.guard_state is GuardState.BLOCKED_BY_FLAG:
            console.print("Recursive invocation detected via env var, skipping.")
        else:
            since = f" (held since {result.lock_timestamp})" if result.lock_timestamp else ""
            console.print(f"Recursive invocation detected via lock file{since}, skipping.")
        return

    if vlevel >= VERY_VERBOSE and result.config is not None:
        config = result.config
        console.print(f"Config: {config.source or 'built-in defaults'}")
        console.print(
            "  namespaces: "
            + (", ".join(sorted(config.namespaces)) if config.namespaces else "(all)")
        )
        console.print(f"  includeBaseTypes: {str(config.include_base_types).lower()}")
        console.print("  collectionTemplates: " + ", ".join(config.collection_templates))
    if vlevel >= VERBOSE:
        for t in result.types:
            console.print(f"  {console.styled(t.display_name, bold=True)}")

    if vlevel < NORMAL:
        return
    if result.outcome is Outcome.UNCHANGED:
        console.print("No changes detected. Skipping write.")
    else:
        console.print(f"Generated {result.artifact_path} with {result.type_count} types.")


@click.command(
    name="autojsongen",
    context_settings=CONTEXT_SETTINGS,
    help="Generate the AutoJsonContext registration file for a project.",
    epilog="""\
PROJECT is the project file (or an exported symbol snapshot, *.json).
ROOT_NAMESPACE encloses the generated context class.
OUTPUT_DIR receives AutoJsonContext.g.cs.

Examples:

  autojsongen App/App.csproj App App/obj/Generated
""",
)
@click.argument("project", required=False)
@click.argument("root_namespace", required=False)
@click.argument("output_dir", required=False)
@common_verbose_options
@common_color_options
@click.version_option(AUTOJSON_VERSION, "--version", prog_name="autojsongen")
@click.pass_context
def cli(
    ctx: click.Context,
    project: str | None,
    root_namespace: str | None,
    output_dir: str | None,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the AutoJsonGen CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = ctx.obj["verbosity_level"]

    # Argument checks happen before the guard so a usage error has no side effects.
    if not project or not root_namespace or not output_dir:
        raise AutoJsonUsageError(USAGE_HINT, ctx=ctx)

    request = RunRequest(
        project_path=Path(project.strip().strip('"')),
        root_namespace=root_namespace.strip(),
        output_dir=normalize_output_dir(output_dir),
    )
    context = RunContext(environ=ctx.obj.get("environ", os.environ))

    logger.debug("Request: %s", request)
    if vlevel >= VERBOSE:
        console.print("Generator started.")
    try:
        result = run_generator(request, context)
    except AutoJsonError as e:
        logger.debug("Run failed", exc_info=True)
        raise cli_error_for(e) from e
    except Exception as e:
        # Unknown failures keep their traceback in the build log.
        console.error(traceback.format_exc().rstrip())
        raise AutoJsonUnexpectedError(f"Generator failed: {e!r}") from e

    report_result(console, result, vlevel)
    if vlevel >= VERBOSE:
        console.print("Generator finished.")


if __name__ == "__main__":
    cli()
