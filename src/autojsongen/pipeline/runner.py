# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : runner.py
#   file_relpath : src/autojsongen/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run one generation pass.

A run is a single critical section scoped to the output directory:

    guard -> config -> symbol table -> marker -> scan -> render -> write

Everything after the guard happens while the lock is held, and the lock is
released on every exit path. Fatal conditions surface as `AutoJsonError`
subclasses; the two designed no-op paths (recursion, no change) are normal
outcomes.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from autojsongen.config.loaders import DEFAULT_SOURCES, resolve_config
from autojsongen.config.logging import get_logger
from autojsongen.constants import ARTIFACT_FILE_NAME
from autojsongen.pipeline.eligibility import find_eligible_types
from autojsongen.pipeline.guard import GuardState, RecursionGuard
from autojsongen.pipeline.render import render_context
from autojsongen.pipeline.writer import WriteStatus, write_if_changed
from autojsongen.symbols.toolchain import load_symbol_table, project_dir_of

if TYPE_CHECKING:
    from collections.abc import Sequence

    from autojsongen.config.loaders import ConfigSource
    from autojsongen.config.logging import AutoJsonLogger
    from autojsongen.config.model import GeneratorConfig
    from autojsongen.symbols.model import TypeSymbol
    from autojsongen.symbols.table import SymbolTable

logger: AutoJsonLogger = get_logger(__name__)

TableLoader = Callable[[Path, Mapping[str, str]], "SymbolTable"]


class Outcome(str, Enum):
    """How a run ended. All outcomes are successes."""

    SKIPPED_RECURSION = "skipped_recursion"
    UNCHANGED = "unchanged"
    WRITTEN = "written"


@dataclass(frozen=True)
class RunRequest:
    """The three positional inputs of a run."""

    project_path: Path
    root_namespace: str
    output_dir: Path

    @property
    def artifact_path(self) -> Path:
        return self.output_dir / ARTIFACT_FILE_NAME


@dataclass
class RunContext:
    """Injected collaborators and process state.

    Attributes:
        environ (MutableMapping[str, str]): Environment holding the in-process
            recursion flag. The CLI passes ``os.environ``.
        table_loader (TableLoader): Produces the symbol table for a project file.
        config_sources (Sequence[ConfigSource]): Config resolution chain.
    """

    environ: MutableMapping[str, str] = field(default_factory=dict)
    table_loader: TableLoader = load_symbol_table
    config_sources: Sequence[ConfigSource] = DEFAULT_SOURCES


@dataclass(frozen=True)
class RunResult:
    """Summary of a finished run."""

    outcome: Outcome
    artifact_path: Path
    types: tuple[TypeSymbol, ...] = ()
    config: GeneratorConfig | None = None
    guard_state: GuardState | None = None
    lock_timestamp: str | None = None

    @property
    def type_count(self) -> int:
        return len(self.types)


def normalize_output_dir(raw: str) -> Path:
    """Clean an output-dir argument as passed by build hosts.

    Strips whitespace, surrounding double quotes and trailing path separators
    (``"obj\\Generated\\"`` becomes ``obj\\Generated``). A bare root is kept.
    """
    cleaned = raw.strip().strip('"').rstrip("\\/")
    if not cleaned:
        cleaned = raw.strip().strip('"')[:1] or "."
    return Path(cleaned)


def run_generator(request: RunRequest, context: RunContext | None = None) -> RunResult:
    """Execute one generation pass.

    Args:
        request (RunRequest): Project file, root namespace and output directory.
        context (RunContext | None): Injected state; a fresh context with an
            empty environment is used when omitted.

    Returns:
        RunResult: The outcome and the registered types.

    Raises:
        AutoJsonError: Any fatal condition (config, toolchain, marker, I/O).
    """
    ctx = context or RunContext()
    artifact_path = request.artifact_path

    with RecursionGuard(request.output_dir, ctx.environ) as guard:
        if not guard.acquired:
            return RunResult(
                outcome=Outcome.SKIPPED_RECURSION,
                artifact_path=artifact_path,
                guard_state=guard.state,
                lock_timestamp=(
                    guard.describe_lock() if guard.state is GuardState.BLOCKED_BY_LOCK else None
                ),
            )

        config = resolve_config(project_dir_of(request.project_path), ctx.config_sources)
        table = ctx.table_loader(request.project_path, ctx.environ)
        types = find_eligible_types(table, request.root_namespace, config)
        text = render_context(types, config, request.root_namespace)
        status = write_if_changed(artifact_path, text)

    outcome = Outcome.WRITTEN if status is WriteStatus.WRITTEN else Outcome.UNCHANGED
    logger.info("Run finished: %s (%d types)", outcome.value, len(types))
    return RunResult(
        outcome=outcome,
        artifact_path=artifact_path,
        types=tuple(types),
        config=config,
        guard_state=GuardState.ACQUIRED,
    )
