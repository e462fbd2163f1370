# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : toolchain.py
#   file_relpath : src/autojsongen/symbols/toolchain.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Locate the symbol snapshot for a project.

The host toolchain exports the compiled type graph of a project as a JSON
snapshot. Finding it is an ordered chain of strategies; each returns a path or
``None`` and may add a note to the attempt log:

1. the project argument is itself a snapshot (``*.json``);
2. ``AUTOJSON_SYMBOLS`` names the snapshot;
3. the conventional ``obj/autojson.symbols.json`` beside the project file;
4. fallback: ask the host build for the ``AutoJsonSymbolsFile`` property
   (``dotnet msbuild -getProperty``). This is the only blocking external
   process call, and it only runs when the cheaper strategies miss.

If every strategy misses, `ToolchainResolutionError` is raised.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from autojsongen.config.logging import get_logger
from autojsongen.constants import (
    DOTNET_EXECUTABLE,
    ENV_SYMBOLS_FILE,
    SYMBOLS_FILE_NAME,
    SYMBOLS_INTERMEDIATE_DIR,
    SYMBOLS_MSBUILD_PROPERTY,
    TOOLCHAIN_TIMEOUT_SECONDS,
)
from autojsongen.errors import ToolchainResolutionError
from autojsongen.symbols.snapshot import load_snapshot

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from autojsongen.config.logging import AutoJsonLogger
    from autojsongen.symbols.table import InMemorySymbolTable

logger: AutoJsonLogger = get_logger(__name__)

#: (project_path, environ, attempts) -> snapshot path or None
LocateStrategy = Callable[[Path, "Mapping[str, str]", "list[str]"], "Path | None"]


def project_dir_of(project_path: Path) -> Path:
    """Directory holding the project file (``.`` for a bare file name)."""
    return project_path.parent


def from_project_argument(
    project_path: Path, environ: Mapping[str, str], attempts: list[str]
) -> Path | None:
    if project_path.suffix.lower() != ".json":
        return None
    if project_path.is_file():
        return project_path
    attempts.append(f"snapshot argument {project_path} does not exist")
    return None


def from_environment(
    project_path: Path, environ: Mapping[str, str], attempts: list[str]
) -> Path | None:
    raw = environ.get(ENV_SYMBOLS_FILE, "").strip()
    if not raw:
        return None
    candidate = Path(raw)
    if not candidate.is_absolute():
        candidate = project_dir_of(project_path) / candidate
    if candidate.is_file():
        return candidate
    attempts.append(f"{ENV_SYMBOLS_FILE}={raw} does not exist")
    return None


def from_intermediate_dir(
    project_path: Path, environ: Mapping[str, str], attempts: list[str]
) -> Path | None:
    candidate = project_dir_of(project_path) / SYMBOLS_INTERMEDIATE_DIR / SYMBOLS_FILE_NAME
    if candidate.is_file():
        return candidate
    attempts.append(f"{candidate} not found")
    return None


def from_msbuild_property(
    project_path: Path, environ: Mapping[str, str], attempts: list[str]
) -> Path | None:
    cmd: list[str] = [
        DOTNET_EXECUTABLE,
        "msbuild",
        str(project_path),
        f"-getProperty:{SYMBOLS_MSBUILD_PROPERTY}",
    ]
    logger.debug("Querying host build: %s", " ".join(cmd))
    try:
        # The child inherits the run's environment, including the running flag.
        proc: subprocess.CompletedProcess[str] = subprocess.run(  # noqa: S603
            cmd,
            capture_output=True,
            text=True,
            check=False,
            env=dict(environ),
            timeout=TOOLCHAIN_TIMEOUT_SECONDS,
        )
    except FileNotFoundError:
        attempts.append(f"'{DOTNET_EXECUTABLE}' executable not found")
        return None
    except subprocess.TimeoutExpired:
        attempts.append(f"'{' '.join(cmd)}' timed out")
        return None

    if proc.returncode != 0:
        message = proc.stderr.strip() or proc.stdout.strip() or str(proc.returncode)
        attempts.append(f"'{' '.join(cmd)}' failed: {message}")
        return None

    value = proc.stdout.strip()
    if not value:
        attempts.append(f"{SYMBOLS_MSBUILD_PROPERTY} is not set by {project_path}")
        return None
    candidate = Path(value)
    if not candidate.is_absolute():
        candidate = project_dir_of(project_path) / candidate
    if candidate.is_file():
        return candidate
    attempts.append(f"{SYMBOLS_MSBUILD_PROPERTY}={value} does not exist")
    return None


DEFAULT_STRATEGIES: tuple[LocateStrategy, ...] = (
    from_project_argument,
    from_environment,
    from_intermediate_dir,
    from_msbuild_property,
)


def locate_snapshot(
    project_path: Path,
    environ: Mapping[str, str],
    strategies: Sequence[LocateStrategy] = DEFAULT_STRATEGIES,
) -> Path:
    """Return the snapshot path for ``project_path``.

    Args:
        project_path (Path): Project file passed on the command line.
        environ (Mapping[str, str]): Run environment.
        strategies (Sequence[LocateStrategy]): Ordered lookup strategies.

    Returns:
        Path: The first snapshot found.

    Raises:
        ToolchainResolutionError: If no strategy finds a snapshot.
    """
    attempts: list[str] = []
    for strategy in strategies:
        found = strategy(project_path, environ, attempts)
        if found is not None:
            logger.info("Symbol snapshot for %s: %s", project_path, found)
            return found
    raise ToolchainResolutionError(project_path, attempts)


def load_symbol_table(project_path: Path, environ: Mapping[str, str]) -> InMemorySymbolTable:
    """Locate and load the symbol table of ``project_path``."""
    return load_snapshot(locate_snapshot(project_path, environ))
