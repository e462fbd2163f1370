# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : errors.py
#   file_relpath : src/autojsongen/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Domain exceptions raised by the AutoJsonGen engine.

These exceptions are Click-free so the engine can be driven from tests and
other frontends. The CLI maps them onto `autojsongen.cli.errors` for exit
codes and styled output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class AutoJsonError(Exception):
    """Base class for all fatal AutoJsonGen errors."""


class ConfigParseError(AutoJsonError):
    """A config file exists but cannot be read or parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid config file {path}: {reason}")
        self.path = path
        self.reason = reason


class SymbolSnapshotError(AutoJsonError):
    """The symbol snapshot exported by the host toolchain is unreadable or malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid symbol snapshot {path}: {reason}")
        self.path = path
        self.reason = reason


class ToolchainResolutionError(AutoJsonError):
    """No strategy could locate the symbol table for a project."""

    def __init__(self, project_path: Path, attempts: list[str]) -> None:
        details = "; ".join(attempts) if attempts else "no strategy applicable"
        super().__init__(f"Cannot resolve the symbol table for {project_path} ({details})")
        self.project_path = project_path
        self.attempts = attempts


class MarkerNotFoundError(AutoJsonError):
    """The marker attribute cannot be resolved in the symbol table."""

    def __init__(self, candidates: list[str]) -> None:
        super().__init__("Marker attribute not found; tried " + ", ".join(candidates))
        self.candidates = candidates


class ArtifactWriteError(AutoJsonError):
    """The generated artifact (or its directory) cannot be read back or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path
        self.reason = reason
