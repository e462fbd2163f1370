# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : test_errors.py
#   file_relpath : tests/cli/test_errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test: fatal errors exit with FAILURE and name the cause."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from autojsongen.cli import main as cli_main
from autojsongen.cli.errors import (
    AutoJsonConfigError,
    AutoJsonIOError,
    AutoJsonMarkerNotFoundError,
    AutoJsonToolchainError,
    cli_error_for,
)
from autojsongen.cli.exit_codes import ExitCode
from autojsongen.errors import (
    ArtifactWriteError,
    ConfigParseError,
    MarkerNotFoundError,
    SymbolSnapshotError,
    ToolchainResolutionError,
)
from autojsongen.pipeline.guard import lock_path_for

if TYPE_CHECKING:
    from .conftest import Invoke

pytestmark = pytest.mark.cli


def test_unresolvable_project(invoke: Invoke, tmp_path: Path) -> None:
    project = tmp_path / "App" / "App.csproj"
    project.parent.mkdir()
    project.write_text("<Project />", encoding="utf-8")
    out = tmp_path / "out"

    result = invoke([str(project), "App", str(out)])

    assert result.exit_code == ExitCode.FAILURE
    assert "Cannot resolve the symbol table" in result.output
    assert not lock_path_for(out).exists()


def test_marker_not_found(invoke: Invoke, tmp_path: Path) -> None:
    snapshot = tmp_path / "s.json"
    snapshot.write_text(json.dumps({"types": [{"name": "Plain", "kind": "class"}]}), "utf-8")
    out = tmp_path / "out"

    result = invoke([str(snapshot), "App", str(out)])

    assert result.exit_code == ExitCode.FAILURE
    assert "Marker attribute not found" in result.output
    assert not (out / "AutoJsonContext.g.cs").exists()


def test_malformed_config(invoke: Invoke, snapshot_path: Path) -> None:
    (snapshot_path.parent / "autojsonconfig.json").write_text("{oops", encoding="utf-8")

    result = invoke([str(snapshot_path), "App", str(snapshot_path.parent / "out")])

    assert result.exit_code == ExitCode.FAILURE
    assert "Invalid config file" in result.output


def test_unexpected_error_shows_traceback(
    invoke: Invoke, snapshot_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def explode(*_args: object, **_kwargs: object) -> None:
        raise ValueError("kaboom")

    monkeypatch.setattr(cli_main, "run_generator", explode)

    result = invoke([str(snapshot_path), "App", str(snapshot_path.parent / "out")])

    assert result.exit_code == ExitCode.FAILURE
    assert "Traceback" in result.output
    assert "kaboom" in result.output


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (ConfigParseError(Path("c.json"), "bad"), AutoJsonConfigError),
        (SymbolSnapshotError(Path("s.json"), "bad"), AutoJsonToolchainError),
        (ToolchainResolutionError(Path("App.csproj"), []), AutoJsonToolchainError),
        (MarkerNotFoundError(["App.AutoJsonSerializableAttribute"]), AutoJsonMarkerNotFoundError),
        (ArtifactWriteError(Path("out"), "denied"), AutoJsonIOError),
    ],
)
def test_cli_error_mapping(error: Exception, expected: type) -> None:
    mapped = cli_error_for(error)  # type: ignore[arg-type]

    assert type(mapped) is expected
    assert mapped.exit_code == ExitCode.FAILURE
    assert mapped.format_message() == str(error)
