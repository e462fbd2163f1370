# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers.

`invoke` runs the command in-process with an injected run environment, so the
recursion flag set by the guard never reaches ``os.environ``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, cast

import click
import pytest
from click.testing import CliRunner, Result

from autojsongen.cli.main import cli as _cli
from autojsongen.config.logging import TRACE_LEVEL, setup_logging

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

cli = cast(click.Command, _cli)

Invoke = Callable[..., Result]


@pytest.fixture
def invoke() -> Invoke:
    """Return a helper ``invoke(args, environ=None)`` bound to a fresh runner."""
    runner = CliRunner()

    def _invoke(args: Sequence[str], environ: dict[str, str] | None = None) -> Result:
        return runner.invoke(cli, list(args), obj={"environ": {} if environ is None else environ})

    return _invoke


@pytest.fixture(autouse=True)
def no_host_build(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make the ``dotnet`` lookup fail fast instead of spawning a process."""

    def _missing(*_args: object, **_kwargs: object) -> None:
        raise FileNotFoundError("dotnet")

    monkeypatch.setattr("subprocess.run", _missing)


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Re-point logging at pytest's streams once the runner's are closed."""
    yield
    setup_logging(level=TRACE_LEVEL)
