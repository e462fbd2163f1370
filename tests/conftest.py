# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the AutoJsonGen test suite.

Provides:
    - environment isolation (no log level, recursion flag or snapshot path
      leaking in from the developer's shell),
    - `TableBuilder`, a small DSL for fake symbol tables, and
    - helpers to write snapshot and config files under ``tmp_path``.

Notes:
    The engine never reads ``os.environ`` directly; tests pass plain dicts as
    the run environment (see `autojsongen.pipeline.runner.RunContext`).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from autojsongen.config import logging
from autojsongen.constants import ENV_LOG_LEVEL, ENV_RUNNING_FLAG, ENV_SYMBOLS_FILE
from autojsongen.symbols import InMemorySymbolTable, NamespaceSymbol, TypeKind, TypeSymbol

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

MARKER_NAME = "App.AutoJsonSerializableAttribute"


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop AutoJsonGen variables the developer may have exported."""
    for name in (ENV_LOG_LEVEL, ENV_RUNNING_FLAG, ENV_SYMBOLS_FILE):
        monkeypatch.delenv(name, raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    """Log at TRACE so failing tests show the engine's decisions."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


class TableBuilder:
    """Build an `InMemorySymbolTable` from metadata names.

    Example:
        ```python
        b = TableBuilder()
        marker = b.marker()
        animal = b.add("App.Animal", attributes=[marker])
        dog = b.add("App.Dog", base=animal)
        table = b.build()
        ```
    """

    def __init__(self) -> None:
        self.root = NamespaceSymbol()

    def namespace(self, dotted: str) -> NamespaceSymbol:
        ns = self.root
        for part in filter(None, dotted.split(".")):
            ns = ns.add_namespace(part)
        return ns

    def add(
        self,
        metadata_name: str,
        *,
        kind: TypeKind = TypeKind.CLASS,
        base: TypeSymbol | None = None,
        interfaces: Sequence[TypeSymbol] = (),
        attributes: Sequence[TypeSymbol] = (),
        outer: TypeSymbol | None = None,
    ) -> TypeSymbol:
        """Declare a type. With ``outer``, ``metadata_name`` is the simple name."""
        if outer is not None:
            symbol = outer.add_nested(metadata_name, kind)
        else:
            ns_path, _, name = metadata_name.rpartition(".")
            ns = self.namespace(ns_path)
            symbol = TypeSymbol(name=name, kind=kind, namespace=ns)
            ns.types.append(symbol)
        symbol.base_type = base
        symbol.interfaces.extend(interfaces)
        symbol.attributes.extend(attributes)
        return symbol

    def marker(self, metadata_name: str = MARKER_NAME) -> TypeSymbol:
        return self.add(metadata_name, kind=TypeKind.CLASS)

    def build(self) -> InMemorySymbolTable:
        return InMemorySymbolTable(self.root)


@pytest.fixture
def table_builder() -> TableBuilder:
    """Fresh `TableBuilder` per test."""
    return TableBuilder()


def marked_type(name: str, *, kind: str = "class", **extra: Any) -> dict[str, Any]:
    """Snapshot entry for a type carrying the marker."""
    entry: dict[str, Any] = {"name": name, "kind": kind, "attributes": [MARKER_NAME]}
    entry.update(extra)
    return entry


def sample_snapshot() -> dict[str, Any]:
    """Snapshot with marked, inherited, filtered and ineligible types."""
    return {
        "namespaces": [
            {
                "name": "App",
                "types": [
                    {"name": "AutoJsonSerializableAttribute", "kind": "class"},
                ],
                "namespaces": [
                    {
                        "name": "Models",
                        "types": [
                            marked_type("Zebra"),
                            marked_type("Apple"),
                            {"name": "Animal", "kind": "class", "attributes": [MARKER_NAME]},
                            {"name": "Mango", "kind": "struct", "attributes": [MARKER_NAME]},
                            {"name": "Dog", "kind": "class", "base": "App.Models.Animal"},
                            {"name": "IPet", "kind": "interface", "attributes": [MARKER_NAME]},
                            {"name": "Color", "kind": "enum", "attributes": [MARKER_NAME]},
                        ],
                    },
                    {"name": "Other", "types": [marked_type("Stray")]},
                ],
            }
        ]
    }


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, object], Path]:
    """Write a JSON document under ``tmp_path`` and return its path."""

    def _write(relpath: str, document: object) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def snapshot_path(write_json: Callable[[str, object], Path]) -> Path:
    """`sample_snapshot` written to ``proj/app.symbols.json``."""
    return write_json("proj/app.symbols.json", sample_snapshot())
