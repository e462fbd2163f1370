# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : snapshot.py
#   file_relpath : src/autojsongen/symbols/snapshot.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load a symbol snapshot exported by the host toolchain.

A snapshot is a JSON document describing the compiled type graph::

    {
      "namespaces": [
        {"name": "App", "namespaces": [], "types": [
          {"name": "Dog", "kind": "class", "base": "App.Animal",
           "interfaces": ["App.IPet"],
           "attributes": ["App.AutoJsonSerializableAttribute"],
           "types": []}
        ]}
      ],
      "types": []
    }

Top-level ``types`` live in the global namespace. Type references (``base``,
``interfaces``, ``attributes``) are metadata names; references to types the
snapshot does not declare become *external* placeholders of kind ``other``.

Loading happens in two passes: declarations first, then references, so a
type may refer to one declared later in the document.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from autojsongen.config.logging import get_logger
from autojsongen.errors import SymbolSnapshotError
from autojsongen.symbols.model import NamespaceSymbol, TypeKind, TypeSymbol
from autojsongen.symbols.table import InMemorySymbolTable

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from autojsongen.config.logging import AutoJsonLogger

logger: AutoJsonLogger = get_logger(__name__)

#: Snapshot kind spellings -> TypeKind.
KIND_ALIASES: dict[str, TypeKind] = {
    "class": TypeKind.CLASS,
    "record": TypeKind.CLASS,
    "record class": TypeKind.CLASS,
    "struct": TypeKind.STRUCT,
    "record struct": TypeKind.STRUCT,
    "interface": TypeKind.INTERFACE,
    "enum": TypeKind.ENUM,
    "delegate": TypeKind.DELEGATE,
}


def parse_kind(raw: object) -> TypeKind:
    """Map a snapshot ``kind`` value to a `TypeKind` (unknown kinds are `OTHER`)."""
    if not isinstance(raw, str):
        return TypeKind.OTHER
    return KIND_ALIASES.get(raw.strip().lower(), TypeKind.OTHER)


class _SnapshotBuilder:
    def __init__(self, path: Path) -> None:
        self.path = path
        self.root = NamespaceSymbol()
        self.declared: dict[str, TypeSymbol] = {}
        self.external: dict[str, TypeSymbol] = {}
        self._external_root = NamespaceSymbol()
        self._references: list[tuple[TypeSymbol, Mapping[str, Any]]] = []

    def fail(self, reason: str) -> SymbolSnapshotError:
        return SymbolSnapshotError(self.path, reason)

    def build(self, document: object) -> InMemorySymbolTable:
        if not isinstance(document, dict):
            raise self.fail("top-level value must be an object")
        self._declare_namespace(self.root, document)
        for type_symbol, entry in self._references:
            self._link(type_symbol, entry)
        logger.debug(
            "Snapshot %s: %d declared types, %d external references",
            self.path,
            len(self.declared),
            len(self.external),
        )
        return InMemorySymbolTable(self.root, self.external.values())

    def _entries(self, entry: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
        value = entry.get(key, [])
        if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
            raise self.fail(f"'{key}' must be a list of objects")
        return value

    def _name_of(self, entry: Mapping[str, Any]) -> str:
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise self.fail(f"missing or invalid 'name' in {dict(entry)!r}")
        return name

    def _declare_namespace(self, ns: NamespaceSymbol, entry: Mapping[str, Any]) -> None:
        # Explicit stack: namespace nesting depth is unbounded.
        stack: list[tuple[NamespaceSymbol, Mapping[str, Any]]] = [(ns, entry)]
        while stack:
            current, current_entry = stack.pop()
            for type_entry in self._entries(current_entry, "types"):
                self._declare_type(current, None, type_entry)
            for child_entry in self._entries(current_entry, "namespaces"):
                # Dotted names ("App.Models") expand into nested namespaces.
                child = current
                for part in self._name_of(child_entry).split("."):
                    child = child.add_namespace(part)
                stack.append((child, child_entry))

    def _declare_type(
        self,
        ns: NamespaceSymbol,
        outer: TypeSymbol | None,
        entry: Mapping[str, Any],
    ) -> None:
        stack: list[tuple[TypeSymbol | None, Mapping[str, Any]]] = [(outer, entry)]
        while stack:
            container, type_entry = stack.pop()
            name = self._name_of(type_entry)
            kind = parse_kind(type_entry.get("kind"))
            if container is None:
                symbol = TypeSymbol(name=name, kind=kind, namespace=ns)
                ns.types.append(symbol)
            else:
                symbol = container.add_nested(name, kind)
            if symbol.metadata_name in self.declared:
                raise self.fail(f"duplicate type '{symbol.metadata_name}'")
            self.declared[symbol.metadata_name] = symbol
            self._references.append((symbol, type_entry))
            for nested_entry in reversed(self._entries(type_entry, "types")):
                stack.append((symbol, nested_entry))

    def _reference(self, metadata_name: object) -> TypeSymbol:
        if not isinstance(metadata_name, str) or not metadata_name:
            raise self.fail(f"invalid type reference {metadata_name!r}")
        found = self.declared.get(metadata_name) or self.external.get(metadata_name)
        if found is None:
            found = self._external_type(metadata_name)
        return found

    def _external_type(self, metadata_name: str) -> TypeSymbol:
        # Not enumerated: external types hang off a detached namespace tree.
        outer_name, _, nested = metadata_name.partition("+")
        ns_path, _, simple = outer_name.rpartition(".")
        ns = self._external_root
        for part in filter(None, ns_path.split(".")):
            ns = ns.add_namespace(part)
        symbol = TypeSymbol(name=simple, kind=TypeKind.OTHER, namespace=ns, external=True)
        for part in filter(None, nested.split("+")):
            symbol = symbol.add_nested(part, TypeKind.OTHER)
            symbol.external = True
        self.external[metadata_name] = symbol
        return symbol

    def _link(self, symbol: TypeSymbol, entry: Mapping[str, Any]) -> None:
        base = entry.get("base")
        if base is not None:
            symbol.base_type = self._reference(base)
        for key, target in (("interfaces", symbol.interfaces), ("attributes", symbol.attributes)):
            refs = entry.get(key, [])
            if not isinstance(refs, list):
                raise self.fail(f"'{key}' of '{symbol.metadata_name}' must be a list")
            target.extend(self._reference(ref) for ref in refs)


def parse_snapshot(document: object, *, path: Path) -> InMemorySymbolTable:
    """Build a symbol table from an already-decoded snapshot document.

    Raises:
        SymbolSnapshotError: If the document does not follow the snapshot format.
    """
    return _SnapshotBuilder(path).build(document)


def load_snapshot(path: Path) -> InMemorySymbolTable:
    """Read and parse the snapshot at ``path``.

    Args:
        path (Path): Snapshot file (UTF-8 JSON).

    Returns:
        InMemorySymbolTable: The loaded symbol table.

    Raises:
        SymbolSnapshotError: If the file cannot be read or is malformed.
    """
    try:
        document: Any = json.loads(path.read_text(encoding="utf-8-sig"))
    except OSError as e:
        raise SymbolSnapshotError(path, str(e)) from e
    except json.JSONDecodeError as e:
        raise SymbolSnapshotError(path, str(e)) from e
    logger.info("Loaded symbol snapshot %s", path)
    return parse_snapshot(document, path=path)
