# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : table.py
#   file_relpath : src/autojsongen/symbols/table.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Symbol-table protocol and its in-memory implementation.

The eligibility engine only talks to `SymbolTable`: a root namespace, marker
resolution by metadata name, and two capability queries (`has_marker` and
`ancestors_of`). Anything specific to the host toolchain stays behind it.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Protocol

from autojsongen.config.logging import get_logger
from autojsongen.symbols.model import NamespaceSymbol

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from autojsongen.config.logging import AutoJsonLogger
    from autojsongen.symbols.model import TypeSymbol

logger: AutoJsonLogger = get_logger(__name__)


class SymbolTable(Protocol):
    """Read-only view of a compiled program's type graph."""

    @property
    def global_namespace(self) -> NamespaceSymbol:
        """Root of the namespace tree."""
        ...

    def resolve_type(self, metadata_name: str) -> TypeSymbol | None:
        """Return the type named ``metadata_name``, or None if unknown."""
        ...

    def has_marker(self, type_symbol: TypeSymbol, marker: TypeSymbol) -> bool:
        """Return True if ``marker`` is applied directly to ``type_symbol``."""
        ...

    def ancestors_of(self, type_symbol: TypeSymbol) -> Iterator[TypeSymbol]:
        """Yield the base chain to its root, then every implemented interface."""
        ...


class InMemorySymbolTable:
    """`SymbolTable` over an in-memory namespace tree.

    Args:
        global_namespace (NamespaceSymbol | None): Root namespace; a fresh one
            is created when omitted.
        external_types (Iterable[TypeSymbol]): Types referenced but not
            declared by the program (base classes and attributes from other
            assemblies). They resolve by name but are never enumerated.
    """

    def __init__(
        self,
        global_namespace: NamespaceSymbol | None = None,
        external_types: Iterable[TypeSymbol] = (),
    ) -> None:
        self._global = global_namespace or NamespaceSymbol()
        self._external: dict[str, TypeSymbol] = {t.metadata_name: t for t in external_types}
        self._index: dict[str, TypeSymbol] | None = None

    @property
    def global_namespace(self) -> NamespaceSymbol:
        return self._global

    def _build_index(self) -> dict[str, TypeSymbol]:
        index: dict[str, TypeSymbol] = {}
        namespaces: list[NamespaceSymbol] = [self._global]
        while namespaces:
            ns = namespaces.pop()
            namespaces.extend(ns.namespaces)
            pending: list[TypeSymbol] = list(ns.types)
            while pending:
                t = pending.pop()
                index.setdefault(t.metadata_name, t)
                pending.extend(t.nested_types)
        logger.debug("Indexed %d declared types", len(index))
        return index

    def resolve_type(self, metadata_name: str) -> TypeSymbol | None:
        # The index is built on first lookup, after the tree is complete.
        if self._index is None:
            self._index = self._build_index()
        found = self._index.get(metadata_name)
        if found is None:
            found = self._external.get(metadata_name)
        return found

    def has_marker(self, type_symbol: TypeSymbol, marker: TypeSymbol) -> bool:
        return any(attr is marker for attr in type_symbol.attributes)

    def ancestors_of(self, type_symbol: TypeSymbol) -> Iterator[TypeSymbol]:
        seen: set[int] = set()

        bases: list[TypeSymbol] = []
        current = type_symbol.base_type
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            bases.append(current)
            yield current
            current = current.base_type

        # Interfaces of the type, of each base, and of each interface, transitively.
        pending: deque[TypeSymbol] = deque()
        for owner in (type_symbol, *bases):
            pending.extend(owner.interfaces)
        while pending:
            iface = pending.popleft()
            if id(iface) in seen:
                continue
            seen.add(id(iface))
            yield iface
            pending.extend(iface.interfaces)
