# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : __init__.py
#   file_relpath : src/autojsongen/symbols/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Symbol-table access: symbol handles, the table protocol, snapshots and lookup."""

from __future__ import annotations

from autojsongen.symbols.model import (
    GLOBAL_NAMESPACE_DISPLAY,
    NamespaceSymbol,
    TypeKind,
    TypeSymbol,
)
from autojsongen.symbols.table import InMemorySymbolTable, SymbolTable

__all__ = [
    "GLOBAL_NAMESPACE_DISPLAY",
    "InMemorySymbolTable",
    "NamespaceSymbol",
    "SymbolTable",
    "TypeKind",
    "TypeSymbol",
]
