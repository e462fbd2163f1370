# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : eligibility.py
#   file_relpath : src/autojsongen/pipeline/eligibility.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Decide which declared types get registered.

A type is eligible iff:

- it is declared by the program (not an external reference), and
- its kind is class or struct, and
- the namespace filter is empty or contains its containing namespace, and
- it carries the marker directly, or ``include_base_types`` is set and any
  ancestor (full base chain plus all interfaces, transitively) carries it.

The result is deduplicated by symbol identity and ordered by display name
with a plain code-point comparison, so repeated runs over the same symbol
table produce the same order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from autojsongen.config.logging import get_logger
from autojsongen.constants import MARKER_FALLBACK_NAMESPACE, MARKER_TYPE_NAME
from autojsongen.errors import MarkerNotFoundError
from autojsongen.symbols.model import NamespaceSymbol

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from autojsongen.config.logging import AutoJsonLogger
    from autojsongen.config.model import GeneratorConfig
    from autojsongen.symbols.model import TypeSymbol
    from autojsongen.symbols.table import SymbolTable

logger: AutoJsonLogger = get_logger(__name__)


def iter_all_types(namespace: NamespaceSymbol) -> Iterator[TypeSymbol]:
    """Yield every type declared under ``namespace``, nested types included.

    Depth-first and lazy, with an explicit stack: namespace and type nesting
    depth does not consume call stack.
    """
    stack: list[NamespaceSymbol | TypeSymbol] = [namespace]
    while stack:
        item = stack.pop()
        if isinstance(item, NamespaceSymbol):
            # Children are pushed reversed so they pop in declaration order.
            stack.extend(reversed(item.namespaces))
            stack.extend(reversed(item.types))
        else:
            yield item
            stack.extend(reversed(item.nested_types))


def marker_candidates(root_namespace: str) -> list[str]:
    """Metadata names tried, in order, when resolving the marker."""
    names: list[str] = []
    if root_namespace:
        names.append(f"{root_namespace}.{MARKER_TYPE_NAME}")
    fallback = f"{MARKER_FALLBACK_NAMESPACE}.{MARKER_TYPE_NAME}"
    if fallback not in names:
        names.append(fallback)
    return names


def resolve_marker(table: SymbolTable, root_namespace: str) -> TypeSymbol:
    """Find the marker attribute in ``table``.

    Raises:
        MarkerNotFoundError: If no candidate name resolves.
    """
    candidates = marker_candidates(root_namespace)
    for name in candidates:
        marker = table.resolve_type(name)
        if marker is not None:
            logger.debug("Resolved marker %s", name)
            return marker
    raise MarkerNotFoundError(candidates)


def inherits_marker(table: SymbolTable, type_symbol: TypeSymbol, marker: TypeSymbol) -> bool:
    return any(table.has_marker(ancestor, marker) for ancestor in table.ancestors_of(type_symbol))


def is_eligible(
    table: SymbolTable,
    type_symbol: TypeSymbol,
    marker: TypeSymbol,
    config: GeneratorConfig,
) -> bool:
    """Return True if ``type_symbol`` must be registered."""
    if type_symbol.external or not type_symbol.kind.is_emittable:
        return False
    if not config.allows_namespace(type_symbol.containing_namespace):
        return False
    if table.has_marker(type_symbol, marker):
        return True
    return config.include_base_types and inherits_marker(table, type_symbol, marker)


def collect_eligible_types(
    table: SymbolTable,
    marker: TypeSymbol,
    config: GeneratorConfig,
) -> list[TypeSymbol]:
    """Scan the whole table and return the eligible types, deduplicated, in scan order."""
    seen: set[int] = set()
    eligible: list[TypeSymbol] = []
    scanned = 0
    for type_symbol in iter_all_types(table.global_namespace):
        scanned += 1
        if id(type_symbol) in seen:
            continue
        if is_eligible(table, type_symbol, marker, config):
            seen.add(id(type_symbol))
            eligible.append(type_symbol)
            logger.trace("Eligible: %s", type_symbol.display_name)
    logger.info("Scanned %d types, %d eligible", scanned, len(eligible))
    return eligible


def order_types(types: Iterable[TypeSymbol]) -> list[TypeSymbol]:
    """Sort by fully qualified display name (ordinal, locale-independent)."""
    return sorted(types, key=lambda t: t.display_name)


def find_eligible_types(
    table: SymbolTable,
    root_namespace: str,
    config: GeneratorConfig,
) -> list[TypeSymbol]:
    """Resolve the marker, scan the table and return the ordered eligible types.

    Args:
        table (SymbolTable): Symbol table of the compiled project.
        root_namespace (str): Project root namespace, used for marker lookup.
        config (GeneratorConfig): Generation options.

    Returns:
        list[TypeSymbol]: Eligible types in output order.

    Raises:
        MarkerNotFoundError: If the marker cannot be resolved.
    """
    marker = resolve_marker(table, root_namespace)
    return order_types(collect_eligible_types(table, marker, config))
