# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : test_eligibility.py
#   file_relpath : tests/pipeline/test_eligibility.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type eligibility: marker resolution, filters, inheritance and ordering."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from autojsongen.config import GeneratorConfig
from autojsongen.errors import MarkerNotFoundError
from autojsongen.pipeline.eligibility import (
    find_eligible_types,
    iter_all_types,
    marker_candidates,
    resolve_marker,
)
from autojsongen.symbols import TypeKind, TypeSymbol

if TYPE_CHECKING:
    from tests.conftest import TableBuilder

DEFAULTS = GeneratorConfig()


def _names(types: list[TypeSymbol]) -> list[str]:
    return [t.display_name for t in types]


def test_marker_candidates() -> None:
    assert marker_candidates("App") == [
        "App.AutoJsonSerializableAttribute",
        "Fun.AutoJsonContextGenerator.AutoJsonSerializableAttribute",
    ]
    assert marker_candidates("Fun.AutoJsonContextGenerator") == [
        "Fun.AutoJsonContextGenerator.AutoJsonSerializableAttribute",
    ]


def test_marker_fallback_namespace(table_builder: TableBuilder) -> None:
    marker = table_builder.marker("Fun.AutoJsonContextGenerator.AutoJsonSerializableAttribute")
    table = table_builder.build()

    assert resolve_marker(table, "App") is marker


def test_marker_not_found_is_fatal(table_builder: TableBuilder) -> None:
    table_builder.add("App.Plain")

    with pytest.raises(MarkerNotFoundError) as excinfo:
        find_eligible_types(table_builder.build(), "App", DEFAULTS)

    assert excinfo.value.candidates == marker_candidates("App")


def test_ordering_by_qualified_name(table_builder: TableBuilder) -> None:
    marker = table_builder.marker()
    table_builder.add("App.Zebra", attributes=[marker])
    table_builder.add("App.Apple", attributes=[marker])
    table_builder.add("App.Mango", kind=TypeKind.STRUCT, attributes=[marker])

    result = find_eligible_types(table_builder.build(), "App", DEFAULTS)

    assert _names(result) == ["global::App.Apple", "global::App.Mango", "global::App.Zebra"]


def test_ordering_is_ordinal(table_builder: TableBuilder) -> None:
    marker = table_builder.marker()
    table_builder.add("App.apple", attributes=[marker])
    table_builder.add("App.Banana", attributes=[marker])

    result = find_eligible_types(table_builder.build(), "App", DEFAULTS)

    # Upper case sorts before lower case.
    assert _names(result) == ["global::App.Banana", "global::App.apple"]


@pytest.mark.parametrize(
    ("include_base_types", "expected"),
    [
        (True, ["global::App.Animal", "global::App.Dog"]),
        (False, ["global::App.Animal"]),
    ],
)
def test_inherited_marker(
    table_builder: TableBuilder, include_base_types: bool, expected: list[str]
) -> None:
    marker = table_builder.marker()
    animal = table_builder.add("App.Animal", attributes=[marker])
    table_builder.add("App.Dog", base=animal)
    config = GeneratorConfig(include_base_types=include_base_types)

    assert _names(find_eligible_types(table_builder.build(), "App", config)) == expected


def test_marker_on_distant_ancestor_and_interface(table_builder: TableBuilder) -> None:
    marker = table_builder.marker()
    i_marked = table_builder.add("App.IMarked", kind=TypeKind.INTERFACE, attributes=[marker])
    i_child = table_builder.add("App.IChild", kind=TypeKind.INTERFACE, interfaces=[i_marked])
    grand = table_builder.add("App.Grand", kind=TypeKind.CLASS, interfaces=[i_child])
    parent = table_builder.add("App.Parent", base=grand)
    table_builder.add("App.Child", base=parent)
    table_builder.add("App.Unrelated")

    result = find_eligible_types(table_builder.build(), "App", DEFAULTS)

    # Interfaces are never emitted, even when marked.
    assert _names(result) == ["global::App.Child", "global::App.Grand", "global::App.Parent"]


def test_namespace_filter_is_exact(table_builder: TableBuilder) -> None:
    marker = table_builder.marker()
    table_builder.add("App.Models.Customer", attributes=[marker])
    table_builder.add("App.Models.Sub.Order", attributes=[marker])
    table_builder.add("App.Services.Cache", attributes=[marker])
    config = GeneratorConfig(namespaces=frozenset({"App.Models"}))

    result = find_eligible_types(table_builder.build(), "App", config)

    assert _names(result) == ["global::App.Models.Customer"]


def test_global_namespace_filter(table_builder: TableBuilder) -> None:
    marker = table_builder.marker()
    table_builder.add("Loose", attributes=[marker])
    table_builder.add("App.Kept", attributes=[marker])
    config = GeneratorConfig(namespaces=frozenset({"<global namespace>"}))

    assert _names(find_eligible_types(table_builder.build(), "App", config)) == ["global::Loose"]


@pytest.mark.parametrize("kind", [TypeKind.INTERFACE, TypeKind.ENUM, TypeKind.DELEGATE])
def test_non_emittable_kinds(table_builder: TableBuilder, kind: TypeKind) -> None:
    marker = table_builder.marker()
    table_builder.add("App.Thing", kind=kind, attributes=[marker])

    assert find_eligible_types(table_builder.build(), "App", DEFAULTS) == []


def test_external_types_are_not_registered(table_builder: TableBuilder) -> None:
    marker = table_builder.marker()
    referenced = table_builder.add("App.FromPackage", attributes=[marker])
    referenced.external = True
    table_builder.add("App.Local", attributes=[marker])

    result = find_eligible_types(table_builder.build(), "App", DEFAULTS)

    assert _names(result) == ["global::App.Local"]


def test_nested_types_use_outer_namespace(table_builder: TableBuilder) -> None:
    marker = table_builder.marker()
    outer = table_builder.add("App.Models.Outer")
    table_builder.add("Inner", outer=outer, attributes=[marker])
    config = GeneratorConfig(namespaces=frozenset({"App.Models"}))

    result = find_eligible_types(table_builder.build(), "App", config)

    assert _names(result) == ["global::App.Models.Outer.Inner"]


def test_deep_nesting_does_not_recurse(table_builder: TableBuilder) -> None:
    marker = table_builder.marker()
    ns = table_builder.namespace("App")
    for i in range(3000):
        ns = ns.add_namespace(f"N{i}")
    outer = TypeSymbol(name="T0", kind=TypeKind.CLASS, namespace=ns)
    ns.types.append(outer)
    deepest = outer
    for i in range(1, 200):
        deepest = deepest.add_nested(f"T{i}", TypeKind.CLASS)
    deepest.attributes.append(marker)
    table = table_builder.build()

    assert sum(1 for _ in iter_all_types(table.global_namespace)) == 201
    result = find_eligible_types(table, "App", DEFAULTS)
    assert [t.name for t in result] == ["T199"]
