# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : model.py
#   file_relpath : src/autojsongen/symbols/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Symbol handles for a compiled program's type graph.

`NamespaceSymbol` and `TypeSymbol` mirror the subset of the host compiler's
symbol model that the generator needs. They are owned by a symbol table: the
engine reads them and compares them by identity, never by value.

Naming:
    - ``metadata_name``: dotted namespace path, ``+`` between nested types
      (``App.Models.Outer+Inner``); used for lookups.
    - ``display_name``: fully qualified C# name with the ``global::`` alias
      (``global::App.Models.Outer.Inner``); used for ordering and rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from autojsongen.constants import GLOBAL_ALIAS_PREFIX

GLOBAL_NAMESPACE_DISPLAY: Final[str] = "<global namespace>"


class TypeKind(str, Enum):
    """Kind of a declared type.

    Only `CLASS` and `STRUCT` are emission targets.
    """

    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"
    ENUM = "enum"
    DELEGATE = "delegate"
    OTHER = "other"

    @property
    def is_emittable(self) -> bool:
        return self in (TypeKind.CLASS, TypeKind.STRUCT)


@dataclass(eq=False)
class NamespaceSymbol:
    """A namespace; the global namespace has an empty name and no parent."""

    name: str = ""
    parent: NamespaceSymbol | None = None
    namespaces: list[NamespaceSymbol] = field(default_factory=list)
    types: list[TypeSymbol] = field(default_factory=list)

    @property
    def is_global(self) -> bool:
        return self.parent is None

    @property
    def full_name(self) -> str:
        """Dotted namespace path; empty for the global namespace."""
        parts: list[str] = []
        ns: NamespaceSymbol | None = self
        while ns is not None and not ns.is_global:
            parts.append(ns.name)
            ns = ns.parent
        return ".".join(reversed(parts))

    @property
    def display_name(self) -> str:
        return GLOBAL_NAMESPACE_DISPLAY if self.is_global else self.full_name

    def add_namespace(self, name: str) -> NamespaceSymbol:
        """Return the child namespace ``name``, creating it if needed."""
        for child in self.namespaces:
            if child.name == name:
                return child
        child = NamespaceSymbol(name=name, parent=self)
        self.namespaces.append(child)
        return child

    def __repr__(self) -> str:
        return f"NamespaceSymbol({self.display_name!r})"


@dataclass(eq=False)
class TypeSymbol:
    """A declared (or referenced) named type.

    Attributes:
        name (str): Simple name.
        kind (TypeKind): Declaration kind.
        namespace (NamespaceSymbol): Containing namespace (for nested types,
            the namespace of the outermost type).
        containing_type (TypeSymbol | None): Enclosing type of a nested type.
        base_type (TypeSymbol | None): Direct base class.
        interfaces (list[TypeSymbol]): Directly implemented interfaces.
        attributes (list[TypeSymbol]): Attribute classes applied to the type.
        nested_types (list[TypeSymbol]): Types declared inside this one.
        external (bool): True for types only referenced by the program
            (declared in another assembly).
    """

    name: str
    kind: TypeKind
    namespace: NamespaceSymbol
    containing_type: TypeSymbol | None = None
    base_type: TypeSymbol | None = None
    interfaces: list[TypeSymbol] = field(default_factory=list)
    attributes: list[TypeSymbol] = field(default_factory=list)
    nested_types: list[TypeSymbol] = field(default_factory=list)
    external: bool = False

    @property
    def containing_namespace(self) -> str:
        """Display name of the containing namespace."""
        return self.namespace.display_name

    @property
    def metadata_name(self) -> str:
        if self.containing_type is not None:
            return f"{self.containing_type.metadata_name}+{self.name}"
        prefix = self.namespace.full_name
        return f"{prefix}.{self.name}" if prefix else self.name

    @property
    def display_name(self) -> str:
        return GLOBAL_ALIAS_PREFIX + self._dotted_name()

    def _dotted_name(self) -> str:
        if self.containing_type is not None:
            return f"{self.containing_type._dotted_name()}.{self.name}"
        prefix = self.namespace.full_name
        return f"{prefix}.{self.name}" if prefix else self.name

    def add_nested(self, name: str, kind: TypeKind) -> TypeSymbol:
        nested = TypeSymbol(name=name, kind=kind, namespace=self.namespace, containing_type=self)
        self.nested_types.append(nested)
        return nested

    def __repr__(self) -> str:
        return f"TypeSymbol({self.metadata_name!r}, {self.kind.value})"
