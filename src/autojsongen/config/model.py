# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : model.py
#   file_relpath : src/autojsongen/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generator configuration model.

This module defines:
    - `GeneratorConfig`: an immutable, per-run snapshot consumed by the
      eligibility engine and the renderer.
    - `MutableGeneratorConfig`: a mutable builder used while a config source
      is parsed; it is frozen into `GeneratorConfig` once per run.

Scope:
    - *In scope*: data shapes, field defaults, and freeze/thaw mechanics.
    - *Out of scope*: file discovery and parsing, see `autojsongen.config.loaders`.

Immutability:
    - `GeneratorConfig` stores tuples/frozensets and is ``frozen=True``.
      Use `GeneratorConfig.thaw` → edit → `MutableGeneratorConfig.freeze`
      for safe updates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from autojsongen.config.logging import get_logger
from autojsongen.constants import TYPE_PLACEHOLDER

if TYPE_CHECKING:
    from pathlib import Path

    from autojsongen.config.logging import AutoJsonLogger

logger: AutoJsonLogger = get_logger(__name__)

#: Used whenever a config yields no templates: register just the type itself.
IDENTITY_TEMPLATE: tuple[str, ...] = (TYPE_PLACEHOLDER,)

#: Bare type, list, array and string-keyed dictionary.
DEFAULT_COLLECTION_TEMPLATES: tuple[str, ...] = (
    TYPE_PLACEHOLDER,
    f"System.Collections.Generic.List<{TYPE_PLACEHOLDER}>",
    f"{TYPE_PLACEHOLDER}[]",
    f"System.Collections.Generic.Dictionary<string, {TYPE_PLACEHOLDER}>",
)


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Immutable generation options for one run.

    Attributes:
        namespaces (frozenset[str]): Containing-namespace display names that
            eligible types must live in. Empty means no filter.
        include_base_types (bool): Whether a marker on an ancestor class or an
            implemented interface makes a type eligible.
        collection_templates (tuple[str, ...]): Rendering templates, each with
            one ``{0}`` placeholder for the fully qualified type name. Never empty.
        source (Path | None): Config file the options were read from, or None
            for built-in defaults.
    """

    namespaces: frozenset[str] = frozenset()
    include_base_types: bool = True
    collection_templates: tuple[str, ...] = DEFAULT_COLLECTION_TEMPLATES
    source: Path | None = None

    def __post_init__(self) -> None:
        if not self.collection_templates:
            # frozen dataclass: bypass __setattr__ for the normalization
            object.__setattr__(self, "collection_templates", IDENTITY_TEMPLATE)

    def allows_namespace(self, namespace: str) -> bool:
        """Return True if ``namespace`` passes the namespace filter."""
        return not self.namespaces or namespace in self.namespaces

    def thaw(self) -> MutableGeneratorConfig:
        """Return a mutable copy of this frozen config."""
        return MutableGeneratorConfig(
            namespaces=list(self.namespaces),
            include_base_types=self.include_base_types,
            collection_templates=list(self.collection_templates),
            source=self.source,
        )


@dataclass
class MutableGeneratorConfig:
    """Mutable builder for `GeneratorConfig`.

    Config sources start from the defaults and overwrite only the options they
    actually specify; `freeze` applies the template invariant.
    """

    namespaces: list[str] = field(default_factory=list)
    include_base_types: bool = True
    collection_templates: list[str] = field(
        default_factory=lambda: list(DEFAULT_COLLECTION_TEMPLATES)
    )
    source: Path | None = None

    def freeze(self) -> GeneratorConfig:
        """Freeze into an immutable `GeneratorConfig`.

        Blank namespace and template entries are dropped. An empty template list
        collapses to the identity template.
        """
        namespaces = frozenset(ns for ns in self.namespaces if ns)
        templates = tuple(t for t in self.collection_templates if t.strip()) or IDENTITY_TEMPLATE
        for template in templates:
            if TYPE_PLACEHOLDER not in template:
                logger.warning(
                    "Collection template %r has no %s placeholder; it registers a fixed type",
                    template,
                    TYPE_PLACEHOLDER,
                )
        return GeneratorConfig(
            namespaces=namespaces,
            include_base_types=self.include_base_types,
            collection_templates=templates,
            source=self.source,
        )
