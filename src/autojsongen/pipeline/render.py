# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : render.py
#   file_relpath : src/autojsongen/pipeline/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Render the ``JsonSerializerContext`` declaration.

One ``[JsonSerializable(typeof(...))]`` line is emitted per (type, template)
pair: types in the order given, templates in config order. Output is pure
text with ``\\n`` line endings; it carries no timestamp, so identical input
renders byte-identical output.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from autojsongen.constants import (
    CONTEXT_BASE_CLASS,
    CONTEXT_CLASS_NAME,
    SERIALIZATION_USING,
    TYPE_PLACEHOLDER,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from autojsongen.config.model import GeneratorConfig
    from autojsongen.symbols.model import TypeSymbol

INDENT: str = "    "


def expand_template(template: str, type_name: str) -> str:
    """Substitute ``type_name`` for every ``{0}`` in ``template``.

    Plain replacement, not `str.format`: templates contain C# generic braces.
    """
    return template.replace(TYPE_PLACEHOLDER, type_name)


def registration_lines(
    types: Sequence[TypeSymbol],
    templates: Sequence[str],
) -> list[str]:
    """Return the attribute lines (without indentation) for ``types``."""
    return [
        f"[JsonSerializable(typeof({expand_template(template, t.display_name)}))]"
        for t in types
        for template in templates
    ]


def render_context(
    types: Sequence[TypeSymbol],
    config: GeneratorConfig,
    root_namespace: str,
) -> str:
    """Render the full artifact text.

    Args:
        types (Sequence[TypeSymbol]): Eligible types, already in output order.
        config (GeneratorConfig): Supplies the collection templates.
        root_namespace (str): Namespace that encloses the context class.

    Returns:
        str: The artifact, ending with a newline.
    """
    lines: list[str] = [
        f"using {SERIALIZATION_USING};",
        "",
        f"namespace {root_namespace}",
        "{",
    ]
    lines.extend(INDENT + line for line in registration_lines(types, config.collection_templates))
    lines.extend(
        [
            f"{INDENT}internal partial class {CONTEXT_CLASS_NAME} : {CONTEXT_BASE_CLASS}",
            f"{INDENT}{{",
            f"{INDENT}}}",
            "}",
        ]
    )
    return "\n".join(lines) + "\n"
