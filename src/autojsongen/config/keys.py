# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : keys.py
#   file_relpath : src/autojsongen/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical config key names for AutoJsonGen.

This module defines the authoritative key names used when reading generator
options from ``autojsonconfig.json``, ``autojson.toml`` and ``.editorconfig``.

Design notes:
    - Keys defined here represent *external configuration API*.
    - Structured sources match keys through `normalize_key`, so
      ``includeBaseTypes``, ``IncludeBaseTypes`` and ``include_base_types``
      address the same option.
    - ``.editorconfig`` keys are matched by prefix, verbatim.
"""

from __future__ import annotations

from typing import Final

from autojsongen.constants import EDITORCONFIG_KEY_PREFIX


class Keys:
    """Structured config keys, in their canonical camel-case spelling."""

    NAMESPACES: Final[str] = "namespaces"
    INCLUDE_BASE_TYPES: Final[str] = "includeBaseTypes"
    COLLECTION_TEMPLATES: Final[str] = "collectionTemplates"


class EditorConfigKeys:
    """Line prefixes recognized in ``.editorconfig``."""

    NAMESPACES: Final[str] = EDITORCONFIG_KEY_PREFIX + Keys.NAMESPACES
    INCLUDE_BASE_TYPES: Final[str] = EDITORCONFIG_KEY_PREFIX + Keys.INCLUDE_BASE_TYPES
    COLLECTION_TEMPLATES: Final[str] = EDITORCONFIG_KEY_PREFIX + Keys.COLLECTION_TEMPLATES

    # Separators used by the line-oriented format
    NAMESPACE_SEPARATOR: Final[str] = ";"
    TEMPLATE_SEPARATOR: Final[str] = ","


def normalize_key(key: str) -> str:
    """Fold a config key for case- and separator-insensitive matching.

    Args:
        key (str): Raw key as written by the user.

    Returns:
        str: The key lower-cased with ``_``, ``-`` and spaces removed.

    Examples:
        >>> normalize_key("include_base_types") == normalize_key("IncludeBaseTypes")
        True
    """
    return key.replace("_", "").replace("-", "").replace(" ", "").lower()


#: Normalized key -> canonical key.
CANONICAL_KEYS: Final[dict[str, str]] = {
    normalize_key(k): k for k in (Keys.NAMESPACES, Keys.INCLUDE_BASE_TYPES, Keys.COLLECTION_TEMPLATES)
}
