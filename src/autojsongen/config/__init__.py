# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : __init__.py
#   file_relpath : src/autojsongen/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generator configuration: model, sources and logging setup."""

from __future__ import annotations

from autojsongen.config.loaders import (
    DEFAULT_SOURCES,
    ConfigSource,
    EditorConfigSource,
    JsonConfigSource,
    TomlConfigSource,
    resolve_config,
)
from autojsongen.config.model import (
    DEFAULT_COLLECTION_TEMPLATES,
    IDENTITY_TEMPLATE,
    GeneratorConfig,
    MutableGeneratorConfig,
)

__all__ = [
    "DEFAULT_COLLECTION_TEMPLATES",
    "DEFAULT_SOURCES",
    "IDENTITY_TEMPLATE",
    "ConfigSource",
    "EditorConfigSource",
    "GeneratorConfig",
    "JsonConfigSource",
    "MutableGeneratorConfig",
    "TomlConfigSource",
    "resolve_config",
]
