# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : loaders.py
#   file_relpath : src/autojsongen/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve generator options for a project directory.

Config sources are tried in order; each returns ``None`` when it does not
apply (its file is absent) or a parsed `MutableGeneratorConfig`. The first
applicable source wins, and the chain ends at the built-in defaults:

1. ``autojsonconfig.json``: structured JSON, keys matched case-insensitively.
2. ``autojson.toml``: structured TOML (parsed with `tomlkit`), keys at top
   level or under ``[autojson]``.
3. ``.editorconfig``: ``autojson.*`` key/value lines.

A source whose file exists but cannot be parsed raises `ConfigParseError`;
there is no silent fallback to the next source.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from autojsongen.config.keys import CANONICAL_KEYS, EditorConfigKeys, Keys, normalize_key
from autojsongen.config.logging import get_logger
from autojsongen.config.model import GeneratorConfig, MutableGeneratorConfig
from autojsongen.constants import (
    EDITORCONFIG_NAME,
    JSON_CONFIG_NAME,
    TOML_CONFIG_NAME,
    TOML_CONFIG_SECTION,
)
from autojsongen.errors import ConfigParseError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from autojsongen.config.logging import AutoJsonLogger

logger: AutoJsonLogger = get_logger(__name__)


class ConfigSource(Protocol):
    """A single config source in the resolution chain."""

    name: str

    def load(self, project_dir: Path) -> MutableGeneratorConfig | None:
        """Return a parsed config, or None if this source does not apply."""
        ...


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigParseError(path, str(e)) from e


def apply_structured_options(
    draft: MutableGeneratorConfig,
    data: Mapping[str, Any],
    *,
    path: Path,
) -> MutableGeneratorConfig:
    """Overlay options from a structured (JSON/TOML) mapping onto ``draft``.

    Keys are matched through `normalize_key`. Unknown keys are ignored and
    ``null`` values keep the default.

    Args:
        draft (MutableGeneratorConfig): Builder to update in place.
        data (Mapping[str, Any]): Parsed document.
        path (Path): Source file, for error messages.

    Returns:
        MutableGeneratorConfig: The updated ``draft``.

    Raises:
        ConfigParseError: If a recognized key holds a value of the wrong type.
    """
    for raw_key, value in data.items():
        key = CANONICAL_KEYS.get(normalize_key(str(raw_key)))
        if key is None:
            logger.debug("Ignoring unknown config key %r in %s", raw_key, path)
            continue
        if value is None:
            continue
        if key == Keys.INCLUDE_BASE_TYPES:
            if not isinstance(value, bool):
                raise ConfigParseError(path, f"'{raw_key}' must be a boolean, got {value!r}")
            draft.include_base_types = value
        elif key == Keys.NAMESPACES:
            draft.namespaces = _string_list(value, raw_key, path)
        elif key == Keys.COLLECTION_TEMPLATES:
            draft.collection_templates = _string_list(value, raw_key, path)
    return draft


def _string_list(value: Any, raw_key: object, path: Path) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigParseError(path, f"'{raw_key}' must be a list of strings, got {value!r}")
    return list(value)


class JsonConfigSource:
    """``autojsonconfig.json`` in the project directory."""

    name = JSON_CONFIG_NAME

    def load(self, project_dir: Path) -> MutableGeneratorConfig | None:
        path = project_dir / self.name
        if not path.is_file():
            return None
        try:
            data: Any = json.loads(_read_text(path))
        except json.JSONDecodeError as e:
            raise ConfigParseError(path, str(e)) from e

        draft = MutableGeneratorConfig(source=path)
        if data is None:
            # A literal `null` document deserializes to the defaults.
            return draft
        if not isinstance(data, dict):
            raise ConfigParseError(path, f"expected a JSON object, got {type(data).__name__}")
        return apply_structured_options(draft, data, path=path)


class TomlConfigSource:
    """``autojson.toml`` in the project directory."""

    name = TOML_CONFIG_NAME

    def load(self, project_dir: Path) -> MutableGeneratorConfig | None:
        path = project_dir / self.name
        if not path.is_file():
            return None
        try:
            doc: tomlkit.TOMLDocument = tomlkit.parse(_read_text(path))
        except TomlkitParseError as e:
            raise ConfigParseError(path, str(e)) from e

        data: Any = doc.unwrap()
        section: Any = data.get(TOML_CONFIG_SECTION)
        if isinstance(section, dict):
            data = section
        return apply_structured_options(MutableGeneratorConfig(source=path), data, path=path)


def parse_editorconfig_bool(raw: str, *, path: Path) -> bool:
    """Parse a ``true``/``false`` value (case-insensitive).

    Raises:
        ConfigParseError: For any other value.
    """
    folded = raw.strip().lower()
    if folded == "true":
        return True
    if folded == "false":
        return False
    raise ConfigParseError(path, f"'{EditorConfigKeys.INCLUDE_BASE_TYPES}' must be true or false, got {raw!r}")


def _split_items(raw: str, separator: str) -> list[str]:
    return [item.strip() for item in raw.split(separator)]


class EditorConfigSource:
    """``autojson.*`` lines in the project's ``.editorconfig``.

    Lines are matched by prefix after stripping; the value is everything after
    the first ``=``. Section headers and other keys are ignored.
    """

    name = EDITORCONFIG_NAME

    def load(self, project_dir: Path) -> MutableGeneratorConfig | None:
        path = project_dir / self.name
        if not path.is_file():
            return None

        draft = MutableGeneratorConfig(source=path)
        for lineno, line in enumerate(_read_text(path).splitlines(), start=1):
            trimmed = line.strip()
            if trimmed.startswith(EditorConfigKeys.NAMESPACES):
                draft.namespaces = _split_items(
                    _value_of(trimmed, path, lineno), EditorConfigKeys.NAMESPACE_SEPARATOR
                )
            elif trimmed.startswith(EditorConfigKeys.INCLUDE_BASE_TYPES):
                draft.include_base_types = parse_editorconfig_bool(
                    _value_of(trimmed, path, lineno), path=path
                )
            elif trimmed.startswith(EditorConfigKeys.COLLECTION_TEMPLATES):
                draft.collection_templates = _split_items(
                    _value_of(trimmed, path, lineno), EditorConfigKeys.TEMPLATE_SEPARATOR
                )
        return draft


def _value_of(line: str, path: Path, lineno: int) -> str:
    _key, sep, value = line.partition("=")
    if not sep:
        raise ConfigParseError(path, f"line {lineno}: expected 'key = value', got {line!r}")
    return value.strip()


DEFAULT_SOURCES: tuple[ConfigSource, ...] = (
    JsonConfigSource(),
    TomlConfigSource(),
    EditorConfigSource(),
)


def resolve_config(
    project_dir: Path,
    sources: Sequence[ConfigSource] = DEFAULT_SOURCES,
) -> GeneratorConfig:
    """Resolve the generator options for ``project_dir``.

    Args:
        project_dir (Path): Directory holding the project file.
        sources (Sequence[ConfigSource]): Ordered config sources to try.

    Returns:
        GeneratorConfig: Options from the first applicable source, or the
        built-in defaults when none applies.

    Raises:
        ConfigParseError: If the first existing config file is malformed.
    """
    for source in sources:
        draft = source.load(project_dir)
        if draft is not None:
            logger.info("Using config from %s", draft.source)
            return draft.freeze()
    logger.info("No config file in %s; using built-in defaults", project_dir)
    return MutableGeneratorConfig().freeze()
