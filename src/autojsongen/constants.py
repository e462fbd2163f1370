# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : constants.py
#   file_relpath : src/autojsongen/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""AutoJsonGen Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    AUTOJSON_VERSION: str = get_version("autojsongen")
except PackageNotFoundError:  # running from a source checkout
    AUTOJSON_VERSION = "0.0.0"

# --- Config sources (project directory) ---
JSON_CONFIG_NAME: str = "autojsonconfig.json"
TOML_CONFIG_NAME: str = "autojson.toml"
TOML_CONFIG_SECTION: str = "autojson"
EDITORCONFIG_NAME: str = ".editorconfig"
EDITORCONFIG_KEY_PREFIX: str = "autojson."

# --- Output directory ---
LOCK_FILE_NAME: str = "AutoJson.lock"
ARTIFACT_FILE_NAME: str = "AutoJsonContext.g.cs"
ARTIFACT_ENCODING: str = "utf-8"

# --- Symbol snapshot exported by the host toolchain ---
SYMBOLS_FILE_NAME: str = "autojson.symbols.json"
SYMBOLS_INTERMEDIATE_DIR: str = "obj"
SYMBOLS_MSBUILD_PROPERTY: str = "AutoJsonSymbolsFile"
DOTNET_EXECUTABLE: str = "dotnet"
TOOLCHAIN_TIMEOUT_SECONDS: float = 120.0

# --- Marker ---
MARKER_TYPE_NAME: str = "AutoJsonSerializableAttribute"
MARKER_FALLBACK_NAMESPACE: str = "Fun.AutoJsonContextGenerator"

# --- Rendered artifact ---
TYPE_PLACEHOLDER: str = "{0}"
CONTEXT_CLASS_NAME: str = "AutoJsonContext"
CONTEXT_BASE_CLASS: str = "JsonSerializerContext"
SERIALIZATION_USING: str = "System.Text.Json.Serialization"
GLOBAL_ALIAS_PREFIX: str = "global::"

# --- Environment ---
ENV_RUNNING_FLAG: str = "AUTOJSON_RUNNING"
ENV_SYMBOLS_FILE: str = "AUTOJSON_SYMBOLS"
ENV_LOG_LEVEL: str = "AUTOJSON_LOG_LEVEL"

LOG_PREFIX: str = "[AutoJson]"
