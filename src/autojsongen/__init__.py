# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : __init__.py
#   file_relpath : src/autojsongen/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""AutoJsonGen package.

AutoJsonGen is a build-time generator for ahead-of-time JSON serialization
contexts. It scans a compiled program's type graph for types carrying the
``AutoJsonSerializableAttribute`` marker and emits a ``JsonSerializerContext``
declaration that registers them, together with their collection shapes.
"""

from __future__ import annotations
