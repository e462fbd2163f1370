# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : writer.py
#   file_relpath : src/autojsongen/pipeline/writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Write the artifact only when its content changed.

Rewriting an identical file would bump its timestamp, invalidate the host
build's incremental state, and could retrigger the build that invoked us.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from autojsongen.config.logging import get_logger
from autojsongen.constants import ARTIFACT_ENCODING
from autojsongen.errors import ArtifactWriteError

if TYPE_CHECKING:
    from pathlib import Path

    from autojsongen.config.logging import AutoJsonLogger

logger: AutoJsonLogger = get_logger(__name__)


class WriteStatus(str, Enum):
    """Outcome of `write_if_changed`."""

    WRITTEN = "written"
    UNCHANGED = "unchanged"


def read_existing(path: Path) -> str | None:
    """Return the current artifact text, or None if there is none.

    A UTF-8 BOM (written by some host tools) is dropped; newlines are kept as is.
    Undecodable files count as absent so they get rewritten.

    Raises:
        ArtifactWriteError: If the file exists but cannot be read.
    """
    if not path.is_file():
        return None
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as fh:
            return fh.read()
    except UnicodeDecodeError as e:
        logger.warning("Cannot decode existing artifact %s (%s); rewriting it", path, e)
        return None
    except OSError as e:
        raise ArtifactWriteError(path, f"cannot read existing artifact: {e}") from e


def write_if_changed(path: Path, text: str) -> WriteStatus:
    """Write ``text`` to ``path`` unless the file already holds exactly ``text``.

    Args:
        path (Path): Artifact path; parent directories are created as needed.
        text (str): Rendered artifact.

    Returns:
        WriteStatus: `UNCHANGED` if nothing was written, `WRITTEN` otherwise.

    Raises:
        ArtifactWriteError: If the directory or file cannot be written.
    """
    if read_existing(path) == text:
        logger.info("%s is up to date", path)
        return WriteStatus.UNCHANGED

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding=ARTIFACT_ENCODING, newline="") as fh:
            fh.write(text)
    except OSError as e:
        raise ArtifactWriteError(path, str(e)) from e
    logger.info("Wrote %s (%d bytes)", path, len(text.encode(ARTIFACT_ENCODING)))
    return WriteStatus.WRITTEN
