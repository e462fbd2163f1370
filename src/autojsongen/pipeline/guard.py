# topmark:header:start
#
#   project      : AutoJsonGen
#   file         : guard.py
#   file_relpath : src/autojsongen/pipeline/guard.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Recursion guard for generator runs.

A generator that writes into the project it reads from can make the host build
invoke it again while it is still running. Two layers stop that, checked in
order:

1. **In-process flag**: ``AUTOJSON_RUNNING=true`` in the run's environment
   mapping. The mapping is injected (the CLI passes ``os.environ``), and
   child processes spawned by the run inherit the flag.
2. **Lock file**: ``AutoJson.lock`` in the output directory, holding the UTC
   time the run started. It covers a fresh process spawned by the build.

Either layer being present means "skip": the caller reports success and does
no work. Removing the lock is best effort: a failure is logged, never raised.

Example:
    ```python
    with RecursionGuard(output_dir, environ) as guard:
        if not guard.acquired:
            return  # recursive invocation
        ...
    ```
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from autojsongen.config.logging import get_logger
from autojsongen.constants import ENV_RUNNING_FLAG, LOCK_FILE_NAME
from autojsongen.errors import ArtifactWriteError

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from pathlib import Path
    from types import TracebackType

    from autojsongen.config.logging import AutoJsonLogger

logger: AutoJsonLogger = get_logger(__name__)

RUNNING_FLAG_VALUE: str = "true"


class GuardState(str, Enum):
    """Result of a guard acquisition attempt."""

    PENDING = "pending"
    ACQUIRED = "acquired"
    BLOCKED_BY_FLAG = "blocked_by_flag"
    BLOCKED_BY_LOCK = "blocked_by_lock"


def lock_path_for(output_dir: Path) -> Path:
    return output_dir / LOCK_FILE_NAME


class RecursionGuard:
    """Dual-layer lock scoped to one output directory.

    Args:
        output_dir (Path): Directory receiving the artifact and the lock file.
        environ (MutableMapping[str, str]): Environment of the run; receives the
            in-process flag.
    """

    def __init__(self, output_dir: Path, environ: MutableMapping[str, str]) -> None:
        self.output_dir = output_dir
        self.environ = environ
        self.lock_path = lock_path_for(output_dir)
        self.state = GuardState.PENDING
        self._owns_lock = False
        self._owns_flag = False
        self._previous_flag: str | None = None

    @property
    def acquired(self) -> bool:
        return self.state is GuardState.ACQUIRED

    def acquire(self) -> GuardState:
        """Try both layers; create the lock file when neither blocks.

        Returns:
            GuardState: `ACQUIRED`, or the layer that detected recursion.

        Raises:
            ArtifactWriteError: If the output directory or lock file cannot be created.
        """
        if self.environ.get(ENV_RUNNING_FLAG) == RUNNING_FLAG_VALUE:
            logger.info("%s is set; recursive invocation", ENV_RUNNING_FLAG)
            self.state = GuardState.BLOCKED_BY_FLAG
            return self.state
        self._previous_flag = self.environ.get(ENV_RUNNING_FLAG)
        self.environ[ENV_RUNNING_FLAG] = RUNNING_FLAG_VALUE
        self._owns_flag = True

        stamp = datetime.now(timezone.utc).isoformat()
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            # Exclusive create: of two concurrent runs only one gets the lock.
            with self.lock_path.open("x", encoding="utf-8") as fh:
                fh.write(stamp)
        except FileExistsError:
            logger.info("Lock file %s exists; recursive invocation", self.lock_path)
            self.state = GuardState.BLOCKED_BY_LOCK
            return self.state
        except OSError as e:
            raise ArtifactWriteError(self.lock_path, str(e)) from e
        self._owns_lock = True
        logger.debug("Created lock file %s at %s", self.lock_path, stamp)
        self.state = GuardState.ACQUIRED
        return self.state

    def release(self) -> None:
        """Undo what `acquire` set up; lock deletion failures are logged only."""
        if self._owns_flag:
            self._owns_flag = False
            if self._previous_flag is None:
                self.environ.pop(ENV_RUNNING_FLAG, None)
            else:
                self.environ[ENV_RUNNING_FLAG] = self._previous_flag
        if not self._owns_lock:
            return
        self._owns_lock = False
        try:
            self.lock_path.unlink(missing_ok=True)
        except OSError as e:
            # A leftover lock makes later runs skip until it is removed by hand.
            logger.warning("Failed to delete lock file %s: %s", self.lock_path, e)
        else:
            logger.debug("Removed lock file %s", self.lock_path)

    def describe_lock(self) -> str | None:
        """Return the start timestamp recorded in an existing lock file, if readable."""
        try:
            return self.lock_path.read_text(encoding="utf-8").strip() or None
        except OSError:
            return None

    def __enter__(self) -> RecursionGuard:
        try:
            self.acquire()
        except BaseException:
            # __exit__ does not run when __enter__ raises.
            self.release()
            raise
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
