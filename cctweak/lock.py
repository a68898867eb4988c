"""PID lock guarding apply/restore against concurrent runs."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .config import lock_file
from .errors import PatchLockError

logger = logging.getLogger(__name__)


def lock_holder(pid_file: Path) -> Optional[int]:
    """PID of the live process holding ``pid_file``, else ``None``.

    A stale file (unparseable or naming a dead process) is removed.
    """
    pid_file = Path(pid_file).expanduser()

    if not pid_file.exists():
        return None

    try:
        pid = int(pid_file.read_text().strip())
        # Check if process exists
        os.kill(pid, 0)
        return pid
    except (ValueError, ProcessLookupError):
        # PID file is stale
        pid_file.unlink(missing_ok=True)
        return None
    except PermissionError:
        # Process exists but belongs to someone else
        return pid


class PatchLock:
    """Context manager that holds the PID lock for the duration of a run.

    Example:
        >>> with PatchLock():
        ...     orchestrator.apply(config, install)
    """

    def __init__(self, pid_file: Optional[Path] = None) -> None:
        self.pid_file = Path(pid_file) if pid_file is not None else lock_file()
        self._held = False

    def acquire(self) -> None:
        holder = lock_holder(self.pid_file)
        if holder is not None and holder != os.getpid():
            raise PatchLockError(holder, str(self.pid_file))
        self.pid_file.parent.mkdir(parents=True, exist_ok=True)
        try:
            fd = os.open(self.pid_file, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o644)
        except FileExistsError:
            if holder == os.getpid():
                self._held = False
                return
            raise PatchLockError(lock_holder(self.pid_file) or -1, str(self.pid_file))
        with os.fdopen(fd, "w") as f:
            f.write(str(os.getpid()))
        self._held = True
        logger.debug(f"Acquired lock {self.pid_file}")

    def release(self) -> None:
        if self._held:
            self.pid_file.unlink(missing_ok=True)
            self._held = False
            logger.debug(f"Released lock {self.pid_file}")

    def __enter__(self) -> "PatchLock":
        self.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()
