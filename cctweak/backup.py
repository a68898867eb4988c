"""Pristine-copy management and version-drift detection.

Exactly one backup exists per installation.  Its source version is recorded
in the settings record (``ccVersion``); when the installed version differs
the stale backup is discarded and a fresh one is taken, because the new
release has overwritten any previously patched ``cli.js``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .config import BACKUP_NAME, ConfigStore
from .errors import BundleIOError
from .fileio import atomic_copy
from .installation import InstallationInfo, find_installation
from .models import TweakConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackupCheck:
    """What :meth:`BackupManager.ensure_backup` did.

    ``created`` is true whenever a copy was taken; ``was_updated`` only when
    an existing backup was replaced because the version changed.
    """

    created: bool
    was_updated: bool
    old_version: Optional[str]
    new_version: str


@dataclass(frozen=True)
class StartupCheckInfo:
    was_updated: bool
    old_version: Optional[str]
    new_version: str
    installation: InstallationInfo


class BackupManager:
    """Owns ``cli.js.backup`` and the version recorded alongside it.

    Args:
        store: Settings store holding the backup bookkeeping.
        path: Backup file location; defaults to ``cli.js.backup`` beside the
            settings file.
    """

    def __init__(self, store: ConfigStore, path: Optional[Path] = None) -> None:
        self.store = store
        self.path = Path(path) if path is not None else store.path.parent / BACKUP_NAME

    def has_backup(self) -> bool:
        return self.path.is_file()

    def _take_backup(self, install: InstallationInfo) -> None:
        logger.info(f"Backing up {install.cli_path} to {self.path}")
        atomic_copy(install.cli_path, self.path)

        def _record(config: TweakConfig) -> None:
            config.cc_version = install.version
            config.changes_applied = False

        self.store.update(_record)

    def ensure_backup(
        self, install: InstallationInfo, recorded_version: Optional[str]
    ) -> BackupCheck:
        """Make sure the backup matches the installed version."""
        if not self.has_backup():
            self._take_backup(install)
            return BackupCheck(True, False, recorded_version or None, install.version)

        if recorded_version != install.version:
            logger.info(
                f"Installed version changed ({recorded_version} -> {install.version}); "
                f"refreshing backup"
            )
            try:
                self.path.unlink()
            except OSError as e:
                raise BundleIOError(f"failed to remove stale backup ({e})", str(self.path)) from e
            self._take_backup(install)
            return BackupCheck(True, True, recorded_version or None, install.version)

        return BackupCheck(False, False, recorded_version, install.version)

    def restore(self, install: InstallationInfo) -> None:
        """Copy the backup over the live bundle."""
        if not self.has_backup():
            raise BundleIOError("no backup to restore from", str(self.path))
        logger.info(f"Restoring {install.cli_path} from {self.path}")
        atomic_copy(self.path, install.cli_path)
        self.store.set_changes_applied(False)


def startup_check(
    store: ConfigStore,
    finder: Callable[[TweakConfig], Optional[InstallationInfo]] = find_installation,
    backups: Optional[BackupManager] = None,
) -> Optional[StartupCheckInfo]:
    """Discover the installation and bring the backup up to date.

    Returns ``None`` when no installation can be found.
    """
    config = store.load()
    install = finder(config)
    if install is None:
        logger.warning("Cannot find the cli.js installation")
        return None

    backups = backups or BackupManager(store)
    check = backups.ensure_backup(install, config.cc_version or None)
    return StartupCheckInfo(
        was_updated=check.was_updated,
        old_version=check.old_version,
        new_version=check.new_version,
        installation=install,
    )
