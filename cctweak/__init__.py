"""cctweak: customize the Claude Code CLI bundle in place.

Themes, launch banner, welcome message, thinking verbs and the spinner are
rewritten inside ``cli.js`` after restoring it from a pristine backup.

Usage:
    from cctweak import ConfigStore, find_installation, apply_customization

    store = ConfigStore()
    config = store.load()
    install = find_installation(config)
    result = apply_customization(config, install, store=store)
"""

from .backup import BackupCheck, BackupManager, StartupCheckInfo, startup_check
from .bundle import AppliedEdit, Edit, LocationSpan, apply_edits
from .config import ConfigStore
from .errors import (
    BundleIOError,
    CctweakError,
    ConfigError,
    LocationNotFoundError,
    OverlappingEditsError,
    PatchLockError,
    SerializationError,
)
from .installation import InstallationInfo, find_installation
from .models import (
    LaunchTextConfig,
    PatchOutcome,
    PatchRunResult,
    RunStatus,
    Settings,
    Theme,
    ThinkingStyleConfig,
    ThinkingVerbsConfig,
    TweakConfig,
)
from .orchestrator import PatchContext, PatchOrchestrator, apply_customization, restore
from .trace import DiffTracer

__version__ = "0.1.0"

__all__ = [
    "AppliedEdit",
    "BackupCheck",
    "BackupManager",
    "BundleIOError",
    "CctweakError",
    "ConfigError",
    "ConfigStore",
    "DiffTracer",
    "Edit",
    "InstallationInfo",
    "LaunchTextConfig",
    "LocationNotFoundError",
    "LocationSpan",
    "OverlappingEditsError",
    "PatchContext",
    "PatchLockError",
    "PatchOrchestrator",
    "PatchOutcome",
    "PatchRunResult",
    "RunStatus",
    "SerializationError",
    "Settings",
    "StartupCheckInfo",
    "Theme",
    "ThinkingStyleConfig",
    "ThinkingVerbsConfig",
    "TweakConfig",
    "apply_customization",
    "apply_edits",
    "find_installation",
    "restore",
    "startup_check",
]
