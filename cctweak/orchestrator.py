"""Patch orchestration: restore, read, apply every point, write, mark.

Default step chain::

    RestoreStep → ReadStep → ApplyGroupStep(themes) → ApplyGroupStep(launchText)
    → ApplyGroupStep(thinkingVerbs) → ApplyGroupStep(thinkingStyle)
    → WriteStep → MarkAppliedStep

Every run starts from the pristine backup, so applying the same settings
twice produces the same bundle.  A point that cannot be located is recorded
and skipped; only IO failures abort the run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, runtime_checkable

from .ascii_art import render_figlet
from .backup import BackupManager
from .bundle import AppliedEdit, apply_edits
from .config import LOCK_NAME, ConfigStore
from .errors import (
    BundleIOError,
    ConfigError,
    InvalidEditError,
    LocationNotFoundError,
    OverlappingEditsError,
    SerializationError,
)
from .fileio import atomic_write_text, read_text
from .installation import InstallationInfo
from .lock import PatchLock
from .models import PatchOutcome, PatchRunResult, RunStatus, TweakConfig
from .patches import DEFAULT_POINTS, GROUP_ORDER, BannerRenderer, PatchPoint
from .patches._scan import ScanError
from .trace import DiffTracer

logger = logging.getLogger(__name__)

# Failures that cost one point, never the run.
POINT_ERRORS = (
    LocationNotFoundError,
    SerializationError,
    OverlappingEditsError,
    ScanError,
    InvalidEditError,
)


@dataclass
class PatchContext:
    """Mutable state passed through each step of a single patch run.

    Attributes:
        config: Settings to apply.
        install: Installation being patched.
        content: Bundle text; set by :class:`ReadStep`, updated per point.
        outcomes: One entry per point, appended by :class:`ApplyGroupStep`.
        applied_edits: Every splice performed, in application order.
        written: Set by :class:`WriteStep`.
        saved_config: Set by :class:`MarkAppliedStep`.
    """

    config: TweakConfig
    install: InstallationInfo
    content: Optional[str] = None
    outcomes: List[PatchOutcome] = field(default_factory=list)
    applied_edits: List[AppliedEdit] = field(default_factory=list)
    written: bool = False
    saved_config: Optional[TweakConfig] = None


@runtime_checkable
class PatchStep(Protocol):
    def __call__(self, ctx: PatchContext) -> PatchContext: ...


class RestoreStep:
    """Copies the backup over the live bundle.

    **Reads:** ``install``
    """

    def __init__(self, backups: BackupManager) -> None:
        self.backups = backups

    def __call__(self, ctx: PatchContext) -> PatchContext:
        self.backups.restore(ctx.install)
        return ctx


class ReadStep:
    """**Reads:** ``install`` **Writes:** ``ctx.content``"""

    def __call__(self, ctx: PatchContext) -> PatchContext:
        ctx.content = read_text(ctx.install.cli_path)
        return ctx


class ApplyGroupStep:
    """Applies every point of one settings group to the buffer.

    Each point's edits are computed against the buffer as the previous point
    left it and spliced in one pass.  A point that fails leaves the buffer
    exactly as it found it.

    **Reads:** ``config``, ``content``

    **Writes:** ``ctx.content``, ``ctx.outcomes``, ``ctx.applied_edits``
    """

    def __init__(
        self,
        group: str,
        points: List[PatchPoint],
        render_banner: BannerRenderer = render_figlet,
        tracer: Optional[DiffTracer] = None,
    ) -> None:
        self.group = group
        self.points = [p for p in points if p.group == group]
        self.render_banner = render_banner
        self.tracer = tracer

    def __call__(self, ctx: PatchContext) -> PatchContext:
        if ctx.content is None:
            raise BundleIOError("bundle was not read before applying patches")
        settings = ctx.config.settings
        for point in self.points:
            if not point.enabled(settings):
                logger.debug(f"{point.name}: nothing to apply")
                ctx.outcomes.append(
                    PatchOutcome(point=point.name, group=self.group, applied=True, skipped=True)
                )
                continue
            try:
                edits = point.build(ctx.content, settings, self.render_banner)
                content, applied = apply_edits(ctx.content, edits, point.name, self.tracer)
            except POINT_ERRORS as e:
                logger.warning(f"Patch {point.name} not applied: {e}")
                ctx.outcomes.append(
                    PatchOutcome(point=point.name, group=self.group, applied=False, reason=str(e))
                )
                continue
            ctx.content = content
            ctx.applied_edits.extend(applied)
            ctx.outcomes.append(PatchOutcome(point=point.name, group=self.group, applied=True))
        return ctx


class WriteStep:
    """Writes the patched buffer over the live bundle in one atomic replace.

    **Reads:** ``content``, ``install`` **Writes:** ``ctx.written``
    """

    def __call__(self, ctx: PatchContext) -> PatchContext:
        if ctx.content is None:
            raise BundleIOError("nothing to write", str(ctx.install.cli_path))
        atomic_write_text(ctx.install.cli_path, ctx.content)
        ctx.written = True
        logger.info(f"Wrote patched bundle to {ctx.install.cli_path}")
        return ctx


class MarkAppliedStep:
    """**Reads:** ``written`` **Writes:** ``ctx.saved_config``"""

    def __init__(self, store: ConfigStore) -> None:
        self.store = store

    def __call__(self, ctx: PatchContext) -> PatchContext:
        if ctx.written:
            ctx.saved_config = self.store.set_changes_applied(True)
        return ctx


class PatchOrchestrator:
    """Runs the patch step chain for one set of settings.

    Args:
        backups: Backup manager the run restores from.
        store: Settings store updated once the bundle is written.
        tracer: Receives every applied edit; created from ``CCTWEAK_DEBUG``
            when *None*.
        render_banner: Generator for figlet launch text.
        points: Customization points to apply (default: all of them).
        steps: Custom step list; overrides :meth:`_default_steps`.
        lock: Held for the duration of :meth:`apply` when given.
    """

    def __init__(
        self,
        backups: BackupManager,
        store: ConfigStore,
        tracer: Optional[DiffTracer] = None,
        render_banner: BannerRenderer = render_figlet,
        points: Optional[List[PatchPoint]] = None,
        steps: Optional[List[PatchStep]] = None,
        lock: Optional[PatchLock] = None,
    ) -> None:
        self.backups = backups
        self.store = store
        self.tracer = tracer if tracer is not None else DiffTracer()
        self.render_banner = render_banner
        self.points = list(points) if points is not None else list(DEFAULT_POINTS)
        self.lock = lock
        self.steps: List[PatchStep] = steps if steps is not None else self._default_steps()

    def _default_steps(self) -> List[PatchStep]:
        steps: List[PatchStep] = [RestoreStep(self.backups), ReadStep()]
        steps.extend(
            ApplyGroupStep(group, self.points, self.render_banner, self.tracer)
            for group in GROUP_ORDER
        )
        steps.extend([WriteStep(), MarkAppliedStep(self.store)])
        return steps

    def apply(self, config: TweakConfig, install: InstallationInfo) -> PatchRunResult:
        """Apply ``config`` to ``install``.

        Raises:
            PatchLockError: If another run holds the lock.
        """
        if self.lock is not None:
            with self.lock:
                return self._run(config, install)
        return self._run(config, install)

    def _run(self, config: TweakConfig, install: InstallationInfo) -> PatchRunResult:
        ctx = PatchContext(config=config, install=install)
        error: Optional[str] = None
        try:
            for step in self.steps:
                ctx = step(ctx)
        except (BundleIOError, ConfigError) as e:
            logger.error(f"Patch run aborted: {e}")
            error = str(e)

        # Once the bundle is written the run is reported by its outcomes.
        if error is not None and not ctx.written:
            status = RunStatus.FAILED
        elif all(o.applied for o in ctx.outcomes):
            status = RunStatus.ALL_APPLIED
        else:
            status = RunStatus.PARTIALLY_APPLIED

        result = PatchRunResult(
            status=status,
            outcomes=ctx.outcomes,
            written=ctx.written,
            error=error,
            config=ctx.saved_config,
        )
        logger.info(
            f"Patch run {status.value}: "
            f"{sum(1 for o in ctx.outcomes if o.applied)}/{len(ctx.outcomes)} points applied"
        )
        return result


def apply_customization(
    config: TweakConfig,
    install: InstallationInfo,
    store: Optional[ConfigStore] = None,
    tracer: Optional[DiffTracer] = None,
) -> PatchRunResult:
    """Apply ``config`` to the installation, backing it up first if needed.

    The backup check and the patch run share one lock.  The recorded version
    comes from the saved record, not from ``config``, which may predate the
    last backup.

    Raises:
        PatchLockError: If another run holds the lock.
    """
    store = store or ConfigStore()
    backups = BackupManager(store)
    with PatchLock(store.path.parent / LOCK_NAME):
        try:
            backups.ensure_backup(install, store.load().cc_version or None)
        except (BundleIOError, ConfigError) as e:
            logger.error(f"Cannot back up {install.cli_path}: {e}")
            return PatchRunResult(status=RunStatus.FAILED, error=str(e))
        orchestrator = PatchOrchestrator(backups, store, tracer=tracer)
        return orchestrator.apply(config, install)


def restore(install: InstallationInfo, store: Optional[ConfigStore] = None) -> bool:
    """Put the pristine bundle back.  Returns ``False`` if that failed."""
    store = store or ConfigStore()
    try:
        with PatchLock(store.path.parent / LOCK_NAME):
            BackupManager(store).restore(install)
    except (BundleIOError, ConfigError) as e:
        logger.error(f"Restore failed: {e}")
        return False
    return True
