"""Atomic file replacement for the bundle, its backup and the settings file."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .errors import BundleIOError

logger = logging.getLogger(__name__)


# On Windows a running host process can hold cli.js open for a moment.
@retry(
    retry=retry_if_exception_type(PermissionError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
    reraise=True,
)
def _replace(src: Path, dst: Path) -> None:
    os.replace(src, dst)


def _temp_sibling(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    os.close(fd)
    return Path(name)


def atomic_write_text(path: Path, content: str) -> None:
    """Write ``content`` to a temp file beside ``path``, then rename it over."""
    path = Path(path)
    tmp_path: Optional[Path] = None
    try:
        tmp_path = _temp_sibling(path)
        with open(tmp_path, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        _replace(tmp_path, path)
    except OSError as e:
        raise BundleIOError(f"failed to write file ({e})", str(path)) from e
    finally:
        if tmp_path and tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def atomic_copy(src: Path, dst: Path) -> None:
    """Copy ``src`` to ``dst`` so ``dst`` is never left truncated."""
    src, dst = Path(src), Path(dst)
    if not src.is_file():
        raise BundleIOError("source file not found", str(src))
    tmp_path: Optional[Path] = None
    try:
        tmp_path = _temp_sibling(dst)
        shutil.copyfile(src, tmp_path)
        shutil.copymode(src, tmp_path)
        with open(tmp_path, "rb") as tmp:
            os.fsync(tmp.fileno())
        _replace(tmp_path, dst)
        logger.debug(f"Copied {src} -> {dst}")
    except OSError as e:
        raise BundleIOError(f"failed to copy {src} ({e})", str(dst)) from e
    finally:
        if tmp_path and tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def read_text(path: Path) -> str:
    """Read ``path`` without newline translation."""
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise BundleIOError(f"failed to read file ({e})", str(path)) from e
