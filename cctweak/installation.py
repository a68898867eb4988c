"""Locating the host application's ``cli.js`` on disk."""

from __future__ import annotations

import json
import logging
import os
import re
import shutil
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .models import TweakConfig

logger = logging.getLogger(__name__)

PACKAGE_PATH = ("@anthropic-ai", "claude-code")


@dataclass(frozen=True)
class InstallationInfo:
    """A discovered installation: the bundle plus its package manifest."""

    cli_path: Path
    package_json_path: Path
    version: str

    @property
    def directory(self) -> Path:
        return self.cli_path.parent


def default_search_paths() -> List[Path]:
    """Package directories to probe, in priority order."""
    home = Path.home()
    search_paths = [
        # Local Claude installation
        home / ".claude" / "local" / "node_modules" / Path(*PACKAGE_PATH),
        # Volta
        home / "AppData" / "Local" / "Volta" / "tools" / "image" / "packages"
        / Path(*PACKAGE_PATH) / "node_modules" / Path(*PACKAGE_PATH),
        home / ".volta" / "tools" / "image" / "packages"
        / Path(*PACKAGE_PATH) / "lib" / "node_modules" / Path(*PACKAGE_PATH),
        # Global npm
        home / "AppData" / "Roaming" / "npm" / "node_modules" / Path(*PACKAGE_PATH),
        home / ".npm-global" / "lib" / "node_modules" / Path(*PACKAGE_PATH),
        home / ".local" / "lib" / "node_modules" / Path(*PACKAGE_PATH),
        # Yarn global
        home / "AppData" / "Local" / "Yarn" / "config" / "global" / "node_modules"
        / Path(*PACKAGE_PATH),
        home / ".config" / "yarn" / "global" / "node_modules" / Path(*PACKAGE_PATH),
        # pnpm global
        home / "AppData" / "Local" / "pnpm" / "global" / "5" / "node_modules"
        / Path(*PACKAGE_PATH),
        home / ".local" / "share" / "pnpm" / "global" / "5" / "node_modules"
        / Path(*PACKAGE_PATH),
        # Homebrew (macOS)
        Path("/opt/homebrew/lib/node_modules") / Path(*PACKAGE_PATH),
    ]

    # n
    if n_prefix := os.environ.get("N_PREFIX"):
        search_paths.append(Path(n_prefix) / "lib" / "node_modules" / Path(*PACKAGE_PATH))
    if os.name != "nt":
        search_paths.append(Path("/usr/local/lib/node_modules") / Path(*PACKAGE_PATH))

    # Also try the `claude` executable on PATH
    claude = shutil.which("claude")
    if claude:
        resolved = Path(claude).resolve()
        if resolved.suffix == ".js":
            search_paths.insert(0, resolved.parent)
        else:
            search_paths.append(
                resolved.parent.parent / "lib" / "node_modules" / Path(*PACKAGE_PATH)
            )

    return search_paths


def _read_version(package_json_path: Path) -> Optional[str]:
    try:
        manifest = json.loads(package_json_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.debug(f"Unreadable package.json at {package_json_path}: {e}")
        return None
    version = manifest.get("version") if isinstance(manifest, dict) else None
    return version if isinstance(version, str) and version else None


def probe(directory: Path) -> Optional[InstallationInfo]:
    """Return the installation in ``directory``, if it holds one."""
    directory = Path(directory).expanduser()
    cli_path = directory / "cli.js"
    package_json_path = directory / "package.json"
    if not cli_path.is_file():
        return None
    version = _read_version(package_json_path)
    if version is None:
        return None
    return InstallationInfo(cli_path, package_json_path, version)


def find_installation(
    config: Optional[TweakConfig] = None,
    search_paths: Optional[List[Path]] = None,
) -> Optional[InstallationInfo]:
    """Find the host installation; the configured directory is tried first."""
    candidates = list(search_paths) if search_paths is not None else default_search_paths()
    if config is not None and config.cc_installation_dir:
        candidates.insert(0, Path(config.cc_installation_dir))

    for directory in candidates:
        logger.debug(f"Searching for cli.js at {directory}")
        info = probe(directory)
        if info is not None:
            logger.info(f"Found cli.js {info.version} at {info.cli_path}")
            return info
    return None


def extract_version(content: str) -> Optional[str]:
    """Most common ``VERSION:"x.y.z"`` literal embedded in the bundle."""
    matches = re.findall(r'\bVERSION:"(\d+\.\d+\.\d+)"', content)
    if matches:
        return Counter(matches).most_common(1)[0][0]
    return None
