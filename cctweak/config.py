"""Settings persistence: ``~/.cctweak/config.json``.

The settings record also carries the backup bookkeeping (``ccVersion``,
``changesApplied``).  :class:`ConfigStore` is passed explicitly to whatever
needs it; there is no module-level "last loaded" copy.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .defaults import builtin_themes, default_settings
from .errors import ConfigError
from .fileio import atomic_write_text
from .models import TweakConfig

logger = logging.getLogger(__name__)

# Load .env file from ~/.cctweak/.env or current directory
_env_paths = [
    Path.home() / ".cctweak" / ".env",
    Path.cwd() / ".env",
]
for _env_path in _env_paths:
    if _env_path.exists():
        load_dotenv(_env_path)
        break


def config_dir() -> Path:
    """Directory holding the settings file, the backup and the lock."""
    if env_dir := os.environ.get("CCTWEAK_CONFIG_DIR"):
        return Path(env_dir).expanduser()
    return Path.home() / ".cctweak"


CONFIG_NAME = "config.json"
BACKUP_NAME = "cli.js.backup"
LOCK_NAME = "cctweak.pid"


def config_file() -> Path:
    return config_dir() / CONFIG_NAME


def lock_file() -> Path:
    return config_dir() / LOCK_NAME


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _migrate(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Bring an older settings record up to the current shape."""
    defaults = default_settings().model_dump(by_alias=True)
    settings = {**defaults, **(raw.get("settings") or {})}

    # thinkingVerbs.punctuation became thinkingVerbs.format ("{}" + punctuation).
    verbs = dict(settings.get("thinkingVerbs") or {})
    if "punctuation" in verbs:
        punctuation = verbs.pop("punctuation")
        verbs.setdefault("format", "{}" + (punctuation or ""))
    settings["thinkingVerbs"] = {**defaults["thinkingVerbs"], **verbs}

    # Built-in themes gain colour channels in newer host releases.
    for builtin in builtin_themes():
        for theme in settings.get("themes") or []:
            if not isinstance(theme, dict):
                continue
            if theme.get("id") == builtin.id or theme.get("name") == builtin.name:
                colors = theme.setdefault("colors", {})
                for channel, value in builtin.colors.items():
                    colors.setdefault(channel, value)

    return {**raw, "settings": settings}


class ConfigStore:
    """Reads and writes the settings record.

    Args:
        path: Settings file; defaults to :func:`config_file`.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else config_file()

    def default(self) -> TweakConfig:
        return TweakConfig(
            cc_version="",
            cc_installation_dir=None,
            last_modified=now_iso(),
            changes_applied=False,
            settings=default_settings(),
        )

    def load(self) -> TweakConfig:
        """Load the record, or defaults when the file does not exist yet."""
        logger.debug(f"Reading config at {self.path}")
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return self.default()
        except (OSError, ValueError) as e:
            raise ConfigError(f"failed to read {self.path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError(f"{self.path}: expected a JSON object")
        try:
            return TweakConfig.model_validate(_migrate(raw))
        except ValidationError as e:
            raise ConfigError(f"{self.path}: invalid settings: {e}") from e

    def save(self, config: TweakConfig) -> TweakConfig:
        config = config.model_copy(update={"last_modified": now_iso()})
        logger.debug(f"Writing config at {self.path}")
        payload = json.dumps(
            config.model_dump(by_alias=True, mode="json"), indent=2, ensure_ascii=False
        )
        atomic_write_text(self.path, payload + "\n")
        return config

    def update(self, update_fn: Callable[[TweakConfig], None]) -> TweakConfig:
        """Load, let ``update_fn`` mutate the record, then save it."""
        config = self.load()
        update_fn(config)
        return self.save(config)

    def set_changes_applied(self, value: bool) -> TweakConfig:
        def _set(config: TweakConfig) -> None:
            config.changes_applied = value

        return self.update(_set)

    def save_settings(self, config: TweakConfig) -> TweakConfig:
        """Persist edited settings; previously applied patches are now stale."""
        return self.save(config.model_copy(update={"changes_applied": False}))
