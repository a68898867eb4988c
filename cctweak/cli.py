"""CLI entrypoint for cctweak.

Usage:
    cctweak find                # Locate the cli.js installation
    cctweak status              # Backup, version and patch-point status
    cctweak apply [--debug]     # Apply the saved settings to cli.js
    cctweak restore             # Put the original cli.js back
    cctweak config [--path]     # Show the settings file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .backup import BackupManager, startup_check
from .config import CONFIG_NAME, LOCK_NAME, ConfigStore
from .errors import CctweakError
from .fileio import read_text
from .installation import extract_version, find_installation
from .lock import PatchLock
from .models import RunStatus
from .orchestrator import apply_customization, restore
from .patches import inspect_bundle
from .trace import DiffTracer, is_debug

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose or is_debug() else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _store(args: argparse.Namespace) -> ConfigStore:
    if args.config_dir:
        return ConfigStore(Path(args.config_dir).expanduser() / CONFIG_NAME)
    return ConfigStore()


def run_find(args: argparse.Namespace) -> int:
    """Print where the installation is."""
    store = _store(args)
    install = find_installation(store.load())
    if install is None:
        print("Error: cli.js installation not found", file=sys.stderr)
        return 1
    print(f"cli.js:       {install.cli_path}")
    print(f"package.json: {install.package_json_path}")
    print(f"version:      {install.version}")
    return 0


def run_status(args: argparse.Namespace) -> int:
    """Show backup state and which patch points the bundle exposes."""
    store = _store(args)
    try:
        config = store.load()
    except CctweakError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    install = find_installation(config)
    if install is None:
        print("Error: cli.js installation not found", file=sys.stderr)
        return 1

    backups = BackupManager(store)
    print(f"Installation:     {install.cli_path} ({install.version})")
    print(f"Backup:           {backups.path if backups.has_backup() else 'none'}")
    print(f"Recorded version: {config.cc_version or 'none'}")
    print(f"Changes applied:  {'yes' if config.changes_applied else 'no'}")

    # Inspect the pristine copy when there is one; the live file may be patched.
    source = backups.path if backups.has_backup() else install.cli_path
    try:
        content = read_text(source)
    except CctweakError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    embedded = extract_version(content)
    if embedded and embedded != install.version:
        print(f"Warning: {source} embeds version {embedded}", file=sys.stderr)

    print("\nPatch points:")
    for point, found in inspect_bundle(content).items():
        print(f"  {'ok' if found else 'MISSING':<8}{point}")
    return 0


def run_apply(args: argparse.Namespace) -> int:
    """Apply the saved settings to cli.js."""
    store = _store(args)
    try:
        # Backup refresh and patching must not interleave with another run.
        with PatchLock(store.path.parent / LOCK_NAME):
            info = startup_check(store, finder=find_installation)
            if info is None:
                print("Error: cli.js installation not found", file=sys.stderr)
                return 1
            if info.was_updated:
                print(
                    f"Installation updated from {info.old_version} to {info.new_version}; "
                    f"backup refreshed."
                )
            config = store.load()
            tracer = DiffTracer(enabled=args.debug or is_debug())
            result = apply_customization(config, info.installation, store=store, tracer=tracer)
    except CctweakError as e:
        logger.error(f"Apply failed: {e}", exc_info=args.verbose)
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    for outcome in result.outcomes:
        if outcome.skipped:
            mark = "-"
        elif outcome.applied:
            mark = "+"
        else:
            mark = "!"
        line = f"  {mark} {outcome.group}/{outcome.point}"
        if outcome.reason:
            line += f": {outcome.reason}"
        print(line)

    if result.status == RunStatus.FAILED:
        print(f"\nError: {result.error}", file=sys.stderr)
        return 1
    if result.status == RunStatus.PARTIALLY_APPLIED:
        print(f"\nPartially applied ({len(result.failed_points())} point(s) not found).")
        return 1
    print(f"\nCustomizations applied to {info.installation.cli_path}")
    return 0


def run_restore(args: argparse.Namespace) -> int:
    """Restore the original cli.js from the backup."""
    store = _store(args)
    try:
        install = find_installation(store.load())
    except CctweakError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if install is None:
        print("Error: cli.js installation not found", file=sys.stderr)
        return 1
    if not restore(install, store=store):
        print("Error: restore failed", file=sys.stderr)
        return 1
    print(f"Restored {install.cli_path} from backup")
    return 0


def run_config(args: argparse.Namespace) -> int:
    """Print the settings file (or defaults if there is none yet)."""
    store = _store(args)
    if args.path:
        print(store.path)
        return 0
    try:
        config = store.load()
    except CctweakError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(json.dumps(config.model_dump(by_alias=True, mode="json"), indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cctweak",
        description="Customize the Claude Code CLI bundle (themes, banner, verbs, spinner)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check that every patch point can be found
  cctweak status

  # Apply settings from ~/.cctweak/config.json, showing each edit
  cctweak apply --debug

  # Undo everything
  cctweak restore
""",
    )
    parser.add_argument(
        "--config-dir",
        help="Settings directory (default: $CCTWEAK_CONFIG_DIR or ~/.cctweak)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("find", help="Locate the cli.js installation")
    subparsers.add_parser("status", help="Show backup and patch-point status")

    apply_parser = subparsers.add_parser("apply", help="Apply saved settings to cli.js")
    apply_parser.add_argument(
        "--debug",
        action="store_true",
        help="Log before/after context for every edit",
    )

    subparsers.add_parser("restore", help="Restore cli.js from the backup")

    config_parser = subparsers.add_parser("config", help="Show the settings file")
    config_parser.add_argument(
        "--path",
        action="store_true",
        help="Print only the settings file location",
    )
    return parser


COMMANDS = {
    "find": run_find,
    "status": run_status,
    "apply": run_apply,
    "restore": run_restore,
    "config": run_config,
}


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point for cctweak."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose or getattr(args, "debug", False))
    sys.exit(COMMANDS[args.command](args))


if __name__ == "__main__":
    main()
