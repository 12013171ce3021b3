from __future__ import annotations

import argparse
import logging
import sys

from ..core.errors import ThemeManagerError
from ..core.logger import set_level
from .commands import (
    import_theme as cmd_import,
    purge as cmd_purge,
    systems as cmd_systems,
    update as cmd_update,
    validate as cmd_validate,
)


def entrypoint():
    main()


def main() -> None:
    parser = argparse.ArgumentParser(description="Theme package manager for the device SD card")
    parser.add_argument(
        "--sdcard",
        type=str,
        default=None,
        help="SD card root (defaults to THEME_MANAGER_SDCARD or /mnt/SDCARD)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    u = sub.add_parser("update", help="Re-derive a package's manifest from its files")
    u.add_argument("package", type=str, help="Theme or component package directory")
    u.add_argument(
        "--no-preview",
        action="store_true",
        help="Do not generate preview.png when it is missing",
    )

    v = sub.add_parser("validate", help="Validate a package's manifest")
    v.add_argument("package", type=str, help="Theme or component package directory")

    i = sub.add_parser("import", help="Apply a package to the device")
    i.add_argument("package", type=str, help="Theme or component package directory")
    i.add_argument(
        "--dry-run",
        action="store_true",
        help="Re-derive and validate, then report copies without touching the device",
    )

    sub.add_parser("purge", help="Remove installed wallpapers and icons")
    sub.add_parser("systems", help="List systems discovered on the SD card")

    args = parser.parse_args()
    if args.verbose:
        set_level(logging.DEBUG)

    try:
        if args.command == "update":
            cmd_update.run(args)
        elif args.command == "validate":
            cmd_validate.run(args)
        elif args.command == "import":
            cmd_import.run(args)
        elif args.command == "purge":
            cmd_purge.run(args)
        elif args.command == "systems":
            cmd_systems.run(args)
    except (ThemeManagerError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
