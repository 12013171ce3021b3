from __future__ import annotations

from pathlib import Path

from ...core.updater import ManifestUpdater
from ..common import build_device


def run(args) -> None:
    device = build_device(args)
    updater = ManifestUpdater(device, create_preview=not args.no_preview)
    result = updater.update(Path(args.package))
    for line in result.summary_lines():
        print(line)
    print(f"Manifest written to {result.manifest_path}")
