from __future__ import annotations

from pathlib import Path

from ...core.manifest import load_manifest, validate_manifest
from ..common import build_device


def run(args) -> None:
    package = Path(args.package)
    manifest = load_manifest(package)
    validate_manifest(manifest, build_device(args))
    print(f"{package.name}: manifest OK")
