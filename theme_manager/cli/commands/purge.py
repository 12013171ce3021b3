from __future__ import annotations

from ...core.purge import purge_installed_assets
from ...core.registry import SystemRegistry
from ..common import build_device


def run(args) -> None:
    device = build_device(args)
    removed = purge_installed_assets(device, SystemRegistry.discover(device))
    for path in removed:
        print(f"Removed {path}")
    print(f"{len(removed)} files removed")
