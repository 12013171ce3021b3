from __future__ import annotations

from ...core.registry import SystemRegistry
from ..common import build_device


def run(args) -> None:
    device = build_device(args)
    registry = SystemRegistry.discover(device)
    for system in registry:
        tag = system.tag or "-"
        print(f"{tag:<12} {system.name}  ({system.media_path})")
    print(f"{len(registry)} systems")
