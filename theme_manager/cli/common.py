from __future__ import annotations

from ..core.device import DevicePaths


def build_device(args) -> DevicePaths:
    """Device layout from ``--sdcard`` when given, else from the environment."""
    if getattr(args, "sdcard", None):
        return DevicePaths.for_root(args.sdcard)
    return DevicePaths.from_env()
