"""Removal of the wallpapers and icons currently installed on the device."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .device import DevicePaths
from .file_ops import remove_file
from .logger import get_logger
from .registry import SystemRegistry
from .resolver import list_dirs

log = get_logger(__name__)


def installed_asset_paths(
    device: DevicePaths, registry: Optional[SystemRegistry] = None
) -> List[Path]:
    """Every fixed location an import may have put a wallpaper or icon."""
    paths = [
        device.root_background,
        device.root_media_background,
        device.recently_played_background,
        device.tools_background,
        device.collections_background,
        device.recently_played_icon,
        device.tools_icon,
        device.collections_icon,
    ]
    for system in registry or []:
        paths.append(device.system_background(system.media_path))
        paths.append(device.system_list_background(system.media_path))
        paths.append(device.system_icon(system.media_path))
    for collection in list_dirs(device.collections):
        paths.append(device.collection_background(collection.name))
        paths.append(device.collection_icon(collection.name))
    for tool in list_dirs(device.tools):
        paths.append(device.tool_icon(tool.name))
    try:
        shared = sorted(device.roms_media.glob("*.png"))
    except OSError:
        shared = []
    paths.extend(p for p in shared if p.name != "bg.png")
    return paths


def purge_installed_assets(
    device: DevicePaths, registry: Optional[SystemRegistry] = None
) -> List[Path]:
    """
    Delete installed wallpapers and icons. Missing files are ignored.

    Returns the files that were actually removed.
    """
    removed = []
    for path in installed_asset_paths(device, registry):
        try:
            if remove_file(path):
                removed.append(path)
        except OSError as exc:
            log.warning(f"Could not remove {path}: {exc}")
    log.info(f"Purged {len(removed)} installed wallpapers and icons")
    return removed
