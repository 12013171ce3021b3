"""
Older package layout, still accepted when a theme has nothing in the
current ``SystemWallpapers``/``SystemIcons`` style folders.

    Wallpapers/Root/bg.png             Icons/Recently Played/icon.png
    Wallpapers/Root/.media/bg.png      Icons/Tools/icon.png
    Wallpapers/Recently Played/bg.png  Icons/Collections/icon.png
    Wallpapers/Tools/bg.png            Icons/Systems/<Name (TAG)>/icon.png
    Wallpapers/Collections/bg.png
    Wallpapers/Systems/<Name (TAG)>/bg.png

System folders only count when their tag matches an installed system.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .device import DevicePaths
from .logger import get_logger
from .manifest.models import PathMapping
from .registry import SystemRegistry, extract_tag
from .resolver import join_rel, list_dirs

log = get_logger(__name__)


class LegacyLayoutScanner:
    def __init__(
        self, device: DevicePaths, registry: Optional[SystemRegistry] = None
    ) -> None:
        self.device = device
        self.registry = registry

    def _fixed(
        self,
        package_root: Path,
        checks: List[Tuple[str, Path, Dict[str, str]]],
    ) -> List[PathMapping]:
        mappings = []
        for theme_path, system_path, metadata in checks:
            if (package_root / theme_path).is_file():
                log.debug(f"Found legacy asset {theme_path}")
                mappings.append(
                    PathMapping(
                        theme_path=theme_path,
                        system_path=str(system_path),
                        metadata=dict(metadata),
                    )
                )
        return mappings

    def _systems(
        self, package_root: Path, base: str, file_name: str, kind: Dict[str, str]
    ) -> List[PathMapping]:
        systems_rel = join_rel(base, "Systems")
        mappings = []
        for system_dir in list_dirs(package_root / systems_rel):
            tag = extract_tag(system_dir.name)
            if not tag:
                log.debug(f"Skipping legacy folder without system tag: {system_dir.name}")
                continue
            if not (system_dir / file_name).is_file():
                continue
            system = self.registry.find_by_tag(tag) if self.registry else None
            if system is None:
                log.debug(f"Legacy tag '{tag}' matches no installed system; skipped")
                continue
            media_file = system.media_path / file_name
            mappings.append(
                PathMapping(
                    theme_path=join_rel(systems_rel, system_dir.name, file_name),
                    system_path=str(media_file),
                    metadata=dict(kind, SystemName=system.name, SystemTag=tag),
                )
            )
        return mappings

    def wallpapers(self, package_root: Path, base: str = "Wallpapers") -> List[PathMapping]:
        d = self.device
        checks = [
            (
                join_rel(base, "Root", "bg.png"),
                d.root_background,
                {"SystemName": "Root", "WallpaperType": "Main"},
            ),
            (
                join_rel(base, "Root", ".media", "bg.png"),
                d.root_media_background,
                {"SystemName": "Root", "WallpaperType": "Media"},
            ),
            (
                join_rel(base, "Recently Played", "bg.png"),
                d.recently_played_background,
                {"SystemName": "Recently Played", "WallpaperType": "Media"},
            ),
            (
                join_rel(base, "Tools", "bg.png"),
                d.tools_background,
                {"SystemName": "Tools", "WallpaperType": "Media"},
            ),
            (
                join_rel(base, "Collections", "bg.png"),
                d.collections_background,
                {"SystemName": "Collections", "WallpaperType": "Media"},
            ),
        ]
        return self._fixed(package_root, checks) + self._systems(
            package_root, base, "bg.png", {"WallpaperType": "System"}
        )

    def icons(self, package_root: Path, base: str = "Icons") -> List[PathMapping]:
        d = self.device
        checks = [
            (
                join_rel(base, "Recently Played", "icon.png"),
                d.recently_played_icon,
                {"SystemName": "Recently Played", "SystemTag": "RECENT", "IconType": "Special"},
            ),
            (
                join_rel(base, "Tools", "icon.png"),
                d.tools_icon,
                {"SystemName": "Tools", "SystemTag": "TOOLS", "IconType": "Special"},
            ),
            (
                join_rel(base, "Collections", "icon.png"),
                d.collections_icon,
                {"SystemName": "Collections", "SystemTag": "COLLECTIONS", "IconType": "Special"},
            ),
        ]
        return self._fixed(package_root, checks) + self._systems(
            package_root, base, "icon.png", {"IconType": "System"}
        )
