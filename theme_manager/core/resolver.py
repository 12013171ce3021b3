"""
Map package files onto device destinations.

Rules are tried in order for every file and the first match wins:

1. fixed special names (``Root``, ``Recently Played``, ``Tools`` ...)
2. a parenthesised system tag looked up in the registry, with a
   synthesized destination when the tag is unknown to the registry
3. (icons only) the bare file name equal to a registry system name
4. otherwise the file is left unresolved and only logged
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .device import DevicePaths
from .logger import get_logger
from .manifest.models import ComponentType, FontSlot, PathMapping, SettingsSlot
from .registry import SystemRegistry, extract_tag, strip_tag

log = get_logger(__name__)


@dataclass(frozen=True)
class PackageLayout:
    """Package-relative folder that holds each category's files ("" = root)."""

    wallpapers: str = "Wallpapers"
    icons: str = "Icons"
    overlays: str = "Overlays"
    fonts: str = "Fonts"
    settings: str = "Settings"
    supports_legacy: bool = True

    @classmethod
    def for_component(cls, component: ComponentType) -> "PackageLayout":
        if component is ComponentType.THEME:
            return cls()
        return cls(
            wallpapers="",
            icons="",
            overlays="Systems",
            fonts="",
            settings="",
            supports_legacy=False,
        )


def join_rel(*parts: str) -> str:
    """Join package-relative parts with '/', skipping empty ones."""
    return "/".join(p for p in parts if p)


def list_pngs(directory: Path) -> List[Path]:
    """Sorted PNG files directly inside *directory*; missing directory -> []."""
    try:
        entries = list(directory.iterdir())
    except FileNotFoundError:
        return []
    return sorted(
        (e for e in entries if e.is_file() and e.suffix.lower() == ".png"),
        key=lambda p: p.name,
    )


def list_dirs(directory: Path) -> List[Path]:
    try:
        entries = list(directory.iterdir())
    except FileNotFoundError:
        return []
    return sorted(
        (e for e in entries if e.is_dir() and not e.name.startswith(".")),
        key=lambda p: p.name,
    )


FONT_FILES: Tuple[Tuple[FontSlot, str], ...] = (
    (FontSlot.OG_FONT, "OG.ttf"),
    (FontSlot.OG_BACKUP, "OG.backup.ttf"),
    (FontSlot.NEXT_FONT, "Next.ttf"),
    (FontSlot.NEXT_BACKUP, "Next.backup.ttf"),
)

LIST_SUFFIX = "-list"

SETTINGS_FILES: Tuple[Tuple[SettingsSlot, str], ...] = (
    (SettingsSlot.ACCENTS, "minuisettings.txt"),
    (SettingsSlot.LEDS, "ledsettings_brick.txt"),
)


class PathResolver:
    def __init__(
        self, device: DevicePaths, registry: Optional[SystemRegistry] = None
    ) -> None:
        self.device = device
        self.registry = registry

    # Wallpapers

    def _special_wallpapers(self) -> Dict[str, Tuple[Path, Dict[str, str]]]:
        d = self.device
        return {
            "Root": (d.root_background, {"SystemName": "Root", "WallpaperType": "Main"}),
            "Root-Media": (
                d.root_media_background,
                {"SystemName": "Root", "WallpaperType": "Media"},
            ),
            "Recently Played": (
                d.recently_played_background,
                {"SystemName": "Recently Played", "WallpaperType": "Media"},
            ),
            "Tools": (d.tools_background, {"SystemName": "Tools", "WallpaperType": "Media"}),
            "Collections": (
                d.collections_background,
                {"SystemName": "Collections", "WallpaperType": "Media"},
            ),
        }

    def _tagged_media(
        self, base_name: str, wallpaper_type: str
    ) -> Optional[Tuple[Path, Dict[str, str]]]:
        """Media directory for a tagged name, synthesized if the tag is unknown."""
        tag = extract_tag(base_name)
        if not tag or self.registry is None:
            return None
        system = self.registry.find_by_tag(tag)
        if system is not None:
            return system.media_path, {
                "SystemName": system.name,
                "SystemTag": tag,
                "WallpaperType": wallpaper_type,
            }
        name = strip_tag(base_name)
        log.debug(f"Tag '{tag}' matches no installed system; synthesizing destination")
        return self.device.synthesized_media_path(name, tag), {
            "SystemName": name,
            "SystemTag": tag,
            "WallpaperType": wallpaper_type,
        }

    def resolve_system_wallpaper(
        self, base_name: str
    ) -> Optional[Tuple[Path, Dict[str, str]]]:
        special = self._special_wallpapers().get(base_name)
        if special is not None:
            path, metadata = special
            return path, dict(metadata)

        tagged = self._tagged_media(base_name, "System")
        if tagged is None:
            return None
        media, metadata = tagged
        return self.device.system_background(media), metadata

    def resolve_list_wallpaper(
        self, base_name: str
    ) -> Optional[Tuple[Path, Dict[str, str]]]:
        """``<Name (TAG)>-list`` -> the system's ``bglist.png``."""
        if base_name.endswith(LIST_SUFFIX):
            base_name = base_name[: -len(LIST_SUFFIX)]
        else:
            log.debug(f"List wallpaper without '{LIST_SUFFIX}' suffix: {base_name}")
        tagged = self._tagged_media(base_name, "List")
        if tagged is None:
            return None
        media, metadata = tagged
        return self.device.system_list_background(media), metadata

    def _resolved_pngs(
        self, package_root: Path, rel_dir: str, resolve, kind: str
    ) -> List[PathMapping]:
        mappings = []
        for png in list_pngs(package_root / rel_dir):
            resolved = resolve(png.stem)
            theme_path = join_rel(rel_dir, png.name)
            if resolved is None:
                log.debug(f"Unresolved {kind} skipped: {theme_path}")
                continue
            system_path, metadata = resolved
            mappings.append(
                PathMapping(
                    theme_path=theme_path,
                    system_path=str(system_path),
                    metadata=metadata,
                )
            )
        return mappings

    def system_wallpapers(self, package_root: Path, base: str) -> List[PathMapping]:
        return self._resolved_pngs(
            package_root,
            join_rel(base, "SystemWallpapers"),
            self.resolve_system_wallpaper,
            "wallpaper",
        )

    def list_wallpapers(self, package_root: Path, base: str) -> List[PathMapping]:
        return self._resolved_pngs(
            package_root,
            join_rel(base, "ListWallpapers"),
            self.resolve_list_wallpaper,
            "list wallpaper",
        )

    def collection_wallpapers(self, package_root: Path, base: str) -> List[PathMapping]:
        rel_dir = join_rel(base, "CollectionWallpapers")
        return [
            PathMapping(
                theme_path=join_rel(rel_dir, png.name),
                system_path=str(self.device.collection_background(png.stem)),
                metadata={"CollectionName": png.stem, "WallpaperType": "Collection"},
            )
            for png in list_pngs(package_root / rel_dir)
        ]

    def wallpapers(self, package_root: Path, base: str = "Wallpapers") -> List[PathMapping]:
        return (
            self.system_wallpapers(package_root, base)
            + self.list_wallpapers(package_root, base)
            + self.collection_wallpapers(package_root, base)
        )

    # Icons

    def _special_icons(self) -> Dict[str, Tuple[Path, Dict[str, str]]]:
        d = self.device
        return {
            "Recently Played": (
                d.recently_played_icon,
                {"SystemName": "Recently Played", "SystemTag": "RECENT"},
            ),
            "Collections": (
                d.collections_icon,
                {"SystemName": "Collections", "SystemTag": "COLLECTIONS"},
            ),
            "Tools": (d.tools_icon, {"SystemName": "Tools", "SystemTag": "TOOLS"}),
        }

    def resolve_system_icon(self, base_name: str) -> Optional[Tuple[Path, Dict[str, str]]]:
        special = self._special_icons().get(base_name)
        if special is not None:
            path, metadata = special
            return path, dict(metadata, IconType="Special")

        if self.registry is None:
            return None
        tag = extract_tag(base_name)
        if tag:
            system = self.registry.find_by_tag(tag)
            if system is not None:
                return self.device.system_icon(system.media_path), {
                    "SystemName": system.name,
                    "SystemTag": tag,
                    "IconType": "System",
                }
            log.debug(f"Tag '{tag}' matches no installed system; synthesizing destination")
            return self.device.shared_system_icon(base_name), {
                "SystemName": strip_tag(base_name),
                "SystemTag": tag,
                "IconType": "System",
            }

        system = self.registry.find_by_name(base_name)
        if system is None:
            return None
        metadata = {"SystemName": system.name, "IconType": "System"}
        if system.tag:
            metadata["SystemTag"] = system.tag
        return self.device.system_icon(system.media_path), metadata

    def system_icons(self, package_root: Path, base: str) -> List[PathMapping]:
        return self._resolved_pngs(
            package_root, join_rel(base, "SystemIcons"), self.resolve_system_icon, "icon"
        )

    def tool_icons(self, package_root: Path, base: str) -> List[PathMapping]:
        rel_dir = join_rel(base, "ToolIcons")
        return [
            PathMapping(
                theme_path=join_rel(rel_dir, png.name),
                system_path=str(self.device.tool_icon(png.stem)),
                metadata={"ToolName": png.stem, "IconType": "Tool"},
            )
            for png in list_pngs(package_root / rel_dir)
        ]

    def collection_icons(self, package_root: Path, base: str) -> List[PathMapping]:
        rel_dir = join_rel(base, "CollectionIcons")
        return [
            PathMapping(
                theme_path=join_rel(rel_dir, png.name),
                system_path=str(self.device.collection_icon(png.stem)),
                metadata={"CollectionName": png.stem, "IconType": "Collection"},
            )
            for png in list_pngs(package_root / rel_dir)
        ]

    def icons(self, package_root: Path, base: str = "Icons") -> List[PathMapping]:
        return (
            self.system_icons(package_root, base)
            + self.tool_icons(package_root, base)
            + self.collection_icons(package_root, base)
        )

    # Overlays

    def overlays(self, package_root: Path, base: str = "Overlays") -> List[PathMapping]:
        mappings = []
        for system_dir in list_dirs(package_root / base):
            for png in list_pngs(system_dir):
                mappings.append(
                    PathMapping(
                        theme_path=join_rel(base, system_dir.name, png.name),
                        system_path=str(
                            self.device.overlay_file(system_dir.name, png.name)
                        ),
                        metadata={"SystemName": system_dir.name},
                    )
                )
        return mappings

    # Fonts and settings files

    def fonts(self, package_root: Path, base: str = "Fonts") -> Dict[str, PathMapping]:
        destinations = {
            FontSlot.OG_FONT: self.device.og_font,
            FontSlot.OG_BACKUP: self.device.og_font_backup,
            FontSlot.NEXT_FONT: self.device.next_font,
            FontSlot.NEXT_BACKUP: self.device.next_font_backup,
        }
        found: Dict[str, PathMapping] = {}
        for slot, file_name in FONT_FILES:
            theme_path = join_rel(base, file_name)
            if (package_root / theme_path).is_file():
                found[slot.value] = PathMapping(
                    theme_path=theme_path,
                    system_path=str(destinations[slot]),
                    metadata={"FontType": slot.value},
                )
        return found

    def settings_file(
        self, package_root: Path, slot: SettingsSlot, base: str = "Settings"
    ) -> Optional[Path]:
        """The package's settings text file for *slot*, if it exists."""
        for candidate_slot, file_name in SETTINGS_FILES:
            if candidate_slot is slot:
                path = package_root / join_rel(base, file_name)
                return path if path.is_file() else None
        return None
