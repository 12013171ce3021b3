"""Fixed filesystem locations on the device.

Every destination the resolver or the import engine may write to is a named
field here, so nothing else in the package hardcodes an absolute path.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .logger import get_logger

log = get_logger(__name__)

DEFAULT_SDCARD = "/mnt/SDCARD"
DEFAULT_TOOLS_PLATFORM = "tg5040"


class DevicePaths(BaseModel):
    model_config = ConfigDict(frozen=True)

    root: Path
    tools_platform: str = DEFAULT_TOOLS_PLATFORM

    # Directory roots
    root_media: Path
    roms: Path
    roms_media: Path
    recently_played: Path
    tools_parent: Path
    tools: Path
    collections: Path
    overlays: Path
    system_res: Path
    user_data: Path

    # Wallpaper destinations
    root_background: Path
    root_media_background: Path
    recently_played_background: Path
    tools_background: Path
    collections_background: Path

    # Icon destinations
    recently_played_icon: Path
    tools_icon: Path
    collections_icon: Path

    # Fonts
    og_font: Path
    og_font_backup: Path
    next_font: Path
    next_font_backup: Path

    # Settings
    accent_settings: Path
    led_settings: Path

    import_lock: Path

    @classmethod
    def for_root(
        cls, root: Path | str, *, tools_platform: str = DEFAULT_TOOLS_PLATFORM
    ) -> "DevicePaths":
        root = Path(root).expanduser().absolute()
        root_media = root / ".media"
        roms = root / "Roms"
        recently_played = root / "Recently Played"
        tools_parent = root / "Tools"
        tools = tools_parent / tools_platform
        collections = root / "Collections"
        system_res = root / ".system" / "res"
        user_data = root / ".userdata" / "shared"
        return cls(
            root=root,
            tools_platform=tools_platform,
            root_media=root_media,
            roms=roms,
            roms_media=roms / ".media",
            recently_played=recently_played,
            tools_parent=tools_parent,
            tools=tools,
            collections=collections,
            overlays=root / "Overlays",
            system_res=system_res,
            user_data=user_data,
            root_background=root / "bg.png",
            root_media_background=root_media / "bg.png",
            recently_played_background=recently_played / ".media" / "bg.png",
            tools_background=tools / ".media" / "bg.png",
            collections_background=collections / ".media" / "bg.png",
            recently_played_icon=root_media / "Recently Played.png",
            tools_icon=tools_parent / ".media" / f"{tools_platform}.png",
            collections_icon=root_media / "Collections.png",
            og_font=system_res / "font2.ttf",
            og_font_backup=system_res / "font2.backup.ttf",
            next_font=system_res / "font1.ttf",
            next_font_backup=system_res / "font1.backup.ttf",
            accent_settings=user_data / "minuisettings.txt",
            led_settings=user_data / "ledsettings_brick.txt",
            import_lock=user_data / ".theme-manager.lock",
        )

    @classmethod
    def from_env(cls) -> "DevicePaths":
        """
        Build the device layout from the environment.

        Checks THEME_MANAGER_SDCARD for the card root and
        THEME_MANAGER_TOOLS_PLATFORM for the tools sub-directory name.
        """
        root = os.environ.get("THEME_MANAGER_SDCARD") or DEFAULT_SDCARD
        platform = (
            os.environ.get("THEME_MANAGER_TOOLS_PLATFORM") or DEFAULT_TOOLS_PLATFORM
        )
        log.debug(f"Using device root {root} (tools platform: {platform})")
        return cls.for_root(root, tools_platform=platform)

    def contains(self, path: Path | str) -> bool:
        try:
            Path(path).relative_to(self.root)
        except ValueError:
            return False
        return True

    # Derived per-item destinations

    def system_background(self, media_path: Path) -> Path:
        return media_path / "bg.png"

    def system_list_background(self, media_path: Path) -> Path:
        return media_path / "bglist.png"

    def system_icon(self, media_path: Path) -> Path:
        return media_path / "icon.png"

    def shared_system_icon(self, system_name: str) -> Path:
        return self.roms_media / f"{system_name}.png"

    def synthesized_media_path(self, system_name: str, tag: str) -> Path:
        return self.roms / f"{system_name} ({tag})" / ".media"

    def collection_background(self, collection_name: str) -> Path:
        return self.collections / collection_name / ".media" / "bg.png"

    def collection_icon(self, collection_name: str) -> Path:
        return self.collections / collection_name / ".media" / "icon.png"

    def tool_icon(self, tool_name: str) -> Path:
        return self.tools / tool_name / ".media" / "icon.png"

    def overlay_file(self, system_name: str, file_name: str) -> Path:
        return self.overlays / system_name / file_name
