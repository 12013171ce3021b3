"""
Data models for theme package manifests.

A manifest lives at ``<package>/manifest.json`` and records, per asset
category, where every file of the package is installed on the device,
together with accent and LED settings inlined from the package's text files.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

TOOL_NAME = "Theme Manager"
TOOL_VERSION = "1.0.0"
MANIFEST_FILENAME = "manifest.json"


def tool_version_string() -> str:
    return f"{TOOL_NAME} v{TOOL_VERSION}"


class Category(str, Enum):
    """Asset categories a manifest carries mappings or settings for."""

    WALLPAPERS = "wallpapers"
    ICONS = "icons"
    OVERLAYS = "overlays"
    FONTS = "fonts"
    ACCENTS = "accents"
    LEDS = "leds"


class ComponentType(str, Enum):
    """Package kinds, identified by the package directory's extension."""

    THEME = "Theme"
    WALLPAPERS = "Wallpapers"
    ICONS = "Icons"
    OVERLAYS = "Overlays"
    FONTS = "Fonts"
    ACCENTS = "Accents"
    LEDS = "LEDs"

    @classmethod
    def from_extension(cls, extension: str) -> Optional["ComponentType"]:
        return _EXTENSIONS.get(extension.lower())

    @property
    def categories(self) -> Tuple[Category, ...]:
        if self is ComponentType.THEME:
            return tuple(Category)
        return (_SINGLE_CATEGORY[self],)


_EXTENSIONS: Dict[str, ComponentType] = {
    ".theme": ComponentType.THEME,
    ".bg": ComponentType.WALLPAPERS,
    ".icon": ComponentType.ICONS,
    ".over": ComponentType.OVERLAYS,
    ".font": ComponentType.FONTS,
    ".acc": ComponentType.ACCENTS,
    ".led": ComponentType.LEDS,
}

_SINGLE_CATEGORY: Dict[ComponentType, Category] = {
    ComponentType.WALLPAPERS: Category.WALLPAPERS,
    ComponentType.ICONS: Category.ICONS,
    ComponentType.OVERLAYS: Category.OVERLAYS,
    ComponentType.FONTS: Category.FONTS,
    ComponentType.ACCENTS: Category.ACCENTS,
    ComponentType.LEDS: Category.LEDS,
}


class FontSlot(str, Enum):
    OG_FONT = "og_font"
    OG_BACKUP = "og_backup"
    NEXT_FONT = "next_font"
    NEXT_BACKUP = "next_backup"


class SettingsSlot(str, Enum):
    ACCENTS = "accents"
    LEDS = "leds"


class PathMapping(BaseModel):
    """One package file and the device location it is installed to."""

    theme_path: str = Field(..., description="Path relative to the package root")
    system_path: str = Field(..., description="Absolute destination on the device")
    metadata: Dict[str, str] = Field(
        default_factory=dict,
        description="Provenance: SystemName, SystemTag, WallpaperType, IconType, ...",
    )


class ThemeInfo(BaseModel):
    name: str = ""
    version: str = "1.0.0"
    author: str = "AuthorName"
    creation_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    exported_by: str = Field(default_factory=tool_version_string)


class WallpaperContent(BaseModel):
    present: bool = False
    count: int = 0


class IconContent(BaseModel):
    present: bool = False
    system_count: int = 0
    tool_count: int = 0
    collection_count: int = 0


class OverlayContent(BaseModel):
    present: bool = False
    systems: List[str] = Field(default_factory=list)


class FontContent(BaseModel):
    present: bool = False
    og_replaced: bool = False
    next_replaced: bool = False


class SettingsContent(BaseModel):
    accents_included: bool = False
    leds_included: bool = False


class Content(BaseModel):
    wallpapers: WallpaperContent = Field(default_factory=WallpaperContent)
    icons: IconContent = Field(default_factory=IconContent)
    overlays: OverlayContent = Field(default_factory=OverlayContent)
    fonts: FontContent = Field(default_factory=FontContent)
    settings: SettingsContent = Field(default_factory=SettingsContent)


class PathMappings(BaseModel):
    wallpapers: List[PathMapping] = Field(default_factory=list)
    icons: List[PathMapping] = Field(default_factory=list)
    overlays: List[PathMapping] = Field(default_factory=list)
    # Keyed by FontSlot / SettingsSlot values
    fonts: Dict[str, PathMapping] = Field(default_factory=dict)
    settings: Dict[str, PathMapping] = Field(default_factory=dict)


class AccentColors(BaseModel):
    """Six UI accent colors, stored exactly as written in the settings file."""

    color1: str = "0xFFFFFF"  # main UI color
    color2: str = "0x9B2257"  # primary accent
    color3: str = "0x1E2329"  # secondary accent
    color4: str = "0xFFFFFF"  # list text
    color5: str = "0x000000"  # selected list text
    color6: str = "0xFFFFFF"  # hint / info

    KEYS: ClassVar[Tuple[str, ...]] = (
        "color1", "color2", "color3", "color4", "color5", "color6"
    )


class LEDSetting(BaseModel):
    effect: int = 1
    color1: str = "0xFFFFFF"
    color2: str = "0x000000"
    speed: int = 1000
    brightness: int = 100
    trigger: int = 1
    inbrightness: int = 100


class LEDSettings(BaseModel):
    f1_key: LEDSetting = Field(default_factory=LEDSetting)
    f2_key: LEDSetting = Field(default_factory=LEDSetting)
    top_bar: LEDSetting = Field(default_factory=LEDSetting)
    lr_triggers: LEDSetting = Field(default_factory=LEDSetting)


# Section header in ledsettings_brick.txt -> LEDSettings field
LED_ZONES: Dict[str, str] = {
    "F1 key": "f1_key",
    "F2 key": "f2_key",
    "Top bar": "top_bar",
    "L&R triggers": "lr_triggers",
}


class ThemeManifest(BaseModel):
    theme_info: ThemeInfo = Field(default_factory=ThemeInfo)
    component_type: ComponentType = ComponentType.THEME
    content: Content = Field(default_factory=Content)
    path_mappings: PathMappings = Field(default_factory=PathMappings)
    accent_colors: Optional[AccentColors] = None
    led_settings: Optional[LEDSettings] = None
    preview_image: Optional[str] = None

    def mappings_for(self, category: Category) -> List[PathMapping]:
        """All file mappings of *category*, in manifest order."""
        pm = self.path_mappings
        if category is Category.WALLPAPERS:
            return list(pm.wallpapers)
        if category is Category.ICONS:
            return list(pm.icons)
        if category is Category.OVERLAYS:
            return list(pm.overlays)
        if category is Category.FONTS:
            return list(pm.fonts.values())
        if category is Category.ACCENTS:
            mapping = pm.settings.get(SettingsSlot.ACCENTS.value)
            return [mapping] if mapping else []
        mapping = pm.settings.get(SettingsSlot.LEDS.value)
        return [mapping] if mapping else []
