"""Manifest schema, persistence and validation."""

from .models import (
    MANIFEST_FILENAME,
    LED_ZONES,
    AccentColors,
    Category,
    ComponentType,
    Content,
    FontSlot,
    LEDSetting,
    LEDSettings,
    PathMapping,
    PathMappings,
    SettingsSlot,
    ThemeInfo,
    ThemeManifest,
    tool_version_string,
)
from .store import load_manifest, load_manifest_or_default, manifest_path, save_manifest
from .validation import collect_problems, is_color, validate_manifest

__all__ = [
    "MANIFEST_FILENAME",
    "LED_ZONES",
    "AccentColors",
    "Category",
    "ComponentType",
    "Content",
    "FontSlot",
    "LEDSetting",
    "LEDSettings",
    "PathMapping",
    "PathMappings",
    "SettingsSlot",
    "ThemeInfo",
    "ThemeManifest",
    "tool_version_string",
    "load_manifest",
    "load_manifest_or_default",
    "manifest_path",
    "save_manifest",
    "collect_problems",
    "is_color",
    "validate_manifest",
]
