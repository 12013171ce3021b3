"""Structural checks run on a manifest before it is applied to a device."""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional

from ..device import DevicePaths
from ..errors import ManifestValidationError
from .models import (
    Category,
    FontSlot,
    LED_ZONES,
    LEDSetting,
    PathMapping,
    SettingsSlot,
    ThemeManifest,
)

COLOR_PATTERN = re.compile(r"^(#|0x)[0-9A-Fa-f]{6}$")

# (field, minimum, maximum); None means unbounded
LED_INT_RANGES = (
    ("effect", 1, None),
    ("speed", 0, None),
    ("brightness", 0, 100),
    ("trigger", 0, None),
    ("inbrightness", 0, 100),
)


def is_color(value: str) -> bool:
    return bool(COLOR_PATTERN.match(value))


def _check_theme_path(theme_path: str) -> Optional[str]:
    if not theme_path:
        return "empty theme path"
    posix = PurePosixPath(theme_path)
    if posix.is_absolute() or Path(theme_path).is_absolute():
        return f"theme path is absolute: {theme_path}"
    if ".." in posix.parts:
        return f"theme path leaves the package: {theme_path}"
    return None


def _check_mappings(
    label: str,
    mappings: Iterable[PathMapping],
    device: Optional[DevicePaths],
    problems: List[str],
) -> None:
    seen = set()
    for mapping in mappings:
        issue = _check_theme_path(mapping.theme_path)
        if issue:
            problems.append(f"{label}: {issue}")
        elif mapping.theme_path in seen:
            problems.append(f"{label}: duplicate theme path {mapping.theme_path}")
        seen.add(mapping.theme_path)

        if not Path(mapping.system_path).is_absolute():
            problems.append(f"{label}: system path is not absolute: {mapping.system_path}")
        elif device is not None and not device.contains(mapping.system_path):
            problems.append(
                f"{label}: system path outside device root: {mapping.system_path}"
            )


def _check_led(zone: str, setting: LEDSetting, problems: List[str]) -> None:
    for name in ("color1", "color2"):
        value = getattr(setting, name)
        if not is_color(value):
            problems.append(f"leds[{zone}].{name}: invalid color {value!r}")
    for name, low, high in LED_INT_RANGES:
        value = getattr(setting, name)
        if value < low or (high is not None and value > high):
            problems.append(f"leds[{zone}].{name}: {value} out of range")


def collect_problems(
    manifest: ThemeManifest, device: Optional[DevicePaths] = None
) -> List[str]:
    problems: List[str] = []
    if not manifest.theme_info.name.strip():
        problems.append("theme_info.name is empty")

    pm = manifest.path_mappings
    for category in (Category.WALLPAPERS, Category.ICONS, Category.OVERLAYS):
        _check_mappings(category.value, manifest.mappings_for(category), device, problems)

    font_slots = {slot.value for slot in FontSlot}
    for key in pm.fonts:
        if key not in font_slots:
            problems.append(f"fonts: unknown slot {key!r}")
    _check_mappings("fonts", pm.fonts.values(), device, problems)

    settings_slots = {slot.value for slot in SettingsSlot}
    for key in pm.settings:
        if key not in settings_slots:
            problems.append(f"settings: unknown slot {key!r}")
    _check_mappings("settings", pm.settings.values(), device, problems)

    if manifest.accent_colors is not None:
        for key in manifest.accent_colors.KEYS:
            value = getattr(manifest.accent_colors, key)
            if not is_color(value):
                problems.append(f"accents.{key}: invalid color {value!r}")

    if manifest.led_settings is not None:
        for zone, attr in LED_ZONES.items():
            _check_led(zone, getattr(manifest.led_settings, attr), problems)

    return problems


def validate_manifest(
    manifest: ThemeManifest, device: Optional[DevicePaths] = None
) -> None:
    """Raise ManifestValidationError listing every problem found, if any."""
    problems = collect_problems(manifest, device)
    if problems:
        raise ManifestValidationError(problems)
