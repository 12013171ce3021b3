"""
Readers and writers for the device's plain-text settings files.

``minuisettings.txt`` is flat ``key=value``; ``ledsettings_brick.txt`` is
INI-like with one ``[Zone]`` section per LED zone.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple

from .errors import SettingsParseError
from .file_ops import write_text_atomic
from .logger import get_logger
from .manifest.models import LED_ZONES, AccentColors, LEDSetting, LEDSettings

log = get_logger(__name__)

LED_INT_FIELDS = ("effect", "speed", "brightness", "trigger", "inbrightness")
LED_COLOR_FIELDS = ("color1", "color2")


def _split_pair(line: str) -> Tuple[str, str] | None:
    if "=" not in line:
        return None
    key, value = line.split("=", 1)
    return key.strip(), value.strip()


def parse_accent_text(text: str, source: Path | str = "<text>") -> AccentColors:
    values: Dict[str, str] = {}
    for raw in text.splitlines():
        pair = _split_pair(raw)
        if pair is None:
            continue
        key, value = pair
        if key in AccentColors.KEYS and value:
            values[key] = value
    if not values:
        raise SettingsParseError(source, "no accent colors (color1..color6) found")
    return AccentColors(**values)


def _read_settings_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SettingsParseError(path, f"not valid UTF-8 text ({exc.reason})") from exc


def read_accent_file(path: Path) -> AccentColors:
    return parse_accent_text(_read_settings_text(path), path)


def parse_led_text(text: str, source: Path | str = "<text>") -> LEDSettings:
    zones: Dict[str, Dict[str, object]] = {}
    current = None
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith(("#", ";")):
            continue
        if line.startswith("[") and line.endswith("]"):
            name = line[1:-1].strip()
            current = LED_ZONES.get(name)
            if current is None:
                log.debug(f"{source}: ignoring unknown LED section [{name}]")
            else:
                zones.setdefault(current, {})
            continue
        if current is None:
            continue
        pair = _split_pair(line)
        if pair is None:
            continue
        key, value = pair
        if key in LED_INT_FIELDS:
            try:
                zones[current][key] = int(value)
            except ValueError:
                raise SettingsParseError(
                    source, f"line {lineno}: {key} must be an integer, got {value!r}"
                ) from None
        elif key in LED_COLOR_FIELDS:
            zones[current][key] = value
    if not zones:
        raise SettingsParseError(source, "no LED zone sections found")
    return LEDSettings(**{attr: LEDSetting(**fields) for attr, fields in zones.items()})


def read_led_file(path: Path) -> LEDSettings:
    return parse_led_text(_read_settings_text(path), path)


def render_accent_settings(colors: AccentColors, existing: str = "") -> str:
    """Merge *colors* into *existing* file text, keeping unrelated lines in place."""
    pending = {key: getattr(colors, key) for key in AccentColors.KEYS}
    lines: List[str] = []
    for raw in existing.splitlines():
        pair = _split_pair(raw)
        if pair is not None and pair[0] in pending:
            key = pair[0]
            lines.append(f"{key}={pending.pop(key)}")
        elif pair is not None and pair[0] in AccentColors.KEYS:
            # duplicate key; first occurrence already rewritten
            continue
        else:
            lines.append(raw)
    for key in AccentColors.KEYS:
        if key in pending:
            lines.append(f"{key}={pending[key]}")
    return "\n".join(lines) + "\n"


def write_accent_settings(path: Path, colors: AccentColors) -> None:
    existing = ""
    if path.exists():
        existing = path.read_text(encoding="utf-8")
    write_text_atomic(path, render_accent_settings(colors, existing))
    log.info(f"Accent colors written to {path}")


def render_led_settings(leds: LEDSettings) -> str:
    blocks = []
    for name, attr in LED_ZONES.items():
        zone: LEDSetting = getattr(leds, attr)
        blocks.append(
            "\n".join(
                [
                    f"[{name}]",
                    f"effect={zone.effect}",
                    f"color1={zone.color1}",
                    f"color2={zone.color2}",
                    f"speed={zone.speed}",
                    f"brightness={zone.brightness}",
                    f"trigger={zone.trigger}",
                    "filename=",
                    f"inbrightness={zone.inbrightness}",
                ]
            )
        )
    return "\n\n".join(blocks) + "\n"


def write_led_settings(path: Path, leds: LEDSettings) -> None:
    write_text_atomic(path, render_led_settings(leds))
    log.info(f"LED settings written to {path}")
