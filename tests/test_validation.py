import pytest

from theme_manager.core.errors import ManifestValidationError
from theme_manager.core.manifest import (
    AccentColors,
    LEDSettings,
    PathMapping,
    ThemeManifest,
    collect_problems,
    validate_manifest,
)


def _manifest(**kwargs):
    manifest = ThemeManifest(**kwargs)
    manifest.theme_info.name = "Neon"
    return manifest


def test_valid_manifest_passes(device):
    manifest = _manifest(accent_colors=AccentColors(color1="#FF0000"), led_settings=LEDSettings())
    manifest.path_mappings.icons.append(
        PathMapping(theme_path="Icons/SystemIcons/Tools.png", system_path=str(device.tools_icon))
    )
    validate_manifest(manifest, device)


def test_reports_every_problem(device, tmp_path):
    manifest = ThemeManifest(accent_colors=AccentColors(color2="red"))
    manifest.path_mappings.wallpapers += [
        PathMapping(theme_path="a.png", system_path=str(device.root_background)),
        PathMapping(theme_path="a.png", system_path=str(device.root_media_background)),
        PathMapping(theme_path="../escape.png", system_path="relative/bg.png"),
        PathMapping(theme_path="b.png", system_path=str(tmp_path / "outside.png")),
    ]
    manifest.path_mappings.fonts["comic_sans"] = PathMapping(
        theme_path="Fonts/x.ttf", system_path=str(device.og_font)
    )
    problems = collect_problems(manifest, device)
    joined = "\n".join(problems)
    assert "theme_info.name is empty" in joined
    assert "duplicate theme path a.png" in joined
    assert "leaves the package" in joined
    assert "not absolute" in joined
    assert "outside device root" in joined
    assert "unknown slot 'comic_sans'" in joined
    assert "accents.color2" in joined
    with pytest.raises(ManifestValidationError) as info:
        validate_manifest(manifest, device)
    assert info.value.problems == problems


def test_led_ranges():
    leds = LEDSettings()
    leds.f2_key.brightness = 150
    leds.top_bar.effect = 0
    problems = collect_problems(_manifest(led_settings=leds))
    assert any("F2 key" in p and "brightness" in p for p in problems)
    assert any("Top bar" in p and "effect" in p for p in problems)


def test_device_check_optional(tmp_path):
    manifest = _manifest()
    manifest.path_mappings.overlays.append(
        PathMapping(theme_path="Overlays/GB/o.png", system_path=str(tmp_path / "o.png"))
    )
    assert collect_problems(manifest) == []
