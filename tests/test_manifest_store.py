import json

import pytest

from theme_manager.core.errors import ManifestParseError
from theme_manager.core.manifest import (
    ComponentType,
    PathMapping,
    ThemeManifest,
    load_manifest,
    load_manifest_or_default,
    save_manifest,
)


def test_save_and_load(theme_dir):
    manifest = ThemeManifest()
    manifest.theme_info.name = "Neon"
    manifest.path_mappings.wallpapers.append(
        PathMapping(theme_path="Wallpapers/SystemWallpapers/Root.png", system_path="/mnt/SDCARD/bg.png")
    )
    path = save_manifest(theme_dir, manifest)
    assert path == theme_dir / "manifest.json"
    assert not (theme_dir / "manifest.json.tmp").exists()
    loaded = load_manifest(theme_dir)
    assert loaded == manifest


def test_json_shape(theme_dir):
    save_manifest(theme_dir, ThemeManifest(component_type=ComponentType.LEDS))
    data = json.loads((theme_dir / "manifest.json").read_text(encoding="utf-8"))
    assert data["component_type"] == "LEDs"
    assert set(data["path_mappings"]) == {"wallpapers", "icons", "overlays", "fonts", "settings"}
    assert data["accent_colors"] is None


def test_malformed_manifest(theme_dir):
    (theme_dir / "manifest.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ManifestParseError):
        load_manifest(theme_dir)
    fresh = load_manifest_or_default(theme_dir)
    assert fresh.theme_info.name == ""
    assert fresh.path_mappings.wallpapers == []


def test_schema_mismatch_is_a_parse_error(theme_dir):
    (theme_dir / "manifest.json").write_text(json.dumps({"path_mappings": {"wallpapers": 3}}), encoding="utf-8")
    with pytest.raises(ManifestParseError):
        load_manifest(theme_dir)


def test_missing_manifest(theme_dir):
    with pytest.raises(FileNotFoundError):
        load_manifest(theme_dir)
    assert load_manifest_or_default(theme_dir).path_mappings.wallpapers == []


def test_non_utf8_manifest_is_a_parse_error(theme_dir):
    (theme_dir / "manifest.json").write_bytes(b"\xff\xfe{}")
    with pytest.raises(ManifestParseError, match="UTF-8"):
        load_manifest(theme_dir)
    assert load_manifest_or_default(theme_dir).path_mappings.icons == []
