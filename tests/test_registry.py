import pytest

from theme_manager.core.errors import RegistryError
from theme_manager.core.registry import (
    SystemRegistry,
    extract_tag,
    load_registry_or_none,
    strip_tag,
)


def test_extract_and_strip_tag():
    assert extract_tag("Game Boy (GB)") == "GB"
    assert extract_tag("Game Boy") == ""
    assert extract_tag("Arcade (FBN) (Extra)") == "FBN"
    assert strip_tag("Game Boy (GB)") == "Game Boy"


def test_discover_sorted_and_skips_hidden(registry, device):
    names = [s.name for s in registry]
    assert names == ["Game Boy (GB)", "Game Boy Advance (GBA)", "Super Nintendo (SFC)"]
    assert ".media" not in names and ".hidden" not in names
    gb = registry.find_by_tag("GB")
    assert gb is not None
    assert gb.media_path == device.roms / "Game Boy (GB)" / ".media"


def test_find_by_tag_is_case_sensitive(registry):
    assert registry.find_by_tag("gb") is None
    assert registry.find_by_tag("") is None
    assert registry.find_by_name("Super Nintendo (SFC)").tag == "SFC"


def test_discover_ignores_plain_files(registry, device):
    (device.roms / "readme.txt").write_text("x", encoding="utf-8")
    again = SystemRegistry.discover(device)
    assert len(again) == len(registry)


def test_missing_roms_dir_raises(tmp_path):
    from theme_manager.core.device import DevicePaths

    device = DevicePaths.for_root(tmp_path / "empty")
    with pytest.raises(RegistryError):
        SystemRegistry.discover(device)
    assert load_registry_or_none(device) is None
