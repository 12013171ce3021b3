from conftest import make_png

from theme_manager.core.legacy_layout import LegacyLayoutScanner


def test_fixed_legacy_wallpapers(theme_dir, device, registry):
    make_png(theme_dir / "Wallpapers" / "Root" / "bg.png")
    make_png(theme_dir / "Wallpapers" / "Root" / ".media" / "bg.png")
    make_png(theme_dir / "Wallpapers" / "Recently Played" / "bg.png")
    make_png(theme_dir / "Wallpapers" / "Collections" / "bg.png")
    mappings = {m.theme_path: m for m in LegacyLayoutScanner(device, registry).wallpapers(theme_dir)}
    assert set(mappings) == {
        "Wallpapers/Root/bg.png",
        "Wallpapers/Root/.media/bg.png",
        "Wallpapers/Recently Played/bg.png",
        "Wallpapers/Collections/bg.png",
    }
    assert mappings["Wallpapers/Root/.media/bg.png"].system_path == str(device.root_media_background)


def test_legacy_system_folders_need_matching_tag(theme_dir, device, registry):
    make_png(theme_dir / "Wallpapers" / "Systems" / "Game Boy (GB)" / "bg.png")
    make_png(theme_dir / "Wallpapers" / "Systems" / "Unknown (ZZZ)" / "bg.png")
    make_png(theme_dir / "Wallpapers" / "Systems" / "No Tag" / "bg.png")
    mappings = LegacyLayoutScanner(device, registry).wallpapers(theme_dir)
    assert [m.theme_path for m in mappings] == ["Wallpapers/Systems/Game Boy (GB)/bg.png"]
    assert mappings[0].system_path == str(device.roms / "Game Boy (GB)" / ".media" / "bg.png")
    assert mappings[0].metadata["SystemTag"] == "GB"


def test_legacy_icons(theme_dir, device, registry):
    make_png(theme_dir / "Icons" / "Tools" / "icon.png")
    make_png(theme_dir / "Icons" / "Systems" / "GBA stuff (GBA)" / "icon.png")
    mappings = {m.theme_path: m for m in LegacyLayoutScanner(device, registry).icons(theme_dir)}
    assert mappings["Icons/Tools/icon.png"].system_path == str(device.tools_icon)
    assert mappings["Icons/Systems/GBA stuff (GBA)/icon.png"].system_path == str(
        device.roms / "Game Boy Advance (GBA)" / ".media" / "icon.png"
    )


def test_without_registry_system_folders_are_skipped(theme_dir, device):
    make_png(theme_dir / "Wallpapers" / "Systems" / "Game Boy (GB)" / "bg.png")
    assert LegacyLayoutScanner(device, None).wallpapers(theme_dir) == []
