from conftest import make_png

from theme_manager.core.purge import installed_asset_paths, purge_installed_assets


def test_purge_tolerates_nothing_installed(device, registry):
    assert purge_installed_assets(device, registry) == []


def test_purge_removes_installed_assets(device, registry):
    installed = [
        device.root_background,
        device.root_media_background,
        device.recently_played_icon,
        device.tools_icon,
        device.roms / "Game Boy (GB)" / ".media" / "icon.png",
        device.roms / "Game Boy (GB)" / ".media" / "bg.png",
        device.roms / "Game Boy (GB)" / ".media" / "bglist.png",
        device.collections / "Favorites" / ".media" / "bg.png",
        device.tools / "Clock" / ".media" / "icon.png",
        device.roms_media / "Game Boy (GB).png",
    ]
    for path in installed:
        make_png(path)
    keep = make_png(device.roms_media / "bg.png")
    rom = device.roms / "Game Boy (GB)" / "tetris.gb"
    rom.write_bytes(b"rom")

    removed = purge_installed_assets(device, registry)

    assert sorted(removed) == sorted(installed)
    assert all(not p.exists() for p in installed)
    assert keep.exists()
    assert rom.exists()


def test_installed_paths_without_registry(device):
    paths = installed_asset_paths(device, None)
    assert device.root_background in paths
    assert device.roms / "Game Boy (GB)" / ".media" / "bg.png" not in paths
