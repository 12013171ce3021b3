import json
import sys

import pytest

from conftest import make_png, write_text

from theme_manager.cli import main as cli_main


def _run(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["theme-manager", *argv], raising=False)
    cli_main.main()


def test_cli_update_writes_manifest(theme_dir, sdcard, monkeypatch, capsys):
    make_png(theme_dir / "Wallpapers" / "SystemWallpapers" / "Root.png")
    _run(monkeypatch, "--sdcard", str(sdcard), "update", str(theme_dir), "--no-preview")
    out = capsys.readouterr().out
    assert "Wallpapers: 1" in out
    data = json.loads((theme_dir / "manifest.json").read_text(encoding="utf-8"))
    assert data["theme_info"]["name"] == "Neon"
    assert not (theme_dir / "preview.png").exists()


def test_cli_validate_reports_problems(theme_dir, sdcard, monkeypatch, capsys):
    write_text(
        theme_dir / "manifest.json",
        json.dumps({"theme_info": {"name": "Neon"}, "accent_colors": {"color1": "blue"}}),
    )
    with pytest.raises(SystemExit) as info:
        _run(monkeypatch, "--sdcard", str(sdcard), "validate", str(theme_dir))
    assert info.value.code == 1
    assert "accents.color1" in capsys.readouterr().err


def test_cli_validate_ok(theme_dir, sdcard, monkeypatch, capsys):
    write_text(theme_dir / "manifest.json", json.dumps({"theme_info": {"name": "Neon"}}))
    _run(monkeypatch, "--sdcard", str(sdcard), "validate", str(theme_dir))
    assert "manifest OK" in capsys.readouterr().out


def test_cli_validate_non_utf8_manifest(theme_dir, sdcard, monkeypatch, capsys):
    (theme_dir / "manifest.json").write_bytes(b"\xff\xfe{}")
    with pytest.raises(SystemExit) as info:
        _run(monkeypatch, "--sdcard", str(sdcard), "validate", str(theme_dir))
    assert info.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: ")
    assert "not valid UTF-8" in err


def test_cli_import_dry_run(theme_dir, sdcard, monkeypatch, capsys):
    make_png(theme_dir / "Wallpapers" / "SystemWallpapers" / "Root.png")
    _run(monkeypatch, "--sdcard", str(sdcard), "import", str(theme_dir), "--dry-run")
    out = capsys.readouterr().out
    assert "Would copy 1 files from Neon" in out
    assert not (sdcard / "bg.png").exists()


def test_cli_import(theme_dir, sdcard, monkeypatch, capsys):
    make_png(theme_dir / "Wallpapers" / "SystemWallpapers" / "Root.png")
    _run(monkeypatch, "--sdcard", str(sdcard), "import", str(theme_dir))
    assert "Applied Neon" in capsys.readouterr().out
    assert (sdcard / "bg.png").is_file()


def test_cli_missing_package(tmp_path, sdcard, monkeypatch, capsys):
    with pytest.raises(SystemExit):
        _run(monkeypatch, "--sdcard", str(sdcard), "import", str(tmp_path / "nope.theme"))
    assert "Package not found" in capsys.readouterr().err


def test_cli_purge_and_systems(sdcard, monkeypatch, capsys):
    make_png(sdcard / "bg.png")
    _run(monkeypatch, "--sdcard", str(sdcard), "purge")
    assert "1 files removed" in capsys.readouterr().out
    assert not (sdcard / "bg.png").exists()

    _run(monkeypatch, "--sdcard", str(sdcard), "systems")
    out = capsys.readouterr().out
    assert "GBA" in out and "Super Nintendo (SFC)" in out
    assert "3 systems" in out


def test_cli_sdcard_from_environment(sdcard, monkeypatch, capsys):
    monkeypatch.setenv("THEME_MANAGER_SDCARD", str(sdcard))
    _run(monkeypatch, "systems")
    assert "3 systems" in capsys.readouterr().out
