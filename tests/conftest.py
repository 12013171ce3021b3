from pathlib import Path

import pytest

from theme_manager.core.device import DevicePaths
from theme_manager.core.registry import SystemRegistry

SYSTEM_DIRS = ["Game Boy (GB)", "Game Boy Advance (GBA)", "Super Nintendo (SFC)"]


def make_png(path: Path, color=(255, 0, 0), size=(32, 24)) -> Path:
    from PIL import Image

    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, format="PNG")
    return path


def write_text(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def sdcard(tmp_path) -> Path:
    root = tmp_path / "SDCARD"
    for name in SYSTEM_DIRS:
        (root / "Roms" / name / ".media").mkdir(parents=True)
    (root / "Roms" / ".media").mkdir(parents=True)
    (root / "Roms" / ".hidden").mkdir()
    (root / "Collections" / "Favorites").mkdir(parents=True)
    (root / "Tools" / "tg5040" / "Clock").mkdir(parents=True)
    (root / ".system" / "res").mkdir(parents=True)
    (root / ".userdata" / "shared").mkdir(parents=True)
    return root


@pytest.fixture
def device(sdcard) -> DevicePaths:
    return DevicePaths.for_root(sdcard)


@pytest.fixture
def registry(device) -> SystemRegistry:
    return SystemRegistry.discover(device)


@pytest.fixture
def theme_dir(tmp_path) -> Path:
    root = tmp_path / "packages" / "Neon.theme"
    root.mkdir(parents=True)
    return root
