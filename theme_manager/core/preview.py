from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from .logger import get_logger

log = get_logger(__name__)

PREVIEW_FILENAME = "preview.png"
PREVIEW_MAX_SIZE = (640, 480)
PREVIEW_SOURCES = ("Recently Played.png", "Root.png")


def ensure_preview(package_root: Path, wallpaper_dirs: Iterable[Path]) -> Optional[str]:
    """
    Make sure ``preview.png`` exists in the package.

    An existing preview is kept as is. Otherwise the first of the
    ``Recently Played`` / ``Root`` wallpapers found in *wallpaper_dirs* is
    scaled down into one. Returns the preview's package-relative name, or
    None when there is no preview and nothing to render it from.
    """
    target = package_root / PREVIEW_FILENAME
    if target.is_file():
        return PREVIEW_FILENAME

    dirs = list(wallpaper_dirs)
    for source_name in PREVIEW_SOURCES:
        for directory in dirs:
            source = directory / source_name
            if source.is_file() and render_preview(source, target):
                return PREVIEW_FILENAME
    return None


def render_preview(source: Path, target: Path) -> bool:
    from PIL import Image, UnidentifiedImageError  # type: ignore

    try:
        with Image.open(source) as img:
            img = img.convert("RGBA")
            img.thumbnail(PREVIEW_MAX_SIZE)
            img.save(target, format="PNG")
    except (OSError, UnidentifiedImageError) as exc:
        log.warning(f"Could not create preview from {source}: {exc}")
        return False
    log.info(f"Created preview {target.name} from {source.name}")
    return True
