from __future__ import annotations

import os
import shutil
from pathlib import Path

from .logger import get_logger

log = get_logger(__name__)


def copy_file(src: Path, dst: Path) -> None:
    """Copy *src* to *dst*, creating the destination directory if needed."""
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)


def remove_file(path: Path) -> bool:
    """Delete *path* if it exists. Returns True when a file was removed."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    log.debug(f"Removed {path}")
    return True


def write_text_atomic(path: Path, text: str) -> None:
    """Write *text* next to *path* and rename it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(path.name + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8", newline="\n") as fh:
            fh.write(text)
        os.replace(tmp, path)
    except OSError:
        if tmp.exists():
            tmp.unlink()
        raise
