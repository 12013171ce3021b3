from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from ..errors import ManifestParseError
from ..file_ops import write_text_atomic
from ..logger import get_logger
from .models import MANIFEST_FILENAME, ThemeManifest

log = get_logger(__name__)


def manifest_path(package_root: Path) -> Path:
    return package_root / MANIFEST_FILENAME


def load_manifest(package_root: Path) -> ThemeManifest:
    """
    Read ``manifest.json`` from a package.

    Raises FileNotFoundError when the manifest does not exist and
    ManifestParseError when it is not valid JSON or does not fit the schema.
    """
    path = manifest_path(package_root)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise ManifestParseError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except json.JSONDecodeError as exc:
        raise ManifestParseError(path, f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    if not isinstance(data, dict):
        raise ManifestParseError(path, "top-level value must be an object")
    try:
        return ThemeManifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestParseError(path, f"schema mismatch ({exc.error_count()} errors)") from exc


def load_manifest_or_default(package_root: Path) -> ThemeManifest:
    """Like load_manifest, but a missing or malformed manifest yields a fresh one."""
    try:
        return load_manifest(package_root)
    except FileNotFoundError:
        log.debug(f"No manifest in {package_root}; starting from defaults")
    except ManifestParseError as exc:
        log.warning(f"{exc}; starting from a fresh manifest")
    return ThemeManifest()


def save_manifest(package_root: Path, manifest: ThemeManifest) -> Path:
    path = manifest_path(package_root)
    write_text_atomic(path, manifest.model_dump_json(indent=2) + "\n")
    log.debug(f"Wrote manifest {path}")
    return path
