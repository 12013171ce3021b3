from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .device import DevicePaths
from .errors import RegistryError
from .logger import get_logger

log = get_logger(__name__)

TAG_PATTERN = re.compile(r"\((.*?)\)")


def extract_tag(name: str) -> str:
    """Return the first parenthesised tag in *name*, or an empty string."""
    match = TAG_PATTERN.search(name)
    return match.group(1) if match else ""


def strip_tag(name: str) -> str:
    """Remove the parenthesised tag (and the whitespace before it) from *name*."""
    return TAG_PATTERN.sub("", name, count=1).strip()


@dataclass(frozen=True)
class SystemInfo:
    """One installed system: its ROM folder name, tag and media directory."""

    name: str
    tag: str
    path: Path
    media_path: Path


@dataclass
class SystemRegistry:
    systems: List[SystemInfo] = field(default_factory=list)

    def find_by_tag(self, tag: str) -> Optional[SystemInfo]:
        if not tag:
            return None
        for system in self.systems:
            if system.tag == tag:
                return system
        return None

    def find_by_name(self, name: str) -> Optional[SystemInfo]:
        for system in self.systems:
            if system.name == name:
                return system
        return None

    def __len__(self) -> int:
        return len(self.systems)

    def __iter__(self):
        return iter(self.systems)

    @classmethod
    def discover(cls, device: DevicePaths) -> "SystemRegistry":
        """Scan the ROMs directory; hidden folders and `.media` are ignored."""
        try:
            entries = sorted(device.roms.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise RegistryError(
                f"Cannot read system registry from {device.roms}: {exc}"
            ) from exc

        systems: List[SystemInfo] = []
        for entry in entries:
            if not entry.is_dir() or entry.name.startswith("."):
                continue
            systems.append(
                SystemInfo(
                    name=entry.name,
                    tag=extract_tag(entry.name),
                    path=entry,
                    media_path=entry / ".media",
                )
            )
        log.debug(f"Discovered {len(systems)} systems under {device.roms}")
        return cls(systems)


def load_registry_or_none(device: DevicePaths) -> Optional[SystemRegistry]:
    try:
        return SystemRegistry.discover(device)
    except RegistryError as exc:
        log.warning(f"{exc}; falling back to fixed-name rules only")
        return None
