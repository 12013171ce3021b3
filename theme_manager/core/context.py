from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .manifest import ThemeManifest


@dataclass
class ImportReport:
    """Aggregates what an import did (or, for a dry run, would do)."""

    package_root: Path
    dry_run: bool = False
    purged: List[Path] = field(default_factory=list)
    copied: List[Tuple[str, str]] = field(default_factory=list)
    skipped_missing: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)
    fonts_backed_up: List[str] = field(default_factory=list)
    settings_written: List[str] = field(default_factory=list)
    failed_categories: List[str] = field(default_factory=list)
    manifest: Optional[ThemeManifest] = None

    @property
    def package_name(self) -> str:
        if self.manifest is not None and self.manifest.theme_info.name:
            return self.manifest.theme_info.name
        return self.package_root.stem

    @property
    def has_failures(self) -> bool:
        return bool(self.failed or self.failed_categories)

    def record_copy(self, theme_path: str, system_path: str) -> None:
        self.copied.append((theme_path, system_path))

    def record_failure(self, item: str, error: BaseException | str) -> None:
        self.failed.append((item, str(error)))

    def summary_lines(self) -> List[str]:
        verb = "Would copy" if self.dry_run else "Copied"
        lines = [f"{verb} {len(self.copied)} files from {self.package_name}"]
        if self.purged:
            lines.append(f"Removed {len(self.purged)} previously installed assets")
        if self.skipped_missing:
            lines.append(f"Skipped {len(self.skipped_missing)} missing source files")
        if self.fonts_backed_up:
            lines.append(f"Backed up original fonts: {', '.join(self.fonts_backed_up)}")
        if self.settings_written:
            lines.append(f"Settings written: {', '.join(self.settings_written)}")
        if self.failed_categories:
            lines.append(f"Manifest categories left unchanged: {', '.join(self.failed_categories)}")
        for item, error in self.failed:
            lines.append(f"Failed: {item}: {error}")
        if self.dry_run:
            lines.extend(f"  {src} -> {dst}" for src, dst in self.copied)
        return lines
