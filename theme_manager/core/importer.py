"""
Apply a theme or component package to the device.

The sequence is fixed: purge installed wallpapers/icons, re-derive the
manifest, validate it, copy every mapped file, install fonts (backing up the
factory font once), then write accent and LED settings from the manifest.
Nothing is rolled back if a step fails part way.
"""

from __future__ import annotations

from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .context import ImportReport
from .device import DevicePaths
from .errors import AssetNotFoundError
from .file_ops import copy_file
from .lock import ImportLock
from .logger import get_logger
from .manifest import (
    Category,
    FontSlot,
    PathMapping,
    ThemeManifest,
    validate_manifest,
)
from .purge import purge_installed_assets
from .registry import SystemRegistry
from .settings_files import write_accent_settings, write_led_settings
from .updater import ManifestUpdater

log = get_logger(__name__)

Validator = Callable[[ThemeManifest, Optional[DevicePaths]], None]
Notifier = Callable[[str], None]

FILE_CATEGORIES = (Category.WALLPAPERS, Category.ICONS, Category.OVERLAYS)


@dataclass
class ImportOptions:
    dry_run: bool = False
    create_preview: bool = True
    use_lock: bool = True


def _log_notify(message: str) -> None:
    log.info(message)


class ImportEngine:
    def __init__(
        self,
        device: DevicePaths,
        *,
        registry: Optional[SystemRegistry] = None,
        validator: Validator = validate_manifest,
        notify: Notifier = _log_notify,
        options: Optional[ImportOptions] = None,
    ) -> None:
        self.device = device
        self.registry = registry
        self.validator = validator
        self.notify = notify
        self.options = options or ImportOptions()

    def run(self, package_root: Path) -> ImportReport:
        package_root = Path(package_root)
        if not package_root.is_dir():
            raise AssetNotFoundError(package_root, f"Package not found: {package_root}")

        # Purge needs the registry, so failing to read it is fatal here.
        registry = self.registry
        if registry is None:
            registry = SystemRegistry.discover(self.device)

        dry_run = self.options.dry_run
        lock = (
            ImportLock(self.device.import_lock)
            if self.options.use_lock and not dry_run
            else nullcontext()
        )
        report = ImportReport(package_root=package_root, dry_run=dry_run)
        with lock:
            if not dry_run:
                report.purged = purge_installed_assets(self.device, registry)

            updater = ManifestUpdater(
                self.device, registry, create_preview=self.options.create_preview
            )
            update = updater.update(package_root, write=not dry_run)
            manifest = update.manifest
            report.manifest = manifest
            report.failed_categories = [c.value for c in update.failed_categories]

            self.validator(manifest, self.device)

            categories = update.component_type.categories
            for category in FILE_CATEGORIES:
                if category in categories:
                    for mapping in manifest.mappings_for(category):
                        self._copy_mapping(package_root, mapping, report)
            if Category.FONTS in categories:
                self._apply_fonts(package_root, manifest, report)
            self._apply_settings(manifest, categories, report)

        if dry_run:
            self.notify(f"Dry run complete for {report.package_name}")
        else:
            self.notify(f"Applied {report.package_name}")
        return report

    def _copy_mapping(
        self, package_root: Path, mapping: PathMapping, report: ImportReport
    ) -> bool:
        src = package_root / mapping.theme_path
        if not src.is_file():
            log.warning(f"Source missing, skipped: {mapping.theme_path}")
            report.skipped_missing.append(mapping.theme_path)
            return False
        if not report.dry_run:
            try:
                copy_file(src, Path(mapping.system_path))
            except OSError as exc:
                log.warning(f"Copy failed {mapping.theme_path} -> {mapping.system_path}: {exc}")
                report.record_failure(mapping.theme_path, exc)
                return False
        report.record_copy(mapping.theme_path, mapping.system_path)
        return True

    def _apply_fonts(
        self, package_root: Path, manifest: ThemeManifest, report: ImportReport
    ) -> None:
        # Package-supplied backup slots are never installed; the device
        # backup always holds the factory font.
        slots = (
            (FontSlot.OG_FONT, self.device.og_font, self.device.og_font_backup),
            (FontSlot.NEXT_FONT, self.device.next_font, self.device.next_font_backup),
        )
        for slot, live, backup in slots:
            mapping = manifest.path_mappings.fonts.get(slot.value)
            if mapping is None:
                continue
            if not (package_root / mapping.theme_path).is_file():
                log.warning(f"Font missing from package, skipped: {mapping.theme_path}")
                report.skipped_missing.append(mapping.theme_path)
                continue
            if not backup.exists() and live.exists():
                if not report.dry_run:
                    try:
                        copy_file(live, backup)
                    except OSError as exc:
                        log.warning(f"Font backup failed for {live}: {exc}")
                        report.record_failure(str(backup), exc)
                        continue
                log.info(f"Backed up original font {live.name} -> {backup.name}")
                report.fonts_backed_up.append(backup.name)
            self._copy_mapping(package_root, mapping, report)

    def _apply_settings(self, manifest: ThemeManifest, categories, report: ImportReport) -> None:
        writes = []
        if Category.ACCENTS in categories and manifest.accent_colors is not None:
            writes.append(
                (self.device.accent_settings, write_accent_settings, manifest.accent_colors)
            )
        if Category.LEDS in categories and manifest.led_settings is not None:
            writes.append((self.device.led_settings, write_led_settings, manifest.led_settings))
        for path, writer, values in writes:
            if report.dry_run:
                report.settings_written.append(path.name)
                continue
            try:
                writer(path, values)
            except (OSError, UnicodeDecodeError) as exc:
                log.warning(f"Could not write {path}: {exc}")
                report.record_failure(str(path), exc)
                continue
            report.settings_written.append(path.name)


def run_import(
    package_root: Path,
    device: Optional[DevicePaths] = None,
    *,
    dry_run: bool = False,
    notify: Notifier = _log_notify,
) -> ImportReport:
    engine = ImportEngine(
        device or DevicePaths.from_env(),
        notify=notify,
        options=ImportOptions(dry_run=dry_run),
    )
    return engine.run(package_root)
