"""
Re-derive a package manifest from the files actually present in the package.

Each category's mappings are replaced wholesale by a fresh scan. A category
whose scan fails (I/O or parse error) keeps whatever the manifest held before
and the remaining categories are still processed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .device import DevicePaths
from .errors import ParseError
from .legacy_layout import LegacyLayoutScanner
from .logger import get_logger
from .manifest import (
    Category,
    ComponentType,
    SettingsSlot,
    ThemeManifest,
    load_manifest_or_default,
    save_manifest,
)
from .manifest.models import (
    FontContent,
    FontSlot,
    IconContent,
    OverlayContent,
    WallpaperContent,
)
from .preview import PREVIEW_FILENAME, ensure_preview
from .registry import SystemRegistry, load_registry_or_none
from .resolver import PackageLayout, PathResolver, join_rel
from .settings_files import read_accent_file, read_led_file

log = get_logger(__name__)


@dataclass
class UpdateResult:
    manifest: ThemeManifest
    component_type: ComponentType
    manifest_path: Optional[Path] = None
    failed_categories: List[Category] = field(default_factory=list)
    legacy_categories: List[Category] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed_categories

    def summary_lines(self) -> List[str]:
        c = self.manifest.content
        lines = [
            f"Package: {self.manifest.theme_info.name} ({self.component_type.value})",
        ]
        categories = self.component_type.categories
        if Category.WALLPAPERS in categories:
            lines.append(f"Wallpapers: {c.wallpapers.count}")
        if Category.ICONS in categories:
            lines.append(
                f"Icons: {c.icons.system_count} system, {c.icons.tool_count} tool, "
                f"{c.icons.collection_count} collection"
            )
        if Category.OVERLAYS in categories:
            lines.append(
                f"Overlays: {len(self.manifest.path_mappings.overlays)} "
                f"in {len(c.overlays.systems)} systems"
            )
        if Category.FONTS in categories:
            lines.append(
                f"Fonts: OG replaced={c.fonts.og_replaced}, "
                f"Next replaced={c.fonts.next_replaced}"
            )
        if Category.ACCENTS in categories:
            lines.append(f"Accents included: {c.settings.accents_included}")
        if Category.LEDS in categories:
            lines.append(f"LEDs included: {c.settings.leds_included}")
        if self.legacy_categories:
            names = ", ".join(cat.value for cat in self.legacy_categories)
            lines.append(f"Legacy layout used for: {names}")
        if self.failed_categories:
            names = ", ".join(cat.value for cat in self.failed_categories)
            lines.append(f"Failed categories (left unchanged): {names}")
        return lines


def detect_component_type(package_root: Path, manifest: ThemeManifest) -> ComponentType:
    """The directory extension decides; otherwise the manifest's own value."""
    from_ext = ComponentType.from_extension(package_root.suffix)
    if from_ext is not None:
        return from_ext
    return manifest.component_type


class ManifestUpdater:
    def __init__(
        self,
        device: DevicePaths,
        registry: Optional[SystemRegistry] = None,
        *,
        create_preview: bool = True,
    ) -> None:
        self.device = device
        self.registry = registry if registry is not None else load_registry_or_none(device)
        self.create_preview = create_preview
        self.resolver = PathResolver(device, self.registry)
        self.legacy = LegacyLayoutScanner(device, self.registry)

    def update(self, package_root: Path, *, write: bool = True) -> UpdateResult:
        package_root = Path(package_root)
        manifest = load_manifest_or_default(package_root)
        component = detect_component_type(package_root, manifest)
        layout = PackageLayout.for_component(component)

        manifest.component_type = component
        manifest.theme_info.name = package_root.stem

        result = UpdateResult(manifest=manifest, component_type=component)
        for category in component.categories:
            try:
                used_legacy = self._update_category(category, package_root, layout, manifest)
            except (OSError, ParseError) as exc:
                log.warning(f"Could not update {category.value} for {package_root.name}: {exc}")
                result.failed_categories.append(category)
                continue
            if used_legacy:
                result.legacy_categories.append(category)

        if component in (ComponentType.THEME, ComponentType.WALLPAPERS):
            self._update_preview(package_root, layout, manifest, render=write)

        if write:
            result.manifest_path = save_manifest(package_root, manifest)
            log.info(f"Manifest updated for {package_root.name}")
        return result

    def _update_category(
        self,
        category: Category,
        root: Path,
        layout: PackageLayout,
        manifest: ThemeManifest,
    ) -> bool:
        if category is Category.WALLPAPERS:
            return self._update_wallpapers(root, layout, manifest)
        if category is Category.ICONS:
            return self._update_icons(root, layout, manifest)
        if category is Category.OVERLAYS:
            self._update_overlays(root, layout, manifest)
        elif category is Category.FONTS:
            self._update_fonts(root, layout, manifest)
        elif category is Category.ACCENTS:
            self._update_accents(root, layout, manifest)
        elif category is Category.LEDS:
            self._update_leds(root, layout, manifest)
        return False

    def _update_wallpapers(self, root: Path, layout: PackageLayout, manifest: ThemeManifest) -> bool:
        mappings = self.resolver.wallpapers(root, layout.wallpapers)
        used_legacy = False
        if not mappings and layout.supports_legacy:
            mappings = self.legacy.wallpapers(root, layout.wallpapers)
            used_legacy = bool(mappings)
        manifest.path_mappings.wallpapers = mappings
        manifest.content.wallpapers = WallpaperContent(
            present=bool(mappings), count=len(mappings)
        )
        log.debug(f"Wallpapers: {len(mappings)} mapped (legacy={used_legacy})")
        return used_legacy

    def _update_icons(self, root: Path, layout: PackageLayout, manifest: ThemeManifest) -> bool:
        mappings = self.resolver.icons(root, layout.icons)
        used_legacy = False
        if not mappings and layout.supports_legacy:
            mappings = self.legacy.icons(root, layout.icons)
            used_legacy = bool(mappings)
        kinds = [m.metadata.get("IconType", "System") for m in mappings]
        manifest.path_mappings.icons = mappings
        manifest.content.icons = IconContent(
            present=bool(mappings),
            system_count=sum(1 for k in kinds if k in ("System", "Special")),
            tool_count=kinds.count("Tool"),
            collection_count=kinds.count("Collection"),
        )
        log.debug(f"Icons: {len(mappings)} mapped (legacy={used_legacy})")
        return used_legacy

    def _update_overlays(self, root: Path, layout: PackageLayout, manifest: ThemeManifest) -> None:
        mappings = self.resolver.overlays(root, layout.overlays)
        systems = sorted({m.metadata["SystemName"] for m in mappings})
        manifest.path_mappings.overlays = mappings
        manifest.content.overlays = OverlayContent(present=bool(mappings), systems=systems)
        log.debug(f"Overlays: {len(mappings)} mapped in {len(systems)} systems")

    def _update_fonts(self, root: Path, layout: PackageLayout, manifest: ThemeManifest) -> None:
        fonts = self.resolver.fonts(root, layout.fonts)
        manifest.path_mappings.fonts = fonts
        manifest.content.fonts = FontContent(
            present=bool(fonts),
            og_replaced=FontSlot.OG_FONT.value in fonts,
            next_replaced=FontSlot.NEXT_FONT.value in fonts,
        )

    def _update_accents(self, root: Path, layout: PackageLayout, manifest: ThemeManifest) -> None:
        path = self.resolver.settings_file(root, SettingsSlot.ACCENTS, layout.settings)
        if path is not None:
            manifest.accent_colors = read_accent_file(path)
            manifest.path_mappings.settings.pop(SettingsSlot.ACCENTS.value, None)
            log.debug(f"Accent colors extracted from {path.name}")
        manifest.content.settings.accents_included = manifest.accent_colors is not None

    def _update_leds(self, root: Path, layout: PackageLayout, manifest: ThemeManifest) -> None:
        path = self.resolver.settings_file(root, SettingsSlot.LEDS, layout.settings)
        if path is not None:
            manifest.led_settings = read_led_file(path)
            manifest.path_mappings.settings.pop(SettingsSlot.LEDS.value, None)
            log.debug(f"LED settings extracted from {path.name}")
        manifest.content.settings.leds_included = manifest.led_settings is not None

    def _update_preview(
        self, root: Path, layout: PackageLayout, manifest: ThemeManifest, *, render: bool
    ) -> None:
        if render and self.create_preview:
            wallpaper_dir = root / join_rel(layout.wallpapers, "SystemWallpapers")
            try:
                name = ensure_preview(root, [wallpaper_dir])
            except OSError as exc:
                log.warning(f"Preview generation failed for {root.name}: {exc}")
                name = None
        else:
            name = PREVIEW_FILENAME if (root / PREVIEW_FILENAME).is_file() else None
        if name is not None:
            manifest.preview_image = name
