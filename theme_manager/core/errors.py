"""Exception hierarchy for theme package handling.

Only validation, registry and lock failures are meant to reach the user;
the rest are caught per category or per mapping and logged.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional


class ThemeManagerError(Exception):
    """Base class for all theme manager failures."""


class AssetNotFoundError(ThemeManagerError):
    def __init__(self, path: Path, message: Optional[str] = None) -> None:
        self.path = path
        super().__init__(message or f"Asset not found: {path}")


class ParseError(ThemeManagerError):
    def __init__(self, source: Path | str, message: str) -> None:
        self.source = source
        super().__init__(f"{source}: {message}")


class ManifestParseError(ParseError):
    pass


class SettingsParseError(ParseError):
    pass


class ManifestValidationError(ThemeManagerError):
    def __init__(self, problems: List[str]) -> None:
        self.problems = list(problems)
        summary = "; ".join(self.problems) if self.problems else "unknown problem"
        super().__init__(f"Manifest validation failed: {summary}")


class RegistryError(ThemeManagerError):
    pass


class ImportLockedError(ThemeManagerError):
    def __init__(self, lock_path: Path, owner: str = "") -> None:
        self.lock_path = lock_path
        self.owner = owner
        detail = f" (held by {owner})" if owner else ""
        super().__init__(f"Another import is in progress{detail}: {lock_path}")
