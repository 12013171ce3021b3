"""Advisory lease lock serializing imports against one device."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ImportLockedError
from .logger import get_logger

log = get_logger(__name__)

DEFAULT_TTL_MINUTES = 10


@dataclass
class ImportLease:
    pid: int
    locked_at: str
    expires_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def new(ttl_minutes: int = DEFAULT_TTL_MINUTES) -> "ImportLease":
        now = datetime.now(timezone.utc)
        return ImportLease(
            pid=os.getpid(),
            locked_at=now.isoformat(),
            expires_at=(now + timedelta(minutes=ttl_minutes)).isoformat(),
        )

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ImportLease":
        return ImportLease(
            pid=int(d.get("pid", 0)),
            locked_at=str(d.get("locked_at", "")),
            expires_at=str(d.get("expires_at", "")),
        )

    def expires_dt(self) -> datetime:
        try:
            dt = datetime.fromisoformat(self.expires_at)
        except ValueError:
            return datetime.now(timezone.utc) - timedelta(days=1)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt

    def is_expired(self) -> bool:
        return datetime.now(timezone.utc) >= self.expires_dt()


class ImportLock:
    """
    Exclusive lock file held for the duration of an import.

    The file is created with O_EXCL; a second import finding a live lease
    fails with ImportLockedError, while an expired or unreadable lease is
    treated as abandoned and replaced.
    """

    def __init__(self, path: Path, *, ttl_minutes: int = DEFAULT_TTL_MINUTES) -> None:
        self.path = path
        self.ttl_minutes = ttl_minutes
        self.lease: Optional[ImportLease] = None

    def __enter__(self) -> "ImportLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def read_lease(self) -> Optional[ImportLease]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError):
            return ImportLease(pid=0, locked_at="", expires_at="")
        if not isinstance(data, dict):
            return ImportLease(pid=0, locked_at="", expires_at="")
        try:
            return ImportLease.from_dict(data)
        except (TypeError, ValueError):
            return ImportLease(pid=0, locked_at="", expires_at="")

    def acquire(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        lease = ImportLease.new(self.ttl_minutes)
        for _ in range(2):
            try:
                fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
            except FileExistsError:
                existing = self.read_lease()
                if existing is not None and not existing.is_expired():
                    raise ImportLockedError(self.path, owner=f"pid {existing.pid}")
                log.warning(f"Breaking stale import lock {self.path}")
                self.path.unlink(missing_ok=True)
                continue
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(lease.to_dict(), fh)
            self.lease = lease
            log.debug(f"Acquired import lock {self.path}")
            return
        raise ImportLockedError(self.path)

    def release(self) -> None:
        if self.lease is None:
            return
        self.path.unlink(missing_ok=True)
        self.lease = None
        log.debug(f"Released import lock {self.path}")
