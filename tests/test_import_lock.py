import json
import os

import pytest

from theme_manager.core.errors import ImportLockedError
from theme_manager.core.lock import ImportLease, ImportLock


def test_lock_file_contents_and_release(tmp_path):
    path = tmp_path / "shared" / ".theme-manager.lock"
    with ImportLock(path) as lock:
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["pid"] == os.getpid()
        assert set(data) == {"pid", "locked_at", "expires_at"}
        assert lock.lease is not None
    assert not path.exists()


def test_second_acquire_fails_while_held(tmp_path):
    path = tmp_path / "lock"
    with ImportLock(path):
        with pytest.raises(ImportLockedError) as info:
            ImportLock(path).acquire()
    assert f"pid {os.getpid()}" in str(info.value)


def test_corrupt_lock_is_treated_as_stale(tmp_path):
    path = tmp_path / "lock"
    path.write_text("garbage", encoding="utf-8")
    lock = ImportLock(path)
    lock.acquire()
    assert json.loads(path.read_text(encoding="utf-8"))["pid"] == os.getpid()
    lock.release()


def test_lease_expiry():
    assert ImportLease(pid=1, locked_at="", expires_at="").is_expired()
    assert not ImportLease.new(ttl_minutes=5).is_expired()
