"""
Tests for dashboard/sessions.py — per-browser state with idle expiry.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dashboard import sessions as sessions_module
from dashboard.sessions import SessionStore
from dashboard.state import LoadStatus, initial_state, load_failed


@pytest.fixture
def clock(monkeypatch):
    """Controllable replacement for time.monotonic inside the store."""
    now = [1000.0]
    monkeypatch.setattr(sessions_module.time, "monotonic", lambda: now[0])
    return now


class TestSessionStore:
    def test_create_starts_loading(self):
        store = SessionStore()
        sid = store.create()
        assert store.get(sid) == initial_state()
        assert len(store) == 1

    def test_ids_are_unique(self):
        store = SessionStore()
        assert store.create() != store.create()

    def test_unknown_session(self):
        assert SessionStore().get("nope") is None

    def test_put_replaces_state(self):
        store = SessionStore()
        sid = store.create()
        failed = load_failed(initial_state(), "boom")
        store.put(sid, failed)
        assert store.get(sid).status is LoadStatus.FAILED

    def test_expiry(self, clock):
        store = SessionStore(ttl_seconds=60)
        sid = store.create()
        clock[0] += 61
        assert store.get(sid) is None
        assert len(store) == 0

    def test_access_refreshes_expiry(self, clock):
        store = SessionStore(ttl_seconds=60)
        sid = store.create()
        clock[0] += 50
        assert store.get(sid) is not None
        clock[0] += 50
        assert store.get(sid) is not None

    def test_evicts_soonest_expiring_when_full(self, clock):
        store = SessionStore(maxsize=2, ttl_seconds=60)
        first = store.create()
        clock[0] += 1
        second = store.create()
        clock[0] += 1
        third = store.create()
        assert store.get(first) is None
        assert store.get(second) is not None
        assert store.get(third) is not None

    def test_remount_resets_state(self):
        store = SessionStore()
        sid = store.create()
        store.put(sid, load_failed(initial_state(), "boom"))
        assert store.remount(sid) is True
        assert store.get(sid) == initial_state()

    def test_remount_unknown(self):
        assert SessionStore().remount("nope") is False


class TestLoadClaims:
    def test_single_claim(self):
        store = SessionStore()
        sid = store.create()
        assert store.claim_load(sid) is True
        assert store.claim_load(sid) is False

    def test_put_keeps_claim(self):
        store = SessionStore()
        sid = store.create()
        store.claim_load(sid)
        store.put(sid, initial_state())
        assert store.claim_load(sid) is False

    def test_put_with_release_frees_claim(self):
        store = SessionStore()
        sid = store.create()
        store.claim_load(sid)
        store.put(sid, load_failed(initial_state(), "boom"), release=True)
        assert store.claim_load(sid) is True

    def test_remount_keeps_claim_of_running_load(self):
        store = SessionStore()
        sid = store.create()
        assert store.claim_load(sid) is True
        assert store.remount(sid) is True
        assert store.claim_load(sid) is False
        assert store.get(sid) == initial_state()

    def test_release_load(self):
        store = SessionStore()
        sid = store.create()
        store.claim_load(sid)
        store.release_load(sid)
        assert store.claim_load(sid) is True

    def test_claim_unknown_session(self):
        assert SessionStore().claim_load("nope") is False
