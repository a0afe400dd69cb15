"""In-memory store of per-browser dashboard state.

Each browser gets one session id (kept in a cookie).  Entries expire after
``ttl_seconds`` without access; when the store is full the entry closest to
expiry is evicted.  A session may have at most one load in flight.
"""

import threading
import time
import uuid
from typing import Optional

from dashboard.state import DashboardState, initial_state


class SessionStore:
    """Thread-safe map of session id -> DashboardState with idle expiry.

    Usage::

        store = SessionStore(maxsize=1000, ttl_seconds=1800)
        sid = store.create()
        state = store.get(sid)          # None once expired or evicted
        store.put(sid, new_state)
    """

    def __init__(self, maxsize: int = 1000, ttl_seconds: float = 1800.0) -> None:
        self._maxsize = maxsize
        self._ttl = ttl_seconds
        # Maps session id -> (state, expires_at)
        self._store: dict[str, tuple[DashboardState, float]] = {}
        self._loading: set[str] = set()
        self._lock = threading.Lock()

    def _evict_if_full(self) -> None:
        if len(self._store) >= self._maxsize:
            oldest = min(self._store, key=lambda k: self._store[k][1])
            del self._store[oldest]
            self._loading.discard(oldest)

    def create(self) -> str:
        """Open a new session in the initial (loading) state and return its id."""
        session_id = uuid.uuid4().hex
        with self._lock:
            self._evict_if_full()
            self._store[session_id] = (initial_state(), time.monotonic() + self._ttl)
        return session_id

    def get(self, session_id: str) -> Optional[DashboardState]:
        """Return the session's state, refreshing its expiry, or None."""
        with self._lock:
            entry = self._store.get(session_id)
            if entry is None:
                return None
            state, expires_at = entry
            now = time.monotonic()
            if now > expires_at:
                del self._store[session_id]
                self._loading.discard(session_id)
                return None
            self._store[session_id] = (state, now + self._ttl)
            return state

    def put(self, session_id: str, state: DashboardState, release: bool = False) -> None:
        """Store *state* for the session.

        An in-flight load keeps its claim unless *release* is set; only the
        load that made the claim passes ``release=True`` with its result.
        """
        with self._lock:
            if session_id not in self._store:
                self._evict_if_full()
            self._store[session_id] = (state, time.monotonic() + self._ttl)
            if release:
                self._loading.discard(session_id)

    def remount(self, session_id: str) -> bool:
        """Reset an existing session to the initial state.

        A load already in flight keeps its claim and completes the reset state.

        Returns:
            False when the session is unknown or expired.
        """
        if self.get(session_id) is None:
            return False
        self.put(session_id, initial_state())
        return True

    def claim_load(self, session_id: str) -> bool:
        """Mark a load as in flight; False if one already is."""
        with self._lock:
            if session_id not in self._store or session_id in self._loading:
                return False
            self._loading.add(session_id)
            return True

    def release_load(self, session_id: str) -> None:
        with self._lock:
            self._loading.discard(session_id)

    def __len__(self) -> int:
        with self._lock:
            now = time.monotonic()
            expired = [k for k, (_, exp) in self._store.items() if now > exp]
            for k in expired:
                del self._store[k]
                self._loading.discard(k)
            return len(self._store)
