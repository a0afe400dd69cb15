"""Scan API client: the two upstream reads the aggregator depends on."""

from __future__ import annotations

import logging

from ledger.errors import UpstreamFetchError
from ledger.parsing import RoundInfo, UpdateRecord, parse_round_info, parse_updates
from utils.http import HTTPFailure, SessionManager, get_json

logger = logging.getLogger(__name__)

UPDATES_PAGE_SIZE = 100


class ScanClient:
    """Reads open mining rounds and recent updates from a Scan API."""

    def __init__(self, rounds_url: str, updates_url: str,
                 updates_count: int = UPDATES_PAGE_SIZE,
                 timeout_seconds: float = 30,
                 session_manager: SessionManager | None = None) -> None:
        self.rounds_url = rounds_url
        self.updates_url = updates_url
        self.updates_count = updates_count
        self.timeout_seconds = timeout_seconds
        self._sessions = session_manager or SessionManager()

    @classmethod
    def from_config(cls, cfg) -> "ScanClient":
        return cls(
            rounds_url=cfg.rounds_url,
            updates_url=cfg.updates_url,
            updates_count=cfg.updates_count,
            timeout_seconds=cfg.timeout_seconds,
        )

    def _get(self, url: str, params: dict | None = None):
        try:
            body, elapsed = get_json(self._sessions.session, url,
                                     params=params, timeout=self.timeout_seconds)
        except HTTPFailure as e:
            logger.warning("upstream_failed url=%s status=%s reason=%s",
                           url, e.status_code, e.reason)
            raise UpstreamFetchError(url, e.reason, e.status_code) from e
        logger.debug("upstream_ok url=%s elapsed_ms=%.1f", url, elapsed * 1000)
        return body

    def fetch_round_info(self) -> RoundInfo:
        return parse_round_info(self._get(self.rounds_url))

    def fetch_updates(self) -> list[UpdateRecord]:
        return parse_updates(self._get(self.updates_url,
                                       params={"count": self.updates_count}))

    def close(self) -> None:
        self._sessions.close()
