"""HTTP utilities for talking to the Canton Scan API.

Provides:
- Pooled ``requests`` sessions with a fixed retry policy (none by default)
- A JSON GET helper that reports failures instead of returning partial data
"""

import time
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter

DEFAULT_USER_AGENT = "canton-burn-explorer/1.0"


class SessionManager:
    """Manages an HTTP session with connection pooling."""

    def __init__(self, pool_connections: int = 4, pool_maxsize: int = 8,
                 max_retries: int = 0, user_agent: str = DEFAULT_USER_AGENT):
        """Initialize session manager.

        Args:
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum number of connections per pool
            max_retries: Transport-level retries per request (default: 0,
                         failed loads are retried manually by the user)
            user_agent: User-Agent header sent with every request
        """
        self.pool_connections = pool_connections
        self.pool_maxsize = pool_maxsize
        self.max_retries = max_retries
        self.user_agent = user_agent
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create the pooled HTTP session.

        Returns:
            requests.Session object
        """
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({
                "User-Agent": self.user_agent,
                "Accept": "application/json",
            })
            adapter = HTTPAdapter(
                max_retries=self.max_retries,
                pool_connections=self.pool_connections,
                pool_maxsize=self.pool_maxsize,
            )
            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)

        return self._session

    def close(self) -> None:
        """Close the session and release resources."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class HTTPFailure(Exception):
    """Raised by :func:`get_json` when no JSON document could be obtained."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"{url}: {reason}")


def get_json(session: requests.Session, url: str,
             params: Optional[Dict[str, Any]] = None,
             timeout: float = 30) -> tuple[Any, float]:
    """GET *url* and decode its JSON body.

    Args:
        session: Session to issue the request with
        url: Absolute URL
        params: Optional query parameters
        timeout: Request timeout in seconds

    Returns:
        (decoded body, elapsed seconds)

    Raises:
        HTTPFailure: transport error, non-2xx status, or a body that is not JSON
    """
    start = time.monotonic()
    try:
        resp = session.get(url, params=params, timeout=timeout)
    except requests.RequestException as e:
        raise HTTPFailure(url, f"{type(e).__name__}: {e}") from e

    if not resp.ok:
        raise HTTPFailure(url, resp.reason or "HTTP error", resp.status_code)

    try:
        body = resp.json()
    except ValueError as e:
        raise HTTPFailure(url, "response body is not valid JSON") from e
    return body, time.monotonic() - start
