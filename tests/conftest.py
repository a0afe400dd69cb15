"""
Pytest fixtures for the burn explorer tests.

Provides Scan API payload builders, a scripted data source for the web
layer, and FastAPI test clients wired to it.  Nothing here touches the
network.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient  # noqa: E402

from api.app import create_app  # noqa: E402
from ledger.demo import demo_dataset  # noqa: E402
from ledger.models import DashboardData  # noqa: E402


# ── Scan API payload builders ─────────────────────────────────────────────────

def rounds_payload(number=41210, price="0.15"):
    """Body of the open mining rounds endpoint with a single open round."""
    payload = {"round": {"number": str(number)}}
    if price is not None:
        payload["amulet_price"] = price
    return {"open_mining_rounds": [{"contract_id": "00ab", "payload": payload}]}


def update_item(roots, events, record_time="2026-10-18T10:00:00Z"):
    """One entry of the updates list.

    Args:
        roots:  Root party ids of the transaction tree.
        events: (event id, entity name) pairs, all ``created`` events.
    """
    return {
        "update_id": "1220" + "0" * 8,
        "record_time": record_time,
        "update": {
            "transaction_tree": {
                "roots": list(roots),
                "events_by_id": {
                    event_id: {"created": {"template_id": {"entity_name": name}}}
                    for event_id, name in events
                },
            }
        },
    }


def updates_payload(*items):
    return {"updates": list(items)}


# ── Scripted data source ──────────────────────────────────────────────────────

class FakeSource:
    """Data source returning canned data or raising a canned error.

    ``outcomes`` is consumed one entry per load; the last entry repeats.
    """

    mode = "fake"

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes) or [demo_dataset()]
        self.calls = 0
        self.closed = False

    def _next(self):
        outcome = self.outcomes[min(self.calls, len(self.outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def load(self) -> DashboardData:
        return self._next()

    def current_round(self):
        return self._next().rounds[-1]

    def close(self):
        self.closed = True


@pytest.fixture
def demo_data():
    return demo_dataset()


@pytest.fixture
def fake_source():
    return FakeSource()


@pytest.fixture
def client(fake_source):
    """Test client backed by ``fake_source`` (demo data unless overridden)."""
    app = create_app(source=fake_source)
    return TestClient(app, raise_server_exceptions=False)
