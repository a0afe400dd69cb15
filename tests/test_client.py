"""
Tests for ledger/client.py — ScanClient requests and error mapping.
"""
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from conftest import rounds_payload, update_item, updates_payload
from ledger.client import UPDATES_PAGE_SIZE, ScanClient
from ledger.errors import MissingFieldError, UpstreamError, UpstreamFetchError
from utils.config import AppConfig
from utils.http import SessionManager

ROUNDS_URL = "https://scan.example/api/scan/v0/open-and-issuing-mining-rounds"
UPDATES_URL = "https://scan.example/api/scan/v1/updates"


def _json_response(body, status=200, reason="OK"):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.reason = reason
    resp.json.return_value = body
    return resp


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def scan_client(session):
    sm = SessionManager()
    sm._session = session
    return ScanClient(ROUNDS_URL, UPDATES_URL, timeout_seconds=7, session_manager=sm)


class TestScanClientRequests:
    def test_round_info_request(self, scan_client, session):
        session.get.return_value = _json_response(rounds_payload(number=99, price="0.2"))
        info = scan_client.fetch_round_info()
        assert info.number == 99
        assert info.price == 0.2
        session.get.assert_called_once_with(ROUNDS_URL, params=None, timeout=7)

    def test_updates_request_asks_for_one_page(self, scan_client, session):
        session.get.return_value = _json_response(
            updates_payload(update_item(["P1"], [("#a:0", "FeeEvent")])))
        records = scan_client.fetch_updates()
        assert len(records) == 1
        session.get.assert_called_once_with(
            UPDATES_URL, params={"count": UPDATES_PAGE_SIZE}, timeout=7)
        assert UPDATES_PAGE_SIZE == 100

    def test_custom_update_count(self, session):
        sm = SessionManager()
        sm._session = session
        client = ScanClient(ROUNDS_URL, UPDATES_URL, updates_count=25, session_manager=sm)
        session.get.return_value = _json_response({"updates": []})
        client.fetch_updates()
        assert session.get.call_args.kwargs["params"] == {"count": 25}


class TestScanClientErrors:
    def test_http_status_maps_to_fetch_error(self, scan_client, session):
        session.get.return_value = _json_response({}, status=503, reason="Service Unavailable")
        with pytest.raises(UpstreamFetchError) as exc_info:
            scan_client.fetch_round_info()
        err = exc_info.value
        assert err.url == ROUNDS_URL
        assert err.status_code == 503
        assert "Service Unavailable" in str(err)

    def test_transport_error_maps_to_fetch_error(self, scan_client, session):
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(UpstreamFetchError) as exc_info:
            scan_client.fetch_updates()
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value, UpstreamError)

    def test_invalid_json_maps_to_fetch_error(self, scan_client, session):
        resp = _json_response(None)
        resp.json.side_effect = ValueError("bad")
        session.get.return_value = resp
        with pytest.raises(UpstreamFetchError, match="not valid JSON"):
            scan_client.fetch_round_info()

    def test_shape_error_passes_through(self, scan_client, session):
        session.get.return_value = _json_response({"open_mining_rounds": []})
        with pytest.raises(MissingFieldError):
            scan_client.fetch_round_info()


class TestScanClientLifecycle:
    def test_close_closes_session(self, scan_client, session):
        scan_client.close()
        session.close.assert_called_once()

    def test_from_config(self, monkeypatch):
        monkeypatch.setenv("CANTON_SCAN_URL", "https://scan.example/api/scan/")
        monkeypatch.setenv("CANTON_UPDATES_COUNT", "40")
        monkeypatch.setenv("CANTON_TIMEOUT_SECONDS", "12")
        client = ScanClient.from_config(AppConfig.from_env())
        assert client.rounds_url == ROUNDS_URL
        assert client.updates_url == UPDATES_URL
        assert client.updates_count == 40
        assert client.timeout_seconds == 12
