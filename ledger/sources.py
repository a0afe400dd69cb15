"""Data sources the dashboard and JSON endpoint load from."""

from __future__ import annotations

from ledger.aggregator import fetch_current_round
from ledger.client import ScanClient
from ledger.demo import demo_dataset
from ledger.models import DashboardData, Round


class LiveSource:
    """Aggregates the current round from the Scan API on every load."""

    mode = "live"

    def __init__(self, client: ScanClient) -> None:
        self.client = client

    def current_round(self) -> Round:
        return fetch_current_round(self.client)

    def load(self) -> DashboardData:
        # Day aggregates are not produced from live data.
        return DashboardData(rounds=(self.current_round(),), days=())

    def close(self) -> None:
        self.client.close()


class DemoSource:
    """Serves the static demo dataset."""

    mode = "demo"

    def current_round(self) -> Round:
        return demo_dataset().rounds[-1]

    def load(self) -> DashboardData:
        return demo_dataset()

    def close(self) -> None:
        pass


def source_from_config(cfg) -> LiveSource | DemoSource:
    if cfg.data_source == "demo":
        return DemoSource()
    return LiveSource(ScanClient.from_config(cfg))
