"""Fee-burn aggregation over the Canton Scan API.

Modules:
    models     — Transaction, Party, Round, Day, DashboardData
    parsing    — explicit validation of Scan API responses
    client     — ScanClient (round info + updates)
    aggregator — burn-event scan and per-party grouping
    demo       — static demo dataset
    sources    — LiveSource / DemoSource used by the web layer
    errors     — error hierarchy and user-facing messages
"""

from ledger.aggregator import aggregate_round, fetch_current_round, is_burn_event
from ledger.errors import (
    BurnExplorerError,
    MissingFieldError,
    UpstreamError,
    UpstreamFetchError,
    describe_error,
)
from ledger.models import DashboardData, Day, Party, Round, Transaction

__all__ = [
    "aggregate_round",
    "fetch_current_round",
    "is_burn_event",
    "BurnExplorerError",
    "MissingFieldError",
    "UpstreamError",
    "UpstreamFetchError",
    "describe_error",
    "DashboardData",
    "Day",
    "Party",
    "Round",
    "Transaction",
]
