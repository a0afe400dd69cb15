"""Fee-burn aggregation over recent Scan API updates.

``aggregate_round`` is the pure scan: created events whose entity name
contains "Burn" or "Fee" become placeholder transactions, grouped by the
first root party of their update.  ``fetch_current_round`` runs the two
upstream calls in order and feeds the scan.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable

from ledger.models import Party, Round, Transaction
from ledger.parsing import RoundInfo, UpdateRecord

logger = logging.getLogger(__name__)

BURN_MARKERS = ("Burn", "Fee")
UNKNOWN_PARTY = "unknown"
# Not derived from the event payload; every qualifying event burns this much.
PLACEHOLDER_BURN_CC = 1.0


def is_burn_event(entity_name: str) -> bool:
    """Case-sensitive substring match against the burn markers."""
    return any(marker in entity_name for marker in BURN_MARKERS)


def attributed_party(record: UpdateRecord) -> str:
    """All burn events of an update are charged to its first root."""
    first = record.roots[0] if record.roots else None
    return first or UNKNOWN_PARTY


class _PartyBucket:
    """Mutable accumulator used only while one pass is running."""

    __slots__ = ("party_id", "transactions")

    def __init__(self, party_id: str) -> None:
        self.party_id = party_id
        self.transactions: list[Transaction] = []

    def freeze(self) -> Party:
        return Party.from_transactions(self.party_id, self.transactions)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def aggregate_round(round_info: RoundInfo, updates: Iterable[UpdateRecord],
                    now: str | None = None) -> Round:
    """Group burn events of *updates* per party and total them into a Round.

    Args:
        round_info: Current round number and amulet price.
        updates:    Parsed update records, in scan order.
        now:        Timestamp for the round (defaults to the current UTC time).

    Returns:
        Round whose parties appear in first-sighting order.
    """
    now = now or _utc_now_iso()
    buckets: dict[str, _PartyBucket] = {}
    scanned = 0

    for record in updates:
        scanned += 1
        party_id = attributed_party(record)
        for event in record.events:
            if not is_burn_event(event.entity_name):
                continue
            bucket = buckets.get(party_id)
            if bucket is None:
                bucket = buckets[party_id] = _PartyBucket(party_id)
            bucket.transactions.append(Transaction.synthesize(
                event_id=event.event_id,
                entity_name=event.entity_name,
                timestamp=record.record_time or now,
                burn_cc=PLACEHOLDER_BURN_CC,
                price=round_info.price,
            ))

    result = Round.from_parties(round_info.number, now,
                                (b.freeze() for b in buckets.values()))
    logger.info(
        "aggregated round=%d updates=%d burn_events=%d parties=%d",
        result.round, scanned, result.burn_events, len(result.parties),
    )
    return result


def fetch_current_round(client) -> Round:
    """Fetch round info, then recent updates, and aggregate them.

    Any failure aborts the whole pass; nothing partial is returned.
    """
    round_info = client.fetch_round_info()
    updates = client.fetch_updates()
    return aggregate_round(round_info, updates)
