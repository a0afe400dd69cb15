"""Immutable burn aggregates: transactions, parties, rounds and days.

Totals are never passed in by callers; the ``from_*`` constructors derive
them from their children so the sum invariants hold by construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

# Each of the four fee components is a fixed share of the burned amount.
FEE_SHARE = 0.25


@dataclass(frozen=True)
class Transaction:
    """One burn event with its (placeholder) fee breakdown."""

    id: str
    type: str
    burn_cc: float
    burn_usd: float
    timestamp: str
    holding_fee_cc: float
    traffic_fee_cc: float
    transfer_fee_cc: float
    output_fee_cc: float

    @classmethod
    def synthesize(cls, event_id: str, entity_name: str, timestamp: str,
                   burn_cc: float, price: float) -> "Transaction":
        """Build a transaction whose fee fields are each a quarter of *burn_cc*."""
        share = burn_cc * FEE_SHARE
        return cls(
            id=event_id,
            type=entity_name,
            burn_cc=burn_cc,
            burn_usd=burn_cc * price,
            timestamp=timestamp,
            holding_fee_cc=share,
            traffic_fee_cc=share,
            transfer_fee_cc=share,
            output_fee_cc=share,
        )

    @property
    def fee_total_cc(self) -> float:
        return (self.holding_fee_cc + self.traffic_fee_cc
                + self.transfer_fee_cc + self.output_fee_cc)


@dataclass(frozen=True)
class Party:
    """All burn transactions attributed to one ledger party."""

    party_id: str
    total_burn_cc: float
    total_burn_usd: float
    burn_events: int
    transactions: tuple[Transaction, ...] = ()

    @classmethod
    def from_transactions(cls, party_id: str,
                          transactions: Iterable[Transaction]) -> "Party":
        txs = tuple(transactions)
        return cls(
            party_id=party_id,
            total_burn_cc=sum(t.burn_cc for t in txs),
            total_burn_usd=sum(t.burn_usd for t in txs),
            burn_events=len(txs),
            transactions=txs,
        )

    def find_transaction(self, tx_id: str) -> Transaction | None:
        return next((t for t in self.transactions if t.id == tx_id), None)


def _sum_parties(parties: tuple[Party, ...]) -> dict:
    return {
        "total_burn_cc": sum(p.total_burn_cc for p in parties),
        "total_burn_usd": sum(p.total_burn_usd for p in parties),
        "burn_events": sum(p.burn_events for p in parties),
    }


@dataclass(frozen=True)
class Round:
    """Burn activity aggregated over one mining round."""

    round: int
    timestamp: str
    total_burn_cc: float
    total_burn_usd: float
    burn_events: int
    parties: tuple[Party, ...] = ()

    @classmethod
    def from_parties(cls, number: int, timestamp: str,
                     parties: Iterable[Party]) -> "Round":
        ps = tuple(parties)
        return cls(round=number, timestamp=timestamp, parties=ps, **_sum_parties(ps))

    @property
    def label(self) -> str:
        return f"Round {self.round}"

    def find_party(self, party_id: str) -> Party | None:
        return next((p for p in self.parties if p.party_id == party_id), None)


@dataclass(frozen=True)
class Day:
    """Burn activity aggregated over one calendar day."""

    date: str
    total_burn_cc: float
    total_burn_usd: float
    burn_events: int
    parties: tuple[Party, ...] = ()

    @classmethod
    def from_parties(cls, date: str, parties: Iterable[Party]) -> "Day":
        ps = tuple(parties)
        return cls(date=date, parties=ps, **_sum_parties(ps))

    @property
    def label(self) -> str:
        return self.date

    def find_party(self, party_id: str) -> Party | None:
        return next((p for p in self.parties if p.party_id == party_id), None)


@dataclass(frozen=True)
class DashboardData:
    """Everything a data source hands to the dashboard in one load."""

    rounds: tuple[Round, ...] = ()
    days: tuple[Day, ...] = field(default_factory=tuple)

    def find_round(self, number: int) -> Round | None:
        return next((r for r in self.rounds if r.round == number), None)

    def find_day(self, date: str) -> Day | None:
        return next((d for d in self.days if d.date == date), None)
