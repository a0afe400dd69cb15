"""Static demo dataset for running the dashboard without network access.

Amounts are illustrative, not taken from the network.  Everything is built
through the ``from_*`` constructors, so the same total invariants hold as for
live aggregates.
"""

from __future__ import annotations

from functools import lru_cache

from ledger.models import DashboardData, Day, Party, Round, Transaction

DEMO_PARTIES = (
    "DSO::1220b1431ef217342db44d516bb9befde802be7d8899637d290895fa58880f19accc",
    "Cumberland-1::12201aa8a23046d5740c9edd58f7e820c83e7f5d58f25551b2fd3d8ddd1d3f6bd6dd",
    "Digital-Asset-2::1220ea5ce4e0ab1d8e4bda08b3d6ef14d46fe16fa9b6c3dca94e38a47bba9be4e221",
    "GSF-1::122051b5a2c4a7b8a7e0dbd9f0f9ce0cc2be6e23e4a03e9e8eb9c7e0e1bd1fb6c9c2",
    "Liberty-SV::1220c2f1bbf81e5a3bd7d7cc48e0c6b8ab07df7dbb7b8c28bf02c7a44f2f25b7e4a0",
    "Orb-1-LP-1::1220a0f77d94ce5ab0b4b36a3f2bbf9b4e9c9f0a7f4b2d3c1e5b6a7c8d9e0f1a2b3c",
    "Proof-Group-1::12205d4b8f3e2a1c0b9a8f7e6d5c4b3a2f1e0d9c8b7a6f5e4d3c2b1a0f9e8d7c6b",
    "SV-Nodes-1::1220f1e2d3c4b5a69788796a5b4c3d2e1f0a9b8c7d6e5f4a3b2c1d0e9f8a7b6c5d4",
    "Tradeweb-1::12209a8b7c6d5e4f3a2b1c0d9e8f7a6b5c4d3e2f1a0b9c8d7e6f5a4b3c2d1e0f9a8",
    "MPCH-1::1220314159265358979323846264338327950288419716939937510582097494459",
    "Kaiko-1::12202718281828459045235360287471352662497757247093699959574966967627",
    "Zodia-1::12201618033988749894848204586834365638117720309179805762862135448622",
)

_FEE_TYPES = ("TrafficBurnEvent", "HoldingFeeBurn", "TransferFeeEvent", "AmuletBurn")

# round number -> (timestamp, amulet price, [(party index, [burn CC, ...]), ...])
_ROUNDS = {
    41208: ("2026-10-18T09:50:00+00:00", 0.1512, [
        (0, [12.5, 8.0, 4.25]), (1, [3.0, 2.5]), (2, [18.0]), (3, [1.0, 1.0, 1.0]),
        (4, [6.75]), (5, [2.2, 0.8]), (6, [9.1]), (7, [4.4, 4.4]),
        (8, [0.5]), (9, [7.0, 3.0]), (10, [1.25]), (11, [5.5, 2.0, 1.5]),
    ]),
    41209: ("2026-10-18T10:00:00+00:00", 0.1498, [
        (2, [11.0, 6.0]), (0, [9.5]), (5, [3.3, 3.3, 1.2]), (7, [2.0]),
        (1, [14.0]), (11, [0.75, 0.75]),
    ]),
    41210: ("2026-10-18T10:10:00+00:00", 0.1505, [
        (3, [5.0]), (0, [21.0, 4.0]), (9, [2.5, 2.5]), (6, [1.0]),
    ]),
}

# date -> [(party index, [burn CC, ...]), ...]; days are priced at a flat rate
_DAYS = {
    "2026-10-16": [(0, [140.0, 95.5]), (2, [88.0]), (4, [31.25, 12.0]), (8, [6.5])],
    "2026-10-17": [(1, [72.0, 40.0, 12.5]), (0, [160.0]), (3, [18.0]), (11, [9.75])],
}
_DAY_PRICE = 0.15


def _party(party_index: int, amounts: list[float], price: float, timestamp: str,
           id_prefix: str) -> Party:
    party_id = DEMO_PARTIES[party_index]
    txs = [
        Transaction.synthesize(
            event_id=f"#{id_prefix}-{party_index:02d}-{n:02d}",
            entity_name=_FEE_TYPES[(party_index + n) % len(_FEE_TYPES)],
            timestamp=timestamp,
            burn_cc=amount,
            price=price,
        )
        for n, amount in enumerate(amounts)
    ]
    return Party.from_transactions(party_id, txs)


@lru_cache(maxsize=1)
def demo_dataset() -> DashboardData:
    """Return the demo rounds (oldest first) and days."""
    rounds = tuple(
        Round.from_parties(number, ts, (
            _party(idx, amounts, price, ts, f"r{number}") for idx, amounts in entries
        ))
        for number, (ts, price, entries) in _ROUNDS.items()
    )
    days = tuple(
        Day.from_parties(date, (
            _party(idx, amounts, _DAY_PRICE, f"{date}T12:00:00+00:00", f"d{date}")
            for idx, amounts in entries
        ))
        for date, entries in _DAYS.items()
    )
    return DashboardData(rounds=rounds, days=days)
