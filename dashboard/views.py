"""Pure projections from a DashboardState to template context.

``render`` dispatches once on the view variant.  Nothing here mutates the
state; derived numbers (percent of total, chart points) are recomputed on
every call, so rendering the same state twice yields equal contexts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from dashboard.state import (
    DashboardState,
    DayDetailView,
    DayPartiesView,
    DayTransactionsView,
    LoadStatus,
    MainView,
    RoundDetailView,
    RoundPartiesView,
    RoundTransactionsView,
)
from ledger.models import DashboardData, Day, Party, Round, Transaction
from utils.formatting import (
    format_cc,
    format_count,
    format_percent,
    format_usd,
    percent_of,
    short_id,
)

APP_TITLE = "Canton Network Fee Burn Explorer"
# Charts show the first N entries in their existing order, not the N largest.
CHART_LIMIT = 10


@dataclass(frozen=True)
class Card:
    label: str
    value: str
    tone: str  # css modifier: blue | green | orange | purple


@dataclass(frozen=True)
class ChartPoint:
    name: str
    value: float


@dataclass(frozen=True)
class BarChart:
    title: str
    series: str  # "USD" or "CC"
    color: str
    points: tuple[ChartPoint, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "series": self.series,
            "color": self.color,
            "labels": [p.name for p in self.points],
            "values": [p.value for p in self.points],
        }


_TONES = ("blue", "green", "orange", "purple")


def _cards(*pairs: tuple[str, str]) -> tuple[Card, ...]:
    return tuple(Card(label, value, _TONES[i % len(_TONES)])
                 for i, (label, value) in enumerate(pairs))


# ── Status views ──────────────────────────────────────────────────────────────

def _loading() -> dict[str, Any]:
    return {
        "template": "loading",
        "title": APP_TITLE,
        "subtitle": "Loading live data from Canton Network...",
        "message": "Fetching real-time burn data...",
    }


def _failed(message: str) -> dict[str, Any]:
    return {
        "template": "error",
        "title": APP_TITLE,
        "subtitle": "Unable to load data",
        "message": message,
    }


# ── Main ──────────────────────────────────────────────────────────────────────

def _summary_row(source: Union[Round, Day]) -> dict[str, Any]:
    return {
        "total_usd": format_usd(source.total_burn_usd),
        "total_cc": format_cc(source.total_burn_cc),
        "burn_events": format_count(source.burn_events),
        "parties": len(source.parties),
    }


def _main(data: DashboardData) -> dict[str, Any]:
    rounds, days = data.rounds, data.days
    latest = rounds[-1] if rounds else None

    round_chart = None
    if rounds and rounds[0].parties:
        round_chart = BarChart(
            title="Recent Burn Activity (USD)", series="USD", color="#0070f3",
            points=tuple(ChartPoint(f"R{r.round}", r.total_burn_usd) for r in rounds),
        )
    day_chart = None
    if days:
        day_chart = BarChart(
            title="Daily Burn (USD)", series="USD", color="#0891b2",
            points=tuple(ChartPoint(d.date, d.total_burn_usd) for d in days),
        )

    return {
        "template": "main",
        "title": APP_TITLE,
        "subtitle": "Live data from Canton Network MainNet",
        "cards": _cards(
            ("Total Burned (USD)", format_usd(sum(r.total_burn_usd for r in rounds))),
            ("Total Burned (CC)", format_cc(sum(r.total_burn_cc for r in rounds))),
            ("Burn Events", format_count(sum(r.burn_events for r in rounds))),
            ("Active Parties", format_count(len(latest.parties) if latest else 0)),
        ),
        "round_chart": round_chart,
        "rounds": [
            {"round": r.round, "timestamp": r.timestamp, **_summary_row(r)}
            for r in rounds
        ],
        "day_chart": day_chart,
        "days": [{"date": d.date, **_summary_row(d)} for d in days],
    }


# ── Parties (shared by the round and day branches) ────────────────────────────

def _parties(source: Union[Round, Day], is_round: bool) -> dict[str, Any]:
    chart = None
    if source.parties:
        chart = BarChart(
            title="Top Parties by Burn (USD)", series="USD", color="#7c3aed",
            points=tuple(ChartPoint(short_id(p.party_id), p.total_burn_usd)
                         for p in source.parties[:CHART_LIMIT]),
        )
    return {
        "template": "parties",
        "title": f"{source.label} — Parties",
        "subtitle": "Click any party to see their transactions",
        "back_label": "Rounds" if is_round else "Days",
        "cards": _cards(
            ("Total Burn (USD)", format_usd(source.total_burn_usd)),
            ("Total Burn (CC)", format_cc(source.total_burn_cc)),
            ("Burn Events", format_count(source.burn_events)),
            ("Active Parties", format_count(len(source.parties))),
        ),
        "chart": chart,
        "parties": [
            {
                "party_id": p.party_id,
                "total_usd": format_usd(p.total_burn_usd),
                "total_cc": format_cc(p.total_burn_cc),
                "burn_events": format_count(p.burn_events),
                "share": format_percent(percent_of(p.total_burn_usd,
                                                   source.total_burn_usd)),
            }
            for p in source.parties
        ],
    }


# ── Transactions ──────────────────────────────────────────────────────────────

def _transactions(parent_label: str, party: Party) -> dict[str, Any]:
    chart = None
    if party.transactions:
        chart = BarChart(
            title="Burn by Transaction (USD)", series="USD", color="#059669",
            points=tuple(ChartPoint(t.id, t.burn_usd)
                         for t in party.transactions[:CHART_LIMIT]),
        )
    return {
        "template": "transactions",
        "title": f"{parent_label} — Transactions",
        "subtitle": "Click any transaction to see full details",
        "back_label": "Parties",
        "party_id": party.party_id,
        "cards": _cards(
            ("Party Total (USD)", format_usd(party.total_burn_usd)),
            ("Party Total (CC)", format_cc(party.total_burn_cc)),
            ("Burn Events", format_count(party.burn_events)),
        ),
        "chart": chart,
        "transactions": [
            {
                "id": t.id,
                "type": t.type,
                "burn_usd": format_usd(t.burn_usd),
                "burn_cc": format_cc(t.burn_cc),
                "timestamp": t.timestamp,
            }
            for t in party.transactions
        ],
    }


# ── Detail ────────────────────────────────────────────────────────────────────

def fee_breakdown_chart(tx: Transaction) -> BarChart:
    return BarChart(
        title="Fee Breakdown Chart", series="CC", color="#f59e0b",
        points=(
            ChartPoint("Holding", tx.holding_fee_cc),
            ChartPoint("Traffic", tx.traffic_fee_cc),
            ChartPoint("Transfer", tx.transfer_fee_cc),
            ChartPoint("Output", tx.output_fee_cc),
        ),
    )


def _detail(context_label: str, party: Party, tx: Transaction) -> dict[str, Any]:
    return {
        "template": "detail",
        "title": "Transaction Detail",
        "subtitle": "Full breakdown of all publicly available fee data",
        "back_label": "Transactions",
        "fields": [
            ("Transaction ID", tx.id, True),
            ("Type", tx.type, False),
            ("Context", context_label, False),
            ("Timestamp", tx.timestamp, False),
            ("Party ID", party.party_id, True),
            ("Total Burn (USD)", format_usd(tx.burn_usd), False),
            ("Total Burn (CC)", format_cc(tx.burn_cc), False),
        ],
        "cards": _cards(
            ("Holding Fee", format_cc(tx.holding_fee_cc)),
            ("Traffic Fee", format_cc(tx.traffic_fee_cc)),
            ("Transfer Fee", format_cc(tx.transfer_fee_cc)),
            ("Output Fee", format_cc(tx.output_fee_cc)),
        ),
        "chart": fee_breakdown_chart(tx),
    }


# ── Dispatch ──────────────────────────────────────────────────────────────────

def render(state: DashboardState) -> dict[str, Any]:
    """Return the template context for *state*.

    ``context["name"]`` is the view tag (or ``loading`` / ``error``) and
    ``context["template"]`` the partial that draws it.
    """
    if state.status is LoadStatus.LOADING:
        return {"name": "loading", "has_back": False, **_loading()}
    if state.status is LoadStatus.FAILED:
        return {"name": "error", "has_back": False,
                **_failed(state.error or "Unknown error")}

    view = state.view
    if isinstance(view, MainView):
        body = _main(state.data or DashboardData())
    elif isinstance(view, RoundPartiesView):
        body = _parties(view.round, is_round=True)
    elif isinstance(view, DayPartiesView):
        body = _parties(view.day, is_round=False)
    elif isinstance(view, RoundTransactionsView):
        body = _transactions(view.round.label, view.party)
    elif isinstance(view, DayTransactionsView):
        body = _transactions(view.day.label, view.party)
    elif isinstance(view, RoundDetailView):
        body = _detail(view.round.label, view.party, view.transaction)
    elif isinstance(view, DayDetailView):
        body = _detail(view.day.label, view.party, view.transaction)
    else:
        raise TypeError(f"unknown view {view!r}")
    return {"name": view.name, "has_back": not isinstance(view, MainView), **body}
