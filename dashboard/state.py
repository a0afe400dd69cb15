"""Dashboard view state machine.

The current view is one of seven frozen variants, each carrying exactly the
selections it needs (a detail view cannot exist without its round/day,
party and transaction).  Transitions are pure functions returning a new
``DashboardState``; the selection record survives back-navigation so
returning to a parent view never forgets what was picked.

    main ──round──▶ round-parties ──party──▶ round-transactions ──tx──▶ round-detail
      └───day───▶ day-parties   ──party──▶ day-transactions   ──tx──▶ day-detail

``back`` walks one arrow to the left; ``main`` has no back action.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import ClassVar, Optional, Union

from ledger.models import DashboardData, Day, Party, Round, Transaction


class LoadStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class DrillContext(str, Enum):
    """Which branch (round or day) the party/transaction views were reached from."""
    ROUND = "round"
    DAY = "day"


class InvalidTransition(ValueError):
    """The requested action is not offered by the current view."""


class SelectionNotFound(LookupError):
    """A clicked id does not match anything in the loaded data."""


# ── View variants ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class MainView:
    name: ClassVar[str] = "main"


@dataclass(frozen=True)
class RoundPartiesView:
    name: ClassVar[str] = "round-parties"
    round: Round


@dataclass(frozen=True)
class DayPartiesView:
    name: ClassVar[str] = "day-parties"
    day: Day


@dataclass(frozen=True)
class RoundTransactionsView:
    name: ClassVar[str] = "round-transactions"
    round: Round
    party: Party


@dataclass(frozen=True)
class DayTransactionsView:
    name: ClassVar[str] = "day-transactions"
    day: Day
    party: Party


@dataclass(frozen=True)
class RoundDetailView:
    name: ClassVar[str] = "round-detail"
    round: Round
    party: Party
    transaction: Transaction


@dataclass(frozen=True)
class DayDetailView:
    name: ClassVar[str] = "day-detail"
    day: Day
    party: Party
    transaction: Transaction


View = Union[
    MainView,
    RoundPartiesView,
    DayPartiesView,
    RoundTransactionsView,
    DayTransactionsView,
    RoundDetailView,
    DayDetailView,
]


@dataclass(frozen=True)
class Selection:
    round: Optional[Round] = None
    day: Optional[Day] = None
    party: Optional[Party] = None
    transaction: Optional[Transaction] = None
    drill_context: DrillContext = DrillContext.ROUND


@dataclass(frozen=True)
class DashboardState:
    status: LoadStatus = LoadStatus.LOADING
    view: View = MainView()
    selection: Selection = Selection()
    data: Optional[DashboardData] = None
    error: Optional[str] = None


# ── Load lifecycle ────────────────────────────────────────────────────────────

def initial_state() -> DashboardState:
    """State right after the dashboard mounts: loading, on the main view."""
    return DashboardState()


def load_succeeded(state: DashboardState, data: DashboardData) -> DashboardState:
    if state.status is not LoadStatus.LOADING:
        raise InvalidTransition(f"cannot complete a load while {state.status.value}")
    return replace(state, status=LoadStatus.READY, data=data, error=None)


def load_failed(state: DashboardState, message: str) -> DashboardState:
    if state.status is not LoadStatus.LOADING:
        raise InvalidTransition(f"cannot fail a load while {state.status.value}")
    return replace(state, status=LoadStatus.FAILED, error=message)


def retry(state: DashboardState) -> DashboardState:
    """Start over as a full reload would: fresh state, loading again."""
    return initial_state()


# ── Clicks ────────────────────────────────────────────────────────────────────

def _require_ready(state: DashboardState) -> DashboardData:
    if state.status is not LoadStatus.READY or state.data is None:
        raise InvalidTransition(f"dashboard is {state.status.value}, not ready")
    return state.data


def _require_view(state: DashboardState, *kinds: type) -> None:
    if not isinstance(state.view, kinds):
        offered = ", ".join(k.name for k in kinds)
        raise InvalidTransition(
            f"action is only available from {offered}, not {state.view.name}"
        )


def select_round(state: DashboardState, number: int) -> DashboardState:
    data = _require_ready(state)
    _require_view(state, MainView)
    chosen = data.find_round(number)
    if chosen is None:
        raise SelectionNotFound(f"round {number} is not loaded")
    return replace(
        state,
        view=RoundPartiesView(round=chosen),
        selection=replace(state.selection, round=chosen),
    )


def select_day(state: DashboardState, date: str) -> DashboardState:
    data = _require_ready(state)
    _require_view(state, MainView)
    chosen = data.find_day(date)
    if chosen is None:
        raise SelectionNotFound(f"day {date} is not loaded")
    return replace(
        state,
        view=DayPartiesView(day=chosen),
        selection=replace(state.selection, day=chosen),
    )


def select_party(state: DashboardState, party_id: str) -> DashboardState:
    _require_ready(state)
    _require_view(state, RoundPartiesView, DayPartiesView)
    view = state.view
    source = view.round if isinstance(view, RoundPartiesView) else view.day
    party = source.find_party(party_id)
    if party is None:
        raise SelectionNotFound(f"party {party_id} is not part of {source.label}")

    if isinstance(view, RoundPartiesView):
        new_view: View = RoundTransactionsView(round=view.round, party=party)
        context = DrillContext.ROUND
    else:
        new_view = DayTransactionsView(day=view.day, party=party)
        context = DrillContext.DAY
    return replace(
        state,
        view=new_view,
        selection=replace(state.selection, party=party, drill_context=context),
    )


def select_transaction(state: DashboardState, tx_id: str) -> DashboardState:
    _require_ready(state)
    _require_view(state, RoundTransactionsView, DayTransactionsView)
    view = state.view
    tx = view.party.find_transaction(tx_id)
    if tx is None:
        raise SelectionNotFound(f"transaction {tx_id} does not belong to {view.party.party_id}")

    if state.selection.drill_context is DrillContext.ROUND:
        round_ = view.round if isinstance(view, RoundTransactionsView) else state.selection.round
        if round_ is None:
            raise InvalidTransition("round drill-down without a selected round")
        new_view: View = RoundDetailView(round=round_, party=view.party, transaction=tx)
    else:
        day = view.day if isinstance(view, DayTransactionsView) else state.selection.day
        if day is None:
            raise InvalidTransition("day drill-down without a selected day")
        new_view = DayDetailView(day=day, party=view.party, transaction=tx)
    return replace(state, view=new_view,
                   selection=replace(state.selection, transaction=tx))


def parent_view(view: View) -> View:
    """Return the view one level up; ``main`` has no parent."""
    if isinstance(view, (RoundPartiesView, DayPartiesView)):
        return MainView()
    if isinstance(view, RoundTransactionsView):
        return RoundPartiesView(round=view.round)
    if isinstance(view, DayTransactionsView):
        return DayPartiesView(day=view.day)
    if isinstance(view, RoundDetailView):
        return RoundTransactionsView(round=view.round, party=view.party)
    if isinstance(view, DayDetailView):
        return DayTransactionsView(day=view.day, party=view.party)
    raise InvalidTransition("the main view has no back action")


def back(state: DashboardState) -> DashboardState:
    """Return to the parent view; selections are left untouched."""
    _require_ready(state)
    return replace(state, view=parent_view(state.view))
