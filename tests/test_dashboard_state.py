"""
Tests for dashboard/state.py — the view state machine.

Walks both drill-down branches and checks that actions not offered by the
current view are rejected without changing anything.
"""
import dataclasses
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dashboard.state import (
    DashboardState,
    DayDetailView,
    DayPartiesView,
    DayTransactionsView,
    DrillContext,
    InvalidTransition,
    LoadStatus,
    MainView,
    RoundDetailView,
    RoundPartiesView,
    RoundTransactionsView,
    SelectionNotFound,
    back,
    initial_state,
    load_failed,
    load_succeeded,
    parent_view,
    retry,
    select_day,
    select_party,
    select_round,
    select_transaction,
)
from ledger.models import DashboardData, Day, Party, Round, Transaction


def _tx(tx_id, cc=1.0, price=0.15):
    return Transaction.synthesize(tx_id, "FeeEvent", "2026-10-18T10:00:00Z", cc, price)


@pytest.fixture
def data():
    p1 = Party.from_transactions("P1", [_tx("#a:0"), _tx("#a:1")])
    p2 = Party.from_transactions("P2", [_tx("#b:0", cc=3.0)])
    d1 = Party.from_transactions("D1", [_tx("#d:0", cc=10.0)])
    return DashboardData(
        rounds=(Round.from_parties(41210, "2026-10-18T10:10:00+00:00", [p1, p2]),),
        days=(Day.from_parties("2026-10-17", [d1]),),
    )


@pytest.fixture
def ready(data):
    return load_succeeded(initial_state(), data)


# ── Load lifecycle ────────────────────────────────────────────────────────────

class TestLoadLifecycle:
    def test_initial_state(self):
        state = initial_state()
        assert state.status is LoadStatus.LOADING
        assert isinstance(state.view, MainView)
        assert state.data is None
        assert state.error is None

    def test_load_success(self, data):
        state = load_succeeded(initial_state(), data)
        assert state.status is LoadStatus.READY
        assert state.data is data
        assert isinstance(state.view, MainView)

    def test_load_failure(self):
        state = load_failed(initial_state(), "Upstream request failed")
        assert state.status is LoadStatus.FAILED
        assert state.error == "Upstream request failed"

    def test_completion_only_while_loading(self, ready, data):
        with pytest.raises(InvalidTransition):
            load_succeeded(ready, data)
        with pytest.raises(InvalidTransition):
            load_failed(ready, "late")

    def test_retry_restarts_loading(self):
        failed = load_failed(initial_state(), "boom")
        state = retry(failed)
        assert state == initial_state()
        assert state.error is None

    def test_clicks_rejected_while_loading(self):
        with pytest.raises(InvalidTransition):
            select_round(initial_state(), 41210)
        with pytest.raises(InvalidTransition):
            back(initial_state())

    def test_clicks_rejected_after_failure(self):
        failed = load_failed(initial_state(), "boom")
        with pytest.raises(InvalidTransition):
            select_day(failed, "2026-10-17")


# ── Round branch ──────────────────────────────────────────────────────────────

class TestRoundBranch:
    def test_full_drill_down(self, ready):
        state = select_round(ready, 41210)
        assert isinstance(state.view, RoundPartiesView)
        assert state.view.round.round == 41210

        state = select_party(state, "P1")
        assert isinstance(state.view, RoundTransactionsView)
        assert state.view.party.party_id == "P1"
        assert state.selection.drill_context is DrillContext.ROUND

        state = select_transaction(state, "#a:1")
        assert isinstance(state.view, RoundDetailView)
        assert state.view.transaction.id == "#a:1"
        assert state.view.round.round == 41210
        assert state.view.party.party_id == "P1"

    def test_back_walks_up_one_level_at_a_time(self, ready):
        detail = select_transaction(select_party(select_round(ready, 41210), "P2"), "#b:0")
        names = []
        state = detail
        while not isinstance(state.view, MainView):
            state = back(state)
            names.append(state.view.name)
        assert names == ["round-transactions", "round-parties", "main"]

    def test_back_keeps_selection(self, ready):
        state = select_party(select_round(ready, 41210), "P1")
        after = back(state)
        assert after.selection == state.selection
        assert after.selection.party.party_id == "P1"
        assert after.data is state.data

    def test_unknown_round(self, ready):
        with pytest.raises(SelectionNotFound):
            select_round(ready, 1)

    def test_unknown_party(self, ready):
        with pytest.raises(SelectionNotFound):
            select_party(select_round(ready, 41210), "D1")

    def test_transaction_of_other_party(self, ready):
        state = select_party(select_round(ready, 41210), "P1")
        with pytest.raises(SelectionNotFound):
            select_transaction(state, "#b:0")


# ── Day branch ────────────────────────────────────────────────────────────────

class TestDayBranch:
    def test_full_drill_down(self, ready):
        state = select_day(ready, "2026-10-17")
        assert isinstance(state.view, DayPartiesView)

        state = select_party(state, "D1")
        assert isinstance(state.view, DayTransactionsView)
        assert state.selection.drill_context is DrillContext.DAY

        state = select_transaction(state, "#d:0")
        assert isinstance(state.view, DayDetailView)
        assert state.view.day.date == "2026-10-17"

    def test_back_from_detail(self, ready):
        state = select_transaction(select_party(select_day(ready, "2026-10-17"), "D1"), "#d:0")
        assert back(state).view.name == "day-transactions"
        assert back(back(state)).view.name == "day-parties"
        assert back(back(back(state))).view.name == "main"

    def test_unknown_day(self, ready):
        with pytest.raises(SelectionNotFound):
            select_day(ready, "1999-01-01")

    def test_switching_branches_updates_context(self, ready):
        day_state = select_party(select_day(ready, "2026-10-17"), "D1")
        home = back(back(day_state))
        round_state = select_party(select_round(home, 41210), "P1")
        assert round_state.selection.drill_context is DrillContext.ROUND
        assert round_state.selection.day.date == "2026-10-17"


# ── Actions not offered by the current view ───────────────────────────────────

class TestInvalidTransitions:
    def test_back_from_main(self, ready):
        with pytest.raises(InvalidTransition):
            back(ready)
        with pytest.raises(InvalidTransition):
            parent_view(MainView())

    def test_party_click_on_main(self, ready):
        with pytest.raises(InvalidTransition):
            select_party(ready, "P1")

    def test_round_click_off_main(self, ready):
        with pytest.raises(InvalidTransition):
            select_round(select_round(ready, 41210), 41210)

    def test_transaction_click_on_parties(self, ready):
        with pytest.raises(InvalidTransition):
            select_transaction(select_round(ready, 41210), "#a:0")

    def test_rejected_action_leaves_state_unchanged(self, ready):
        before = select_round(ready, 41210)
        with pytest.raises(InvalidTransition):
            select_day(before, "2026-10-17")
        assert isinstance(before.view, RoundPartiesView)


class TestImmutability:
    def test_states_are_frozen(self, ready):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ready.status = LoadStatus.FAILED

    def test_transition_returns_new_state(self, ready):
        after = select_round(ready, 41210)
        assert after is not ready
        assert isinstance(ready.view, MainView)

    def test_view_names(self):
        assert [v.name for v in (
            MainView, RoundPartiesView, DayPartiesView, RoundTransactionsView,
            DayTransactionsView, RoundDetailView, DayDetailView,
        )] == ["main", "round-parties", "day-parties", "round-transactions",
               "day-transactions", "round-detail", "day-detail"]

    def test_default_state_equals_initial(self):
        assert DashboardState() == initial_state()
