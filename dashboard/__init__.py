"""Dashboard view state machine, view projections and session storage."""

from dashboard.sessions import SessionStore
from dashboard.state import (
    DashboardState,
    DrillContext,
    InvalidTransition,
    LoadStatus,
    SelectionNotFound,
    back,
    initial_state,
    load_failed,
    load_succeeded,
    retry,
    select_day,
    select_party,
    select_round,
    select_transaction,
)
from dashboard.views import render

__all__ = [
    "SessionStore",
    "DashboardState",
    "DrillContext",
    "InvalidTransition",
    "LoadStatus",
    "SelectionNotFound",
    "back",
    "initial_state",
    "load_failed",
    "load_succeeded",
    "retry",
    "select_day",
    "select_party",
    "select_round",
    "select_transaction",
    "render",
]
