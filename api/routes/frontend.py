"""
Frontend HTML routes for the burn dashboard.

The page is rendered from the dashboard state machine held per browser in
a ``SessionStore``.  Every click is an HTMX POST that applies one transition
and returns the re-rendered view partial.

Routes:
    GET  /                                → dashboard.html (mount: fresh loading state)
    POST /dashboard/load                  → runs the single data load
    POST /dashboard/rounds/{round}        → main → round-parties
    POST /dashboard/days/{date}           → main → day-parties
    POST /dashboard/parties/{party_id}    → parties → transactions
    POST /dashboard/transactions/{tx_id}  → transactions → detail
    POST /dashboard/back                  → parent view
    POST /dashboard/retry                 → fresh load after a failure
"""

import logging
from typing import Callable

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from dashboard.sessions import SessionStore
from dashboard.state import (
    DashboardState,
    InvalidTransition,
    LoadStatus,
    SelectionNotFound,
    back,
    load_failed,
    load_succeeded,
    retry,
    select_day,
    select_party,
    select_round,
    select_transaction,
)
from dashboard.views import render
from ledger.errors import UpstreamError, describe_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["frontend"])

SESSION_COOKIE = "burn_session"
LOAD_POLL_TRIGGER = "load delay:1s"

# Templates instance is set by create_app() after mounting.
_templates: Jinja2Templates | None = None


def set_templates(t: Jinja2Templates) -> None:
    global _templates
    _templates = t


def _tmpl() -> Jinja2Templates:
    if _templates is None:
        raise RuntimeError("Templates not initialised; call set_templates() first")
    return _templates


def _store(request: Request) -> SessionStore:
    return request.app.state.sessions


def _session(request: Request) -> tuple[str, DashboardState]:
    """Return (session id, state) or send the browser back to ``/``."""
    session_id = request.cookies.get(SESSION_COOKIE)
    state = _store(request).get(session_id) if session_id else None
    if state is None:
        raise HTTPException(
            status_code=410,
            detail="Dashboard session expired; reload the page",
            headers={"HX-Redirect": "/"},
        )
    return session_id, state


def _partial(request: Request, state: DashboardState,
             load_trigger: str | None = None) -> HTMLResponse:
    view = render(state)
    if load_trigger:
        view = {**view, "load_trigger": load_trigger}
    return _tmpl().TemplateResponse(request, "partials/view.html", {"view": view})


def _apply(request: Request, transition: Callable[..., DashboardState], *args) -> HTMLResponse:
    session_id, state = _session(request)
    try:
        new_state = transition(state, *args)
    except InvalidTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except SelectionNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    _store(request).put(session_id, new_state)
    return _partial(request, new_state)


# ── Routes ────────────────────────────────────────────────────────────────────

@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(request: Request) -> HTMLResponse:
    """Mount the dashboard: reset (or open) the session and show the loader."""
    store = _store(request)
    session_id = request.cookies.get(SESSION_COOKIE)
    if not session_id or not store.remount(session_id):
        session_id = store.create()
    state = store.get(session_id)

    response = _tmpl().TemplateResponse(
        request, "dashboard.html", {"view": render(state)},
    )
    response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
    return response


@router.post("/dashboard/load", response_class=HTMLResponse, include_in_schema=False)
def load(request: Request) -> HTMLResponse:
    """Run the one load that follows a mount (or a retry)."""
    session_id, state = _session(request)
    store = _store(request)
    if state.status is not LoadStatus.LOADING:
        return _partial(request, state)
    if not store.claim_load(session_id):
        # Another request of this session is loading; poll until it lands.
        return _partial(request, state, load_trigger=LOAD_POLL_TRIGGER)

    source = request.app.state.source
    try:
        data = source.load()
    except UpstreamError as exc:
        logger.warning("dashboard_load_failed session=%s error=%s", session_id[:8], exc)
        state = load_failed(state, describe_error(exc))
    except Exception as exc:
        logger.exception("dashboard_load_crashed session=%s", session_id[:8])
        state = load_failed(state, describe_error(exc))
    else:
        logger.info("dashboard_loaded session=%s rounds=%d days=%d",
                    session_id[:8], len(data.rounds), len(data.days))
        state = load_succeeded(state, data)
    store.put(session_id, state, release=True)
    return _partial(request, state)


@router.post("/dashboard/rounds/{round_number}", response_class=HTMLResponse,
             include_in_schema=False)
def choose_round(round_number: int, request: Request) -> HTMLResponse:
    return _apply(request, select_round, round_number)


@router.post("/dashboard/days/{date}", response_class=HTMLResponse, include_in_schema=False)
def choose_day(date: str, request: Request) -> HTMLResponse:
    return _apply(request, select_day, date)


@router.post("/dashboard/parties/{party_id:path}", response_class=HTMLResponse,
             include_in_schema=False)
def choose_party(party_id: str, request: Request) -> HTMLResponse:
    return _apply(request, select_party, party_id)


@router.post("/dashboard/transactions/{tx_id:path}", response_class=HTMLResponse,
             include_in_schema=False)
def choose_transaction(tx_id: str, request: Request) -> HTMLResponse:
    return _apply(request, select_transaction, tx_id)


@router.post("/dashboard/back", response_class=HTMLResponse, include_in_schema=False)
def go_back(request: Request) -> HTMLResponse:
    return _apply(request, back)


@router.post("/dashboard/retry", response_class=HTMLResponse, include_in_schema=False)
def retry_load(request: Request) -> HTMLResponse:
    """Reset to a loading state; the returned loader triggers the new load."""
    return _apply(request, retry)
