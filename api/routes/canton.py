"""JSON endpoint exposing the current round's burn aggregate."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.models import ErrorResponse, RoundOut, RoundResponse
from ledger.errors import UpstreamError, describe_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/canton", tags=["canton"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "status_code": status_code},
    )


@router.get(
    "",
    response_model=RoundResponse,
    summary="Current round burn aggregate",
    responses={
        502: {"model": ErrorResponse, "description": "Scan API failed or returned an unusable response"},
        500: {"model": ErrorResponse, "description": "Unexpected aggregation failure"},
    },
)
def current_round(request: Request):
    """Aggregate fee-burn events of the most recent updates into the current round.

    Fetches the open mining rounds and the latest 100 updates from the Scan
    API, in that order.  Nothing partial is returned: if either call fails
    the response is an error object.
    """
    source = request.app.state.source
    try:
        round_ = source.current_round()
    except UpstreamError as exc:
        logger.warning("canton_round_failed error=%s", exc)
        return _error(502, describe_error(exc))
    except Exception as exc:
        logger.exception("canton_round_crashed")
        return _error(500, describe_error(exc))
    return RoundResponse(round=RoundOut.from_domain(round_))
