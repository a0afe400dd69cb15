"""
Pydantic response models for the JSON API.

Field names are snake_case in Python and serialized under the camelCase
aliases the dashboard has always consumed (``burnCC``, ``partyId``, ...).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ledger.models import Party, Round, Transaction


class _Out(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


# ── Aggregate models ──────────────────────────────────────────────────────────

class TransactionOut(_Out):
    """One burn event with its fee breakdown. Fee fields are each 25% of burnCC."""
    id: str = Field(..., description="Event id from the transaction tree", examples=["#1220ab:3"])
    type: str = Field(..., description="Template entity name of the event", examples=["TrafficBurnEvent"])
    burn_cc: float = Field(..., alias="burnCC", description="Burned amount in Canton Coin")
    burn_usd: float = Field(..., alias="burnUSD", description="burnCC × amulet price")
    timestamp: str = Field(..., description="Record time of the update (ISO-8601)")
    holding_fee_cc: float = Field(..., alias="holdingFeeCC")
    traffic_fee_cc: float = Field(..., alias="trafficFeeCC")
    transfer_fee_cc: float = Field(..., alias="transferFeeCC")
    output_fee_cc: float = Field(..., alias="outputFeeCC")

    @classmethod
    def from_domain(cls, tx: Transaction) -> "TransactionOut":
        return cls(
            id=tx.id, type=tx.type, burn_cc=tx.burn_cc, burn_usd=tx.burn_usd,
            timestamp=tx.timestamp, holding_fee_cc=tx.holding_fee_cc,
            traffic_fee_cc=tx.traffic_fee_cc, transfer_fee_cc=tx.transfer_fee_cc,
            output_fee_cc=tx.output_fee_cc,
        )


class PartyOut(_Out):
    """Burn totals for one ledger party."""
    party_id: str = Field(..., alias="partyId", examples=["DSO::1220b143..."])
    total_burn_cc: float = Field(..., alias="totalBurnCC")
    total_burn_usd: float = Field(..., alias="totalBurnUSD")
    burn_events: int = Field(..., alias="burnEvents", ge=0)
    transactions: list[TransactionOut] = Field(..., description="In discovery order")

    @classmethod
    def from_domain(cls, party: Party) -> "PartyOut":
        return cls(
            party_id=party.party_id, total_burn_cc=party.total_burn_cc,
            total_burn_usd=party.total_burn_usd, burn_events=party.burn_events,
            transactions=[TransactionOut.from_domain(t) for t in party.transactions],
        )


class RoundOut(_Out):
    """Burn activity aggregated over the current mining round."""
    round: int = Field(..., description="Mining round number", examples=[41210])
    timestamp: str = Field(..., description="Time the aggregate was computed (ISO-8601)")
    total_burn_cc: float = Field(..., alias="totalBurnCC")
    total_burn_usd: float = Field(..., alias="totalBurnUSD")
    burn_events: int = Field(..., alias="burnEvents", ge=0)
    parties: list[PartyOut] = Field(..., description="In order of first sighting")

    @classmethod
    def from_domain(cls, round_: Round) -> "RoundOut":
        return cls(
            round=round_.round, timestamp=round_.timestamp,
            total_burn_cc=round_.total_burn_cc, total_burn_usd=round_.total_burn_usd,
            burn_events=round_.burn_events,
            parties=[PartyOut.from_domain(p) for p in round_.parties],
        )


class RoundResponse(_Out):
    """Response body for GET /api/canton."""
    round: RoundOut


# ── Error model ───────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="User-facing error message",
                       examples=["Upstream response field 'updates' is missing"])
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[502])
