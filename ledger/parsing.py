"""Shape validation for Scan API responses.

Each parser walks the JSON it is given, raises ``MissingFieldError`` naming
the first required field that is absent, and returns small typed records the
aggregator can trust.  Optional parts of the payload (a missing transaction
tree, an event that is not a ``created`` event) are skipped, not reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ledger.errors import MissingFieldError

DEFAULT_PRICE = 1.0


@dataclass(frozen=True)
class RoundInfo:
    number: int
    price: float = DEFAULT_PRICE


@dataclass(frozen=True)
class CreatedEvent:
    event_id: str
    entity_name: str


@dataclass(frozen=True)
class UpdateRecord:
    record_time: str | None
    # Non-string entries are kept as None so roots[0] stays the first root.
    roots: tuple[str | None, ...]
    events: tuple[CreatedEvent, ...]


def _require_mapping(value: Any, field: str) -> dict:
    if not isinstance(value, dict):
        raise MissingFieldError(field, "missing" if value is None else "not an object")
    return value


def parse_round_info(payload: Any) -> RoundInfo:
    """Extract the current round number and amulet price.

    Both come from the first entry of ``open_mining_rounds``.  The price
    defaults to 1.0 when the network does not report one.
    """
    body = _require_mapping(payload, "$")
    rounds = body.get("open_mining_rounds")
    if not isinstance(rounds, list):
        raise MissingFieldError("open_mining_rounds")
    if not rounds:
        raise MissingFieldError("open_mining_rounds[0].payload.round.number",
                                "missing (no open mining rounds)")

    first = rounds[0] if isinstance(rounds[0], dict) else {}
    inner = first.get("payload") if isinstance(first.get("payload"), dict) else {}
    round_obj = inner.get("round") if isinstance(inner.get("round"), dict) else {}

    raw_number = round_obj.get("number")
    field = "open_mining_rounds[0].payload.round.number"
    if raw_number is None:
        raise MissingFieldError(field)
    if isinstance(raw_number, bool) or (
            isinstance(raw_number, float) and not raw_number.is_integer()):
        raise MissingFieldError(field, f"not an integer ({raw_number!r})")
    try:
        number = int(raw_number)
    except (TypeError, ValueError):
        raise MissingFieldError(field, f"not an integer ({raw_number!r})") from None

    raw_price = inner.get("amulet_price")
    if raw_price is None:
        return RoundInfo(number=number)
    try:
        price = float(raw_price)
    except (TypeError, ValueError):
        raise MissingFieldError("open_mining_rounds[0].payload.amulet_price",
                                f"not a number ({raw_price!r})") from None
    return RoundInfo(number=number, price=price)


def entity_name_of(template_id: Any) -> str | None:
    """Return the entity name of a template id.

    Accepts the structured form ``{"entity_name": ...}`` as well as the
    string form ``"<package>:<Module>:<Entity>"``.
    """
    if isinstance(template_id, dict):
        name = template_id.get("entity_name")
        return name if isinstance(name, str) else None
    if isinstance(template_id, str) and template_id:
        return template_id.rsplit(":", 1)[-1]
    return None


def _parse_update(item: Any) -> UpdateRecord | None:
    if not isinstance(item, dict):
        return None
    update = item.get("update")
    tree = update.get("transaction_tree") if isinstance(update, dict) else None
    if not isinstance(tree, dict):
        return None

    roots = tuple(r if isinstance(r, str) else None for r in tree.get("roots") or ())
    events_by_id = tree.get("events_by_id")
    events: list[CreatedEvent] = []
    if isinstance(events_by_id, dict):
        for event_id, event in events_by_id.items():
            created = event.get("created") if isinstance(event, dict) else None
            if not isinstance(created, dict):
                continue
            name = entity_name_of(created.get("template_id"))
            if name:
                events.append(CreatedEvent(event_id=str(event_id), entity_name=name))

    record_time = item.get("record_time")
    return UpdateRecord(
        record_time=record_time if isinstance(record_time, str) else None,
        roots=roots,
        events=tuple(events),
    )


def parse_updates(payload: Any) -> list[UpdateRecord]:
    """Parse an updates page, keeping only records that carry a transaction tree."""
    body = _require_mapping(payload, "$")
    updates = body.get("updates")
    if not isinstance(updates, list):
        raise MissingFieldError("updates")
    records = []
    for item in updates:
        record = _parse_update(item)
        if record is not None:
            records.append(record)
    return records
