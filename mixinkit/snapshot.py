"""Snapshots of asset movements and the query parameters used to list them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Mapping

from .multisigs import _parse_decimal, _parse_time

ORDER_ASC = "ASC"
ORDER_DESC = "DESC"


@dataclass
class Snapshot:
    """A record of an asset moving into or out of an account."""

    snapshot_id: str = ""
    created_at: datetime | None = None
    trace_id: str = ""
    user_id: str = ""
    asset_id: str = ""
    chain_id: str = ""
    opponent_id: str = ""
    source: str = ""
    amount: Decimal = Decimal(0)
    opening_balance: Decimal = Decimal(0)
    closing_balance: Decimal = Decimal(0)
    memo: str = ""
    type: str = ""
    sender: str = ""
    receiver: str = ""
    transaction_hash: str = ""
    asset: dict[str, Any] | None = None


def snapshot_from_dict(data: Mapping[str, Any]) -> Snapshot:
    """Build a snapshot from its JSON form.

    A missing memo falls back to the ``data`` field, and a missing asset id
    falls back to the id of the embedded asset.
    """
    asset = data.get("asset")
    snapshot = Snapshot(
        snapshot_id=data.get("snapshot_id") or "",
        created_at=_parse_time(data.get("created_at")),
        trace_id=data.get("trace_id") or "",
        user_id=data.get("user_id") or "",
        asset_id=data.get("asset_id") or "",
        chain_id=data.get("chain_id") or "",
        opponent_id=data.get("opponent_id") or "",
        source=data.get("source") or "",
        amount=_parse_decimal(data.get("amount")),
        opening_balance=_parse_decimal(data.get("opening_balance")),
        closing_balance=_parse_decimal(data.get("closing_balance")),
        memo=data.get("memo") or "",
        type=data.get("type") or "",
        sender=data.get("sender") or "",
        receiver=data.get("receiver") or "",
        transaction_hash=data.get("transaction_hash") or "",
        asset=dict(asset) if asset is not None else None,
    )
    if not snapshot.memo:
        snapshot.memo = data.get("data") or ""
    if not snapshot.asset_id and snapshot.asset is not None:
        snapshot.asset_id = snapshot.asset.get("asset_id") or ""
    return snapshot


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    return text + "Z"


def build_read_snapshots_params(
    asset_id: str = "",
    offset: datetime | None = None,
    order: str = ORDER_DESC,
    limit: int = 0,
) -> dict[str, str]:
    """Query parameters for listing snapshots; unknown orders become DESC."""
    params: dict[str, str] = {}
    if asset_id:
        params["asset"] = asset_id
    if offset is not None:
        params["offset"] = _format_time(offset)
    params["order"] = order if order in (ORDER_ASC, ORDER_DESC) else ORDER_DESC
    if limit > 0:
        params["limit"] = str(limit)
    return params