"""Multisig outputs and multisig signing requests."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from .crypto import Hash, hash_from_string, new_hash

UTXO_STATE_UNSPENT = "unspent"
UTXO_STATE_SIGNED = "signed"
UTXO_STATE_SPENT = "spent"

MULTISIG_ACTION_SIGN = "sign"
MULTISIG_ACTION_UNLOCK = "unlock"

MULTISIG_STATE_INITIAL = "initial"
MULTISIG_STATE_SIGNED = "signed"

_TIME_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)


def _parse_time(value: Any) -> datetime | None:
    if not value:
        return None
    match = _TIME_RE.match(str(value))
    if match is None:
        raise ValueError(f"invalid time {value!r}")
    base, fraction, zone = match.groups()
    text = base
    if fraction:
        text += "." + fraction[:6].ljust(6, "0")
    text += "+00:00" if zone == "Z" else zone
    return datetime.fromisoformat(text)


def _parse_decimal(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal(0)
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"invalid decimal {value!r}") from exc


def _parse_hash(value: Any) -> Hash:
    if not value:
        return Hash()
    return hash_from_string(value)


@dataclass
class MultisigUTXO:
    """An output owned jointly by a group of members."""

    type: str = ""
    user_id: str = ""
    utxo_id: str = ""
    asset_id: str = ""
    transaction_hash: Hash = Hash()
    output_index: int = 0
    sender: str = ""
    amount: Decimal = Decimal(0)
    threshold: int = 0
    members: list[str] = field(default_factory=list)
    memo: str = ""
    state: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    signed_by: str = ""
    signed_tx: str = ""

    def asset(self) -> Hash:
        """The network asset hash of this output's asset id."""
        return new_hash(self.asset_id.encode("utf-8"))


@dataclass
class MultisigRequest:
    """A request to sign or unlock a multisig transaction."""

    type: str = ""
    request_id: str = ""
    user_id: str = ""
    asset_id: str = ""
    amount: Decimal = Decimal(0)
    threshold: int = 0
    senders: list[str] = field(default_factory=list)
    receivers: list[str] = field(default_factory=list)
    signers: list[str] = field(default_factory=list)
    memo: str = ""
    action: str = ""
    state: str = ""
    transaction_hash: Hash = Hash()
    raw_transaction: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    code_id: str = ""


def hash_members(ids: list[str]) -> str:
    """Hex hash of the sorted, concatenated member ids."""
    return str(new_hash("".join(sorted(ids)).encode("utf-8")))


def multisig_utxo_from_dict(data: Mapping[str, Any]) -> MultisigUTXO:
    """Build a multisig output from its JSON form."""
    return MultisigUTXO(
        type=data.get("type") or "",
        user_id=data.get("user_id") or "",
        utxo_id=data.get("utxo_id") or "",
        asset_id=data.get("asset_id") or "",
        transaction_hash=_parse_hash(data.get("transaction_hash")),
        output_index=int(data.get("output_index") or 0),
        sender=data.get("sender") or "",
        amount=_parse_decimal(data.get("amount")),
        threshold=int(data.get("threshold") or 0),
        members=list(data.get("members") or []),
        memo=data.get("memo") or "",
        state=data.get("state") or "",
        created_at=_parse_time(data.get("created_at")),
        updated_at=_parse_time(data.get("updated_at")),
        signed_by=data.get("signed_by") or "",
        signed_tx=data.get("signed_tx") or "",
    )


def multisig_request_from_dict(data: Mapping[str, Any]) -> MultisigRequest:
    """Build a multisig request from its JSON form."""
    return MultisigRequest(
        type=data.get("type") or "",
        request_id=data.get("request_id") or "",
        user_id=data.get("user_id") or "",
        asset_id=data.get("asset_id") or "",
        amount=_parse_decimal(data.get("amount")),
        threshold=int(data.get("threshold") or 0),
        senders=list(data.get("senders") or []),
        receivers=list(data.get("receivers") or []),
        signers=list(data.get("signers") or []),
        memo=data.get("memo") or "",
        action=data.get("action") or "",
        state=data.get("state") or "",
        transaction_hash=_parse_hash(data.get("transaction_hash")),
        raw_transaction=data.get("raw_transaction") or "",
        created_at=_parse_time(data.get("created_at")),
        updated_at=_parse_time(data.get("updated_at")),
        code_id=data.get("code_id") or "",
    )