"""Request bodies for transfers, withdrawals and payments."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

PAYMENT_STATUS_PENDING = "pending"
PAYMENT_STATUS_PAID = "paid"


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"invalid decimal {value!r}") from exc


def _format_decimal(value: Decimal) -> str:
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


def _put(data: dict[str, Any], key: str, value: Any) -> None:
    if value:
        data[key] = value


@dataclass
class OpponentMultisig:
    """Receivers and threshold of a multisig destination."""

    receivers: list[str] = field(default_factory=list)
    threshold: int = 0

    def _to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        _put(data, "receivers", list(self.receivers))
        _put(data, "threshold", self.threshold)
        return data


@dataclass
class TransferInput:
    """Input of a transfer or a payment verification."""

    asset_id: str = ""
    opponent_id: str = ""
    amount: Decimal = Decimal(0)
    trace_id: str = ""
    memo: str = ""
    opponent_key: str = ""
    opponent_multisig: OpponentMultisig = field(default_factory=OpponentMultisig)

    def __post_init__(self) -> None:
        self.amount = _to_decimal(self.amount)

    def to_dict(self) -> dict[str, Any]:
        """The JSON body, leaving out empty optional fields."""
        data: dict[str, Any] = {}
        _put(data, "asset_id", self.asset_id)
        _put(data, "opponent_id", self.opponent_id)
        data["amount"] = _format_decimal(self.amount)
        _put(data, "trace_id", self.trace_id)
        _put(data, "memo", self.memo)
        _put(data, "opponent_key", self.opponent_key)
        data["opponent_multisig"] = self.opponent_multisig._to_dict()
        return data


@dataclass
class WithdrawInput:
    """Input of a withdrawal to a saved address."""

    address_id: str = ""
    amount: Decimal = Decimal(0)
    trace_id: str = ""
    memo: str = ""

    def __post_init__(self) -> None:
        self.amount = _to_decimal(self.amount)

    def to_dict(self) -> dict[str, Any]:
        """The JSON body, leaving out empty optional fields."""
        data: dict[str, Any] = {}
        _put(data, "address_id", self.address_id)
        data["amount"] = _format_decimal(self.amount)
        _put(data, "trace_id", self.trace_id)
        _put(data, "memo", self.memo)
        return data


@dataclass
class Payment:
    """The state of a payment as reported by the API."""

    recipient: dict[str, Any] | None = None
    asset: dict[str, Any] | None = None
    asset_id: str = ""
    amount: str = ""
    trace_id: str = ""
    status: str = ""
    memo: str = ""
    receivers: list[str] = field(default_factory=list)
    threshold: int = 0
    code_id: str = ""


def payment_from_dict(data: Mapping[str, Any]) -> Payment:
    """Build a payment from its JSON form."""
    recipient = data.get("recipient")
    asset = data.get("asset")
    return Payment(
        recipient=dict(recipient) if recipient is not None else None,
        asset=dict(asset) if asset is not None else None,
        asset_id=data.get("asset_id") or "",
        amount=str(data.get("amount") or ""),
        trace_id=data.get("trace_id") or "",
        status=data.get("status") or "",
        memo=data.get("memo") or "",
        receivers=list(data.get("receivers") or []),
        threshold=int(data.get("threshold") or 0),
        code_id=data.get("code_id") or "",
    )