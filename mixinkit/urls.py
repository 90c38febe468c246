"""Links in the ``mixin://`` scheme."""

from __future__ import annotations

from decimal import Decimal
from urllib.parse import quote, urlencode

from .inputs import TransferInput

SCHEME = "mixin"

_PATH_SAFE = "$&+,/:;=@"


def _format_decimal(value: Decimal) -> str:
    if value == 0:
        return "0"
    return format(value.normalize(), "f")


def _build(host: str, path: str = "", query: str = "") -> str:
    url = f"{SCHEME}://{host}"
    if path:
        if not path.startswith("/"):
            url += "/"
        url += quote(path, safe=_PATH_SAFE)
    if query:
        url += "?" + query
    return url


def _query(params: dict[str, str]) -> str:
    return urlencode(sorted(params.items()))


def users(user_id: str) -> str:
    return _build("users", user_id)


def transfer(user_id: str) -> str:
    return _build("transfer", user_id)


def pay(transfer_input: TransferInput) -> str:
    """A payment link for the given transfer."""
    return _build(
        "pay",
        query=_query(
            {
                "asset": transfer_input.asset_id,
                "trace": transfer_input.trace_id,
                "amount": _format_decimal(transfer_input.amount),
                "recipient": transfer_input.opponent_id,
                "memo": transfer_input.memo,
            }
        ),
    )


def codes(code: str) -> str:
    return _build("codes", code)


def snapshots(snapshot_id: str = "", trace_id: str = "") -> str:
    """A link to a snapshot by id, by trace id, or both."""
    query = _query({"trace": trace_id}) if trace_id else ""
    return _build("snapshots", snapshot_id, query)