"""Transaction serialization, hashing and multisig transaction inputs."""

from __future__ import annotations

import binascii
import dataclasses
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

import msgpack

from .crypto import Hash, Script, TransactionExtra, new_hash, new_threshold_script
from .decoding import decode_transaction
from .encoding import MAGIC, encode_transaction
from .key import Key, Signature, key_from_json
from .models import (
    TX_VERSION,
    DepositData,
    Input,
    MintData,
    Output,
    Transaction,
    WithdrawalData,
)
from .multisigs import MultisigUTXO
from .number import EXT_TYPE, ZERO, Integer, integer_from_bytes, integer_from_decimal

_VERSION_HEADER = MAGIC + bytes([0x00, TX_VERSION])


def _as_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"invalid decimal {value!r}") from exc


# --- msgpack form used by version 0 and 1 transactions ---


def _pack_integer(value: Integer) -> msgpack.ExtType:
    return msgpack.ExtType(EXT_TYPE, value.to_bytes())


def _pack_input(inp: Input) -> dict[str, Any]:
    deposit = None
    if inp.deposit is not None:
        d = inp.deposit
        deposit = {
            "Chain": bytes(d.chain),
            "AssetKey": d.asset_key,
            "TransactionHash": d.transaction_hash,
            "OutputIndex": d.output_index,
            "Amount": _pack_integer(d.amount),
        }
    mint = None
    if inp.mint is not None:
        m = inp.mint
        mint = {"Group": m.group, "Batch": m.batch, "Amount": _pack_integer(m.amount)}
    return {
        "Hash": bytes(inp.hash) if inp.hash is not None else None,
        "Index": inp.index,
        "Genesis": bytes(inp.genesis) or None,
        "Deposit": deposit,
        "Mint": mint,
    }


def _pack_output(out: Output) -> dict[str, Any]:
    data: dict[str, Any] = {
        "Type": out.type,
        "Amount": _pack_integer(out.amount),
        "Keys": [bytes(k) for k in out.keys] or None,
    }
    if out.withdrawal is not None:
        w = out.withdrawal
        data["Withdrawal"] = {
            "Chain": bytes(w.chain),
            "AssetKey": w.asset_key,
            "Address": w.address,
            "Tag": w.tag,
        }
    data["Script"] = bytes(out.script) or None
    data["Mask"] = bytes(out.mask)
    return data


def _pack_signatures(signatures: list[dict[int, Signature]]) -> list[list[bytes]]:
    groups = []
    for sm in signatures:
        group: list[bytes | None] = [None] * len(sm)
        for index, sig in sm.items():
            if not 0 <= index < len(group):
                raise ValueError(f"signature index {index} out of range")
            group[index] = bytes(sig)
        groups.append(group)
    return groups


def _pack_v1(tx: Transaction) -> bytes:
    data: dict[str, Any] = {
        "Version": tx.version,
        "Asset": bytes(tx.asset),
        "Inputs": [_pack_input(i) for i in tx.inputs] or None,
        "Outputs": [_pack_output(o) for o in tx.outputs] or None,
        "Extra": bytes(tx.extra) or None,
    }
    if tx.signatures:
        data["Signatures"] = _pack_signatures(tx.signatures)
    return msgpack.packb(data, use_bin_type=True)


def _ext_hook(code: int, data: bytes) -> Any:
    if code == EXT_TYPE:
        return integer_from_bytes(data)
    return msgpack.ExtType(code, data)


def _field(data: Mapping[str, Any], name: str, default: Any) -> Any:
    value = data.get(name)
    return default if value is None else value


def _integer(value: Any) -> Integer:
    if value is None:
        return ZERO
    if not isinstance(value, Integer):
        raise ValueError(f"invalid amount {value!r}")
    return value


def _unpack_input(data: Mapping[str, Any]) -> Input:
    raw_hash = data.get("Hash")
    inp = Input(
        hash=Hash(raw_hash) if raw_hash is not None else None,
        index=_field(data, "Index", 0),
        genesis=bytes(_field(data, "Genesis", b"")),
    )
    deposit = data.get("Deposit")
    if deposit is not None:
        inp.deposit = DepositData(
            chain=Hash(_field(deposit, "Chain", bytes(32))),
            asset_key=_field(deposit, "AssetKey", ""),
            transaction_hash=_field(deposit, "TransactionHash", ""),
            output_index=_field(deposit, "OutputIndex", 0),
            amount=_integer(deposit.get("Amount")),
        )
    mint = data.get("Mint")
    if mint is not None:
        inp.mint = MintData(
            group=_field(mint, "Group", ""),
            batch=_field(mint, "Batch", 0),
            amount=_integer(mint.get("Amount")),
        )
    return inp


def _unpack_output(data: Mapping[str, Any]) -> Output:
    out = Output(
        type=_field(data, "Type", 0),
        amount=_integer(data.get("Amount")),
        keys=[Key(k) for k in _field(data, "Keys", [])],
        script=Script(_field(data, "Script", b"")),
        mask=Key(_field(data, "Mask", bytes(32))),
    )
    withdrawal = data.get("Withdrawal")
    if withdrawal is not None:
        out.withdrawal = WithdrawalData(
            chain=Hash(_field(withdrawal, "Chain", bytes(32))),
            asset_key=_field(withdrawal, "AssetKey", ""),
            address=_field(withdrawal, "Address", ""),
            tag=_field(withdrawal, "Tag", ""),
        )
    return out


def _transaction_v1_from_raw(data: bytes) -> Transaction:
    try:
        body = msgpack.unpackb(
            data, raw=False, ext_hook=_ext_hook, strict_map_key=False
        )
    except (ValueError, TypeError, msgpack.exceptions.UnpackException) as exc:
        raise ValueError(f"invalid transaction data: {exc}") from exc
    if not isinstance(body, dict):
        raise ValueError("invalid transaction data")
    try:
        tx = Transaction(
            version=_field(body, "Version", 0),
            asset=Hash(_field(body, "Asset", bytes(32))),
            inputs=[_unpack_input(i) for i in _field(body, "Inputs", [])],
            outputs=[_unpack_output(o) for o in _field(body, "Outputs", [])],
            extra=TransactionExtra(_field(body, "Extra", b"")),
        )
        tx.signatures = [
            {index: Signature(sig) for index, sig in enumerate(group) if sig is not None}
            for group in _field(body, "Signatures", [])
        ]
    except (AttributeError, TypeError) as exc:
        raise ValueError(f"invalid transaction data: {exc}") from exc
    return tx


# --- public serialization API ---


def dump_transaction_data(tx: Transaction) -> bytes:
    """Serialize a transaction according to its version."""
    if tx.version in (0, 1):
        return _pack_v1(tx)
    if tx.version == TX_VERSION:
        return encode_transaction(tx)
    raise ValueError("unknown tx version")


def dump_transaction(tx: Transaction) -> str:
    """Hex encoded serialized transaction."""
    return dump_transaction_data(tx).hex()


def dump_transaction_payload(tx: Transaction) -> bytes:
    """Serialized transaction without any signatures."""
    return dump_transaction_data(
        dataclasses.replace(tx, signatures=[], aggregated_signature=None)
    )


def transaction_hash(tx: Transaction) -> Hash:
    """Hash of the unsigned payload, cached on the transaction."""
    if tx.hash is None:
        tx.hash = new_hash(dump_transaction_payload(tx))
    return tx.hash


def check_tx_version(data: bytes) -> bool:
    """Whether ``data`` starts with the version 2 header."""
    return len(data) >= 4 and bytes(data[:4]) == _VERSION_HEADER


def transaction_from_raw(raw: str) -> Transaction:
    """Parse a hex encoded transaction of any supported version."""
    try:
        data = binascii.unhexlify(raw)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex string: {exc}") from exc
    if not check_tx_version(data):
        return _transaction_v1_from_raw(data)
    return decode_transaction(data)


# --- building multisig transactions ---


@dataclass
class TransactionOutput:
    """A planned output: receivers, threshold and amount."""

    receivers: list[str] = field(default_factory=list)
    threshold: int = 0
    amount: Decimal = Decimal(0)


@dataclass
class TransactionInput:
    """Multisig outputs to spend and the outputs to create."""

    memo: str = ""
    inputs: list[MultisigUTXO] = field(default_factory=list)
    outputs: list[TransactionOutput] = field(default_factory=list)
    hint: str = ""

    def append_utxo(self, utxo: MultisigUTXO) -> None:
        self.inputs.append(utxo)

    def append_output(self, receivers: list[str], threshold: int, amount) -> None:
        self.outputs.append(
            TransactionOutput(list(receivers), threshold, _as_decimal(amount))
        )

    def asset(self) -> Hash:
        """Asset hash of the first input, or the zero hash."""
        if not self.inputs:
            return Hash()
        return self.inputs[0].asset()

    def total_input_amount(self) -> Decimal:
        return sum((_as_decimal(u.amount) for u in self.inputs), Decimal(0))

    def validate(self) -> None:
        """Raise ValueError if inputs and outputs do not form a valid spend."""
        if not self.inputs:
            raise ValueError("no input utxo")

        members: set[str] = set()
        total = self.total_input_amount()
        asset = self.asset()

        for utxo in self.inputs:
            if utxo.asset() != asset:
                raise ValueError("invalid input utxo, asset not matched")
            if not members:
                members = set(utxo.members)
                continue
            if len(members) != len(utxo.members) or any(
                m not in members for m in utxo.members
            ):
                raise ValueError("invalid input utxo, member not matched")

        for output in self.outputs:
            if output.threshold == 0 or output.threshold > len(output.receivers):
                raise ValueError(f"invalid output threshold: {output.threshold}")
            amount = _as_decimal(output.amount)
            if amount <= 0:
                raise ValueError(f"invalid output amount: {amount}")
            total -= amount
            if total < 0:
                raise ValueError("invalid output: amount exceed")


@dataclass
class GhostKeys:
    """One-time keys and their mask for a transaction output."""

    mask: Key = Key()
    keys: list[Key] = field(default_factory=list)

    def dump_output(self, threshold: int, amount) -> Output:
        """An output locked to these keys with the given threshold."""
        return Output(
            mask=self.mask,
            keys=list(self.keys),
            amount=integer_from_decimal(amount),
            script=new_threshold_script(threshold),
        )


@dataclass
class GhostInput:
    """A request for ghost keys of the given receivers."""

    receivers: list[str] = field(default_factory=list)
    index: int = 0
    hint: str = ""


def ghost_keys_from_dict(data: Mapping[str, Any]) -> GhostKeys:
    """Build ghost keys from their JSON form."""
    mask = data.get("mask")
    return GhostKeys(
        mask=key_from_json(mask) if mask else Key(),
        keys=[key_from_json(k) for k in data.get("keys") or []],
    )