"""Transaction data structures of the Mixin network."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any

from .crypto import Hash, Script, TransactionExtra
from .key import Key, Signature
from .number import ZERO, Integer

TX_VERSION = 0x02


@dataclass
class MintData:
    """Newly minted tokens carried by an input."""

    group: str = ""
    batch: int = 0
    amount: Integer = ZERO


@dataclass
class DepositData:
    """An external deposit carried by an input."""

    chain: Hash = Hash()
    asset_key: str = ""
    transaction_hash: str = ""
    output_index: int = 0
    amount: Integer = ZERO


@dataclass
class WithdrawalData:
    """An external withdrawal carried by an output."""

    chain: Hash = Hash()
    asset_key: str = ""
    address: str = ""
    tag: str = ""


@dataclass
class Input:
    """A reference to a previous output, a deposit or a mint."""

    hash: Hash | None = None
    index: int = 0
    genesis: bytes = b""
    deposit: DepositData | None = None
    mint: MintData | None = None


@dataclass
class Output:
    """An amount locked to a set of keys by a script."""

    type: int = 0
    amount: Integer = ZERO
    keys: list[Key] = field(default_factory=list)
    withdrawal: WithdrawalData | None = None
    script: Script = Script(b"")
    mask: Key = Key()


@dataclass
class AggregatedSignature:
    """A single signature standing for the listed signer indexes."""

    signers: list[int] = field(default_factory=list)
    signature: Signature = Signature()


@dataclass
class Transaction:
    """A Mixin network transaction, optionally signed."""

    hash: Hash | None = None
    snapshot: Hash | None = None
    signatures: list[dict[int, Signature]] = field(default_factory=list)
    aggregated_signature: AggregatedSignature | None = None
    version: int = TX_VERSION
    asset: Hash = Hash()
    inputs: list[Input] = field(default_factory=list)
    outputs: list[Output] = field(default_factory=list)
    extra: TransactionExtra = TransactionExtra(b"")

    def to_json(self) -> dict[str, Any]:
        """A JSON-ready dictionary using the network's field names."""
        data: dict[str, Any] = {}
        if self.hash is not None:
            data["hash"] = self.hash.to_json()
        if self.snapshot is not None:
            data["snapshot"] = self.snapshot.to_json()
        if self.signatures:
            data["signatures"] = [
                {str(index): sig.to_json() for index, sig in sorted(sm.items())}
                for sm in self.signatures
            ]
        if self.aggregated_signature is not None:
            data["aggregated_signature"] = {
                "signers": list(self.aggregated_signature.signers),
                "signature": self.aggregated_signature.signature.to_json(),
            }
        data["version"] = self.version
        data["asset"] = self.asset.to_json()
        data["inputs"] = [_input_json(inp) for inp in self.inputs]
        data["outputs"] = [_output_json(out) for out in self.outputs]
        if self.extra:
            data["extra"] = str(TransactionExtra(self.extra))
        return data


def _input_json(inp: Input) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if inp.hash is not None:
        data["hash"] = inp.hash.to_json()
    if inp.index:
        data["index"] = inp.index
    if inp.genesis:
        data["genesis"] = base64.b64encode(inp.genesis).decode("ascii")
    if inp.deposit is not None:
        d = inp.deposit
        data["deposit"] = {
            "chain": d.chain.to_json(),
            "asset": d.asset_key,
            "transaction": d.transaction_hash,
            "index": d.output_index,
            "amount": d.amount.to_json(),
        }
    if inp.mint is not None:
        m = inp.mint
        data["mint"] = {
            "group": m.group,
            "batch": m.batch,
            "amount": m.amount.to_json(),
        }
    return data


def _output_json(out: Output) -> dict[str, Any]:
    data: dict[str, Any] = {"type": out.type, "amount": out.amount.to_json()}
    if out.keys:
        data["keys"] = [k.to_json() for k in out.keys]
    if out.withdrawal is not None:
        w = out.withdrawal
        data["withdrawal"] = {
            "chain": w.chain.to_json(),
            "asset": w.asset_key,
            "address": w.address,
            "tag": w.tag,
        }
    data["script"] = Script(out.script).to_json()
    data["mask"] = out.mask.to_json()
    return data