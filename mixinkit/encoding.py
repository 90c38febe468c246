"""Binary encoding of version 2 transactions."""

from __future__ import annotations

from collections.abc import Mapping

from .models import (
    TX_VERSION,
    AggregatedSignature,
    Input,
    Output,
    Transaction,
)
from .number import Integer

MAXIMUM_ENCODING_INT = 0xFFFF
AGGREGATED_SIGNATURE_PREFIX = 0xFF01
AGGREGATED_SIGNATURE_SPARSE_MASK = 0x01
AGGREGATED_SIGNATURE_ORDINARY_MASK = 0x00

MAGIC = b"\x77\x77"
NULL = b"\x00\x00"

_UINT64_LIMIT = 1 << 64


def _raw(text: str) -> bytes:
    return text.encode("utf-8", "surrogateescape")


class Encoder:
    """Accumulates the wire form of a transaction."""

    def __init__(self) -> None:
        self._buf = bytearray()

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def encode_transaction(self, signed: Transaction) -> bytes:
        """Encode ``signed`` and return everything written so far."""
        if signed.version != TX_VERSION:
            raise ValueError(f"unsupported transaction version {signed.version}")

        self.write(MAGIC)
        self.write(bytes([0x00, signed.version]))
        self.write(signed.asset)

        self.write_int(len(signed.inputs))
        for inp in signed.inputs:
            self.encode_input(inp)

        self.write_int(len(signed.outputs))
        for out in signed.outputs:
            self.encode_output(out)

        self.write_int(len(signed.extra))
        self.write(signed.extra)

        if signed.aggregated_signature is not None:
            self.encode_aggregated_signature(signed.aggregated_signature)
        else:
            count = len(signed.signatures)
            if count == MAXIMUM_ENCODING_INT:
                raise ValueError(f"too many signature groups {count}")
            self.write_int(count)
            for sm in signed.signatures:
                self.encode_signatures(sm)

        return self.getvalue()

    def encode_input(self, inp: Input) -> None:
        if inp.hash is None:
            raise ValueError("input without hash")
        self.write(inp.hash)
        self.write_int(inp.index)

        self.write_int(len(inp.genesis))
        self.write(inp.genesis)

        d = inp.deposit
        if d is None:
            self.write(NULL)
        else:
            self.write(MAGIC)
            self.write(d.chain)
            self._write_text(d.asset_key)
            self._write_text(d.transaction_hash)
            self.write_uint64(d.output_index)
            self.write_integer(d.amount)

        m = inp.mint
        if m is None:
            self.write(NULL)
        else:
            self.write(MAGIC)
            self._write_text(m.group)
            self.write_uint64(m.batch)
            self.write_integer(m.amount)

    def encode_output(self, output: Output) -> None:
        self.write(bytes([0x00, output.type]))
        self.write_integer(output.amount)
        self.write_int(len(output.keys))
        for k in output.keys:
            self.write(k)

        self.write(output.mask)
        self.write_int(len(output.script))
        self.write(output.script)

        w = output.withdrawal
        if w is None:
            self.write(NULL)
        else:
            self.write(MAGIC)
            self.write(w.chain)
            self._write_text(w.asset_key)
            self._write_text(w.address)
            self._write_text(w.tag)

    def encode_signatures(self, signatures: Mapping[int, bytes]) -> None:
        """Write a signature map ordered by signer index."""
        ordered = sorted(signatures.items())
        self.write_int(len(ordered))
        for index, sig in ordered:
            self.write_uint16(index)
            self.write(sig)

    def encode_aggregated_signature(self, signature: AggregatedSignature) -> None:
        self.write_int(MAXIMUM_ENCODING_INT)
        self.write_int(AGGREGATED_SIGNATURE_PREFIX)
        self.write(signature.signature)

        signers = signature.signers
        if not signers:
            self.write_byte(AGGREGATED_SIGNATURE_ORDINARY_MASK)
            self.write_int(0)
            return

        for previous, current in zip(signers, signers[1:]):
            if current <= previous:
                raise ValueError(f"signers not strictly increasing {signers}")
        if any(m > MAXIMUM_ENCODING_INT or m < 0 for m in signers):
            raise ValueError(f"signer out of range {signers}")

        highest = signers[-1]
        if highest // 8 + 1 > len(signers) * 2:
            self.write_byte(AGGREGATED_SIGNATURE_SPARSE_MASK)
            self.write_int(len(signers))
            for m in signers:
                self.write_int(m)
            return

        masks = bytearray(highest // 8 + 1)
        for m in signers:
            masks[m // 8] ^= 1 << (m % 8)
        self.write_byte(AGGREGATED_SIGNATURE_ORDINARY_MASK)
        self.write_int(len(masks))
        self.write(masks)

    def write(self, data: bytes) -> None:
        self._buf += data

    def write_byte(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte out of range {value}")
        self._buf.append(value)

    def write_int(self, value: int) -> None:
        if value > MAXIMUM_ENCODING_INT or value < 0:
            raise ValueError(f"int out of range {value}")
        self.write(value.to_bytes(2, "big"))

    def write_uint16(self, value: int) -> None:
        self.write_int(value)

    def write_uint64(self, value: int) -> None:
        if not 0 <= value < _UINT64_LIMIT:
            raise ValueError(f"uint64 out of range {value}")
        self.write(value.to_bytes(8, "big"))

    def write_integer(self, value: Integer) -> None:
        data = value.to_bytes()
        self.write_int(len(data))
        self.write(data)

    def _write_text(self, text: str) -> None:
        data = _raw(text)
        self.write_int(len(data))
        self.write(data)


def encode_transaction(signed: Transaction) -> bytes:
    """Encode a version 2 transaction to bytes."""
    return Encoder().encode_transaction(signed)