"""Decoding of version 2 transactions from their binary form."""

from __future__ import annotations

from .crypto import Hash, Script, TransactionExtra
from .encoding import (
    AGGREGATED_SIGNATURE_ORDINARY_MASK,
    AGGREGATED_SIGNATURE_PREFIX,
    AGGREGATED_SIGNATURE_SPARSE_MASK,
    MAGIC,
    MAXIMUM_ENCODING_INT,
    NULL,
)
from .key import Key, Signature
from .models import (
    TX_VERSION,
    AggregatedSignature,
    DepositData,
    Input,
    MintData,
    Output,
    Transaction,
    WithdrawalData,
)
from .number import Integer, integer_from_bytes

_VERSION_HEADER = MAGIC + bytes([0x00, TX_VERSION])


class DecodeError(ValueError):
    """Raised when transaction bytes are malformed."""


def _text(data: bytes) -> str:
    return data.decode("utf-8", "surrogateescape")


class Decoder:
    """Reads transaction fields from a byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def decode_transaction(self) -> Transaction:
        header = self.read(4)
        if header != _VERSION_HEADER:
            raise DecodeError(f"invalid version {list(header)}")

        tx = Transaction(version=TX_VERSION)
        tx.asset = Hash(self.read(32))

        tx.inputs = [self.read_input() for _ in range(self.read_int())]
        tx.outputs = [self.read_output() for _ in range(self.read_int())]
        tx.extra = TransactionExtra(self.read_bytes())

        count = self.read_int()
        if count == MAXIMUM_ENCODING_INT:
            prefix = self.read_int()
            if prefix != AGGREGATED_SIGNATURE_PREFIX:
                raise DecodeError(f"invalid prefix {prefix}")
            tx.aggregated_signature = self.read_aggregated_signature()
        else:
            tx.signatures = [self.read_signatures() for _ in range(count)]

        if self._pos < len(self._data):
            raise DecodeError(f"unexpected ending {self._data[self._pos]}")
        return tx

    def read_input(self) -> Input:
        inp = Input(hash=Hash(self.read(32)))
        inp.index = self.read_int()
        inp.genesis = self.read_bytes()

        if self.read_magic():
            inp.deposit = DepositData(
                chain=Hash(self.read(32)),
                asset_key=_text(self.read_bytes()),
                transaction_hash=_text(self.read_bytes()),
                output_index=self.read_uint64(),
                amount=self.read_integer(),
            )

        if self.read_magic():
            inp.mint = MintData(
                group=_text(self.read_bytes()),
                batch=self.read_uint64(),
                amount=self.read_integer(),
            )
        return inp

    def read_output(self) -> Output:
        kind = self.read(2)
        if kind[0] != 0:
            raise DecodeError(f"invalid output type {list(kind)}")
        out = Output(type=kind[1])
        out.amount = self.read_integer()
        out.keys = [Key(self.read(32)) for _ in range(self.read_int())]
        out.mask = Key(self.read(32))
        out.script = Script(self.read_bytes())

        if self.read_magic():
            out.withdrawal = WithdrawalData(
                chain=Hash(self.read(32)),
                asset_key=_text(self.read_bytes()),
                address=_text(self.read_bytes()),
                tag=_text(self.read_bytes()),
            )
        return out

    def read_signatures(self) -> dict[int, Signature]:
        count = self.read_int()
        signatures: dict[int, Signature] = {}
        for _ in range(count):
            index = self.read_uint16()
            signatures[index] = Signature(self.read(64))
        if len(signatures) != count:
            raise DecodeError(f"signatures count {count} {sorted(signatures)}")
        return signatures

    def read(self, size: int) -> bytes:
        """Read exactly ``size`` bytes."""
        if self._pos >= len(self._data):
            raise DecodeError("unexpected end of data")
        chunk = self._data[self._pos : self._pos + size]
        self._pos += len(chunk)
        if len(chunk) != size:
            raise DecodeError(f"data short {len(chunk)} {size}")
        return chunk

    def read_int(self) -> int:
        return int.from_bytes(self.read(2), "big")

    def read_uint16(self) -> int:
        return self.read_int()

    def read_uint64(self) -> int:
        return int.from_bytes(self.read(8), "big")

    def read_integer(self) -> Integer:
        return integer_from_bytes(self.read(self.read_int()))

    def read_bytes(self) -> bytes:
        """Read a length-prefixed byte string."""
        length = self.read_int()
        if length == 0:
            return b""
        return self.read(length)

    def read_magic(self) -> bool:
        """Whether an optional section follows."""
        marker = self.read(2)
        if marker == MAGIC:
            return True
        if marker == NULL:
            return False
        raise DecodeError(f"malformed {list(marker)}")

    def read_aggregated_signature(self) -> AggregatedSignature:
        agg = AggregatedSignature(signature=Signature(self.read(64)))
        mask_type = self.read(1)[0]
        if mask_type == AGGREGATED_SIGNATURE_SPARSE_MASK:
            agg.signers = [self.read_int() for _ in range(self.read_int())]
        elif mask_type == AGGREGATED_SIGNATURE_ORDINARY_MASK:
            masks = self.read_bytes()
            agg.signers = [
                i * 8 + j
                for i, byte in enumerate(masks)
                for j in range(8)
                if byte & (1 << j)
            ]
        else:
            raise DecodeError(f"invalid mask type {mask_type}")
        return agg


def decode_transaction(data: bytes) -> Transaction:
    """Decode a version 2 transaction from bytes."""
    return Decoder(data).decode_transaction()