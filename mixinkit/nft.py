"""NFO memos used to mint non-fungible tokens on the Mixin network."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal

PREFIX = "NFO"
VERSION = 0x00

MINT_ASSET_ID = "c94ac88f-4671-3976-b60a-09064f1811e8"
MINT_MINIMUM_COST = Decimal("0.001")

GROUP_MEMBERS = [
    "4b188942-9fb0-4b99-b4be-e741a06d1ebf",
    "dd655520-c919-4349-822f-af92fabdbdf4",
    "047061e6-496d-4c35-b06b-b0424a8a400d",
    "acf65344-c778-41ee-bacb-eb546bacfb9f",
    "a51006d0-146b-4b32-a2ce-7defbf0d7735",
    "cf4abd9c-2cfa-4b5a-b1bd-e2b61a83fabd",
    "50115496-7247-4e2c-857b-ec8680756bee",
]
GROUP_THRESHOLD = 5

NIL_UUID = uuid.UUID(int=0)
DEFAULT_COLLECTION_ID = str(NIL_UUID)
DEFAULT_CHAIN = uuid.UUID("43d61dcd-e413-450d-80b8-101d5e903357")
DEFAULT_CLASS = bytes.fromhex("3c8c161a18ae2c8b14fda1216fff7da88c419b5d")

_MAX_SLICE = 128
_MASK_BITS = 64


def _token_strip(token: bytes) -> bytes:
    stripped = bytes(token).lstrip(b"\x00")
    return stripped or b"\x00"


def _write_slice(out: bytearray, data: bytes) -> None:
    if len(data) >= _MAX_SLICE:
        raise ValueError(f"slice too long {len(data)}")
    out.append(len(data))
    out += data


def _parse_uuid_or_nil(text: str) -> uuid.UUID:
    try:
        return uuid.UUID(text)
    except (ValueError, TypeError, AttributeError):
        return NIL_UUID


@dataclass
class NFOMemo:
    """The memo of an NFT mint or transfer transaction."""

    prefix: str = PREFIX
    version: int = VERSION
    mask: int = 0
    chain: uuid.UUID = NIL_UUID
    class_: bytes = b""
    collection: uuid.UUID = NIL_UUID
    token: bytes = b""
    extra: bytes = field(default=b"")

    def mark(self, indexes: list[int]) -> None:
        """Toggle the mask bits at ``indexes``."""
        for i in indexes:
            if not 0 <= i < _MASK_BITS:
                raise ValueError(f"invalid NFO memo index {i}")
            self.mask ^= 1 << i

    def indexes(self) -> list[int]:
        """Positions of the set mask bits, in ascending order."""
        return [i for i in range(_MASK_BITS) if self.mask & (1 << i)]

    def will_mint(self) -> bool:
        return self.mask != 0

    def encode(self) -> bytes:
        """The wire form of this memo."""
        out = bytearray(self.prefix.encode("utf-8"))
        out.append(self.version)
        if self.mask:
            out.append(1)
            out += self.mask.to_bytes(8, "big")
            out += self.chain.bytes
            _write_slice(out, bytes(self.class_))
            _write_slice(out, self.collection.bytes)
            _write_slice(out, bytes(self.token))
            if bytes(self.token) != _token_strip(self.token):
                raise ValueError(f"invalid token format {bytes(self.token).hex()}")
        else:
            out.append(0)
        _write_slice(out, bytes(self.extra))
        return bytes(out)


def build_mint_nfo(collection: str, token: bytes, content_hash: bytes) -> bytes:
    """Encode a memo minting ``token`` of ``collection`` with a content hash."""
    if len(content_hash) != 32:
        raise ValueError(f"invalid content hash length {len(content_hash)}")
    memo = NFOMemo(
        chain=DEFAULT_CHAIN,
        class_=DEFAULT_CLASS,
        collection=_parse_uuid_or_nil(collection),
        token=bytes(token),
        extra=bytes(content_hash),
    )
    memo.mark([0])
    return memo.encode()


class _Reader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def read_byte(self) -> int:
        if self._pos >= len(self._data):
            raise ValueError("unexpected end of NFO memo")
        value = self._data[self._pos]
        self._pos += 1
        return value

    def read(self, size: int) -> bytes:
        if self._pos >= len(self._data):
            raise ValueError("unexpected end of NFO memo")
        chunk = self._data[self._pos : self._pos + size]
        self._pos += len(chunk)
        if len(chunk) != size:
            raise ValueError(f"data short {len(chunk)} {size}")
        return chunk

    def read_uint64(self) -> int:
        return int.from_bytes(self.read(8), "big")

    def read_uuid(self) -> uuid.UUID:
        return uuid.UUID(bytes=self.read(16))

    def read_bytes(self) -> bytes:
        length = self.read_byte()
        if length == 0:
            return b""
        return self.read(length)


def decode_nfo_memo(data: bytes) -> NFOMemo:
    """Parse and check an NFO memo; raise ValueError when malformed."""
    data = bytes(data)
    if len(data) < 4:
        raise ValueError(f"NFO length {len(data)}")
    if data[:3] != PREFIX.encode():
        raise ValueError(f"NFO prefix {list(data[:3])}")
    if data[3] != VERSION:
        raise ValueError(f"NFO version {data[3]}")

    reader = _Reader(data[4:])
    memo = NFOMemo()

    if reader.read_byte() == 1:
        memo.mask = reader.read_uint64()
        if memo.mask != 1:
            raise ValueError(f"invalid mask {memo.indexes()}")
        memo.chain = reader.read_uuid()
        if memo.chain != DEFAULT_CHAIN:
            raise ValueError(f"invalid chain {memo.chain}")
        memo.class_ = reader.read_bytes()
        if memo.class_ != DEFAULT_CLASS:
            raise ValueError(f"invalid class {memo.class_.hex()}")
        memo.collection = uuid.UUID(bytes=reader.read_bytes())
        memo.token = reader.read_bytes()
        if memo.token != _token_strip(memo.token):
            raise ValueError(f"invalid token format {memo.token.hex()}")

    memo.extra = reader.read_bytes()
    return memo