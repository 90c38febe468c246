"""Mixin main network addresses."""

from __future__ import annotations

from dataclasses import dataclass

from .crypto import Hash, new_hash, new_threshold_script
from .key import Key, derive_ghost_public_key, new_key
from .models import Output
from .number import integer_from_decimal

MAIN_NETWORK_ID = "XIN"

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {ch: i for i, ch in enumerate(_ALPHABET)}


def base58_encode(data: bytes) -> str:
    """Encode bytes with the Bitcoin base58 alphabet."""
    n = int.from_bytes(data, "big")
    digits = []
    while n:
        n, rem = divmod(n, 58)
        digits.append(_ALPHABET[rem])
    zeros = len(data) - len(bytes(data).lstrip(b"\x00"))
    return "1" * zeros + "".join(reversed(digits))


def base58_decode(text: str) -> bytes:
    """Decode Bitcoin base58 text; raise ValueError on invalid characters."""
    n = 0
    for ch in text:
        try:
            n = n * 58 + _INDEX[ch]
        except KeyError:
            raise ValueError(f"invalid base58 character {ch!r}") from None
    zeros = len(text) - len(text.lstrip("1"))
    body = n.to_bytes((n.bit_length() + 7) // 8, "big")
    return b"\x00" * zeros + body


@dataclass
class MixinnetAddress:
    """A spend and view key pair; private halves may be absent."""

    private_spend_key: Key = Key()
    private_view_key: Key = Key()
    public_spend_key: Key = Key()
    public_view_key: Key = Key()

    def __str__(self) -> str:
        keys = bytes(self.public_spend_key) + bytes(self.public_view_key)
        checksum = new_hash(MAIN_NETWORK_ID.encode() + keys)
        return MAIN_NETWORK_ID + base58_encode(keys + checksum[:4])

    def hash(self) -> Hash:
        return new_hash(bytes(self.public_spend_key) + bytes(self.public_view_key))

    def to_json(self) -> str:
        return str(self)

    def create_utxo(self, output_index: int, amount) -> Output:
        """A single-key output paying ``amount`` to this address."""
        r = new_key()
        ghost = derive_ghost_public_key(
            r, self.public_view_key, self.public_spend_key, output_index
        )
        return Output(
            type=0,
            script=new_threshold_script(1),
            amount=integer_from_decimal(amount),
            mask=r.public(),
            keys=[ghost],
        )


def new_mixinnet_address(reader=None, public: bool = False) -> MixinnetAddress:
    """Create a fresh address; with ``public`` the view key is derived from the spend key."""
    private_spend = new_key(reader)
    private_view = new_key(reader)
    public_spend = private_spend.public()
    if public:
        private_view = public_spend.deterministic_hash_derive()
    return MixinnetAddress(
        private_spend_key=private_spend,
        private_view_key=private_view,
        public_spend_key=public_spend,
        public_view_key=private_view.public(),
    )


def mixinnet_address_from_string(s: str) -> MixinnetAddress:
    """Parse an ``XIN`` address string."""
    if not s.startswith(MAIN_NETWORK_ID):
        raise ValueError("invalid address network")
    try:
        data = base58_decode(s[len(MAIN_NETWORK_ID):])
    except ValueError:
        raise ValueError("invalid address format") from None
    if len(data) != 68:
        raise ValueError("invalid address format")
    checksum = new_hash(MAIN_NETWORK_ID.encode() + data[:64])
    if checksum[:4] != data[64:]:
        raise ValueError("invalid address checksum")
    return MixinnetAddress(
        public_spend_key=Key(data[:32]),
        public_view_key=Key(data[32:64]),
    )


def mixinnet_address_from_public_spend(public_spend: Key) -> MixinnetAddress:
    """An address whose view key is derived from its public spend key."""
    public_spend = Key(public_spend)
    private_view = public_spend.deterministic_hash_derive()
    return MixinnetAddress(
        public_spend_key=public_spend,
        private_view_key=private_view,
        public_view_key=private_view.public(),
    )