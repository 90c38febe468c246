"""Scripts, hashes and transaction extra data of the Mixin network."""

from __future__ import annotations

import base64
import binascii
import hashlib

OPERATOR_0 = 0x00
OPERATOR_64 = 0x40
OPERATOR_SUM = 0xFE
OPERATOR_CMP = 0xFF

HASH_SIZE = 32


def _unhex(text: str) -> bytes:
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex string: {exc}") from exc


def _unbase64(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid base64 string: {exc}") from exc


class Script(bytes):
    """An output script: compare operator, sum operator and a threshold."""

    def verify_format(self) -> None:
        """Raise ValueError unless this is a well-formed threshold script."""
        if len(self) != 3:
            raise ValueError(f"invalid script {len(self)}")
        if self[0] != OPERATOR_CMP or self[1] != OPERATOR_SUM:
            raise ValueError(f"invalid script {self[0]} {self[1]}")

    def validate(self, total: int) -> None:
        """Raise ValueError if ``total`` signatures do not meet the threshold."""
        self.verify_format()
        if total < self[2]:
            raise ValueError(f"invalid signature keys {total} {self[2]}")

    def __str__(self) -> str:
        return self.hex()

    def to_json(self) -> str:
        return self.hex()


def new_threshold_script(threshold: int) -> Script:
    """Build a script requiring ``threshold`` signatures."""
    return Script(bytes([OPERATOR_CMP, OPERATOR_SUM, threshold]))


def script_from_json(value: str) -> Script:
    return Script(_unhex(value))


class Hash(bytes):
    """A 32-byte SHA3-256 digest."""

    def __new__(cls, data: bytes = bytes(HASH_SIZE)) -> "Hash":
        obj = super().__new__(cls, data)
        if len(obj) != HASH_SIZE:
            raise ValueError(f"invalid hash length {len(obj)}")
        return obj

    def has_value(self) -> bool:
        return any(self)

    def __str__(self) -> str:
        return self.hex()

    def to_json(self) -> str:
        return self.hex()


def new_hash(data: bytes) -> Hash:
    """Return the SHA3-256 digest of ``data``."""
    return Hash(hashlib.sha3_256(data).digest())


def hash_from_string(src: str) -> Hash:
    """Parse a hex encoded hash."""
    return Hash(_unhex(src))


class TransactionExtra(bytes):
    """Free-form extra data attached to a transaction."""

    def __str__(self) -> str:
        return base64.b64encode(self).decode("ascii")

    def to_json(self) -> str:
        return str(self)


def extra_from_json(value: str) -> TransactionExtra:
    """Parse extra data given either as hex or as standard base64."""
    try:
        data = _unhex(value)
    except ValueError:
        data = _unbase64(value)
    return TransactionExtra(data)