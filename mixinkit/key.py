"""Curve25519 keys, ghost key derivation and signatures."""

from __future__ import annotations

import base64
import binascii
import hashlib
import secrets

from .crypto import new_hash

KEY_SIZE = 32
SIGNATURE_SIZE = 64
SEED_SIZE = 64

_P = 2**255 - 19
_L = 2**252 + 27742317777372353535851937790883648493
_D = -121665 * pow(121666, _P - 2, _P) % _P
_SQRT_M1 = pow(2, (_P - 1) // 4, _P)
_IDENTITY = (0, 1, 1, 0)
_UINT64_MASK = (1 << 64) - 1


def _decode_point(data: bytes):
    sign = data[31] >> 7
    y = (int.from_bytes(data, "little") & ((1 << 255) - 1)) % _P
    u = (y * y - 1) % _P
    v = (_D * y * y + 1) % _P
    x = u * pow(v, 3, _P) * pow(u * pow(v, 7, _P), (_P - 5) // 8, _P) % _P
    vxx = v * x * x % _P
    if vxx != u:
        if vxx != (-u) % _P:
            return None
        x = x * _SQRT_M1 % _P
    if (x & 1) != sign:
        x = (-x) % _P
    return (x, y, 1, x * y % _P)


def _encode_point(point) -> bytes:
    x, y, z, _ = point
    z_inv = pow(z, _P - 2, _P)
    x = x * z_inv % _P
    y = y * z_inv % _P
    return (y | ((x & 1) << 255)).to_bytes(32, "little")


def _add(p, q):
    x1, y1, z1, t1 = p
    x2, y2, z2, t2 = q
    a = (y1 - x1) * (y2 - x2) % _P
    b = (y1 + x1) * (y2 + x2) % _P
    c = 2 * _D * t1 * t2 % _P
    d = 2 * z1 * z2 % _P
    e, f, g, h = b - a, d - c, d + c, b + a
    return (e * f % _P, g * h % _P, f * g % _P, e * h % _P)


def _neg(p):
    x, y, z, t = p
    return ((-x) % _P, y, z, (-t) % _P)


def _scalar_mult(k: int, point):
    result = _IDENTITY
    while k:
        if k & 1:
            result = _add(result, point)
        point = _add(point, point)
        k >>= 1
    return result


_BASE = _decode_point((4 * pow(5, _P - 2, _P) % _P).to_bytes(32, "little"))


def _reduce(data: bytes) -> int:
    return int.from_bytes(data, "little") % _L


def _scalar(data: bytes) -> int:
    return int.from_bytes(data, "little")


def _uvarint(value: int) -> bytes:
    value &= _UINT64_MASK
    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def _unhex(text: str) -> bytes:
    try:
        return binascii.unhexlify(text)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"invalid hex string: {exc}") from exc


def _point_of(key: bytes):
    point = _decode_point(key)
    if point is None:
        raise ValueError(f"invalid public key {bytes(key).hex()}")
    return point


class Key(bytes):
    """A 32-byte scalar (private key) or encoded curve point (public key)."""

    def __new__(cls, data: bytes = bytes(KEY_SIZE)) -> "Key":
        obj = super().__new__(cls, data)
        if len(obj) != KEY_SIZE:
            raise ValueError(f"invalid key size {len(obj)}")
        return obj

    def check_key(self) -> bool:
        """Whether the bytes decode to a curve point."""
        return _decode_point(self) is not None

    def check_scalar(self) -> bool:
        """Whether the bytes are a reduced scalar."""
        return _scalar(self) < _L

    def public(self) -> "Key":
        return Key(_encode_point(_scalar_mult(_scalar(self), _BASE)))

    def has_value(self) -> bool:
        return any(self)

    def deterministic_hash_derive(self) -> "Key":
        seed = new_hash(self)
        return new_key_from_seed(seed + seed)

    def mult_scalar(self, output_index: int) -> "Key":
        digest = new_hash(bytes(self) + _uvarint(output_index))
        return new_key_from_seed(digest + new_hash(digest))

    def hash_scalar(self) -> "Key":
        digest = new_hash(self)
        return Key(_reduce(digest + new_hash(digest)).to_bytes(32, "little"))

    def sign(self, message: bytes) -> "Signature":
        """Sign ``message`` with this private scalar."""
        digest1 = hashlib.sha512(self[:32]).digest()
        r = _reduce(hashlib.sha512(digest1[32:] + message).digest())
        encoded_r = _encode_point(_scalar_mult(r, _BASE))
        challenge = _reduce(
            hashlib.sha512(encoded_r + self.public() + message).digest()
        )
        s = (challenge * _scalar(self) + r) % _L
        return Signature(encoded_r + s.to_bytes(32, "little"))

    def verify_with_challenge(
        self, message: bytes, signature: bytes, challenge: bytes
    ) -> bool:
        point = _decode_point(self)
        if point is None:
            return False
        s = _scalar(signature[32:])
        if s >= _L:
            return False
        check = _add(
            _scalar_mult(_scalar(challenge), _neg(point)),
            _scalar_mult(s, _BASE),
        )
        return _encode_point(check) == bytes(signature[:32])

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Check ``signature`` over ``message`` against this public key."""
        digest = hashlib.sha512(
            bytes(signature[:32]) + bytes(self) + message
        ).digest()
        challenge = _reduce(digest).to_bytes(32, "little")
        return self.verify_with_challenge(message, signature, challenge)

    def __str__(self) -> str:
        return self.hex()

    def to_json(self) -> str:
        return self.hex()


class Signature(bytes):
    """A 64-byte signature: encoded R followed by scalar s."""

    def __new__(cls, data: bytes = bytes(SIGNATURE_SIZE)) -> "Signature":
        obj = super().__new__(cls, data)
        if len(obj) != SIGNATURE_SIZE:
            raise ValueError(f"invalid signature length {len(obj)}")
        return obj

    def __str__(self) -> str:
        return self.hex()

    def to_json(self) -> str:
        return self.hex()


def new_key_from_seed(seed: bytes) -> Key:
    """Reduce a 64-byte seed to a scalar key."""
    if len(seed) != SEED_SIZE:
        raise ValueError(f"invalid seed length {len(seed)}")
    return Key(_reduce(seed).to_bytes(32, "little"))


def new_key(reader=None) -> Key:
    """Create a key from 64 bytes read from ``reader`` (system randomness by default)."""
    if reader is None:
        return new_key_from_seed(secrets.token_bytes(SEED_SIZE))
    seed = bytearray()
    while len(seed) < SEED_SIZE:
        chunk = reader.read(SEED_SIZE - len(seed))
        if not chunk:
            raise EOFError("random source exhausted")
        seed += chunk
    return new_key_from_seed(bytes(seed))


def key_from_string(s: str) -> Key:
    data = _unhex(s)
    if len(data) != KEY_SIZE:
        raise ValueError(f"invalid key size {len(data)}")
    return Key(data)


def key_from_json(value: str) -> Key:
    """Parse a key given as hex or standard base64."""
    try:
        data = _unhex(value)
    except ValueError:
        try:
            data = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"invalid key encoding: {exc}") from exc
    if len(data) != KEY_SIZE:
        raise ValueError(f"invalid key length {len(data)}")
    return Key(data)


def key_mult_pub_priv(pub: bytes, priv: bytes) -> Key:
    """Multiply the point ``pub`` by the scalar ``priv``."""
    pub, priv = Key(pub), Key(priv)
    if not pub.check_key():
        raise ValueError(f"invalid public key {pub}")
    if not priv.check_scalar():
        raise ValueError(f"invalid private key {priv}")
    return Key(_encode_point(_scalar_mult(_scalar(priv), _point_of(pub))))


def _ghost_scalar(pub: bytes, priv: bytes, output_index: int) -> int:
    shared = key_mult_pub_priv(pub, priv)
    return _scalar(shared.mult_scalar(output_index).hash_scalar())


def derive_ghost_public_key(r: bytes, a: bytes, b: bytes, output_index: int) -> Key:
    """One-time public key H(r*A)*G + B."""
    point = _point_of(b)
    scalar = _ghost_scalar(a, r, output_index)
    return Key(_encode_point(_add(point, _scalar_mult(scalar, _BASE))))


def derive_ghost_private_key(r: bytes, a: bytes, b: bytes, output_index: int) -> Key:
    """One-time private key H(a*R) + b."""
    scalar = _ghost_scalar(r, a, output_index)
    return Key(((_scalar(b) + scalar) % _L).to_bytes(32, "little"))


def view_ghost_output_key(p: bytes, a: bytes, r: bytes, output_index: int) -> Key:
    """Recover the spend public key P - H(a*R)*G."""
    point = _point_of(p)
    scalar = _ghost_scalar(r, a, output_index)
    return Key(_encode_point(_add(point, _neg(_scalar_mult(scalar, _BASE)))))


def signature_from_string(s: str) -> Signature:
    data = _unhex(s)
    if len(data) != SIGNATURE_SIZE:
        raise ValueError(f"invalid signature length {len(data)}")
    return Signature(data)