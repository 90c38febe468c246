"""Fixed-point amounts with eight decimal places."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

PRECISION = 8
EXT_TYPE = 0

_SCALE = 10**PRECISION
_UINT64_LIMIT = 1 << 64


@dataclass(frozen=True, order=True)
class Integer:
    """An amount stored as an integer count of 10^-8 units."""

    value: int = 0

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f"negative integer {self.value}")

    def __str__(self) -> str:
        s = str(self.value)
        p = len(s) - PRECISION
        if p > 0:
            return s[:p] + "." + s[p:]
        return "0." + "0" * (-p) + s

    def to_bytes(self) -> bytes:
        """Minimal big-endian bytes of the underlying value."""
        return self.value.to_bytes((self.value.bit_length() + 7) // 8, "big")

    def to_json(self) -> str:
        return str(self)


def new_integer(x: int) -> Integer:
    """An integer holding ``x`` whole units."""
    if not 0 <= x < _UINT64_LIMIT:
        raise ValueError(f"integer out of range {x}")
    return Integer(x * _SCALE)


def _to_decimal(d) -> Decimal:
    if isinstance(d, Decimal):
        value = d
    elif isinstance(d, float):
        value = Decimal(repr(d))
    else:
        try:
            value = Decimal(d)
        except (InvalidOperation, TypeError, ValueError) as exc:
            raise ValueError(f"invalid decimal {d!r}") from exc
    if not value.is_finite():
        raise ValueError(f"invalid decimal {d!r}")
    return value


def _scaled(d: Decimal, original) -> Integer:
    if d <= 0:
        raise ValueError(f"amount must be positive: {original}")
    _, digits, exponent = d.as_tuple()
    n = int("".join(map(str, digits)))
    shift = exponent + PRECISION
    if shift >= 0:
        return Integer(n * 10**shift)
    divisor = 10 ** (-shift)
    quotient, remainder = divmod(n, divisor)
    if 2 * remainder >= divisor:
        quotient += 1
    return Integer(quotient)


def integer_from_decimal(d) -> Integer:
    """Convert a positive decimal amount, rounding half away from zero."""
    return _scaled(_to_decimal(d), d)


def integer_from_string(x: str) -> Integer:
    """Parse a positive decimal string."""
    return _scaled(_to_decimal(x), x)


def integer_from_bytes(data: bytes) -> Integer:
    return Integer(int.from_bytes(data, "big"))


def integer_from_json(value: str) -> Integer:
    return integer_from_string(value)


ZERO = new_integer(0)