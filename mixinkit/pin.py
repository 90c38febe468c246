"""PIN format checks."""

from __future__ import annotations

import json
import re

PIN_PATTERN = r"^\d{6}$"

_PIN_RE = re.compile(r"\d{6}", re.ASCII)


class InvalidPinError(ValueError):
    """Raised when a PIN is not exactly six digits."""


def validate_pin_pattern(pin: str) -> None:
    """Raise InvalidPinError unless ``pin`` is six ASCII digits."""
    if _PIN_RE.fullmatch(pin) is None:
        raise InvalidPinError(f"pin must match regex pattern {json.dumps(PIN_PATTERN)}")