"""Conversation ids, PINs, trace ids and session helpers."""

from __future__ import annotations

import hashlib
import secrets
import uuid
from collections.abc import Iterable
from dataclasses import dataclass

SESSION_PLATFORM_IOS = "iOS"
SESSION_PLATFORM_ANDROID = "Android"
SESSION_PLATFORM_DESKTOP = "Desktop"


def unique_conversation_id(user_id: str, recipient_id: str) -> str:
    """A stable conversation id for two users, independent of their order."""
    min_id, max_id = sorted((user_id, recipient_id))
    digest = bytearray(hashlib.md5((min_id + max_id).encode("utf-8")).digest())
    digest[6] = (digest[6] & 0x0F) | 0x30
    digest[8] = (digest[8] & 0x3F) | 0x80
    return str(uuid.UUID(bytes=bytes(digest)))


def random_pin() -> str:
    """A random six-digit PIN."""
    value = int.from_bytes(secrets.token_bytes(8), "little") % 1_000_000
    if value < 100_000:
        value += 100_000
    return str(value)


def random_trace_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Session:
    """A login session of a user."""

    user_id: str = ""
    session_id: str = ""
    public_key: str = ""
    platform: str = ""


def is_encrypted_message_supported(sessions: Iterable[Session]) -> bool:
    """Whether every session has a public key."""
    return all(session.public_key for session in sessions)


def generate_session_checksum(sessions: Iterable[Session]) -> str:
    """MD5 of the sorted session ids, or "" when there are none."""
    ids = sorted(session.session_id for session in sessions)
    if not ids:
        return ""
    h = hashlib.md5()
    for session_id in ids:
        h.update(session_id.encode("utf-8"))
    return h.hexdigest()