"""Request signatures sent to the Mixin API."""

from __future__ import annotations

import hashlib
from urllib.parse import unquote, urlsplit, urlunsplit


def sign_raw(method: str, uri: str, body: bytes | str | None = b"") -> str:
    """Hex SHA-256 of method, URI and body concatenated."""
    if body is None:
        body = b""
    elif isinstance(body, str):
        body = body.encode("utf-8")
    return hashlib.sha256(method.encode("utf-8") + uri.encode("utf-8") + body).hexdigest()


def trim_url_host(url: str) -> str:
    """The part of ``url`` from its path onwards, or "/" if it has none."""
    parts = urlsplit(url)
    path = unquote(parts.path)
    if path in ("", "/"):
        return "/"
    uri = urlunsplit(parts)
    idx = uri.find(path)
    return uri[idx:] if idx >= 0 else uri


def sign_request(method: str, url: str, body: bytes | str | None = None) -> str:
    """Signature of a request given its method, full URL and body."""
    return sign_raw(method, trim_url_host(url), body)