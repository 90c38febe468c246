"""Mixin Network keys, transactions, addresses, NFO memos and API data helpers."""

__version__ = "0.1.0"