"""Parsing of free-text ticker lists."""

from __future__ import annotations

import re
from collections.abc import Iterable

_SYMBOL_RE = re.compile(r"^[A-Z]{1,5}$")
_SPLIT_RE = re.compile(r"[,\s]+")


def is_valid_symbol(symbol: str) -> bool:
    return bool(_SYMBOL_RE.match(symbol.strip().upper()))


def parse_symbols(text: str | Iterable[str] | None) -> list[str]:
    """Split "AAPL, msft nvda" style input into unique upper-case tickers.

    Tokens that are not 1-5 letters are dropped; first occurrence order is
    kept.
    """
    if text is None:
        return []
    if not isinstance(text, str):
        text = " ".join(str(t) for t in text)
    if not text.strip():
        return []

    out: list[str] = []
    for token in _SPLIT_RE.split(text):
        symbol = token.strip().upper()
        if symbol and _SYMBOL_RE.match(symbol) and symbol not in out:
            out.append(symbol)
    return out


def format_symbols(symbols: Iterable[str]) -> str:
    return ", ".join(symbols)
