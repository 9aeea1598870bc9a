"""Exception hierarchy shared by pricing, analysis and data providers."""

from __future__ import annotations


class OptionScannerError(Exception):
    """Base class for errors raised by ``option_scanner``."""


class InvalidInputError(OptionScannerError, ValueError):
    """Pricing inputs violate a precondition (non-positive spot, strike, vol...)."""


class MarketDataError(OptionScannerError):
    """A market-data provider failed to deliver or parse a response."""

    def __init__(self, message: str, *, symbol: str | None = None) -> None:
        super().__init__(message)
        self.symbol = symbol
