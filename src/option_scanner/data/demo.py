"""Bundled demo chain for offline runs of the scanner.

Expirations are laid out on upcoming Fridays relative to a reference date so
the demo never goes stale.
"""

from __future__ import annotations

import datetime as dt

from option_scanner.data.providers import MarketSnapshot, StaticMarketData
from option_scanner.options.types import OptionType, RawContract

# symbol -> (spot, [(weeks_out, type, strike, last, bid, ask, volume, oi, iv)])
_DEMO_CHAINS: dict[str, tuple[float, list[tuple]]] = {
    "AAPL": (
        185.50,
        [
            (1, "C", 180.0, 8.50, 8.20, 8.80, 150, 1200, 0.25),
            (2, "C", 190.0, 3.20, 3.00, 3.40, 75, 800, 0.28),
            (1, "P", 175.0, 2.80, 2.60, 3.00, 45, 600, 0.26),
            (8, "C", 185.0, 12.75, 12.50, 13.00, 89, 950, 0.22),
        ],
    ),
    "MSFT": (
        420.75,
        [
            (1, "C", 415.0, 12.50, 12.00, 13.00, 200, 1500, 0.22),
            (2, "P", 420.0, 8.75, 8.50, 9.00, 120, 900, 0.24),
            (8, "C", 425.0, 15.25, 15.00, 15.50, 167, 1100, 0.21),
        ],
    ),
    "NVDA": (
        128.45,
        [
            (1, "C", 125.0, 6.80, 6.60, 7.00, 325, 2100, 0.35),
            (2, "P", 130.0, 4.25, 4.10, 4.40, 198, 1650, 0.33),
        ],
    ),
    "TSLA": (
        248.50,
        [
            (1, "C", 245.0, 9.75, 9.50, 10.00, 145, 890, 0.42),
            (2, "P", 250.0, 7.30, 7.10, 7.50, 87, 675, 0.40),
        ],
    ),
    "GOOGL": (
        162.85,
        [
            (1, "C", 160.0, 5.40, 5.20, 5.60, 112, 780, 0.28),
            (2, "P", 165.0, 4.85, 4.70, 5.00, 94, 620, 0.30),
        ],
    ),
}


def next_friday(today: dt.date, weeks_out: int = 0) -> dt.date:
    """Friday on or after `today`, shifted by whole weeks."""
    days_until = (4 - today.weekday()) % 7
    return today + dt.timedelta(days=days_until + 7 * weeks_out)


def occ_symbol(
    ticker: str, expiration: dt.date, option_type: OptionType, strike: float
) -> str:
    """OCC-style contract symbol, e.g. AAPL250207C00180000."""
    side = "C" if option_type is OptionType.CALL else "P"
    return f"{ticker}{expiration:%y%m%d}{side}{round(strike * 1000):08d}"


def demo_snapshots(today: dt.date) -> list[MarketSnapshot]:
    snapshots: list[MarketSnapshot] = []
    for ticker, (spot, rows) in _DEMO_CHAINS.items():
        contracts = []
        for weeks_out, side, strike, last, bid, ask, volume, oi, iv in rows:
            option_type = OptionType.CALL if side == "C" else OptionType.PUT
            expiration = next_friday(today, weeks_out)
            contracts.append(
                RawContract(
                    contract_symbol=occ_symbol(ticker, expiration, option_type, strike),
                    strike=strike,
                    expiration=expiration,
                    option_type=option_type,
                    last_price=last,
                    bid=bid,
                    ask=ask,
                    volume=volume,
                    open_interest=oi,
                    implied_volatility=iv,
                )
            )
        snapshots.append(MarketSnapshot(symbol=ticker, price=spot, contracts=tuple(contracts)))
    return snapshots


def demo_market_data(today: dt.date) -> StaticMarketData:
    """Static provider loaded with the demo chain."""
    return StaticMarketData(demo_snapshots(today))
