from __future__ import annotations

import datetime as dt

import pytest

from option_scanner.options import OptionType, RawContract

# Thursday 2025-01-02 15:00 UTC (10:00 New York)
FIXED_NOW = dt.datetime(2025, 1, 2, 15, 0, tzinfo=dt.timezone.utc)


@pytest.fixture
def fixed_now() -> dt.datetime:
    return FIXED_NOW


@pytest.fixture
def make_contract():
    def _make(
        *,
        symbol: str = "AAPL250221C00180000",
        strike: float = 180.0,
        days_out: int = 45,
        option_type: OptionType | str = OptionType.CALL,
        last_price: float = 8.45,
        bid: float = 8.20,
        ask: float = 8.70,
        volume: int = 1250,
        open_interest: int = 5420,
        implied_volatility: float = 0.28,
        data_age_minutes: float | None = None,
    ) -> RawContract:
        return RawContract(
            contract_symbol=symbol,
            strike=strike,
            expiration=FIXED_NOW.date() + dt.timedelta(days=days_out),
            option_type=option_type,
            last_price=last_price,
            bid=bid,
            ask=ask,
            volume=volume,
            open_interest=open_interest,
            implied_volatility=implied_volatility,
            data_age_minutes=data_age_minutes,
        )

    return _make
