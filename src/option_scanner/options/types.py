"""Quote records, pricing results and the enums shared across the scanner."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, TypeAlias


class OptionType(StrEnum):
    """Contract side."""

    CALL = "call"
    PUT = "put"


# Vendor feeds label sides "C"/"P"; normalized on entry.
OptionTypeInput: TypeAlias = OptionType | Literal["call", "put", "C", "P"]


class StrategyType(StrEnum):
    """Income strategy a short option position belongs to."""

    COVERED_CALL = "covered-call"
    CASH_SECURED_PUT = "cash-secured-put"
    SPECULATIVE = "speculative"


class PriceSource(StrEnum):
    """Quote field the market price was taken from."""

    LAST = "last"
    MID = "mid"
    BID = "bid"
    ASK = "ask"


def normalize_option_type(option_type: OptionTypeInput) -> OptionType:
    """Normalize option type labels to ``OptionType``."""
    if isinstance(option_type, OptionType):
        return option_type
    label = str(option_type).strip()
    if label in ("call", "C", "c"):
        return OptionType.CALL
    if label in ("put", "P", "p"):
        return OptionType.PUT
    raise ValueError("option_type must be one of {'call', 'put', 'C', 'P'}")


@dataclass(frozen=True, slots=True)
class RawContract:
    """One option quote as delivered by a market-data provider.

    ``data_age_minutes`` is reported by the provider when it knows how old the
    quote is; the scanner never fabricates it.
    """

    contract_symbol: str
    strike: float
    expiration: dt.date
    option_type: OptionType
    last_price: float
    bid: float
    ask: float
    volume: int
    open_interest: int
    implied_volatility: float
    data_age_minutes: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "option_type", normalize_option_type(self.option_type))


@dataclass(frozen=True, slots=True)
class PricingInputs:
    """Market inputs for one Black-Scholes evaluation.

    Built per evaluation because ``time_to_expiry`` depends on the clock.
    """

    spot: float
    strike: float
    time_to_expiry: float
    rate: float
    volatility: float


@dataclass(frozen=True, slots=True)
class PricingResult:
    """Call/put values plus the d1/d2 intermediates they were built from."""

    call_price: float
    put_price: float
    d1: float
    d2: float
    nd1: float
    nd2: float
    n_minus_d1: float
    n_minus_d2: float

    def price_for(self, option_type: OptionTypeInput) -> float:
        """Return the theoretical value for one side."""
        if normalize_option_type(option_type) is OptionType.CALL:
            return self.call_price
        return self.put_price


@dataclass(frozen=True, slots=True)
class GreeksResult:
    """First/second-order sensitivities in trader units.

    Units:
    - `theta`: value change per calendar day
    - `vega`: value change per 1 volatility point (0.01)
    - `rho`: value change per 1 rate point (0.01)
    """

    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float

    @classmethod
    def zero(cls) -> GreeksResult:
        return cls(delta=0.0, gamma=0.0, theta=0.0, vega=0.0, rho=0.0)
