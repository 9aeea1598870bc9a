"""Market-data provider backed by yfinance option chains."""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from collections.abc import Set

import pandas as pd
import yfinance as yf

from option_scanner.data.providers import MarketSnapshot
from option_scanner.errors import MarketDataError
from option_scanner.options.types import OptionType, RawContract
from option_scanner.scanner.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

CHAIN_COLUMNS = {
    "contractSymbol": "contract_symbol",
    "lastPrice": "last_price",
    "openInterest": "open_interest",
    "impliedVolatility": "implied_volatility",
    "lastTradeDate": "last_trade_date",
}

SPOT_FIELDS = ("last_price", "lastPrice", "regularMarketPrice", "previous_close")


def _spot_price(ticker: yf.Ticker) -> float | None:
    """Best-effort spot from fast_info, falling back to the last daily close."""
    info = ticker.fast_info
    for key in SPOT_FIELDS:
        value = getattr(info, key, None)
        if value is None:
            try:
                value = info[key]
            except (KeyError, TypeError):
                value = None
        if value is not None and pd.notna(value) and float(value) > 0:
            return float(value)

    hist = ticker.history(period="1d")
    if hist is None or hist.empty:
        return None
    return float(hist["Close"].iloc[-1])


def _normalize_chain(
    frame: pd.DataFrame, *, option_type: OptionType, expiration: dt.date
) -> pd.DataFrame:
    """Rename yfinance columns to snake_case and coerce numerics.

    Rows without a positive strike and implied volatility cannot be priced
    and are dropped here; other missing numerics default to zero.
    """
    out = frame.rename(columns=CHAIN_COLUMNS).copy()
    for col in ("strike", "implied_volatility"):
        if col not in out.columns:
            out[col] = float("nan")
        out[col] = pd.to_numeric(out[col], errors="coerce").astype(float)
    priceable = (out["strike"] > 0) & (out["implied_volatility"] > 0)
    dropped = int((~priceable).sum())
    if dropped:
        logger.debug(
            "%s %s: dropped %d rows without strike or implied volatility",
            expiration,
            option_type.value,
            dropped,
        )
        out = out.loc[priceable].reset_index(drop=True)

    for col in ("last_price", "bid", "ask"):
        if col not in out.columns:
            out[col] = 0.0
        out[col] = pd.to_numeric(out[col], errors="coerce").fillna(0.0).astype(float)
    for col in ("volume", "open_interest"):
        if col not in out.columns:
            out[col] = 0
        out[col] = pd.to_numeric(out[col], errors="coerce").fillna(0).astype(int)
    if "last_trade_date" not in out.columns:
        out["last_trade_date"] = pd.NaT
    out["last_trade_date"] = pd.to_datetime(out["last_trade_date"], utc=True, errors="coerce")
    out["option_type"] = option_type.value
    out["expiration"] = expiration
    return out


def _contracts_from_frame(frame: pd.DataFrame, now: dt.datetime) -> list[RawContract]:
    contracts: list[RawContract] = []
    for row in frame.itertuples(index=False):
        age = None
        if pd.notna(row.last_trade_date):
            age = max(0.0, (now - row.last_trade_date.to_pydatetime()).total_seconds() / 60.0)
        contracts.append(
            RawContract(
                contract_symbol=str(row.contract_symbol),
                strike=float(row.strike),
                expiration=row.expiration,
                option_type=OptionType(row.option_type),
                last_price=float(row.last_price),
                bid=float(row.bid),
                ask=float(row.ask),
                volume=int(row.volume),
                open_interest=int(row.open_interest),
                implied_volatility=float(row.implied_volatility),
                data_age_minutes=age,
            )
        )
    return contracts


def _download_snapshot(
    symbol: str, *, max_expirations: int, now: dt.datetime
) -> MarketSnapshot | None:
    """Blocking download of spot and the nearest option expirations."""
    ticker = yf.Ticker(symbol)
    expirations = list(ticker.options or ())
    if not expirations:
        logger.debug("%s: no listed expirations", symbol)
        return None

    spot = _spot_price(ticker)
    if spot is None:
        logger.debug("%s: no spot price", symbol)
        return None

    contracts: list[RawContract] = []
    for exp in expirations[:max_expirations]:
        expiration = dt.date.fromisoformat(exp)
        chain = ticker.option_chain(exp)
        for option_type, raw in ((OptionType.CALL, chain.calls), (OptionType.PUT, chain.puts)):
            if raw is None or raw.empty:
                continue
            frame = _normalize_chain(raw, option_type=option_type, expiration=expiration)
            contracts.extend(_contracts_from_frame(frame, now))

    return MarketSnapshot(symbol=symbol, price=spot, contracts=tuple(contracts))


class YFinanceMarketData:
    """Provider that pulls option chains through yfinance.

    Downloads run in a worker thread so the caller's event loop stays
    responsive. Any library failure is re-raised as `MarketDataError`.
    """

    def __init__(self, *, max_expirations: int = 2, clock: Clock | None = None) -> None:
        if max_expirations < 1:
            raise ValueError("max_expirations must be >= 1")
        self.max_expirations = max_expirations
        self.clock = clock if clock is not None else SystemClock()

    async def fetch(self, symbols: Set[str]) -> dict[str, MarketSnapshot]:
        out: dict[str, MarketSnapshot] = {}
        for symbol in sorted(symbols):
            try:
                snapshot = await asyncio.to_thread(
                    _download_snapshot,
                    symbol,
                    max_expirations=self.max_expirations,
                    now=self.clock.now(),
                )
            except MarketDataError:
                raise
            except Exception as exc:
                raise MarketDataError(
                    f"yfinance request failed for {symbol}: {exc}", symbol=symbol
                ) from exc
            if snapshot is not None:
                out[symbol] = snapshot
        return out
