"""Market-data provider interface and an in-memory implementation."""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from option_scanner.errors import MarketDataError
from option_scanner.options.types import RawContract


@dataclass(frozen=True)
class MarketSnapshot:
    """Underlying price and its option contracts at fetch time."""

    symbol: str
    price: float
    contracts: tuple[RawContract, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "contracts", tuple(self.contracts))


@runtime_checkable
class MarketDataProvider(Protocol):
    """Source of spot prices and option chains.

    Symbols the provider has no data for are simply absent from the returned
    mapping. Transport or parsing failures raise `MarketDataError`.
    """

    async def fetch(self, symbols: Set[str]) -> Mapping[str, MarketSnapshot]:
        """Return snapshots keyed by symbol for the symbols it knows."""


def contract_from_mapping(data: Mapping[str, Any]) -> RawContract:
    """Build a `RawContract` from a camelCase or snake_case quote mapping."""

    def pick(*keys: str, default: Any = None) -> Any:
        for key in keys:
            if key in data and data[key] is not None:
                return data[key]
        return default

    try:
        expiration = pick("expiration", "expiry")
        if isinstance(expiration, str):
            expiration = dt.date.fromisoformat(expiration)
        elif isinstance(expiration, dt.datetime):
            expiration = expiration.date()
        if not isinstance(expiration, dt.date):
            raise MarketDataError(
                f"Contract record has no valid expiration: {dict(data)!r}"
            )

        data_age = pick("data_age_minutes", "dataAge")
        return RawContract(
            contract_symbol=str(pick("contract_symbol", "contractSymbol", default="")),
            strike=float(pick("strike")),
            expiration=expiration,
            option_type=pick("option_type", "optionType"),
            last_price=float(pick("last_price", "lastPrice", default=0.0)),
            bid=float(pick("bid", default=0.0)),
            ask=float(pick("ask", default=0.0)),
            volume=int(pick("volume", default=0)),
            open_interest=int(pick("open_interest", "openInterest", default=0)),
            implied_volatility=float(
                pick("implied_volatility", "impliedVolatility", default=0.0)
            ),
            data_age_minutes=None if data_age is None else float(data_age),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise MarketDataError(f"Malformed contract record: {dict(data)!r}") from exc


class StaticMarketData:
    """Provider serving a fixed set of snapshots from memory.

    Symbols whose records failed to parse are kept with their error and
    raise `MarketDataError` when fetched, so only that symbol is lost.
    """

    def __init__(
        self,
        snapshots: Sequence[MarketSnapshot] = (),
        errors: Mapping[str, MarketDataError] | None = None,
    ) -> None:
        self._snapshots: dict[str, MarketSnapshot] = {
            snap.symbol.upper(): snap for snap in snapshots
        }
        self._errors: dict[str, MarketDataError] = {
            symbol.upper(): exc for symbol, exc in (errors or {}).items()
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, Mapping[str, Any]]) -> StaticMarketData:
        """Build from `{symbol: {"price": ..., "options"|"contracts": [...]}}`."""
        snapshots: list[MarketSnapshot] = []
        errors: dict[str, MarketDataError] = {}
        for key, entry in data.items():
            symbol = str(entry.get("symbol", key)).upper()
            raw_contracts = entry.get("contracts", entry.get("options", []))
            try:
                price = float(entry["price"])
                contracts = tuple(contract_from_mapping(c) for c in raw_contracts)
            except MarketDataError as exc:
                errors[symbol] = MarketDataError(str(exc), symbol=symbol)
                continue
            except (KeyError, TypeError, ValueError) as exc:
                errors[symbol] = MarketDataError(
                    f"Malformed snapshot for {symbol}: {exc}", symbol=symbol
                )
                continue
            snapshots.append(MarketSnapshot(symbol=symbol, price=price, contracts=contracts))
        return cls(snapshots, errors)

    @property
    def symbols(self) -> list[str]:
        return list(self._snapshots)

    async def fetch(self, symbols: Set[str]) -> dict[str, MarketSnapshot]:
        for s in sorted(symbols):
            if s.upper() in self._errors:
                raise self._errors[s.upper()]
        return {
            s: self._snapshots[s.upper()]
            for s in symbols
            if s.upper() in self._snapshots
        }
