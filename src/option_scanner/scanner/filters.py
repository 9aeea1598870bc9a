"""Search filter configuration applied by the batch orchestrator."""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from option_scanner.scanner.records import AnalyzedOption

DEFAULT_MIN_EDGE = 5.0
DEFAULT_MIN_VOLUME = 1
DEFAULT_MIN_PRICE = 0.10


@dataclass(frozen=True)
class SearchFilters:
    """Inclusive lower bounds a contract must meet to be reported.

    Units:
    - `min_edge`: percent (5.0 == market 5% above model value)
    - `min_volume`: contracts traded
    - `min_price`: last trade price in currency units
    """

    min_edge: float = DEFAULT_MIN_EDGE
    min_volume: int = DEFAULT_MIN_VOLUME
    min_price: float = DEFAULT_MIN_PRICE

    def __post_init__(self) -> None:
        for name in ("min_edge", "min_price"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be finite and >= 0, got {value!r}")
        if not isinstance(self.min_volume, numbers.Integral) or isinstance(self.min_volume, bool):
            raise ValueError(f"min_volume must be an integer, got {self.min_volume!r}")
        if self.min_volume < 0:
            raise ValueError("min_volume must be >= 0")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> SearchFilters:
        """Build filters from a config mapping; missing/None keys use defaults."""
        if not data:
            return cls()
        unknown = set(data) - {"min_edge", "min_volume", "min_price"}
        if unknown:
            raise ValueError(f"Unknown filter keys: {sorted(unknown)}")

        kwargs: dict[str, Any] = {}
        if data.get("min_edge") is not None:
            kwargs["min_edge"] = float(data["min_edge"])
        if data.get("min_volume") is not None:
            volume = float(data["min_volume"])
            if not volume.is_integer():
                raise ValueError(f"min_volume must be a whole number, got {data['min_volume']!r}")
            kwargs["min_volume"] = int(volume)
        if data.get("min_price") is not None:
            kwargs["min_price"] = float(data["min_price"])
        return cls(**kwargs)

    def accepts(self, option: AnalyzedOption) -> bool:
        return (
            option.edge >= self.min_edge
            and option.volume >= self.min_volume
            and option.last_price >= self.min_price
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
