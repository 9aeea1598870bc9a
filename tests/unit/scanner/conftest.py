import dataclasses

import pytest

from option_scanner.scanner import analyze_contract


@pytest.fixture
def make_option(make_contract, fixed_now):
    """Analyzed option with selected fields overridden after analysis."""

    def _make(*, ticker: str = "AAPL", spot: float = 185.50, contract=None, **overrides):
        base = analyze_contract(
            contract if contract is not None else make_contract(),
            spot,
            now=fixed_now,
            ticker=ticker,
        )
        return dataclasses.replace(base, **overrides)

    return _make
