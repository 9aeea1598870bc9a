import datetime as dt

import pytest

from option_scanner.options import (
    OptionType,
    PricingResult,
    RawContract,
    StrategyType,
    normalize_option_type,
)


@pytest.mark.parametrize("label", ["call", "C", "c", OptionType.CALL])
def test_normalize_call_labels(label):
    assert normalize_option_type(label) is OptionType.CALL


@pytest.mark.parametrize("label", ["put", "P", "p", " put "])
def test_normalize_put_labels(label):
    assert normalize_option_type(label) is OptionType.PUT


@pytest.mark.parametrize("label", ["", "CALL", "x", None])
def test_normalize_rejects_other_labels(label):
    with pytest.raises(ValueError):
        normalize_option_type(label)


def test_raw_contract_normalizes_vendor_side_label():
    contract = RawContract(
        contract_symbol="TSLA250117P00250000",
        strike=250.0,
        expiration=dt.date(2025, 1, 17),
        option_type="P",
        last_price=7.3,
        bid=7.1,
        ask=7.5,
        volume=87,
        open_interest=675,
        implied_volatility=0.40,
    )
    assert contract.option_type is OptionType.PUT
    assert contract.data_age_minutes is None


def test_pricing_result_price_for():
    out = PricingResult(3.0, 1.5, 0.1, 0.0, 0.54, 0.5, 0.46, 0.5)
    assert out.price_for("call") == 3.0
    assert out.price_for(OptionType.PUT) == 1.5


def test_strategy_labels():
    assert str(StrategyType.COVERED_CALL) == "covered-call"
    assert str(StrategyType.CASH_SECURED_PUT) == "cash-secured-put"
