import polars as pl
import pytest

from option_scanner.scanner import opportunities_to_frame, summarize
from option_scanner.scanner.reporting import DISPLAY_COLUMNS


def test_summarize_empty():
    summary = summarize([])
    assert summary.count == 0
    assert summary.best_edge is None
    assert summary.average_volume is None


def test_summarize_counts_best_edge_and_average_volume(make_option):
    options = [
        make_option(edge=12.0, volume=100),
        make_option(edge=31.5, volume=250),
        make_option(edge=7.0, volume=51),
    ]
    summary = summarize(options)
    assert summary.count == 3
    assert summary.best_edge == pytest.approx(31.5)
    assert summary.average_volume == 134


def test_frame_has_one_row_per_option(make_option):
    options = [make_option(ticker="AAPL"), make_option(ticker="MSFT", spot=190.0)]
    frame = opportunities_to_frame(options)

    assert isinstance(frame, pl.DataFrame)
    assert frame.height == 2
    assert frame["ticker"].to_list() == ["AAPL", "MSFT"]
    assert frame["option_type"].to_list() == ["call", "call"]
    assert "has_stale_data_warning" in frame.columns


def test_frame_column_selection(make_option):
    frame = opportunities_to_frame([make_option()], columns=DISPLAY_COLUMNS)
    assert tuple(frame.columns) == DISPLAY_COLUMNS

    with pytest.raises(ValueError, match="Unknown columns"):
        opportunities_to_frame([make_option()], columns=["ticker", "gamma_scalp"])


def test_empty_frame_keeps_columns():
    frame = opportunities_to_frame([], columns=["ticker", "edge"])
    assert frame.height == 0
    assert frame.columns == ["ticker", "edge"]
