from __future__ import annotations

import importlib
import logging
from pathlib import Path

import pytest


def test_normalize_logging_config_defaults() -> None:
    mod = importlib.import_module("option_scanner.cli.logging")
    normalized = mod._normalize_logging_config(None)
    assert normalized == mod.DEFAULT_LOGGING


def test_normalize_logging_config_overrides() -> None:
    mod = importlib.import_module("option_scanner.cli.logging")
    cfg = {
        "level": "DEBUG",
        "format": "%(message)s",
        "file": "log.txt",
        "color": False,
        "modules": {"option_scanner.scanner.search": "WARNING"},
    }
    normalized = mod._normalize_logging_config(cfg)
    assert normalized["level"] == "DEBUG"
    assert normalized["format"] == "%(message)s"
    assert normalized["file"] == "log.txt"
    assert normalized["color"] is False
    assert normalized["modules"] == {"option_scanner.scanner.search": "WARNING"}


def test_normalize_logging_config_none_values_keep_defaults() -> None:
    mod = importlib.import_module("option_scanner.cli.logging")
    normalized = mod._normalize_logging_config({"level": None, "file": None})
    assert normalized["level"] == "INFO"
    assert normalized["file"] is None


def test_normalize_logging_config_rejects_unknown_keys() -> None:
    mod = importlib.import_module("option_scanner.cli.logging")
    with pytest.raises(ValueError, match="Unknown logging keys"):
        mod._normalize_logging_config({"colour": True})


def test_setup_logging_from_config_uses_normalized(monkeypatch) -> None:
    mod = importlib.import_module("option_scanner.cli.logging")

    captured: dict[str, object] = {}

    def _setup_logging(level, *, fmt_console, log_file, module_levels, colored):
        captured["level"] = level
        captured["fmt_console"] = fmt_console
        captured["log_file"] = log_file
        captured["module_levels"] = module_levels
        captured["colored"] = colored

    monkeypatch.setattr(mod, "setup_logging", _setup_logging)

    mod.setup_logging_from_config({"level": "WARNING", "color": False})

    assert captured == {
        "level": "WARNING",
        "fmt_console": mod.DEFAULT_LOGGING["format"],
        "log_file": None,
        "module_levels": None,
        "colored": False,
    }


@pytest.mark.parametrize(
    ("level", "expected"),
    [(logging.DEBUG, logging.DEBUG), ("info", logging.INFO), ("WARN", logging.WARNING), ("30", 30)],
)
def test_coerce_level(level, expected) -> None:
    mod = importlib.import_module("option_scanner.utils.logging_config")
    assert mod.coerce_level(level) == expected


@pytest.mark.parametrize("level", ["", "LOUD"])
def test_coerce_level_rejects_unknown(level) -> None:
    mod = importlib.import_module("option_scanner.utils.logging_config")
    with pytest.raises(ValueError):
        mod.coerce_level(level)


def test_setup_logging_writes_file_and_module_levels(tmp_path: Path) -> None:
    mod = importlib.import_module("option_scanner.utils.logging_config")
    log_file = tmp_path / "logs" / "scan.log"

    mod.setup_logging(
        "INFO",
        fmt_console="%(shortname)s %(message)s",
        log_file=log_file,
        module_levels={"option_scanner.scanner.search": "ERROR"},
    )
    try:
        logging.getLogger("option_scanner.apps.scan").info("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello file" in log_file.read_text(encoding="utf-8")
        assert logging.getLogger("option_scanner.scanner.search").level == logging.ERROR
        assert logging.getLogger("yfinance").level == logging.WARNING
    finally:
        root = logging.getLogger()
        for handler in list(root.handlers):
            if isinstance(handler, logging.FileHandler):
                root.removeHandler(handler)
                handler.close()
        logging.getLogger("option_scanner.scanner.search").setLevel(logging.NOTSET)


def test_short_name_filter_sets_last_component() -> None:
    mod = importlib.import_module("option_scanner.utils.logging_config")
    record = logging.LogRecord("option_scanner.scanner.search", logging.INFO, __file__, 1, "msg", None, None)
    assert mod._ShortNameFilter().filter(record) is True
    assert record.shortname == "search"


def test_parse_module_levels() -> None:
    mod = importlib.import_module("option_scanner.cli.logging")
    assert mod.parse_module_levels(None) == {}
    assert mod.parse_module_levels(["option_scanner.scanner=debug", "yfinance = ERROR"]) == {
        "option_scanner.scanner": "DEBUG",
        "yfinance": "ERROR",
    }
    with pytest.raises(ValueError, match="LOGGER=LEVEL"):
        mod.parse_module_levels(["option_scanner"])
    with pytest.raises(ValueError, match="Unknown logging level"):
        mod.parse_module_levels(["option_scanner=LOUD"])


def test_collect_logging_overrides_from_cli_flags() -> None:
    import argparse

    log_mod = importlib.import_module("option_scanner.cli.logging")
    cli_mod = importlib.import_module("option_scanner.apps._cli")
    parser = argparse.ArgumentParser()
    log_mod.add_logging_args(parser)

    args = parser.parse_args(
        ["--log-level", "DEBUG", "--no-color", "--log-module", "yfinance=ERROR"]
    )
    assert cli_mod.collect_logging_overrides(args) == {
        "level": "DEBUG",
        "color": False,
        "modules": {"yfinance": "ERROR"},
    }
    assert cli_mod.collect_logging_overrides(parser.parse_args([])) == {}


def test_progress_logger_reports_symbols_and_completion(caplog) -> None:
    cli_mod = importlib.import_module("option_scanner.apps._cli")
    logger = logging.getLogger("option_scanner.apps.scan")
    on_progress = cli_mod.progress_logger(logger)

    with caplog.at_level(logging.INFO, logger="option_scanner.apps.scan"):
        on_progress(0, 2, "AAPL")
        on_progress(2, 2, "")

    assert "[1/2] AAPL" in caplog.text
    assert "Scanned 2 symbol(s)" in caplog.text
