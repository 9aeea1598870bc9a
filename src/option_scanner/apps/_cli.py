"""Shared argparse and reporting helpers for the scanner entry points."""

from __future__ import annotations

import dataclasses
import datetime as dt
import enum
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from option_scanner.cli.logging import parse_module_levels


def add_print_config_arg(parser) -> None:
    """Add `--print-config` (dump the merged config as JSON and exit)."""
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the merged config as JSON and exit without scanning.",
    )


def add_dry_run_arg(parser) -> None:
    """Add `--dry-run` (validate and log the plan, fetch nothing)."""
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate config and log the scan plan without requesting quotes.",
    )


def collect_logging_overrides(args) -> dict[str, Any]:
    """Map the `--log-*` flags onto keys of the `logging` config section."""
    flag_to_key = {
        "log_level": "level",
        "log_file": "file",
        "log_format": "format",
    }
    overrides: dict[str, Any] = {
        key: getattr(args, flag)
        for flag, key in flag_to_key.items()
        if getattr(args, flag, None)
    }
    if getattr(args, "log_color", None) is not None:
        overrides["color"] = args.log_color
    modules = parse_module_levels(getattr(args, "log_modules", None))
    if modules:
        overrides["modules"] = modules
    return overrides


def _jsonable(obj: Any) -> Any:
    """Recursively convert config/plan values into JSON-friendly types."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _jsonable(dataclasses.asdict(obj))
    if isinstance(obj, enum.Enum):
        return obj.value
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (dt.date, dt.datetime)):
        return obj.isoformat()
    if isinstance(obj, Mapping):
        return {str(k): _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [_jsonable(v) for v in obj]
    return obj


def to_json(obj: Any) -> str:
    return json.dumps(_jsonable(obj), indent=2, sort_keys=True)


def print_config(config: Mapping[str, Any]) -> None:
    print(to_json(config))


def log_run_header(logger: logging.Logger, items: Mapping[str, Any]) -> None:
    """Log one aligned `label: value` line per item before a scan starts."""
    width = max((len(label) for label in items), default=0) + 1
    for label, value in items.items():
        logger.info("%s %s", f"{label}:".ljust(width), value)


def log_dry_run(logger: logging.Logger, plan: Mapping[str, Any]) -> None:
    logger.info("DRY RUN: no quotes were requested.")
    logger.info("DRY RUN plan:\n%s", to_json(plan))


def progress_logger(logger: logging.Logger):
    """Build an `on_progress(current, total, label)` callback that logs."""

    def _on_progress(current: int, total: int, label: str) -> None:
        if label:
            logger.info("[%d/%d] %s", current + 1, total, label)
        else:
            logger.info("Scanned %d symbol(s)", total)

    return _on_progress
