"""CLI glue between the `logging` config section and `setup_logging`."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from option_scanner.utils.logging_config import coerce_level, setup_logging

DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file": None,
    "color": True,
    # logger name -> level, e.g. {"option_scanner.scanner.search": "DEBUG"}
    "modules": {},
}


def add_logging_args(parser) -> None:
    group = parser.add_argument_group("logging")
    group.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Root log level for the scan (DEBUG shows skipped symbols).",
    )
    group.add_argument(
        "--log-module",
        dest="log_modules",
        action="append",
        default=None,
        metavar="LOGGER=LEVEL",
        help="Per-logger level override; repeatable.",
    )
    group.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs (uncolored) to this file.",
    )
    group.add_argument(
        "--log-format",
        type=str,
        default=None,
        help="Console format; %%(shortname)s is the last logger name component.",
    )
    color = group.add_mutually_exclusive_group()
    color.add_argument(
        "--color",
        dest="log_color",
        action="store_true",
        help="Color level names on the console.",
    )
    color.add_argument(
        "--no-color",
        dest="log_color",
        action="store_false",
        help="Plain console output (e.g. when piping to a file).",
    )
    parser.set_defaults(log_color=None)


def parse_module_levels(items: Iterable[str] | None) -> dict[str, str]:
    """Turn ``["pkg.mod=DEBUG", ...]`` into ``{"pkg.mod": "DEBUG"}``."""
    levels: dict[str, str] = {}
    for item in items or ():
        name, sep, level = item.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Expected LOGGER=LEVEL, got {item!r}")
        coerce_level(level)
        levels[name.strip()] = level.strip().upper()
    return levels


def _normalize_logging_config(config: Mapping[str, Any] | None) -> dict[str, Any]:
    normalized = dict(DEFAULT_LOGGING)
    if not config:
        return normalized

    unknown = sorted(set(config) - set(DEFAULT_LOGGING))
    if unknown:
        raise ValueError(f"Unknown logging keys: {unknown}")

    normalized.update({key: value for key, value in config.items() if value is not None})
    return normalized


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = _normalize_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        log_file=log_cfg["file"],
        module_levels=log_cfg["modules"] or None,
        colored=bool(log_cfg["color"]),
    )
