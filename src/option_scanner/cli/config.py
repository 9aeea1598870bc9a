"""Layered scan configuration: defaults <- YAML file <- command-line flags.

The YAML file may also be supplied through the ``OPTION_SCAN_CONFIG``
environment variable so scheduled runs do not need to repeat ``--config``.
"""

from __future__ import annotations

import copy
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

CONFIG_ENV_VAR = "OPTION_SCAN_CONFIG"


def add_config_arg(parser, *, default: str | None = None) -> None:
    parser.add_argument(
        "--config",
        type=str,
        default=default if default is not None else os.environ.get(CONFIG_ENV_VAR),
        help=(
            "YAML file with scan settings (symbols, filters, view, logging). "
            f"Defaults to ${CONFIG_ENV_VAR} when set."
        ),
    )


def resolve_path(value: str | Path | None) -> Path | None:
    """Expand `~` and `$VARS` in a path-like value; `None` passes through."""
    if value is None or isinstance(value, Path):
        return value
    return Path(os.path.expandvars(str(value))).expanduser()


def load_yaml_config(path: str | Path | None) -> dict[str, Any]:
    """Read the top-level YAML mapping at `path` (`None` -> `{}`)."""
    if path is None:
        return {}

    config_path = resolve_path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Config file must contain a YAML mapping at the top level: {config_path}"
        )
    return data


def deep_merge(
    base: Mapping[str, Any],
    updates: Mapping[str, Any],
) -> dict[str, Any]:
    """Return a new mapping with `updates` merged into `base`.

    Nested mappings merge key by key; any other value in `updates`
    (lists included) replaces the base value outright. Neither input is
    mutated.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in updates.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def check_known_keys(config: Mapping[str, Any], allowed: Mapping[str, Any]) -> None:
    """Reject top-level keys that have no default (usually a typo in YAML)."""
    unknown = sorted(set(config) - set(allowed))
    if unknown:
        raise ValueError(f"Unknown config keys: {unknown}")


def build_config(
    defaults: Mapping[str, Any],
    yaml_path: str | Path | None,
    overrides: Mapping[str, Any] | None = None,
    *,
    strict: bool = False,
) -> dict[str, Any]:
    """Merge defaults, the YAML file and CLI overrides, in that order.

    With `strict=True` the YAML file may only use keys present in `defaults`.
    """
    from_file = load_yaml_config(yaml_path)
    if strict:
        check_known_keys(from_file, defaults)

    config = deep_merge(defaults, from_file)
    if overrides:
        config = deep_merge(config, overrides)
    return config
