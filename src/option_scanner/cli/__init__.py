from .config import (
    CONFIG_ENV_VAR,
    add_config_arg,
    build_config,
    check_known_keys,
    deep_merge,
    load_yaml_config,
    resolve_path,
)
from .logging import (
    DEFAULT_LOGGING,
    add_logging_args,
    parse_module_levels,
    setup_logging_from_config,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_LOGGING",
    "add_config_arg",
    "add_logging_args",
    "build_config",
    "check_known_keys",
    "deep_merge",
    "load_yaml_config",
    "parse_module_levels",
    "resolve_path",
    "setup_logging_from_config",
]
