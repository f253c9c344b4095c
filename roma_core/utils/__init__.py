"""Utils module - Configuration and logging setup."""

from roma_core.utils.config import RouterConfig, load_config
from roma_core.utils.log import JsonFormatter, configure_logging

__all__ = [
    "RouterConfig",
    "load_config",
    "JsonFormatter",
    "configure_logging",
]
