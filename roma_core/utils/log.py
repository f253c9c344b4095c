"""Logging setup.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from roma_core.utils.config import RouterConfig

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


def configure_logging(config: Optional[RouterConfig] = None) -> logging.Handler:
    """Install a root handler honoring ``log_level`` and ``log_format``."""
    config = config or RouterConfig()

    handler = logging.StreamHandler()
    if config.log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    level = config.log_level.strip()
    root.setLevel(int(level) if level.isdigit() else level.upper())
    return handler


__all__ = [
    "JsonFormatter",
    "configure_logging",
]
