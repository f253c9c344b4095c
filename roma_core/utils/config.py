"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

import yaml

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="RouterConfig")


@dataclass
class RouterConfig:
    """Router configuration."""

    # Routing
    supported_methods: List[str] = field(
        default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE"]
    )
    controller_namespace: str = ""

    # CSRF
    csrf_enabled: bool = True
    csrf_secret: str = ""
    csrf_header: str = "X-CSRF-Token"
    csrf_field: str = "_csrf_token"
    csrf_token_lifetime: int = 3600
    csrf_failure_status: int = 403

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"
    access_log: bool = True

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create config from dictionary."""
        # Filter to only valid fields
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in (data or {}).items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    @classmethod
    def from_env(cls: Type[T], prefix: str = "ROMA_") -> T:
        """Load config from environment variables."""
        return cls.from_dict(cls.env_values(prefix))

    @classmethod
    def env_values(cls, prefix: str = "ROMA_") -> Dict[str, Any]:
        """Read prefixed environment variables into typed values.

        Values are converted by the field's declared type, so string fields
        stay strings (``ROMA_CSRF_SECRET=123456``). Comma-separated values
        become lists for list fields (``ROMA_SUPPORTED_METHODS=GET,POST``).

        Raises:
            ValueError: if a numeric field holds a non-numeric value
        """
        data = {}
        field_types = {
            name: str(f.type) for name, f in cls.__dataclass_fields__.items()
        }

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue

            config_key = key[len(prefix):].lower()
            field_type = field_types.get(config_key)
            if field_type is None:
                continue

            # Type conversion
            if field_type.startswith(("List", "list")):
                data[config_key] = [v.strip() for v in value.split(",") if v.strip()]
            elif field_type in ("bool", "<class 'bool'>"):
                data[config_key] = value.strip().lower() in ("true", "1", "yes", "on")
            elif field_type in ("int", "<class 'int'>"):
                data[config_key] = int(value)
            elif field_type in ("float", "<class 'float'>"):
                data[config_key] = float(value)
            else:
                data[config_key] = value

        return data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {}
        for field_name in self.__dataclass_fields__:
            result[field_name] = getattr(self, field_name)
        return result

    def merge(self, overrides: Dict[str, Any]) -> "RouterConfig":
        """Return a copy with the given values replaced."""
        data = self.to_dict()
        data.update(overrides)
        return type(self).from_dict(data)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "ROMA_",
) -> RouterConfig:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = RouterConfig()

    # Load from file if provided
    if path:
        path_obj = Path(path)
        if path_obj.exists():
            if path.endswith(".json"):
                config = RouterConfig.from_json(path)
            elif path.endswith((".yaml", ".yml")):
                config = RouterConfig.from_yaml(path)
            else:
                logger.warning(f"Unknown config format: {path}")
        else:
            logger.warning(f"Config file not found: {path}")

    # Override with environment variables
    return config.merge(RouterConfig.env_values(env_prefix))


__all__ = [
    "RouterConfig",
    "load_config",
]
