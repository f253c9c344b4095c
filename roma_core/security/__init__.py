"""Security module - CSRF verification."""

from roma_core.security.csrf import CsrfConfig, CsrfGuard

__all__ = [
    "CsrfConfig",
    "CsrfGuard",
]
