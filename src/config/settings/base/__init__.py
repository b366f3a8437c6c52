"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.dispatch import (
    AccessDirectoryBackend,
    AuditSinkBackend,
    DispatchSettings,
    get_dispatch_settings,
)

__all__ = [
    "AccessDirectoryBackend",
    "AuditSinkBackend",
    # Core
    "BaseSettings",
    # Dispatch
    "DispatchSettings",
    # Types
    "Environment",
    "get_base_settings",
    "get_dispatch_settings",
]
