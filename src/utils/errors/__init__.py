"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AccessControlError,
    DuplicateGrantError,
    FirestoreUnavailableError,
    GrantNotFoundError,
    HandlerFailureError,
    HandlerTimeoutError,
    InfrastructureError,
    PermissionDeniedError,
    RedisConnectionError,
    RoleAlreadyAssignedError,
)

__all__ = [
    "AccessControlError",
    "DuplicateGrantError",
    "FirestoreUnavailableError",
    "GrantNotFoundError",
    "HandlerFailureError",
    "HandlerTimeoutError",
    "InfrastructureError",
    "PermissionDeniedError",
    "RedisConnectionError",
    "RoleAlreadyAssignedError",
]
