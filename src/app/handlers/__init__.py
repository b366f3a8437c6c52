"""Handlers padrão por papel e registro papel → handler.

Os handlers são substituíveis: qualquer objeto com
`async handle(envelope) -> AgentResponse` serve.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.roles import Role
from app.handlers.admin import AdminHandler
from app.handlers.customer import CustomerHandler
from app.handlers.registry import HandlerRegistry
from app.handlers.staff import StaffHandler

if TYPE_CHECKING:
    from app.services.access_management import AccessManagementService


def build_default_registry(
    access_management: AccessManagementService | None = None,
) -> HandlerRegistry:
    """Registro com os handlers por palavra-chave de cada papel."""
    return HandlerRegistry(
        {
            Role.CUSTOMER: CustomerHandler(),
            Role.STAFF: StaffHandler(),
            Role.ADMIN: AdminHandler(access_management),
        }
    )


__all__ = [
    "AdminHandler",
    "CustomerHandler",
    "HandlerRegistry",
    "StaffHandler",
    "build_default_registry",
]
