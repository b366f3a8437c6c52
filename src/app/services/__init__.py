"""Serviços de aplicação.

Unidades de orquestração sobre os protocolos (sem IO direto).
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.access_management import AccessManagementService
from app.services.delivery_executor import DeliveryExecutor, DeliveryReport
from app.services.dispatcher import DispatchResult, Dispatcher
from app.services.role_resolver import RoleResolver

__all__ = [
    "AccessManagementService",
    "DeliveryExecutor",
    "DeliveryReport",
    "DispatchResult",
    "Dispatcher",
    "RoleResolver",
]
