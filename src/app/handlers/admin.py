"""Handler padrão de administradores.

Consultas (vendas, tráfego), pedidos de conteúdo/broadcast e gestão de
equipe via chat ("Add staff: +5511...", "List staff", "Remove staff: ...",
"Activate staff: ...", "Deactivate staff: ..."). A gestão só fica ativa
quando um AccessManagementService é injetado.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.constants.agent_replies import (
    ADMIN_MENU,
    ADMIN_RULES,
    ADMIN_SALES_TEMPLATE,
    DEFAULT_SALES_PERIOD,
    SALES_PERIODS,
    STAFF_ADD_USAGE,
    STAFF_LIST_EMPTY,
    STAFF_LIST_ENTRY,
    STAFF_LIST_HEADER,
    STAFF_MANAGEMENT_UNAVAILABLE,
    STAFF_REMOVE_USAGE,
    STAFF_STATUS_USAGE,
    match_rule,
)
from app.domain.response import ActionTag, AgentResponse
from app.domain.roles import Role
from utils.errors import DuplicateGrantError, GrantNotFoundError, PermissionDeniedError

if TYPE_CHECKING:
    from app.domain.envelope import MessageEnvelope
    from app.services.access_management import AccessManagementService

logger = logging.getLogger(__name__)

NO_PERMISSION_REPLY = "You do not have permission to manage staff members."


def _argument(body: str) -> str:
    """Texto após o primeiro ':' ("Remove staff: +1555" -> "+1555")."""
    _, sep, rest = body.partition(":")
    return rest.strip() if sep else ""


def _sales_period(text: str) -> str:
    for term, period in SALES_PERIODS:
        if term in text:
            return period
    return DEFAULT_SALES_PERIOD


class AdminHandler:
    """Handler de administradores.

    Args:
        access_management: Serviço de gestão de acesso (opcional)
    """

    def __init__(self, access_management: AccessManagementService | None = None) -> None:
        self._access = access_management

    async def handle(self, envelope: MessageEnvelope) -> AgentResponse:
        text = envelope.body.lower()

        if "sales" in text:
            return AgentResponse(reply=ADMIN_SALES_TEMPLATE.format(period=_sales_period(text)))

        rule = match_rule(text, ADMIN_RULES)
        if rule is not None:
            logger.debug("admin_rule_matched", extra={"rule": rule.key})
            return AgentResponse(reply=rule.reply, actions=rule.actions)

        if "staff" in text:
            if "add" in text:
                return await self._add_staff(envelope)
            if "list" in text:
                return await self._list_staff(envelope)
            if "remove" in text or "delete" in text:
                return await self._remove_staff(envelope)
            if "activate" in text:
                return await self._set_staff_active(envelope, "deactivate" not in text)

        return AgentResponse(reply=ADMIN_MENU)

    async def _add_staff(self, envelope: MessageEnvelope) -> AgentResponse:
        phone = _argument(envelope.body)
        if not phone:
            return AgentResponse(reply=STAFF_ADD_USAGE)
        if self._access is None:
            return AgentResponse(reply=STAFF_MANAGEMENT_UNAVAILABLE)
        try:
            record = await self._access.grant_role(envelope.sender_id, phone, Role.STAFF)
        except PermissionDeniedError:
            return AgentResponse(reply=NO_PERMISSION_REPLY)
        except DuplicateGrantError:
            return AgentResponse(reply=f"{phone} already has active staff access.")
        return AgentResponse.of(
            f"Staff member {record.sender_id} has been granted access.",
            ActionTag.NOTIFY_EMAIL,
        )

    async def _list_staff(self, envelope: MessageEnvelope) -> AgentResponse:
        if self._access is None:
            return AgentResponse(reply=STAFF_MANAGEMENT_UNAVAILABLE)
        try:
            records = await self._access.list_members(envelope.sender_id, Role.STAFF)
        except PermissionDeniedError:
            return AgentResponse(reply=NO_PERMISSION_REPLY)
        if not records:
            return AgentResponse(reply=STAFF_LIST_EMPTY)
        entries = [
            STAFF_LIST_ENTRY.format(
                phone=record.sender_id,
                granted_by=record.granted_by,
                created=record.created_at.date().isoformat(),
            )
            for record in records
        ]
        return AgentResponse(reply="\n".join([STAFF_LIST_HEADER, *entries]))

    async def _remove_staff(self, envelope: MessageEnvelope) -> AgentResponse:
        phone = _argument(envelope.body)
        if not phone:
            return AgentResponse(reply=STAFF_REMOVE_USAGE)
        if self._access is None:
            return AgentResponse(reply=STAFF_MANAGEMENT_UNAVAILABLE)
        try:
            await self._access.revoke_access(envelope.sender_id, phone, Role.STAFF)
        except PermissionDeniedError:
            return AgentResponse(reply=NO_PERMISSION_REPLY)
        except GrantNotFoundError:
            return AgentResponse(reply=f"No staff member found with phone number {phone}.")
        return AgentResponse(
            reply=f"Staff member with phone number {phone} has been removed from the system."
        )

    async def _set_staff_active(self, envelope: MessageEnvelope, active: bool) -> AgentResponse:
        verb = "activate" if active else "deactivate"
        phone = _argument(envelope.body)
        if not phone:
            return AgentResponse(
                reply=STAFF_STATUS_USAGE.format(verb=verb, title=verb.capitalize())
            )
        if self._access is None:
            return AgentResponse(reply=STAFF_MANAGEMENT_UNAVAILABLE)
        try:
            await self._access.set_access_active(envelope.sender_id, phone, active, Role.STAFF)
        except PermissionDeniedError:
            return AgentResponse(reply=NO_PERMISSION_REPLY)
        except GrantNotFoundError:
            # Nada mudou: registro inexistente ou já no estado pedido
            if await self._access.get_access(phone, Role.STAFF) is not None:
                return AgentResponse(
                    reply=f"Staff member with phone number {phone} is already {verb}d."
                )
            return AgentResponse(reply=f"No staff member found with phone number {phone}.")
        return AgentResponse(
            reply=f"Staff member with phone number {phone} has been {verb}d."
        )
