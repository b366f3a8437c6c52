"""Registro papel → handler, montado uma vez no startup."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from app.domain.roles import Role

if TYPE_CHECKING:
    from app.protocols.agent_handler import AgentHandlerProtocol


class HandlerRegistry:
    """Mapeamento imutável de Role para handler.

    Raises:
        ValueError: Se algum papel ficar sem handler.
    """

    def __init__(self, handlers: Mapping[Role, AgentHandlerProtocol]) -> None:
        missing = [role.value for role in Role if role not in handlers]
        if missing:
            raise ValueError(f"papéis sem handler: {', '.join(missing)}")
        self._handlers: dict[Role, AgentHandlerProtocol] = dict(handlers)

    def get(self, role: Role) -> AgentHandlerProtocol:
        return self._handlers[role]

    def __contains__(self, role: object) -> bool:
        return role in self._handlers

    @property
    def roles(self) -> tuple[Role, ...]:
        return tuple(self._handlers)
