"""Resposta de handler e respostas fixas do dispatcher."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ActionTag(StrEnum):
    """Efeitos colaterais pedidos ao Delivery Executor (consultivos)."""

    NOTIFY_CHANNEL = "whatsapp"
    NOTIFY_EMAIL = "email"


_KNOWN_TAGS = {tag.value: tag for tag in ActionTag}


def normalize_action(action: Any) -> ActionTag | str:
    """Tag conhecida vira ActionTag; desconhecida segue como string.

    Raises:
        ValueError: Se a ação não for string.
    """
    if not isinstance(action, str):
        raise ValueError(f"ação deve ser string: {type(action).__name__}")
    return _KNOWN_TAGS.get(action, action)


@dataclass(frozen=True, slots=True)
class AgentResponse:
    """Texto de resposta e lista ordenada de ações.

    As ações são pedidos ao Delivery Executor, não garantias de entrega.
    Tags fora de ActionTag são mantidas; o executor as ignora.
    """

    reply: str
    actions: tuple[ActionTag | str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.reply, str):
            raise ValueError("reply deve ser string")
        if isinstance(self.actions, str) or not isinstance(self.actions, Iterable):
            raise ValueError("actions deve ser lista")
        object.__setattr__(
            self, "actions", tuple(normalize_action(action) for action in self.actions)
        )

    @classmethod
    def of(cls, reply: str, *actions: ActionTag | str) -> AgentResponse:
        return cls(reply=reply, actions=actions)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> AgentResponse:
        """Constrói a partir de {reply, actions}.

        Raises:
            ValueError: Se reply não for string ou actions não for lista de strings.
        """
        return cls(reply=payload.get("reply"), actions=payload.get("actions") or ())

    def to_dict(self) -> dict[str, Any]:
        return {
            "reply": self.reply,
            "actions": [str(action) for action in self.actions],
        }


UNAUTHORIZED_REPLY = "You are not authorized to use this service."
FALLBACK_REPLY = (
    "I apologize, but I encountered an error processing your request. "
    "Please try again later."
)

UNAUTHORIZED_RESPONSE = AgentResponse(reply=UNAUTHORIZED_REPLY)
FALLBACK_RESPONSE = AgentResponse(reply=FALLBACK_REPLY)
