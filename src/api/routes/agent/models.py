"""Modelos de request da API direta de agentes."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

INVALID_BODY_MESSAGE = "Invalid input. Required fields: senderId, message, timestamp"


class AgentRequest(BaseModel):
    """Corpo de POST /agent/{role}."""

    model_config = ConfigDict(extra="ignore")

    sender_id: StrictStr = Field(alias="senderId")
    message: StrictStr
    timestamp: StrictStr
    media_url: StrictStr | None = Field(default=None, alias="mediaUrl")

    @field_validator("timestamp")
    @classmethod
    def _timestamp_is_iso(cls, value: str) -> str:
        parse_timestamp(value)
        return value

    @property
    def received_at(self) -> datetime:
        return parse_timestamp(self.timestamp)


def parse_timestamp(value: str) -> datetime:
    """ISO-8601 → datetime UTC (sem fuso assume UTC).

    Raises:
        ValueError: Se o texto não for ISO-8601.
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)
