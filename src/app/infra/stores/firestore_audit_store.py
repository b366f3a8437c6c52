"""Firestore Audit Store — trilha de auditoria do despacho.

Um documento por evento (received | responded | error).
Append-only: sem updates nem deletes.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from app.protocols.audit_sink import AuditSinkProtocol

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.audit import AuditEvent

logger = logging.getLogger(__name__)

AUDIT_COLLECTION = "agent_audit"


class FirestoreAuditStore(AuditSinkProtocol):
    """Sink de auditoria usando Firestore.

    Características:
        - Append-only (sem updates)
        - Document ID prefixado por dia e papel para queries por período
        - created_at nativo para TTL policies do Firestore

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: agent_audit)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = AUDIT_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    def _append_sync(self, record: dict[str, Any]) -> str:
        now = datetime.now(UTC)
        doc_id = f"{now.strftime('%Y%m%d')}_{record['role']}_{uuid.uuid4().hex}"
        self._db.collection(self._collection).document(doc_id).set(
            {**record, "created_at": now}
        )
        return doc_id

    async def append(self, event: AuditEvent) -> None:
        """Append assíncrono de evento de auditoria.

        Usa asyncio.to_thread pois o SDK Firestore não tem async nativo.
        Falhas são logadas e nunca propagadas.
        """
        try:
            doc_id = await asyncio.to_thread(self._append_sync, event.to_record())
        except Exception as exc:
            logger.error(
                "audit_append_failed",
                extra={
                    "backend": "firestore",
                    "action": event.action.value,
                    "role": event.role.value,
                    "error_type": type(exc).__name__,
                },
            )
            return
        logger.debug(
            "audit_event_appended",
            extra={"doc_id": doc_id, "action": event.action.value},
        )
