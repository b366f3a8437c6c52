"""Firestore Access Directory — registros de autorização por remetente.

Um documento por (papel, remetente), com ID "<papel>:<remetente>".
Concessões usam create() (falha se o documento existe) e preconditions
de update_time para reativações, evitando dois registros ativos.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from google.api_core.exceptions import Conflict, FailedPrecondition
from google.cloud.firestore_v1.base_query import FieldFilter

from app.domain.authorization import AuthorizationRecord, normalize_sender_id, record_key
from app.protocols.access_directory import AccessDirectoryProtocol, ensure_restricted
from utils.errors import DuplicateGrantError, FirestoreUnavailableError

if TYPE_CHECKING:
    from google.cloud.firestore import Client as FirestoreClient

    from app.domain.roles import Role

logger = logging.getLogger(__name__)

ACCESS_COLLECTION = "authorized_senders"


class FirestoreAccessDirectory(AccessDirectoryProtocol):
    """Diretório de acesso usando Firestore.

    Usa asyncio.to_thread pois o SDK Firestore não tem async nativo.
    Erros do SDK viram FirestoreUnavailableError.

    Args:
        firestore_client: Cliente Firestore
        collection_name: Nome da collection (default: authorized_senders)
    """

    def __init__(
        self,
        firestore_client: FirestoreClient,
        collection_name: str = ACCESS_COLLECTION,
    ) -> None:
        self._db = firestore_client
        self._collection = collection_name

    def _collection_ref(self) -> Any:
        return self._db.collection(self._collection)

    def _get_sync(self, sender_id: str, role: Role) -> AuthorizationRecord | None:
        snapshot = self._collection_ref().document(record_key(sender_id, role)).get()
        if not snapshot.exists:
            return None
        return AuthorizationRecord.from_dict(snapshot.to_dict() or {})

    async def _run(self, func: Any, *args: Any) -> Any:
        try:
            return await asyncio.to_thread(func, *args)
        except (DuplicateGrantError, ValueError):
            raise
        except Exception as exc:
            logger.warning(
                "access_directory_firestore_error",
                extra={"operation": func.__name__, "error_type": type(exc).__name__},
            )
            raise FirestoreUnavailableError("Falha ao acessar diretório no Firestore") from exc

    async def is_authorized(self, sender_id: str, role: Role) -> bool:
        if role.is_open:
            return True
        record = await self._run(self._get_sync, sender_id, role)
        return record is not None and record.active

    async def resolve_account_id(self, sender_id: str, role: Role) -> str | None:
        record = await self._run(self._get_sync, sender_id, role)
        if record is None or not record.active:
            return None
        return record.account_id

    async def get_record(self, sender_id: str, role: Role) -> AuthorizationRecord | None:
        return await self._run(self._get_sync, sender_id, role)

    def _list_sync(self, role: Role, active_only: bool) -> list[AuthorizationRecord]:
        query = self._collection_ref().where(filter=FieldFilter("role", "==", role.value))
        records = [
            AuthorizationRecord.from_dict(snapshot.to_dict() or {}) for snapshot in query.stream()
        ]
        # active filtrado no cliente; a query usa só igualdade em role
        if active_only:
            records = [record for record in records if record.active]
        return sorted(records, key=lambda record: record.sender_id)

    async def list_records(
        self, role: Role, *, active_only: bool = True
    ) -> list[AuthorizationRecord]:
        return await self._run(self._list_sync, role, active_only)

    def _grant_sync(self, record: AuthorizationRecord) -> None:
        doc_ref = self._collection_ref().document(record.key)
        snapshot = doc_ref.get()
        if not snapshot.exists:
            try:
                doc_ref.create(record.to_dict())
            except Conflict as exc:
                raise DuplicateGrantError(f"concessão concorrente para {record.role}") from exc
            return
        if (snapshot.to_dict() or {}).get("active", True):
            raise DuplicateGrantError(f"registro ativo já existe para {record.role}")
        # Registro inativo: substitui só se ninguém alterou desde a leitura
        option = self._db.write_option(last_update_time=snapshot.update_time)
        try:
            doc_ref.update(record.to_dict(), option=option)
        except FailedPrecondition as exc:
            raise DuplicateGrantError(f"concessão concorrente para {record.role}") from exc

    async def grant(
        self,
        sender_id: str,
        role: Role,
        granted_by: str,
        *,
        account_id: str | None = None,
    ) -> AuthorizationRecord:
        ensure_restricted(role)
        record = AuthorizationRecord(
            sender_id=normalize_sender_id(sender_id),
            role=role,
            granted_by=granted_by,
            account_id=account_id,
        )
        await self._run(self._grant_sync, record)
        logger.info("access_granted", extra={"backend": "firestore", "role": role.value})
        return record

    def _matching_refs(self, sender_id: str, role: Role | None) -> list[Any]:
        if role is not None:
            doc_ref = self._collection_ref().document(record_key(sender_id, role))
            return [doc_ref] if doc_ref.get().exists else []
        query = self._collection_ref().where(
            filter=FieldFilter("sender_id", "==", normalize_sender_id(sender_id))
        )
        return [snapshot.reference for snapshot in query.stream()]

    def _revoke_sync(self, sender_id: str, role: Role | None) -> bool:
        refs = self._matching_refs(sender_id, role)
        for doc_ref in refs:
            doc_ref.delete()
        return bool(refs)

    async def revoke(self, sender_id: str, role: Role | None = None) -> bool:
        return await self._run(self._revoke_sync, sender_id, role)

    def _set_active_sync(self, sender_id: str, active: bool, role: Role | None) -> bool:
        changed = False
        for doc_ref in self._matching_refs(sender_id, role):
            data = doc_ref.get().to_dict() or {}
            if bool(data.get("active", True)) == active:
                continue
            updated = AuthorizationRecord.from_dict(data).with_active(active)
            doc_ref.update(
                {"active": updated.active, "updated_at": updated.updated_at.isoformat()}
            )
            changed = True
        return changed

    async def set_active(
        self,
        sender_id: str,
        active: bool,
        role: Role | None = None,
    ) -> bool:
        return await self._run(self._set_active_sync, sender_id, active, role)
