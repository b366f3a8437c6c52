"""Redis Access Directory — diretório de acesso com Upstash Redis.

Contrato de Keys:
    access:<papel>:<remetente>   → JSON do AuthorizationRecord
    access:roles:<remetente>     → SET com os papéis registrados
    access:members:<papel>       → SET com os remetentes do papel

Concessões usam WATCH/MULTI para que duas concessões simultâneas do
mesmo (remetente, papel) não produzam dois registros ativos.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from redis.exceptions import WatchError

from app.domain.authorization import AuthorizationRecord, normalize_sender_id, record_key
from app.domain.roles import Role, parse_role
from app.protocols.access_directory import AccessDirectoryProtocol, ensure_restricted
from utils.errors import DuplicateGrantError, RedisConnectionError

if TYPE_CHECKING:
    from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)

ACCESS_PREFIX = "access:"


class RedisAccessDirectory(AccessDirectoryProtocol):
    """Diretório de acesso usando Redis (async).

    Falhas de conexão são convertidas em RedisConnectionError; o chamador
    decide o fallback (resolver cai para o papel aberto, dispatcher rejeita).

    Args:
        async_redis_client: Cliente Redis assíncrono
    """

    def __init__(self, async_redis_client: AsyncRedis[bytes]) -> None:
        self._redis = async_redis_client

    def _key(self, sender_id: str, role: Role) -> str:
        return f"{ACCESS_PREFIX}{record_key(sender_id, role)}"

    def _roles_key(self, sender_id: str) -> str:
        return f"{ACCESS_PREFIX}roles:{normalize_sender_id(sender_id)}"

    def _members_key(self, role: Role) -> str:
        return f"{ACCESS_PREFIX}members:{role.value}"

    async def _load(self, key: str) -> AuthorizationRecord | None:
        try:
            data = await self._redis.get(key)
        except Exception as exc:
            raise RedisConnectionError("Falha ao consultar diretório de acesso no Redis") from exc
        if data is None:
            return None
        try:
            return AuthorizationRecord.from_dict(json.loads(data))
        except (json.JSONDecodeError, KeyError, ValueError) as e:
            logger.warning("access_record_load_error", extra={"error": str(e)})
            return None

    async def is_authorized(self, sender_id: str, role: Role) -> bool:
        if role.is_open:
            return True
        record = await self._load(self._key(sender_id, role))
        return record is not None and record.active

    async def resolve_account_id(self, sender_id: str, role: Role) -> str | None:
        record = await self._load(self._key(sender_id, role))
        if record is None or not record.active:
            return None
        return record.account_id

    async def get_record(self, sender_id: str, role: Role) -> AuthorizationRecord | None:
        return await self._load(self._key(sender_id, role))

    async def list_records(
        self, role: Role, *, active_only: bool = True
    ) -> list[AuthorizationRecord]:
        try:
            members = await self._redis.smembers(self._members_key(role))
        except Exception as exc:
            raise RedisConnectionError("Falha ao listar membros no Redis") from exc
        records = []
        for member in members:
            sender_id = member.decode() if isinstance(member, bytes) else str(member)
            record = await self._load(self._key(sender_id, role))
            if record is not None and (record.active or not active_only):
                records.append(record)
        return sorted(records, key=lambda record: record.sender_id)

    async def grant(
        self,
        sender_id: str,
        role: Role,
        granted_by: str,
        *,
        account_id: str | None = None,
    ) -> AuthorizationRecord:
        ensure_restricted(role)
        key = self._key(sender_id, role)
        record = AuthorizationRecord(
            sender_id=normalize_sender_id(sender_id),
            role=role,
            granted_by=granted_by,
            account_id=account_id,
        )
        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                await pipe.watch(key)
                existing = await pipe.get(key)
                if existing is not None and json.loads(existing).get("active", True):
                    raise DuplicateGrantError(f"registro ativo já existe para {role}")
                pipe.multi()
                pipe.set(key, json.dumps(record.to_dict()))
                pipe.sadd(self._roles_key(sender_id), role.value)
                pipe.sadd(self._members_key(role), record.sender_id)
                await pipe.execute()
        except WatchError as exc:
            # Outra concessão alterou a chave entre WATCH e EXEC
            raise DuplicateGrantError(f"concessão concorrente para {role}") from exc
        except DuplicateGrantError:
            raise
        except Exception as exc:
            raise RedisConnectionError("Falha ao gravar concessão no Redis") from exc

        logger.info("access_granted", extra={"backend": "redis", "role": role.value})
        return record

    async def _roles_for(self, sender_id: str, role: Role | None) -> list[Role]:
        if role is not None:
            return [role]
        try:
            members = await self._redis.smembers(self._roles_key(sender_id))
        except Exception as exc:
            raise RedisConnectionError("Falha ao listar papéis no Redis") from exc
        roles = []
        for member in members:
            value = member.decode() if isinstance(member, bytes) else str(member)
            parsed = parse_role(value)
            if parsed is not None:
                roles.append(parsed)
        return roles

    async def revoke(self, sender_id: str, role: Role | None = None) -> bool:
        roles = await self._roles_for(sender_id, role)
        if not roles:
            return False
        try:
            pipeline = self._redis.pipeline()
            for item in roles:
                pipeline.delete(self._key(sender_id, item))
            pipeline.srem(self._roles_key(sender_id), *[item.value for item in roles])
            for item in roles:
                pipeline.srem(self._members_key(item), normalize_sender_id(sender_id))
            results = await pipeline.execute()
        except Exception as exc:
            raise RedisConnectionError("Falha ao revogar acesso no Redis") from exc
        return any(bool(result) for result in results[: len(roles)])

    async def set_active(
        self,
        sender_id: str,
        active: bool,
        role: Role | None = None,
    ) -> bool:
        changed = False
        for item in await self._roles_for(sender_id, role):
            key = self._key(sender_id, item)
            record = await self._load(key)
            if record is None or record.active == active:
                continue
            try:
                await self._redis.set(key, json.dumps(record.with_active(active).to_dict()))
            except Exception as exc:
                raise RedisConnectionError("Falha ao atualizar acesso no Redis") from exc
            changed = True
        return changed
