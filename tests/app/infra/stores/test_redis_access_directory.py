"""Testes do diretório de acesso em Redis (cliente async falso)."""

from __future__ import annotations

import json

import pytest

from app.domain.authorization import AuthorizationRecord
from app.domain.roles import Role
from app.infra.stores import RedisAccessDirectory
from tests.fakes.fake_redis import FakeAsyncRedis
from utils.errors import DuplicateGrantError, RedisConnectionError

SENDER = "+15551234567"
STAFF_KEY = f"access:staff:{SENDER}"
ROLES_KEY = f"access:roles:{SENDER}"


@pytest.fixture
def redis() -> FakeAsyncRedis:
    return FakeAsyncRedis()


@pytest.fixture
def directory(redis: FakeAsyncRedis) -> RedisAccessDirectory:
    return RedisAccessDirectory(redis)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_grant_writes_record_and_role_index(
    redis: FakeAsyncRedis, directory: RedisAccessDirectory
) -> None:
    await directory.grant("+1 555 123 4567", Role.STAFF, "admin", account_id="acc-3")

    stored = json.loads(redis.values[STAFF_KEY])
    assert stored["sender_id"] == SENDER
    assert stored["role"] == "staff"
    assert stored["active"] is True
    assert redis.sets[ROLES_KEY] == {b"staff"}
    assert await directory.is_authorized(SENDER, Role.STAFF) is True
    assert await directory.resolve_account_id(SENDER, Role.STAFF) == "acc-3"


@pytest.mark.asyncio
async def test_duplicate_active_grant(directory: RedisAccessDirectory) -> None:
    await directory.grant(SENDER, Role.STAFF, "admin")

    with pytest.raises(DuplicateGrantError):
        await directory.grant(SENDER, Role.STAFF, "admin")


@pytest.mark.asyncio
async def test_concurrent_write_between_watch_and_exec_is_duplicate(
    redis: FakeAsyncRedis, directory: RedisAccessDirectory
) -> None:
    other = AuthorizationRecord(sender_id=SENDER, role=Role.STAFF, granted_by="other-admin")
    redis.before_exec = lambda: redis.set_now(STAFF_KEY, json.dumps(other.to_dict()))

    with pytest.raises(DuplicateGrantError):
        await directory.grant(SENDER, Role.STAFF, "admin")

    # Só a escrita concorrente sobreviveu
    assert json.loads(redis.values[STAFF_KEY])["granted_by"] == "other-admin"


@pytest.mark.asyncio
async def test_inactive_record_can_be_regranted(directory: RedisAccessDirectory) -> None:
    await directory.grant(SENDER, Role.STAFF, "admin-1")
    assert await directory.set_active(SENDER, False, Role.STAFF) is True
    assert await directory.is_authorized(SENDER, Role.STAFF) is False

    record = await directory.grant(SENDER, Role.STAFF, "admin-2")

    assert record.granted_by == "admin-2"
    assert await directory.is_authorized(SENDER, Role.STAFF) is True


@pytest.mark.asyncio
async def test_revoke_uses_role_index(
    redis: FakeAsyncRedis, directory: RedisAccessDirectory
) -> None:
    await directory.grant(SENDER, Role.STAFF, "admin")
    await directory.grant(SENDER, Role.ADMIN, "admin")

    assert await directory.revoke(SENDER) is True
    assert STAFF_KEY not in redis.values
    assert f"access:admin:{SENDER}" not in redis.values
    assert await directory.revoke(SENDER) is False


@pytest.mark.asyncio
async def test_revoke_single_role(directory: RedisAccessDirectory) -> None:
    await directory.grant(SENDER, Role.STAFF, "admin")
    await directory.grant(SENDER, Role.ADMIN, "admin")

    assert await directory.revoke(SENDER, Role.ADMIN) is True
    assert await directory.is_authorized(SENDER, Role.ADMIN) is False
    assert await directory.is_authorized(SENDER, Role.STAFF) is True


@pytest.mark.asyncio
async def test_set_active_all_roles(directory: RedisAccessDirectory) -> None:
    await directory.grant(SENDER, Role.STAFF, "admin")
    await directory.grant(SENDER, Role.ADMIN, "admin")

    assert await directory.set_active(SENDER, False) is True
    assert await directory.is_authorized(SENDER, Role.STAFF) is False
    assert await directory.is_authorized(SENDER, Role.ADMIN) is False
    assert await directory.set_active(SENDER, False) is False


@pytest.mark.asyncio
async def test_corrupted_record_is_treated_as_missing(
    redis: FakeAsyncRedis, directory: RedisAccessDirectory
) -> None:
    redis.set_now(STAFF_KEY, b"{not json")

    assert await directory.get_record(SENDER, Role.STAFF) is None
    assert await directory.is_authorized(SENDER, Role.STAFF) is False


@pytest.mark.asyncio
async def test_connection_failure_raises_infrastructure_error(
    redis: FakeAsyncRedis, directory: RedisAccessDirectory
) -> None:
    redis.unavailable = True

    with pytest.raises(RedisConnectionError):
        await directory.is_authorized(SENDER, Role.STAFF)
    with pytest.raises(RedisConnectionError):
        await directory.grant(SENDER, Role.STAFF, "admin")
    with pytest.raises(RedisConnectionError):
        await directory.revoke(SENDER)


@pytest.mark.asyncio
async def test_open_role_skips_redis(
    redis: FakeAsyncRedis, directory: RedisAccessDirectory
) -> None:
    redis.unavailable = True
    assert await directory.is_authorized(SENDER, Role.CUSTOMER) is True


@pytest.mark.asyncio
async def test_list_records_uses_member_index(
    redis: FakeAsyncRedis, directory: RedisAccessDirectory
) -> None:
    other = "+15550000009"
    await directory.grant(other, Role.STAFF, "admin")
    await directory.grant(SENDER, Role.STAFF, "admin")
    await directory.set_active(other, False, Role.STAFF)

    assert redis.sets["access:members:staff"] == {other.encode(), SENDER.encode()}
    assert [r.sender_id for r in await directory.list_records(Role.STAFF)] == [SENDER]
    everyone = await directory.list_records(Role.STAFF, active_only=False)
    assert [r.sender_id for r in everyone] == [other, SENDER]

    await directory.revoke(SENDER)
    assert redis.sets["access:members:staff"] == {other.encode()}
    assert await directory.list_records(Role.STAFF) == []
