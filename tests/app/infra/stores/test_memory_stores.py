"""Testes dos stores em memória (diretório de acesso e auditoria)."""

from __future__ import annotations

import asyncio

import pytest

from app.domain.audit import AuditAction, AuditEvent
from app.domain.roles import Role
from app.infra.stores import MemoryAccessDirectory, MemoryAuditStore
from utils.errors import DuplicateGrantError

SENDER = "+15551234567"


class TestMemoryAccessDirectory:
    """Concessão, consulta, desativação e remoção."""

    @pytest.mark.asyncio
    async def test_open_role_needs_no_record(self) -> None:
        directory = MemoryAccessDirectory()
        assert await directory.is_authorized(SENDER, Role.CUSTOMER) is True

    @pytest.mark.asyncio
    async def test_restricted_role_without_record_is_denied(self) -> None:
        directory = MemoryAccessDirectory()
        assert await directory.is_authorized(SENDER, Role.STAFF) is False
        assert await directory.resolve_account_id(SENDER, Role.STAFF) is None

    @pytest.mark.asyncio
    async def test_grant_normalizes_sender(self) -> None:
        directory = MemoryAccessDirectory()

        record = await directory.grant("1 (555) 123-4567", Role.STAFF, "admin", account_id="acc-1")

        assert record.sender_id == SENDER
        assert record.active is True
        assert await directory.is_authorized(SENDER, Role.STAFF) is True
        assert await directory.is_authorized("15551234567", Role.STAFF) is True
        assert await directory.resolve_account_id(SENDER, Role.STAFF) == "acc-1"

    @pytest.mark.asyncio
    async def test_grant_is_per_role(self) -> None:
        directory = MemoryAccessDirectory()
        await directory.grant(SENDER, Role.STAFF, "admin")

        assert await directory.is_authorized(SENDER, Role.ADMIN) is False

    @pytest.mark.asyncio
    async def test_duplicate_active_grant_is_rejected(self) -> None:
        directory = MemoryAccessDirectory()
        await directory.grant(SENDER, Role.STAFF, "admin")

        with pytest.raises(DuplicateGrantError):
            await directory.grant("15551234567", Role.STAFF, "admin")

    @pytest.mark.asyncio
    async def test_concurrent_grants_leave_single_active_record(self) -> None:
        directory = MemoryAccessDirectory()

        results = await asyncio.gather(
            *(directory.grant(SENDER, Role.STAFF, f"admin-{i}") for i in range(5)),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, Exception)]
        failures = [r for r in results if isinstance(r, DuplicateGrantError)]
        assert len(successes) == 1
        assert len(failures) == 4

    @pytest.mark.asyncio
    async def test_grant_open_role_is_invalid(self) -> None:
        directory = MemoryAccessDirectory()
        with pytest.raises(ValueError):
            await directory.grant(SENDER, Role.CUSTOMER, "admin")

    @pytest.mark.asyncio
    async def test_deactivate_then_regrant(self) -> None:
        directory = MemoryAccessDirectory()
        await directory.grant(SENDER, Role.STAFF, "admin", account_id="acc-1")

        assert await directory.set_active(SENDER, False, Role.STAFF) is True
        assert await directory.is_authorized(SENDER, Role.STAFF) is False
        assert await directory.resolve_account_id(SENDER, Role.STAFF) is None
        record = await directory.get_record(SENDER, Role.STAFF)
        assert record is not None
        assert record.active is False

        # Registro inativo pode ser substituído por nova concessão
        await directory.grant(SENDER, Role.STAFF, "admin-2")
        assert await directory.is_authorized(SENDER, Role.STAFF) is True

    @pytest.mark.asyncio
    async def test_set_active_without_change_returns_false(self) -> None:
        directory = MemoryAccessDirectory()
        await directory.grant(SENDER, Role.STAFF, "admin")

        assert await directory.set_active(SENDER, True) is False
        assert await directory.set_active("+10000000000", False) is False

    @pytest.mark.asyncio
    async def test_revoke_all_roles(self) -> None:
        directory = MemoryAccessDirectory()
        await directory.grant(SENDER, Role.STAFF, "admin")
        await directory.grant(SENDER, Role.ADMIN, "admin")

        assert await directory.revoke(SENDER) is True
        assert await directory.get_record(SENDER, Role.STAFF) is None
        assert await directory.get_record(SENDER, Role.ADMIN) is None
        assert await directory.revoke(SENDER) is False

    @pytest.mark.asyncio
    async def test_revoke_single_role(self) -> None:
        directory = MemoryAccessDirectory()
        await directory.grant(SENDER, Role.STAFF, "admin")
        await directory.grant(SENDER, Role.ADMIN, "admin")

        assert await directory.revoke(SENDER, Role.STAFF) is True
        assert await directory.is_authorized(SENDER, Role.STAFF) is False
        assert await directory.is_authorized(SENDER, Role.ADMIN) is True

    @pytest.mark.asyncio
    async def test_list_records_by_role(self) -> None:
        directory = MemoryAccessDirectory()
        await directory.grant("+15550000009", Role.STAFF, "admin")
        await directory.grant(SENDER, Role.STAFF, "admin")
        await directory.grant(SENDER, Role.ADMIN, "admin")
        await directory.set_active("+15550000009", False, Role.STAFF)

        active = await directory.list_records(Role.STAFF)
        everyone = await directory.list_records(Role.STAFF, active_only=False)

        assert [record.sender_id for record in active] == [SENDER]
        assert [record.sender_id for record in everyone] == ["+15550000009", SENDER]
        assert await directory.list_records(Role.CUSTOMER) == []


class TestMemoryAuditStore:
    """Append-only com limite de registros."""

    @pytest.mark.asyncio
    async def test_append_and_records(self) -> None:
        store = MemoryAuditStore()
        event = AuditEvent(
            role=Role.CUSTOMER,
            action=AuditAction.RECEIVED,
            sender_id=SENDER,
            details={"message": "hi"},
            correlation_id="corr-1",
        )

        await store.append(event)

        assert store.get_events() == [event]
        record = store.get_records()[0]
        assert record["role"] == "customer"
        assert record["action"] == "received"
        assert record["details"] == {"message": "hi"}
        assert record["correlation_id"] == "corr-1"

    @pytest.mark.asyncio
    async def test_max_records_keeps_most_recent(self) -> None:
        store = MemoryAuditStore(max_records=2)
        for index in range(3):
            await store.append(
                AuditEvent(
                    role=Role.CUSTOMER,
                    action=AuditAction.RECEIVED,
                    sender_id=SENDER,
                    details={"index": index},
                )
            )

        assert [event.details["index"] for event in store.get_events()] == [1, 2]
