"""Testes das regras de gestão de acesso."""

from __future__ import annotations

import pytest

from app.domain.roles import Role
from app.infra.stores import MemoryAccessDirectory
from app.services.access_management import AccessManagementService
from utils.errors import DuplicateGrantError, GrantNotFoundError, PermissionDeniedError

ADMIN = "+15550000001"
STAFF = "+15550000002"
TARGET = "+15550000009"


@pytest.fixture
async def service(directory: MemoryAccessDirectory) -> AccessManagementService:
    await directory.grant(ADMIN, Role.ADMIN, "bootstrap")
    await directory.grant(STAFF, Role.STAFF, "bootstrap")
    return AccessManagementService(directory)


class TestGrant:
    """Concessões respeitam a ordem de privilégio."""

    @pytest.mark.asyncio
    async def test_admin_grants_staff(
        self, service: AccessManagementService, directory: MemoryAccessDirectory
    ) -> None:
        record = await service.grant_role(ADMIN, TARGET, Role.STAFF, account_id="acc-2")

        assert record.granted_by == ADMIN
        assert record.account_id == "acc-2"
        assert await directory.is_authorized(TARGET, Role.STAFF) is True

    @pytest.mark.asyncio
    async def test_admin_grants_admin(self, service: AccessManagementService) -> None:
        record = await service.grant_role(ADMIN, TARGET, Role.ADMIN)
        assert record.role is Role.ADMIN

    @pytest.mark.asyncio
    async def test_staff_cannot_grant_staff(self, service: AccessManagementService) -> None:
        with pytest.raises(PermissionDeniedError):
            await service.grant_role(STAFF, TARGET, Role.STAFF)

    @pytest.mark.asyncio
    async def test_unknown_actor_cannot_grant(self, service: AccessManagementService) -> None:
        with pytest.raises(PermissionDeniedError):
            await service.grant_role("+19999999999", TARGET, Role.STAFF)

    @pytest.mark.asyncio
    async def test_duplicate_grant(self, service: AccessManagementService) -> None:
        with pytest.raises(DuplicateGrantError):
            await service.grant_role(ADMIN, STAFF, Role.STAFF)

    @pytest.mark.asyncio
    async def test_open_role_cannot_be_granted(self, service: AccessManagementService) -> None:
        with pytest.raises(ValueError):
            await service.grant_role(ADMIN, TARGET, Role.CUSTOMER)

    @pytest.mark.asyncio
    async def test_actor_role(self, service: AccessManagementService) -> None:
        assert await service.actor_role(ADMIN) is Role.ADMIN
        assert await service.actor_role(STAFF) is Role.STAFF
        assert await service.actor_role(TARGET) is Role.CUSTOMER


class TestRevokeAndActivation:
    """Revogação e (des)ativação."""

    @pytest.mark.asyncio
    async def test_revoke_staff(
        self, service: AccessManagementService, directory: MemoryAccessDirectory
    ) -> None:
        await service.revoke_access(ADMIN, STAFF, Role.STAFF)
        assert await directory.get_record(STAFF, Role.STAFF) is None

    @pytest.mark.asyncio
    async def test_revoke_missing(self, service: AccessManagementService) -> None:
        with pytest.raises(GrantNotFoundError):
            await service.revoke_access(ADMIN, TARGET, Role.STAFF)

    @pytest.mark.asyncio
    async def test_staff_cannot_revoke_admin(self, service: AccessManagementService) -> None:
        with pytest.raises(PermissionDeniedError):
            await service.revoke_access(STAFF, ADMIN)

    @pytest.mark.asyncio
    async def test_deactivate_and_activate(
        self, service: AccessManagementService, directory: MemoryAccessDirectory
    ) -> None:
        await service.set_access_active(ADMIN, STAFF, False, Role.STAFF)
        assert await directory.is_authorized(STAFF, Role.STAFF) is False

        await service.set_access_active(ADMIN, STAFF, True, Role.STAFF)
        assert await directory.is_authorized(STAFF, Role.STAFF) is True

    @pytest.mark.asyncio
    async def test_set_active_without_change(self, service: AccessManagementService) -> None:
        with pytest.raises(GrantNotFoundError):
            await service.set_access_active(ADMIN, STAFF, True, Role.STAFF)


class TestListing:
    """Listagem de membros por papel."""

    @pytest.mark.asyncio
    async def test_admin_lists_staff(self, service: AccessManagementService) -> None:
        await service.grant_role(ADMIN, TARGET, Role.STAFF)

        records = await service.list_members(ADMIN, Role.STAFF)

        assert [record.sender_id for record in records] == [STAFF, TARGET]

    @pytest.mark.asyncio
    async def test_staff_cannot_list_staff(self, service: AccessManagementService) -> None:
        with pytest.raises(PermissionDeniedError):
            await service.list_members(STAFF, Role.STAFF)

    @pytest.mark.asyncio
    async def test_get_access_returns_inactive_record(
        self, service: AccessManagementService
    ) -> None:
        await service.set_access_active(ADMIN, STAFF, False, Role.STAFF)

        record = await service.get_access(STAFF, Role.STAFF)

        assert record is not None
        assert record.active is False
        assert await service.get_access(TARGET, Role.STAFF) is None
