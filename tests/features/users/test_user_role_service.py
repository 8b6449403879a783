"""Tests for admin role and permission editing."""

import pytest

from docmanager.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    RoleAssignmentError,
    UserNotFoundError,
)
from docmanager.features.users.services.user_role_service import UserRoleService, permission_editor_context

from tests.fakes import InMemoryUserRepository, make_user


@pytest.fixture
def users(store, admin, alice, reader):
    repository = InMemoryUserRepository(store)
    for user in (admin, alice, reader):
        repository.add(user)
    return repository


@pytest.fixture
def service(users):
    return UserRoleService(users)


class TestUpdateAccess:

    @pytest.mark.asyncio
    async def test_replaces_roles_and_permissions(self, service, users, admin, alice):
        updated = await service.update_access(
            admin, alice.id, ["ROLE_EDITOR", "auditor", "ROLE_EDITOR"], ["documents.view_list", "bogus.key"]
        )

        assert updated.roles == ["ROLE_EDITOR", "auditor", "ROLE_USER"]
        assert updated.permissions == ["documents.view_list"]
        stored = await users.get_by_id(alice.id)
        assert stored.permissions == ["documents.view_list"]
        assert not stored.has_permission("documents.delete")

    @pytest.mark.asyncio
    async def test_empty_permissions_restore_defaults(self, service, users, admin, reader):
        await service.update_access(admin, reader.id, [], [])

        stored = await users.get_by_id(reader.id)
        assert stored.permissions == []
        assert stored.has_permission("documents.delete")

    @pytest.mark.asyncio
    async def test_admin_target_refused(self, service, store, admin):
        other_admin = make_user(7, "root@example.com", roles=["ROLE_ADMIN"])
        InMemoryUserRepository(store).add(other_admin)

        with pytest.raises(RoleAssignmentError) as exc_info:
            await service.update_access(admin, other_admin.id, [], [])

        assert exc_info.value.message == "Cannot edit admin users. Admin accounts have full access by default."

    @pytest.mark.asyncio
    async def test_self_edit_refused(self, store, alice):
        # Promote in memory only: the stored row stays a plain user.
        acting = make_user(alice.id, alice.email, roles=["ROLE_ADMIN"])
        repository = InMemoryUserRepository(store)
        repository.add(alice)
        service = UserRoleService(repository)

        with pytest.raises(RoleAssignmentError) as exc_info:
            await service.update_access(acting, alice.id, [], [])

        assert exc_info.value.message == "You cannot edit your own roles."

    @pytest.mark.asyncio
    async def test_missing_target(self, service, admin):
        with pytest.raises(UserNotFoundError):
            await service.update_access(admin, 404, [], [])

    @pytest.mark.asyncio
    async def test_non_admin_denied(self, service, alice, reader):
        with pytest.raises(AuthorizationError):
            await service.update_access(alice, reader.id, [], [])

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, service, reader):
        with pytest.raises(AuthenticationError):
            await service.update_access(None, reader.id, [], [])


class TestListUsers:

    @pytest.mark.asyncio
    async def test_admin_lists_by_email(self, service, admin):
        users = await service.list_users(admin)
        assert [u.email for u in users] == ["admin@example.com", "alice@example.com", "reader@example.com"]

    @pytest.mark.asyncio
    async def test_non_admin_denied(self, service, alice):
        with pytest.raises(AuthorizationError):
            await service.list_users(alice)


def test_permission_editor_context():
    context = permission_editor_context()
    assert set(context) == {"permission_groups", "permission_sets", "ui_permissions"}
    assert context["permission_sets"]["custom"]["permissions"] == []
    assert "Documents" in context["permission_groups"]
