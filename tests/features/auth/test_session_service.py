"""Tests for per-request actor refresh and the access-denied boundary."""

from unittest.mock import AsyncMock

import pytest

from docmanager.core.exceptions import AuthorizationError, QueryError
from docmanager.features.auth.entities.session import SessionData
from docmanager.features.auth.models.responses import ACCESS_REVOKED_MESSAGE
from docmanager.features.auth.services.session_service import AccessDeniedHandler, SessionService

from tests.fakes import InMemoryUserRepository


@pytest.fixture
def users(store, admin, alice, reader):
    repository = InMemoryUserRepository(store)
    for user in (admin, alice, reader):
        repository.add(user)
    return repository


def _session_for(user, session_id="sess-1"):
    return SessionData(
        session_id=session_id,
        user_id=user.id,
        roles=list(user.roles),
        permissions=None if user.permissions is None else list(user.permissions),
    )


class TestSessionData:

    def test_round_trip_dict(self, alice):
        session = _session_for(alice)
        session.add_flash("success", "Saved.")
        restored = SessionData.from_dict(session.to_dict())
        assert restored == session

    def test_invalid_flash_category(self, alice):
        with pytest.raises(ValueError):
            _session_for(alice).add_flash("warning-ish", "x")

    def test_clear_actor_keeps_flashes(self, alice):
        session = _session_for(alice)
        session.add_flash("info", "Hello")
        session.clear_actor()
        assert not session.is_authenticated
        assert session.pop_flashes() == [{"category": "info", "message": "Hello"}]
        assert session.flashes == []


class TestSessionService:

    @pytest.fixture
    def service(self, users, session_store):
        return SessionService(users, session_store)

    @pytest.mark.asyncio
    async def test_load(self, service, session_store, alice):
        await session_store.save(_session_for(alice))

        assert (await service.load("sess-1")).user_id == alice.id
        assert await service.load(None) is None
        assert await service.load("missing") is None

    @pytest.mark.asyncio
    async def test_refresh_picks_up_admin_changes(self, service, users, session_store, reader):
        session = _session_for(reader)
        await session_store.save(session)
        await users.update_roles_and_permissions(reader.id, ["ROLE_USER"], ["documents.view_list"])

        actor = await service.refresh_actor(session)

        assert actor.permissions == ["documents.view_list"]
        assert not actor.has_permission("clients.view_list")
        assert session_store.sessions["sess-1"]["permissions"] == ["documents.view_list"]

    @pytest.mark.asyncio
    async def test_refresh_unchanged_does_not_write(self, service, session_store, alice):
        session = _session_for(alice)
        session_store.save = AsyncMock()

        actor = await service.refresh_actor(session)

        assert actor.id == alice.id
        session_store.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_refresh_never_logs_out_user_without_permissions(self, service, users, alice):
        await users.update_roles_and_permissions(alice.id, ["ROLE_USER"], [])

        actor = await service.refresh_actor(_session_for(alice))

        assert actor is not None

    @pytest.mark.asyncio
    async def test_deleted_user_is_anonymous(self, service, store, alice):
        session = _session_for(alice)
        del store.users[alice.id]

        assert await service.refresh_actor(session) is None

    @pytest.mark.asyncio
    async def test_lookup_failure_is_anonymous(self, session_store, alice):
        failing = AsyncMock()
        failing.get_by_id.side_effect = QueryError("Failed to retrieve user from database")

        actor = await SessionService(failing, session_store).refresh_actor(_session_for(alice))

        assert actor is None

    @pytest.mark.asyncio
    async def test_anonymous_session(self, service):
        assert await service.refresh_actor(SessionData(session_id="anon", user_id=None)) is None
        assert await service.refresh_actor(None) is None


class TestAccessDeniedHandler:

    @pytest.fixture
    def handler(self, users, session_store):
        return AccessDeniedHandler(users, session_store)

    @pytest.fixture
    def error(self):
        return AuthorizationError("Access denied.", attribute="clients.delete")

    @pytest.mark.asyncio
    async def test_anonymous_sent_to_login(self, handler, error):
        outcome = await handler.handle(None, error)
        assert outcome.logged_out is False
        assert outcome.redirect_to == "login"

    @pytest.mark.asyncio
    async def test_user_with_access_sent_home(self, handler, session_store, reader, error):
        session = _session_for(reader)
        await session_store.save(session)

        outcome = await handler.handle(session, error)

        assert outcome.logged_out is False
        assert outcome.redirect_to == "home"
        assert outcome.message == "Access denied."
        assert "sess-1" in session_store.sessions

    @pytest.mark.asyncio
    async def test_stripped_user_is_logged_out(self, handler, users, session_store, reader, error):
        session = _session_for(reader)
        await session_store.save(session)
        # Admin clears the explicit list while the user is logged in.
        users.store.users[reader.id].permissions = []

        outcome = await handler.handle(session, error)

        assert outcome.logged_out is True
        assert outcome.redirect_to == "login"
        assert outcome.message == ACCESS_REVOKED_MESSAGE
        assert "sess-1" not in session_store.sessions
        assert not session.is_authenticated

        replacement = session_store.sessions[outcome.session_id]
        assert replacement["user_id"] is None
        assert replacement["flashes"] == [{"category": "error", "message": ACCESS_REVOKED_MESSAGE}]

    @pytest.mark.asyncio
    async def test_store_failure_still_logs_out(self, handler, users, session_store, reader, error):
        session = _session_for(reader)
        await session_store.save(session)
        users.store.users[reader.id].permissions = []
        session_store.fail_writes = True

        outcome = await handler.handle(session, error)

        assert outcome.logged_out is True
        assert outcome.redirect_to == "login"
        assert outcome.session_id is None
        assert not session.is_authenticated

    @pytest.mark.asyncio
    async def test_default_permission_user_logged_out_on_denial(self, handler, session_store, alice, error):
        # An unset list classifies as "None", so any denial ends the session.
        session = _session_for(alice)
        await session_store.save(session)

        outcome = await handler.handle(session, error)

        assert outcome.logged_out is True

    @pytest.mark.asyncio
    async def test_deleted_user_logged_out(self, handler, store, session_store, reader, error):
        session = _session_for(reader)
        await session_store.save(session)
        del store.users[reader.id]

        outcome = await handler.handle(session, error)

        assert outcome.logged_out is True
        assert "sess-1" not in session_store.sessions

    @pytest.mark.asyncio
    async def test_lookup_failure_fails_closed(self, session_store, reader, error):
        failing = AsyncMock()
        failing.get_by_id.side_effect = QueryError("Failed to retrieve user from database")
        session = _session_for(reader)
        await session_store.save(session)

        outcome = await AccessDeniedHandler(failing, session_store).handle(session, error)

        assert outcome.logged_out is True

    @pytest.mark.asyncio
    async def test_admin_never_logged_out(self, handler, session_store, admin, error):
        session = _session_for(admin)
        await session_store.save(session)

        outcome = await handler.handle(session, error)

        assert outcome.logged_out is False
