"""Tests for service wiring, dependencies and logging configuration."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from docmanager.config.logging_config import LoggingConfig, get_log_level_from_verbosity
from docmanager.container import ServiceContainer
from docmanager.core.exceptions import ConfigurationError
from docmanager.database.connection import DatabaseManager
from docmanager.dependencies import get_container, require_actor
from docmanager.features.auth.adapters.redis_session_store import RedisSessionStore
from docmanager.features.auth.adapters.smtp_mailer import SmtpMailer

from tests.fakes import RecordingMailer


class TestServiceContainer:

    def test_build_creates_infrastructure(self, settings):
        container = ServiceContainer.build(settings)

        assert isinstance(container.database, DatabaseManager)
        assert isinstance(container.session_store, RedisSessionStore)
        assert isinstance(container.mailer, SmtpMailer)
        assert container.redis_client is not None
        assert container.password_reset_service.link_builder.base_url == "https://docs.example.test"
        assert container.user_role_service.checker is container.checker

    def test_build_with_supplied_collaborators(self, settings, session_store, hasher):
        mailer = RecordingMailer()
        container = ServiceContainer.build(settings, session_store=session_store, mailer=mailer, password_hasher=hasher)

        assert container.redis_client is None
        assert container.auth_service.session_store is session_store
        assert container.password_reset_service.mailer is mailer
        assert container.auth_service.password_hasher is hasher

    @pytest.mark.asyncio
    async def test_shutdown_closes_resources(self, settings):
        container = ServiceContainer.build(settings)
        container.database = AsyncMock()
        container.redis_client = AsyncMock()

        await container.shutdown()

        container.database.close_pool.assert_awaited_once()
        container.redis_client.aclose.assert_awaited_once()


class TestDependencies:

    def test_missing_container(self):
        request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace()))
        with pytest.raises(ConfigurationError):
            get_container(request)

    def test_require_actor(self, alice):
        assert require_actor(SimpleNamespace(state=SimpleNamespace(user=alice))) is alice


class TestLoggingConfig:

    @pytest.mark.parametrize(
        "verbosity, level",
        [("quiet", "ERROR"), ("NORMAL", "INFO"), ("debug", "DEBUG"), ("chatty", "INFO")],
    )
    def test_verbosity_levels(self, verbosity, level):
        assert get_log_level_from_verbosity(verbosity) == level

    def test_quiet_modules_by_default(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("LOG_VERBOSITY", raising=False)

        config = LoggingConfig.build_config()

        assert config["root"]["level"] == "INFO"
        assert config["loggers"]["docmanager.features.auth.middleware"] == {"level": "WARNING"}
        assert config["loggers"]["asyncpg"] == {"level": "WARNING"}

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "json")

        config = LoggingConfig.build_config()

        assert config["root"]["level"] == "DEBUG"
        assert "docmanager.features.auth.middleware" not in config["loggers"]
        assert config["formatters"]["default"]["format"].startswith('{"time"')
