"""Tests for the Redis session store, SMTP mailer and reset link builder."""

import json
import smtplib
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from docmanager.core.exceptions import MailDeliveryError, SessionStoreError
from docmanager.features.auth.adapters.redis_session_store import RedisSessionStore, create_redis_client
from docmanager.features.auth.adapters.reset_link_builder import ResetLinkBuilder
from docmanager.features.auth.adapters.smtp_mailer import EmailMessage, SmtpMailer
from docmanager.features.auth.entities.session import SessionData
from docmanager.features.auth.services.reset_email import build_reset_email

from tests.fakes import T0


@pytest.fixture
def mock_pipeline():
    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[1, 1])
    return pipe


@pytest.fixture
def mock_redis(mock_pipeline):
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.pipeline.return_value = mock_pipeline
    return client


@pytest.fixture
def redis_store(mock_redis):
    return RedisSessionStore(mock_redis, key_prefix="dm", ttl_seconds=600)


def _session(user_id=2):
    return SessionData(session_id="abc", user_id=user_id, roles=["ROLE_USER"], created_at=T0)


class TestRedisSessionStore:

    def test_requires_client(self):
        with pytest.raises(ValueError):
            RedisSessionStore(None)

    @pytest.mark.asyncio
    async def test_save_indexes_user_sessions(self, redis_store, mock_pipeline):
        await redis_store.save(_session())

        key, ttl, payload = mock_pipeline.setex.call_args.args
        assert key == "dm:session:abc"
        assert ttl == 600
        assert json.loads(payload)["user_id"] == 2
        mock_pipeline.sadd.assert_called_once_with("dm:user_sessions:2", "abc")
        mock_pipeline.expire.assert_called_once_with("dm:user_sessions:2", 600)

    @pytest.mark.asyncio
    async def test_save_anonymous_with_custom_ttl(self, redis_store, mock_pipeline):
        await redis_store.save(_session(user_id=None), ttl_seconds=30)

        assert mock_pipeline.setex.call_args.args[1] == 30
        mock_pipeline.sadd.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_failure_raises(self, redis_store, mock_pipeline):
        mock_pipeline.execute.side_effect = RedisConnectionError("down")

        with pytest.raises(SessionStoreError):
            await redis_store.save(_session())

    @pytest.mark.asyncio
    async def test_get(self, redis_store, mock_redis):
        mock_redis.get.return_value = json.dumps(_session().to_dict())

        session = await redis_store.get("abc")

        assert session == _session()
        mock_redis.get.assert_awaited_once_with("dm:session:abc")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [None, "", "{not json", json.dumps({"user_id": 2})])
    async def test_get_missing_or_malformed(self, redis_store, mock_redis, raw):
        mock_redis.get.return_value = raw
        assert await redis_store.get("abc") is None

    @pytest.mark.asyncio
    async def test_get_when_redis_down(self, redis_store, mock_redis):
        mock_redis.get.side_effect = RedisConnectionError("down")
        assert await redis_store.get("abc") is None

    @pytest.mark.asyncio
    async def test_delete(self, redis_store, mock_redis, mock_pipeline):
        mock_redis.get.return_value = json.dumps(_session().to_dict())

        assert await redis_store.delete("abc") is True
        mock_pipeline.delete.assert_called_once_with("dm:session:abc")
        mock_pipeline.srem.assert_called_once_with("dm:user_sessions:2", "abc")

    @pytest.mark.asyncio
    async def test_delete_missing(self, redis_store, mock_pipeline):
        mock_pipeline.execute.return_value = [0]
        assert await redis_store.delete("abc") is False

    def test_create_redis_client(self, settings):
        with patch("docmanager.features.auth.adapters.redis_session_store.redis.from_url") as from_url:
            create_redis_client(settings)

        from_url.assert_called_once_with(settings.redis_url, password=None, decode_responses=True)


class TestSmtpMailer:

    @pytest.fixture
    def mailer(self):
        return SmtpMailer("smtp.example.test", 2525, username="mailer", password="secret", from_name="DocManager")

    @pytest.fixture
    def message(self):
        return build_reset_email(
            "alice@example.com", "https://docs.example.test/reset-password/x?a=1&b=2", "noreply@docmanager.com"
        )

    def test_build_mime(self, mailer, message):
        mime = mailer.build_mime(message)

        assert mime["Subject"] == "Password Reset Request - DocManager"
        assert mime["From"] == "DocManager <noreply@docmanager.com>"
        assert mime["To"] == "alice@example.com"
        assert [part.get_content_subtype() for part in mime.get_payload()] == ["plain", "html"]

    def test_html_escapes_link(self, message):
        assert "x?a=1&amp;b=2" in message.html_body
        assert "x?a=1&b=2" in message.text_body

    @pytest.mark.asyncio
    async def test_send(self, mailer, message):
        with patch("docmanager.features.auth.adapters.smtp_mailer.smtplib.SMTP") as smtp:
            server = smtp.return_value.__enter__.return_value
            await mailer.send(message)

        smtp.assert_called_once_with("smtp.example.test", 2525, timeout=10)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "secret")
        server.send_message.assert_called_once()

    @pytest.mark.asyncio
    async def test_send_without_tls_or_auth(self):
        mailer = SmtpMailer("localhost", 25, use_tls=False)
        with patch("docmanager.features.auth.adapters.smtp_mailer.smtplib.SMTP") as smtp:
            server = smtp.return_value.__enter__.return_value
            await mailer.send(EmailMessage(to="bob@example.com", subject="Hi", text_body="Hello"))

        server.starttls.assert_not_called()
        server.login.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_failure(self, mailer, message):
        with patch("docmanager.features.auth.adapters.smtp_mailer.smtplib.SMTP") as smtp:
            smtp.side_effect = smtplib.SMTPConnectError(421, "busy")
            with pytest.raises(MailDeliveryError) as exc_info:
                await mailer.send(message)

        assert exc_info.value.details["error_type"] == "SMTPConnectError"

    def test_from_settings(self, settings):
        mailer = SmtpMailer.from_settings(settings)
        assert mailer.host == settings.smtp_host
        assert mailer.password is None
        assert mailer.from_address == settings.app_email_from


class TestResetLinkBuilder:

    def test_trailing_slash_trimmed(self):
        assert ResetLinkBuilder("https://docs.example.test/").build("abc") == "https://docs.example.test/reset-password/abc"

    def test_custom_template(self):
        builder = ResetLinkBuilder("https://docs.example.test", path_template="/auth/reset?token={token}")
        assert builder.build("abc") == "https://docs.example.test/auth/reset?token=abc"
