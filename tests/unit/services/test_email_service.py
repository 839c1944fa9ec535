"""
Unit tests for the email notification dispatcher.
"""

import logging
from concurrent.futures import Executor, Future

import pytest

from app.core.config import Settings
from app.services.email_service import (EmailService, LogTransport, OutgoingEmail, SmtpTransport,
                                        render_verification_email, )


class ImmediateExecutor(Executor):
    """Runs submitted work on the calling thread."""

    def submit(self, fn, /, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except BaseException as exc:
            future.set_exception(exc)
        return future


class RecordingTransport:
    def __init__(self):
        self.sent: list[OutgoingEmail] = []

    def send(self, message: OutgoingEmail) -> None:
        self.sent.append(message)


class FailingTransport:
    def send(self, message: OutgoingEmail) -> None:
        raise ConnectionRefusedError("SMTP relay unreachable")


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def service(transport) -> EmailService:
    return EmailService(transport, "https://app.example.com/", executor=ImmediateExecutor())


# ======================================================================
# Links and content
# ======================================================================


class TestMessages:

    def test_verification_link(self, service, transport):
        service.send_verification("alice@example.com", "Alice", "tok123")
        message = transport.sent[0]
        assert message.to == "alice@example.com"
        assert "Verify" in message.subject
        assert "https://app.example.com/verify-email?token=tok123" in message.text_body
        assert "https://app.example.com/verify-email?token=tok123" in message.html_body

    def test_password_reset_link(self, service, transport):
        service.send_password_reset("alice@example.com", "Alice", "reset456")
        message = transport.sent[0]
        assert "Reset" in message.subject
        assert "https://app.example.com/reset-password?token=reset456" in message.text_body
        assert "1 hour" in message.text_body

    def test_welcome_links_dashboard(self, service, transport):
        service.send_welcome("alice@example.com", "Alice")
        assert "https://app.example.com/dashboard" in transport.sent[0].html_body

    def test_name_is_escaped_in_html(self):
        message = render_verification_email("x@example.com", "<b>Eve</b>", "https://app.example.com/v")
        assert "<b>Eve</b>" not in message.html_body
        assert "&lt;b&gt;Eve&lt;/b&gt;" in message.html_body


# ======================================================================
# Failure handling
# ======================================================================


class TestDeliveryFailures:

    def test_transport_failure_is_swallowed_and_logged(self, caplog):
        service = EmailService(FailingTransport(), "https://app.example.com", executor=ImmediateExecutor())
        with caplog.at_level(logging.ERROR, logger="app.services.email_service"):
            assert service.send_verification("alice@example.com", "Alice", "tok123") is None
        assert "Failed to send verification email to: alice@example.com" in caplog.text

    def test_shut_down_executor_does_not_raise(self, transport):
        service = EmailService(transport, "https://app.example.com")
        service.shutdown()
        service.send_welcome("alice@example.com", "Alice")
        assert transport.sent == []

    def test_pool_delivery(self, transport):
        service = EmailService(transport, "https://app.example.com")
        service.send_welcome("alice@example.com", "Alice")
        service.shutdown(wait=True)
        assert len(transport.sent) == 1


# ======================================================================
# Configuration
# ======================================================================


class TestFromSettings:

    def test_log_transport_without_mail_server(self):
        service = EmailService.from_settings(Settings(SECRET_KEY="k", MAIL_SERVER=""))
        try:
            assert isinstance(service.transport, LogTransport)
        finally:
            service.shutdown()

    def test_smtp_transport_with_mail_server(self):
        settings = Settings(SECRET_KEY="k", MAIL_SERVER="smtp.example.com", MAIL_PORT=465,
                            MAIL_USERNAME="mailer", MAIL_FROM="no-reply@example.com")
        service = EmailService.from_settings(settings)
        try:
            assert isinstance(service.transport, SmtpTransport)
            assert service.transport.host == "smtp.example.com"
            assert service.transport.port == 465
            assert service.frontend_url == settings.FRONTEND_URL
        finally:
            service.shutdown()
