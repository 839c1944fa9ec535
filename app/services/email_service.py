"""
Email notification service.

Renders the verification, password-reset and welcome messages and hands them
to a transport on a background thread pool. Delivery is best effort: every
failure is logged and swallowed so callers never learn whether an email went
out.
"""

import html
import logging
import smtplib
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional, Protocol

from app.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutgoingEmail:
    to: str
    subject: str
    text_body: str
    html_body: str


class EmailTransport(Protocol):
    def send(self, message: OutgoingEmail) -> None:
        ...


class SmtpTransport:
    """Delivers messages through an SMTP relay."""

    def __init__(self, host: str, port: int, username: str = "", password: str = "",
                 sender: str = "", sender_name: str = "", use_tls: bool = True,
                 use_ssl: bool = False, timeout: int = 10):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.sender_name = sender_name
        self.use_tls = use_tls
        self.use_ssl = use_ssl
        self.timeout = timeout

    def _build(self, message: OutgoingEmail) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = message.subject
        msg["From"] = f"{self.sender_name} <{self.sender}>" if self.sender_name else self.sender
        msg["To"] = message.to
        msg.set_content(message.text_body)
        msg.add_alternative(message.html_body, subtype="html")
        return msg

    def send(self, message: OutgoingEmail) -> None:
        msg = self._build(message)
        use_ssl = self.use_ssl or self.port == 465
        if use_ssl:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as server:
                if self.username:
                    server.login(self.username, self.password)
                server.send_message(msg)
        else:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username:
                    server.login(self.username, self.password)
                server.send_message(msg)


class LogTransport:
    """Development transport: logs instead of sending."""

    def send(self, message: OutgoingEmail) -> None:
        logger.info("[DEV] Email to %s: %s", message.to, message.subject)


# ----------------------------------------------------------------------
# Templates
# ----------------------------------------------------------------------

_HTML_LAYOUT = """<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"></head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <div style="background: {accent}; padding: 30px; text-align: center; border-radius: 10px 10px 0 0;">
    <h1 style="color: white; margin: 0; font-size: 28px;">Resume Builder</h1>
  </div>
  <div style="background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px;">
    <h2 style="color: {accent}; margin-top: 0;">{heading}</h2>
    <p>Hi <strong>{name}</strong>,</p>
    {body}
    <div style="text-align: center; margin: 30px 0;">
      <a href="{link}" style="background: {accent}; color: white; padding: 15px 30px; text-decoration: none; border-radius: 5px; display: inline-block; font-weight: bold;">{button}</a>
    </div>
    <p style="color: #666; font-size: 14px;">If the button doesn't work, copy and paste this link:</p>
    <p style="background: white; padding: 10px; word-break: break-all; font-size: 12px;">{link}</p>
    <p style="color: #666; font-size: 13px; margin-top: 30px; padding-top: 20px; border-top: 1px solid #ddd;">{footer}</p>
  </div>
</body>
</html>
"""


def _render_html(accent: str, heading: str, name: str, body: str, link: str, button: str, footer: str) -> str:
    return _HTML_LAYOUT.format(accent=accent, heading=html.escape(heading), name=html.escape(name), body=body,
                               link=html.escape(link, quote=True), button=html.escape(button),
                               footer=html.escape(footer))


def render_verification_email(to: str, name: str, link: str) -> OutgoingEmail:
    text_body = (f"Hi {name},\n\n"
                 "Thank you for registering with Resume Builder!\n"
                 f"Verify your email address by opening this link:\n{link}\n\n"
                 "This link expires in 24 hours.\n"
                 "If you didn't create an account, please ignore this email.")
    html_body = _render_html("#667eea", "Verify Your Email Address", name,
                             "<p>Thank you for registering with Resume Builder!</p>"
                             "<p>To complete your registration, please verify your email address.</p>"
                             "<p style=\"color: #e74c3c;\">This link expires in 24 hours.</p>",
                             link, "Verify Email Address",
                             "If you didn't create an account, please ignore this email.")
    return OutgoingEmail(to=to, subject="Verify Your Email - Resume Builder", text_body=text_body,
                         html_body=html_body)


def render_password_reset_email(to: str, name: str, link: str) -> OutgoingEmail:
    text_body = (f"Hi {name},\n\n"
                 "We received a request to reset your Resume Builder password.\n"
                 f"Choose a new password here:\n{link}\n\n"
                 "This link expires in 1 hour.\n"
                 "If you didn't request a password reset, please ignore this email.")
    html_body = _render_html("#f5576c", "Reset Your Password", name,
                             "<p>We received a request to reset your password for your Resume Builder account.</p>"
                             "<p style=\"color: #e74c3c;\">This link expires in 1 hour.</p>",
                             link, "Reset Password",
                             "If you didn't request a password reset, please ignore this email.")
    return OutgoingEmail(to=to, subject="Reset Your Password - Resume Builder", text_body=text_body,
                         html_body=html_body)


def render_welcome_email(to: str, name: str, link: str) -> OutgoingEmail:
    text_body = (f"Hi {name},\n\n"
                 "Your email has been verified successfully. Welcome to Resume Builder!\n"
                 f"Start building your resume: {link}")
    html_body = _render_html("#43e97b", "Welcome to Resume Builder!", name,
                             "<p>Your email has been verified successfully!</p>"
                             "<ul style=\"line-height: 2;\">"
                             "<li>Create professional resumes with multiple templates</li>"
                             "<li>Customize colors and themes</li>"
                             "<li>Save and manage multiple resumes</li>"
                             "</ul>",
                             link, "Go to Dashboard",
                             "Need help? Reply to this email.")
    return OutgoingEmail(to=to, subject="Welcome to Resume Builder!", text_body=text_body, html_body=html_body)


class EmailService:
    """
    Fire-and-forget notification dispatcher.

    Args:
        transport: Delivers a rendered message
        frontend_url: Base URL used for links inside emails
        executor: Runs deliveries off the request thread
    """

    def __init__(self, transport: EmailTransport, frontend_url: str, executor: Optional[Executor] = None):
        self.transport = transport
        self.frontend_url = frontend_url.rstrip("/")
        self.executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="email")

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailService":
        if settings.smtp_enabled:
            transport: EmailTransport = SmtpTransport(host=settings.MAIL_SERVER, port=settings.MAIL_PORT,
                                                      username=settings.MAIL_USERNAME,
                                                      password=settings.MAIL_PASSWORD,
                                                      sender=settings.MAIL_FROM,
                                                      sender_name=settings.MAIL_FROM_NAME,
                                                      use_tls=settings.MAIL_USE_TLS,
                                                      use_ssl=settings.MAIL_USE_SSL,
                                                      timeout=settings.MAIL_TIMEOUT_SECONDS)
        else:
            logger.warning("MAIL_SERVER is not configured; emails will only be logged")
            transport = LogTransport()
        executor = ThreadPoolExecutor(max_workers=settings.MAIL_MAX_WORKERS, thread_name_prefix="email")
        return cls(transport, settings.FRONTEND_URL, executor)

    def send_verification(self, to: str, name: str, token: str) -> None:
        link = f"{self.frontend_url}/verify-email?token={token}"
        self._dispatch("verification", to, lambda: render_verification_email(to, name, link))

    def send_password_reset(self, to: str, name: str, token: str) -> None:
        link = f"{self.frontend_url}/reset-password?token={token}"
        self._dispatch("password reset", to, lambda: render_password_reset_email(to, name, link))

    def send_welcome(self, to: str, name: str) -> None:
        link = f"{self.frontend_url}/dashboard"
        self._dispatch("welcome", to, lambda: render_welcome_email(to, name, link))

    def shutdown(self, wait: bool = True) -> None:
        self.executor.shutdown(wait=wait)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _dispatch(self, kind: str, to: str, render) -> None:
        try:
            self.executor.submit(self._deliver, kind, to, render)
        except RuntimeError:
            # Executor already shut down
            logger.exception("Could not schedule %s email to %s", kind, to)

    def _deliver(self, kind: str, to: str, render) -> None:
        try:
            self.transport.send(render())
            logger.info("%s email sent successfully to: %s", kind.capitalize(), to)
        except Exception:
            logger.exception("Failed to send %s email to: %s", kind, to)
