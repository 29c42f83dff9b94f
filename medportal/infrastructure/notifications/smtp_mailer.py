import logging
import smtplib
from email.mime.text import MIMEText

from ...core.config import settings
from ...application.ports.mailer import Mailer

logger = logging.getLogger(__name__)


class SmtpMailer(Mailer):
    def __init__(self) -> None:
        self.server = settings.SMTP_SERVER
        self.port = settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME
        self.password = settings.SMTP_PASSWORD
        self.use_tls = settings.SMTP_USE_TLS
        self.sender = settings.MAIL_FROM

    def send_email(self, to: str, subject: str, body: str) -> None:
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to

        with smtplib.SMTP(self.server, self.port, timeout=30) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(msg)
        logger.info(f"Email sent to: {to}")


class LoggingMailer(Mailer):
    """Used when SMTP is not configured: logs the message instead of sending it."""

    def send_email(self, to: str, subject: str, body: str) -> None:
        logger.info(f"Email (not sent, SMTP disabled) to={to} subject={subject!r} body={body!r}")


def build_mailer() -> Mailer:
    if settings.smtp_configured:
        return SmtpMailer()
    logger.warning("SMTP_SERVER not configured, reminder emails will only be logged")
    return LoggingMailer()
