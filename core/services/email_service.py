"""Email service for sending notifications via SMTP."""

import re
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any

from django.conf import settings
from django.template.loader import render_to_string

import structlog

logger = structlog.get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


class EmailService:
    """Sends multipart (plain text + HTML) emails over SMTP.

    SMTP settings come from Django settings unless given explicitly; the
    engine builds one instance at startup.
    """

    def __init__(
        self,
        smtp_host: str | None = None,
        smtp_port: int | None = None,
        smtp_user: str | None = None,
        smtp_password: str | None = None,
        use_tls: bool | None = None,
        from_email: str | None = None,
        timeout: float = 10,
    ) -> None:
        self.smtp_host = smtp_host or settings.EMAIL_HOST
        self.smtp_port = smtp_port or settings.EMAIL_PORT
        self.smtp_user = smtp_user if smtp_user is not None else settings.EMAIL_HOST_USER
        self.smtp_password = (
            smtp_password if smtp_password is not None else settings.EMAIL_HOST_PASSWORD
        )
        self.use_tls = use_tls if use_tls is not None else settings.EMAIL_USE_TLS
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL
        self.timeout = timeout

    def send_email(self, to_email: str, subject: str, html_content: str) -> None:
        """Send an email via SMTP.

        Args:
            to_email: Recipient email address
            subject: Email subject line
            html_content: HTML email content

        Raises:
            ValueError: If email address is invalid
            smtplib.SMTPException: If SMTP operation fails
            OSError: If the SMTP server cannot be reached
        """
        if not EMAIL_PATTERN.match(to_email):
            raise ValueError(f"Invalid email address: {to_email}")

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = to_email
        msg.attach(MIMEText(self._html_to_plain(html_content), "plain"))
        msg.attach(MIMEText(html_content, "html"))

        try:
            with smtplib.SMTP(
                self.smtp_host, self.smtp_port, timeout=self.timeout
            ) as server:
                if self.use_tls:
                    server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg)
        except smtplib.SMTPException as e:
            logger.error("email_send_failed", subject=subject, error=str(e))
            raise

        logger.info("email_sent", subject=subject)

    def send_template_email(
        self,
        to_email: str,
        subject: str,
        template_name: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Render a Django template and send it as the email body.

        Raises:
            ValueError: If email address is invalid
            smtplib.SMTPException: If SMTP operation fails
            django.template.TemplateDoesNotExist: If template not found
        """
        html_content = render_to_string(template_name, context or {})
        self.send_email(to_email=to_email, subject=subject, html_content=html_content)

    def _html_to_plain(self, html: str) -> str:
        """Convert HTML to plain text."""
        text = re.sub(r"<[^>]+>", "", html)
        for entity, char in (
            ("&nbsp;", " "),
            ("&lt;", "<"),
            ("&gt;", ">"),
            ("&quot;", '"'),
            ("&#x27;", "'"),
            ("&amp;", "&"),
        ):
            text = text.replace(entity, char)
        text = re.sub(r"\n\s*\n", "\n\n", text)
        return text.strip()
