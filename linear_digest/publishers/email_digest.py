"""
Email Digest Publisher

Renders the digest as an HTML document (plus a plain-text alternative) from the
Jinja2 templates and sends it over SMTP.

Usage:
    from linear_digest.publishers.email_digest import EmailDigestPublisher

    EmailDigestPublisher(config.email).publish(stats)
"""

import smtplib
from dataclasses import dataclass

from linear_digest.core import EmailConfig
from linear_digest.domain.constants import digest_settings
from linear_digest.domain.digest import DigestStats
from linear_digest.send_email import send_email
from linear_digest.template_engine import render_template
from linear_digest.utils.error_handling import log_and_raise

from .base import DeliveryError, DigestPublisher


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    html: str
    text: str


def _template_context(stats: DigestStats, overdue_limit: int) -> dict:
    return {
        "title": digest_settings.TITLE,
        "subject": digest_settings.EMAIL_SUBJECT,
        "stats": stats,
        "assignees": stats.assignees_sorted(),
        "projects": stats.projects_by_count(),
        "overdue": stats.top_overdue(overdue_limit),
    }


def render_email_html(stats: DigestStats, overdue_limit: int = digest_settings.EMAIL_OVERDUE_LIMIT) -> str:
    """Render the HTML digest document."""
    return render_template("digest_email.html", **_template_context(stats, overdue_limit))


def render_email_text(stats: DigestStats, overdue_limit: int = digest_settings.EMAIL_OVERDUE_LIMIT) -> str:
    """Render the plain-text alternative."""
    return render_template("digest_email.txt", **_template_context(stats, overdue_limit))


class EmailDigestPublisher(DigestPublisher):
    """Sends the digest email over SMTP"""

    name = "email"

    def __init__(self, config: EmailConfig | None):
        super().__init__()
        self.config = config

    @property
    def is_configured(self) -> bool:
        return self.config is not None

    def render(self, stats: DigestStats) -> RenderedEmail:
        return RenderedEmail(
            subject=digest_settings.EMAIL_SUBJECT,
            html=render_email_html(stats),
            text=render_email_text(stats),
        )

    def deliver(self, payload: RenderedEmail) -> None:
        """
        Send the rendered email.

        Raises:
            DeliveryError: If the SMTP server is unreachable or rejects the message
        """
        if self.config is None:
            raise DeliveryError(self.name, "no SMTP host configured")

        try:
            send_email(self.config, payload.subject, payload.html, payload.text)
        except (smtplib.SMTPException, OSError) as e:
            log_and_raise(
                self.logger,
                DeliveryError(self.name, f"SMTP delivery failed: {e}"),
                {"sink": self.name, "smtp_host": self.config.smtp_host, "smtp_port": self.config.smtp_port},
                "Email delivery",
                cause=e,
            )
