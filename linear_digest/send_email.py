"""
Email Sending

Sends one multipart (text + HTML) message via SMTP using the validated
EmailConfig. STARTTLS is negotiated whenever the server offers it and the
session authenticates only when both SMTP_USER and SMTP_PASS are set.
"""

import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid

from linear_digest.core import EmailConfig, get_logger
from linear_digest.domain.constants import digest_settings

logger = get_logger(__name__)


def split_addresses(addresses: str) -> list[str]:
    """Split a comma-separated address list, dropping blanks."""
    return [address.strip() for address in addresses.split(",") if address.strip()]


def build_message(config: EmailConfig, subject: str, html_body: str, text_body: str | None = None) -> MIMEMultipart:
    """
    Build the MIME message.

    Args:
        config: SMTP configuration (sender/recipient resolved with fallbacks)
        subject: Email subject
        html_body: HTML document
        text_body: Optional plain-text alternative

    Returns:
        multipart/alternative message
    """
    msg = MIMEMultipart("alternative")
    msg["From"] = config.sender
    msg["To"] = ", ".join(split_addresses(config.recipient or ""))
    msg["Subject"] = subject
    msg["Date"] = formatdate(localtime=True)
    msg["Message-ID"] = make_msgid()

    # Clients display the last alternative they support, so HTML goes last
    if text_body:
        msg.attach(MIMEText(text_body, "plain", "utf-8"))
    msg.attach(MIMEText(html_body, "html", "utf-8"))
    return msg


def send_email(config: EmailConfig, subject: str, html_body: str, text_body: str | None = None) -> None:
    """
    Send an email via SMTP.

    Args:
        config: SMTP configuration
        subject: Email subject
        html_body: HTML document
        text_body: Optional plain-text alternative

    Raises:
        smtplib.SMTPException: If the server rejects the session or message
        OSError: If the server cannot be reached
    """
    msg = build_message(config, subject, html_body, text_body)
    recipients = split_addresses(config.recipient or "")

    logger.info(f"Connecting to SMTP server: {config.smtp_host}:{config.smtp_port}")

    with smtplib.SMTP(config.smtp_host, config.smtp_port, timeout=digest_settings.SMTP_TIMEOUT_SECONDS) as server:
        server.ehlo()
        if server.has_extn("starttls"):
            server.starttls()
            server.ehlo()

        if config.has_credentials:
            logger.info("Authenticating...")
            server.login(config.smtp_user, config.smtp_password)

        logger.info(f"Sending email to {len(recipients)} recipient(s)...")
        server.send_message(msg, from_addr=config.sender, to_addrs=recipients)

    logger.info("Email sent successfully")
