"""
Secure Configuration Management

Provides centralized, validated configuration for the digest.
Replaces scattered os.getenv() calls with one explicit DigestConfig that is
threaded through the Linear client and each publisher.

Usage:
    from linear_digest.secure_config import get_config

    config = get_config().get_digest_config()
    print(config.linear.api_url)
    if config.discord is None:
        print("Discord delivery disabled")

Security Features:
    - Strict validation of all configuration values
    - Fail-fast on a missing Linear API key
    - Placeholder detection (e.g., "your_api_key")
    - HTTPS enforcement for API and webhook URLs

Optional sinks (Discord, email) are None when their key variable is unset;
that is a skip condition, not an error.

Raises:
    ConfigurationError: If configuration is missing or invalid
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .domain.constants import digest_settings, linear_api


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


@dataclass
class LinearConfig:
    """
    Validated Linear API configuration.
    """

    api_key: str
    api_url: str = linear_api.GRAPHQL_URL
    max_pages: int = linear_api.MAX_PAGES

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """
        Validate Linear configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.api_key:
            raise ConfigurationError("LINEAR_API_KEY is required")

        placeholders = ["your_api_key", "your_key", "placeholder", "replace_me"]
        if any(placeholder in self.api_key.lower() for placeholder in placeholders):
            raise ConfigurationError("LINEAR_API_KEY contains a placeholder value - please set a real API key")

        if not self.api_url.startswith("https://"):
            raise ConfigurationError(f"LINEAR_API_URL must use HTTPS: {self.api_url}")

        if self.max_pages < 1:
            raise ConfigurationError(f"LINEAR_MAX_PAGES must be at least 1, got {self.max_pages}")


@dataclass
class DiscordConfig:
    """
    Validated Discord webhook configuration.
    """

    webhook_url: str

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.webhook_url.startswith("https://"):
            raise ConfigurationError("DISCORD_WEBHOOK_URL must use HTTPS")


@dataclass
class EmailConfig:
    """
    Validated SMTP configuration.

    Sender and recipient fall back to the SMTP user when not set.
    """

    smtp_host: str
    smtp_port: int = digest_settings.SMTP_DEFAULT_PORT
    smtp_user: str | None = None
    smtp_password: str | None = None
    mail_from: str | None = None
    mail_to: str | None = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """
        Validate email configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.smtp_host:
            raise ConfigurationError("SMTP_HOST is required")

        if not 0 < self.smtp_port < 65536:
            raise ConfigurationError(f"SMTP_PORT out of range: {self.smtp_port}")

        if not self.sender:
            raise ConfigurationError("MAIL_FROM or SMTP_USER is required to send email")

        if not self.recipient:
            raise ConfigurationError("MAIL_TO or SMTP_USER is required to send email")

    @property
    def sender(self) -> str | None:
        return self.mail_from or self.smtp_user

    @property
    def recipient(self) -> str | None:
        return self.mail_to or self.smtp_user

    @property
    def has_credentials(self) -> bool:
        return bool(self.smtp_user and self.smtp_password)


@dataclass
class DigestConfig:
    """
    Everything one digest run needs.

    Attributes:
        linear: Linear API access (always required)
        discord: Discord webhook, or None to skip chat delivery
        email: SMTP settings, or None to skip email delivery
    """

    linear: LinearConfig
    discord: DiscordConfig | None = None
    email: EmailConfig | None = None


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


class SecureConfig:
    """
    Centralized secure configuration manager.

    Loads and validates all application configuration from environment variables.
    Provides fail-fast behavior to catch configuration issues early.
    """

    def __init__(self):
        """Initialize configuration (loads .env file)."""
        load_dotenv()

    def get_linear_config(self, max_pages: int | None = None) -> LinearConfig:
        """
        Get validated Linear configuration.

        Args:
            max_pages: Optional page ceiling (overrides LINEAR_MAX_PAGES env var)

        Returns:
            LinearConfig: Validated configuration

        Raises:
            ConfigurationError: If configuration is missing or invalid
        """
        return LinearConfig(
            api_key=os.getenv("LINEAR_API_KEY") or "",
            api_url=os.getenv("LINEAR_API_URL") or linear_api.GRAPHQL_URL,
            max_pages=max_pages if max_pages is not None else _int_env("LINEAR_MAX_PAGES", linear_api.MAX_PAGES),
        )

    def get_discord_config(self) -> DiscordConfig | None:
        """
        Get Discord webhook configuration.

        Returns:
            DiscordConfig, or None when DISCORD_WEBHOOK_URL is unset
        """
        webhook_url = os.getenv("DISCORD_WEBHOOK_URL")
        if not webhook_url:
            return None
        return DiscordConfig(webhook_url=webhook_url)

    def get_email_config(self) -> EmailConfig | None:
        """
        Get SMTP configuration.

        Returns:
            EmailConfig, or None when SMTP_HOST is unset

        Raises:
            ConfigurationError: If SMTP_HOST is set but the rest is invalid
        """
        smtp_host = os.getenv("SMTP_HOST")
        if not smtp_host:
            return None

        return EmailConfig(
            smtp_host=smtp_host,
            smtp_port=_int_env("SMTP_PORT", digest_settings.SMTP_DEFAULT_PORT),
            smtp_user=os.getenv("SMTP_USER") or None,
            smtp_password=os.getenv("SMTP_PASS") or None,
            mail_from=os.getenv("MAIL_FROM") or None,
            mail_to=os.getenv("MAIL_TO") or None,
        )

    def get_digest_config(self, max_pages: int | None = None) -> DigestConfig:
        """
        Get the full configuration for a digest run.

        Args:
            max_pages: Optional page ceiling override

        Returns:
            DigestConfig: Validated configuration

        Raises:
            ConfigurationError: If configuration is missing or invalid
        """
        return DigestConfig(
            linear=self.get_linear_config(max_pages=max_pages),
            discord=self.get_discord_config(),
            email=self.get_email_config(),
        )


# Convenience function for getting configuration
_config_instance = None


def get_config() -> SecureConfig:
    """
    Get the global configuration instance (singleton pattern).

    Returns:
        SecureConfig: The configuration manager
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = SecureConfig()
    return _config_instance
