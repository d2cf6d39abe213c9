"""
Publishers package - Digest sinks (Discord webhook, email)

Usage:
    from linear_digest.publishers.discord import DiscordPublisher
    from linear_digest.publishers.email_digest import EmailDigestPublisher
"""

from .base import DeliveryError, DigestPublisher

__all__ = ["DeliveryError", "DigestPublisher"]
