#!/usr/bin/env python3
"""
Base Publisher for the Linear digest

Every sink (Discord webhook, email) renders the same DigestStats and delivers it
independently. A sink without configuration is skipped; a sink that fails raises
DeliveryError and stops the run.
"""

from abc import ABC, abstractmethod
from typing import Any

from linear_digest.core import get_logger
from linear_digest.domain.digest import DigestStats


class DeliveryError(Exception):
    """
    Raised when a sink rejects the digest or cannot be reached.

    Attributes:
        sink: Name of the failing sink ("discord", "email")
    """

    def __init__(self, sink: str, message: str):
        super().__init__(f"[{sink}] {message}")
        self.sink = sink


class DigestPublisher(ABC):
    """Base class for digest sinks

    Subclasses must implement:
    - is_configured: Whether the sink has a destination
    - render(): Build the sink-specific payload from the stats
    - deliver(): Send a rendered payload
    """

    name = "publisher"

    def __init__(self) -> None:
        self.logger = get_logger(f"linear_digest.publishers.{self.name}")

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        pass

    @abstractmethod
    def render(self, stats: DigestStats) -> Any:
        pass

    @abstractmethod
    def deliver(self, payload: Any) -> None:
        pass

    def publish(self, stats: DigestStats) -> bool:
        """Render and deliver the digest

        Args:
            stats: Digest summary for this run

        Returns:
            True if delivered, False if the sink is not configured

        Raises:
            DeliveryError: If delivery fails
        """
        if not self.is_configured:
            self.logger.info(f"{self.name} not configured, skipping")
            return False

        payload = self.render(stats)
        self.deliver(payload)
        self.logger.info(f"{self.name} digest delivered")
        return True
