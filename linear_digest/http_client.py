"""
Secure HTTP Client Wrapper

Provides HTTP methods with enforced SSL verification and timeouts for the
Linear GraphQL API and the Discord webhook.

Usage:
    from linear_digest.http_client import post

    # Instead of: requests.post(url, json=data)
    response = post(url, json=data)

Security Features:
    - SSL verification always enabled (verify=True)
    - Default 30-second timeout on all requests
"""

import requests

from .domain.constants import linear_api


class SecureHTTPClient:
    """
    HTTP client with enforced SSL verification and timeouts.
    """

    DEFAULT_TIMEOUT = linear_api.TIMEOUT_SECONDS

    @staticmethod
    def post(url: str, **kwargs) -> requests.Response:
        """
        POST request with SSL verification enforced.

        Args:
            url: URL to post to
            **kwargs: Additional arguments to pass to requests.post()

        Returns:
            requests.Response: HTTP response
        """
        kwargs["verify"] = True
        kwargs.setdefault("timeout", SecureHTTPClient.DEFAULT_TIMEOUT)
        return requests.post(url, **kwargs)


# Convenience function (can be imported directly)
post = SecureHTTPClient.post
