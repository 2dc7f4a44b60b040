"""
URL Liveness Checker

Probes image URLs with HEAD requests. No retries: a transient failure is
reported exactly like a permanent one.
"""

import logging
from typing import Optional

import requests

from ..models import UrlCheckResult

logger = logging.getLogger(__name__)


class UrlLivenessChecker:
    """
    HEAD-probe image URLs without downloading their bodies.

    Usage:
        with UrlLivenessChecker() as checker:
            result = checker.check("https://cdn.example.com/p007.jpg")
            if not result.ok:
                print(result.status or result.error)
    """

    USER_AGENT = "catalog-reconciler/1.0 (image audit)"

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Per-request timeout in seconds (None = client default)
        """
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": self.USER_AGENT})

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def check(self, url: str) -> UrlCheckResult:
        """
        Probe a URL. Never raises.

        Returns:
            UrlCheckResult with ok=True for a 2xx response, the status for
            other responses, or the error message for network failures
        """
        try:
            response = self.session.head(url, allow_redirects=True, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.debug("HEAD %s failed: %s", url, e)
            return UrlCheckResult(ok=False, error=str(e))

        ok = 200 <= response.status_code < 300
        if not ok:
            logger.debug("HEAD %s returned %d", url, response.status_code)
        return UrlCheckResult(ok=ok, status=response.status_code)
