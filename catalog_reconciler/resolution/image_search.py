"""
Pixabay Image Search Client

Looks up a stock photo for a product when it has no usable image.
Handles authentication via SearchSettings and request errors; pacing
between products is the caller's job (see SearchSettings.delay_seconds).
"""

import logging
from typing import Dict, List, Optional

import requests

from ..common.constants import PIXABAY_API_URL
from ..common.settings import SearchSettings

logger = logging.getLogger(__name__)


class PixabaySearchClient:
    """
    Client for the Pixabay image search API.

    Usage:
        settings = SearchSettings.from_env()
        with PixabaySearchClient(settings) as client:
            url = client.search("Argan Oil Shampoo Moroccanoil shampoo")
    """

    def __init__(self, settings: SearchSettings, api_url: str = PIXABAY_API_URL):
        self.settings = settings
        self.api_url = api_url
        self.session = requests.Session()
        self.requests_made = 0

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def _params(self, query: str) -> Dict[str, str]:
        return {
            "key": self.settings.api_key,
            "q": query,
            "image_type": self.settings.image_type,
            "per_page": str(self.settings.per_page),
            "safesearch": "true" if self.settings.safesearch else "false",
        }

    def search_hits(self, query: str) -> Optional[List[Dict]]:
        """
        Run a search and return the raw hit list.

        Returns:
            List of hit dicts (possibly empty), or None on any request failure
        """
        self.requests_made += 1
        try:
            response = self.session.get(self.api_url, params=self._params(query))
        except requests.exceptions.RequestException as e:
            logger.error("Pixabay request failed for %r: %s", query, e)
            return None

        if response.status_code >= 400:
            logger.error("Pixabay API Error %d for %r: %s",
                         response.status_code, query, response.text[:200])
            return None

        try:
            body = response.json()
        except ValueError as e:
            logger.error("Pixabay returned invalid JSON for %r: %s", query, e)
            return None

        if not isinstance(body, dict):
            logger.error("Pixabay returned unexpected body for %r: %.200r", query, body)
            return None

        hits = body.get("hits") or []
        if not isinstance(hits, list):
            logger.error("Pixabay returned non-list hits for %r: %.200r", query, hits)
            return None
        return hits

    def search(self, query: str) -> Optional[str]:
        """
        Return the large-image URL of the first hit, or None.

        Failures are logged, never raised.
        """
        if not query:
            return None
        hits = self.search_hits(query)
        if not hits:
            return None

        first = hits[0]
        if not isinstance(first, dict):
            logger.error("Pixabay returned malformed hit for %r: %.200r", query, first)
            return None
        image_url = first.get("largeImageURL")
        return image_url if isinstance(image_url, str) and image_url else None
