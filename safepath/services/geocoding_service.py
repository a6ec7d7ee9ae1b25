"""Place search proxy for a Nominatim-compatible geocoder."""

import asyncio
import logging
from typing import Any, Dict, List

import httpx

from safepath.config import get_settings
from safepath.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)
settings = get_settings()


class GeocodingService:
    """Forwards free-text place searches to the configured geocoder."""

    def __init__(self):
        self.url = settings.GEOCODER_URL
        self.user_agent = settings.GEOCODER_USER_AGENT
        self.limit = settings.GEOCODER_RESULT_LIMIT
        self.timeout = 10.0
        self.max_retries = 2

    async def search(self, query: str) -> List[Dict[str, Any]]:
        """Look up places matching a query.

        Args:
            query: Free-text place name or address

        Returns:
            Geocoder results as returned upstream

        Raises:
            ExternalServiceError: Geocoder unreachable or returned an error
        """
        params = {"format": "json", "limit": self.limit, "q": query}
        headers = {"User-Agent": self.user_agent}

        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.url, params=params, headers=headers)
            except httpx.TimeoutException:
                logger.error(f"Geocoder timeout (attempt {attempt + 1})")
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(2**attempt)
                    continue
                raise ExternalServiceError("Geocoding service timeout")
            except httpx.HTTPError as e:
                logger.error(f"Error calling geocoder: {str(e)}")
                raise ExternalServiceError(f"Geocoding error: {str(e)}")

            if response.status_code == 200:
                results = response.json()
                logger.info(f"Geocoder returned {len(results)} results")
                return results

            if response.status_code == 429 or response.status_code >= 500:
                logger.warning(f"Geocoder error {response.status_code} (attempt {attempt + 1})")
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(2**attempt)
                    continue

            logger.error(f"Geocoder error {response.status_code}: {response.text}")
            raise ExternalServiceError("Geocoding service unavailable")

        raise ExternalServiceError("Failed to reach geocoding service after retries")
