"""Client for the external gifts API."""

from typing import Any

import httpx
from pydantic import ValidationError

from clinic.models.gift import Gift, GiftValue
from clinic.utils.logging import get_logger

logger = get_logger(__name__)

DESCRIPTION_KEY = "description"


class GiftClient:
    """Fetches gifts from the upstream API and reshapes them into Gift models."""

    def __init__(self, url: str, http_client: httpx.AsyncClient):
        """Initialize gift client.

        Args:
            url: Endpoint returning a JSON array of gift objects
            http_client: Shared async HTTP client
        """
        self.url = url
        self.http_client = http_client

    async def list_gifts(self) -> list[Gift]:
        """Fetch all gifts from the upstream API.

        Elements that cannot be parsed are logged and skipped.

        Raises:
            httpx.HTTPError: On transport failure or a non-success status
            ValueError: If the body is not a JSON array
        """
        logger.info(f"Fetching gifts from {self.url}")
        try:
            response = await self.http_client.get(self.url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching gifts from external API: {e}", exc_info=True)
            raise

        if not isinstance(payload, list):
            logger.error(f"Unexpected gifts payload type: {type(payload).__name__}")
            raise ValueError("Gifts API did not return a JSON array")

        gifts = []
        for element in payload:
            try:
                gifts.append(parse_gift(element))
            except (TypeError, ValueError, ValidationError) as e:
                logger.warning(f"Error parsing gift element {element!r}: {e}")

        logger.info(f"Successfully fetched {len(gifts)} gifts")
        return gifts


def parse_gift(element: Any) -> Gift:
    """Reshape one upstream gift object.

    ``id`` and ``name`` must be strings. Scalar entries of the optional ``data``
    object are copied into ``Gift.data``; a ``description`` entry (any case)
    also fills ``Gift.description``.

    Raises:
        TypeError: If the element or its required fields have the wrong shape
    """
    if not isinstance(element, dict):
        raise TypeError("gift element is not an object")

    gift_id = element.get("id")
    name = element.get("name")
    if not isinstance(gift_id, str) or not isinstance(name, str):
        raise TypeError("gift element requires string 'id' and 'name'")

    description = None
    data: dict[str, GiftValue] = {}

    raw_data = element.get("data")
    if raw_data is not None and not isinstance(raw_data, dict):
        raise TypeError("gift element 'data' is not an object")

    if raw_data:
        for key, value in raw_data.items():
            if key.lower() == DESCRIPTION_KEY:
                if isinstance(value, str):
                    description = value
                continue
            if isinstance(value, str | bool | int | float):
                data[key] = value

    return Gift(id=gift_id, name=name, description=description, data=data)
