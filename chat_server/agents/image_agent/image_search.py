# image_agent/image_search.py
import logging
from typing import Optional

import httpx

from chat_server.utils.config import IMAGE_SEARCH_URL, IMAGE_THUMB_SIZE, IMAGE_TIMEOUT

logger = logging.getLogger(__name__)


class ImageSearchClient:
    """
    Looks up a representative thumbnail for a place name through the
    Wikipedia `pageimages` API. Best effort: every failure becomes None.
    """

    def __init__(
        self,
        base_url: str = IMAGE_SEARCH_URL,
        thumb_size: int = IMAGE_THUMB_SIZE,
        timeout: float = IMAGE_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.thumb_size = thumb_size
        self.timeout = timeout
        self.transport = transport

    def _params(self, title: str) -> dict:
        return {
            "action": "query",
            "prop": "pageimages",
            "format": "json",
            "pithumbsize": str(self.thumb_size),
            "origin": "*",
            "titles": title,
        }

    async def resolve_image(self, place_name: str) -> Optional[str]:
        if not place_name or not place_name.strip():
            return None
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(self.base_url, params=self._params(place_name.strip()))
                r.raise_for_status()
                data = r.json()
            pages = (data.get("query") or {}).get("pages") or {}
            if not pages:
                return None
            page = pages[next(iter(pages))]
            source = ((page or {}).get("thumbnail") or {}).get("source")
            return source if isinstance(source, str) and source else None
        except Exception as e:
            logger.warning("Image lookup failed for %r: %s", place_name, e)
            return None
