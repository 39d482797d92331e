# answer_agent/answer_client.py
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from chat_server.schemas.chat_schema import BackendReply, GeoLocation
from chat_server.utils.config import BACKEND_URL, BACKEND_TIMEOUT

logger = logging.getLogger(__name__)


class AnswerBackendError(Exception):
    """Raised when the answering backend cannot produce a usable reply."""


class AnswerClient:
    """
    Thin async client for the answering backend.

    POSTs `{message, location?}` and expects `{reply, places?}` back. Every
    failure is raised as AnswerBackendError; there are no retries.
    """

    def __init__(
        self,
        endpoint: str = BACKEND_URL,
        timeout: float = BACKEND_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport

    @staticmethod
    def build_payload(prompt: str, location: Optional[GeoLocation] = None) -> dict:
        payload = {"message": prompt}
        if location is not None:
            payload["location"] = location.model_dump()
        return payload

    async def fetch_answer(self, prompt: str, location: Optional[GeoLocation] = None) -> BackendReply:
        payload = self.build_payload(prompt, location)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.post(self.endpoint, json=payload)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPStatusError as e:
            raise AnswerBackendError(f"backend returned status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise AnswerBackendError(f"backend request failed: {e}") from e
        except ValueError as e:
            raise AnswerBackendError("backend returned a non-JSON body") from e

        if not isinstance(data, dict) or not isinstance(data.get("reply"), str):
            raise AnswerBackendError("backend payload has no reply text")

        # malformed inline places only cost the extraction stage, not the answer
        try:
            reply = BackendReply.model_validate({"reply": data["reply"], "places": data.get("places")})
        except ValidationError as e:
            logger.warning("Ignoring malformed inline places from backend: %d error(s)", e.error_count())
            reply = BackendReply(reply=data["reply"])

        logger.debug(
            "AnswerClient.fetch_answer: %d chars, inline places=%s",
            len(reply.reply),
            None if reply.places is None else len(reply.places),
        )
        return reply
