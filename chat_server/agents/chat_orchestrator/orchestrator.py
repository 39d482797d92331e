# chat_orchestrator/orchestrator.py
"""
Response-enrichment pipeline for the tourism chat assistant.

primary answer -> (normalize || extract) -> merge with fallback
               -> (image for first place || map link per place) -> ChatResult

Only the primary answer is fatal; every enrichment stage degrades to data
(raw text, empty list, None, warning suffix) so run_chat never raises.
"""
import asyncio
import logging
from typing import Callable, List, Optional, Union

from chat_server.agents.answer_agent.answer_client import AnswerBackendError, AnswerClient
from chat_server.agents.chat_orchestrator.messages import APOLOGY_TEXT, EXTRACTION_WARNING
from chat_server.agents.enrichment_agent.extractor import PlaceExtractor
from chat_server.agents.enrichment_agent.normalizer import TextNormalizer
from chat_server.agents.image_agent.image_search import ImageSearchClient
from chat_server.agents.map_agent.map_links import build_map_link
from chat_server.schemas.chat_schema import ChatResult, GeoLocation, MapLink, PlaceCandidate
from chat_server.schemas.enrichment_schemas import EnrichmentOutcome

logger = logging.getLogger(__name__)


def degraded_result() -> ChatResult:
    return ChatResult(responseText=APOLOGY_TEXT, imageUrl=None, mapLinks=[], groundingChunks=[])


def merge_enrichments(raw_text: str, normalized: EnrichmentOutcome, extracted: EnrichmentOutcome):
    """
    Combine the two independent enrichment outcomes.

    Returns (response_text, places). A failed normalization falls back to the
    raw text silently; a failed extraction yields no places and appends the
    extraction warning to whichever text was chosen.
    """
    response_text = normalized.value if normalized.ok else raw_text
    if extracted.ok:
        places = list(extracted.value or [])
    else:
        places = []
        response_text = response_text + EXTRACTION_WARNING
    return response_text, places


def _settled(result, stage: str) -> EnrichmentOutcome:
    # gather(return_exceptions=True) hands back raised exceptions as values
    if isinstance(result, Exception):
        logger.warning("%s stage raised instead of reporting failure: %r", stage, result)
        return EnrichmentOutcome.failure(result)
    if isinstance(result, BaseException):
        raise result
    return result


class ChatOrchestrator:
    def __init__(
        self,
        answer_client: Optional[AnswerClient] = None,
        normalizer: Optional[TextNormalizer] = None,
        extractor: Optional[PlaceExtractor] = None,
        image_client: Optional[ImageSearchClient] = None,
        map_link_builder: Callable[[PlaceCandidate], MapLink] = build_map_link,
    ):
        self.answer_client = answer_client or AnswerClient()
        self.normalizer = normalizer or TextNormalizer()
        self.extractor = extractor or PlaceExtractor()
        self.image_client = image_client or ImageSearchClient()
        self.map_link_builder = map_link_builder

    async def run_chat(
        self,
        prompt: str,
        location: Union[GeoLocation, dict, None] = None,
    ) -> ChatResult:
        try:
            return await self._run(prompt, location)
        except Exception:
            logger.exception("Unexpected error in run_chat")
            return degraded_result()

    async def _resolve_image(self, place: PlaceCandidate) -> Optional[str]:
        # the answer already exists here, an image error only costs the image
        try:
            return await self.image_client.resolve_image(place.name)
        except Exception as e:
            logger.warning("Image resolver raised for %r: %s", place.name, e)
            return None

    def _build_map_links(self, places: List[PlaceCandidate]) -> List[MapLink]:
        links: List[MapLink] = []
        for place in places:
            try:
                links.append(self.map_link_builder(place))
            except Exception as e:
                logger.warning("Map link builder raised for %r: %s", place.name, e)
        return links

    async def _run(self, prompt: str, location) -> ChatResult:
        if isinstance(location, dict):
            location = GeoLocation(**location)

        # 1. primary answer (the only fatal stage)
        try:
            reply = await self.answer_client.fetch_answer(prompt, location)
        except AnswerBackendError as e:
            logger.error("Answering backend failed: %s", e)
            return degraded_result()
        raw_text = reply.reply

        # 2. settle-all fan-out over the same raw text
        normalized, extracted = await asyncio.gather(
            self.normalizer.normalize(raw_text),
            self.extractor.extract_places(raw_text, reply.places),
            return_exceptions=True,
        )
        normalized = _settled(normalized, "normalization")
        extracted = _settled(extracted, "extraction")
        if not normalized.ok:
            logger.warning("Normalization failed, using raw answer: %s", normalized.cause)
        if not extracted.ok:
            logger.warning("Extraction failed, skipping image and map links: %s", extracted.cause)

        # 3. merge
        response_text, places = merge_enrichments(raw_text, normalized, extracted)

        # 4. dependent stage, guarded once on the merged list
        image_url: Optional[str] = None
        map_links: List[MapLink] = []
        if places:
            image_url = await self._resolve_image(places[0])
            map_links = self._build_map_links(places)

        logger.info(
            "run_chat done: normalized=%s extracted=%s places=%d image=%s",
            normalized.ok, extracted.ok, len(places), image_url is not None,
        )
        return ChatResult(
            responseText=response_text,
            imageUrl=image_url,
            mapLinks=map_links,
            groundingChunks=[],
        )


_default_orchestrator: Optional[ChatOrchestrator] = None


def get_default_orchestrator() -> ChatOrchestrator:
    global _default_orchestrator
    if _default_orchestrator is None:
        _default_orchestrator = ChatOrchestrator()
    return _default_orchestrator


async def run_chat(prompt: str, location: Union[GeoLocation, dict, None] = None) -> ChatResult:
    return await get_default_orchestrator().run_chat(prompt, location)
