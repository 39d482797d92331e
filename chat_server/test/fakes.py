"""Fake collaborators for orchestrator tests; they record how often they are called."""
from typing import List, Optional

from chat_server.agents.answer_agent.answer_client import AnswerBackendError
from chat_server.agents.map_agent.map_links import build_map_link
from chat_server.schemas.chat_schema import BackendReply, PlaceCandidate
from chat_server.schemas.enrichment_schemas import EnrichmentOutcome


class FakeAnswerClient:
    def __init__(self, reply: Optional[str] = None, places=None, error: Optional[Exception] = None):
        self.reply = reply
        self.places = places
        self.error = error
        self.calls = []

    async def fetch_answer(self, prompt, location=None):
        self.calls.append((prompt, location))
        if self.error is not None:
            raise self.error
        return BackendReply(reply=self.reply, places=self.places)


class FakeNormalizer:
    def __init__(self, value: Optional[str] = None, fail: bool = False, raises: bool = False):
        self.value = value
        self.fail = fail
        self.raises = raises
        self.inputs: List[str] = []

    async def normalize(self, text):
        self.inputs.append(text)
        if self.raises:
            raise RuntimeError("normalizer blew up")
        if self.fail:
            return EnrichmentOutcome.failure("timeout")
        return EnrichmentOutcome.success(self.value)


class FakeExtractor:
    def __init__(self, places: Optional[List[PlaceCandidate]] = None, fail: bool = False, raises: bool = False):
        self.places = places or []
        self.fail = fail
        self.raises = raises
        self.inputs: List[str] = []

    async def extract_places(self, text, inline_places=None):
        self.inputs.append(text)
        if self.raises:
            raise RuntimeError("extractor blew up")
        if self.fail:
            return EnrichmentOutcome.failure("missing configuration")
        return EnrichmentOutcome.success(list(self.places))


class FakeImageClient:
    def __init__(self, url: Optional[str] = "https://img.example/thumb.jpg"):
        self.url = url
        self.lookups: List[str] = []

    async def resolve_image(self, place_name):
        self.lookups.append(place_name)
        return self.url


class CountingMapLinkBuilder:
    def __init__(self):
        self.calls: List[PlaceCandidate] = []

    def __call__(self, place):
        self.calls.append(place)
        return build_map_link(place)


def backend_down() -> FakeAnswerClient:
    return FakeAnswerClient(error=AnswerBackendError("backend returned status 503"))
