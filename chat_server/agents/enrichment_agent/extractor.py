# enrichment_agent/extractor.py
"""
Place extraction for assistant answers.

Three interchangeable strategies feed the same EnrichmentOutcome contract:
- "llm": structured extraction through the chat model (uncapped).
- "heuristic": capitalised-phrase scan, capped at HEURISTIC_MAX_PLACES.
- "backend": pass-through of places the answering backend already returned.
"""
import json
import logging
import re
from typing import Any, Callable, List, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from pydantic import ValidationError

from chat_server.agents.enrichment_agent.llm import get_enrichment_llm
from chat_server.agents.enrichment_agent.prompt import EXTRACT_PROMPT
from chat_server.schemas.chat_schema import PlaceCandidate
from chat_server.schemas.enrichment_schemas import EnrichmentOutcome
from chat_server.utils.config import EXTRACTION_MODE, MAX_PLACES

logger = logging.getLogger(__name__)

EXTRACTION_MODES = ("llm", "heuristic", "backend")
HEURISTIC_MAX_PLACES = 3

_CAPITALIZED = r"[A-ZÁÉÍÓÚÑÜ][a-záéíóúñü]+"
_CONNECTOR = r"(?:de|del|la|las|los|el|y)"
_PLACE_PHRASE = re.compile(rf"\b{_CAPITALIZED}(?:\s+(?:{_CONNECTOR}\s+)*{_CAPITALIZED})*")

# generic words that start sentences or name topics rather than places
COMMON_WORDS = {
    "colombia", "turismo", "historia", "región", "cultura", "visita", "lugar", "sitio",
    "el", "la", "los", "las", "un", "una", "en", "es", "si", "te", "puedes", "también",
    "además", "hay", "para", "por", "desde", "con", "otro", "otra", "este", "esta",
    "allí", "aquí", "no", "sí", "recomiendo", "claro", "hola",
    "conoce", "descubre", "explora", "recorre", "disfruta", "prueba",
}


class ExtractionError(ValueError):
    """Raised internally when the model output cannot be read as places."""


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markers around a JSON payload."""
    cleaned = (text or "").strip()
    cleaned = re.sub(r"```(?:json|JSON)?", "", cleaned)
    return cleaned.strip()


def _first_json_container(text: str) -> Any:
    """Decode the first JSON array/object in `text`, ignoring prose before or after it."""
    decoder = json.JSONDecoder()
    for match in re.finditer(r"[\[{]", text):
        try:
            data, _ = decoder.raw_decode(text, match.start())
        except json.JSONDecodeError:
            continue
        return data
    raise ExtractionError("no JSON array or object in extraction payload")


def parse_places_payload(text: str) -> List[PlaceCandidate]:
    """
    Parse model output into PlaceCandidates.

    Accepts a bare JSON array, or an object holding a "places" array, with
    optional fences or prose around it. Anything else raises ExtractionError.
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ExtractionError("empty extraction payload")

    data: Any = _first_json_container(cleaned)

    if isinstance(data, dict):
        data = data.get("places")
    if not isinstance(data, list):
        raise ExtractionError("extraction payload is not a list of places")

    places: List[PlaceCandidate] = []
    for item in data:
        if not isinstance(item, dict):
            raise ExtractionError(f"place entry is not an object: {item!r}")
        fields = {k: _clean_field(item.get(k)) for k in ("name", "city", "department")}
        if not fields["name"]:
            raise ExtractionError("place entry without a name")
        try:
            places.append(PlaceCandidate(**fields))
        except ValidationError as e:
            raise ExtractionError(str(e)) from e
    return places


def _clean_field(val: Any) -> Optional[str]:
    if val is None:
        return None
    s = str(val).strip()
    return s or None


def heuristic_places(text: str, limit: int = HEURISTIC_MAX_PLACES) -> List[PlaceCandidate]:
    """Pick capitalised phrases that look like place names, first `limit` of them."""
    found: List[PlaceCandidate] = []
    seen = set()
    for match in _PLACE_PHRASE.finditer(text or ""):
        words = match.group(0).split()
        # drop sentence starters such as "Visita" in "Visita Monserrate"
        while words and words[0].lower() in COMMON_WORDS:
            words.pop(0)
        while words and re.fullmatch(_CONNECTOR, words[0]):
            words.pop(0)
        name = " ".join(words)
        if not name or name.lower() in COMMON_WORDS or name.lower() in seen:
            continue
        seen.add(name.lower())
        found.append(PlaceCandidate(name=name))
        if len(found) >= limit:
            break
    return found


class PlaceExtractor:
    def __init__(
        self,
        mode: str = EXTRACTION_MODE,
        llm_factory: Callable[[], Optional[BaseChatModel]] = get_enrichment_llm,
        max_places: Optional[int] = MAX_PLACES,
    ):
        if mode not in EXTRACTION_MODES:
            raise ValueError(f"Unknown extraction mode: {mode!r}")
        self.mode = mode
        self.llm_factory = llm_factory
        self.max_places = max_places

    async def extract_places(
        self,
        text: str,
        inline_places: Optional[List[PlaceCandidate]] = None,
    ) -> EnrichmentOutcome:
        """
        Extract places from `text`. `inline_places` is what the answering
        backend returned alongside the text and is only used in "backend" mode.
        """
        if not text or not text.strip():
            return EnrichmentOutcome.success([])

        try:
            if self.mode == "heuristic":
                places = heuristic_places(text)
            elif self.mode == "backend":
                if inline_places is None:
                    return EnrichmentOutcome.failure("backend returned no places")
                places = list(inline_places)
            else:
                llm = self.llm_factory()
                if llm is None:
                    return EnrichmentOutcome.failure("extraction LLM is not configured")
                chain = EXTRACT_PROMPT | llm | StrOutputParser()
                raw = await chain.ainvoke({"text": text})
                places = parse_places_payload(raw)
        except Exception as e:
            logger.warning("Place extraction failed (mode=%s): %s", self.mode, e)
            return EnrichmentOutcome.failure(e)

        if self.max_places is not None:
            places = places[: self.max_places]
        logger.debug("PlaceExtractor.extract_places: mode=%s got %d places", self.mode, len(places))
        return EnrichmentOutcome.success(places)
