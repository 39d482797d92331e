# enrichment_agent/normalizer.py
import logging
import re
from typing import Callable, Optional

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser

from chat_server.agents.enrichment_agent.llm import get_enrichment_llm
from chat_server.agents.enrichment_agent.prompt import REFORMAT_PROMPT
from chat_server.schemas.enrichment_schemas import EnrichmentOutcome
from chat_server.utils.config import NORMALIZER_MODE

logger = logging.getLogger(__name__)

_INLINE_SPACE = re.compile(r"[ \t\f\v]+")
_BLANK_LINES = re.compile(r"\n\s*\n+")


def tidy_whitespace(text: str) -> str:
    """Collapse runs of spaces and blank lines; keeps single line breaks."""
    text = _INLINE_SPACE.sub(" ", text)
    text = _BLANK_LINES.sub("\n", text)
    return "\n".join(line.strip() for line in text.split("\n")).strip()


class TextNormalizer:
    """
    Rewrites a raw answer into a cleaner, user-facing rendering.

    Modes:
    - "llm": one call to the chat model with the reformat instruction.
    - "heuristic": whitespace clean-up only, cannot fail.
    """

    def __init__(
        self,
        mode: str = NORMALIZER_MODE,
        llm_factory: Callable[[], Optional[BaseChatModel]] = get_enrichment_llm,
    ):
        if mode not in ("llm", "heuristic"):
            raise ValueError(f"Unknown normalizer mode: {mode!r}")
        self.mode = mode
        self.llm_factory = llm_factory

    async def normalize(self, text: str) -> EnrichmentOutcome:
        if not text or not text.strip():
            return EnrichmentOutcome.success(text)

        if self.mode == "heuristic":
            return EnrichmentOutcome.success(tidy_whitespace(text))

        try:
            llm = self.llm_factory()
            if llm is None:
                return EnrichmentOutcome.failure("normalizer LLM is not configured")

            chain = REFORMAT_PROMPT | llm | StrOutputParser()
            formatted = await chain.ainvoke({"text": text})
        except Exception as e:
            logger.warning("Text normalization failed: %s", e)
            return EnrichmentOutcome.failure(e)

        formatted = (formatted or "").strip()
        if not formatted:
            return EnrichmentOutcome.failure("normalizer returned empty text")
        return EnrichmentOutcome.success(formatted)
