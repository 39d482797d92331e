# llm.py
import logging
from typing import Optional

from langchain_openai import ChatOpenAI

from chat_server.utils.config import OPENAI_API_KEY, OPENAI_MODEL

logger = logging.getLogger(__name__)

_llm: Optional[ChatOpenAI] = None


def get_enrichment_llm(api_key: Optional[str] = OPENAI_API_KEY, model_name: str = OPENAI_MODEL) -> Optional[ChatOpenAI]:
    """
    Returns the shared chat model used by the enrichment stages, or None when
    no API key is configured. Callers treat None as a stage failure.
    """
    global _llm
    if not api_key:
        return None
    if _llm is None:
        _llm = ChatOpenAI(api_key=api_key, model=model_name, temperature=0.2, max_retries=0)
        logger.info("Enrichment LLM initialised (model=%s)", model_name)
    return _llm
