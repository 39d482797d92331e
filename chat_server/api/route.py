# chat_server/api/route.py

from fastapi import APIRouter, Depends

from chat_server.agents.chat_orchestrator.orchestrator import ChatOrchestrator, get_default_orchestrator
from chat_server.schemas.chat_schema import ChatRequest, ChatResult
from chat_server.utils.security import sanitize_input

router = APIRouter(tags=["chat"])


def get_orchestrator() -> ChatOrchestrator:
    """Dependency hook so tests can swap in an orchestrator with fake collaborators."""
    return get_default_orchestrator()


@router.post("/chat", response_model=ChatResult, response_model_by_alias=True)
async def chat(
        request: ChatRequest,
        orchestrator: ChatOrchestrator = Depends(get_orchestrator),
):
    """
    Answers a tourism question and enriches the answer with places, an image
    and map links. Enrichment failures never turn into HTTP errors; only
    invalid input is rejected.
    """
    prompt = sanitize_input(request.prompt)
    return await orchestrator.run_chat(prompt, request.location)
