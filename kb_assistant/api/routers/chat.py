"""Chat API endpoint.

Routes:
- POST /api/chat - Answer a question from the knowledge base

Dependencies: kb_assistant.core.retrieval_pipeline
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from kb_assistant.api.deps import get_retrieval_pipeline
from kb_assistant.core.exceptions import ClientInputError
from kb_assistant.core.retrieval_pipeline import RetrievalPipeline
from kb_assistant.models.chat import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "sessionId and message are required"

router = APIRouter(prefix="/api", tags=["chat"])


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


@router.post("/chat", response_model=ChatResponse, response_model_by_alias=True)
async def chat(
    request: ChatRequest,
    pipeline: RetrievalPipeline = Depends(get_retrieval_pipeline),
) -> ChatResponse:
    """Answer a chat message from the knowledge base.

    Flow:
    1. Require non-blank sessionId and message
    2. Run the question through the retrieval pipeline
    3. Map QueryResult to ChatResponse

    A confidence gate rejection is a normal 200 reply.

    Raises:
        ClientInputError: Missing or blank sessionId/message (mapped to 400)
        KnowledgeBaseError: Embedding or generation failure (mapped to 500)
    """
    if _is_blank(request.session_id) or _is_blank(request.message):
        raise ClientInputError(MISSING_FIELDS_MESSAGE, field="sessionId/message")

    logger.info(f"{__name__}:chat - START: session_id={request.session_id}")
    result = await pipeline.answer(request.message)

    return ChatResponse(
        reply=result.reply,
        tokens_used=result.tokens_used,
        retrieved_chunks=result.retrieved_chunks,
        similarity_scores=result.similarity_scores,
    )
