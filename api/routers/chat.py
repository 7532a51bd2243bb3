# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: chat.py
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_chat_service
from api.schemas.chat import ChatRequest, ChatResponse
from chat.PromptBuilder import ConversationTurn
from errors.PortfolioErrors import GenerationError
from services.PortfolioChatService import PortfolioChatService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
def post_chat(
        req: ChatRequest,
        svc: PortfolioChatService = Depends(get_chat_service),
) -> ChatResponse:
    message = (req.message or "").strip()
    if not message:
        raise HTTPException(status_code=400, detail="message must not be empty")

    logger.info("POST /chat (start) message_len=%d history=%d", len(message), len(req.conversation_history))

    history = [ConversationTurn(role=t.role, content=t.content) for t in req.conversation_history]

    try:
        out: Dict[str, Any] = svc.chat(user_query=message, history=history)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except GenerationError as e:
        logger.exception("post_chat failed: %s", e)
        raise HTTPException(status_code=500, detail="Sorry, something went wrong. Please try again.")

    logger.info("POST /chat (done) answer_len=%d source=%s", len(out["answer"]), out.get("context_source"))

    return ChatResponse(response=out["answer"], context_source=out.get("context_source"))
