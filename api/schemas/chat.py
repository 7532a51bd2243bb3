# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: api/schemas/chat.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    # the site's chat widget posts camelCase
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., min_length=1)
    conversation_history: List[ChatTurn] = Field(default_factory=list, alias="conversationHistory")


class ChatResponse(BaseModel):
    response: str
    context_source: Optional[str] = None
