"""
Chatbot Endpoints

Endpoints:
- POST /api/chatbot - Intent-detected reply (Dialogflow or simulated)
- POST /api/gemini - Free-form reply from Gemini

Upstream failures are business-level results: they come back as 200 with
``success: false`` (timeouts as 504).
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from backend.chatbot.gateway import ChatGateway
from backend.dependencies import get_chat_gateway


router = APIRouter(prefix="/api", tags=["chatbot"])


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class ChatRequest(BaseModel):
    """Request body for the chatbot endpoint."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: Optional[str] = None
    session_id: Optional[str] = None


class ChatResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    response: str
    intent: str
    session_id: str


class GenerateRequest(BaseModel):
    message: Optional[str] = None


class GenerateResponse(BaseModel):
    success: bool = True
    response: str


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/chatbot", response_model=ChatResponse)
async def chatbot(
    request: ChatRequest,
    gateway: ChatGateway = Depends(get_chat_gateway),
) -> ChatResponse:
    """Detect the intent of a message and return the agent's reply."""
    result = await run_in_threadpool(gateway.chat, request.message, request.session_id)
    return ChatResponse(
        response=result.response,
        intent=result.intent,
        session_id=result.session_id,
    )


@router.post("/gemini", response_model=GenerateResponse)
async def gemini(
    request: GenerateRequest,
    gateway: ChatGateway = Depends(get_chat_gateway),
) -> GenerateResponse:
    """Generate a free-form reply with Gemini."""
    text = await run_in_threadpool(gateway.generate, request.message)
    return GenerateResponse(response=text)
