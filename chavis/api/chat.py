"""
Chat endpoint: one question in, one cascade response out.
"""

from fastapi import APIRouter, Depends

from .deps import AppServices, get_services
from .schemas import ChatRequest, ChatResponse

router = APIRouter()


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
@router.post("/api/chat", response_model=ChatResponse, response_model_exclude_none=True, include_in_schema=False)
async def chat_endpoint(request: ChatRequest, services: AppServices = Depends(get_services)):
    """Answer a question through the exact-match / RAG cascade."""
    response = await services.cascade.answer(request.question)
    return ChatResponse.from_cascade(response)
