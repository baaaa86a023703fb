# app/routers/ai.py
from fastapi import APIRouter, Depends

from app.core.openrouter import OpenRouterService, resolve_api_key
from app.core.security import get_current_user
from app.models.user import User
from app.schemas.ai import (
    ChatRequest,
    ChatResponse,
    CodeCompletionRequest,
    CodeCompletionResponse,
    GenerateCodeRequest,
    GenerateCodeResponse,
)

router = APIRouter()


def get_ai_service(user: User = Depends(get_current_user)) -> OpenRouterService:
    """
    Build the completion client for this request, keyed by the caller's own
    OpenRouter key when they stored one, else by the server key.
    """
    return OpenRouterService(api_key=resolve_api_key(user.openrouter_api_key))


@router.post("/chat", response_model=ChatResponse)
def chat(payload: ChatRequest, service: OpenRouterService = Depends(get_ai_service)):
    """
    Forward a conversation to the completion API.

    - **messages**: list of {role, content}.
    - **model**: optional model id; defaults to the configured model.
    """
    messages = [message.model_dump() for message in payload.messages]
    return ChatResponse(response=service.chat_completion(messages, payload.model))


@router.post("/code-completion", response_model=CodeCompletionResponse)
def code_completion(payload: CodeCompletionRequest, service: OpenRouterService = Depends(get_ai_service)):
    """
    Complete **code** (in **language**) at the **cursor** offset.
    """
    completion = service.code_completion(payload.code, payload.language, payload.cursor, payload.model)
    return CodeCompletionResponse(completion=completion)


@router.post("/generate-code", response_model=GenerateCodeResponse)
def generate_code(payload: GenerateCodeRequest, service: OpenRouterService = Depends(get_ai_service)):
    """
    Generate code from a natural-language **prompt**, optionally grounded on
    existing **context**.
    """
    code = service.generate_code(payload.prompt, payload.language, payload.context, payload.model)
    return GenerateCodeResponse(code=code)
