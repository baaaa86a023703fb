# app/schemas/ai.py
from typing import List, Optional

from pydantic import BaseModel, Field

class ChatMessage(BaseModel):
    role: str
    content: str

class ChatRequest(BaseModel):
    messages: List[ChatMessage]
    model: Optional[str] = None

class ChatResponse(BaseModel):
    response: str

class CodeCompletionRequest(BaseModel):
    code: str
    language: str = Field(min_length=1)
    cursor: Optional[int] = None  # Character offset into code
    model: Optional[str] = None

class CodeCompletionResponse(BaseModel):
    completion: str

class GenerateCodeRequest(BaseModel):
    prompt: str = Field(min_length=1)
    language: Optional[str] = None
    context: Optional[str] = None
    model: Optional[str] = None

class GenerateCodeResponse(BaseModel):
    code: str
