from typing import Literal

from pydantic import BaseModel, Field


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    message: str
    history: list[ChatTurn] = Field(default_factory=list)
    session_id: str | None = None


class ChatResponse(BaseModel):
    success: bool
    response: str | None = None
    error: str | None = None
    details: str | None = None
    session_id: str | None = None


class SessionResponse(BaseModel):
    session_id: str
