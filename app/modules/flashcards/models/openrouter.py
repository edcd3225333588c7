"""Wire models for the OpenRouter chat-completions endpoint.

The response models are deliberately lenient: shape checks that decide the
error kind live in ``generator.parse_generation_response``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str
    messages: tuple[ChatMessage, ...]
    response_format: dict[str, Any]


class ResponseMessage(BaseModel):
    role: str | None = None
    content: Any = None


class Choice(BaseModel):
    message: ResponseMessage | None = None
    finish_reason: str | None = None


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class GenerationResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    choices: list[Choice] = Field(default_factory=list)
    usage: Usage | None = None
