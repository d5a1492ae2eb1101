from __future__ import annotations

from typing import Literal, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from calculator_agent.schemas.descriptors import ToolDescriptor
from calculator_agent.schemas.messages import ToolCallRequest, Transcript

ToolChoice = Literal["auto"]


class ChatOptions(BaseModel):
    """Per-call request parameters sent with every provider round trip."""

    model: str = Field(min_length=1)
    temperature: float = Field(ge=0, le=2)
    max_tokens: int = Field(ge=1, le=8000)
    timeout_ms: int = Field(ge=1000)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __add__(self, other: Usage) -> Usage:
        return Usage(
            prompt_tokens=self.prompt_tokens + other.prompt_tokens,
            completion_tokens=self.completion_tokens + other.completion_tokens,
            total_tokens=self.total_tokens + other.total_tokens,
        )


class ProviderReply(BaseModel):
    content: str | None = None
    tool_calls: list[ToolCallRequest] = Field(default_factory=list)
    usage: Usage = Field(default_factory=Usage)
    finish_reason: str | None = None
    model: str | None = None


@runtime_checkable
class ChatProvider(Protocol):
    """A hosted chat model reachable over its own transport."""

    async def complete(
        self,
        transcript: Transcript,
        *,
        options: ChatOptions,
        tools: list[ToolDescriptor] | None = None,
        tool_choice: ToolChoice | None = None,
    ) -> ProviderReply: ...
