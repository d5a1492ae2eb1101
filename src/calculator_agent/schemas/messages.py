from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from calculator_agent.errors import TranscriptError

Role = Literal["system", "user", "assistant", "tool"]


class ToolCallRequest(BaseModel):
    """A model's request to invoke a named tool with JSON-encoded arguments."""

    id: str = Field(min_length=1)
    name: str
    arguments: str = "{}"

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


class ConversationMessage(BaseModel):
    role: Role
    content: str | None = None
    tool_calls: list[ToolCallRequest] | None = None
    tool_call_id: str | None = None

    @model_validator(mode="after")
    def _check_role_fields(self) -> ConversationMessage:
        if self.tool_calls and self.role != "assistant":
            raise ValueError("only assistant messages may carry tool calls")
        if self.role == "tool" and not self.tool_call_id:
            raise ValueError("tool messages must reference a tool call id")
        if self.role != "tool" and self.tool_call_id is not None:
            raise ValueError("only tool messages may carry a tool call id")
        return self

    @classmethod
    def system(cls, content: str) -> ConversationMessage:
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> ConversationMessage:
        return cls(role="user", content=content)

    @classmethod
    def assistant(
        cls, content: str | None, tool_calls: list[ToolCallRequest] | None = None
    ) -> ConversationMessage:
        return cls(role="assistant", content=content, tool_calls=tool_calls or None)

    @classmethod
    def tool_result(cls, tool_call_id: str, content: str) -> ConversationMessage:
        return cls(role="tool", content=content, tool_call_id=tool_call_id)

    def to_wire(self) -> dict[str, Any]:
        message: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = [call.to_wire() for call in self.tool_calls]
        if self.tool_call_id is not None:
            message["tool_call_id"] = self.tool_call_id
        return message


class Transcript:
    """Ordered messages of a single exchange, sent verbatim on every provider call.

    A tool message is only accepted when an earlier assistant message in the
    same transcript requested a tool call with that id.
    """

    def __init__(self, messages: list[ConversationMessage] | None = None) -> None:
        self._messages: list[ConversationMessage] = []
        self._requested_ids: set[str] = set()
        for message in messages or []:
            self.append(message)

    @classmethod
    def seed(cls, system_prompt: str, user_message: str) -> Transcript:
        return cls(
            [
                ConversationMessage.system(system_prompt),
                ConversationMessage.user(user_message),
            ]
        )

    def append(self, message: ConversationMessage) -> None:
        if message.role == "tool" and message.tool_call_id not in self._requested_ids:
            raise TranscriptError(
                f"Tool result references unknown tool call id: {message.tool_call_id}"
            )
        if message.tool_calls:
            self._requested_ids.update(call.id for call in message.tool_calls)
        self._messages.append(message)

    @property
    def messages(self) -> tuple[ConversationMessage, ...]:
        return tuple(self._messages)

    def to_wire(self) -> list[dict[str, Any]]:
        return [message.to_wire() for message in self._messages]

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ConversationMessage]:
        return iter(self._messages)

    def __getitem__(self, index: int) -> ConversationMessage:
        return self._messages[index]
