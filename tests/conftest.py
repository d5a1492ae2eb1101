from __future__ import annotations

import json
from typing import Any

import pytest

from calculator_agent.config.settings import Settings, load_settings
from calculator_agent.providers.base import ProviderReply, Usage
from calculator_agent.schemas.messages import ToolCallRequest


class ScriptedProvider:
    """ChatProvider double that replays canned replies and records each request."""

    def __init__(self, replies: list[ProviderReply]) -> None:
        self._replies = list(replies)
        self.calls: list[dict[str, Any]] = []

    async def complete(self, transcript, *, options, tools=None, tool_choice=None):
        self.calls.append(
            {
                "messages": transcript.to_wire(),
                "tools": tools,
                "tool_choice": tool_choice,
                "options": options,
            }
        )
        return self._replies[len(self.calls) - 1]


def tool_call(call_id: str, name: str = "calculator", **arguments: Any) -> ToolCallRequest:
    return ToolCallRequest(id=call_id, name=name, arguments=json.dumps(arguments))


def text_reply(content: str | None, total_tokens: int = 0) -> ProviderReply:
    return ProviderReply(
        content=content,
        finish_reason="stop",
        usage=Usage(total_tokens=total_tokens),
    )


def tool_reply(*calls: ToolCallRequest, total_tokens: int = 0) -> ProviderReply:
    return ProviderReply(
        content=None,
        tool_calls=list(calls),
        finish_reason="tool_calls",
        usage=Usage(total_tokens=total_tokens),
    )


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    for name in (
        "DEFAULT_MODEL",
        "FALLBACK_MODEL",
        "AI_TEMPERATURE",
        "AI_MAX_TOKENS",
        "AI_TIMEOUT_MS",
        "LLM_BACKEND",
    ):
        monkeypatch.delenv(name, raising=False)
    return load_settings(env_file=None, github_token="test-token", app_env="test")
