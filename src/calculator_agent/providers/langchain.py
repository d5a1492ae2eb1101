from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)

from calculator_agent.errors import ProviderError, ProviderTimeoutError
from calculator_agent.providers.base import (
    ChatOptions,
    ProviderReply,
    ToolChoice,
    Usage,
)
from calculator_agent.schemas.descriptors import ToolDescriptor
from calculator_agent.schemas.messages import (
    ConversationMessage,
    ToolCallRequest,
    Transcript,
)

logger = logging.getLogger(__name__)


def content_to_text(content: Any) -> str:
    """Flatten LangChain message content (str or list of blocks) into text."""
    if isinstance(content, str):
        return content

    if isinstance(content, list):
        parts: list[str] = []
        for item in content:
            if isinstance(item, dict):
                text = item.get("text")
                if isinstance(text, str):
                    parts.append(text)
            elif isinstance(item, str):
                parts.append(item)
        return "".join(parts)

    return ""


def _to_langchain(message: ConversationMessage) -> BaseMessage:
    if message.role == "system":
        return SystemMessage(content=message.content or "")
    if message.role == "user":
        return HumanMessage(content=message.content or "")
    if message.role == "tool":
        return ToolMessage(
            content=message.content or "", tool_call_id=message.tool_call_id or ""
        )

    tool_calls: list[dict[str, Any]] = []
    invalid_tool_calls: list[dict[str, Any]] = []
    for call in message.tool_calls or []:
        try:
            args = json.loads(call.arguments)
        except json.JSONDecodeError as exc:
            args = None
            error = str(exc)
        else:
            error = "arguments are not a JSON object"
        if isinstance(args, dict):
            tool_calls.append({"name": call.name, "args": args, "id": call.id})
        else:
            invalid_tool_calls.append(
                {"name": call.name, "args": call.arguments, "id": call.id, "error": error}
            )
    return AIMessage(
        content=message.content or "",
        tool_calls=tool_calls,
        invalid_tool_calls=invalid_tool_calls,
    )


def _from_langchain(message: BaseMessage) -> ProviderReply:
    tool_calls = [
        ToolCallRequest(
            id=call.get("id") or f"call_{index}",
            name=call["name"],
            arguments=json.dumps(call.get("args") or {}),
        )
        for index, call in enumerate(getattr(message, "tool_calls", None) or [])
    ]
    # Calls the model emitted with unparseable arguments still need a paired result.
    offset = len(tool_calls)
    for index, call in enumerate(getattr(message, "invalid_tool_calls", None) or []):
        tool_calls.append(
            ToolCallRequest(
                id=call.get("id") or f"call_{offset + index}",
                name=call.get("name") or "",
                arguments=call.get("args") or "",
            )
        )

    usage_metadata = getattr(message, "usage_metadata", None) or {}
    response_metadata = getattr(message, "response_metadata", None) or {}
    return ProviderReply(
        content=content_to_text(message.content) or None,
        tool_calls=tool_calls,
        usage=Usage(
            prompt_tokens=usage_metadata.get("input_tokens", 0),
            completion_tokens=usage_metadata.get("output_tokens", 0),
            total_tokens=usage_metadata.get("total_tokens", 0),
        ),
        finish_reason=response_metadata.get("finish_reason"),
        model=response_metadata.get("model_name"),
    )


def _is_timeout(exc: BaseException) -> bool:
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return True
    return "timeout" in type(exc).__name__.lower()


class LangChainChatProvider:
    """Adapts a LangChain chat model to the ChatProvider protocol."""

    def __init__(self, model: BaseChatModel) -> None:
        self._model = model

    async def complete(
        self,
        transcript: Transcript,
        *,
        options: ChatOptions,
        tools: list[ToolDescriptor] | None = None,
        tool_choice: ToolChoice | None = None,
    ) -> ProviderReply:
        runnable: Any = self._model
        if tools:
            runnable = runnable.bind_tools(
                [tool.to_wire() for tool in tools], tool_choice=tool_choice
            )
        runnable = runnable.bind(
            model=options.model,
            temperature=options.temperature,
            max_tokens=options.max_tokens,
        )

        messages = [_to_langchain(message) for message in transcript]
        try:
            result = await runnable.ainvoke(messages)
        except Exception as exc:  # noqa: BLE001
            if _is_timeout(exc):
                raise ProviderTimeoutError(
                    f"Provider did not answer within {options.timeout_ms} ms"
                ) from exc
            raise ProviderError(f"Provider request failed: {exc}") from exc

        reply = _from_langchain(result)
        logger.debug(
            "LangChain reply: finish_reason=%s tool_calls=%d",
            reply.finish_reason,
            len(reply.tool_calls),
        )
        return reply
