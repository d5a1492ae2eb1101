"""OpenAI-compatible chat-completions client over httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from calculator_agent.errors import ProviderError, ProviderTimeoutError
from calculator_agent.providers.base import (
    ChatOptions,
    ProviderReply,
    ToolChoice,
    Usage,
)
from calculator_agent.schemas.descriptors import ToolDescriptor
from calculator_agent.schemas.messages import ToolCallRequest, Transcript

logger = logging.getLogger(__name__)


class HttpChatProvider:
    """Posts the full transcript to ``{base_url}/chat/completions``.

    A new client is opened per request; ``transport`` lets tests substitute
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._transport = transport

    def _build_body(
        self,
        transcript: Transcript,
        options: ChatOptions,
        tools: list[ToolDescriptor] | None,
        tool_choice: ToolChoice | None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": options.model,
            "messages": transcript.to_wire(),
            "temperature": options.temperature,
            "max_tokens": options.max_tokens,
        }
        if tools:
            body["tools"] = [tool.to_wire() for tool in tools]
            if tool_choice:
                body["tool_choice"] = tool_choice
        return body

    async def complete(
        self,
        transcript: Transcript,
        *,
        options: ChatOptions,
        tools: list[ToolDescriptor] | None = None,
        tool_choice: ToolChoice | None = None,
    ) -> ProviderReply:
        body = self._build_body(transcript, options, tools, tool_choice)
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=options.timeout_seconds, transport=self._transport
            ) as client:
                response = await client.post(self._url, json=body, headers=headers)
        except httpx.TimeoutException as exc:
            raise ProviderTimeoutError(
                f"Provider did not answer within {options.timeout_ms} ms"
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"Provider request failed: {exc}") from exc

        if response.status_code >= 400:
            raise ProviderError(
                f"Provider HTTP {response.status_code}: {response.text[:500]}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderError("Provider returned a non-JSON body") from exc

        return parse_completion(payload)


def parse_completion(payload: Any) -> ProviderReply:
    """Turn a chat-completions response body into a ProviderReply."""
    if not isinstance(payload, dict):
        raise ProviderError("Provider returned an unexpected payload")

    if "error" in payload:
        err = payload["error"]
        msg = err.get("message", str(err)) if isinstance(err, dict) else str(err)
        raise ProviderError(f"Provider API error: {msg}")

    choices = payload.get("choices") or []
    if not choices:
        raise ProviderError("Provider returned no choices")

    choice = choices[0] if isinstance(choices, list) else None
    if not isinstance(choice, dict):
        raise ProviderError("Provider returned a malformed choice")
    message = choice.get("message") or {}
    if not isinstance(message, dict):
        raise ProviderError("Provider returned a malformed message")
    try:
        tool_calls = [
            ToolCallRequest(
                id=call.get("id", ""),
                name=(call.get("function") or {}).get("name", ""),
                arguments=(call.get("function") or {}).get("arguments") or "{}",
            )
            for call in message.get("tool_calls") or []
        ]
    except (PydanticValidationError, AttributeError) as exc:
        raise ProviderError(f"Provider returned a malformed tool call: {exc}") from exc

    usage = payload.get("usage") or {}
    try:
        reply = ProviderReply(
            content=message.get("content"),
            tool_calls=tool_calls,
            usage=Usage(
                prompt_tokens=usage.get("prompt_tokens") or 0,
                completion_tokens=usage.get("completion_tokens") or 0,
                total_tokens=usage.get("total_tokens") or 0,
            ),
            finish_reason=choice.get("finish_reason"),
            model=payload.get("model"),
        )
    except (PydanticValidationError, AttributeError) as exc:
        raise ProviderError(f"Provider returned a malformed reply: {exc}") from exc

    logger.debug(
        "Provider reply: finish_reason=%s tool_calls=%d total_tokens=%d",
        reply.finish_reason,
        len(reply.tool_calls),
        reply.usage.total_tokens,
    )
    return reply
