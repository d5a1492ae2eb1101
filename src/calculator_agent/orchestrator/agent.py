from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from calculator_agent.config.models import select_model
from calculator_agent.config.settings import Settings
from calculator_agent.errors import ProviderTimeoutError, ValidationError, ValidationIssue
from calculator_agent.orchestrator.llm_factory import LLMFactory
from calculator_agent.orchestrator.state import AgentState, ChatResult
from calculator_agent.providers.base import (
    ChatOptions,
    ChatProvider,
    ProviderReply,
    ToolChoice,
)
from calculator_agent.schemas.descriptors import ToolDescriptor
from calculator_agent.schemas.messages import (
    ConversationMessage,
    ToolCallRequest,
    Transcript,
)
from calculator_agent.schemas.validation import validate
from calculator_agent.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a math assistant. Use the calculator tool for every arithmetic "
    "operation instead of computing results yourself. If the calculator "
    "reports an error, explain it to the user instead of inventing a result."
)

FALLBACK_RESPONSE = "No response was produced."
TOOL_FAILURE_MESSAGE = "Calculation failed"


def _text_or_fallback(content: str | None) -> str:
    if content and content.strip():
        return content
    return FALLBACK_RESPONSE


class CalculatorAgent:
    """Single-exchange chat agent offering the model one local calculator tool.

    Each call runs a fresh exchange:
    1. Seed a transcript with the system persona and the user's message.
    2. Ask the provider for a reply, letting it decide whether to call a tool.
    3. If it did, run every requested tool call and append one result per call.
    4. Ask the provider again, without tools, for the final answer.
    """

    def __init__(
        self,
        settings: Settings,
        provider: ChatProvider | None = None,
        registry: ToolRegistry | None = None,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self._settings = settings
        self._provider = provider or LLMFactory.create_provider(settings)
        self._registry = registry if registry is not None else ToolRegistry.discover()
        self._system_prompt = system_prompt

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def _resolve_options(
        self,
        model: str | None,
        temperature: float | None,
        max_tokens: int | None,
        timeout_ms: int | None,
    ) -> ChatOptions:
        settings = self._settings
        requested = model or settings.default_model
        return validate(
            ChatOptions,
            {
                "model": select_model(requested, settings.fallback_model),
                "temperature": (
                    settings.ai_temperature if temperature is None else temperature
                ),
                "max_tokens": settings.ai_max_tokens if max_tokens is None else max_tokens,
                "timeout_ms": settings.ai_timeout_ms if timeout_ms is None else timeout_ms,
            },
            context="chat options",
        )

    async def _call_provider(
        self,
        transcript: Transcript,
        options: ChatOptions,
        tools: list[ToolDescriptor] | None = None,
        tool_choice: ToolChoice | None = None,
    ) -> ProviderReply:
        try:
            return await asyncio.wait_for(
                self._provider.complete(
                    transcript, options=options, tools=tools, tool_choice=tool_choice
                ),
                timeout=options.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise ProviderTimeoutError(
                f"Provider call exceeded {options.timeout_ms} ms"
            ) from exc

    def _run_tool_call(self, call: ToolCallRequest) -> dict[str, Any]:
        spec = self._registry.get(call.name)
        if spec is None:
            logger.warning("Model requested unknown tool: %s", call.name)
            return {"error": f"Unknown tool: {call.name}"}

        try:
            arguments = json.loads(call.arguments or "{}")
            logger.info("Tool call: %s(%s)", call.name, arguments)
            outcome = spec.run(arguments)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Tool %s failed: %s", call.name, exc)
            return {"error": TOOL_FAILURE_MESSAGE, "detail": str(exc)}

        payload = outcome.to_payload()
        if outcome.ok:
            logger.info("Tool result: %s", payload)
        else:
            logger.warning("Tool %s reported an error: %s", call.name, payload["error"])
        return payload

    async def invoke_with_metadata(
        self,
        user_message: str,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout_ms: int | None = None,
    ) -> ChatResult:
        if not user_message or not user_message.strip():
            raise ValidationError(
                "User message must not be empty",
                [ValidationIssue(path="message", reason="must not be empty")],
            )

        options = self._resolve_options(model, temperature, max_tokens, timeout_ms)
        transcript = Transcript.seed(self._system_prompt, user_message)
        state = AgentState.AWAITING_FIRST_RESPONSE
        logger.info("Chat started (model=%s, state=%s)", options.model, state.value)

        reply = await self._call_provider(
            transcript,
            options,
            tools=self._registry.descriptors() or None,
            tool_choice="auto",
        )
        usage = reply.usage
        llm_calls = 1

        if not reply.tool_calls:
            transcript.append(ConversationMessage.assistant(reply.content))
            state = AgentState.DONE
            logger.info("Chat finished without tool calls (state=%s)", state.value)
            return ChatResult(
                response=_text_or_fallback(reply.content),
                transcript=transcript,
                model=options.model,
                state=state,
                llm_calls=llm_calls,
                usage=usage,
            )

        state = AgentState.AWAITING_TOOL_RESULTS
        logger.info(
            "Model requested %d tool call(s) (state=%s)", len(reply.tool_calls), state.value
        )
        transcript.append(ConversationMessage.assistant(reply.content, reply.tool_calls))

        # Results are paired to requests by id; the provider does not rely on position.
        for call in reply.tool_calls:
            payload = self._run_tool_call(call)
            transcript.append(ConversationMessage.tool_result(call.id, json.dumps(payload)))

        final = await self._call_provider(transcript, options)
        usage = usage + final.usage
        llm_calls += 1
        transcript.append(ConversationMessage.assistant(final.content))
        state = AgentState.DONE
        logger.info("Chat finished (state=%s, tokens=%d)", state.value, usage.total_tokens)

        return ChatResult(
            response=_text_or_fallback(final.content),
            transcript=transcript,
            model=options.model,
            state=state,
            tool_calls_total=len(reply.tool_calls),
            llm_calls=llm_calls,
            usage=usage,
        )

    async def chat(self, user_message: str, **overrides: Any) -> str:
        """Send one message and return the model's final answer text."""
        result = await self.invoke_with_metadata(user_message, **overrides)
        return result.response
