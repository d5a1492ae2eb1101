import json

import httpx
import pytest

from calculator_agent.errors import ProviderError, ProviderTimeoutError
from calculator_agent.providers.base import ChatOptions
from calculator_agent.providers.http import HttpChatProvider, parse_completion
from calculator_agent.schemas.messages import (
    ConversationMessage,
    ToolCallRequest,
    Transcript,
)
from calculator_agent.tools.registry import ToolRegistry

OPTIONS = ChatOptions(
    model="openai/gpt-4o", temperature=0.2, max_tokens=100, timeout_ms=5000
)


def _completion(message, finish_reason="stop", usage=None):
    return {
        "model": "openai/gpt-4o",
        "choices": [{"message": message, "finish_reason": finish_reason}],
        "usage": usage or {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
    }


def _provider(handler):
    return HttpChatProvider(
        api_key="test-key",
        base_url="https://models.example/inference/",
        transport=httpx.MockTransport(handler),
    )


class TestHttpChatProvider:
    @pytest.mark.asyncio
    async def test_request_body_and_headers(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion({"role": "assistant", "content": "hi"}))

        tools = ToolRegistry.discover().descriptors()
        transcript = Transcript.seed("persona", "hello")

        reply = await _provider(handler).complete(
            transcript, options=OPTIONS, tools=tools, tool_choice="auto"
        )

        assert captured["url"] == "https://models.example/inference/chat/completions"
        assert captured["auth"] == "Bearer test-key"
        body = captured["body"]
        assert body["model"] == "openai/gpt-4o"
        assert body["temperature"] == 0.2
        assert body["max_tokens"] == 100
        assert body["tool_choice"] == "auto"
        assert body["tools"] == [tools[0].to_wire()]
        assert body["messages"] == transcript.to_wire()
        assert reply.content == "hi"
        assert reply.usage.total_tokens == 15

    @pytest.mark.asyncio
    async def test_no_tools_means_no_tool_fields(self):
        captured = {}

        def handler(request):
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion({"role": "assistant", "content": "ok"}))

        await _provider(handler).complete(Transcript.seed("persona", "hi"), options=OPTIONS)

        assert "tools" not in captured["body"]
        assert "tool_choice" not in captured["body"]

    @pytest.mark.asyncio
    async def test_tool_calls_are_parsed(self):
        message = {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {
                    "id": "call_abc",
                    "type": "function",
                    "function": {
                        "name": "calculator",
                        "arguments": '{"operation":"multiply","a":15,"b":23}',
                    },
                }
            ],
        }

        def handler(request):
            return httpx.Response(200, json=_completion(message, "tool_calls"))

        reply = await _provider(handler).complete(
            Transcript.seed("persona", "15 times 23"), options=OPTIONS
        )

        assert reply.content is None
        assert reply.finish_reason == "tool_calls"
        (call,) = reply.tool_calls
        assert call.id == "call_abc"
        assert call.name == "calculator"
        assert json.loads(call.arguments) == {"operation": "multiply", "a": 15, "b": 23}

    @pytest.mark.asyncio
    async def test_tool_round_trip_transcript_is_sent_verbatim(self):
        captured = {}

        def handler(request):
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion({"role": "assistant", "content": "345"}))

        call = ToolCallRequest(id="call_1", name="calculator", arguments="{}")
        transcript = Transcript.seed("persona", "15 times 23")
        transcript.append(ConversationMessage.assistant(None, [call]))
        transcript.append(ConversationMessage.tool_result("call_1", '{"result": 345}'))

        reply = await _provider(handler).complete(transcript, options=OPTIONS)

        assert reply.content == "345"
        assert captured["body"]["messages"][-1] == {
            "role": "tool",
            "content": '{"result": 345}',
            "tool_call_id": "call_1",
        }

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        def handler(request):
            return httpx.Response(401, text="bad credentials")

        with pytest.raises(ProviderError, match="401"):
            await _provider(handler).complete(Transcript.seed("p", "hi"), options=OPTIONS)

    @pytest.mark.asyncio
    async def test_api_error_payload(self):
        def handler(request):
            return httpx.Response(200, json={"error": {"message": "model not found"}})

        with pytest.raises(ProviderError, match="model not found"):
            await _provider(handler).complete(Transcript.seed("p", "hi"), options=OPTIONS)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(ProviderTimeoutError):
            await _provider(handler).complete(Transcript.seed("p", "hi"), options=OPTIONS)

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(ProviderError) as excinfo:
            await _provider(handler).complete(Transcript.seed("p", "hi"), options=OPTIONS)

        assert not isinstance(excinfo.value, ProviderTimeoutError)


class TestParseCompletion:
    def test_no_choices(self):
        with pytest.raises(ProviderError, match="no choices"):
            parse_completion({"choices": []})

    def test_missing_usage_defaults_to_zero(self):
        reply = parse_completion(
            {"choices": [{"message": {"content": "hi"}}], "usage": None}
        )

        assert reply.usage.total_tokens == 0
        assert reply.tool_calls == []

    def test_tool_call_without_id_is_malformed(self):
        with pytest.raises(ProviderError, match="malformed"):
            parse_completion(
                {
                    "choices": [
                        {
                            "message": {
                                "tool_calls": [{"function": {"name": "calculator"}}]
                            }
                        }
                    ]
                }
            )

    @pytest.mark.parametrize(
        "payload",
        [
            {"choices": ["oops"]},
            {"choices": [{"message": "oops"}]},
            {"choices": {"message": {"content": "hi"}}},
            {"choices": [{"message": {"content": [{"type": "text", "text": "hi"}]}}]},
            {"choices": [{"message": {"tool_calls": ["oops"]}}]},
            {"choices": [{"message": {"content": "hi"}}], "usage": ["oops"]},
        ],
    )
    def test_malformed_replies_are_provider_errors(self, payload):
        with pytest.raises(ProviderError, match="malformed"):
            parse_completion(payload)
