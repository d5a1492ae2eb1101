import pytest
from pydantic import ValidationError as PydanticValidationError

from calculator_agent.errors import TranscriptError
from calculator_agent.schemas.messages import (
    ConversationMessage,
    ToolCallRequest,
    Transcript,
)


def _call(call_id="call_1"):
    return ToolCallRequest(
        id=call_id,
        name="calculator",
        arguments='{"operation": "add", "a": 1, "b": 2}',
    )


class TestConversationMessage:
    def test_tool_calls_only_on_assistant(self):
        with pytest.raises(PydanticValidationError):
            ConversationMessage(role="user", content="hi", tool_calls=[_call()])

    def test_tool_message_requires_call_id(self):
        with pytest.raises(PydanticValidationError):
            ConversationMessage(role="tool", content="{}")

    def test_call_id_only_on_tool(self):
        with pytest.raises(PydanticValidationError):
            ConversationMessage(role="assistant", content="x", tool_call_id="call_1")

    def test_assistant_wire_shape(self):
        message = ConversationMessage.assistant(None, [_call()])

        assert message.to_wire() == {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {
                    "id": "call_1",
                    "type": "function",
                    "function": {
                        "name": "calculator",
                        "arguments": '{"operation": "add", "a": 1, "b": 2}',
                    },
                }
            ],
        }

    def test_tool_result_wire_shape(self):
        message = ConversationMessage.tool_result("call_1", '{"result": 3}')

        assert message.to_wire() == {
            "role": "tool",
            "content": '{"result": 3}',
            "tool_call_id": "call_1",
        }


class TestTranscript:
    def test_seed_has_system_then_user(self):
        transcript = Transcript.seed("persona", "What is 2 + 2?")

        assert [m.role for m in transcript] == ["system", "user"]
        assert transcript[1].content == "What is 2 + 2?"

    def test_tool_result_must_follow_matching_request(self):
        transcript = Transcript.seed("persona", "hi")

        with pytest.raises(TranscriptError):
            transcript.append(ConversationMessage.tool_result("call_1", "{}"))

    def test_tool_result_pairs_with_earlier_request(self):
        transcript = Transcript.seed("persona", "hi")
        transcript.append(ConversationMessage.assistant(None, [_call("a"), _call("b")]))

        transcript.append(ConversationMessage.tool_result("b", "{}"))
        transcript.append(ConversationMessage.tool_result("a", "{}"))

        assert len(transcript) == 5
        assert [m.get("tool_call_id") for m in transcript.to_wire()[3:]] == ["b", "a"]

    def test_messages_view_is_immutable(self):
        transcript = Transcript.seed("persona", "hi")

        assert isinstance(transcript.messages, tuple)
