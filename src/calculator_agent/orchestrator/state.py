from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from calculator_agent.providers.base import Usage
from calculator_agent.schemas.messages import Transcript


class AgentState(str, Enum):
    AWAITING_FIRST_RESPONSE = "awaiting_first_response"
    AWAITING_TOOL_RESULTS = "awaiting_tool_results"
    DONE = "done"


@dataclass
class ChatResult:
    """Outcome of one chat exchange plus the data needed to inspect it."""

    response: str
    transcript: Transcript
    model: str
    state: AgentState = AgentState.DONE
    tool_calls_total: int = 0
    llm_calls: int = 0
    usage: Usage = field(default_factory=Usage)
