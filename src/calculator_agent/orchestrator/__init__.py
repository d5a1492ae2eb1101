from calculator_agent.orchestrator.agent import FALLBACK_RESPONSE, CalculatorAgent
from calculator_agent.orchestrator.llm_factory import LLMFactory
from calculator_agent.orchestrator.state import AgentState, ChatResult

__all__ = [
    "FALLBACK_RESPONSE",
    "AgentState",
    "CalculatorAgent",
    "ChatResult",
    "LLMFactory",
]
