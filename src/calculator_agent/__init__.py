from calculator_agent.config import Settings, load_settings
from calculator_agent.errors import (
    AgentError,
    ConfigurationError,
    DivisionByZeroError,
    ProviderError,
    ProviderTimeoutError,
    ValidationError,
)
from calculator_agent.orchestrator import CalculatorAgent, ChatResult

__all__ = [
    "AgentError",
    "CalculatorAgent",
    "ChatResult",
    "ConfigurationError",
    "DivisionByZeroError",
    "ProviderError",
    "ProviderTimeoutError",
    "Settings",
    "ValidationError",
    "load_settings",
]
