from calculator_agent.tools.registry import ToolRegistry
from calculator_agent.tools.tool_models import Failure, Success, ToolOutcome, ToolSpec

__all__ = ["Failure", "Success", "ToolOutcome", "ToolRegistry", "ToolSpec"]
