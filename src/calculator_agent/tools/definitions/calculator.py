from calculator_agent.tools.core.calculator import CalculatorInput, execute_calculator
from calculator_agent.tools.tool_models import ToolSpec

tool = ToolSpec(
    name="calculator",
    description="Performs basic arithmetic: add, subtract, multiply or divide two numbers.",
    input_model=CalculatorInput,
    handler=execute_calculator,
    intent="Execute arithmetic exactly instead of letting the model guess.",
    schema_notes="Expects 'operation', 'a' and 'b'. Returns 'result' and 'explanation'.",
)
