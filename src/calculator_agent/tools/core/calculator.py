from __future__ import annotations

import logging
import operator
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from calculator_agent.errors import DivisionByZeroError
from calculator_agent.schemas.validation import validate
from calculator_agent.tools.tool_models import Failure, Success, ToolOutcome

logger = logging.getLogger(__name__)

Operation = Literal["add", "subtract", "multiply", "divide"]

_OPERATIONS = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
}


class CalculatorInput(BaseModel):
    # Arguments cross a process boundary, so instances are always re-checked.
    model_config = ConfigDict(
        strict=True, allow_inf_nan=False, revalidate_instances="always"
    )

    operation: Operation = Field(description="Operation to perform")
    a: float = Field(description="First number")
    b: float = Field(description="Second number")


class CalculatorOutput(BaseModel):
    model_config = ConfigDict(
        strict=True, allow_inf_nan=False, revalidate_instances="always"
    )

    result: float
    explanation: str = Field(min_length=1)


def _format_number(value: float) -> str:
    if float(value).is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(float(value))


def execute_calculator(arguments: Any) -> ToolOutcome:
    """Run one arithmetic operation.

    Returns Success(CalculatorOutput), or Failure(DivisionByZeroError) when
    dividing by zero. Raises ValidationError for malformed input, or for a
    result that breaks the output contract (e.g. an overflow to infinity).
    """
    params = validate(CalculatorInput, arguments, context="calculator input")
    logger.debug("Calculating: %s %s %s", params.a, params.operation, params.b)

    if params.operation == "divide" and params.b == 0:
        return Failure(DivisionByZeroError("Division by zero is not allowed."))

    result = _OPERATIONS[params.operation](params.a, params.b)
    explanation = (
        f"The operation {_format_number(params.a)} {params.operation} "
        f"{_format_number(params.b)} resulted in {_format_number(result)}."
    )
    output = validate(
        CalculatorOutput,
        {"result": result, "explanation": explanation},
        context="calculator output",
    )
    return Success(output)


def calculate(arguments: Any) -> CalculatorOutput:
    """Like execute_calculator, but raises DivisionByZeroError instead of returning it."""
    return execute_calculator(arguments).unwrap()
