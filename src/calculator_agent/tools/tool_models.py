from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from pydantic import BaseModel

from calculator_agent.errors import AgentError
from calculator_agent.schemas.descriptors import ToolDescriptor, build_tool_descriptor

OutputT = TypeVar("OutputT", bound=BaseModel)


@dataclass(frozen=True)
class Success(Generic[OutputT]):
    value: OutputT

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> OutputT:
        return self.value

    def to_payload(self) -> dict[str, Any]:
        return self.value.model_dump()


@dataclass(frozen=True)
class Failure:
    """Domain error reported by a tool instead of a value."""

    error: AgentError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise self.error

    def to_payload(self) -> dict[str, Any]:
        return {"error": str(self.error), "type": type(self.error).__name__}


ToolOutcome = Union[Success[Any], Failure]


@dataclass(frozen=True)
class ToolSpec:
    """Static definition of a tool and the handler that executes it.

    Attributes:
        name: The unique identifier for the tool, as seen by the model.
        description: Purpose advertised to the model (at least 10 characters).
        input_model: Pydantic model describing the accepted arguments.
        handler: Callable receiving the decoded arguments, returning an outcome.
        intent: Formal semantic purpose of the tool for developer clarity.
        schema_notes: Expected input/output patterns and semantic constraints.
    """

    name: str
    description: str
    input_model: type[BaseModel]
    handler: Callable[[Any], ToolOutcome]
    intent: str = ""
    schema_notes: str = ""

    def descriptor(self) -> ToolDescriptor:
        return build_tool_descriptor(self.name, self.description, self.input_model)

    def run(self, arguments: Any) -> ToolOutcome:
        return self.handler(arguments)
