from calculator_agent.schemas.descriptors import (
    ParameterSchema,
    PropertySchema,
    ToolDescriptor,
    build_tool_descriptor,
    to_descriptor,
)
from calculator_agent.schemas.fields import ObjectSchema, describe_model
from calculator_agent.schemas.messages import (
    ConversationMessage,
    ToolCallRequest,
    Transcript,
)
from calculator_agent.schemas.validation import validate

__all__ = [
    "ConversationMessage",
    "ObjectSchema",
    "ParameterSchema",
    "PropertySchema",
    "ToolCallRequest",
    "ToolDescriptor",
    "Transcript",
    "build_tool_descriptor",
    "describe_model",
    "to_descriptor",
    "validate",
]
