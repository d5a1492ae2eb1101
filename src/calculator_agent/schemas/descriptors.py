from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from calculator_agent.errors import SchemaConversionError
from calculator_agent.schemas.fields import (
    BooleanField,
    EnumField,
    FieldKind,
    ListField,
    NumberField,
    ObjectSchema,
    TextField,
    describe_model,
)
from calculator_agent.schemas.validation import validate


class PropertySchema(BaseModel):
    type: Literal["number", "string", "array", "boolean"]
    enum: list[str] | None = None
    description: str | None = None


class ParameterSchema(BaseModel):
    type: Literal["object"] = "object"
    properties: dict[str, PropertySchema] = Field(default_factory=dict)
    required: list[str] | None = None


class ToolDescriptor(BaseModel):
    """Declarative description of a callable tool as advertised to the model."""

    name: str = Field(min_length=1, pattern=r"^[A-Za-z0-9_]+$")
    description: str = Field(min_length=10)
    parameters: ParameterSchema

    def to_wire(self) -> dict[str, Any]:
        """Render the provider's function-tool shape. Absent fields are omitted."""
        return {"type": "function", "function": self.model_dump(exclude_none=True)}


def _property_for(name: str, kind: FieldKind) -> PropertySchema:
    if isinstance(kind, NumberField):
        return PropertySchema(type="number", description=kind.description)
    if isinstance(kind, EnumField):
        return PropertySchema(
            type="string", enum=list(kind.options), description=kind.description
        )
    if isinstance(kind, TextField):
        return PropertySchema(type="string", description=kind.description)
    if isinstance(kind, ListField):
        return PropertySchema(type="array", description=kind.description)
    if isinstance(kind, BooleanField):
        return PropertySchema(type="boolean", description=kind.description)
    raise SchemaConversionError(
        f"Field '{name}' has unknown kind {type(kind).__name__}"
    )


def to_descriptor(schema: ObjectSchema) -> ParameterSchema:
    """Convert an object schema into the provider's parameter shape.

    Only fields that were mapped into ``properties`` can be required; an
    unmappable kind aborts the conversion instead.
    """
    properties: dict[str, PropertySchema] = {}
    required: list[str] = []
    for name, kind in schema.fields.items():
        properties[name] = _property_for(name, kind)
        if not kind.optional:
            required.append(name)
    return ParameterSchema(properties=properties, required=required or None)


def build_tool_descriptor(
    name: str, description: str, input_model: type[BaseModel]
) -> ToolDescriptor:
    parameters = to_descriptor(describe_model(input_model))
    return validate(
        ToolDescriptor,
        {"name": name, "description": description, "parameters": parameters},
        context=f"tool descriptor '{name}'",
    )
