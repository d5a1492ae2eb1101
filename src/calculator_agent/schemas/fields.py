"""Explicit field-kind description of a tool's input model.

Tool parameters are limited to a closed set of kinds. ``describe_model`` maps a
pydantic model onto that set and refuses anything it cannot express, so the
descriptor converter never has to guess.
"""

from __future__ import annotations

import types
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel

from calculator_agent.errors import SchemaConversionError


@dataclass(frozen=True)
class NumberField:
    description: str | None = None
    optional: bool = False


@dataclass(frozen=True)
class TextField:
    description: str | None = None
    optional: bool = False


@dataclass(frozen=True)
class EnumField:
    options: tuple[str, ...] = ()
    description: str | None = None
    optional: bool = False


@dataclass(frozen=True)
class ListField:
    description: str | None = None
    optional: bool = False


@dataclass(frozen=True)
class BooleanField:
    description: str | None = None
    optional: bool = False


FieldKind = Union[NumberField, TextField, EnumField, ListField, BooleanField]


@dataclass(frozen=True)
class ObjectSchema:
    """Ordered mapping of parameter name to field kind."""

    title: str
    fields: dict[str, FieldKind] = field(default_factory=dict)


def describe_model(model: type[BaseModel]) -> ObjectSchema:
    fields: dict[str, FieldKind] = {}
    for name, info in model.model_fields.items():
        annotation, nullable = _unwrap_optional(info.annotation)
        optional = nullable or not info.is_required()
        fields[name] = _field_kind(name, annotation, info.description, optional)
    return ObjectSchema(title=model.__name__, fields=fields)


def _unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    if get_origin(annotation) in (Union, types.UnionType):
        args = get_args(annotation)
        remaining = [arg for arg in args if arg is not type(None)]
        if len(remaining) == 1 and len(remaining) < len(args):
            return remaining[0], True
    return annotation, False


def _field_kind(
    name: str, annotation: Any, description: str | None, optional: bool
) -> FieldKind:
    origin = get_origin(annotation)

    # bool is a subclass of int, so it has to be checked first.
    if annotation is bool:
        return BooleanField(description=description, optional=optional)
    if annotation in (int, float):
        return NumberField(description=description, optional=optional)
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        options = tuple(member.value for member in annotation)
        # Wire enums are strings; an IntEnum would be advertised with the wrong type.
        if options and all(isinstance(value, str) for value in options):
            return EnumField(options=options, description=description, optional=optional)
        raise SchemaConversionError(
            f"Field '{name}' uses enum {annotation.__name__}, "
            "whose values are not all strings"
        )
    if annotation is str:
        return TextField(description=description, optional=optional)
    if origin is Literal:
        values = get_args(annotation)
        if values and all(isinstance(value, str) for value in values):
            return EnumField(options=values, description=description, optional=optional)
    if annotation in (list, tuple, set) or origin in (list, tuple, set):
        return ListField(description=description, optional=optional)

    raise SchemaConversionError(
        f"Field '{name}' has unsupported type {annotation!r} for a tool parameter"
    )
