from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from calculator_agent.errors import ValidationError, ValidationIssue

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def issues_from_pydantic(error: PydanticValidationError) -> list[ValidationIssue]:
    """Flatten pydantic error details into (path, reason) issues."""
    issues: list[ValidationIssue] = []
    for detail in error.errors():
        path = ".".join(str(part) for part in detail.get("loc", ()))
        issues.append(ValidationIssue(path=path, reason=detail.get("msg", "invalid")))
    return issues


def validate(schema: type[ModelT], value: Any, context: str | None = None) -> ModelT:
    """Validate ``value`` against ``schema`` and return the narrowed instance.

    Args:
        schema: The pydantic model describing the accepted shape.
        value: Untyped data (usually a dict decoded from JSON) or a model instance.
        context: Optional label included in the error message and log entry.

    Returns:
        An instance of ``schema``.

    Raises:
        ValidationError: When any field constraint fails. The offending data and
            the issue list are also logged at ERROR level.
    """
    try:
        return schema.model_validate(value)
    except PydanticValidationError as exc:
        message = f"Validation failed in {context}" if context else "Validation failed"
        issues = issues_from_pydantic(exc)
        logger.error(
            "%s: %s",
            message,
            "; ".join(str(issue) for issue in issues),
            extra={
                "issues": [{"path": i.path, "reason": i.reason} for i in issues],
                "received_data": _loggable(value),
            },
        )
        raise ValidationError(message, issues) from exc


def _loggable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value
