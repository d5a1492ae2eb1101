from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class ValidationIssue:
    """A single constraint violation.

    Attributes:
        path: Dotted location of the offending field ("" for the root value).
        reason: Human-readable description of the violated constraint.
    """

    path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.path or '<root>'}: {self.reason}"


class AgentError(Exception):
    """Base class for every error raised by the calculator agent."""


class ValidationError(AgentError):
    def __init__(self, message: str, issues: Sequence[ValidationIssue] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.issues: list[ValidationIssue] = list(issues)

    def __str__(self) -> str:
        if not self.issues:
            return self.message
        details = "; ".join(str(issue) for issue in self.issues)
        return f"{self.message} ({details})"


class ConfigurationError(ValidationError):
    """Required configuration is missing or invalid. Fatal at startup."""


class SchemaConversionError(AgentError):
    """A model field cannot be expressed as a tool parameter."""


class TranscriptError(AgentError):
    """A message would break the pairing rules of the transcript."""


class DivisionByZeroError(AgentError):
    pass


class ProviderError(AgentError):
    """Network, HTTP or remote failure while talking to the model provider."""


class ProviderTimeoutError(ProviderError):
    pass
