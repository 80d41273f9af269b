"""Errors raised while analyzing a recording's chat.

Three kinds of failure reach callers: the chat log or window configuration
is malformed, a recording or analysis does not exist, or a collaborator
(the chat log source or the analysis store) failed. Each carries an
ErrorContext that the API layer renders as error details.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ErrorContext:
    """What the error is about, in a JSON-friendly shape."""

    entity_type: Optional[str] = None
    entity_id: Optional[Any] = None
    field_name: Optional[str] = None
    invalid_value: Optional[Any] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Non-empty fields only, with extra merged in."""
        result = {
            key: value
            for key, value in (
                ("entity_type", self.entity_type),
                ("entity_id", self.entity_id),
                ("field_name", self.field_name),
                ("invalid_value", self.invalid_value),
            )
            if value is not None
        }
        result.update(self.extra)
        return result


class DomainException(Exception):
    """Base exception for analysis errors."""

    def __init__(self, message: str, *, context: ErrorContext):
        """Initialize with a readable message and structured context.

        Args:
            message: Human-readable error message
            context: What the error refers to
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        parts = [self.message]
        if self.context.field_name:
            parts.append(f"Field: {self.context.field_name}")
        if self.context.invalid_value is not None:
            parts.append(f"Invalid value: {self.context.invalid_value!r}")
        return " - ".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"context={self.context!r})"
        )


class InvalidInputError(DomainException):
    """Raised when a chat log or window configuration is malformed.

    Analysis fails fast on these; no partial result is produced.
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        invalid_value: Optional[Any] = None,
        recording_id: Optional[str] = None,
    ):
        """Initialize with the offending field and value."""
        context = ErrorContext(
            entity_type="ChatLog",
            entity_id=recording_id,
            field_name=field_name,
            invalid_value=invalid_value,
        )

        super().__init__(message, context=context)


class EntityNotFoundError(DomainException):
    """Raised when an entity cannot be found.

    This is used when collaborator lookups come back empty.
    """

    def __init__(self, entity_type: str, entity_id: Any, message: Optional[str] = None):
        """Initialize with entity information."""
        message = message or f"{entity_type} with ID {entity_id!r} not found"

        context = ErrorContext(entity_type=entity_type, entity_id=entity_id)

        super().__init__(message, context=context)


class RecordingNotFoundError(EntityNotFoundError):
    """Raised when the content source has no chat log or metadata for a recording."""

    def __init__(self, recording_id: str, resource: str = "Recording"):
        """Initialize with the missing recording id."""
        super().__init__(
            resource,
            recording_id,
            message=f"{resource} for recording {recording_id!r} not found",
        )
        self.recording_id = recording_id


class UpstreamUnavailableError(DomainException):
    """Raised when the content source or the analysis store fails.

    Surfaced to the caller unmodified; nothing in the analysis path retries.
    """

    def __init__(self, collaborator: str, operation: str, reason: str):
        """Initialize with the failing collaborator and operation."""
        message = f"{collaborator} unavailable during '{operation}': {reason}"

        context = ErrorContext(
            entity_type=collaborator,
            extra={"operation": operation, "reason": reason},
        )

        super().__init__(message, context=context)
        self.collaborator = collaborator
        self.operation = operation
