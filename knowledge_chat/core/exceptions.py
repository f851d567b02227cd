"""
Exception hierarchy for the knowledge chat pipeline.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class KnowledgeChatException(Exception):
    """Base exception for all knowledge chat errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(KnowledgeChatException):
    """Raised when request input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(KnowledgeChatException):
    """Raised when settings fail validation at load time."""

    pass


class ExternalServiceError(KnowledgeChatException):
    """Base exception for embedding and generation collaborator failures."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize external service error.

        Args:
            message: Error message
            provider: Name of the failing provider or model
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class EmbeddingError(ExternalServiceError):
    """Raised when embedding generation fails."""

    pass


class GenerationError(ExternalServiceError):
    """Raised when chat completion fails."""

    pass


class QuotaExhaustedError(ExternalServiceError):
    """Raised when the usage budget for an external call is spent."""

    def __init__(self, resource: str, limit: int) -> None:
        """
        Initialize quota exhausted error.

        Args:
            resource: Budgeted resource ("embed" or "chat")
            limit: Configured call limit
        """
        self.resource = resource
        self.limit = limit
        super().__init__(
            f"Usage quota exhausted for {resource} calls",
            details={"resource": resource, "limit": limit},
        )


class StoreError(KnowledgeChatException):
    """Raised when knowledge store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            operation: Operation that failed (query, insert)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
