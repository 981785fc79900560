"""Custom exceptions for the Agent Story toolkit.

This module defines the hierarchy of exceptions used throughout the toolkit.
All exceptions inherit from AgentStoryError, enabling catch-all exception
handling while still allowing specific exception types.

Validation problems are never raised by the validators themselves. They are
reported as data on a ValidationResult. The exceptions below cover the cases
where a caller asks for something that cannot proceed, such as exporting a
story that failed structural validation.

Exception Hierarchy:
    AgentStoryError (base)
    ├── ConfigurationError: Invalid configuration or settings
    ├── StoryValidationError: A candidate failed structural validation
    ├── ExportError: Harness export failures
    │   ├── AdapterNotFoundError: Requested adapter is not registered
    │   └── IncompatibleStoryError: Story cannot be exported by an adapter
    ├── OrganizationError: Organization/HAP helper failures
    └── CollaboratorError: An external collaborator failed
        └── LLMServiceError: The language model service failed

Features:
    - Error codes for programmatic handling
    - Context information included in each exception type
    - Structured logging support via to_log_dict method
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from agentstory.validation.result import ValidationResult


class AgentStoryError(Exception):
    """Base exception for all Agent Story toolkit errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        context: Additional context information about the error
        recoverable: Whether the error is potentially recoverable
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "AGENTSTORY_ERROR"
        self.context = context or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_log_dict(self) -> dict[str, Any]:
        """Return structured dict for logging.

        Returns:
            Dictionary with error details suitable for structured logging
        """
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.code,
            "message": self.message,
            "recoverable": self.recoverable,
            "context": self.context,
        }


class ConfigurationError(AgentStoryError):
    """Raised when configuration is invalid or missing.

    Attributes:
        config_key: The configuration key that caused the error
        validation_details: Details about why validation failed
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        validation_details: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {}) or {}
        if config_key:
            context["config_key"] = config_key
        if validation_details:
            context["validation_details"] = validation_details
        super().__init__(message, code="CONFIG_ERROR", context=context, **kwargs)
        self.config_key = config_key
        self.validation_details = validation_details


class StoryValidationError(AgentStoryError):
    """Raised when an operation requires a structurally valid candidate.

    The validators report problems as data. This exception is used by
    callers further down the line (export, API handlers) that cannot
    continue with an invalid story.

    Attributes:
        result: The ValidationResult describing the failure
        error_count: Number of structural errors
    """

    def __init__(
        self,
        message: str,
        result: Optional["ValidationResult"] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {}) or {}
        error_count = len(result.errors) if result is not None else 0
        context["error_count"] = error_count
        if result is not None and result.errors:
            context["paths"] = result.get_failed_paths()
        super().__init__(
            message,
            code="STORY_VALIDATION_ERROR",
            context=context,
            recoverable=True,
            **kwargs,
        )
        self.result = result
        self.error_count = error_count


class ExportError(AgentStoryError):
    """Base exception for harness export failures.

    Attributes:
        adapter_id: Identifier of the adapter involved, if any
    """

    def __init__(self, message: str, adapter_id: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.pop("context", {}) or {}
        if adapter_id:
            context["adapter_id"] = adapter_id
        code = kwargs.pop("code", None) or "EXPORT_ERROR"
        super().__init__(message, code=code, context=context, **kwargs)
        self.adapter_id = adapter_id


class AdapterNotFoundError(ExportError):
    """Raised when a requested harness adapter is not registered.

    Attributes:
        available_adapters: Adapter IDs that are registered
    """

    def __init__(
        self,
        message: str,
        adapter_id: Optional[str] = None,
        available_adapters: Optional[list[str]] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {}) or {}
        if available_adapters is not None:
            context["available_adapters"] = available_adapters
        super().__init__(
            message,
            adapter_id=adapter_id,
            code="ADAPTER_NOT_FOUND",
            context=context,
            **kwargs,
        )
        self.available_adapters = available_adapters or []


class IncompatibleStoryError(ExportError):
    """Raised when a story cannot be exported by a specific adapter.

    Attributes:
        missing_features: Features the adapter needs that the story lacks
    """

    def __init__(
        self,
        message: str,
        adapter_id: Optional[str] = None,
        missing_features: Optional[list[str]] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {}) or {}
        if missing_features:
            context["missing_features"] = missing_features
        super().__init__(
            message,
            adapter_id=adapter_id,
            code="INCOMPATIBLE_STORY",
            context=context,
            **kwargs,
        )
        self.missing_features = missing_features or []


class OrganizationError(AgentStoryError):
    """Raised when an organization or HAP helper cannot proceed.

    Attributes:
        entity: The kind of record involved (domain, role, hap, ...)
    """

    def __init__(self, message: str, entity: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.pop("context", {}) or {}
        if entity:
            context["entity"] = entity
        super().__init__(message, code="ORGANIZATION_ERROR", context=context, **kwargs)
        self.entity = entity


class CollaboratorError(AgentStoryError):
    """Raised when an external collaborator (LLM, storage, VCS) fails.

    The core never catches these. They propagate to the caller unchanged.

    Attributes:
        service: Name of the collaborator that failed
    """

    def __init__(self, message: str, service: Optional[str] = None, **kwargs: Any) -> None:
        context = kwargs.pop("context", {}) or {}
        if service:
            context["service"] = service
        code = kwargs.pop("code", None) or "COLLABORATOR_ERROR"
        kwargs.setdefault("recoverable", True)
        super().__init__(message, code=code, context=context, **kwargs)
        self.service = service


class LLMServiceError(CollaboratorError):
    """Raised when the language model service fails or returns garbage.

    Attributes:
        status_code: HTTP status returned by the service, if any
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = "llm",
        status_code: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {}) or {}
        if status_code is not None:
            context["status_code"] = status_code
        super().__init__(
            message,
            service=service,
            code="LLM_SERVICE_ERROR",
            context=context,
            **kwargs,
        )
        self.status_code = status_code


__all__ = [
    "AgentStoryError",
    "ConfigurationError",
    "StoryValidationError",
    "ExportError",
    "AdapterNotFoundError",
    "IncompatibleStoryError",
    "OrganizationError",
    "CollaboratorError",
    "LLMServiceError",
]
