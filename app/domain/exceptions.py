"""Domain exceptions for the orgcore application.

Defines domain-level exceptions that represent business rule violations
and engine failures. These exceptions are independent of infrastructure
concerns. Presentation layer maps them to HTTP responses in exception
handlers.
"""

from typing import Any


class OrgException(Exception):
    """Base exception for all orgcore application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(OrgException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(OrgException):
    """Raised when authentication fails (e.g. invalid or missing token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(OrgException):
    """Raised when the caller lacks the role required for the operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'notification').
            action: Optional action that was attempted (e.g. 'bulk_send').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(OrgException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DocumentNotFoundError(OrgException):
    """Raised by a document store when updating a document that does not exist."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(
            f"Document not found: {collection}/{document_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": collection, "resource_id": document_id},
        )


class WorkflowNotActiveException(OrgException):
    """Raised when invoking a workflow whose status is not 'active'. No execution is recorded."""

    def __init__(self, workflow_id: str, status: str | None) -> None:
        super().__init__(
            "Workflow is not active",
            "FAILED_PRECONDITION",
            {"workflow_id": workflow_id, "status": status},
        )


class UnknownStepTypeException(OrgException):
    """Raised when a workflow step has a type outside trigger/condition/action/delay."""

    def __init__(self, step_type: Any) -> None:
        super().__init__(
            f"Unknown step type: {step_type}",
            "UNKNOWN_STEP_TYPE",
            {"step_type": step_type},
        )


class ActionException(OrgException):
    """Base class for failures of a single action dispatch."""

    def __init__(
        self,
        message: str,
        error_code: str = "ACTION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, error_code, details)


class ActionConfigurationException(ActionException):
    """Raised when an action descriptor lacks required keys or has malformed values."""

    def __init__(self, action_type: str | None, errors: list[Any] | None = None) -> None:
        super().__init__(
            "invalid configuration",
            "INVALID_ACTION_CONFIGURATION",
            {"action_type": action_type, "errors": errors or []},
        )


class UnknownActionTypeException(ActionException):
    """Raised when an action descriptor names a type outside the catalog."""

    def __init__(self, action_type: Any) -> None:
        super().__init__(
            f"Unknown action type: {action_type}",
            "UNKNOWN_ACTION_TYPE",
            {"action_type": action_type},
        )


class WorkflowExecutionFailedException(OrgException):
    """Raised to the invoker when a workflow step failed.

    The message is generic; the underlying cause is kept on
    ``cause`` for logging and is persisted on the execution record only.
    """

    def __init__(self, execution_id: str, cause: BaseException | None = None) -> None:
        super().__init__(
            "Workflow execution failed",
            "INTERNAL",
            {"execution_id": execution_id},
        )
        self.cause = cause
