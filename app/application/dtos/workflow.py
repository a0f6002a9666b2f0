"""DTOs for workflow execution and validation."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class WorkflowRunResult:
    """What the invoker receives for a completed run."""

    execution_id: str
    status: str
    results: list[dict[str, Any]]


@dataclass(frozen=True)
class WorkflowExecutionResult:
    """Workflow execution read-model (one persisted invocation)."""

    id: str
    workflow_id: str
    status: str
    input_data: dict[str, Any]
    steps: list[dict[str, Any]]
    results: list[dict[str, Any]] | None
    error: str | None
    started_by: str | None
    started_at: datetime | None
    completed_at: datetime | None


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str
    step_id: str | None = None


@dataclass(frozen=True)
class WorkflowValidationReport:
    """Result of validating a workflow definition before it is activated."""

    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
