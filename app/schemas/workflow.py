"""Workflow API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.application.dtos.workflow import (
    ValidationIssue,
    WorkflowExecutionResult,
    WorkflowValidationReport,
)
from app.application.services.workflow_validation import validate_workflow
from app.domain.entities.workflow import WorkflowEntity
from app.domain.enums import StepType, WorkflowStatus

# Validation errors that make a definition unusable at its step; structural
# findings (no trigger, action before trigger) are reported by /validate only.
_WRITE_BLOCKING_CODES = frozenset(
    {
        "DUPLICATE_STEP_ID",
        "INVALID_CONDITION",
        "UNKNOWN_OPERATOR",
        "UNKNOWN_ACTION_TYPE",
        "INVALID_ACTION_CONFIG",
        "INVALID_DELAY",
        "NEGATIVE_DELAY",
    }
)


class WorkflowStep(BaseModel):
    """Single workflow step; config keys depend on type."""

    id: str | None = Field(default=None, min_length=1, max_length=128)
    type: StepType
    config: dict[str, Any] = Field(default_factory=dict)


def _check_steps(steps: list[WorkflowStep]) -> None:
    report = validate_workflow([s.model_dump(mode="json") for s in steps])
    blocking = [e for e in report.errors if e.code in _WRITE_BLOCKING_CODES]
    if blocking:
        raise ValueError(
            "; ".join(f"{e.step_id}: {e.message}" if e.step_id else e.message for e in blocking)
        )


class WorkflowCreateRequest(BaseModel):
    """Request body for creating a workflow."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status: WorkflowStatus = WorkflowStatus.DRAFT
    steps: list[WorkflowStep] = Field(..., min_length=1)

    @model_validator(mode="after")
    def _validate_steps(self) -> "WorkflowCreateRequest":
        _check_steps(self.steps)
        return self


class WorkflowUpdate(BaseModel):
    """Request body for updating a workflow (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: WorkflowStatus | None = None
    steps: list[WorkflowStep] | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _validate_steps(self) -> "WorkflowUpdate":
        if self.steps is not None:
            _check_steps(self.steps)
        return self


class WorkflowValidateRequest(BaseModel):
    """Ad-hoc definition to validate; steps are checked loosely on purpose."""

    steps: list[dict[str, Any]] = Field(default_factory=list)


class WorkflowResponse(BaseModel):
    """Workflow response."""

    id: str
    name: str
    description: str | None
    status: str
    steps: list[dict[str, Any]]
    created_by: str | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_entity(cls, workflow: WorkflowEntity) -> "WorkflowResponse":
        return cls(
            id=workflow.id,
            name=workflow.name,
            description=workflow.description,
            status=workflow.status,
            steps=[s.to_dict() for s in workflow.steps],
            created_by=workflow.created_by,
            created_at=workflow.created_at,
            updated_at=workflow.updated_at,
        )


class WorkflowExecuteRequest(BaseModel):
    """Request body for invoking a workflow."""

    model_config = ConfigDict(populate_by_name=True)

    input_data: dict[str, Any] = Field(default_factory=dict, alias="inputData")


class WorkflowRunResponse(BaseModel):
    """Result of a completed workflow invocation."""

    execution_id: str
    status: str
    results: list[dict[str, Any]]


class WorkflowExecutionResponse(BaseModel):
    """Workflow execution response."""

    model_config = ConfigDict(from_attributes=True)

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

    @classmethod
    def from_result(cls, execution: WorkflowExecutionResult) -> "WorkflowExecutionResponse":
        return cls.model_validate(execution)


class ValidationIssueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    code: str
    message: str
    step_id: str | None


class WorkflowValidationResponse(BaseModel):
    """Validation report: errors make the definition invalid, warnings are advisory."""

    is_valid: bool
    errors: list[ValidationIssueResponse]
    warnings: list[ValidationIssueResponse]

    @classmethod
    def from_report(cls, report: WorkflowValidationReport) -> "WorkflowValidationResponse":
        def issues(items: list[ValidationIssue]) -> list[ValidationIssueResponse]:
            return [ValidationIssueResponse.model_validate(i) for i in items]

        return cls(
            is_valid=report.is_valid,
            errors=issues(report.errors),
            warnings=issues(report.warnings),
        )
