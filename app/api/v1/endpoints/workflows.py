"""Workflow API: thin routes delegating to the workflow repositories and WorkflowEngine."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import (
    get_current_user,
    get_workflow_engine,
    get_workflow_execution_repo,
    get_workflow_repo,
)
from app.application.dtos.identity import CurrentUser
from app.application.services.workflow_validation import validate_workflow
from app.application.use_cases.automation import WorkflowEngine
from app.core.config import get_settings
from app.core.limiter import limit_executions, limit_writes
from app.domain.enums import WorkflowStatus
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.repositories import WorkflowExecutionRepository, WorkflowRepository
from app.schemas.workflow import (
    WorkflowCreateRequest,
    WorkflowExecuteRequest,
    WorkflowExecutionResponse,
    WorkflowResponse,
    WorkflowRunResponse,
    WorkflowStep,
    WorkflowUpdate,
    WorkflowValidateRequest,
    WorkflowValidationResponse,
)

router = APIRouter()


def _steps_to_store(steps: list[WorkflowStep]) -> list[dict[str, Any]]:
    """Dump steps, pinning missing ids to their position so history stays stable."""
    dumped = []
    for i, step in enumerate(steps):
        data = step.model_dump(mode="json")
        data["id"] = data["id"] or f"step-{i + 1}"
        dumped.append(data)
    return dumped


@router.post("", response_model=WorkflowResponse, status_code=201)
@limit_writes
async def create_workflow(
    request: Request,
    body: WorkflowCreateRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    workflow_repo: Annotated[WorkflowRepository, Depends(get_workflow_repo)],
):
    """Create a workflow definition (draft unless status is given)."""
    workflow = await workflow_repo.create(
        {
            "name": body.name,
            "description": body.description,
            "status": body.status.value,
            "steps": _steps_to_store(body.steps),
        },
        created_by=user.uid,
    )
    return WorkflowResponse.from_entity(workflow)


@router.get("", response_model=list[WorkflowResponse])
async def list_workflows(
    _: Annotated[CurrentUser, Depends(get_current_user)],
    workflow_repo: Annotated[WorkflowRepository, Depends(get_workflow_repo)],
    status: WorkflowStatus | None = Query(None),
    limit: int = Query(100, ge=1, le=1000),
):
    """List workflows, optionally filtered by status."""
    workflows = await workflow_repo.list_all(status.value if status else None, limit)
    return [WorkflowResponse.from_entity(w) for w in workflows]


@router.post("/validate", response_model=WorkflowValidationResponse)
async def validate_definition(
    body: WorkflowValidateRequest,
    _: Annotated[CurrentUser, Depends(get_current_user)],
):
    """Validate a workflow definition without storing it."""
    report = validate_workflow(
        body.steps, delay_warning_ms=get_settings().workflow_delay_warning_ms
    )
    return WorkflowValidationResponse.from_report(report)


@router.get("/executions/{execution_id}", response_model=WorkflowExecutionResponse)
async def get_execution(
    execution_id: str,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    execution_repo: Annotated[
        WorkflowExecutionRepository, Depends(get_workflow_execution_repo)
    ],
):
    """Get workflow execution by id."""
    execution = await execution_repo.get_by_id(execution_id)
    if not execution:
        raise ResourceNotFoundException("workflow_execution", execution_id)
    return WorkflowExecutionResponse.from_result(execution)


@router.get("/{workflow_id}", response_model=WorkflowResponse)
async def get_workflow(
    workflow_id: str,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    workflow_repo: Annotated[WorkflowRepository, Depends(get_workflow_repo)],
):
    workflow = await workflow_repo.get_by_id(workflow_id)
    if not workflow:
        raise ResourceNotFoundException("workflow", workflow_id)
    return WorkflowResponse.from_entity(workflow)


@router.patch("/{workflow_id}", response_model=WorkflowResponse)
@limit_writes
async def update_workflow(
    request: Request,
    workflow_id: str,
    body: WorkflowUpdate,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    workflow_repo: Annotated[WorkflowRepository, Depends(get_workflow_repo)],
):
    """Update a workflow (partial). Status changes here activate or retire it."""
    data = body.model_dump(mode="json", exclude_unset=True)
    if body.steps is not None:
        data["steps"] = _steps_to_store(body.steps)
    workflow = await workflow_repo.update(workflow_id, data)
    if not workflow:
        raise ResourceNotFoundException("workflow", workflow_id)
    return WorkflowResponse.from_entity(workflow)


@router.get("/{workflow_id}/validation", response_model=WorkflowValidationResponse)
async def validate_stored_workflow(
    workflow_id: str,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    workflow_repo: Annotated[WorkflowRepository, Depends(get_workflow_repo)],
):
    """Validate a stored workflow definition."""
    workflow = await workflow_repo.get_by_id(workflow_id)
    if not workflow:
        raise ResourceNotFoundException("workflow", workflow_id)
    report = validate_workflow(
        workflow.steps, delay_warning_ms=get_settings().workflow_delay_warning_ms
    )
    return WorkflowValidationResponse.from_report(report)


@router.post("/{workflow_id}/execute", response_model=WorkflowRunResponse)
@limit_executions
async def execute_workflow(
    request: Request,
    workflow_id: str,
    body: WorkflowExecuteRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    workflow_repo: Annotated[WorkflowRepository, Depends(get_workflow_repo)],
    engine: Annotated[WorkflowEngine, Depends(get_workflow_engine)],
):
    """Run an active workflow once against input_data.

    404 unknown workflow, 412 not active, 500 when a step fails (the
    execution record holds the cause).
    """
    workflow = await workflow_repo.get_by_id(workflow_id)
    if not workflow:
        raise ResourceNotFoundException("workflow", workflow_id)
    result = await engine.run(workflow, body.input_data, started_by=user.uid)
    return WorkflowRunResponse(
        execution_id=result.execution_id, status=result.status, results=result.results
    )


@router.get("/{workflow_id}/executions", response_model=list[WorkflowExecutionResponse])
async def get_workflow_executions(
    workflow_id: str,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    workflow_repo: Annotated[WorkflowRepository, Depends(get_workflow_repo)],
    execution_repo: Annotated[
        WorkflowExecutionRepository, Depends(get_workflow_execution_repo)
    ],
    limit: int = Query(50, ge=1, le=500),
):
    """Get execution history for a workflow, newest first."""
    workflow = await workflow_repo.get_by_id(workflow_id)
    if not workflow:
        raise ResourceNotFoundException("workflow", workflow_id)
    executions = await execution_repo.list_for_workflow(workflow_id, limit)
    return [WorkflowExecutionResponse.from_result(e) for e in executions]
