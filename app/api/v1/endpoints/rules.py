"""Automation rule API: CRUD, firing history and dry-run."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import get_current_user, get_rule_repo
from app.application.dtos.identity import CurrentUser
from app.application.use_cases.automation import match_rule
from app.core.limiter import limit_writes
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.repositories import RuleRepository
from app.schemas.rule import (
    RuleCreateRequest,
    RuleResponse,
    RuleTestRequest,
    RuleTestResponse,
    RuleUpdate,
)

router = APIRouter()


@router.post("", response_model=RuleResponse, status_code=201)
@limit_writes
async def create_rule(
    request: Request,
    body: RuleCreateRequest,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    rule_repo: Annotated[RuleRepository, Depends(get_rule_repo)],
):
    """Create an automation rule; actions are validated up front."""
    rule = await rule_repo.create(body.model_dump(mode="json"))
    return RuleResponse.from_entity(rule)


@router.get("", response_model=list[RuleResponse])
async def list_rules(
    _: Annotated[CurrentUser, Depends(get_current_user)],
    rule_repo: Annotated[RuleRepository, Depends(get_rule_repo)],
    limit: int = Query(100, ge=1, le=1000),
):
    return [RuleResponse.from_entity(r) for r in await rule_repo.list_all(limit)]


@router.get("/{rule_id}", response_model=RuleResponse)
async def get_rule(
    rule_id: str,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    rule_repo: Annotated[RuleRepository, Depends(get_rule_repo)],
):
    rule = await rule_repo.get_by_id(rule_id)
    if not rule:
        raise ResourceNotFoundException("rule", rule_id)
    return RuleResponse.from_entity(rule)


@router.patch("/{rule_id}", response_model=RuleResponse)
@limit_writes
async def update_rule(
    request: Request,
    rule_id: str,
    body: RuleUpdate,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    rule_repo: Annotated[RuleRepository, Depends(get_rule_repo)],
):
    """Update a rule (partial). Disable with enabled=false."""
    rule = await rule_repo.update(rule_id, body.model_dump(mode="json", exclude_unset=True))
    if not rule:
        raise ResourceNotFoundException("rule", rule_id)
    return RuleResponse.from_entity(rule)


@router.delete("/{rule_id}", status_code=204)
@limit_writes
async def delete_rule(
    request: Request,
    rule_id: str,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    rule_repo: Annotated[RuleRepository, Depends(get_rule_repo)],
):
    if not await rule_repo.delete(rule_id):
        raise ResourceNotFoundException("rule", rule_id)
    return Response(status_code=204)


@router.get("/{rule_id}/executions", response_model=list[dict[str, Any]])
async def get_rule_executions(
    rule_id: str,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    rule_repo: Annotated[RuleRepository, Depends(get_rule_repo)],
    limit: int = Query(50, ge=1, le=500),
):
    """Firing records of a rule, newest first."""
    if not await rule_repo.get_by_id(rule_id):
        raise ResourceNotFoundException("rule", rule_id)
    return await rule_repo.list_executions(rule_id, limit)


@router.post("/{rule_id}/test", response_model=RuleTestResponse)
async def test_rule(
    rule_id: str,
    body: RuleTestRequest,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    rule_repo: Annotated[RuleRepository, Depends(get_rule_repo)],
):
    """Evaluate a rule's conditions against a sample document. Runs no actions."""
    rule = await rule_repo.get_by_id(rule_id)
    if not rule:
        raise ResourceNotFoundException("rule", rule_id)
    return RuleTestResponse.from_match(match_rule(rule, body.document), rule.logic_operator)
