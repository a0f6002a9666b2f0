"""Points API: score an activity and manage points rules."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import get_current_user, get_points_engine, get_points_rule_repo
from app.application.dtos.identity import CurrentUser
from app.application.use_cases.automation import PointsRuleEngine
from app.core.limiter import limit_executions, limit_writes
from app.infrastructure.repositories import PointsRuleRepository
from app.schemas.points import (
    PointsRuleCreateRequest,
    PointsRuleResponse,
    PointsScoreRequest,
    PointsScoreResponse,
)

router = APIRouter()


@router.post("/score", response_model=PointsScoreResponse)
@limit_executions
async def score_activity(
    request: Request,
    body: PointsScoreRequest,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    engine: Annotated[PointsRuleEngine, Depends(get_points_engine)],
):
    """Apply matching points rules to an activity; awards the total when nonzero."""
    result = await engine.score(body.member_id, body.trigger, body.activity_data)
    return PointsScoreResponse.from_result(result)


@router.post("/rules", response_model=PointsRuleResponse, status_code=201)
@limit_writes
async def create_points_rule(
    request: Request,
    body: PointsRuleCreateRequest,
    _: Annotated[CurrentUser, Depends(get_current_user)],
    rule_repo: Annotated[PointsRuleRepository, Depends(get_points_rule_repo)],
):
    rule = await rule_repo.create(body.model_dump(mode="json"))
    return PointsRuleResponse.from_entity(rule)


@router.get("/rules", response_model=list[PointsRuleResponse])
async def list_points_rules(
    _: Annotated[CurrentUser, Depends(get_current_user)],
    rule_repo: Annotated[PointsRuleRepository, Depends(get_points_rule_repo)],
    limit: int = Query(100, ge=1, le=1000),
):
    return [PointsRuleResponse.from_entity(r) for r in await rule_repo.list_all(limit)]
