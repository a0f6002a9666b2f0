"""Repositories backed by the document store port (work with any adapter)."""

from app.infrastructure.repositories.member_repo import MemberRepository
from app.infrastructure.repositories.rule_repo import PointsRuleRepository, RuleRepository
from app.infrastructure.repositories.workflow_repo import (
    WorkflowExecutionRepository,
    WorkflowRepository,
)

__all__ = [
    "MemberRepository",
    "PointsRuleRepository",
    "RuleRepository",
    "WorkflowExecutionRepository",
    "WorkflowRepository",
]
