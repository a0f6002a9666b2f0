"""Stored-document to entity mapping shared by the store-backed repositories.

Documents may have been written by other clients using camelCase keys; both
spellings are read, snake_case wins.
"""

from __future__ import annotations

from typing import Any

from app.application.dtos.store import StoredDocument
from app.application.dtos.workflow import WorkflowExecutionResult
from app.domain.entities.points_rule import PointsRuleEntity
from app.domain.entities.rule import ConditionSpec, RuleEntity
from app.domain.entities.workflow import StepSpec, WorkflowEntity
from app.shared.utils.datetime import coerce_datetime


def _pick(data: dict[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    if snake in data:
        return data[snake]
    return data.get(camel, default)


def _conditions(raw: Any) -> list[ConditionSpec]:
    if not isinstance(raw, list):
        return []
    return [ConditionSpec.from_dict(c) for c in raw if isinstance(c, dict)]


def to_workflow(doc: StoredDocument) -> WorkflowEntity:
    d = doc.data
    raw_steps = _pick(d, "steps", "nodes", [])
    steps = [
        StepSpec.from_dict(s, i)
        for i, s in enumerate(raw_steps if isinstance(raw_steps, list) else [])
        if isinstance(s, dict)
    ]
    return WorkflowEntity(
        id=doc.id,
        name=d.get("name", ""),
        description=d.get("description"),
        status=d.get("status", ""),
        steps=steps,
        created_by=_pick(d, "created_by", "createdBy"),
        created_at=coerce_datetime(_pick(d, "created_at", "createdAt")),
        updated_at=coerce_datetime(_pick(d, "updated_at", "updatedAt")),
    )


def to_execution(doc: StoredDocument) -> WorkflowExecutionResult:
    d = doc.data
    return WorkflowExecutionResult(
        id=doc.id,
        workflow_id=_pick(d, "workflow_id", "workflowId", ""),
        status=d.get("status", ""),
        input_data=_pick(d, "input_data", "inputData", {}) or {},
        steps=_pick(d, "steps", "nodes", []) or [],
        results=d.get("results"),
        error=d.get("error"),
        started_by=_pick(d, "started_by", "startedBy"),
        started_at=coerce_datetime(_pick(d, "started_at", "startedAt")),
        completed_at=coerce_datetime(_pick(d, "completed_at", "completedAt")),
    )


def to_rule(doc: StoredDocument) -> RuleEntity:
    d = doc.data
    actions = d.get("actions")
    return RuleEntity(
        id=doc.id,
        name=d.get("name", ""),
        description=d.get("description"),
        enabled=d.get("enabled") is True,
        trigger=d.get("trigger"),
        conditions=_conditions(d.get("conditions")),
        logic_operator=_pick(d, "logic_operator", "logicOperator"),
        actions=list(actions) if isinstance(actions, list) else [],
    )


def to_points_rule(doc: StoredDocument) -> PointsRuleEntity:
    d = doc.data
    return PointsRuleEntity(
        id=doc.id,
        name=d.get("name", ""),
        enabled=d.get("enabled") is True,
        trigger=d.get("trigger", ""),
        conditions=_conditions(d.get("conditions")),
        point_value=_pick(d, "point_value", "pointValue"),
        multiplier=d.get("multiplier"),
        weight=d.get("weight"),
    )
