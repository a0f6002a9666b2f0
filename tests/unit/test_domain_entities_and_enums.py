"""Tests for domain entities and enums."""

import math

from app.domain.entities import PointsRuleEntity, RuleEntity, StepSpec, WorkflowEntity
from app.domain.enums import StepType, WorkflowStatus
from app.shared.enums import WorkflowExecutionStatus


def test_step_from_dict_falls_back_to_position_id() -> None:
    step = StepSpec.from_dict({"type": "trigger", "config": "not-a-dict"}, 2)
    assert step.id == "step-3"
    assert step.config == {}
    assert step.is_known_type


def test_step_delay_reads_both_spellings() -> None:
    assert StepSpec("d", "delay", {"delayMs": 10}).configured_delay() == 10
    assert StepSpec("d", "delay", {"delay_ms": 20}).configured_delay() == 20
    assert StepSpec("d", "delay").configured_delay() is None


def test_only_active_workflows_are_runnable() -> None:
    for status in WorkflowStatus.values():
        workflow = WorkflowEntity(id="w", name="w", description=None, status=status, steps=[])
        assert workflow.is_runnable() is (status == "active")


def test_rule_scope() -> None:
    def rule(trigger):
        return RuleEntity(id="r", name="r", enabled=True, trigger=trigger, conditions=[])

    assert rule(None).applies_to("members")
    assert rule("*").applies_to("members")
    assert rule("members").applies_to("members")
    assert not rule("dues").applies_to("members")


def test_effective_points_guards_bad_factors() -> None:
    def points(**kw):
        base = {"id": "p", "name": "p", "enabled": True, "trigger": "t", "conditions": []}
        return PointsRuleEntity(**base, **kw).effective_points()

    assert points(point_value=10, multiplier=2, weight=1.5) == 30
    assert points(point_value=None) == 0
    assert points(point_value=math.nan) == 0
    assert points(point_value=True) == 0
    assert points(point_value=math.inf, multiplier=1, weight=1) == 0


def test_enum_values() -> None:
    assert StepType.values() == ["trigger", "condition", "action", "delay"]
    assert WorkflowExecutionStatus.COMPLETED.is_terminal
    assert not WorkflowExecutionStatus.RUNNING.is_terminal
