"""Automation use cases: workflow runs, reactive rules, and points scoring."""

from app.application.use_cases.automation.evaluate_rules import RuleEngine, match_rule
from app.application.use_cases.automation.run_workflow import WorkflowEngine
from app.application.use_cases.automation.score_points import PointsRuleEngine

__all__ = ["PointsRuleEngine", "RuleEngine", "WorkflowEngine", "match_rule"]
