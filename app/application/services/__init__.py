"""Application services: condition evaluation, action dispatch, workflow validation."""

from app.application.services.action_dispatcher import ActionDispatcher
from app.application.services.condition_evaluator import (
    combine,
    evaluate,
    evaluate_condition,
    resolve_field,
    to_text,
)
from app.application.services.workflow_validation import validate_workflow

__all__ = [
    "ActionDispatcher",
    "combine",
    "evaluate",
    "evaluate_condition",
    "resolve_field",
    "to_text",
    "validate_workflow",
]
