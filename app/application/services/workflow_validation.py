"""Static validation of workflow definitions.

Catches malformed steps before a workflow is activated instead of mid-run.
Errors make a definition invalid; warnings are advisory.
"""

from __future__ import annotations

from typing import Any

from app.application.dtos.workflow import ValidationIssue, WorkflowValidationReport
from app.domain.entities.workflow import StepSpec
from app.domain.enums import ConditionOperator, StepType
from app.domain.exceptions import ActionConfigurationException, UnknownActionTypeException
from app.domain.value_objects.actions import parse_action_spec

DEFAULT_DELAY_WARNING_MS = 60_000


def _check_condition(step: StepSpec, errors: list[ValidationIssue]) -> None:
    field = step.config.get("field")
    if not isinstance(field, str) or not field:
        errors.append(
            ValidationIssue("INVALID_CONDITION", "Condition step requires a 'field'", step.id)
        )
    operator = step.config.get("operator")
    if operator not in ConditionOperator.values():
        errors.append(
            ValidationIssue(
                "UNKNOWN_OPERATOR",
                f"Unknown condition operator: {operator!r}",
                step.id,
            )
        )


def _check_action(step: StepSpec, errors: list[ValidationIssue]) -> None:
    try:
        parse_action_spec(step.config)
    except UnknownActionTypeException as exc:
        errors.append(ValidationIssue("UNKNOWN_ACTION_TYPE", exc.message, step.id))
    except ActionConfigurationException as exc:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) for err in exc.details.get("errors", [])
        )
        message = "Invalid action configuration" + (f": {fields}" if fields else "")
        errors.append(ValidationIssue("INVALID_ACTION_CONFIG", message, step.id))


def _check_delay(
    step: StepSpec,
    errors: list[ValidationIssue],
    warnings: list[ValidationIssue],
    warning_ms: int,
) -> None:
    delay = step.configured_delay()
    if delay is None:
        return
    if isinstance(delay, bool) or not isinstance(delay, (int, float)):
        errors.append(ValidationIssue("INVALID_DELAY", "Delay must be a number of milliseconds", step.id))
    elif delay < 0:
        errors.append(ValidationIssue("NEGATIVE_DELAY", "Delay cannot be negative", step.id))
    elif delay > warning_ms:
        warnings.append(
            ValidationIssue(
                "LONG_DELAY",
                f"Delay of {delay}ms blocks the invocation for over {warning_ms}ms",
                step.id,
            )
        )


def validate_workflow(
    steps: list[StepSpec] | list[dict[str, Any]],
    *,
    delay_warning_ms: int = DEFAULT_DELAY_WARNING_MS,
) -> WorkflowValidationReport:
    """Validate an ordered list of steps (entities or raw mappings)."""
    specs = [
        s if isinstance(s, StepSpec) else StepSpec.from_dict(s, i)
        for i, s in enumerate(steps)
    ]
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []

    if not specs:
        errors.append(ValidationIssue("NO_STEPS", "Workflow has no steps"))
        return WorkflowValidationReport(errors=errors, warnings=warnings)

    seen: set[str] = set()
    seen_trigger = False
    for step in specs:
        if step.id in seen:
            errors.append(ValidationIssue("DUPLICATE_STEP_ID", f"Duplicate step id: {step.id}", step.id))
        seen.add(step.id)

        if step.type == StepType.TRIGGER.value:
            seen_trigger = True
        elif step.type == StepType.CONDITION.value:
            _check_condition(step, errors)
        elif step.type == StepType.ACTION.value:
            if not seen_trigger:
                warnings.append(
                    ValidationIssue("ACTION_BEFORE_TRIGGER", "Action step runs before any trigger step", step.id)
                )
            _check_action(step, errors)
        elif step.type == StepType.DELAY.value:
            _check_delay(step, errors, warnings, delay_warning_ms)
        else:
            errors.append(
                ValidationIssue("UNKNOWN_STEP_TYPE", f"Unknown step type: {step.type!r}", step.id)
            )

    if not seen_trigger:
        errors.append(ValidationIssue("NO_TRIGGER", "Workflow has no trigger step"))
    return WorkflowValidationReport(errors=errors, warnings=warnings)
