"""DTOs for automation rule evaluation."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ConditionResult:
    """One condition as evaluated against a document."""

    field: str
    operator: str
    value: Any
    result: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "operator": self.operator,
            "value": self.value,
            "result": self.result,
        }


@dataclass(frozen=True)
class RuleMatch:
    """Combined condition outcome for one rule (also the dry-run result)."""

    rule_id: str
    matched: bool
    conditions: list[ConditionResult]


@dataclass(frozen=True)
class RuleEvaluationReport:
    """Outcome of handling one change event.

    fired: rules whose conditions held and whose firing was processed.
    failed: rules that raised while being evaluated, acted on, or recorded.
    """

    collection: str
    document_id: str
    fired: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped_reason: str | None = None
