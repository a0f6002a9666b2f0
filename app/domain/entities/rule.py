"""Automation rule domain entity.

A rule reacts to document changes: when its scope matches the changed
collection and its conditions hold on the document, its actions run in order.
"""

from dataclasses import dataclass, field
from typing import Any

from app.domain.enums import LogicOperator

# Trigger values that mean "every collection".
_WILDCARD_TRIGGERS = frozenset({"", "*"})


@dataclass(frozen=True)
class ConditionSpec:
    """A single field/operator/value comparison. Evaluated fresh each time."""

    field: str
    operator: str
    value: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConditionSpec":
        return cls(
            field=str(data.get("field") or ""),
            operator=str(data.get("operator") or ""),
            value=data.get("value"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "operator": self.operator, "value": self.value}


@dataclass
class RuleEntity:
    """Domain entity for a reactive automation rule."""

    id: str
    name: str
    enabled: bool
    trigger: str | None
    conditions: list[ConditionSpec]
    logic_operator: str | None = LogicOperator.AND.value
    actions: list[dict[str, Any]] = field(default_factory=list)
    description: str | None = None

    def applies_to(self, collection: str) -> bool:
        """Return whether this rule's trigger scope covers the collection."""
        if self.trigger is None or self.trigger in _WILDCARD_TRIGGERS:
            return True
        return self.trigger == collection
