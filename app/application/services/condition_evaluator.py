"""Condition evaluation shared by the workflow, rule and points engines.

Pure and synchronous: no I/O, deterministic, and never raises. Any operand
pairing an operator cannot handle evaluates to False, as does an unknown
operator.

Semantics:
    equals / not_equals: strict, type-sensitive equality (no coercion).
        int and float compare numerically; bool only equals bool.
    greater_than / less_than: defined for two numbers, two strings, or two
        datetimes; any other pairing is False.
    contains: substring test on the canonical text of both operands.
"""

from __future__ import annotations

import json
import logging
import operator as op
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.domain.enums import ConditionOperator, LogicOperator
from app.shared.utils.datetime import isoformat_ms

if TYPE_CHECKING:
    from app.domain.entities.rule import ConditionSpec

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _strict_equals(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    if _is_number(left) and _is_number(right):
        return left == right
    if type(left) is not type(right):
        return False
    return bool(left == right)


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def check(left: Any, right: Any) -> bool:
        comparable = (
            (_is_number(left) and _is_number(right))
            or (isinstance(left, str) and isinstance(right, str))
            or (isinstance(left, datetime) and isinstance(right, datetime))
        )
        return comparable and bool(compare(left, right))

    return check


def to_text(value: Any) -> str:
    """Canonical text of a value, as used by the contains operator."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, datetime):
        return isoformat_ms(value)
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True, default=str)
    return str(value)


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    ConditionOperator.EQUALS.value: _strict_equals,
    ConditionOperator.NOT_EQUALS.value: lambda a, b: not _strict_equals(a, b),
    ConditionOperator.GREATER_THAN.value: _ordered(op.gt),
    ConditionOperator.LESS_THAN.value: _ordered(op.lt),
    ConditionOperator.CONTAINS.value: lambda a, b: to_text(b) in to_text(a),
}


def evaluate(operator: Any, field_value: Any, comparison_value: Any) -> bool:
    """Return the boolean outcome of ``field_value <operator> comparison_value``."""
    check = _OPERATORS.get(operator) if isinstance(operator, str) else None
    if check is None:
        return False
    try:
        return check(field_value, comparison_value)
    except Exception:
        logger.debug("Condition %r degraded to False", operator, exc_info=True)
        return False


def resolve_field(document: Any, field: str) -> Any:
    """Return document[field]; a dotted path walks nested mappings. Missing is None."""
    if not isinstance(document, dict) or not field:
        return None
    if field in document:
        return document[field]
    current: Any = document
    for part in field.split("."):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


def evaluate_condition(condition: ConditionSpec, document: Any) -> bool:
    """Evaluate one condition against a document (or workflow context)."""
    return evaluate(
        condition.operator, resolve_field(document, condition.field), condition.value
    )


def combine(results: Iterable[bool], logic_operator: Any) -> bool:
    """Combine per-condition results: AND = all, OR = any, empty = True.

    Any other logic operator yields False for a non-empty result set.
    """
    results = list(results)
    if not results:
        return True
    if logic_operator == LogicOperator.AND.value:
        return all(results)
    if logic_operator == LogicOperator.OR.value:
        return any(results)
    return False
