"""Points rule domain entity (activity-driven point awards)."""

import math
from dataclasses import dataclass
from typing import Any

from app.domain.entities.rule import ConditionSpec


def _factor(value: Any) -> float:
    """Coerce one scoring factor; missing, non-numeric or NaN counts as 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and math.isnan(value):
        return 0
    return value


@dataclass
class PointsRuleEntity:
    """Domain entity for a points rule.

    Effective points are ``point_value * multiplier * weight``. Factors are kept
    as stored so that a malformed rule scores 0 instead of failing to load.
    Negative and fractional results are passed through unmodified.
    """

    id: str
    name: str
    enabled: bool
    trigger: str
    conditions: list[ConditionSpec]
    point_value: Any
    multiplier: Any = 1
    weight: Any = 1

    def effective_points(self) -> float:
        points = _factor(self.point_value) * _factor(self.multiplier) * _factor(self.weight)
        if isinstance(points, float) and (math.isnan(points) or math.isinf(points)):
            return 0
        return points
