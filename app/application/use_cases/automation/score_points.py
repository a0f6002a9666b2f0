"""Points-rule engine: scores one member activity against the points rules.

Every enabled rule for the trigger whose conditions all hold contributes
``point_value * multiplier * weight``. Contributions are summed and awarded
through a single award_points action carrying the applied rules as provenance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.application.dtos.points import AppliedPointsRule, PointsScoreResult
from app.application.services.condition_evaluator import combine, evaluate_condition
from app.domain.enums import ActionType, LogicOperator
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IPointsRuleRepository
    from app.application.services.action_dispatcher import ActionDispatcher

logger = get_logger(__name__)

POINTS_SOURCE = "rules"


class PointsRuleEngine:
    """Computes weighted point awards from matching points rules."""

    def __init__(
        self, rule_repo: IPointsRuleRepository, dispatcher: ActionDispatcher
    ) -> None:
        self._rule_repo = rule_repo
        self._dispatcher = dispatcher

    @traced("points.score")
    async def score(
        self,
        member_id: str,
        trigger: str,
        activity_data: dict[str, Any] | None = None,
    ) -> PointsScoreResult:
        """Score an activity and award the total when it is nonzero.

        A rule that raises while being evaluated is logged and skipped. A
        failing award propagates to the caller.
        """
        data = activity_data or {}
        applied: list[AppliedPointsRule] = []
        total: float = 0
        for rule in await self._rule_repo.list_enabled_for_trigger(trigger):
            try:
                matched = combine(
                    (evaluate_condition(c, data) for c in rule.conditions),
                    LogicOperator.AND.value,
                )
                if not matched:
                    continue
                points = rule.effective_points()
            except Exception:
                logger.exception("Error evaluating points rule %s", rule.id)
                continue
            total += points
            applied.append(
                AppliedPointsRule(
                    rule_id=rule.id,
                    rule_name=rule.name,
                    points=points,
                    base_points=rule.point_value,
                    multiplier=rule.multiplier,
                    weight=rule.weight,
                )
            )

        if total != 0:
            await self._dispatcher.execute(
                {
                    "type": ActionType.AWARD_POINTS.value,
                    "member_id": member_id,
                    "points": total,
                    "reason": f"Activity: {trigger}",
                    "source": POINTS_SOURCE,
                    "applied_rules": [a.to_dict() for a in applied],
                    "activity_data": data,
                }
            )
        add_span_attributes(points_total=float(total), points_rules_applied=len(applied))
        return PointsScoreResult(total_points=total, applied_rules=applied)
