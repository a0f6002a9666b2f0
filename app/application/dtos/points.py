"""DTOs for points scoring."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class AppliedPointsRule:
    """Provenance of one matching points rule."""

    rule_id: str
    rule_name: str
    points: float
    base_points: Any
    multiplier: Any
    weight: Any

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PointsScoreResult:
    total_points: float
    applied_rules: list[AppliedPointsRule] = field(default_factory=list)
