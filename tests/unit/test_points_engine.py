"""Tests for PointsRuleEngine scoring and aggregated awards."""

from unittest.mock import AsyncMock

import pytest

from app.application.services.action_dispatcher import ActionDispatcher
from app.application.use_cases.automation import PointsRuleEngine
from app.core.constants import COLLECTION_POINTS, COLLECTION_POINTS_RULES
from app.domain.entities.points_rule import PointsRuleEntity
from app.infrastructure.memory import InMemoryDocumentStore
from app.infrastructure.repositories import PointsRuleRepository


async def _add_points_rule(store: InMemoryDocumentStore, rule_id: str, **fields) -> None:
    data = {
        "name": rule_id,
        "enabled": True,
        "trigger": "event_attended",
        "conditions": [],
        "point_value": 0,
        "multiplier": 1,
        "weight": 1,
        **fields,
    }
    await store.create(COLLECTION_POINTS_RULES, data, document_id=rule_id)


@pytest.fixture
def engine(store: InMemoryDocumentStore, dispatcher: ActionDispatcher) -> PointsRuleEngine:
    return PointsRuleEngine(PointsRuleRepository(store), dispatcher)


async def test_weighted_points_are_summed_into_one_award(
    engine: PointsRuleEngine, store: InMemoryDocumentStore
) -> None:
    await _add_points_rule(store, "base", point_value=10, multiplier=2, weight=1)
    await _add_points_rule(store, "bonus", point_value=5, multiplier=1, weight=3)

    result = await engine.score("m1", "event_attended", {"event_id": "e1"})

    assert result.total_points == 35
    assert len(result.applied_rules) == 2
    [award] = store.dump(COLLECTION_POINTS).values()
    assert award["points"] == 35
    assert award["member_id"] == "m1"
    assert award["reason"] == "Activity: event_attended"
    assert award["source"] == "rules"
    assert {r["rule_id"] for r in award["applied_rules"]} == {"base", "bonus"}
    assert award["activity_data"] == {"event_id": "e1"}


async def test_conditions_are_and_combined(engine: PointsRuleEngine, store: InMemoryDocumentStore) -> None:
    await _add_points_rule(
        store,
        "organizer",
        point_value=20,
        conditions=[
            {"field": "role", "operator": "equals", "value": "organizer"},
            {"field": "hours", "operator": "greater_than", "value": 2},
        ],
    )
    result = await engine.score("m1", "event_attended", {"role": "organizer", "hours": 1})
    assert result.total_points == 0
    assert result.applied_rules == []


async def test_zero_total_emits_no_award(engine: PointsRuleEngine, store: InMemoryDocumentStore) -> None:
    await _add_points_rule(store, "nothing", point_value=0)
    result = await engine.score("m1", "event_attended")
    assert result.total_points == 0
    assert len(result.applied_rules) == 1
    assert store.dump(COLLECTION_POINTS) == {}


async def test_other_triggers_and_disabled_rules_do_not_apply(
    engine: PointsRuleEngine, store: InMemoryDocumentStore
) -> None:
    await _add_points_rule(store, "other", trigger="dues_paid", point_value=10)
    await _add_points_rule(store, "off", enabled=False, point_value=10)
    result = await engine.score("m1", "event_attended")
    assert result.total_points == 0


async def test_negative_and_fractional_points_pass_through(
    engine: PointsRuleEngine, store: InMemoryDocumentStore
) -> None:
    await _add_points_rule(store, "penalty", point_value=-4, multiplier=0.5, weight=1)
    result = await engine.score("m1", "event_attended")
    assert result.total_points == -2
    [award] = store.dump(COLLECTION_POINTS).values()
    assert award["points"] == -2


async def test_malformed_factor_counts_as_zero(engine: PointsRuleEngine, store: InMemoryDocumentStore) -> None:
    await _add_points_rule(store, "broken", point_value="ten")
    await _add_points_rule(store, "ok", point_value=3)
    result = await engine.score("m1", "event_attended")
    assert result.total_points == 3


async def test_rule_that_raises_is_skipped(dispatcher: ActionDispatcher) -> None:
    class _Exploding(PointsRuleEntity):
        def effective_points(self) -> float:
            raise ArithmeticError("boom")

    repo = AsyncMock()
    repo.list_enabled_for_trigger.return_value = [
        _Exploding(id="x", name="x", enabled=True, trigger="t", conditions=[], point_value=1),
        PointsRuleEntity(id="y", name="y", enabled=True, trigger="t", conditions=[], point_value=4),
    ]
    result = await PointsRuleEngine(repo, dispatcher).score("m1", "t")
    assert result.total_points == 4
    assert [r.rule_id for r in result.applied_rules] == ["y"]
