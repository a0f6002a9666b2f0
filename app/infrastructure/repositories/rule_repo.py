"""Store-backed automation rule and points rule repositories."""

from __future__ import annotations

from typing import Any

from app.application.dtos.store import QueryFilter
from app.application.interfaces.store import SERVER_TIMESTAMP, IDocumentStore
from app.core.constants import (
    COLLECTION_AUTOMATION_RULES,
    COLLECTION_POINTS_RULES,
    COLLECTION_RULE_EXECUTIONS,
)
from app.domain.entities.points_rule import PointsRuleEntity
from app.domain.entities.rule import RuleEntity
from app.domain.exceptions import DocumentNotFoundError
from app.infrastructure.repositories._mapping import to_points_rule, to_rule


class RuleRepository:
    """Automation rules and their firing log (implements IRuleRepository)."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def list_enabled(self) -> list[RuleEntity]:
        docs = await self._store.query(
            COLLECTION_AUTOMATION_RULES, [QueryFilter("enabled", "==", True)]
        )
        return [to_rule(d) for d in docs]

    async def list_all(self, limit: int = 100) -> list[RuleEntity]:
        docs = await self._store.query(COLLECTION_AUTOMATION_RULES, limit=limit)
        return [to_rule(d) for d in docs]

    async def get_by_id(self, rule_id: str) -> RuleEntity | None:
        doc = await self._store.get(COLLECTION_AUTOMATION_RULES, rule_id)
        return to_rule(doc) if doc else None

    async def create(self, data: dict[str, Any]) -> RuleEntity:
        rule_id = await self._store.create(
            COLLECTION_AUTOMATION_RULES,
            {**data, "created_at": SERVER_TIMESTAMP, "updated_at": SERVER_TIMESTAMP},
        )
        created = await self.get_by_id(rule_id)
        if created is None:
            raise DocumentNotFoundError(COLLECTION_AUTOMATION_RULES, rule_id)
        return created

    async def update(self, rule_id: str, data: dict[str, Any]) -> RuleEntity | None:
        try:
            await self._store.update(
                COLLECTION_AUTOMATION_RULES, rule_id, {**data, "updated_at": SERVER_TIMESTAMP}
            )
        except DocumentNotFoundError:
            return None
        return await self.get_by_id(rule_id)

    async def delete(self, rule_id: str) -> bool:
        if await self._store.get(COLLECTION_AUTOMATION_RULES, rule_id) is None:
            return False
        await self._store.delete(COLLECTION_AUTOMATION_RULES, rule_id)
        return True

    async def list_executions(self, rule_id: str, limit: int = 50) -> list[dict[str, Any]]:
        docs = await self._store.query(
            COLLECTION_RULE_EXECUTIONS,
            [QueryFilter("rule_id", "==", rule_id)],
            order_by="executed_at",
            descending=True,
            limit=limit,
        )
        return [{"id": d.id, **d.data} for d in docs]


class PointsRuleRepository:
    """Points rules (implements IPointsRuleRepository)."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def list_enabled_for_trigger(self, trigger: str) -> list[PointsRuleEntity]:
        docs = await self._store.query(
            COLLECTION_POINTS_RULES,
            [QueryFilter("enabled", "==", True), QueryFilter("trigger", "==", trigger)],
        )
        return [to_points_rule(d) for d in docs]

    async def list_all(self, limit: int = 100) -> list[PointsRuleEntity]:
        docs = await self._store.query(COLLECTION_POINTS_RULES, limit=limit)
        return [to_points_rule(d) for d in docs]

    async def create(self, data: dict[str, Any]) -> PointsRuleEntity:
        rule_id = await self._store.create(
            COLLECTION_POINTS_RULES,
            {**data, "created_at": SERVER_TIMESTAMP, "updated_at": SERVER_TIMESTAMP},
        )
        doc = await self._store.get(COLLECTION_POINTS_RULES, rule_id)
        if doc is None:
            raise DocumentNotFoundError(COLLECTION_POINTS_RULES, rule_id)
        return to_points_rule(doc)
