"""Rule engine: reacts to document changes with user-defined automation rules.

One change event fans out over every enabled rule. Rules are isolated from
each other: an exception while evaluating, acting on, or recording one rule is
logged and never prevents the remaining rules from running. Nothing is
propagated to the write that produced the event.

Actions run before the firing is recorded, and the two are not transactional:
if the record write fails, the actions stay applied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.application.dtos.rule import ConditionResult, RuleEvaluationReport, RuleMatch
from app.application.interfaces.store import SERVER_TIMESTAMP
from app.application.services.condition_evaluator import combine, evaluate, resolve_field
from app.core.constants import COLLECTION_RULE_EXECUTIONS, RULE_ENGINE_IGNORED_COLLECTIONS
from app.shared.enums import ActionOutcome
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced

if TYPE_CHECKING:
    from app.application.dtos.change import ChangeEvent
    from app.application.interfaces.repositories import IRuleRepository
    from app.application.interfaces.services import IEventDeduplicator
    from app.application.interfaces.store import IDocumentStore
    from app.application.services.action_dispatcher import ActionDispatcher
    from app.domain.entities.rule import RuleEntity

logger = get_logger(__name__)


def match_rule(rule: RuleEntity, document: dict[str, Any]) -> RuleMatch:
    """Evaluate a rule's conditions against a document (no side effects)."""
    results = [
        ConditionResult(
            field=c.field,
            operator=c.operator,
            value=c.value,
            result=evaluate(c.operator, resolve_field(document, c.field), c.value),
        )
        for c in rule.conditions
    ]
    return RuleMatch(
        rule_id=rule.id,
        matched=combine((r.result for r in results), rule.logic_operator),
        conditions=results,
    )


def _action_type(action: Any) -> Any:
    return action.get("type") if isinstance(action, dict) else None


class RuleEngine:
    """Evaluates enabled automation rules for each document-change event."""

    def __init__(
        self,
        store: IDocumentStore,
        rule_repo: IRuleRepository,
        dispatcher: ActionDispatcher,
        *,
        deduplicator: IEventDeduplicator | None = None,
    ) -> None:
        self._store = store
        self._rule_repo = rule_repo
        self._dispatcher = dispatcher
        self._deduplicator = deduplicator

    async def _is_redelivery(self, event: ChangeEvent) -> bool:
        if self._deduplicator is None or not event.event_id:
            return False
        try:
            return not await self._deduplicator.claim(event.event_id)
        except Exception:
            logger.exception("Event dedup unavailable for %s; processing anyway", event.event_id)
            return False

    @traced("rules.on_document_change")
    async def on_document_change(self, event: ChangeEvent) -> RuleEvaluationReport:
        """Handle one change event. Never raises."""
        report = RuleEvaluationReport(collection=event.collection, document_id=event.document_id)
        if event.collection in RULE_ENGINE_IGNORED_COLLECTIONS:
            return RuleEvaluationReport(
                event.collection, event.document_id, skipped_reason="ignored_collection"
            )

        try:
            rules = await self._rule_repo.list_enabled()
        except Exception:
            logger.exception("Could not load automation rules for %s/%s", event.collection, event.document_id)
            return RuleEvaluationReport(
                event.collection, event.document_id, skipped_reason="rules_unavailable"
            )

        # Claim after the load: an event whose rules never loaded stays redeliverable.
        if await self._is_redelivery(event):
            logger.info("Skipping redelivered change event %s", event.event_id)
            return RuleEvaluationReport(
                event.collection, event.document_id, skipped_reason="duplicate_event"
            )

        for rule in rules:
            if not rule.applies_to(event.collection):
                continue
            try:
                if await self._fire(rule, event):
                    report.fired.append(rule.id)
            except Exception:
                logger.exception("Error executing rule %s", rule.id)
                report.failed.append(rule.id)

        add_span_attributes(
            rules_loaded=len(rules), rules_fired=len(report.fired), rules_failed=len(report.failed)
        )
        return report

    async def _fire(self, rule: RuleEntity, event: ChangeEvent) -> bool:
        """Run the rule's actions and record the firing when its conditions hold."""
        match = match_rule(rule, event.document)
        if not match.matched:
            return False

        context = {
            "collection": event.collection,
            "documentId": event.document_id,
            "document": event.document,
            "ruleId": rule.id,
        }
        executed: list[dict[str, Any]] = []
        for index, action in enumerate(rule.actions):
            entry: dict[str, Any] = {"index": index, "type": _action_type(action)}
            try:
                entry["result"] = await self._dispatcher.execute(action, context)
                entry["outcome"] = ActionOutcome.SUCCESS.value
            except Exception as exc:
                logger.warning(
                    "Rule %s action %d (%s) failed: %s", rule.id, index, entry["type"], exc
                )
                entry["outcome"] = ActionOutcome.FAILED.value
                entry["error"] = str(exc) or exc.__class__.__name__
            executed.append(entry)

        await self._store.create(
            COLLECTION_RULE_EXECUTIONS,
            {
                "rule_id": rule.id,
                "triggered_by": {"collection": event.collection, "document_id": event.document_id},
                "event_id": event.event_id,
                "conditions_evaluated": [c.to_dict() for c in match.conditions],
                "actions_executed": executed,
                "executed_at": SERVER_TIMESTAMP,
            },
        )
        return True
