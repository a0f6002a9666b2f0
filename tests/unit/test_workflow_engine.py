"""Tests for WorkflowEngine: ordering, context merge, failure propagation, records."""

import pytest

from app.application.services.action_dispatcher import ActionDispatcher
from app.application.use_cases.automation import WorkflowEngine
from app.core.constants import COLLECTION_WORKFLOW_EXECUTIONS
from app.domain.entities.workflow import StepSpec, WorkflowEntity
from app.domain.exceptions import WorkflowExecutionFailedException, WorkflowNotActiveException
from app.infrastructure.memory import InMemoryDocumentStore


class _RecordingSleep:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def _workflow(steps: list[dict], status: str = "active") -> WorkflowEntity:
    return WorkflowEntity(
        id="wf-1",
        name="Onboarding",
        description=None,
        status=status,
        steps=[StepSpec.from_dict(s, i) for i, s in enumerate(steps)],
    )


@pytest.fixture
def sleep() -> _RecordingSleep:
    return _RecordingSleep()


@pytest.fixture
def engine(store: InMemoryDocumentStore, dispatcher: ActionDispatcher, sleep: _RecordingSleep) -> WorkflowEngine:
    return WorkflowEngine(store, dispatcher, sleep=sleep)


async def test_inactive_workflow_is_rejected_without_record(
    engine: WorkflowEngine, store: InMemoryDocumentStore
) -> None:
    with pytest.raises(WorkflowNotActiveException):
        await engine.run(_workflow([{"id": "t", "type": "trigger"}], status="draft"))
    assert store.dump(COLLECTION_WORKFLOW_EXECUTIONS) == {}


async def test_successful_run_records_one_result_per_step_in_order(
    engine: WorkflowEngine, store: InMemoryDocumentStore
) -> None:
    workflow = _workflow(
        [
            {"id": "start", "type": "trigger"},
            {"id": "check", "type": "condition", "config": {"field": "amount", "operator": "greater_than", "value": 100}},
            {"id": "log", "type": "action", "config": {"type": "create_record", "collection": "audit", "data": {"kind": "big"}}},
            {"id": "wait", "type": "delay", "config": {"delayMs": 0}},
        ]
    )
    result = await engine.run(workflow, {"amount": 150}, started_by="member-1")

    assert result.status == "completed"
    assert [r["step_id"] for r in result.results] == ["start", "check", "log", "wait"]
    assert result.results[1]["output"] == {"condition_met": True}
    assert result.results[3]["output"] == {"delayed": 0}
    record = store.dump(COLLECTION_WORKFLOW_EXECUTIONS)[result.execution_id]
    assert record["status"] == "completed"
    assert record["started_by"] == "member-1"
    assert record["input_data"] == {"amount": 150}
    assert [s["status"] for s in record["steps"]] == ["completed"] * 4
    assert record["completed_at"] is not None
    assert len(record["results"]) == 4


async def test_false_condition_does_not_stop_later_steps(engine: WorkflowEngine) -> None:
    workflow = _workflow(
        [
            {"id": "check", "type": "condition", "config": {"field": "amount", "operator": "greater_than", "value": 100}},
            {"id": "after", "type": "trigger"},
        ]
    )
    result = await engine.run(workflow, {"amount": 5})
    assert result.results[0]["output"] == {"condition_met": False}
    assert result.results[1]["status"] == "completed"


async def test_step_outputs_are_merged_into_context(engine: WorkflowEngine) -> None:
    workflow = _workflow(
        [
            {"id": "create", "type": "action", "config": {"type": "create_record", "collection": "tasks", "data": {}}},
            {"id": "check", "type": "condition", "config": {"field": "record_created", "operator": "equals", "value": True}},
        ]
    )
    result = await engine.run(workflow)
    assert result.results[1]["output"] == {"condition_met": True}


async def test_failing_step_aborts_and_records_cause(
    engine: WorkflowEngine, store: InMemoryDocumentStore
) -> None:
    workflow = _workflow(
        [
            {"id": "start", "type": "trigger"},
            {"id": "broken", "type": "action", "config": {"type": "update_field", "collection": "members", "field": "x"}},
            {"id": "never", "type": "action", "config": {"type": "create_record", "collection": "tasks", "data": {}}},
        ]
    )
    with pytest.raises(WorkflowExecutionFailedException) as exc_info:
        await engine.run(workflow)

    assert exc_info.value.message == "Workflow execution failed"
    execution_id = exc_info.value.details["execution_id"]
    record = store.dump(COLLECTION_WORKFLOW_EXECUTIONS)[execution_id]
    assert record["status"] == "failed"
    assert record["error"] == "invalid configuration"
    assert [s["status"] for s in record["steps"]] == ["completed", "failed", "pending"]
    assert store.dump("tasks") == {}


async def test_unknown_step_type_fails_the_run(engine: WorkflowEngine, store: InMemoryDocumentStore) -> None:
    with pytest.raises(WorkflowExecutionFailedException) as exc_info:
        await engine.run(_workflow([{"id": "x", "type": "branch"}]))
    record = store.dump(COLLECTION_WORKFLOW_EXECUTIONS)[exc_info.value.details["execution_id"]]
    assert record["steps"][0]["status"] == "failed"


async def test_delay_defaults_to_one_second(engine: WorkflowEngine, sleep: _RecordingSleep) -> None:
    result = await engine.run(_workflow([{"id": "wait", "type": "delay"}]))
    assert result.results[0]["output"] == {"delayed": 1000}
    assert sleep.calls == [1.0]


async def test_negative_delay_fails_the_step(engine: WorkflowEngine, sleep: _RecordingSleep) -> None:
    with pytest.raises(WorkflowExecutionFailedException):
        await engine.run(_workflow([{"id": "wait", "type": "delay", "config": {"delayMs": -5}}]))
    assert sleep.calls == []


async def test_each_run_creates_a_new_execution(engine: WorkflowEngine, store: InMemoryDocumentStore) -> None:
    workflow = _workflow([{"id": "start", "type": "trigger"}])
    first = await engine.run(workflow, {"a": 1})
    second = await engine.run(workflow, {"a": 1})
    assert first.execution_id != second.execution_id
    assert len(store.dump(COLLECTION_WORKFLOW_EXECUTIONS)) == 2
