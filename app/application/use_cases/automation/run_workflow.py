"""Workflow engine: runs one workflow invocation step by step.

Steps execute strictly in definition order. Each step's output mapping is
shallow-merged into the running context, so later steps see earlier outputs.
The first failing step aborts the run; the execution record keeps the real
cause while the invoker only sees a generic failure.

The execution record is written twice: once with every step pending when the
run starts, and once with the terminal status.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from app.application.dtos.workflow import WorkflowRunResult
from app.application.interfaces.store import SERVER_TIMESTAMP
from app.application.services.condition_evaluator import evaluate_condition
from app.core.constants import COLLECTION_WORKFLOW_EXECUTIONS
from app.domain.entities.rule import ConditionSpec
from app.domain.enums import StepType
from app.domain.exceptions import (
    UnknownStepTypeException,
    ValidationException,
    WorkflowExecutionFailedException,
    WorkflowNotActiveException,
)
from app.shared.enums import StepStatus, WorkflowExecutionStatus
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import isoformat_ms, utc_now

if TYPE_CHECKING:
    from app.application.interfaces.store import IDocumentStore
    from app.application.services.action_dispatcher import ActionDispatcher
    from app.domain.entities.workflow import StepSpec, WorkflowEntity

logger = get_logger(__name__)

DEFAULT_DELAY_MS = 1000


def _pending(step: StepSpec) -> dict[str, Any]:
    return {
        **step.to_dict(),
        "status": StepStatus.PENDING.value,
        "output": None,
        "error": None,
    }


class WorkflowEngine:
    """Executes workflow definitions and records each invocation."""

    def __init__(
        self,
        store: IDocumentStore,
        dispatcher: ActionDispatcher,
        *,
        default_delay_ms: int = DEFAULT_DELAY_MS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._store = store
        self._dispatcher = dispatcher
        self._default_delay_ms = default_delay_ms
        self._sleep = sleep

    @traced("workflow.run")
    async def run(
        self,
        workflow: WorkflowEntity,
        input_data: dict[str, Any] | None = None,
        *,
        started_by: str | None = None,
    ) -> WorkflowRunResult:
        """Run every step of workflow against input_data.

        Raises:
            WorkflowNotActiveException: workflow status is not active (nothing recorded).
            WorkflowExecutionFailedException: a step failed; the record is marked failed.
        """
        if not workflow.is_runnable():
            raise WorkflowNotActiveException(workflow.id, workflow.status)

        context: dict[str, Any] = dict(input_data or {})
        snapshot = [_pending(step) for step in workflow.steps]
        execution_id = await self._store.create(
            COLLECTION_WORKFLOW_EXECUTIONS,
            {
                "workflow_id": workflow.id,
                "status": WorkflowExecutionStatus.RUNNING.value,
                "input_data": dict(context),
                "steps": snapshot,
                "started_at": SERVER_TIMESTAMP,
                "started_by": started_by,
            },
        )
        add_span_attributes(workflow_id=workflow.id, execution_id=execution_id)

        results: list[dict[str, Any]] = []
        for index, step in enumerate(workflow.steps):
            try:
                output = await self._run_step(step, context)
            except Exception as exc:
                error = str(exc) or exc.__class__.__name__
                results.append(
                    {"step_id": step.id, "type": step.type, "status": StepStatus.FAILED.value, "error": error}
                )
                snapshot[index] = {**snapshot[index], "status": StepStatus.FAILED.value, "error": error}
                logger.exception(
                    "Workflow %s execution %s failed at step %s", workflow.id, execution_id, step.id
                )
                await self._finish(
                    execution_id,
                    WorkflowExecutionStatus.FAILED,
                    {"error": error, "results": results, "steps": snapshot},
                )
                raise WorkflowExecutionFailedException(execution_id, exc) from exc

            results.append(
                {"step_id": step.id, "type": step.type, "status": StepStatus.COMPLETED.value, "output": output}
            )
            snapshot[index] = {**snapshot[index], "status": StepStatus.COMPLETED.value, "output": output}
            context = {**context, **output}

        if not await self._finish(
            execution_id,
            WorkflowExecutionStatus.COMPLETED,
            {"results": results, "steps": snapshot},
        ):
            raise WorkflowExecutionFailedException(execution_id)
        logger.info("Workflow %s execution %s completed (%d steps)", workflow.id, execution_id, len(results))
        return WorkflowRunResult(
            execution_id=execution_id,
            status=WorkflowExecutionStatus.COMPLETED.value,
            results=results,
        )

    async def _finish(
        self,
        execution_id: str,
        status: WorkflowExecutionStatus,
        fields: dict[str, Any],
    ) -> bool:
        """Write the terminal update; a failed write is logged, not raised."""
        try:
            await self._store.update(
                COLLECTION_WORKFLOW_EXECUTIONS,
                execution_id,
                {**fields, "status": status.value, "completed_at": SERVER_TIMESTAMP},
            )
        except Exception:
            logger.exception("Could not record %s status for execution %s", status.value, execution_id)
            return False
        return True

    async def _run_step(self, step: StepSpec, context: dict[str, Any]) -> dict[str, Any]:
        if step.type == StepType.TRIGGER.value:
            return {"triggered": True, "timestamp": isoformat_ms(utc_now())}
        if step.type == StepType.CONDITION.value:
            condition = ConditionSpec.from_dict(step.config)
            return {"condition_met": evaluate_condition(condition, context)}
        if step.type == StepType.ACTION.value:
            return await self._dispatcher.execute(step.config, context)
        if step.type == StepType.DELAY.value:
            delay_ms = self._delay_ms(step)
            await self._sleep(delay_ms / 1000)
            return {"delayed": delay_ms}
        raise UnknownStepTypeException(step.type)

    def _delay_ms(self, step: StepSpec) -> int | float:
        delay = step.configured_delay()
        if delay is None:
            return self._default_delay_ms
        if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
            raise ValidationException("delayMs must be a non-negative number", field="delayMs")
        return delay
