"""Store-backed workflow definition and execution repositories."""

from __future__ import annotations

from typing import Any

from app.application.dtos.store import QueryFilter
from app.application.dtos.workflow import WorkflowExecutionResult
from app.application.interfaces.store import SERVER_TIMESTAMP, IDocumentStore
from app.core.constants import COLLECTION_WORKFLOW_EXECUTIONS, COLLECTION_WORKFLOWS
from app.domain.entities.workflow import WorkflowEntity
from app.domain.exceptions import DocumentNotFoundError
from app.infrastructure.repositories._mapping import to_execution, to_workflow


class WorkflowRepository:
    """Workflow definitions in the 'workflows' collection (implements IWorkflowRepository)."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def get_by_id(self, workflow_id: str) -> WorkflowEntity | None:
        doc = await self._store.get(COLLECTION_WORKFLOWS, workflow_id)
        return to_workflow(doc) if doc else None

    async def list_all(self, status: str | None = None, limit: int = 100) -> list[WorkflowEntity]:
        filters = [QueryFilter("status", "==", status)] if status else None
        docs = await self._store.query(COLLECTION_WORKFLOWS, filters, limit=limit)
        return [to_workflow(d) for d in docs]

    async def create(self, data: dict[str, Any], created_by: str | None) -> WorkflowEntity:
        workflow_id = await self._store.create(
            COLLECTION_WORKFLOWS,
            {
                **data,
                "created_by": created_by,
                "created_at": SERVER_TIMESTAMP,
                "updated_at": SERVER_TIMESTAMP,
            },
        )
        created = await self.get_by_id(workflow_id)
        if created is None:
            raise DocumentNotFoundError(COLLECTION_WORKFLOWS, workflow_id)
        return created

    async def update(self, workflow_id: str, data: dict[str, Any]) -> WorkflowEntity | None:
        try:
            await self._store.update(
                COLLECTION_WORKFLOWS, workflow_id, {**data, "updated_at": SERVER_TIMESTAMP}
            )
        except DocumentNotFoundError:
            return None
        return await self.get_by_id(workflow_id)


class WorkflowExecutionRepository:
    """Read side of 'workflow_executions' (implements IWorkflowExecutionRepository)."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def get_by_id(self, execution_id: str) -> WorkflowExecutionResult | None:
        doc = await self._store.get(COLLECTION_WORKFLOW_EXECUTIONS, execution_id)
        return to_execution(doc) if doc else None

    async def list_for_workflow(
        self, workflow_id: str, limit: int = 50
    ) -> list[WorkflowExecutionResult]:
        docs = await self._store.query(
            COLLECTION_WORKFLOW_EXECUTIONS,
            [QueryFilter("workflow_id", "==", workflow_id)],
            order_by="started_at",
            descending=True,
            limit=limit,
        )
        return [to_execution(d) for d in docs]
