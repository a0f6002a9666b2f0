"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.workflow import WorkflowExecutionResult
    from app.domain.entities.points_rule import PointsRuleEntity
    from app.domain.entities.rule import RuleEntity
    from app.domain.entities.workflow import WorkflowEntity


# Workflow definition repository
class IWorkflowRepository(Protocol):
    """Protocol for workflow definitions."""

    async def get_by_id(self, workflow_id: str) -> WorkflowEntity | None:
        """Return workflow by ID."""

    async def list_all(self, status: str | None = None, limit: int = 100) -> list[WorkflowEntity]:
        """Return workflows, optionally filtered by status."""

    async def create(self, data: dict[str, Any], created_by: str | None) -> WorkflowEntity:
        """Persist a new workflow definition."""

    async def update(self, workflow_id: str, data: dict[str, Any]) -> WorkflowEntity | None:
        """Apply a partial update; return None when the workflow does not exist."""


# Workflow execution history (read side; the engine writes records itself)
class IWorkflowExecutionRepository(Protocol):
    """Protocol for reading persisted workflow executions."""

    async def get_by_id(self, execution_id: str) -> WorkflowExecutionResult | None:
        """Return one execution."""

    async def list_for_workflow(
        self, workflow_id: str, limit: int = 50
    ) -> list[WorkflowExecutionResult]:
        """Return executions of a workflow, newest first."""


# Automation rule repository
class IRuleRepository(Protocol):
    """Protocol for reactive automation rules and their firing log."""

    async def list_enabled(self) -> list[RuleEntity]:
        """Return all enabled rules."""

    async def list_all(self, limit: int = 100) -> list[RuleEntity]:
        """Return rules regardless of enabled flag."""

    async def get_by_id(self, rule_id: str) -> RuleEntity | None:
        """Return rule by ID."""

    async def create(self, data: dict[str, Any]) -> RuleEntity:
        """Persist a new rule."""

    async def update(self, rule_id: str, data: dict[str, Any]) -> RuleEntity | None:
        """Apply a partial update; return None when the rule does not exist."""

    async def delete(self, rule_id: str) -> bool:
        """Delete rule; return False when it did not exist."""

    async def list_executions(self, rule_id: str, limit: int = 50) -> list[dict[str, Any]]:
        """Return firing records of a rule (id included), newest first."""


# Points rule repository
class IPointsRuleRepository(Protocol):
    """Protocol for points rules."""

    async def list_enabled_for_trigger(self, trigger: str) -> list[PointsRuleEntity]:
        """Return enabled points rules whose trigger key equals trigger."""

    async def list_all(self, limit: int = 100) -> list[PointsRuleEntity]:
        """Return points rules."""

    async def create(self, data: dict[str, Any]) -> PointsRuleEntity:
        """Persist a new points rule."""


# Member lookups needed for authorization of notification administration
class IMemberRepository(Protocol):
    """Protocol for member records."""

    async def get_role(self, member_id: str) -> str | None:
        """Return the member's role, or None when the member does not exist."""
