"""Application interfaces (ports): store, repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IMemberRepository,
    IPointsRuleRepository,
    IRuleRepository,
    IWorkflowExecutionRepository,
    IWorkflowRepository,
)
from app.application.interfaces.services import (
    ChangeHandler,
    IChangeSubscription,
    IEmailSender,
    IEventDeduplicator,
    IMessageRenderer,
)
from app.application.interfaces.store import SERVER_TIMESTAMP, IDocumentStore

__all__ = [
    "SERVER_TIMESTAMP",
    "ChangeHandler",
    "IChangeSubscription",
    "IDocumentStore",
    "IEmailSender",
    "IEventDeduplicator",
    "IMemberRepository",
    "IMessageRenderer",
    "IPointsRuleRepository",
    "IRuleRepository",
    "IWorkflowExecutionRepository",
    "IWorkflowRepository",
]
