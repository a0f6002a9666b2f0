"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import (
    ConditionSpec,
    PointsRuleEntity,
    RuleEntity,
    StepSpec,
    WorkflowEntity,
)
from app.domain.enums import ConditionOperator, LogicOperator, StepType, WorkflowStatus
from app.domain.exceptions import (
    ActionConfigurationException,
    ActionException,
    OrgException,
    ResourceNotFoundException,
    UnknownActionTypeException,
    UnknownStepTypeException,
    ValidationException,
    WorkflowExecutionFailedException,
    WorkflowNotActiveException,
)

__all__ = [
    # Entities
    "ConditionSpec",
    "PointsRuleEntity",
    "RuleEntity",
    "StepSpec",
    "WorkflowEntity",
    # Enums
    "ConditionOperator",
    "LogicOperator",
    "StepType",
    "WorkflowStatus",
    # Exceptions
    "ActionConfigurationException",
    "ActionException",
    "OrgException",
    "ResourceNotFoundException",
    "UnknownActionTypeException",
    "UnknownStepTypeException",
    "ValidationException",
    "WorkflowExecutionFailedException",
    "WorkflowNotActiveException",
]
