"""Tests for the domain exception hierarchy."""

from app.domain.exceptions import (
    ActionConfigurationException,
    ActionException,
    AuthorizationException,
    OrgException,
    ResourceNotFoundException,
    UnknownActionTypeException,
    WorkflowExecutionFailedException,
    WorkflowNotActiveException,
)


def test_to_dict_shape() -> None:
    exc = ResourceNotFoundException("workflow", "wf-1")
    assert exc.to_dict() == {
        "error": "RESOURCE_NOT_FOUND",
        "message": exc.message,
        "details": exc.details,
    }
    assert exc.details["resource_id"] == "wf-1"


def test_default_error_code_is_class_name() -> None:
    assert OrgException("boom").error_code == "OrgException"


def test_action_taxonomy() -> None:
    assert issubclass(ActionConfigurationException, ActionException)
    assert issubclass(UnknownActionTypeException, ActionException)
    exc = ActionConfigurationException("update_field", [{"loc": ["documentId"], "msg": "Field required"}])
    assert exc.message == "invalid configuration"
    assert exc.details["action_type"] == "update_field"


def test_workflow_failure_hides_cause() -> None:
    cause = KeyError("secret internals")
    exc = WorkflowExecutionFailedException("exec-1", cause)
    assert exc.error_code == "INTERNAL"
    assert "secret" not in exc.message
    assert exc.cause is cause
    assert exc.to_dict()["details"] == {"execution_id": "exec-1"}


def test_not_active_is_failed_precondition() -> None:
    exc = WorkflowNotActiveException("wf-1", "draft")
    assert exc.error_code == "FAILED_PRECONDITION"
    assert exc.message == "Workflow is not active"


def test_authorization_exception_code() -> None:
    assert AuthorizationException(resource="notification", action="bulk_send").error_code == "PERMISSION_DENIED"
