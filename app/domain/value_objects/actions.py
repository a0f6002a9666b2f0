"""Action descriptors as a tagged union.

Stored action configuration is an open mapping. Parsing it into one of the
models below checks the keys each action type requires; unrecognised keys are
ignored. Both camelCase (``documentId``, ``memberId``) and snake_case names
are accepted.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.domain.exceptions import (
    ActionConfigurationException,
    UnknownActionTypeException,
)

_NonEmpty = Annotated[str, Field(min_length=1)]


class _ActionBase(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class SendEmailAction(_ActionBase):
    """Notification delivery. Fire-and-forget: delivery outcome never fails the action."""

    type: Literal["send_email"]
    to: str | list[str] | None = None
    subject: str | None = None
    body: str | None = None

    def recipients(self) -> list[str]:
        if self.to is None:
            return []
        if isinstance(self.to, str):
            return [self.to] if self.to else []
        return [address for address in self.to if address]


class UpdateFieldAction(_ActionBase):
    """Set one field on an existing document."""

    type: Literal["update_field"]
    collection: _NonEmpty
    document_id: _NonEmpty = Field(alias="documentId")
    field: _NonEmpty
    value: Any = None


class CreateRecordAction(_ActionBase):
    """Create a new document from ``data``."""

    type: Literal["create_record"]
    collection: _NonEmpty
    data: dict[str, Any]


class AwardPointsAction(_ActionBase):
    """Write one point-award record for a member."""

    type: Literal["award_points"]
    member_id: _NonEmpty = Field(alias="memberId")
    points: StrictInt | StrictFloat
    reason: str | None = None
    source: str | None = None
    applied_rules: list[dict[str, Any]] | None = Field(default=None, alias="appliedRules")
    activity_data: dict[str, Any] | None = Field(default=None, alias="activityData")


ActionSpec = Annotated[
    Union[SendEmailAction, UpdateFieldAction, CreateRecordAction, AwardPointsAction],
    Field(discriminator="type"),
]

_action_adapter: TypeAdapter[ActionSpec] = TypeAdapter(ActionSpec)


def parse_action_spec(raw: Any) -> ActionSpec:
    """Parse a raw action mapping into its typed descriptor.

    Raises:
        UnknownActionTypeException: ``type`` names an action outside the catalog.
        ActionConfigurationException: ``type`` is missing or a required key is
            absent or malformed.
    """
    if isinstance(raw, BaseModel):
        return raw  # type: ignore[return-value]
    try:
        return _action_adapter.validate_python(raw)
    except PydanticValidationError as exc:
        action_type = raw.get("type") if isinstance(raw, dict) else None
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        if any(err["type"] == "union_tag_invalid" for err in errors):
            raise UnknownActionTypeException(action_type) from exc
        raise ActionConfigurationException(
            action_type if isinstance(action_type, str) else None,
            [{"loc": list(err["loc"]), "msg": err["msg"]} for err in errors],
        ) from exc
