"""
Request validation for the budgeting API.

Each validator runs a raw JSON payload through its request schema and
returns a ValidationResult: either Valid, carrying a sanitized command
ready for a use case, or Invalid, carrying every human-readable error.
Validators never raise; ensure_valid turns an Invalid result into the
taxonomy's ValidationFailedError at the HTTP boundary.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from bson import ObjectId
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from sharedbudget.application.budgeting.dtos import (
    CreateBudgetCommand,
    CreateGroupCommand,
    CreateTransactionCommand,
    ProfileDraft,
    UpdateGroupCommand,
)
from sharedbudget.domain.budgeting.errors import ValidationFailedError
from sharedbudget.domain.budgeting.sanitization import sanitize
from sharedbudget.interfaces.budgeting.schemas import (
    FIELD_ERROR,
    BudgetCreateRequest,
    GroupCreateRequest,
    GroupUpdateRequest,
    ProfileRequest,
    TransactionCreateRequest,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Valid(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Invalid:
    errors: list[str]

    @property
    def ok(self) -> bool:
        return False


ValidationResult = Union[Valid[T], Invalid]


def error_messages(exc: PydanticValidationError) -> list[str]:
    """Flatten a pydantic error into unique client-facing messages.

    Messages raised by our field validators are used as-is; pydantic's
    own messages are prefixed with the offending field path.
    """
    messages: list[str] = []
    for error in exc.errors():
        if error["type"] == FIELD_ERROR:
            message = error["msg"]
        else:
            location = ".".join(str(part) for part in error["loc"])
            message = f"{location}: {error['msg']}" if location else error["msg"]
        if message not in messages:
            messages.append(message)
    return messages


def _check(schema: type[BaseModel], payload: Any) -> Union[dict[str, Any], Invalid]:
    try:
        model = schema.model_validate(payload)
    except PydanticValidationError as exc:
        return Invalid(errors=error_messages(exc))
    return sanitize(model.model_dump())


def _drafts(profiles: list[dict[str, Any]]) -> list[ProfileDraft]:
    return [
        ProfileDraft(
            name=p["name"], avatar=p.get("avatar"), color=p.get("color"), id=p.get("id")
        )
        for p in profiles
    ]


def validate_profile(payload: Any) -> ValidationResult[ProfileDraft]:
    data = _check(ProfileRequest, payload)
    if isinstance(data, Invalid):
        return data
    return Valid(_drafts([data])[0])


def validate_group(payload: Any) -> ValidationResult[CreateGroupCommand]:
    """Validate a group creation payload (name, type, profiles)."""
    data = _check(GroupCreateRequest, payload)
    if isinstance(data, Invalid):
        return data
    return Valid(
        CreateGroupCommand(
            name=data["name"], type=data["type"], profiles=_drafts(data["profiles"])
        )
    )


def validate_group_update(
    group_id: str, payload: Any
) -> ValidationResult[UpdateGroupCommand]:
    """Validate a group replacement payload for an existing group id."""
    data = _check(GroupUpdateRequest, payload)
    if isinstance(data, Invalid):
        return data
    return Valid(
        UpdateGroupCommand(
            group_id=group_id, name=data["name"], profiles=_drafts(data["profiles"])
        )
    )


def validate_transaction(payload: Any) -> ValidationResult[CreateTransactionCommand]:
    data = _check(TransactionCreateRequest, payload)
    if isinstance(data, Invalid):
        return data
    return Valid(CreateTransactionCommand(**data))


def validate_budget(payload: Any) -> ValidationResult[CreateBudgetCommand]:
    data = _check(BudgetCreateRequest, payload)
    if isinstance(data, Invalid):
        return data
    return Valid(CreateBudgetCommand(**data))


def ensure_valid(result: ValidationResult[T]) -> T:
    """Unwrap a result, raising ValidationFailedError when it is Invalid.

    The message joins every error so clients see all problems at once;
    the individual messages travel in details.
    """
    if isinstance(result, Invalid):
        raise ValidationFailedError("; ".join(result.errors), details=result.errors)
    return result.value


def require_object_id(value: str, message: str) -> str:
    """Reject malformed ObjectId strings before persistence is touched."""
    if not ObjectId.is_valid(value):
        raise ValidationFailedError(message)
    return value
