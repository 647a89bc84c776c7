"""
Pydantic schemas for budgeting API request/response validation.

Request schemas enforce input shape and constraints and carry the
field-specific messages returned to clients. Response schemas define
the API contract; JSON keys are camelCase.
No business logic belongs here.
"""

import re
from datetime import datetime
from typing import Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from sharedbudget.domain.budgeting.entities import (
    Budget,
    Group,
    GroupType,
    Profile,
    Transaction,
    TransactionType,
)
from sharedbudget.domain.budgeting.sanitization import display_length

FIELD_ERROR = "field_error"

NAME_MAX_LEN = 50
CATEGORY_MAX_LEN = 50
DESCRIPTION_MIN_LEN = 3
DESCRIPTION_MAX_LEN = 100

COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
PERIOD_PATTERN = re.compile(r"^\d{4}-\d{2}$")


def _field_error(message: str) -> PydanticCustomError:
    return PydanticCustomError(FIELD_ERROR, message)


def _bounded(value: str, max_len: int, required: str, too_long: str) -> str:
    """Strip and length-check text, measured as displayed to users."""
    value = value.strip()
    if not value:
        raise _field_error(required)
    if display_length(value) > max_len:
        raise _field_error(too_long)
    return value


def _required_text(value: str, message: str) -> str:
    value = value.strip()
    if not value:
        raise _field_error(message)
    return value


# ======================================================================
# Requests
# ======================================================================


class ProfileRequest(BaseModel):
    """A profile inside a group create/update request.

    Attributes:
        id: Existing profile id. Dropped unless well-formed; the group
            update keeps it only if it is one of the group's own ids.
        name: Display name (1-50 chars).
        avatar: Optional avatar reference.
        color: Optional #RRGGBB color. Empty means use the default.
    """

    id: Optional[str] = None
    name: str = Field(default="", validate_default=True)
    avatar: Optional[str] = None
    color: Optional[str] = None

    @field_validator("id")
    @classmethod
    def _known_id_only(cls, value: Optional[str]) -> Optional[str]:
        return value if value and ObjectId.is_valid(value) else None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return _bounded(
            value, NAME_MAX_LEN, "Profile name is required", "Profile name is too long"
        )

    @field_validator("color")
    @classmethod
    def _check_color(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        if not COLOR_PATTERN.match(value):
            raise _field_error("Invalid color format")
        return value


class GroupUpdateRequest(BaseModel):
    """Request schema for replacing a group's name and profiles."""

    name: str = Field(default="", validate_default=True)
    profiles: list[ProfileRequest] = Field(default_factory=list, validate_default=True)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return _bounded(
            value, NAME_MAX_LEN, "Group name is required", "Group name is too long"
        )

    @field_validator("profiles")
    @classmethod
    def _check_profiles(cls, value: list[ProfileRequest]) -> list[ProfileRequest]:
        if not value:
            raise _field_error("At least one profile is required")
        return value


class GroupCreateRequest(GroupUpdateRequest):
    """Request schema for creating a group."""

    type: str = Field(default="", validate_default=True)

    @field_validator("type")
    @classmethod
    def _check_type(cls, value: str) -> str:
        if value not in GroupType.values():
            raise _field_error(
                "Valid group type is required. Must be one of: "
                + ", ".join(GroupType.values())
            )
        return value


class OwnedRecordRequest(BaseModel):
    """Fields shared by transaction and budget requests."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    category: str = Field(default="", validate_default=True)
    profile_id: str = Field(default="", validate_default=True)
    group_id: str = Field(default="", validate_default=True)

    @field_validator("category")
    @classmethod
    def _check_category(cls, value: str) -> str:
        return _bounded(
            value, CATEGORY_MAX_LEN, "Category is required", "Category is too long"
        )

    @field_validator("profile_id")
    @classmethod
    def _check_profile_id(cls, value: str) -> str:
        return _required_text(value, "Profile ID is required")

    @field_validator("group_id")
    @classmethod
    def _check_group_id(cls, value: str) -> str:
        return _required_text(value, "Group ID is required")


class TransactionCreateRequest(OwnedRecordRequest):
    """Request schema for recording a transaction."""

    amount: float = Field(strict=True, allow_inf_nan=False)
    description: str = Field(default="", validate_default=True)
    date: str = Field(default="", validate_default=True)
    type: str = Field(default="", validate_default=True)

    @field_validator("amount")
    @classmethod
    def _check_amount(cls, value: float) -> float:
        if value <= 0:
            raise _field_error("Amount must be positive")
        return value

    @field_validator("description")
    @classmethod
    def _check_description(cls, value: str) -> str:
        value = value.strip()
        if display_length(value) < DESCRIPTION_MIN_LEN:
            raise _field_error("Description is too short")
        if display_length(value) > DESCRIPTION_MAX_LEN:
            raise _field_error("Description is too long")
        return value

    @field_validator("date")
    @classmethod
    def _check_date(cls, value: str) -> str:
        if not DATE_PATTERN.match(value):
            raise _field_error("Invalid date format")
        return value

    @field_validator("type")
    @classmethod
    def _check_type(cls, value: str) -> str:
        if value not in {t.value for t in TransactionType}:
            raise _field_error("Type must be 'income' or 'expense'")
        return value


class BudgetCreateRequest(OwnedRecordRequest):
    """Request schema for setting a monthly category budget."""

    amount: float = Field(strict=True, allow_inf_nan=False)
    period: str = Field(default="", validate_default=True)

    @field_validator("amount")
    @classmethod
    def _check_amount(cls, value: float) -> float:
        if value <= 0:
            raise _field_error("Budget amount must be positive")
        return value

    @field_validator("period")
    @classmethod
    def _check_period(cls, value: str) -> str:
        if not PERIOD_PATTERN.match(value):
            raise _field_error("Invalid period format")
        return value


# ======================================================================
# Responses
# ======================================================================


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileItem(_CamelModel):
    """A profile in API responses."""

    id: Optional[str]
    name: str
    avatar: str
    color: str

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileItem":
        return cls(id=profile.id, name=profile.name, avatar=profile.avatar, color=profile.color)


class GroupItem(_CamelModel):
    """A group with its profiles in API responses."""

    id: Optional[str]
    name: str
    type: str
    profiles: list[ProfileItem]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, group: Group) -> "GroupItem":
        return cls(
            id=group.id,
            name=group.name,
            type=group.type.value,
            profiles=[ProfileItem.from_entity(p) for p in group.profiles],
            created_at=group.created_at,
            updated_at=group.updated_at,
        )


class TransactionItem(_CamelModel):
    """A transaction in API responses."""

    id: Optional[str]
    amount: float
    description: str
    category: str
    date: str
    type: str
    profile_id: str
    group_id: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, transaction: Transaction) -> "TransactionItem":
        return cls(
            id=transaction.id,
            amount=transaction.amount,
            description=transaction.description,
            category=transaction.category,
            date=transaction.date,
            type=transaction.type.value,
            profile_id=transaction.profile_id,
            group_id=transaction.group_id,
            created_at=transaction.created_at,
        )


class BudgetItem(_CamelModel):
    """A budget in API responses."""

    id: Optional[str]
    category: str
    amount: float
    period: str
    profile_id: str
    group_id: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, budget: Budget) -> "BudgetItem":
        return cls(
            id=budget.id,
            category=budget.category,
            amount=budget.amount,
            period=budget.period,
            profile_id=budget.profile_id,
            group_id=budget.group_id,
            created_at=budget.created_at,
        )


class GroupResponse(BaseModel):
    success: bool = True
    data: GroupItem


class GroupListResponse(BaseModel):
    success: bool = True
    data: list[GroupItem]


class TransactionResponse(BaseModel):
    success: bool = True
    data: TransactionItem


class TransactionListResponse(BaseModel):
    success: bool = True
    data: list[TransactionItem]


class BudgetResponse(BaseModel):
    success: bool = True
    data: BudgetItem


class BudgetListResponse(BaseModel):
    success: bool = True
    data: list[BudgetItem]


class MessageResponse(BaseModel):
    """Success envelope for operations without a resulting document."""

    success: bool = True
    message: str


class ErrorDetail(BaseModel):
    type: str
    message: str
    details: Optional[list[str] | str] = None


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing request."""

    success: bool = False
    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response schema for health check endpoint."""

    status: str
    version: str
