"""
Data Transfer Objects for the budgeting application layer.

DTOs carry already-validated, sanitized data from the interface layer
into use cases. They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ProfileDraft:
    """A profile as submitted by a client.

    Attributes:
        name: Trimmed, sanitized display name.
        avatar: Optional avatar reference; None means use the default.
        color: Optional #RRGGBB color; None means use the default.
        id: Existing profile id to keep on update, if any.
    """

    name: str
    avatar: Optional[str] = None
    color: Optional[str] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class CreateGroupCommand:
    """Input DTO for creating a group with its initial profiles."""

    name: str
    type: str
    profiles: list[ProfileDraft] = field(default_factory=list)


@dataclass(frozen=True)
class UpdateGroupCommand:
    """Input DTO for replacing a group's name and profile list."""

    group_id: str
    name: str
    profiles: list[ProfileDraft] = field(default_factory=list)


@dataclass(frozen=True)
class DeleteGroupCommand:
    """Input DTO for deleting a whole group."""

    group_id: str


@dataclass(frozen=True)
class DeleteGroupResult:
    """Output DTO describing a group deletion and its cascade.

    Attributes:
        group_id: Id of the deleted group.
        transactions_deleted: Transactions removed by the cascade.
        budgets_deleted: Budgets removed by the cascade.
    """

    group_id: str
    transactions_deleted: int
    budgets_deleted: int


@dataclass(frozen=True)
class DeleteProfileCommand:
    """Input DTO for removing one profile from a group."""

    group_id: str
    profile_id: str


@dataclass(frozen=True)
class CreateTransactionCommand:
    """Input DTO for recording an income or expense."""

    amount: float
    description: str
    category: str
    date: str
    type: str
    profile_id: str
    group_id: str


@dataclass(frozen=True)
class CreateBudgetCommand:
    """Input DTO for setting a monthly category budget."""

    category: str
    amount: float
    period: str
    profile_id: str
    group_id: str


@dataclass(frozen=True)
class OwnerQuery:
    """Filter for listing transactions or budgets by owner."""

    group_id: Optional[str] = None
    profile_id: Optional[str] = None


@dataclass(frozen=True)
class DeleteRecordCommand:
    """Input DTO for deleting a single transaction or budget."""

    record_id: str
