"""
Domain entities for the budgeting bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from sharedbudget.domain.budgeting.errors import NotFoundError, ValidationFailedError

DEFAULT_AVATAR = ""
DEFAULT_PROFILE_COLOR = "#3B82F6"

LAST_PROFILE_MESSAGE = (
    "Cannot delete the last profile in a group. Delete the group instead."
)


class GroupType(Enum):
    """Kind of household a group represents."""

    FAMILY = "family"
    ROOMMATES = "roommates"
    PERSONAL = "personal"
    OTHER = "other"
    FRIENDS = "friends"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class TransactionType(Enum):
    """Direction of money movement."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass
class Profile:
    """An individual member of a group. Ids are assigned by persistence."""

    name: str
    avatar: str = DEFAULT_AVATAR
    color: str = DEFAULT_PROFILE_COLOR
    id: Optional[str] = None


@dataclass
class Group:
    """A household unit owning one or more profiles.

    A group always keeps at least one profile; removing the last one is
    rejected and the whole group must be deleted instead.
    """

    name: str
    type: GroupType
    profiles: list[Profile] = field(default_factory=list)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def find_profile(self, profile_id: str) -> Optional[Profile]:
        """Return the profile with the given id, or None."""
        for profile in self.profiles:
            if profile.id == profile_id:
                return profile
        return None

    def replace(self, name: str, profiles: list[Profile]) -> None:
        """Replace the name and the full profile list (no merge).

        A submitted profile keeps its id only if that id already belongs
        to this group and appears once in the list. Any other profile is
        cleared so persistence assigns it a fresh id.
        """
        known = {profile.id for profile in self.profiles if profile.id}
        seen: set[str] = set()
        replacement = []
        for profile in profiles:
            profile_id = None
            if profile.id in known and profile.id not in seen:
                profile_id = profile.id
                seen.add(profile_id)
            replacement.append(
                Profile(
                    name=profile.name,
                    avatar=profile.avatar,
                    color=profile.color,
                    id=profile_id,
                )
            )
        self.name = name
        self.profiles = replacement

    def remove_profile(self, profile_id: str) -> Profile:
        """Remove a profile from the group.

        Args:
            profile_id: Id of the profile to remove.

        Returns:
            The removed profile.

        Raises:
            ValidationFailedError: If it is the group's only profile.
            NotFoundError: If no profile with that id belongs to the group.
        """
        if len(self.profiles) <= 1:
            raise ValidationFailedError(LAST_PROFILE_MESSAGE)

        for index, profile in enumerate(self.profiles):
            if profile.id == profile_id:
                return self.profiles.pop(index)
        raise NotFoundError("Profile not found")


@dataclass
class Transaction:
    """A single income or expense recorded against a profile."""

    amount: float
    description: str
    category: str
    date: str
    type: TransactionType
    profile_id: str
    group_id: str
    id: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class Budget:
    """A monthly spending cap for one category of a profile."""

    category: str
    amount: float
    period: str
    profile_id: str
    group_id: str
    id: Optional[str] = None
    created_at: Optional[datetime] = None
