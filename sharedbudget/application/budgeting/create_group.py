"""
Use case: Create a group with its initial profiles.

Input: CreateGroupCommand (name, type, profiles)
Output: Group (with ids assigned by persistence)
Side effects: Inserts one group document.
Failure cases: ValidationFailedError, DatabaseError.
"""

import logging

from sharedbudget.application.budgeting.dtos import CreateGroupCommand, ProfileDraft
from sharedbudget.domain.budgeting.entities import (
    DEFAULT_AVATAR,
    DEFAULT_PROFILE_COLOR,
    Group,
    GroupType,
    Profile,
)
from sharedbudget.domain.budgeting.errors import ValidationFailedError
from sharedbudget.domain.budgeting.ports import GroupRepository

logger = logging.getLogger(__name__)


def build_profile(draft: ProfileDraft) -> Profile:
    """Turn a submitted profile into an entity, applying defaults."""
    name = draft.name.strip() if draft.name else ""
    if not name:
        raise ValidationFailedError("Each profile must have a valid name")
    return Profile(
        id=draft.id,
        name=name,
        avatar=draft.avatar or DEFAULT_AVATAR,
        color=draft.color or DEFAULT_PROFILE_COLOR,
    )


def build_profiles(drafts: list[ProfileDraft]) -> list[Profile]:
    """Build the profile list of a group, which may never be empty."""
    if not drafts:
        raise ValidationFailedError("At least one profile is required")
    return [build_profile(draft) for draft in drafts]


class CreateGroupUseCase:
    """Orchestrates group creation.

    Enforces the group invariants (name, known type, at least one named
    profile) before anything is written.
    """

    def __init__(self, group_repo: GroupRepository) -> None:
        self._group_repo = group_repo

    def execute(self, command: CreateGroupCommand) -> Group:
        """Run the create group use case.

        Raises:
            ValidationFailedError: If the name, type or profiles are invalid.
        """
        name = command.name.strip() if command.name else ""
        if not name:
            raise ValidationFailedError("Group name is required")

        if command.type not in GroupType.values():
            raise ValidationFailedError(
                "Valid group type is required. Must be one of: "
                + ", ".join(GroupType.values())
            )

        group = Group(name=name, type=GroupType(command.type))
        group.replace(name, build_profiles(command.profiles))
        created = self._group_repo.add(group)
        logger.info(
            "Created group id=%s with %d profile(s)", created.id, len(created.profiles)
        )
        return created
