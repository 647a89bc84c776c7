"""
Use case: Replace a group's name and profile list.

Input: UpdateGroupCommand (group_id, name, profiles)
Output: Group
Side effects: Overwrites the group document.
Failure cases: NotFoundError, ValidationFailedError, DatabaseError.
"""

import logging

from sharedbudget.application.budgeting.create_group import build_profiles
from sharedbudget.application.budgeting.dtos import UpdateGroupCommand
from sharedbudget.domain.budgeting.entities import Group
from sharedbudget.domain.budgeting.errors import NotFoundError, ValidationFailedError
from sharedbudget.domain.budgeting.ports import GroupRepository

logger = logging.getLogger(__name__)


class UpdateGroupUseCase:
    """Orchestrates a wholesale group update.

    The submitted profile list replaces the stored one entirely. Profiles
    that carry one of the group's own ids keep it; the others get new ids
    from persistence.

    The group is looked up before the submitted body is checked, so an
    unknown group is reported as not found whatever the payload holds.
    Callers that validate the payload themselves use ``load`` then
    ``apply``; ``execute`` runs both.
    """

    def __init__(self, group_repo: GroupRepository) -> None:
        self._group_repo = group_repo

    def load(self, group_id: str) -> Group:
        """Fetch the group to update.

        Raises:
            NotFoundError: If the group does not exist.
        """
        group = self._group_repo.get_by_id(group_id)
        if group is None:
            raise NotFoundError("Group not found")
        return group

    def apply(self, group: Group, command: UpdateGroupCommand) -> Group:
        """Replace name and profiles of a loaded group and store it.

        Raises:
            ValidationFailedError: If the name or profiles are invalid.
            NotFoundError: If the group vanished before the write.
        """
        name = command.name.strip() if command.name else ""
        if not name:
            raise ValidationFailedError("Group name is required")

        group.replace(name, build_profiles(command.profiles))

        updated = self._group_repo.save(group)
        if updated is None:
            raise NotFoundError("Group not found")
        logger.info("Updated group id=%s", updated.id)
        return updated

    def execute(self, command: UpdateGroupCommand) -> Group:
        """Run the update group use case."""
        return self.apply(self.load(command.group_id), command)
