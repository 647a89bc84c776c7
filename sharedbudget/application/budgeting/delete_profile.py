"""
Use case: Remove one profile from a group.

Input: DeleteProfileCommand (group_id, profile_id)
Output: Group (without the removed profile)
Side effects: Saves the group, then deletes the profile's transactions
    and budgets.
Failure cases: NotFoundError, ValidationFailedError (last profile),
    DatabaseError.
"""

import logging

from sharedbudget.application.budgeting.dtos import DeleteProfileCommand
from sharedbudget.domain.budgeting.entities import Group
from sharedbudget.domain.budgeting.errors import NotFoundError
from sharedbudget.domain.budgeting.ports import (
    BudgetRepository,
    GroupRepository,
    TransactionRepository,
)

logger = logging.getLogger(__name__)


class DeleteProfileUseCase:
    """Orchestrates profile removal with cascade to its records.

    A group must keep at least one profile; removing the last one is
    rejected and the caller has to delete the group instead.
    """

    def __init__(
        self,
        group_repo: GroupRepository,
        transaction_repo: TransactionRepository,
        budget_repo: BudgetRepository,
    ) -> None:
        self._group_repo = group_repo
        self._transaction_repo = transaction_repo
        self._budget_repo = budget_repo

    def execute(self, command: DeleteProfileCommand) -> Group:
        """Run the delete profile use case.

        Raises:
            NotFoundError: If the group or the profile does not exist.
            ValidationFailedError: If it is the group's last profile.
        """
        group = self._group_repo.get_by_id(command.group_id)
        if group is None:
            raise NotFoundError("Group not found")

        group.remove_profile(command.profile_id)

        updated = self._group_repo.save(group)
        if updated is None:
            raise NotFoundError("Group not found")

        transactions = self._transaction_repo.delete_by_profile(command.profile_id)
        budgets = self._budget_repo.delete_by_profile(command.profile_id)

        logger.info(
            "Deleted profile id=%s from group id=%s (transactions=%d, budgets=%d)",
            command.profile_id,
            command.group_id,
            transactions,
            budgets,
        )
        return updated
