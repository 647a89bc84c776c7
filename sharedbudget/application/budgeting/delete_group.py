"""
Use case: Delete a group and everything recorded against it.

Input: DeleteGroupCommand (group_id)
Output: DeleteGroupResult
Side effects: Deletes the group, then its transactions and budgets.
Failure cases: NotFoundError, DatabaseError.

The cascade runs as independent deletes, not as one transaction.
"""

import logging

from sharedbudget.application.budgeting.dtos import DeleteGroupCommand, DeleteGroupResult
from sharedbudget.domain.budgeting.errors import NotFoundError
from sharedbudget.domain.budgeting.ports import (
    BudgetRepository,
    GroupRepository,
    TransactionRepository,
)

logger = logging.getLogger(__name__)


class DeleteGroupUseCase:
    """Orchestrates group deletion with cascade to transactions and budgets."""

    def __init__(
        self,
        group_repo: GroupRepository,
        transaction_repo: TransactionRepository,
        budget_repo: BudgetRepository,
    ) -> None:
        self._group_repo = group_repo
        self._transaction_repo = transaction_repo
        self._budget_repo = budget_repo

    def execute(self, command: DeleteGroupCommand) -> DeleteGroupResult:
        """Run the delete group use case.

        Raises:
            NotFoundError: If the group does not exist.
        """
        if not self._group_repo.delete(command.group_id):
            raise NotFoundError("Group not found")

        transactions = self._transaction_repo.delete_by_group(command.group_id)
        budgets = self._budget_repo.delete_by_group(command.group_id)

        logger.info(
            "Deleted group id=%s (transactions=%d, budgets=%d)",
            command.group_id,
            transactions,
            budgets,
        )
        return DeleteGroupResult(
            group_id=command.group_id,
            transactions_deleted=transactions,
            budgets_deleted=budgets,
        )
