"""
Use case: Delete a single budget.

Input: DeleteRecordCommand (record_id)
Output: None
Side effects: Deletes one budget document.
Failure cases: NotFoundError, DatabaseError.
"""

import logging

from sharedbudget.application.budgeting.dtos import DeleteRecordCommand
from sharedbudget.domain.budgeting.errors import NotFoundError
from sharedbudget.domain.budgeting.ports import BudgetRepository

logger = logging.getLogger(__name__)


class DeleteBudgetUseCase:
    def __init__(self, budget_repo: BudgetRepository) -> None:
        self._budget_repo = budget_repo

    def execute(self, command: DeleteRecordCommand) -> None:
        if not self._budget_repo.delete(command.record_id):
            raise NotFoundError("Budget not found")
        logger.info("Deleted budget id=%s", command.record_id)
