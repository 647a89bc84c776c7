"""
Use case: Delete a single transaction.

Input: DeleteRecordCommand (record_id)
Output: None
Side effects: Deletes one transaction document.
Failure cases: NotFoundError, DatabaseError.
"""

import logging

from sharedbudget.application.budgeting.dtos import DeleteRecordCommand
from sharedbudget.domain.budgeting.errors import NotFoundError
from sharedbudget.domain.budgeting.ports import TransactionRepository

logger = logging.getLogger(__name__)


class DeleteTransactionUseCase:
    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def execute(self, command: DeleteRecordCommand) -> None:
        if not self._transaction_repo.delete(command.record_id):
            raise NotFoundError("Transaction not found")
        logger.info("Deleted transaction id=%s", command.record_id)
