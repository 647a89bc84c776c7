"""
Use case: Record an income or expense for a profile.

Input: CreateTransactionCommand
Output: Transaction
Side effects: Inserts one transaction document.
Failure cases: NotFoundError (group/profile), ValidationFailedError,
    DatabaseError.
"""

import logging
import math

from sharedbudget.application.budgeting.dtos import CreateTransactionCommand
from sharedbudget.application.budgeting.ownership import require_group_member
from sharedbudget.domain.budgeting.entities import Transaction, TransactionType
from sharedbudget.domain.budgeting.errors import ValidationFailedError
from sharedbudget.domain.budgeting.ports import GroupRepository, TransactionRepository

logger = logging.getLogger(__name__)


class CreateTransactionUseCase:
    """Orchestrates transaction creation for an existing group member."""

    def __init__(
        self, group_repo: GroupRepository, transaction_repo: TransactionRepository
    ) -> None:
        self._group_repo = group_repo
        self._transaction_repo = transaction_repo

    def execute(self, command: CreateTransactionCommand) -> Transaction:
        """Run the create transaction use case."""
        if not math.isfinite(command.amount) or command.amount <= 0:
            raise ValidationFailedError("Amount must be positive")

        require_group_member(self._group_repo, command.group_id, command.profile_id)

        transaction = self._transaction_repo.add(
            Transaction(
                amount=command.amount,
                description=command.description,
                category=command.category,
                date=command.date,
                type=TransactionType(command.type),
                profile_id=command.profile_id,
                group_id=command.group_id,
            )
        )
        logger.info(
            "Recorded %s transaction id=%s for profile id=%s",
            transaction.type.value,
            transaction.id,
            transaction.profile_id,
        )
        return transaction
