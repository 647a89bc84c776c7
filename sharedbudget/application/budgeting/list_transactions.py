"""
Use case: List transactions by group and/or profile.

Input: OwnerQuery (optional group_id, profile_id)
Output: list[Transaction]
Side effects: None (read-only query).
Failure cases: DatabaseError.
"""

from sharedbudget.application.budgeting.dtos import OwnerQuery
from sharedbudget.domain.budgeting.entities import Transaction
from sharedbudget.domain.budgeting.ports import TransactionRepository


class ListTransactionsUseCase:
    """Returns matching transactions; an empty list is a valid result."""

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def execute(self, query: OwnerQuery) -> list[Transaction]:
        return self._transaction_repo.list(
            group_id=query.group_id, profile_id=query.profile_id
        )
