"""
Use case: List budgets by group and/or profile.

Input: OwnerQuery (optional group_id, profile_id)
Output: list[Budget]
Side effects: None (read-only query).
Failure cases: DatabaseError.
"""

from sharedbudget.application.budgeting.dtos import OwnerQuery
from sharedbudget.domain.budgeting.entities import Budget
from sharedbudget.domain.budgeting.ports import BudgetRepository


class ListBudgetsUseCase:
    """Returns matching budgets; an empty list is a valid result."""

    def __init__(self, budget_repo: BudgetRepository) -> None:
        self._budget_repo = budget_repo

    def execute(self, query: OwnerQuery) -> list[Budget]:
        return self._budget_repo.list(group_id=query.group_id, profile_id=query.profile_id)
