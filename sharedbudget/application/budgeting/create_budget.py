"""
Use case: Set a monthly category budget for a profile.

Input: CreateBudgetCommand
Output: Budget
Side effects: Inserts one budget document.
Failure cases: NotFoundError (group/profile), ValidationFailedError,
    DatabaseError.
"""

import logging
import math

from sharedbudget.application.budgeting.dtos import CreateBudgetCommand
from sharedbudget.application.budgeting.ownership import require_group_member
from sharedbudget.domain.budgeting.entities import Budget
from sharedbudget.domain.budgeting.errors import ValidationFailedError
from sharedbudget.domain.budgeting.ports import BudgetRepository, GroupRepository

logger = logging.getLogger(__name__)


class CreateBudgetUseCase:
    """Orchestrates budget creation for an existing group member."""

    def __init__(self, group_repo: GroupRepository, budget_repo: BudgetRepository) -> None:
        self._group_repo = group_repo
        self._budget_repo = budget_repo

    def execute(self, command: CreateBudgetCommand) -> Budget:
        """Run the create budget use case."""
        if not math.isfinite(command.amount) or command.amount <= 0:
            raise ValidationFailedError("Budget amount must be positive")

        require_group_member(self._group_repo, command.group_id, command.profile_id)

        budget = self._budget_repo.add(
            Budget(
                category=command.category,
                amount=command.amount,
                period=command.period,
                profile_id=command.profile_id,
                group_id=command.group_id,
            )
        )
        logger.info(
            "Set budget id=%s for profile id=%s (%s, %s)",
            budget.id,
            budget.profile_id,
            budget.category,
            budget.period,
        )
        return budget
