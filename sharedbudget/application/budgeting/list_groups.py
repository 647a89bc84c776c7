"""
Use case: List every group.

Input: none
Output: list[Group] (possibly empty)
Side effects: None (read-only query).
Failure cases: DatabaseError.
"""

import logging

from sharedbudget.domain.budgeting.entities import Group
from sharedbudget.domain.budgeting.ports import GroupRepository

logger = logging.getLogger(__name__)


class ListGroupsUseCase:
    """Returns all groups. Having no groups is a valid, successful state."""

    def __init__(self, group_repo: GroupRepository) -> None:
        self._group_repo = group_repo

    def execute(self) -> list[Group]:
        groups = self._group_repo.list_all()
        logger.info("Listed %d group(s)", len(groups))
        return groups
