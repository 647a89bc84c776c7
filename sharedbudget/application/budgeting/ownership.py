"""
Shared check that a profile belongs to a group.

Used by the use cases that record data against a profile.
"""

from sharedbudget.domain.budgeting.entities import Group
from sharedbudget.domain.budgeting.errors import NotFoundError
from sharedbudget.domain.budgeting.ports import GroupRepository


def require_group_member(
    group_repo: GroupRepository, group_id: str, profile_id: str
) -> Group:
    """Return the group if it exists and contains the profile.

    Raises:
        NotFoundError: If the group or the profile is missing.
    """
    group = group_repo.get_by_id(group_id)
    if group is None:
        raise NotFoundError("Group not found")
    if group.find_profile(profile_id) is None:
        raise NotFoundError("Profile not found")
    return group
