"""
FastAPI router for the budgeting bounded context.

All routes delegate to use cases. No business logic here.
Bodies are taken as raw JSON and run through the validators in
validation.py, so every client error carries our own messages.
Error mapping is handled by the ErrorBoundaryRoute route class.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query

from sharedbudget.application.budgeting.create_budget import CreateBudgetUseCase
from sharedbudget.application.budgeting.create_group import CreateGroupUseCase
from sharedbudget.application.budgeting.create_transaction import (
    CreateTransactionUseCase,
)
from sharedbudget.application.budgeting.delete_budget import DeleteBudgetUseCase
from sharedbudget.application.budgeting.delete_group import DeleteGroupUseCase
from sharedbudget.application.budgeting.delete_profile import DeleteProfileUseCase
from sharedbudget.application.budgeting.delete_transaction import (
    DeleteTransactionUseCase,
)
from sharedbudget.application.budgeting.dtos import (
    DeleteGroupCommand,
    DeleteProfileCommand,
    DeleteRecordCommand,
    OwnerQuery,
)
from sharedbudget.application.budgeting.list_budgets import ListBudgetsUseCase
from sharedbudget.application.budgeting.list_groups import ListGroupsUseCase
from sharedbudget.application.budgeting.list_transactions import (
    ListTransactionsUseCase,
)
from sharedbudget.application.budgeting.update_group import UpdateGroupUseCase
from sharedbudget.interfaces.budgeting.dependencies import (
    get_create_budget_use_case,
    get_create_group_use_case,
    get_create_transaction_use_case,
    get_delete_budget_use_case,
    get_delete_group_use_case,
    get_delete_profile_use_case,
    get_delete_transaction_use_case,
    get_list_budgets_use_case,
    get_list_groups_use_case,
    get_list_transactions_use_case,
    get_update_group_use_case,
)
from sharedbudget.interfaces.budgeting.schemas import (
    BudgetItem,
    BudgetListResponse,
    BudgetResponse,
    ErrorResponse,
    GroupItem,
    GroupListResponse,
    GroupResponse,
    MessageResponse,
    TransactionItem,
    TransactionListResponse,
    TransactionResponse,
)
from sharedbudget.interfaces.budgeting.validation import (
    ensure_valid,
    require_object_id,
    validate_budget,
    validate_group,
    validate_group_update,
    validate_transaction,
)
from sharedbudget.shared.errors.handlers import ErrorBoundaryRoute

INVALID_GROUP_ID = "Invalid group ID format"
INVALID_PROFILE_ID = "Invalid profile ID format"
INVALID_TRANSACTION_ID = "Invalid transaction ID format"
INVALID_BUDGET_ID = "Invalid budget ID format"
GROUP_DELETED_MESSAGE = "Group deleted successfully"

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

router = APIRouter(tags=["budgeting"], route_class=ErrorBoundaryRoute)


def _owner_query(group_id: Optional[str], profile_id: Optional[str]) -> OwnerQuery:
    if group_id:
        require_object_id(group_id, INVALID_GROUP_ID)
    if profile_id:
        require_object_id(profile_id, INVALID_PROFILE_ID)
    return OwnerQuery(group_id=group_id or None, profile_id=profile_id or None)


# ======================================================================
# Groups and profiles
# ======================================================================


@router.get(
    "/profiles",
    response_model=GroupListResponse,
    responses=ERROR_RESPONSES,
    summary="List groups",
    description="Return every group with its embedded profiles.",
)
def list_groups(
    use_case: ListGroupsUseCase = Depends(get_list_groups_use_case),
) -> GroupListResponse:
    groups = use_case.execute()
    return GroupListResponse(data=[GroupItem.from_entity(g) for g in groups])


@router.post(
    "/profiles",
    status_code=201,
    response_model=GroupResponse,
    responses=ERROR_RESPONSES,
    summary="Create group",
    description="Create a group with at least one profile.",
)
def create_group(
    payload: Any = Body(...),
    use_case: CreateGroupUseCase = Depends(get_create_group_use_case),
) -> GroupResponse:
    """Create a group; profiles without avatar or color get defaults."""
    command = ensure_valid(validate_group(payload))
    group = use_case.execute(command)
    return GroupResponse(data=GroupItem.from_entity(group))


@router.put(
    "/profiles/{group_id}",
    response_model=GroupResponse,
    responses=ERROR_RESPONSES,
    summary="Update group",
    description="Replace a group's name and full profile list.",
)
def update_group(
    group_id: str,
    payload: Any = Body(...),
    use_case: UpdateGroupUseCase = Depends(get_update_group_use_case),
) -> GroupResponse:
    """Replace name and profiles wholesale; known profile ids are kept."""
    require_object_id(group_id, INVALID_GROUP_ID)
    group = use_case.load(group_id)
    command = ensure_valid(validate_group_update(group_id, payload))
    group = use_case.apply(group, command)
    return GroupResponse(data=GroupItem.from_entity(group))


@router.delete(
    "/profiles/{group_id}",
    responses=ERROR_RESPONSES,
    summary="Delete group or profile",
    description=(
        "Without profileId, delete the group and all of its transactions "
        "and budgets. With profileId, delete only that profile and its "
        "records and return the updated group."
    ),
)
def delete_group_or_profile(
    group_id: str,
    profile_id: Optional[str] = Query(default=None, alias="profileId"),
    delete_group_use_case: DeleteGroupUseCase = Depends(get_delete_group_use_case),
    delete_profile_use_case: DeleteProfileUseCase = Depends(
        get_delete_profile_use_case
    ),
) -> GroupResponse | MessageResponse:
    require_object_id(group_id, INVALID_GROUP_ID)

    if profile_id:
        require_object_id(profile_id, INVALID_PROFILE_ID)
        group = delete_profile_use_case.execute(
            DeleteProfileCommand(group_id=group_id, profile_id=profile_id)
        )
        return GroupResponse(data=GroupItem.from_entity(group))

    delete_group_use_case.execute(DeleteGroupCommand(group_id=group_id))
    return MessageResponse(message=GROUP_DELETED_MESSAGE)


# ======================================================================
# Transactions
# ======================================================================


@router.get(
    "/transactions",
    response_model=TransactionListResponse,
    responses=ERROR_RESPONSES,
    summary="List transactions",
    description="List transactions, optionally filtered by groupId and profileId.",
)
def list_transactions(
    group_id: Optional[str] = Query(default=None, alias="groupId"),
    profile_id: Optional[str] = Query(default=None, alias="profileId"),
    use_case: ListTransactionsUseCase = Depends(get_list_transactions_use_case),
) -> TransactionListResponse:
    transactions = use_case.execute(_owner_query(group_id, profile_id))
    return TransactionListResponse(
        data=[TransactionItem.from_entity(t) for t in transactions]
    )


@router.post(
    "/transactions",
    status_code=201,
    response_model=TransactionResponse,
    responses=ERROR_RESPONSES,
    summary="Create transaction",
    description="Record an income or expense for a profile of a group.",
)
def create_transaction(
    payload: Any = Body(...),
    use_case: CreateTransactionUseCase = Depends(get_create_transaction_use_case),
) -> TransactionResponse:
    command = ensure_valid(validate_transaction(payload))
    require_object_id(command.group_id, INVALID_GROUP_ID)
    require_object_id(command.profile_id, INVALID_PROFILE_ID)
    transaction = use_case.execute(command)
    return TransactionResponse(data=TransactionItem.from_entity(transaction))


@router.delete(
    "/transactions/{transaction_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete transaction",
)
def delete_transaction(
    transaction_id: str,
    use_case: DeleteTransactionUseCase = Depends(get_delete_transaction_use_case),
) -> MessageResponse:
    require_object_id(transaction_id, INVALID_TRANSACTION_ID)
    use_case.execute(DeleteRecordCommand(record_id=transaction_id))
    return MessageResponse(message="Transaction deleted successfully")


# ======================================================================
# Budgets
# ======================================================================


@router.get(
    "/budgets",
    response_model=BudgetListResponse,
    responses=ERROR_RESPONSES,
    summary="List budgets",
    description="List budgets, optionally filtered by groupId and profileId.",
)
def list_budgets(
    group_id: Optional[str] = Query(default=None, alias="groupId"),
    profile_id: Optional[str] = Query(default=None, alias="profileId"),
    use_case: ListBudgetsUseCase = Depends(get_list_budgets_use_case),
) -> BudgetListResponse:
    budgets = use_case.execute(_owner_query(group_id, profile_id))
    return BudgetListResponse(data=[BudgetItem.from_entity(b) for b in budgets])


@router.post(
    "/budgets",
    status_code=201,
    response_model=BudgetResponse,
    responses=ERROR_RESPONSES,
    summary="Create budget",
    description="Set a monthly spending limit for a category.",
)
def create_budget(
    payload: Any = Body(...),
    use_case: CreateBudgetUseCase = Depends(get_create_budget_use_case),
) -> BudgetResponse:
    command = ensure_valid(validate_budget(payload))
    require_object_id(command.group_id, INVALID_GROUP_ID)
    require_object_id(command.profile_id, INVALID_PROFILE_ID)
    budget = use_case.execute(command)
    return BudgetResponse(data=BudgetItem.from_entity(budget))


@router.delete(
    "/budgets/{budget_id}",
    response_model=MessageResponse,
    responses=ERROR_RESPONSES,
    summary="Delete budget",
)
def delete_budget(
    budget_id: str,
    use_case: DeleteBudgetUseCase = Depends(get_delete_budget_use_case),
) -> MessageResponse:
    require_object_id(budget_id, INVALID_BUDGET_ID)
    use_case.execute(DeleteRecordCommand(record_id=budget_id))
    return MessageResponse(message="Budget deleted successfully")
