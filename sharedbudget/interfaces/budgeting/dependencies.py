"""
Dependency injection for the budgeting bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the budgeting context.

Repositories are resolved through get_*_repository so tests can swap
the MongoDB adapters for in-memory fakes with dependency_overrides.
"""

from fastapi import Depends, Request

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
from sharedbudget.application.budgeting.list_budgets import ListBudgetsUseCase
from sharedbudget.application.budgeting.list_groups import ListGroupsUseCase
from sharedbudget.application.budgeting.list_transactions import (
    ListTransactionsUseCase,
)
from sharedbudget.application.budgeting.update_group import UpdateGroupUseCase
from sharedbudget.domain.budgeting.ports import (
    BudgetRepository,
    GroupRepository,
    TransactionRepository,
)
from sharedbudget.infrastructure.budgeting.group_repository import MongoGroupRepository
from sharedbudget.infrastructure.budgeting.mongo_connection import MongoConnection
from sharedbudget.infrastructure.budgeting.owned_records import (
    MongoBudgetRepository,
    MongoTransactionRepository,
)


def get_mongo_connection(request: Request) -> MongoConnection:
    """Return the process-wide connection created in create_app."""
    return request.app.state.mongo_connection


def get_group_repository(
    connection: MongoConnection = Depends(get_mongo_connection),
) -> GroupRepository:
    return MongoGroupRepository(connection)


def get_transaction_repository(
    connection: MongoConnection = Depends(get_mongo_connection),
) -> TransactionRepository:
    return MongoTransactionRepository(connection)


def get_budget_repository(
    connection: MongoConnection = Depends(get_mongo_connection),
) -> BudgetRepository:
    return MongoBudgetRepository(connection)


# ----------------------------------------------------------------------
# Groups and profiles
# ----------------------------------------------------------------------


def get_list_groups_use_case(
    group_repo: GroupRepository = Depends(get_group_repository),
) -> ListGroupsUseCase:
    """Build ListGroupsUseCase with its infrastructure dependencies."""
    return ListGroupsUseCase(group_repo=group_repo)


def get_create_group_use_case(
    group_repo: GroupRepository = Depends(get_group_repository),
) -> CreateGroupUseCase:
    """Build CreateGroupUseCase with its infrastructure dependencies."""
    return CreateGroupUseCase(group_repo=group_repo)


def get_update_group_use_case(
    group_repo: GroupRepository = Depends(get_group_repository),
) -> UpdateGroupUseCase:
    """Build UpdateGroupUseCase with its infrastructure dependencies."""
    return UpdateGroupUseCase(group_repo=group_repo)


def get_delete_group_use_case(
    group_repo: GroupRepository = Depends(get_group_repository),
    transaction_repo: TransactionRepository = Depends(get_transaction_repository),
    budget_repo: BudgetRepository = Depends(get_budget_repository),
) -> DeleteGroupUseCase:
    """Build DeleteGroupUseCase with its infrastructure dependencies."""
    return DeleteGroupUseCase(
        group_repo=group_repo,
        transaction_repo=transaction_repo,
        budget_repo=budget_repo,
    )


def get_delete_profile_use_case(
    group_repo: GroupRepository = Depends(get_group_repository),
    transaction_repo: TransactionRepository = Depends(get_transaction_repository),
    budget_repo: BudgetRepository = Depends(get_budget_repository),
) -> DeleteProfileUseCase:
    """Build DeleteProfileUseCase with its infrastructure dependencies."""
    return DeleteProfileUseCase(
        group_repo=group_repo,
        transaction_repo=transaction_repo,
        budget_repo=budget_repo,
    )


# ----------------------------------------------------------------------
# Transactions
# ----------------------------------------------------------------------


def get_list_transactions_use_case(
    transaction_repo: TransactionRepository = Depends(get_transaction_repository),
) -> ListTransactionsUseCase:
    """Build ListTransactionsUseCase with its infrastructure dependencies."""
    return ListTransactionsUseCase(transaction_repo=transaction_repo)


def get_create_transaction_use_case(
    group_repo: GroupRepository = Depends(get_group_repository),
    transaction_repo: TransactionRepository = Depends(get_transaction_repository),
) -> CreateTransactionUseCase:
    """Build CreateTransactionUseCase with its infrastructure dependencies."""
    return CreateTransactionUseCase(
        group_repo=group_repo, transaction_repo=transaction_repo
    )


def get_delete_transaction_use_case(
    transaction_repo: TransactionRepository = Depends(get_transaction_repository),
) -> DeleteTransactionUseCase:
    """Build DeleteTransactionUseCase with its infrastructure dependencies."""
    return DeleteTransactionUseCase(transaction_repo=transaction_repo)


# ----------------------------------------------------------------------
# Budgets
# ----------------------------------------------------------------------


def get_list_budgets_use_case(
    budget_repo: BudgetRepository = Depends(get_budget_repository),
) -> ListBudgetsUseCase:
    """Build ListBudgetsUseCase with its infrastructure dependencies."""
    return ListBudgetsUseCase(budget_repo=budget_repo)


def get_create_budget_use_case(
    group_repo: GroupRepository = Depends(get_group_repository),
    budget_repo: BudgetRepository = Depends(get_budget_repository),
) -> CreateBudgetUseCase:
    """Build CreateBudgetUseCase with its infrastructure dependencies."""
    return CreateBudgetUseCase(group_repo=group_repo, budget_repo=budget_repo)


def get_delete_budget_use_case(
    budget_repo: BudgetRepository = Depends(get_budget_repository),
) -> DeleteBudgetUseCase:
    """Build DeleteBudgetUseCase with its infrastructure dependencies."""
    return DeleteBudgetUseCase(budget_repo=budget_repo)
