"""
Shared fixtures: in-memory repositories and an app wired to them.

The fakes implement the domain ports with plain dicts so API and use
case tests never need a MongoDB server. Ids are real ObjectId strings,
matching what the MongoDB adapters hand out.
"""

import os

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/sharedbudget_test")

from copy import deepcopy
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sharedbudget.core.config import Settings
from sharedbudget.domain.budgeting.entities import Group, GroupType, Profile
from sharedbudget.domain.budgeting.ports import (
    BudgetRepository,
    GroupRepository,
    TransactionRepository,
)
from sharedbudget.interfaces.budgeting.dependencies import (
    get_budget_repository,
    get_group_repository,
    get_transaction_repository,
)
from sharedbudget.main import create_app
from sharedbudget.shared.security.rate_limiting import RateLimiter


def new_id() -> str:
    return str(ObjectId())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryGroupRepository(GroupRepository):
    """GroupRepository over a dict. Records every call by name."""

    def __init__(self) -> None:
        self.groups = {}
        self.calls = []

    def list_all(self):
        self.calls.append("list_all")
        return [deepcopy(g) for g in self.groups.values()]

    def get_by_id(self, group_id):
        self.calls.append("get_by_id")
        group = self.groups.get(group_id)
        return deepcopy(group) if group else None

    def add(self, group):
        self.calls.append("add")
        stored = deepcopy(group)
        stored.id = new_id()
        stored.created_at = stored.updated_at = _now()
        for profile in stored.profiles:
            profile.id = profile.id or new_id()
        self.groups[stored.id] = stored
        return deepcopy(stored)

    def save(self, group):
        self.calls.append("save")
        if group.id not in self.groups:
            return None
        stored = deepcopy(group)
        stored.updated_at = _now()
        for profile in stored.profiles:
            profile.id = profile.id or new_id()
        self.groups[stored.id] = stored
        return deepcopy(stored)

    def delete(self, group_id):
        self.calls.append("delete")
        return self.groups.pop(group_id, None) is not None


class InMemoryRecordRepository:
    """Shared dict-backed store for transactions and budgets."""

    def __init__(self) -> None:
        self.records = {}

    def add(self, record):
        stored = deepcopy(record)
        stored.id = new_id()
        stored.created_at = _now()
        self.records[stored.id] = stored
        return deepcopy(stored)

    def delete(self, record_id):
        return self.records.pop(record_id, None) is not None

    def delete_by_group(self, group_id):
        return self._delete_where(lambda r: r.group_id == group_id)

    def delete_by_profile(self, profile_id):
        return self._delete_where(lambda r: r.profile_id == profile_id)

    def _delete_where(self, predicate):
        doomed = [key for key, record in self.records.items() if predicate(record)]
        for key in doomed:
            del self.records[key]
        return len(doomed)

    def list(self, group_id=None, profile_id=None):
        return [
            deepcopy(r)
            for r in self.records.values()
            if (group_id is None or r.group_id == group_id)
            and (profile_id is None or r.profile_id == profile_id)
        ]


class InMemoryTransactionRepository(InMemoryRecordRepository, TransactionRepository):
    pass


class InMemoryBudgetRepository(InMemoryRecordRepository, BudgetRepository):
    pass


@pytest.fixture
def group_repo() -> InMemoryGroupRepository:
    return InMemoryGroupRepository()


@pytest.fixture
def transaction_repo() -> InMemoryTransactionRepository:
    return InMemoryTransactionRepository()


@pytest.fixture
def budget_repo() -> InMemoryBudgetRepository:
    return InMemoryBudgetRepository()


@pytest.fixture
def stored_group(group_repo: InMemoryGroupRepository) -> Group:
    """A persisted family group with two profiles."""
    return group_repo.add(
        Group(
            name="Smiths",
            type=GroupType.FAMILY,
            profiles=[Profile(name="John"), Profile(name="Jane", color="#FF0000")],
        )
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        mongodb_uri="mongodb://localhost:27017/sharedbudget_test",
        environment="development",
    )


@pytest.fixture
def limiter() -> RateLimiter:
    return RateLimiter("100/minute")


@pytest.fixture
def app(
    settings: Settings,
    limiter: RateLimiter,
    group_repo: InMemoryGroupRepository,
    transaction_repo: InMemoryTransactionRepository,
    budget_repo: InMemoryBudgetRepository,
) -> FastAPI:
    """Application with repositories swapped for in-memory fakes."""
    application = create_app(
        settings=settings, rate_limiter=limiter, mongo_connection=MagicMock()
    )
    application.dependency_overrides[get_group_repository] = lambda: group_repo
    application.dependency_overrides[get_transaction_repository] = (
        lambda: transaction_repo
    )
    application.dependency_overrides[get_budget_repository] = lambda: budget_repo
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
