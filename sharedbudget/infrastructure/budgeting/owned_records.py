"""
Adapters: Transaction and budget repositories.

Implements TransactionRepository and BudgetRepository ports.
Both record kinds hang off a profile through the same groupId/profileId
foreign keys, so they share one MongoDB implementation and differ only
in collection and document mapping.
"""

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from pymongo.collection import Collection

from sharedbudget.domain.budgeting.entities import Budget, Transaction
from sharedbudget.domain.budgeting.ports import BudgetRepository, TransactionRepository
from sharedbudget.infrastructure.budgeting.documents import (
    budget_from_document,
    budget_to_document,
    owner_filter,
    to_object_id,
    transaction_from_document,
    transaction_to_document,
    translate_errors,
    utcnow,
)
from sharedbudget.infrastructure.budgeting.mongo_connection import (
    BUDGETS_COLLECTION,
    TRANSACTIONS_COLLECTION,
    MongoConnection,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Transaction, Budget)


class _OwnedRecordStore(Generic[RecordT]):
    """Shared MongoDB operations for records owned by a profile."""

    collection_name: str
    label: str
    to_document: Callable[[Any], dict[str, Any]]
    from_document: Callable[[dict[str, Any]], Any]

    def __init__(self, connection: MongoConnection) -> None:
        self._connection = connection

    def _collection(self) -> Collection:
        return self._connection.get_database()[self.collection_name]

    def list(
        self, group_id: Optional[str] = None, profile_id: Optional[str] = None
    ) -> list[RecordT]:
        with translate_errors(f"Failed to fetch {self.label}s"):
            documents = list(self._collection().find(owner_filter(group_id, profile_id)))
        return [self.from_document(doc) for doc in documents]

    def add(self, record: RecordT) -> RecordT:
        record.created_at = utcnow()
        document = self.to_document(record)
        with translate_errors(f"Failed to create {self.label}"):
            result = self._collection().insert_one(document)
        document["_id"] = result.inserted_id
        return self.from_document(document)

    def delete(self, record_id: str) -> bool:
        object_id = to_object_id(record_id)
        if object_id is None:
            return False
        with translate_errors(f"Failed to delete {self.label}"):
            result = self._collection().delete_one({"_id": object_id})
        return result.deleted_count > 0

    def delete_by_group(self, group_id: str) -> int:
        return self._delete_many(owner_filter(group_id, None))

    def delete_by_profile(self, profile_id: str) -> int:
        return self._delete_many(owner_filter(None, profile_id))

    def _delete_many(self, query: dict[str, str]) -> int:
        with translate_errors(f"Failed to delete {self.label}s"):
            result = self._collection().delete_many(query)
        logger.info("Deleted %d %s(s) matching %s", result.deleted_count, self.label, query)
        return result.deleted_count


class MongoTransactionRepository(_OwnedRecordStore[Transaction], TransactionRepository):
    """MongoDB implementation of the transaction repository."""

    collection_name = TRANSACTIONS_COLLECTION
    label = "transaction"
    to_document = staticmethod(transaction_to_document)
    from_document = staticmethod(transaction_from_document)


class MongoBudgetRepository(_OwnedRecordStore[Budget], BudgetRepository):
    """MongoDB implementation of the budget repository."""

    collection_name = BUDGETS_COLLECTION
    label = "budget"
    to_document = staticmethod(budget_to_document)
    from_document = staticmethod(budget_from_document)
