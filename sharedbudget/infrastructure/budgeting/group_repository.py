"""
Adapter: Group repository.

Implements GroupRepository port.
Groups are stored as single documents in the usergroups collection with
their profiles embedded, so every update is a single-document write.
"""

import logging
from typing import Optional

from pymongo import ReturnDocument
from pymongo.collection import Collection

from sharedbudget.domain.budgeting.entities import Group
from sharedbudget.domain.budgeting.ports import GroupRepository
from sharedbudget.infrastructure.budgeting.documents import (
    group_from_document,
    group_to_document,
    to_object_id,
    translate_errors,
    utcnow,
)
from sharedbudget.infrastructure.budgeting.mongo_connection import (
    GROUPS_COLLECTION,
    MongoConnection,
)

logger = logging.getLogger(__name__)


class MongoGroupRepository(GroupRepository):
    """MongoDB implementation of the group repository."""

    def __init__(self, connection: MongoConnection) -> None:
        self._connection = connection

    def _collection(self) -> Collection:
        return self._connection.get_database()[GROUPS_COLLECTION]

    def list_all(self) -> list[Group]:
        with translate_errors("Failed to fetch user groups"):
            documents = list(self._collection().find({}))
        return [group_from_document(doc) for doc in documents]

    def get_by_id(self, group_id: str) -> Optional[Group]:
        object_id = to_object_id(group_id)
        if object_id is None:
            return None
        with translate_errors("Failed to fetch user group"):
            document = self._collection().find_one({"_id": object_id})
        return group_from_document(document) if document else None

    def add(self, group: Group) -> Group:
        now = utcnow()
        group.created_at = now
        group.updated_at = now
        document = group_to_document(group)
        with translate_errors("Failed to create user group"):
            result = self._collection().insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Created group %s", result.inserted_id)
        return group_from_document(document)

    def save(self, group: Group) -> Optional[Group]:
        object_id = to_object_id(group.id)
        if object_id is None:
            return None
        group.updated_at = utcnow()
        document = group_to_document(group)
        document.pop("_id", None)
        with translate_errors("Failed to update user group"):
            stored = self._collection().find_one_and_replace(
                {"_id": object_id},
                document,
                return_document=ReturnDocument.AFTER,
            )
        return group_from_document(stored) if stored else None

    def delete(self, group_id: str) -> bool:
        object_id = to_object_id(group_id)
        if object_id is None:
            return False
        with translate_errors("Failed to delete user group"):
            result = self._collection().delete_one({"_id": object_id})
        return result.deleted_count > 0
