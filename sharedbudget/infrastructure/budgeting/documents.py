"""
Mapping between domain entities and MongoDB documents, plus translation
of driver failures into the error taxonomy.

Document ids are ObjectIds; foreign keys (groupId, profileId) on
transactions and budgets are stored as their hex strings.
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError, WriteError

from sharedbudget.domain.budgeting.entities import (
    Budget,
    Group,
    GroupType,
    Profile,
    Transaction,
    TransactionType,
)
from sharedbudget.domain.budgeting.errors import DatabaseError, ValidationFailedError

logger = logging.getLogger(__name__)

DOCUMENT_VALIDATION_FAILURE = 121


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_object_id(value: Optional[str]) -> Optional[ObjectId]:
    """Return the ObjectId for a hex string, or None if it is malformed."""
    if value is None or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


# ----------------------------------------------------------------------
# Groups
# ----------------------------------------------------------------------


def profile_to_document(profile: Profile) -> dict[str, Any]:
    return {
        "_id": to_object_id(profile.id) or ObjectId(),
        "name": profile.name,
        "avatar": profile.avatar,
        "color": profile.color,
    }


def group_to_document(group: Group) -> dict[str, Any]:
    document = {
        "name": group.name,
        "type": group.type.value,
        "profiles": [profile_to_document(p) for p in group.profiles],
        "createdAt": group.created_at,
        "updatedAt": group.updated_at,
    }
    object_id = to_object_id(group.id)
    if object_id is not None:
        document["_id"] = object_id
    return document


def group_from_document(document: dict[str, Any]) -> Group:
    return Group(
        id=str(document["_id"]),
        name=document["name"],
        type=GroupType(document["type"]),
        profiles=[
            Profile(
                id=str(p["_id"]),
                name=p["name"],
                avatar=p.get("avatar", ""),
                color=p.get("color", ""),
            )
            for p in document.get("profiles", [])
        ],
        created_at=document.get("createdAt"),
        updated_at=document.get("updatedAt"),
    )


# ----------------------------------------------------------------------
# Transactions and budgets
# ----------------------------------------------------------------------


def transaction_to_document(transaction: Transaction) -> dict[str, Any]:
    return {
        "amount": transaction.amount,
        "description": transaction.description,
        "category": transaction.category,
        "date": transaction.date,
        "type": transaction.type.value,
        "profileId": transaction.profile_id,
        "groupId": transaction.group_id,
        "createdAt": transaction.created_at,
    }


def transaction_from_document(document: dict[str, Any]) -> Transaction:
    return Transaction(
        id=str(document["_id"]),
        amount=document["amount"],
        description=document["description"],
        category=document["category"],
        date=document["date"],
        type=TransactionType(document["type"]),
        profile_id=document["profileId"],
        group_id=document["groupId"],
        created_at=document.get("createdAt"),
    )


def budget_to_document(budget: Budget) -> dict[str, Any]:
    return {
        "category": budget.category,
        "amount": budget.amount,
        "period": budget.period,
        "profileId": budget.profile_id,
        "groupId": budget.group_id,
        "createdAt": budget.created_at,
    }


def budget_from_document(document: dict[str, Any]) -> Budget:
    return Budget(
        id=str(document["_id"]),
        category=document["category"],
        amount=document["amount"],
        period=document["period"],
        profile_id=document["profileId"],
        group_id=document["groupId"],
        created_at=document.get("createdAt"),
    )


def owner_filter(group_id: Optional[str], profile_id: Optional[str]) -> dict[str, str]:
    """Build a query on the groupId/profileId foreign keys."""
    query: dict[str, str] = {}
    if group_id is not None:
        query["groupId"] = group_id
    if profile_id is not None:
        query["profileId"] = profile_id
    return query


# ----------------------------------------------------------------------
# Error translation
# ----------------------------------------------------------------------


def validation_messages(exc: WriteError) -> list[str]:
    """Extract per-field messages from a document validation failure."""
    details = (exc.details or {}).get("errInfo", {}).get("details", {})
    messages: list[str] = []
    for rule in details.get("schemaRulesNotSatisfied", []):
        for prop in rule.get("propertiesNotSatisfied", []):
            for item in prop.get("details", []) or [{}]:
                reason = item.get("reason") or item.get("operatorName", "invalid value")
                messages.append(f"{prop.get('propertyName')}: {reason}")
        for missing in rule.get("missingProperties", []):
            messages.append(f"{missing}: is required")
    if not messages:
        messages.append((exc.details or {}).get("errmsg") or str(exc))
    return messages


@contextmanager
def translate_errors(failure_message: str) -> Iterator[None]:
    """Re-raise driver failures as taxonomy errors.

    Document validation failures become ValidationFailedError with field
    messages; every other driver failure becomes DatabaseError.
    """
    try:
        yield
    except WriteError as exc:
        if exc.code == DOCUMENT_VALIDATION_FAILURE:
            raise ValidationFailedError(
                "Validation failed", details=validation_messages(exc)
            ) from exc
        logger.error("%s: %s", failure_message, type(exc).__name__)
        raise DatabaseError(failure_message, details=str(exc)) from exc
    except PyMongoError as exc:
        logger.error("%s: %s", failure_message, type(exc).__name__)
        raise DatabaseError(failure_message, details=str(exc)) from exc
