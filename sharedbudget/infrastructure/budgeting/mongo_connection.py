"""
Adapter: MongoDB connection cache.

Holds a single MongoClient for the lifetime of the process. The client is
created and verified lazily on first use and reused afterwards. A lock
makes concurrent first callers wait for the one in-flight attempt
instead of opening their own connections. A failed attempt is not
cached, so the next request retries.
"""

import logging
import re
import threading
from typing import Any, Callable, Optional
from urllib.parse import quote, unquote

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import ConfigurationError, PyMongoError

from sharedbudget.domain.budgeting.errors import DatabaseError

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "sharedbudget"

GROUPS_COLLECTION = "usergroups"
TRANSACTIONS_COLLECTION = "profiletransactions"
BUDGETS_COLLECTION = "profilebudgets"

_CREDENTIALS_URI = re.compile(r"^(mongodb(?:\+srv)?://)([^:/@]+):(.+)@([^@]+)$")


def ensure_encoded_mongo_uri(uri: str) -> str:
    """Percent-encode the password component of a MongoDB URI.

    Passwords containing '@', ':' or '/' break URI parsing unless encoded.
    Already-encoded passwords are left as they are.
    """
    match = _CREDENTIALS_URI.match(uri or "")
    if not match:
        return uri
    scheme, username, password, rest = match.groups()
    return f"{scheme}{username}:{quote(unquote(password), safe='')}@{rest}"


def redact_mongo_uri(uri: str) -> str:
    """Return the URI with its password masked, for logging."""
    match = _CREDENTIALS_URI.match(uri or "")
    if not match:
        return uri
    scheme, username, _, rest = match.groups()
    return f"{scheme}{username}:********@{rest}"


class MongoConnection:
    """Process-scoped, lazily established MongoDB connection.

    Usage:
        connection = MongoConnection(settings.mongodb_uri)
        db = connection.get_database()   # connects on first call
        connection.close()               # on shutdown
    """

    def __init__(
        self,
        uri: str,
        db_name: Optional[str] = None,
        max_pool_size: int = 10,
        server_selection_timeout_ms: int = 5000,
        socket_timeout_ms: int = 45000,
        client_factory: Callable[..., Any] = MongoClient,
    ) -> None:
        self._uri = ensure_encoded_mongo_uri(uri)
        self._db_name = db_name
        self._client_options = {
            "maxPoolSize": max_pool_size,
            "serverSelectionTimeoutMS": server_selection_timeout_ms,
            "socketTimeoutMS": socket_timeout_ms,
        }
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self._database: Optional[Database] = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    def get_database(self) -> Database:
        """Return the connected database, connecting on first use.

        Raises:
            DatabaseError: If the connection attempt fails.
        """
        database = self._database
        if database is not None:
            return database

        with self._lock:
            if self._database is None:
                self._database = self._connect()
            return self._database

    def _connect(self) -> Database:
        logger.info(
            "Connecting to MongoDB at %s (pool=%d)",
            redact_mongo_uri(self._uri),
            self._client_options["maxPoolSize"],
        )
        client = None
        try:
            client = self._client_factory(self._uri, **self._client_options)
            client.admin.command("ping")
            database = self._resolve_database(client)
            _ensure_indexes(database)
        except PyMongoError as exc:
            logger.error("MongoDB connection failed: %s", type(exc).__name__)
            if client is not None:
                client.close()
            raise DatabaseError("Failed to connect to database") from exc

        self._client = client
        logger.info("Connected to MongoDB database '%s'", database.name)
        return database

    def _resolve_database(self, client: Any) -> Database:
        if self._db_name:
            return client[self._db_name]
        try:
            return client.get_default_database()
        except ConfigurationError:
            return client[DEFAULT_DB_NAME]

    def close(self) -> None:
        """Close the client. A later get_database() reconnects."""
        with self._lock:
            if self._client is not None:
                self._client.close()
                logger.info("MongoDB connection closed")
            self._client = None
            self._database = None


def _ensure_indexes(database: Database) -> None:
    """Index the foreign keys used by listings and cascade deletes."""
    for collection_name in (TRANSACTIONS_COLLECTION, BUDGETS_COLLECTION):
        collection = database[collection_name]
        collection.create_index([("groupId", ASCENDING)])
        collection.create_index([("profileId", ASCENDING)])
