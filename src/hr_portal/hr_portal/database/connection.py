from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    uri: str
    database: str
    server_selection_timeout_ms: int = 5000


class DatabaseConnection:
    """Owns one MongoClient for the life of the process.

    Created by the container at startup and closed at shutdown; repositories
    receive it explicitly. The client is lazy, so building the container does
    not touch the network until the first query.
    """

    def __init__(self, config: DBConfig, *, client: Optional[MongoClient] = None):
        self._config = config
        self._client = client

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            self._client = MongoClient(
                self._config.uri,
                serverSelectionTimeoutMS=int(self._config.server_selection_timeout_ms),
                tz_aware=False,
            )
            logger.info("MongoDB client created for database %s", self._config.database)
        return self._client

    @property
    def db(self) -> Database:
        return self.client[self._config.database]

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("MongoDB client closed")
