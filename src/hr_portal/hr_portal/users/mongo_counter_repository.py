from __future__ import annotations

from pymongo import ReturnDocument

from ..database.connection import DatabaseConnection
from ..database.mongo_base import COUNTERS
from .repository import CounterRepository


class MongoCounterRepository(CounterRepository):
    def __init__(self, conn: DatabaseConnection):
        self._conn = conn

    def next_value(self, name: str, *, start: int) -> int:
        # first call on a missing counter yields start + 1
        doc = self._conn.db[COUNTERS].find_one_and_update(
            {"_id": name},
            [{"$set": {"seq": {"$add": [{"$ifNull": ["$seq", int(start)]}, 1]}}}],
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(doc["seq"])
