from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_portal.hr_portal.database.bootstrap import ensure_indexes, seed_roles
from src.hr_portal.hr_portal.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig(uri=settings.MONGO_URI, database=settings.MONGO_DB_NAME))
    try:
        ensure_indexes(conn)
        seed_roles(conn)
        print(f"OK: Indexes and roles ready -> {settings.MONGO_DB_NAME}")
    finally:
        conn.close()


if __name__ == "__main__":
    main()
