from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.hr_portal.hr_portal.database.bootstrap import ensure_super_admin
from src.hr_portal.hr_portal.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection(DBConfig(uri=settings.MONGO_URI, database=settings.MONGO_DB_NAME))
    try:
        created = ensure_super_admin(
            conn,
            email=settings.SEED_ADMIN_EMAIL,
            password=settings.SEED_ADMIN_PASSWORD,
        )
    finally:
        conn.close()

    if created:
        print(f"OK: Created superAdmin {settings.SEED_ADMIN_EMAIL}")
    else:
        print("OK: superAdmin already present, nothing to do")


if __name__ == "__main__":
    main()
