from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import ensure_indexes, ensure_super_admin, seed_roles

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .reports.controller import register as register_reports
from .users.controller import register as register_users

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)
    logger.info("Starting HR portal with settings=%s", settings_module)

    if container is None:
        container = build_container(settings=settings)
        atexit.register(container.close)

    if container.conn is not None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            ensure_indexes(container.conn)
            seed_roles(container.conn)
            logger.info("Database indexes and roles ready")
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            created = ensure_super_admin(
                container.conn,
                email=str(getattr(settings, "SEED_ADMIN_EMAIL")),
                password=str(getattr(settings, "SEED_ADMIN_PASSWORD")),
            )
            if created:
                logger.info("Seed superAdmin account created")

    app.extensions["container"] = container

    register_users(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
