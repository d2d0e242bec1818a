from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .admins.controller import register as register_auth
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_default_admin, list_tables
from .database.connection import DBConfig
from .employees.controller import register as register_employees
from .notices.controller import register as register_notices
from .notifications.controller import register as register_notifications
from .overtime.controller import register as register_overtime
from .payroll.controller import register as register_payroll
from .requests.controller import register as register_requests
from .timeoffs.controller import register as register_timeoffs

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    When no container is given, one is built on MySQL from the active settings
    module (and the schema/seed are applied if the settings ask for it).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_default_admin(db_config)
            logger.info("Demo seed ready")

        container = build_container(db_config=db_config)

    register_auth(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_requests(app, container)
    register_timeoffs(app, container)
    register_overtime(app, container)
    register_notifications(app, container)
    register_notices(app, container)
    register_payroll(app, container)
    register_dashboard(app, container)

    return app
