from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.datetime_utils import parse_time_of_day
from .common.logging_setup import configure_logging
from .common.web import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_IDENTITY_HEADER
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .employees.controller import register as register_employees
from .reports.controller import register as register_reports
from .settings import get_settings_module

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["IDENTITY_HEADER"] = getattr(settings, "IDENTITY_HEADER", DEFAULT_IDENTITY_HEADER)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), log_file=getattr(settings, "LOG_FILE", None))
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            late_after=parse_time_of_day(str(getattr(settings, "LATE_CUTOFF", "09:30"))),
            half_day_hours=float(getattr(settings, "HALF_DAY_HOURS", 4)),
        )

    register_error_handlers(app)
    register_employees(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
