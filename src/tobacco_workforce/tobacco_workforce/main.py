from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.web import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_DRAFT_TTL_HOURS
from .database.bootstrap import apply_schema, ensure_demo_accounts, list_tables
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll
from .schedules.controller import register as register_schedules
from .users.controller import register as register_users
from .work_entries.controller import register as register_work_entries

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module, db_config.get("user"), db_config.get("host"), db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=ROOT_DIR / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_accounts(db_config)
            logger.info("demo accounts ready")

        container = build_container(
            db_config=db_config,
            data_dir=getattr(settings, "DATA_DIR", ROOT_DIR / "data"),
            draft_ttl_hours=int(getattr(settings, "DRAFT_TTL_HOURS", DEFAULT_DRAFT_TTL_HOURS)),
            fallback_account=getattr(settings, "FALLBACK_ACCOUNT", None),
        )

    register_error_handlers(app)
    register_users(app, container)
    register_employees(app, container)
    register_schedules(app, container)
    register_work_entries(app, container)
    register_payroll(app, container)

    return app
