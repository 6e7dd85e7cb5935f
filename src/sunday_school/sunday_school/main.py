from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .children.controller import register as register_children
from .classes.controller import register as register_classes
from .container import Container, build_container
from .core.constants import (
    DEFAULT_INDIVIDUAL_LEADERBOARD_LIMIT,
    DEFAULT_LEADERBOARD_REFRESH_SECONDS,
    DEFAULT_SESSION_DAYS,
)
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .events.controller import register as register_events
from .qr.controller import register as register_scanner
from .scores.controller import register as register_scores
from .teams.controller import register as register_teams
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Build the Flask app.

    A prepared ``container`` skips database bootstrapping entirely (used by the
    route tests with in-memory repositories).
    """

    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(REPO_ROOT / "templates"))

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))
    app.config["LEADERBOARD_REFRESH_SECONDS"] = int(
        getattr(settings, "LEADERBOARD_REFRESH_SECONDS", DEFAULT_LEADERBOARD_REFRESH_SECONDS)
    )
    app.permanent_session_lifetime = timedelta(days=app.config["SESSION_DAYS"])

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            individual_limit=int(
                getattr(settings, "INDIVIDUAL_LEADERBOARD_LIMIT", DEFAULT_INDIVIDUAL_LEADERBOARD_LIMIT)
            ),
        )

    register_users(app, container)
    register_dashboard(app, container)
    register_classes(app, container)
    register_children(app, container)
    register_events(app, container)
    register_teams(app, container)
    register_scores(app, container)
    register_scanner(app, container)

    return app
