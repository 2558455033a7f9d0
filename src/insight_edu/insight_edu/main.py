from __future__ import annotations

import atexit
import importlib

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .core.constants import DEFAULT_SYNC_WORKERS
from .dashboard.controller import register as register_dashboard
from .database.connection import DatabaseConnection, DBConfig
from .reconciliation.controller import register as register_sync


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    conn = DatabaseConnection(DBConfig.from_dict(db_config)).open()
    atexit.register(conn.close)
    if app.config["DEBUG"]:
        print("[insight-edu] settings=", settings_module, " db=", conn.describe())

    container = build_container(
        conn=conn,
        max_workers=int(getattr(settings, "SYNC_MAX_WORKERS", DEFAULT_SYNC_WORKERS)),
    )
    app.extensions["insight_edu"] = container

    register_dashboard(app, container)
    register_sync(app, container)

    return app
