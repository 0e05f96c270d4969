from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .auth.controller import register as register_auth
from .common.http import register_error_handlers
from .container import build_container
from .core.enums import Role
from .dashboard.controller import register as register_dashboard
from .database.store import RecordStore
from .expenses.controller import register as register_expenses
from .payroll.controller import register as register_payroll
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(settings: Any) -> None:
    level = str(getattr(settings, "LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def seed_admin(store: RecordStore, settings: Any) -> None:
    email = getattr(settings, "SEED_ADMIN_EMAIL", None)
    password = getattr(settings, "SEED_ADMIN_PASSWORD", None)
    if not email or not password:
        logger.info("No seed admin configured")
        return
    store.ensure_seed_user(
        email=email,
        password=password,
        name=getattr(settings, "SEED_ADMIN_NAME", "Demo Admin"),
        role=Role.ADMIN,
        department="Management",
    )


def create_app(settings: Optional[Any] = None, *, store: Optional[RecordStore] = None) -> Flask:
    if settings is None:
        load_dotenv(override=False)
        settings = importlib.import_module(get_settings_module())

    _configure_logging(settings)

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    container = build_container(settings, store=store)
    if bool(getattr(settings, "AUTO_SEED_DB", True)):
        seed_admin(container.store, settings)

    app.extensions["payroll_container"] = container

    register_error_handlers(app)
    register_auth(app, container)
    register_users(app, container)
    register_payroll(app, container)
    register_expenses(app, container)
    register_dashboard(app, container)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    return app
