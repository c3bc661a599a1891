from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .common.logging_config import configure_logging
from .common.web import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container, build_store
from .ledger.controller import register as register_ledger
from .packages.controller import register as register_packages
from .projections.controller import register as register_projections
from .sessions.controller import register as register_sessions
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), json_output=bool(getattr(settings, "LOG_JSON", False)))

    if container is None:
        backend = getattr(settings, "STORAGE_BACKEND", "memory")
        store = build_store(
            backend=backend,
            db_config=getattr(settings, "DB_CONFIG"),
            storage_key=getattr(settings, "STORAGE_KEY"),
            auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        )
        container = build_container(store=store)
        logger.info("Settings %s loaded, storage backend %s", settings_module, backend)

    app.extensions["attendease"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_sessions(app, container)
    register_packages(app, container)
    register_ledger(app, container)
    register_projections(app, container)

    return app
