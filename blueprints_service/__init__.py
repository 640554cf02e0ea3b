"""Flask app factory and blueprint registration.

Defines `create_app()` to initialize the Flask app, load configuration,
enable CORS, wire the blueprint service (persistence + active filter) and
register route blueprints.
"""

from __future__ import annotations

import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from blueprints_service.config import Config, ensure_data_dirs
from blueprints_service.routes.blueprints import blueprints_bp, envelope
from blueprints_service.services.blueprint_service import BlueprintsService
from blueprints_service.services.filters import get_filter
from blueprints_service.services.persistence import build_persistence

# Load .env for local dev if available
load_dotenv()


def create_app(cfg: Config = Config, service: Optional[BlueprintsService] = None) -> Flask:
    app = Flask(__name__)
    # Basic config
    app.config.from_object(cfg)
    ensure_data_dirs(cfg)
    # Allow all origins for local development
    CORS(
        app,
        resources={r"/*": {"origins": cfg.CORS_ORIGINS}},
        supports_credentials=False,
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "OPTIONS"],
    )

    if service is None:
        blueprint_filter = get_filter(cfg.FILTER)
        logging.info(f"Active blueprint filter: {blueprint_filter.name}")
        service = BlueprintsService(build_persistence(cfg), blueprint_filter)
    app.extensions["blueprints_service"] = service

    # Blueprints
    app.register_blueprint(blueprints_bp, url_prefix=f"{cfg.API_PREFIX.rstrip('/')}/blueprints")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        # Unknown paths, wrong methods, etc. still answer with the envelope
        return envelope(e.code, e.description or e.name)

    return app
