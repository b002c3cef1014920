# jobtrack/__init__.py
from __future__ import annotations
import logging
from datetime import datetime, timezone

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import get_config
from .extensions import init_supabase, init_openai, login_manager
from .routes import register_routes

ERROR_CODES = {400: "bad_request", 401: "unauthorized", 404: "not_found",
               405: "method_not_allowed", 413: "too_large"}

def create_app(env: str | None = None, **overrides) -> Flask:
    """
    Build the API app. Keyword overrides are applied on top of the resolved
    config; pass SUPABASE / OPENAI_CLIENT to supply ready-made clients.
    """
    app = Flask(__name__)
    app.config.from_object(get_config(env))
    app.config.update(overrides)

    # CORS & logging
    CORS(app, origins=app.config["CORS_ORIGINS"] or "*")
    logging.basicConfig(level=logging.INFO)

    # Extensions / clients
    if app.config.get("SUPABASE") is None:
        app.config["SUPABASE"] = init_supabase(app.config)
    if app.config.get("OPENAI_CLIENT") is None:
        app.config["OPENAI_CLIENT"] = init_openai(app.config)

    # ---------- Flask-Login (bearer tokens) ----------
    from .security import tokens  # noqa: F401  registers request_loader / unauthorized handler
    login_manager.init_app(app)

    # ---------- Blueprints ----------
    register_routes(app)

    @app.errorhandler(HTTPException)
    def http_error(e):
        code = ERROR_CODES.get(e.code, "error")
        if e.code == 413:
            return jsonify(error=code, message="Upload is too large."), 413
        return jsonify(error=code, message=e.description), e.code

    @app.errorhandler(Exception)
    def unhandled_error(e):
        app.logger.exception("Unhandled error")
        return jsonify(error="server_error", message="Something went wrong on our side. Please try again."), 500

    @app.get("/healthz")
    def health():
        return {"ok": True, "ts": datetime.now(timezone.utc).isoformat()}

    return app
