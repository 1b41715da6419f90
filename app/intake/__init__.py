import logging
import time
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask, g, render_template, request
from flask_cors import CORS

from app.intake.admin import bp as admin_bp
from app.intake.auth import AuthError, verifier_from_config
from app.intake.config import load_config
from app.intake.routes import bp as routes_bp
from app.intake.storage import StoreError, store_from_config


def _build_app(overrides: Mapping[str, Any] | None) -> Flask:
    load_dotenv()
    app = Flask(__name__, template_folder="templates", static_folder="static")
    app.config.from_mapping(load_config())
    if overrides:
        app.config.from_mapping(overrides)

    # Production guardrails (fail fast with clear logs)
    env = (app.config.get("ENV") or "").strip().lower()
    if env in ("prod", "production"):
        if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", "change-me"):
            raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")
        if not app.config.get("ADMIN_PASS") or str(app.config["ADMIN_PASS"]) in ("", "change-me"):
            raise RuntimeError("ADMIN_PASS must be set to a strong value in production (not default).")

    store = store_from_config(app.config)
    store.ensure_initialized()
    app.extensions["intake_store"] = store
    app.extensions["intake_verifier"] = verifier_from_config(app.config)

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        if request.path.startswith(("/static/", "/health", "/healthz")):
            return response
        started = getattr(g, "request_started", None)
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        app.logger.info("%s %s %s %.1f ms", request.method, request.path, response.status_code, elapsed_ms)
        return response

    @app.errorhandler(AuthError)
    def _err_auth(e: AuthError):
        return "Authentication required", 401, {"WWW-Authenticate": e.challenge}

    @app.errorhandler(StoreError)
    def _err_store(e: StoreError):
        app.logger.exception("Submission store error: %s", e)
        return render_template("errors/500.html"), 500

    return app


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    app = _build_app(overrides)
    CORS(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})
    app.register_blueprint(routes_bp)
    app.register_blueprint(admin_bp, url_prefix="/admin")

    logging.getLogger(__name__).info(
        "create_app() complete; storing submissions in %s", app.extensions["intake_store"].path
    )
    return app


def create_admin_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Viewer-only app: the admin pages mounted at `/`, for running on its own port."""
    app = _build_app(overrides)
    app.register_blueprint(admin_bp)

    logging.getLogger(__name__).info("create_admin_app() complete")
    return app
