from __future__ import annotations

import logging
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ttdbazaar.app.config import Config
from ttdbazaar.app.extensions import db, migrate, cors
from ttdbazaar.app.common.errors import ApiError, error_payload
from ttdbazaar.app.common.request_context import current_request_id, echo_request_id, init_request_id
from ttdbazaar.app.api.register import register_api_blueprints
from ttdbazaar.app.cli import cli_bp


def create_app(config_object: type[Config] = Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    # Extensions
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config.get("CORS_ORIGINS") or "*"}})

    # Request id
    @app.before_request
    def _before_request():
        init_request_id()

    app.after_request(echo_request_id)

    @app.get("/health")
    def health():
        return {"status": "ok"}, 200

    register_api_blueprints(app)

    # CLI (flask seed)
    app.register_blueprint(cli_bp)

    @app.get("/")
    def index():
        return (
            "<h1>TTD Bazaar</h1><p>Server is running. Visit <a href='/api'>/api</a>.</p>",
            200,
            {"Content-Type": "text/html"},
        )

    # Error handlers
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        return jsonify(err.to_dict(current_request_id())), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        # Normalize Werkzeug errors into our JSON shape
        payload = error_payload("http_error", err.description, {"name": err.name}, current_request_id())
        return jsonify(payload), err.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        app.logger.exception("Unhandled exception")
        payload = error_payload("internal_error", "Internal server error", None, current_request_id())
        return jsonify(payload), 500

    return app
