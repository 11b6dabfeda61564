"""Application factory."""

import os
import uuid

from flask import Flask, g, jsonify, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException

from config import Config
from errors import ApiError
from models import db
from routes.auth import auth_bp
from routes.users import users_bp
from services import init_services
from utils.responses import error_body

migrate = Migrate()
jwt = JWTManager()


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(str(app.config.get("LOG_LEVEL", "INFO")).upper())

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    init_services(app)

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Rate limiting
    storage_uri = app.config.get("RATELIMIT_STORAGE_URI", "memory://")
    headers_enabled = app.config.get("RATELIMIT_HEADERS_ENABLED", True)
    key_prefix = app.config.get("RATELIMIT_KEY_PREFIX") or str(uuid.uuid4())

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[lambda: app.config.get("RATE_LIMIT", "60 per minute")],
        storage_uri=storage_uri,
        headers_enabled=headers_enabled,
        key_prefix=key_prefix,
    )
    limiter.init_app(app)
    app.config["RATELIMIT_KEY_PREFIX"] = key_prefix

    # Blueprints
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(users_bp, url_prefix="/users")

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    # Errors
    _register_error_handlers(app)

    return app


def _register_error_handlers(app: Flask) -> None:
    """Register JSON envelope error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        app.logger.debug(
            "%s %s -> %s [%s]",
            request.method,
            request.path,
            response.status_code,
            request_id,
        )
        return response

    @app.errorhandler(ApiError)
    def _handle_api_error(error: ApiError):
        if not error.operational:
            app.logger.error(
                "%s [%s]: %s",
                error.code,
                g.get("request_id"),
                error.message,
                exc_info=error.__cause__ or error,
            )
        response = jsonify(error_body(error.message, error.code, error.details))
        response.status_code = error.kind.status
        return response

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        code = (getattr(error, "name", None) or "Error").upper().replace(" ", "_")
        response = error.get_response()
        response.set_data(app.json.dumps(error_body(error.description, code)))
        response.content_type = "application/json"
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):
        app.logger.exception(
            "Unhandled application error [%s]", g.get("request_id"), exc_info=error
        )
        response = jsonify(error_body("Internal Server Error", "INTERNAL_ERROR"))
        response.status_code = 500
        return response


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
