"""Flask application entry point."""

import logging

from flask import Flask, jsonify
from flask_cors import CORS

from .auth import AuthGate, AuthService
from .auth.api import auth_bp
from .config import Settings, settings
from .db import init_db
from .exceptions import (
    AlreadyExists,
    AuthenticationError,
    RenoBoardError,
    ValidationError,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred"


def _error_body(error_type: str, message: str, details: dict | None = None) -> dict:
    response = {
        "error": {
            "type": error_type,
            "message": message
        }
    }
    if details:
        response["error"]["details"] = details
    return response


# Error handlers
def handle_validation_error(error):
    """Handle ValidationError exceptions."""
    return jsonify(_error_body("ValidationError", error.message, error.details)), 400


def handle_authentication_error(error):
    """Handle AuthenticationError exceptions.

    Details stay server-side so the response never reveals which check failed.
    """
    if error.details:
        logger.warning(f"Authentication error: {error.message} {error.details}")
    return jsonify(_error_body("AuthenticationError", error.message)), 401


def handle_already_exists(error):
    """Handle AlreadyExists exceptions."""
    return jsonify(_error_body("AlreadyExists", error.message)), 409


def handle_renoboard_error(error):
    """Handle any other RenoBoardError.

    Server-side failures (status 500) are logged in full and answered with
    a generic message.
    """
    if error.status_code >= 500:
        logger.error(f"{error.__class__.__name__}: {error.message} {error.details}")
        return jsonify(_error_body(error.__class__.__name__, INTERNAL_ERROR_MESSAGE)), 500
    return jsonify(
        _error_body(error.__class__.__name__, error.message, error.details)
    ), error.status_code


def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {getattr(error, 'original_exception', None) or error}")
    return jsonify(_error_body("InternalServerError", INTERNAL_ERROR_MESSAGE)), 500


def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


def _log_secret_status(config: Settings):
    # Length only, never the value
    if config.jwt_secret_key:
        logger.info(f"JWT signing secret loaded ({len(config.jwt_secret_key)} characters)")
    else:
        logger.error(
            "JWT signing secret is not configured; "
            "token routes will fail until RENOBOARD_JWT_SECRET_KEY is set"
        )


def create_app(config: Settings | None = None) -> Flask:
    """
    Create the Flask application.

    The signing secret is read once here. The password hasher, token codec,
    auth service and auth gate are built from the given Settings and stored in
    app.extensions["renoboard"] for the blueprints to use.

    Args:
        config: Settings instance (defaults to the process-wide settings)
    """
    config = config or settings

    app = Flask(__name__)

    # CORS configuration
    CORS(app, origins=config.cors_origins, supports_credentials=True)

    # Database initialization (runs once on app startup)
    try:
        init_db(config.database_path)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    _log_secret_status(config)

    auth_service = AuthService.from_settings(config)
    app.extensions["renoboard"] = {
        "settings": config,
        "auth_service": auth_service,
        "auth_gate": AuthGate(auth_service.codec),
    }

    app.register_error_handler(ValidationError, handle_validation_error)
    app.register_error_handler(AuthenticationError, handle_authentication_error)
    app.register_error_handler(AlreadyExists, handle_already_exists)
    app.register_error_handler(RenoBoardError, handle_renoboard_error)
    app.register_error_handler(500, handle_internal_error)

    app.add_url_rule("/health", "health", health)
    app.register_blueprint(auth_bp)

    return app


app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
