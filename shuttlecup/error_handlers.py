from flask import Blueprint, current_app, jsonify

from .errors import AppError, AuthorizationError, NotFoundError, ValidationError

error_handlers_bp = Blueprint("error_handlers", __name__)


@error_handlers_bp.app_errorhandler(ValidationError)
def handle_validation_error(error):
    """Handles malformed submissions."""
    current_app.logger.warning(f"Validation Error: {error.message}")
    return jsonify({"error": error.message}), error.status_code


@error_handlers_bp.app_errorhandler(NotFoundError)
def handle_not_found_error(error):
    """Handles unknown match ids."""
    current_app.logger.warning(f"Not Found Error: {error.message}")
    return jsonify({"error": error.message}), error.status_code


@error_handlers_bp.app_errorhandler(AuthorizationError)
def handle_authorization_error(error):
    """Handles edits attempted without an admin session."""
    current_app.logger.warning(f"Authorization Error: {error.message}")
    return jsonify({"error": error.message}), error.status_code


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles generic application errors."""
    current_app.logger.error(f"Application Error: {error.message}")
    return jsonify({"error": error.message}), error.status_code


@error_handlers_bp.app_errorhandler(404)
def handle_404(e):
    """Handles generic 404 errors for routes that don't exist."""
    return jsonify({"error": "Not found."}), 404


@error_handlers_bp.app_errorhandler(405)
def handle_405(e):
    """Handles requests with an unsupported method."""
    return jsonify({"error": "Method not allowed."}), 405


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return jsonify({"error": "Internal server error."}), 500
