"""JSON error responses for the application."""

from flask import Blueprint, current_app, jsonify

from .errors import AppError, NotFoundError, ValidationError

error_handlers_bp = Blueprint("error_handlers", __name__)


@error_handlers_bp.app_errorhandler(ValidationError)
def handle_validation_error(error):
    """Handles validation errors."""
    current_app.logger.warning(f"Validation Error: {error.message}")
    return jsonify(error=error.message), error.status_code


@error_handlers_bp.app_errorhandler(NotFoundError)
def handle_not_found_error(error):
    """Handles not found errors."""
    current_app.logger.warning(f"Not Found Error: {error.message}")
    return jsonify(error=error.message), error.status_code


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles generic application errors."""
    current_app.logger.error(f"Application Error: {error.message}")
    return jsonify(error=error.message), error.status_code


@error_handlers_bp.app_errorhandler(404)
def handle_404(e):
    """Handles generic 404 errors for routes that don't exist."""
    return jsonify(error="Page Not Found"), 404


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return jsonify(error="Internal Server Error"), 500
