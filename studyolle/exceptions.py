"""
StudyOlle - Custom Exceptions and Exception Handlers
"""
import structlog
from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

logger = structlog.get_logger('exceptions')


class StudyolleException(Exception):
    """Base exception for StudyOlle"""
    status_code = 400

    def __init__(self, message: str, code: str = "STUDYOLLE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self):
        return {
            'error': True,
            'code': self.code,
            'message': self.message
        }


class DatabaseException(StudyolleException):
    """Database-related exceptions"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message, code="DATABASE_ERROR")
        logger.error(f"Database error: {message}")


class ValidationException(StudyolleException):
    """Validation-related exceptions"""
    status_code = 400

    def __init__(self, message: str, errors=None):
        super().__init__(message, code="VALIDATION_ERROR")
        self.errors = errors or []
        logger.warning(f"Validation error: {message}")

    def to_dict(self):
        data = super().to_dict()
        if self.errors:
            data['details'] = self.errors
        return data


def register_exception_handlers(app):
    """Register exception handlers with Flask app"""

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Handle HTTP exceptions"""
        return jsonify({
            'error': True,
            'code': e.name.upper().replace(' ', '_'),
            'message': e.description
        }), e.code

    @app.errorhandler(StudyolleException)
    def handle_studyolle_exception(e):
        """Handle StudyOlle custom exceptions"""
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(e):
        """Store failures abort the request"""
        logger.error(f"Store failure: {e}")
        error = DatabaseException("The data store could not complete the request")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(Exception)
    def handle_generic_exception(e):
        """Handle all other exceptions"""
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return jsonify({
            'error': True,
            'code': 'INTERNAL_ERROR',
            'message': 'An unexpected error occurred'
        }), 500
