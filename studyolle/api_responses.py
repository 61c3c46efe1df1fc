"""
API Response Utilities - Standardized error handling and responses
"""

from flask import jsonify
from functools import wraps
import logging
import traceback

from sqlalchemy.exc import SQLAlchemyError

from studyolle.exceptions import StudyolleException

logger = logging.getLogger(__name__)


# API Error Codes
class ErrorCode:
    SUCCESS = "SUCCESS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


DEFAULT_MESSAGES = {
    ErrorCode.VALIDATION_ERROR: "Invalid request parameters",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred",
    ErrorCode.DATABASE_ERROR: "The data store could not complete the request",
}


def success_response(data=None, message=None, status_code=200):
    """
    Standard success response format for API endpoints
    """
    response = {"code": ErrorCode.SUCCESS, "success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return jsonify(response), status_code


def error_response(
    error_code=ErrorCode.INTERNAL_ERROR,
    message=None,
    details=None,
    status_code=400,
    log_error=True,
    include_traceback=False,
):
    """
    Standard error response format for API endpoints
    """
    response = {"code": error_code, "success": False}
    response["message"] = message or DEFAULT_MESSAGES.get(error_code, "Request failed")

    if details:
        response["details"] = details

    if include_traceback:
        response["traceback"] = traceback.format_exc()

    if log_error and error_code in [ErrorCode.INTERNAL_ERROR, ErrorCode.VALIDATION_ERROR]:
        error_msg = f"{error_code}: {message} | Details: {details}"
        if error_code == ErrorCode.VALIDATION_ERROR:
            logger.warning(error_msg)
        elif include_traceback:
            logger.error(error_msg, exc_info=True)
        else:
            logger.error(error_msg)

    return jsonify(response), status_code


def handle_api_errors(f):
    """
    Decorator to standardize error handling for API endpoints
    Automatically catches exceptions and returns consistent error responses
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except StudyolleException as e:
            return error_response(e.code, message=e.message, details=getattr(e, "errors", None),
                                  status_code=e.status_code)
        except SQLAlchemyError as e:
            logger.error(f"Store failure in {f.__name__}: {e}")
            return error_response(ErrorCode.DATABASE_ERROR, status_code=500, log_error=False)
        except Exception as e:
            logger.error(f"Unhandled exception in {f.__name__}: {e}", exc_info=True)
            return error_response(
                ErrorCode.INTERNAL_ERROR,
                message="An unexpected error occurred",
                status_code=500,
                log_error=False,
            )

    return wrapper


def validation_error_response(result):
    """
    Convenience function turning a failed ValidationResult into a 400 response
    """
    return error_response(
        ErrorCode.VALIDATION_ERROR,
        message="Validation failed",
        details=result.errors,
        status_code=400,
    )
