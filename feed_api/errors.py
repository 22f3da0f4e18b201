import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from feed_api.db import db


logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base for every failure the API reports as a structured response."""

    status_code = 500
    message = "An unexpected error occurred."

    def __init__(self, message=None, data=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.data = data

    def to_dict(self):
        payload = {"message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class Unauthenticated(ApiError):
    status_code = 401
    message = "Not authenticated."


class TokenInvalid(ApiError):
    # Reported as a server error, not 401.
    status_code = 500
    message = "Token verification failed."


class Forbidden(ApiError):
    status_code = 403
    message = "Not authorized!"


class NotFound(ApiError):
    status_code = 404
    message = "Could not find post."


class ValidationFailed(ApiError):
    status_code = 422
    message = "Validation failed, entered data is incorrect."


class InternalError(ApiError):
    status_code = 500


class MediaStorageError(ApiError):
    status_code = 503
    message = "Media storage is unavailable"


def _handle_api_error(error: ApiError):
    if error.status_code >= 500:
        logger.error("%s: %s", type(error).__name__, error.message)
    return jsonify(error.to_dict()), error.status_code


def _handle_http_exception(error: HTTPException):
    return jsonify({"message": error.description}), error.code


def _handle_unexpected_error(error: Exception):
    logger.exception("Unhandled error while processing request")
    db.session.rollback()
    return jsonify({"message": ApiError.message}), 500


def register_error_handlers(app):
    app.register_error_handler(ApiError, _handle_api_error)
    app.register_error_handler(HTTPException, _handle_http_exception)
    app.register_error_handler(Exception, _handle_unexpected_error)
