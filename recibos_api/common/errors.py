# recibos_api/common/errors.py
from flask import current_app
from werkzeug.exceptions import HTTPException

from recibos_api.common.http import fail


class APIError(Exception):
    """Custom API Error class."""
    code = "API_ERROR"
    status_code = 400

    def __init__(self, message, code=None, status_code=None, payload=None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload


class InvalidInput(APIError):
    """Missing or malformed request fields."""
    code = "INVALID_INPUT"
    status_code = 400


class NotFound(APIError):
    code = "NOT_FOUND"
    status_code = 404


class DuplicateTaxId(APIError):
    """A CPF that is already on file."""
    code = "DUPLICATE_TAX_ID"
    status_code = 409


class NoEmployees(APIError):
    """Receipts were requested but no employee is registered."""
    code = "NO_EMPLOYEES"
    status_code = 404


class RenderFailure(APIError):
    """Template or PDF engine error; aborts the whole batch."""
    code = "RENDER_FAILURE"
    status_code = 500


class StoreFailure(APIError):
    code = "STORE_FAILURE"
    status_code = 500


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def _api_error(e: APIError):
        if e.status_code >= 500:
            current_app.logger.error("%s: %s", e.code, e.message)
        return fail(e.message, status=e.status_code, code=e.code, detail=e.payload)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return fail(e.description or e.name, status=e.code or 500)

    @app.errorhandler(Exception)
    def _500(e: Exception):
        app.logger.exception(e)
        return fail("Internal server error", status=500)
