from flask import jsonify
from werkzeug.exceptions import HTTPException

from library_api.extensions import db


class LibraryError(ValueError):
    """API'nin {"status": "error", "message": ...} olarak döndüğü hataların tabanı."""


class NotFoundError(LibraryError):
    pass


class ConflictError(LibraryError):
    pass


class ValidationError(LibraryError):
    pass


def json_error(message, code=400):
    return jsonify({"status": "error", "message": message}), code


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def _http_error(e):
        return json_error(e.description or e.name, e.code)

    @app.errorhandler(Exception)
    def _unhandled(e):
        db.session.rollback()
        app.logger.exception(f"[error] Unhandled exception: {e}")
        return json_error("Internal server error", 500)
