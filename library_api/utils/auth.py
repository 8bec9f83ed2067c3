from flask import jsonify
from flask_jwt_extended import current_user, verify_jwt_in_request

from library_api.extensions import jwt
from library_api.repositories.user_repo import UserRepo


def _unauthorized(message):
    return jsonify({"status": "error", "message": message}), 401


def init_jwt_callbacks():
    """
    Token -> User çözümlemesi. Core sadece doğrulanmış user id görür,
    istek gövdesindeki userId hiçbir yerde kullanılmaz.
    """

    @jwt.user_identity_loader
    def _identity(user):
        return str(user.id) if hasattr(user, "id") else str(user)

    @jwt.user_lookup_loader
    def _lookup(_jwt_header, jwt_data):
        return UserRepo.get_by_id(jwt_data["sub"])

    @jwt.user_lookup_error_loader
    def _user_missing(_jwt_header, _jwt_data):
        return _unauthorized("User not found")

    @jwt.unauthorized_loader
    def _missing_token(_reason):
        return _unauthorized("Unauthorized")

    @jwt.invalid_token_loader
    def _invalid_token(_reason):
        return _unauthorized("Not Authorized, Invalid Token")

    @jwt.expired_token_loader
    def _expired_token(_jwt_header, _jwt_data):
        return _unauthorized("Not Authorized, Invalid Token")


def require_session():
    """Blueprint before_request: bütün route'lar oturum ister."""
    verify_jwt_in_request()


def current_user_id() -> str:
    return str(current_user.id)
