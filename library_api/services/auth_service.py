from flask import current_app
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from library_api.errors import ConflictError, LibraryError
from library_api.extensions import db
from library_api.models.user import User
from library_api.repositories.user_repo import UserRepo


class InvalidCredentials(LibraryError):
    pass


class AuthService:
    @staticmethod
    def register(name: str, email: str, password: str):
        if UserRepo.get_by_email(email):
            raise ConflictError("User already exists")

        user = User(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
        )
        try:
            UserRepo.create(user)
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("User already exists") from None

        current_app.logger.info(f"[auth] registered {user.id}")
        return user, create_access_token(identity=user)

    @staticmethod
    def login(email: str, password: str):
        user = UserRepo.get_by_email(email)
        if not user or not check_password_hash(user.password_hash, password):
            current_app.logger.warning(f"[auth] failed login for {email}")
            raise InvalidCredentials("Invalid email or password")

        return user, create_access_token(identity=user)
