from sqlalchemy import func, or_, select

from library_api.models.user import User
from library_api.extensions import db


class UserRepo:
    @staticmethod
    def get_by_email(email: str):
        return User.query.filter_by(email=email).first()

    @staticmethod
    def get_by_id(user_id: str):
        return db.session.get(User, user_id)

    @staticmethod
    def create(user: User):
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def count() -> int:
        return db.session.scalar(select(func.count(User.id))) or 0

    @staticmethod
    def search_query(search: str | None = None):
        stmt = select(User)
        if search:
            stmt = stmt.where(or_(
                User.name.icontains(search, autoescape=True),
                User.email.icontains(search, autoescape=True),
            ))
        return stmt.order_by(User.name.asc(), User.id.asc())
