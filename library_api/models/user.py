import uuid

from library_api.extensions import db
from library_api.utils.timeutil import utcnow


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(50), nullable=False, index=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    borrowings = db.relationship(
        "Borrowing",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Borrowing.borrowed_at.desc()",
    )

    def __repr__(self):
        return f"<User {self.email}>"
