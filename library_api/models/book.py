import uuid

from library_api.extensions import db
from library_api.utils.timeutil import utcnow


class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        # stok hiçbir zaman eksiye düşmesin
        db.CheckConstraint("quantity >= 0", name="ck_books_quantity_non_negative"),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = db.Column(db.String(255), nullable=False, index=True)
    author = db.Column(db.String(255), nullable=False, index=True)
    isbn = db.Column(db.String(32), unique=True, nullable=False, index=True)

    # raftaki (ödünçte olmayan) kopya sayısı
    quantity = db.Column(db.Integer, nullable=False, default=1)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    borrowings = db.relationship("Borrowing", back_populates="book", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Book {self.isbn} qty={self.quantity}>"
