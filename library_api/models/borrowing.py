import enum
import uuid
from datetime import datetime

from library_api.extensions import db
from library_api.utils.timeutil import utcnow


class BorrowingStatus(str, enum.Enum):
    BORROWED = "BORROWED"
    RETURNED = "RETURNED"
    OVERDUE = "OVERDUE"
    LOST = "LOST"


class Borrowing(db.Model):
    __tablename__ = "borrowings"
    __table_args__ = (
        # bir kullanıcının aynı kitap için tek bir açık ödüncü olabilir
        db.Index(
            "uq_borrowings_open_loan",
            "user_id",
            "book_id",
            unique=True,
            postgresql_where=db.text("returned_at IS NULL"),
            sqlite_where=db.text("returned_at IS NULL"),
        ),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    user_id = db.Column(
        db.String(36), db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    book_id = db.Column(
        db.String(36), db.ForeignKey("books.id", ondelete="CASCADE"), nullable=False, index=True
    )

    borrowed_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    due_date = db.Column(db.DateTime, nullable=False)
    returned_at = db.Column(db.DateTime, nullable=True)

    status = db.Column(
        db.Enum(BorrowingStatus, name="borrowing_status"),
        nullable=False,
        default=BorrowingStatus.BORROWED,
    )

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    user = db.relationship("User", back_populates="borrowings")
    book = db.relationship("Book", back_populates="borrowings")

    @property
    def is_open(self) -> bool:
        return self.returned_at is None

    def effective_status(self, now: datetime | None = None) -> BorrowingStatus:
        """
        OVERDUE hiçbir zaman yazılmaz; açık ve süresi geçmiş ödünç okunurken hesaplanır.
        """
        if self.is_open and self.status == BorrowingStatus.BORROWED:
            if (now or utcnow()) > self.due_date:
                return BorrowingStatus.OVERDUE
        return self.status

    def __repr__(self):
        return f"<Borrowing {self.id} user={self.user_id} book={self.book_id} {self.status.value}>"
