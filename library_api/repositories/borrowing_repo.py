from datetime import datetime

from sqlalchemy import func, select, update

from library_api.extensions import db
from library_api.models.book import Book
from library_api.models.borrowing import Borrowing, BorrowingStatus


class BorrowingRepo:
    @staticmethod
    def get(borrowing_id: str):
        return db.session.get(Borrowing, borrowing_id)

    @staticmethod
    def find_open(user_id: str, book_id: str):
        return Borrowing.query.filter(
            Borrowing.user_id == user_id,
            Borrowing.book_id == book_id,
            Borrowing.returned_at.is_(None),
        ).first()

    @staticmethod
    def list_by_user(user_id: str):
        """(Borrowing, Book) çiftleri, en yeni ödünç önce."""
        return db.session.execute(
            select(Borrowing, Book)
            .join(Book, Book.id == Borrowing.book_id)
            .where(Borrowing.user_id == user_id)
            .order_by(Borrowing.borrowed_at.desc(), Borrowing.id.asc())
        ).all()

    @staticmethod
    def count_all() -> int:
        return db.session.scalar(select(func.count(Borrowing.id))) or 0

    @staticmethod
    def add(borrowing: Borrowing):
        # commit yok: ödünç kaydı ve stok düşümü aynı transaction'da
        db.session.add(borrowing)
        db.session.flush()
        return borrowing

    @staticmethod
    def close(borrowing_id: str, returned_at: datetime, status: BorrowingStatus) -> int:
        """Yalnızca hâlâ açık olan kaydı kapatır (compare-and-set)."""
        result = db.session.execute(
            update(Borrowing)
            .where(Borrowing.id == borrowing_id, Borrowing.returned_at.is_(None))
            .values(returned_at=returned_at, status=status)
        )
        return result.rowcount

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()
