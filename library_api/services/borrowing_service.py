from datetime import timedelta

from flask import current_app
from sqlalchemy.exc import IntegrityError

from library_api.errors import ConflictError, NotFoundError, ValidationError
from library_api.models.borrowing import Borrowing, BorrowingStatus
from library_api.repositories.book_repo import BookRepo
from library_api.repositories.borrowing_repo import BorrowingRepo
from library_api.utils.timeutil import parse_timestamp, utcnow

LOAN_PERIOD = timedelta(days=14)

# iade isteğinde kabul edilen sonuçlar; OVERDUE okunurken hesaplanır, set edilmez
CLOSING_STATUSES = {
    "RETURNED": BorrowingStatus.RETURNED,
    "LOST": BorrowingStatus.LOST,
}


class BorrowingService:
    @staticmethod
    def create_borrowing(user_id: str, book_id: str, borrowed_at=None):
        """
        Stok düşümü + ödünç kaydı tek transaction.
        Stok kontrolü ayrı bir SELECT ile değil, koşullu UPDATE ile yapılır;
        aynı son kopyayı isteyen iki istekten yalnızca biri başarılı olur.

        Returns: (borrowing, book)
        """
        borrowed_at = utcnow() if borrowed_at is None else parse_timestamp(borrowed_at, "borrowedAt")
        try:
            due_date = borrowed_at + LOAN_PERIOD
        except OverflowError:
            # 9999-12-18 sonrası: iade tarihi datetime.max'ı aşar
            raise ValidationError("borrowedAt is out of range") from None

        try:
            if BookRepo.take_copy(book_id) == 0:
                book = BookRepo.get(book_id)
                if book is None:
                    raise NotFoundError("Book not found")
                raise ConflictError("Book is not available")

            if BorrowingRepo.find_open(user_id, book_id) is not None:
                raise ConflictError("Book already borrowed by this user")

            borrowing = BorrowingRepo.add(Borrowing(
                user_id=user_id,
                book_id=book_id,
                borrowed_at=borrowed_at,
                due_date=due_date,
                status=BorrowingStatus.BORROWED,
            ))
            BorrowingRepo.commit()

        except IntegrityError:
            # eşzamanlı ikinci açık ödünç -> partial unique index
            BorrowingRepo.rollback()
            current_app.logger.warning(f"[borrowing] duplicate open loan user={user_id} book={book_id}")
            raise ConflictError("Book already borrowed by this user") from None
        except ValueError as e:
            BorrowingRepo.rollback()
            current_app.logger.warning(f"[borrowing] borrow rejected user={user_id} book={book_id}: {e}")
            raise

        book = BookRepo.get(book_id)
        current_app.logger.info(
            f"[borrowing] borrowed user={user_id} book={book_id} due={borrowing.due_date.isoformat()} "
            f"remaining={book.quantity}"
        )
        return borrowing, book

    @staticmethod
    def return_borrowing(user_id: str, book_id: str, status, returned_at=None):
        """
        Açık ödüncü kapatır. RETURNED stoğu 1 artırır, LOST artırmaz.
        Kapatma "returned_at IS NULL" koşullu UPDATE ile yapılır; aynı iade
        iki kez gelirse ikincisi hiçbir şeyi değiştirmeden Conflict alır.
        """
        if not isinstance(status, str) or status.upper() not in CLOSING_STATUSES:
            raise ValidationError("Status must be one of RETURNED, LOST")
        new_status = CLOSING_STATUSES[status.upper()]
        returned_at = utcnow() if returned_at is None else parse_timestamp(returned_at, "returnedAt")

        try:
            borrowing = BorrowingRepo.find_open(user_id, book_id)
            if borrowing is None:
                raise ConflictError("Borrowing not found or already returned")

            if returned_at < borrowing.borrowed_at:
                raise ValidationError("returnedAt cannot be before borrowedAt")

            if BorrowingRepo.close(borrowing.id, returned_at, new_status) == 0:
                raise ConflictError("Borrowing not found or already returned")

            if new_status == BorrowingStatus.RETURNED:
                BookRepo.put_back(book_id)

            BorrowingRepo.commit()

        except ValueError as e:
            BorrowingRepo.rollback()
            current_app.logger.warning(f"[borrowing] return rejected user={user_id} book={book_id}: {e}")
            raise

        borrowing = BorrowingRepo.get(borrowing.id)
        current_app.logger.info(
            f"[borrowing] closed user={user_id} book={book_id} status={new_status.value}"
        )
        return borrowing

    @staticmethod
    def list_for_user(user_id: str):
        return BorrowingRepo.list_by_user(user_id)

    @staticmethod
    def total_borrowings() -> int:
        return BorrowingRepo.count_all()
