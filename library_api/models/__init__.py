from library_api.models.user import User
from library_api.models.book import Book
from library_api.models.borrowing import Borrowing, BorrowingStatus

__all__ = ["User", "Book", "Borrowing", "BorrowingStatus"]
