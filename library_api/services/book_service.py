from flask import current_app
from sqlalchemy.exc import IntegrityError

from library_api.errors import ConflictError, NotFoundError
from library_api.extensions import db
from library_api.models.book import Book
from library_api.repositories.book_repo import BookRepo

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10


def clamp_paging(page, limit):
    """Geçersiz değerler varsayılana döner: page >= 1, 1 <= limit <= 100."""
    try:
        page = int(page)
    except (TypeError, ValueError):
        page = 1
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        limit = DEFAULT_PAGE_SIZE
    if limit < 1:
        limit = DEFAULT_PAGE_SIZE
    return max(1, page), min(MAX_PAGE_SIZE, limit)


def pagination_meta(pagination):
    return {
        "currentPage": pagination.page,
        "itemsPerPage": pagination.per_page,
        "totalItems": pagination.total,
        "totalPages": pagination.pages,
        "hasNextPage": pagination.has_next,
        "hasPreviousPage": pagination.has_prev,
    }


class BookService:
    @staticmethod
    def list_books(search=None, page=1, limit=DEFAULT_PAGE_SIZE):
        page, limit = clamp_paging(page, limit)
        return db.paginate(
            BookRepo.search_query((search or "").strip() or None),
            page=page,
            per_page=limit,
            max_per_page=MAX_PAGE_SIZE,
            error_out=False,
        )

    @staticmethod
    def get_book(book_id: str):
        book = BookRepo.get(book_id)
        if not book:
            raise NotFoundError("Book not found")
        return book

    @staticmethod
    def create_book(data: dict):
        if BookRepo.get_by_isbn(data["isbn"]):
            raise ConflictError("ISBN already exists")

        book = Book(
            title=data["title"],
            author=data["author"],
            isbn=data["isbn"],
            quantity=int(data["quantity"]),
        )
        try:
            BookRepo.create(book)
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("ISBN already exists") from None

        current_app.logger.info(f"[books] created {book.id} isbn={book.isbn} qty={book.quantity}")
        return book

    @staticmethod
    def update_book(book_id: str, changes: dict):
        book = BookService.get_book(book_id)

        if "isbn" in changes and changes["isbn"] != book.isbn:
            other = BookRepo.get_by_isbn(changes["isbn"])
            if other and other.id != book.id:
                raise ConflictError("ISBN already exists")

        # quantity burada asla değişmez; stok sadece ödünç/iade ve restock ile oynar
        for k in ["title", "author", "isbn"]:
            if k in changes:
                setattr(book, k, changes[k])

        try:
            BookRepo.update()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("ISBN already exists") from None
        return book

    @staticmethod
    def restock(book_id: str, copies: int):
        if BookRepo.put_back(book_id, copies) == 0:
            db.session.rollback()
            raise NotFoundError("Book not found")
        BookRepo.update()

        book = BookRepo.get(book_id)
        current_app.logger.info(f"[books] restocked {book_id} +{copies} qty={book.quantity}")
        return book

    @staticmethod
    def delete_book(book_id: str):
        book = BookService.get_book(book_id)
        BookRepo.delete(book)
        current_app.logger.info(f"[books] deleted {book_id}")

    @staticmethod
    def total_books() -> int:
        return BookRepo.total_quantity()
