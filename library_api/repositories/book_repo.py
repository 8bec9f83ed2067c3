from sqlalchemy import func, or_, select, update

from library_api.extensions import db
from library_api.models.book import Book


class BookRepo:
    @staticmethod
    def get(book_id: str):
        return db.session.get(Book, book_id)

    @staticmethod
    def get_by_isbn(isbn: str):
        return Book.query.filter_by(isbn=isbn).first()

    @staticmethod
    def search_query(search: str | None = None):
        stmt = select(Book)
        if search:
            # % ve _ literal aranır
            stmt = stmt.where(or_(
                Book.title.icontains(search, autoescape=True),
                Book.author.icontains(search, autoescape=True),
                Book.isbn.icontains(search, autoescape=True),
            ))
        return stmt.order_by(Book.title.asc(), Book.id.asc())

    @staticmethod
    def create(book: Book):
        db.session.add(book)
        db.session.commit()
        return book

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(book: Book):
        db.session.delete(book)
        db.session.commit()

    @staticmethod
    def take_copy(book_id: str) -> int:
        """
        Stok kontrolü ve düşümü tek koşullu UPDATE ile yapılır.
        Etkilenen satır sayısını döner: 0 ise kitap yok ya da stok bitmiş.
        Commit etmez, çağıran transaction'ı yönetir.
        """
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id, Book.quantity > 0)
            .values(quantity=Book.quantity - 1)
        )
        return result.rowcount

    @staticmethod
    def put_back(book_id: str, copies: int = 1) -> int:
        result = db.session.execute(
            update(Book)
            .where(Book.id == book_id)
            .values(quantity=Book.quantity + copies)
        )
        return result.rowcount

    @staticmethod
    def total_quantity() -> int:
        return db.session.scalar(select(func.coalesce(func.sum(Book.quantity), 0))) or 0
