import click
from flask import current_app
from flask.cli import with_appcontext

from library_api.extensions import db
from library_api.models.book import Book
from library_api.repositories.book_repo import BookRepo

SEED_BOOKS = [
    ("The Great Gatsby", "F. Scott Fitzgerald", "9780-0-7432-7356-5", 10),
    ("To Kill a Mockingbird", "Harper Lee", "9780-0-06-112008-4", 10),
    ("1984", "George Orwell", "9780-0-452-28423-4", 10),
    ("Pride and Prejudice", "Jane Austen", "9780-0-14-143951-8", 10),
    ("The Catcher in the Rye", "J.D. Salinger", "9780-316-76948-0", 10),
    ("Harry Potter and the Sorcerer's Stone", "J.K. Rowling", "9780-590-35340-3", 10),
    ("The Lord of the Rings", "J.R.R. Tolkien", "9780-7432-7357-1", 0),
    ("The Hobbit", "J.R.R. Tolkien", "9780-7432-7357-2", 0),
    ("The Alchemist", "Paulo Coelho", "9780-7432-7357-3", 1),
    ("The Little Prince", "Antoine de Saint-Exupéry", "9780-7432-7357-4", 1),
]


def seed_books() -> int:
    """Var olan ISBN'leri atlar, eklenen kitap sayısını döner."""
    created = 0
    for title, author, isbn, quantity in SEED_BOOKS:
        if BookRepo.get_by_isbn(isbn):
            continue
        db.session.add(Book(title=title, author=author, isbn=isbn, quantity=quantity))
        created += 1
    db.session.commit()
    current_app.logger.info(f"[seed] {created} book(s) created")
    return created


@click.command("seed")
@with_appcontext
def seed_command():
    """Demo kitap kataloğunu ekler."""
    created = seed_books()
    click.echo(f"Seeded {created} book(s)")


def init_cli(app):
    app.cli.add_command(seed_command)
