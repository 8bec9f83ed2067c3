import uuid

import pytest

from library_api import create_app
from library_api.extensions import db
from library_api.models import Book
from library_api.services.auth_service import AuthService


@pytest.fixture
def app(tmp_path):
    # Her test için ayrı bir SQLite dosyası; eşzamanlılık testi de gerçek bağlantılar kullanır
    db_file = tmp_path / "library_test.db"
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{db_file}",
        "SQLALCHEMY_ENGINE_OPTIONS": {"connect_args": {"timeout": 30, "check_same_thread": False}},
        "JWT_SECRET_KEY": "test-jwt-secret-key-that-is-long-enough-for-hs256",
        "JWT_COOKIE_SECURE": False,
        "LOG_LEVEL": "WARNING",
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    counter = {"n": 0}

    def _make(name=None, email=None, password="secret"):
        counter["n"] += 1
        n = counter["n"]
        with app.app_context():
            user, token = AuthService.register(
                name=name or f"Reader {n}",
                email=email or f"reader{n}@example.com",
                password=password,
            )
            return user.id, token

    return _make


@pytest.fixture
def make_book(app):
    def _make(quantity=1, book_id=None, title="Dune", author="Frank Herbert", isbn=None):
        with app.app_context():
            book = Book(
                title=title,
                author=author,
                isbn=isbn or f"978-{uuid.uuid4().hex[:10]}",
                quantity=quantity,
            )
            if book_id:
                book.id = book_id
            db.session.add(book)
            db.session.commit()
            return book.id

    return _make


@pytest.fixture
def bearer():
    def _headers(token):
        return {"Authorization": f"Bearer {token}"}

    return _headers
