import pytest

from library_api.cli import SEED_BOOKS, seed_books
from library_api.extensions import db
from library_api.models import Book, Borrowing


@pytest.fixture
def token(make_user):
    return make_user()[1]


def _add(client, headers, **fields):
    payload = {"title": "Dune", "author": "Frank Herbert", "isbn": "978-0441172719", "quantity": 3}
    payload.update(fields)
    return client.post("/books/add", json=payload, headers=headers)


def test_books_require_session(client):
    assert client.get("/books").status_code == 401
    assert client.post("/books/add", json={}).status_code == 401


def test_add_book_and_reject_duplicate_isbn(client, token, bearer):
    first = _add(client, bearer(token))
    dup = _add(client, bearer(token), title="Another")

    assert first.status_code == 201
    book = first.get_json()["data"]["book"]
    assert book["title"] == "Dune"
    assert book["quantity"] == 3
    assert book["id"]
    assert dup.status_code == 400
    assert dup.get_json() == {"status": "error", "message": "ISBN already exists"}


def test_add_book_validation_messages(client, token, bearer):
    resp = client.post("/books/add", json={"title": " ", "quantity": 0}, headers=bearer(token))

    assert resp.status_code == 400
    message = resp.get_json()["message"]
    assert "Title is required" in message
    assert "Author is required" in message
    assert "ISBN is required" in message
    assert "Quantity is required" in message


def test_list_books_paginates_by_title(client, token, bearer, make_book):
    for i, title in enumerate(["Gamma", "Alpha", "Delta", "Beta", "Epsilon"]):
        make_book(quantity=1, title=title, isbn=f"isbn-{i}")

    resp = client.get("/books?page=2&limit=2", headers=bearer(token))

    assert resp.status_code == 200
    body = resp.get_json()
    assert [b["title"] for b in body["data"]["books"]] == ["Delta", "Epsilon"]
    assert body["pagination"] == {
        "currentPage": 2,
        "itemsPerPage": 2,
        "totalItems": 5,
        "totalPages": 3,
        "hasNextPage": True,
        "hasPreviousPage": True,
    }


def test_list_books_clamps_bad_paging(client, token, bearer, make_book):
    make_book(quantity=1)

    resp = client.get("/books?page=-4&limit=5000", headers=bearer(token))

    pagination = resp.get_json()["pagination"]
    assert pagination["currentPage"] == 1
    assert pagination["itemsPerPage"] == 100

    resp = client.get("/books?page=abc&limit=zero", headers=bearer(token))
    pagination = resp.get_json()["pagination"]
    assert pagination["currentPage"] == 1
    assert pagination["itemsPerPage"] == 10


def test_search_matches_title_author_and_isbn(client, token, bearer, make_book):
    make_book(quantity=1, title="The Hobbit", author="J.R.R. Tolkien", isbn="9780-7432-7357-2")
    make_book(quantity=1, title="1984", author="George Orwell", isbn="9780-0-452-28423-4")
    make_book(quantity=1, title="Animal Farm", author="George Orwell", isbn="9780-0-452-28424-1")

    by_author = client.get("/books?search=orwell", headers=bearer(token)).get_json()
    by_isbn = client.get("/books?search=7357", headers=bearer(token)).get_json()
    nothing = client.get("/books?search=zzz", headers=bearer(token)).get_json()

    assert [b["title"] for b in by_author["data"]["books"]] == ["1984", "Animal Farm"]
    assert [b["title"] for b in by_isbn["data"]["books"]] == ["The Hobbit"]
    assert nothing["data"]["books"] == []
    assert nothing["pagination"]["totalPages"] == 0
    assert nothing["pagination"]["hasNextPage"] is False


def test_update_book_does_not_touch_quantity(app, client, token, bearer, make_book):
    book_id = make_book(quantity=4, title="Old Title")

    resp = client.post(f"/books/update/{book_id}", json={"title": "New Title"}, headers=bearer(token))
    rejected = client.post(f"/books/update/{book_id}", json={"quantity": 99}, headers=bearer(token))

    assert resp.status_code == 201
    assert resp.get_json()["data"]["book"]["title"] == "New Title"
    assert rejected.status_code == 400
    with app.app_context():
        assert db.session.get(Book, book_id).quantity == 4


def test_update_book_errors(client, token, bearer, make_book):
    make_book(quantity=1, isbn="taken")
    book_id = make_book(quantity=1, isbn="mine")

    missing = client.post("/books/update/nope", json={"title": "X"}, headers=bearer(token))
    clash = client.post(f"/books/update/{book_id}", json={"isbn": "taken"}, headers=bearer(token))

    assert missing.get_json() == {"status": "error", "message": "Book not found"}
    assert clash.status_code == 400
    assert clash.get_json()["message"] == "ISBN already exists"


def test_restock_adds_copies(app, client, token, bearer, make_book):
    book_id = make_book(quantity=0)

    resp = client.post(f"/books/restock/{book_id}", json={"copies": 2}, headers=bearer(token))
    bad = client.post(f"/books/restock/{book_id}", json={"copies": -1}, headers=bearer(token))
    missing = client.post("/books/restock/nope", json={"copies": 1}, headers=bearer(token))

    assert resp.status_code == 201
    assert resp.get_json()["data"]["book"]["quantity"] == 2
    assert bad.status_code == 400
    assert missing.get_json()["message"] == "Book not found"


def test_delete_book_cascades_to_borrowings(app, client, token, bearer, make_book):
    book_id = make_book(quantity=2)
    client.post("/borrowings/add", json={"bookId": book_id}, headers=bearer(token))

    resp = client.post(f"/books/delete/{book_id}", headers=bearer(token))
    again = client.post(f"/books/delete/{book_id}", headers=bearer(token))

    assert resp.status_code == 201
    assert again.status_code == 400
    with app.app_context():
        assert db.session.get(Book, book_id) is None
        assert Borrowing.query.filter_by(book_id=book_id).count() == 0


def test_total_books_sums_quantity(client, token, bearer, make_book):
    assert client.get("/books/total-books", headers=bearer(token)).get_json()["data"] == {"totalBooks": 0}

    make_book(quantity=3)
    make_book(quantity=4)

    resp = client.get("/books/total-books", headers=bearer(token))
    assert resp.get_json()["data"] == {"totalBooks": 7}


def test_seed_is_idempotent(app):
    with app.app_context():
        assert seed_books() == len(SEED_BOOKS)
        assert seed_books() == 0
        assert Book.query.count() == len(SEED_BOOKS)


def test_seed_cli_command(app):
    result = app.test_cli_runner().invoke(args=["seed"])

    assert result.exit_code == 0
    assert f"Seeded {len(SEED_BOOKS)} book(s)" in result.output


def test_search_treats_wildcards_literally(client, token, bearer, make_book):
    make_book(quantity=1, title="100% Pure", isbn="isbn-pct")
    make_book(quantity=1, title="Plain Title", isbn="isbn-plain")
    make_book(quantity=1, title="snake_case", isbn="isbn-under")

    percent = client.get("/books?search=%25", headers=bearer(token)).get_json()
    underscore = client.get("/books?search=_", headers=bearer(token)).get_json()

    assert [b["title"] for b in percent["data"]["books"]] == ["100% Pure"]
    assert [b["title"] for b in underscore["data"]["books"]] == ["snake_case"]
