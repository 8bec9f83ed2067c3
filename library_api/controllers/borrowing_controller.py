from flask import Blueprint, jsonify

from library_api.errors import json_error
from library_api.services.borrowing_service import BorrowingService
from library_api.utils.auth import current_user_id, require_session
from library_api.utils.timeutil import isoformat, utcnow
from library_api.utils.validators import json_body, validate_book_id

borrowing_bp = Blueprint("borrowings", __name__)
borrowing_bp.before_request(require_session)


def _borrowing_json(b, now=None):
    return {
        "id": b.id,
        "userId": b.user_id,
        "bookId": b.book_id,
        "borrowedAt": isoformat(b.borrowed_at),
        "dueDate": isoformat(b.due_date),
        "returnedAt": isoformat(b.returned_at),
        "status": b.effective_status(now).value,
    }


@borrowing_bp.get("")
def list_borrowings():
    now = utcnow()
    rows = BorrowingService.list_for_user(current_user_id())
    return jsonify({
        "status": "success",
        "message": "Borrowings found",
        "data": {"borrowedBooks": [
            {
                "id": book.id,
                "title": book.title,
                "author": book.author,
                "isbn": book.isbn,
                "quantity": book.quantity,
                "borrowingId": b.id,
                "borrowedAt": isoformat(b.borrowed_at),
                "dueDate": isoformat(b.due_date),
                "returnedAt": isoformat(b.returned_at),
                "status": b.effective_status(now).value,
            } for b, book in rows
        ]},
    }), 200


@borrowing_bp.post("/add")
def add_borrowing():
    # body'deki userId yok sayılır, kimlik sadece oturumdan gelir
    try:
        data = json_body()
        book_id = validate_book_id(data)
        b, book = BorrowingService.create_borrowing(
            current_user_id(), book_id, data.get("borrowedAt")
        )
        return jsonify({
            "status": "success",
            "message": "Borrowing added successfully",
            "data": {
                "duedate": isoformat(b.due_date),
                "borrowedAt": isoformat(b.borrowed_at),
                "book": {"title": book.title, "author": book.author, "isbn": book.isbn},
            },
        }), 201
    except ValueError as e:
        return json_error(str(e), 400)


@borrowing_bp.post("/update")
def update_borrowing():
    try:
        data = json_body()
        book_id = validate_book_id(data)
        b = BorrowingService.return_borrowing(
            current_user_id(), book_id, data.get("status"), data.get("returnedAt")
        )
        return jsonify({
            "status": "success",
            "message": "Borrowing updated successfully",
            "data": {"borrowing": _borrowing_json(b)},
        }), 201
    except ValueError as e:
        return json_error(str(e), 400)


@borrowing_bp.get("/total-borrowings")
def total_borrowings():
    return jsonify({
        "status": "success",
        "data": {"totalBorrowings": BorrowingService.total_borrowings()},
    }), 200
