from flask import Blueprint, jsonify, request

from library_api.errors import json_error
from library_api.services.book_service import BookService, pagination_meta
from library_api.utils.auth import require_session
from library_api.utils.timeutil import isoformat
from library_api.utils.validators import json_body, validate_book, validate_book_changes, validate_restock

book_bp = Blueprint("books", __name__)
book_bp.before_request(require_session)


def _book_json(b):
    return {
        "id": b.id,
        "title": b.title,
        "author": b.author,
        "isbn": b.isbn,
        "quantity": b.quantity,
        "createdAt": isoformat(b.created_at),
        "updatedAt": isoformat(b.updated_at),
    }


@book_bp.get("")
def list_books():
    pagination = BookService.list_books(
        request.args.get("search"),
        request.args.get("page", 1),
        request.args.get("limit", 10),
    )
    return jsonify({
        "status": "success",
        "message": "Books found",
        "data": {"books": [_book_json(b) for b in pagination.items]},
        "pagination": pagination_meta(pagination),
    }), 200


@book_bp.post("/add")
def add_book():
    try:
        data = json_body()
        b = BookService.create_book(validate_book(data))
        return jsonify({
            "status": "success",
            "message": "Book added successfully",
            "data": {"book": _book_json(b)},
        }), 201
    except ValueError as e:
        return json_error(str(e), 400)


@book_bp.post("/update/<book_id>")
def update_book(book_id: str):
    try:
        data = json_body()
        b = BookService.update_book(book_id, validate_book_changes(data))
        return jsonify({
            "status": "success",
            "message": "Book updated successfully",
            "data": {"book": _book_json(b)},
        }), 201
    except ValueError as e:
        return json_error(str(e), 400)


@book_bp.post("/restock/<book_id>")
def restock_book(book_id: str):
    try:
        data = json_body()
        b = BookService.restock(book_id, validate_restock(data))
        return jsonify({
            "status": "success",
            "message": "Book restocked successfully",
            "data": {"book": _book_json(b)},
        }), 201
    except ValueError as e:
        return json_error(str(e), 400)


@book_bp.post("/delete/<book_id>")
def delete_book(book_id: str):
    try:
        BookService.delete_book(book_id)
        return jsonify({"status": "success", "message": "Book deleted successfully"}), 201
    except ValueError as e:
        return json_error(str(e), 400)


@book_bp.get("/total-books")
def total_books():
    return jsonify({
        "status": "success",
        "message": "Total books found",
        "data": {"totalBooks": BookService.total_books()},
    }), 200
