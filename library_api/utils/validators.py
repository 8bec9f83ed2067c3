import re

from flask import request

from library_api.errors import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value.strip()


def json_body() -> dict:
    """Boş body {} sayılır; JSON nesnesi olmayan body reddedilir."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _collect(errors):
    if errors:
        raise ValidationError(", ".join(errors))


def validate_register(data: dict):
    name = _text(data, "name")
    email = _text(data, "email").lower()
    password = data.get("password") or ""

    errors = []
    if len(name) < 2:
        errors.append("Name must be at least 2 characters")
    elif len(name) > 50:
        errors.append("Name must be less than 50 characters")
    if not email:
        errors.append("Email is required")
    elif not EMAIL_RE.match(email):
        errors.append("Invalid email address")
    if not isinstance(password, str) or not password:
        errors.append("Password is required")
    elif len(password) > 50:
        errors.append("Password must be less than 50 characters")
    _collect(errors)
    return name, email, password


def validate_login(data: dict):
    email = _text(data, "email").lower()
    password = data.get("password") or ""

    errors = []
    if not email:
        errors.append("Email is required")
    elif not EMAIL_RE.match(email):
        errors.append("Invalid email address")
    if not isinstance(password, str) or not password:
        errors.append("Password is required")
    elif len(password) > 50:
        errors.append("Password must be less than 50 characters")
    _collect(errors)
    return email, password


def _positive_int(value, message):
    # bool da int sayılır, onu dışarıda bırak
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(message)
    return value


def validate_book(data: dict):
    title = _text(data, "title")
    author = _text(data, "author")
    isbn = _text(data, "isbn")

    errors = []
    if not title:
        errors.append("Title is required")
    if not author:
        errors.append("Author is required")
    if not isbn:
        errors.append("ISBN is required")
    try:
        quantity = _positive_int(data.get("quantity"), "Quantity is required")
    except ValidationError as e:
        errors.append(str(e))
        quantity = None
    _collect(errors)
    return {"title": title, "author": author, "isbn": isbn, "quantity": quantity}


def validate_book_changes(data: dict):
    """Kısmi güncelleme: sadece gelen alanlar, quantity kabul edilmez."""
    changes = {}
    for key, label in (("title", "Title"), ("author", "Author"), ("isbn", "ISBN")):
        if key in data:
            value = _text(data, key)
            if not value:
                raise ValidationError(f"{label} cannot be empty")
            changes[key] = value
    if "quantity" in data:
        raise ValidationError("Quantity cannot be edited, use restock")
    if not changes:
        raise ValidationError("Nothing to update")
    return changes


def validate_restock(data: dict) -> int:
    return _positive_int(data.get("copies"), "Copies must be a positive integer")


def validate_book_id(data: dict) -> str:
    book_id = data.get("bookId")
    if not isinstance(book_id, str) or not book_id.strip():
        raise ValidationError("Book ID is required")
    return book_id.strip()
