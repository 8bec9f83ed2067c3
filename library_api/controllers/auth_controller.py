from flask import Blueprint, jsonify, request
from flask_jwt_extended import current_user, jwt_required, set_access_cookies, unset_jwt_cookies

from library_api.errors import json_error
from library_api.services.auth_service import AuthService, InvalidCredentials
from library_api.services.book_service import pagination_meta
from library_api.services.user_service import UserService
from library_api.utils.timeutil import isoformat, utcnow
from library_api.utils.validators import json_body, validate_login, validate_register

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register")
def register():
    try:
        data = json_body()
        name, email, password = validate_register(data)
        user, token = AuthService.register(name=name, email=email, password=password)
    except ValueError as e:
        return json_error(str(e), 400)

    resp = jsonify({
        "status": "success",
        "message": "Registered successfully",
        "data": {
            "user": {"id": user.id, "name": user.name, "email": user.email},
            "token": token,
        },
    })
    set_access_cookies(resp, token)
    return resp, 201


@auth_bp.post("/login")
def login():
    try:
        data = json_body()
        email, password = validate_login(data)
        user, token = AuthService.login(email, password)
    except InvalidCredentials as e:
        return json_error(str(e), 401)
    except ValueError as e:
        return json_error(str(e), 400)

    resp = jsonify({
        "status": "success",
        "message": "Logged in successfully",
        "data": {
            "user": {"id": user.id, "email": user.email},
            "token": token,
        },
    })
    set_access_cookies(resp, token)
    return resp, 201


@auth_bp.post("/logout")
def logout():
    resp = jsonify({"status": "success", "message": "Logged out successfully"})
    unset_jwt_cookies(resp)
    return resp, 201


@auth_bp.get("/user")
@jwt_required()
def get_user():
    return jsonify({
        "status": "success",
        "message": "User found",
        "user": {"id": current_user.id, "name": current_user.name, "email": current_user.email},
    }), 200


@auth_bp.get("/total-users")
@jwt_required()
def total_users():
    return jsonify({
        "status": "success",
        "message": "Total users found",
        "data": {"totalUsers": UserService.total_users()},
    }), 200


@auth_bp.get("/get-all-users")
@jwt_required()
def get_all_users():
    now = utcnow()
    pagination = UserService.list_users(
        request.args.get("search"),
        request.args.get("page", 1),
        request.args.get("limit", 10),
    )
    return jsonify({
        "status": "success",
        "message": "User found",
        "data": {"users": [
            {
                "id": u.id,
                "name": u.name,
                "email": u.email,
                "createdAt": isoformat(u.created_at),
                "borrowedBooks": [
                    {
                        "bookId": b.book_id,
                        "title": b.book.title if b.book else None,
                        "author": b.book.author if b.book else None,
                        "borrowedAt": isoformat(b.borrowed_at),
                        "dueDate": isoformat(b.due_date),
                        "returnedAt": isoformat(b.returned_at),
                        "status": b.effective_status(now).value,
                    } for b in u.borrowings
                ],
            } for u in pagination.items
        ]},
        "pagination": pagination_meta(pagination),
    }), 200
