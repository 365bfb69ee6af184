from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role


def ok(data=None, status: int = 200):
    return jsonify(data), status


def fail(message: str = "Bad Request", status: int = 400, **extra):
    payload = {"success": False, "message": message}
    payload.update(extra)
    return jsonify(payload), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Login required", status=401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Login required", status=401)
        if session.get("role") != Role.ADMIN.value:
            return fail("Admin access required", status=403)
        return view(*args, **kwargs)

    return wrapper
