from __future__ import annotations

from flask import Flask, request, session

from ..common.http import admin_required, fail, ok
from ..common.validators import as_bool
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def login():
        data = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except AuthenticationError as e:
            return fail(str(e), status=401)
        except Exception:
            app.logger.exception("login failed")
            return fail("Server error", status=500)

        session.clear()
        session["user_id"] = s_user.user_id
        session["username"] = s_user.username
        session["role"] = s_user.role.value
        session["department"] = s_user.department

        return ok(
            {
                "success": True,
                "user": {
                    "id": s_user.user_id,
                    "username": s_user.username,
                    "role": s_user.role.value,
                    "department": s_user.department,
                },
            }
        )

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        session.clear()
        return ok({"success": True})

    @app.route("/api/users", methods=["GET"], endpoint="api_list_users")
    @admin_required
    def list_users():
        try:
            return ok(container.user_service.list_users())
        except Exception:
            app.logger.exception("list users failed")
            return fail("Server error", status=500)

    @app.route("/api/users", methods=["POST"], endpoint="api_create_user")
    @admin_required
    def create_user():
        data = request.get_json(silent=True) or {}
        try:
            user_id = container.user_service.create_user(
                username=data.get("username", ""),
                password=data.get("password", ""),
                role=data.get("role", "employee"),
                department=data.get("department", ""),
                staff_house=as_bool(data.get("staff_house", False)),
            )
        except ValidationError as e:
            return fail(str(e), status=400)
        except Exception:
            app.logger.exception("create user failed")
            return fail("Server error", status=500)
        return ok({"success": True, "id": user_id}, status=201)

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="api_update_user")
    @admin_required
    def update_user(user_id: int):
        data = request.get_json(silent=True) or {}
        try:
            user = container.user_service.update_user(
                user_id,
                role=data.get("role"),
                department=data.get("department"),
                staff_house=as_bool(data["staff_house"]) if "staff_house" in data else None,
                is_active=as_bool(data["active"]) if "active" in data else None,
                password=data.get("password") or None,
            )
        except NotFoundError as e:
            return fail(str(e), status=404)
        except ValidationError as e:
            return fail(str(e), status=400)
        except Exception:
            app.logger.exception("update user %s failed", user_id)
            return fail("Server error", status=500)
        return ok({"success": True, "user": user.to_public()})
