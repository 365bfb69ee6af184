from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import optional_text, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    username: str
    role: Role
    department: str


def _parse_role(value: object) -> Role:
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value))
    except ValueError:
        raise ValidationError("Invalid role")


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        if not isinstance(username, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid username or password")
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            valid = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            valid = False

        if not valid:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(
            user_id=user.user_id,
            username=user.username,
            role=user.role,
            department=user.department,
        )


class UserService:
    """Use case: manage employee profiles (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> list[dict]:
        return [u.to_public() for u in self._users.list_all()]

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")
        return user

    def create_user(
        self,
        *,
        username: str,
        password: str,
        role: object = Role.EMPLOYEE,
        department: str = "",
        staff_house: bool = False,
    ) -> int:
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        return self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            role=_parse_role(role),
            department=optional_text(department, "Department") or "",
            staff_house=bool(staff_house),
        )

    def update_user(
        self,
        user_id: int,
        *,
        role: Optional[object] = None,
        department: Optional[str] = None,
        staff_house: Optional[bool] = None,
        is_active: Optional[bool] = None,
        password: Optional[str] = None,
    ) -> User:
        user = self.get_user(user_id)
        department = optional_text(department, "Department")

        password_hash = None
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        updated = User(
            user_id=user.user_id,
            username=user.username,
            password_hash=password_hash or user.password_hash,
            role=_parse_role(role) if role is not None else user.role,
            department=department if department is not None else user.department,
            staff_house=bool(staff_house) if staff_house is not None else user.staff_house,
            is_active=bool(is_active) if is_active is not None else user.is_active,
        )
        # rowcount is 0 when nothing changed, so existence was checked above instead
        self._users.update_user(
            updated.user_id,
            role=updated.role,
            department=updated.department,
            staff_house=updated.staff_house,
            is_active=updated.is_active,
            password_hash=password_hash,
        )
        return updated
